import os

import pytest

# The module we are testing
from asc.code_generation.code_emitter import CodeEmitter
from asc.exceptions import ErrorCode, InternalCompilerError, ParseError, ScriptImportError
from asc.parser.core.parser import parse_script
from asc.parser.utils.factory_helpers import get_span

# --- Test Helpers & Fixtures ---


def emit(source: str, **kwargs) -> str:
    return CodeEmitter(**kwargs).emit(parse_script(source))


class FakeOrchestrator:
    """Stands in for the BuildOrchestrator: returns canned output per path, or raises."""

    def __init__(self, outputs=None, error=None):
        self.outputs = outputs or {}
        self.error = error
        self.requested = []

    def compile(self, absolute_path):
        self.requested.append(absolute_path)
        if self.error is not None:
            raise self.error
        return self.outputs.get(absolute_path, "")


MAIN_PATH = os.path.abspath(os.path.join("project", "src", "main.as"))


# --- Test Suite ---


@pytest.mark.parametrize(
    "source, expected",
    [
        pytest.param("let x = 5 + 3;", "let x = (5 + 3);", id="declaration"),
        pytest.param("let y = 1 + 2 * 3;", "let y = (1 + (2 * 3));", id="nested_parentheses"),
        pytest.param("let y = (1 + 2) * 3;", "let y = ((1 + 2) * 3);", id="grouping_is_kept"),
        pytest.param("x = x % 2;", "x = (x % 2);", id="assignment"),
        pytest.param("let t = true && false || x;", "let t = ((true && false) || x);", id="logical"),
        pytest.param("let e = a != b;", "let e = (a != b);", id="inequality"),
        pytest.param('print("hi");', 'console.log("hi");', id="print"),
        pytest.param("add(1, 2);", "add(1, 2);", id="call_statement"),
        pytest.param("let z = f(g(1), 2);", "let z = f(g(1), 2);", id="call_expression"),
        pytest.param("let s = 2.5;", "let s = 2.5;", id="decimal"),
        pytest.param("let b = false;", "let b = false;", id="boolean"),
        pytest.param('let u = "héllo";', 'let u = "héllo";', id="unicode_string"),
        pytest.param("return 1;", "return 1;", id="return"),
    ],
)
def test_emit_single_statements(source, expected):
    assert emit(source) == expected


def test_emit_if_else():
    code = emit("if (x > 0) { print(x); } else { print(0); }")
    assert code == "if ((x > 0)) {\nconsole.log(x);\n} else {\nconsole.log(0);\n}"


def test_emit_if_without_else_and_without_block():
    assert emit("if (ok) go();") == "if (ok) go();"


def test_emit_while_without_block():
    assert emit("while (i < 3) i = i + 1;") == "while ((i < 3)) i = (i + 1);"


def test_emit_function_declaration():
    code = emit("function add(a, b) { return a + b; }")
    assert code == "function add(a, b) {\nreturn (a + b);\n}"


def test_function_with_single_statement_body_is_wrapped_in_a_block():
    assert emit("function f(a) return a;") == "function f(a) {\nreturn a;\n}"
    assert emit("function g() h();") == "function g() {\nh();\n}"


def test_emit_empty_block():
    assert emit("{}") == "{\n\n}"


def test_program_statements_are_joined_by_newlines():
    code = emit("let a = 1;\nf(a);\nprint(a);")
    assert code.splitlines() == ["let a = 1;", "f(a);", "console.log(a);"]


def test_empty_program_emits_nothing():
    assert emit("// only a comment") == ""


# --- Imports ---


def test_import_is_replaced_by_the_imported_code():
    lib_path = os.path.join(os.path.dirname(MAIN_PATH), "lib", "util.as")
    orchestrator = FakeOrchestrator(outputs={lib_path: "let util = 1;"})

    code = emit('import("lib/util.as");\nprint(util);', file_path=MAIN_PATH, orchestrator=orchestrator)

    assert orchestrator.requested == [lib_path]
    assert code == "let util = 1;\nconsole.log(util);"


def test_import_resolves_parent_directories():
    orchestrator = FakeOrchestrator()
    emit('import("../shared.as");', file_path=MAIN_PATH, orchestrator=orchestrator)

    assert orchestrator.requested == [os.path.join(os.path.dirname(os.path.dirname(MAIN_PATH)), "shared.as")]


def test_empty_imported_code_leaves_a_marker():
    code = emit('import("empty.as");', file_path=MAIN_PATH, orchestrator=FakeOrchestrator())
    assert code == "/* imported empty.as */"


def test_missing_import_raises():
    orchestrator = FakeOrchestrator(error=FileNotFoundError("gone"))

    with pytest.raises(ScriptImportError) as exc_info:
        emit('import("gone.as");', file_path=MAIN_PATH, orchestrator=orchestrator)

    assert exc_info.value.code == ErrorCode.IMPORT_FILE_NOT_FOUND
    assert exc_info.value.file_path == MAIN_PATH


def test_failing_import_is_wrapped():
    cause = ParseError(ErrorCode.UNEXPECTED_STATEMENT, span=get_span(), file_path="broken.as", actual="a semicolon ';'")
    orchestrator = FakeOrchestrator(error=cause)

    with pytest.raises(ScriptImportError) as exc_info:
        emit('import("broken.as");', file_path=MAIN_PATH, orchestrator=orchestrator)

    error = exc_info.value
    assert error.code == ErrorCode.IMPORT_FAILED
    assert error.__cause__ is cause
    assert cause.message in error.details["reason"]


def test_import_without_a_build_raises():
    with pytest.raises(ScriptImportError) as exc_info:
        emit('import("lib.as");')

    assert exc_info.value.code == ErrorCode.IMPORT_REQUIRES_BUILD


def test_unknown_node_raises_internal_error():
    with pytest.raises(InternalCompilerError):
        CodeEmitter().emit(get_span())
