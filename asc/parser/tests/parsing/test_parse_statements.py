import pytest

from asc.exceptions import ErrorCode, LexError, ParseError
from asc.parser.core.classes import *
from asc.parser.core.lexer import TokenKind
from asc.parser.core.parser import parse_script
from asc.parser.utils.factory_helpers import *

from ..utils.assertion_helper import assert_asts_equal


def parse_single(source):
    program = parse_script(source)
    assert len(program.body) == 1
    return program.body[0]


@pytest.mark.parametrize(
    "source, expected",
    [
        pytest.param("let x = 5;", get_variable_declaration("x", get_literal(5)), id="let"),
        pytest.param("x = true;", get_assignment("x", get_literal(True)), id="assignment"),
        pytest.param("print(x);", get_print(get_identifier("x")), id="print"),
        pytest.param("return 1;", get_return(get_literal(1)), id="return_at_top_level"),
        pytest.param('import("lib/util.as");', get_import("lib/util.as"), id="import"),
        pytest.param("f();", get_call("f", []), id="call_without_arguments"),
        pytest.param('log(1, "a", b);', get_call("log", [get_literal(1), get_literal("a"), get_identifier("b")]), id="call_with_arguments"),
        pytest.param("{}", get_block([]), id="empty_block"),
        pytest.param("{ let a = 1; }", get_block([get_variable_declaration("a", get_literal(1))]), id="block"),
        pytest.param(
            "while (i < 3) i = i + 1;",
            get_while(get_binary("<", get_identifier("i"), get_literal(3)), get_assignment("i", get_binary("+", get_identifier("i"), get_literal(1)))),
            id="while_without_block",
        ),
    ],
)
def test_single_statements(source, expected):
    assert_asts_equal(parse_single(source), expected)


def test_if_else_with_blocks():
    statement = parse_single("if (x > 0) { print(x); } else { print(0); }")

    expected = get_if(
        get_binary(">", get_identifier("x"), get_literal(0)),
        get_block([get_print(get_identifier("x"))]),
        get_block([get_print(get_literal(0))]),
    )
    assert_asts_equal(statement, expected)


def test_if_without_else_has_no_alternate():
    statement = parse_single("if (ready) go();")
    assert isinstance(statement, IfStatement)
    assert statement.alternate is None


def test_dangling_else_binds_to_innermost_if():
    statement = parse_single("if (a) if (b) print(1); else print(2);")

    expected = get_if(
        get_identifier("a"),
        get_if(get_identifier("b"), get_print(get_literal(1)), get_print(get_literal(2))),
    )
    assert_asts_equal(statement, expected)


def test_else_if_chain():
    statement = parse_single("if (a) print(1); else if (b) print(2); else print(3);")

    expected = get_if(
        get_identifier("a"),
        get_print(get_literal(1)),
        get_if(get_identifier("b"), get_print(get_literal(2)), get_print(get_literal(3))),
    )
    assert_asts_equal(statement, expected)


def test_function_declaration():
    statement = parse_single("function add(a, b) { return a + b; }")

    expected = get_function(
        "add",
        ["a", "b"],
        get_block([get_return(get_binary("+", get_identifier("a"), get_identifier("b")))]),
    )
    assert_asts_equal(statement, expected)


def test_function_declaration_without_params_or_block():
    statement = parse_single("function one() return 1;")
    assert_asts_equal(statement, get_function("one", [], get_return(get_literal(1))))


def test_program_keeps_statement_order():
    program = parse_script("let a = 1;\nprint(a);\na = 2;")
    assert [type(s) for s in program.body] == [VariableDeclaration, PrintStatement, AssignmentExpression]


def test_comments_and_whitespace_only_give_an_empty_program():
    assert parse_script("// nothing here\n\n").body == []


def test_statement_spans_start_at_their_first_token():
    program = parse_script("let a = 1;\n  print(a);")
    span = program.body[1].span
    assert (span.s_line, span.s_col) == (2, 3)


# --- Errors ---


@pytest.mark.parametrize(
    "source, expected_kind, actual_kind",
    [
        pytest.param("let = 5;", TokenKind.IDENTIFIER, TokenKind.ASSIGN, id="let_missing_name"),
        pytest.param("let x 5;", TokenKind.ASSIGN, TokenKind.NUMBER, id="let_missing_equals"),
        pytest.param("print(1)", TokenKind.SEMICOLON, TokenKind.EOF, id="missing_semicolon"),
        pytest.param("{ let a = 1;", TokenKind.RBRACE, TokenKind.EOF, id="unclosed_block"),
        pytest.param("import(foo);", TokenKind.STRING, TokenKind.IDENTIFIER, id="import_needs_string"),
        pytest.param("if x > 1 print(x);", TokenKind.LPAREN, TokenKind.IDENTIFIER, id="if_needs_parenthesis"),
        pytest.param("function (a) {}", TokenKind.IDENTIFIER, TokenKind.LPAREN, id="function_needs_name"),
        pytest.param("function f(a b) {}", TokenKind.RPAREN, TokenKind.IDENTIFIER, id="params_need_commas"),
        pytest.param("function f(1) {}", TokenKind.IDENTIFIER, TokenKind.NUMBER, id="params_are_names"),
        pytest.param("f(1, 2;", TokenKind.RPAREN, TokenKind.SEMICOLON, id="unclosed_call"),
    ],
)
def test_unexpected_tokens(source, expected_kind, actual_kind):
    with pytest.raises(ParseError) as exc_info:
        parse_script(source)

    error = exc_info.value
    assert error.code == ErrorCode.UNEXPECTED_TOKEN
    assert error.details["expected_kind"] is expected_kind
    assert error.details["actual_kind"] is actual_kind


def test_error_message_uses_friendly_names():
    with pytest.raises(ParseError) as exc_info:
        parse_script("print(1)")

    assert exc_info.value.core_message == "Syntax Error: Expected a semicolon ';', but found the end of the file instead."


def test_bare_identifier_statement_raises():
    with pytest.raises(ParseError) as exc_info:
        parse_script("x;")

    error = exc_info.value
    assert error.code == ErrorCode.UNEXPECTED_TOKEN
    assert "an equals sign '='" in error.details["expected"]
    assert "an opening parenthesis '('" in error.details["expected"]
    assert error.details["actual_kind"] is TokenKind.SEMICOLON


@pytest.mark.parametrize(
    "source, actual_kind",
    [
        pytest.param("else print(1);", TokenKind.ELSE, id="else"),
        pytest.param("5;", TokenKind.NUMBER, id="number"),
        pytest.param(";", TokenKind.SEMICOLON, id="empty_statement"),
        pytest.param("}", TokenKind.RBRACE, id="stray_brace"),
    ],
)
def test_tokens_that_cannot_start_a_statement(source, actual_kind):
    with pytest.raises(ParseError) as exc_info:
        parse_script(source)

    assert exc_info.value.code == ErrorCode.UNEXPECTED_STATEMENT
    assert exc_info.value.details["actual_kind"] is actual_kind


def test_parse_error_is_located_in_the_file():
    with pytest.raises(ParseError) as exc_info:
        parse_script("let a = 1;\nlet = 2;", file_path="/project/main.as")

    error = exc_info.value
    assert error.file_path == "/project/main.as"
    assert error.span.s_line == 2 and error.span.s_col == 5
    assert str(error).startswith("Error in '/project/main.as' (Line: 2, Column: 5):")


def test_lex_error_is_located_in_the_file():
    with pytest.raises(LexError) as exc_info:
        parse_script("let a = $;", file_path="/project/main.as")

    assert exc_info.value.file_path == "/project/main.as"
    assert exc_info.value.code == ErrorCode.INVALID_CHARACTER
