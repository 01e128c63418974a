import os
from typing import List, Optional, Set, Tuple
from urllib.parse import unquote, urlparse

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
)
from pygls.server import LanguageServer

from asc.config.config import KEYWORDS
from asc.exceptions import AScriptError
from asc.parser.core.classes import *
from asc.parser.core.parser import parse_script

server = LanguageServer("ascript-server", "v1")


def _uri_to_path(uri: str) -> str:
    """Converts a file URI to a platform-specific file path."""
    parsed = urlparse(uri)
    return os.path.abspath(unquote(parsed.path))


def collect_diagnostics(source: str, file_path: Optional[str] = None) -> List[Diagnostic]:
    """Lexes and parses `source`, returning the first error (if any) as a diagnostic."""
    try:
        parse_script(source, file_path=file_path)
    except AScriptError as e:
        if e.span:
            start = Position(line=e.span.s_line - 1, character=e.span.s_col - 1)
            end = Position(line=e.span.e_line - 1, character=e.span.e_col)
        else:
            start, end = Position(line=0, character=0), Position(line=0, character=100)
        return [Diagnostic(range=Range(start=start, end=end), message=e.core_message, severity=DiagnosticSeverity.Error, source="asc")]
    return []


def collect_symbols(program: Program) -> Tuple[Set[str], Set[str]]:
    """Returns the (functions, variables) declared anywhere in the program."""
    functions: Set[str] = set()
    variables: Set[str] = set()

    def visit(node):
        if isinstance(node, (Program, BlockStatement)):
            for statement in node.body:
                visit(statement)
        elif isinstance(node, VariableDeclaration):
            variables.add(node.name)
        elif isinstance(node, FunctionDeclaration):
            functions.add(node.name)
            variables.update(node.params)
            visit(node.body)
        elif isinstance(node, IfStatement):
            visit(node.consequent)
            if node.alternate is not None:
                visit(node.alternate)
        elif isinstance(node, WhileStatement):
            visit(node.body)

    visit(program)
    return functions, variables


def build_completion_items(source: str) -> List[CompletionItem]:
    items = [CompletionItem(label=keyword, kind=CompletionItemKind.Keyword) for keyword in KEYWORDS]
    try:
        program = parse_script(source)
    except AScriptError:
        return items

    functions, variables = collect_symbols(program)
    items.extend(CompletionItem(label=name, kind=CompletionItemKind.Function, detail="User-Defined Function") for name in sorted(functions))
    items.extend(CompletionItem(label=name, kind=CompletionItemKind.Variable, detail="Variable") for name in sorted(variables - functions))
    return items


def _validate(ls: LanguageServer, params):
    document = ls.workspace.get_text_document(params.text_document.uri)
    diagnostics = collect_diagnostics(document.source, file_path=_uri_to_path(params.text_document.uri))
    ls.publish_diagnostics(params.text_document.uri, diagnostics)


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls, params):
    _validate(ls, params)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls, params):
    _validate(ls, params)


@server.feature(TEXT_DOCUMENT_COMPLETION)
def completions(ls, params):
    document = ls.workspace.get_text_document(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=build_completion_items(document.source))


def start_server():
    server.start_io()


if __name__ == "__main__":
    start_server()
