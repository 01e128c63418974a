"""
The lexing stage: raw source text -> ordered list of `Token`s ending in EOF.

Terminal definitions live in `ascript.lark`; lark's basic lexer does the
matching (longest operator first, keywords carved out of identifiers) and
this module turns its tokens into the compiler's own immutable `Token` records.
"""

from enum import Enum
from importlib.resources import files as pkg_files
from typing import Any, List

from lark import Lark, LarkError
from pydantic import BaseModel, ConfigDict

from asc.parser.helpers import _translate_lark_error


class TokenKind(str, Enum):
    # --- Literals ---
    NUMBER = "NUMBER"
    STRING = "STRING"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IDENTIFIER = "IDENTIFIER"

    # --- Keywords ---
    LET = "LET"
    IF = "IF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    FUNCTION = "FUNCTION"
    RETURN = "RETURN"
    PRINT = "PRINT"
    IMPORT = "IMPORT"

    # --- Operators ---
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    GTE = "GTE"
    LTE = "LTE"
    AND = "AND"
    OR = "OR"
    ASSIGN = "ASSIGN"
    GT = "GT"
    LT = "LT"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"

    # --- Punctuation ---
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    SEMICOLON = "SEMICOLON"
    COMMA = "COMMA"

    EOF = "EOF"


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    value: Any = None
    line: int = 1
    column: int = 1


# Note here the start="start" parameter must match the "start" rule in the .lark file.
# The basic lexer is required for Lark.lex to work without running the parser.
_ascript_grammar = (pkg_files("asc.parser") / "ascript.lark").read_text()
LARK_LEXER = Lark(_ascript_grammar, start="start", parser="lalr", lexer="basic")


def _convert_value(kind: TokenKind, raw: str) -> Any:
    if kind is TokenKind.NUMBER:
        return float(raw) if "." in raw else int(raw)
    if kind is TokenKind.STRING:
        return raw[1:-1]
    if kind is TokenKind.TRUE:
        return True
    if kind is TokenKind.FALSE:
        return False
    return raw


def tokenize(source: str) -> List[Token]:
    """Tokenizes the source text. The returned list always ends with an EOF token."""
    tokens: List[Token] = []
    try:
        for lark_token in LARK_LEXER.lex(source):
            kind = TokenKind(lark_token.type)
            tokens.append(Token(kind=kind, value=_convert_value(kind, lark_token.value), line=lark_token.line, column=lark_token.column))
    except LarkError as e:
        raise _translate_lark_error(e) from e

    line = source.count("\n") + 1
    column = len(source) - source.rfind("\n")
    tokens.append(Token(kind=TokenKind.EOF, value=None, line=line, column=column))
    return tokens
