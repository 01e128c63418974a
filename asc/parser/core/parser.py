from typing import Callable, List, Optional, Set, Type

from asc.config.config import (
    ADDITIVE_OPERATORS,
    EQUALITY_OPERATORS,
    LOGICAL_AND_OPERATORS,
    LOGICAL_OR_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    OPERATOR_SYMBOLS,
    RELATIONAL_OPERATORS,
)
from asc.exceptions import ErrorCode, LexError, ParseError
from asc.parser.helpers import friendly_token_name

from .classes import *
from .lexer import Token, TokenKind, tokenize


class Parser:
    """
    A recursive-descent parser with a single token of lookahead and no backtracking.

    Each grammar rule is one method. Expression rules are layered from the lowest
    precedence (logical or) to the highest (primary); every binary level is
    left-associative. The first mismatch raises a ParseError, there is no recovery.
    """

    def __init__(self, tokens: List[Token], file_path: Optional[str] = None):
        self.tokens = tokens
        self.file_path = file_path
        self.position = 0

    # --- Token helpers ---
    @property
    def current(self) -> Token:
        return self.tokens[self.position]

    def _advance(self) -> Token:
        token = self.current
        if token.kind is not TokenKind.EOF:
            self.position += 1
        return token

    def _check(self, kind: TokenKind) -> bool:
        return self.current.kind is kind

    def _eat(self, kind: TokenKind) -> Token:
        if self._check(kind):
            return self._advance()
        raise self._unexpected(friendly_token_name(kind), expected_kind=kind)

    def _unexpected(self, expected: str, expected_kind: Optional[TokenKind] = None) -> ParseError:
        token = self.current
        return ParseError(
            ErrorCode.UNEXPECTED_TOKEN,
            span=self._token_span(token),
            file_path=self.file_path,
            expected=expected,
            actual=friendly_token_name(token.kind),
            expected_kind=expected_kind,
            actual_kind=token.kind,
        )

    def _token_span(self, token: Token) -> Span:
        return Span(s_line=token.line, s_col=token.column, e_line=token.line, e_col=token.column)

    def _span_from(self, start: Token) -> Span:
        """A span from `start` up to the last consumed token."""
        end = self.tokens[max(self.position - 1, 0)]
        return Span(s_line=start.line, s_col=start.column, e_line=end.line, e_col=end.column)

    # --- Statements ---
    def parse(self) -> Program:
        start = self.current
        body = []
        while not self._check(TokenKind.EOF):
            body.append(self.statement())
        return Program(body=body, span=self._span_from(start))

    def statement(self) -> Statement:
        kind = self.current.kind
        if kind is TokenKind.LET:
            return self.variable_declaration()
        if kind is TokenKind.IF:
            return self.if_statement()
        if kind is TokenKind.WHILE:
            return self.while_statement()
        if kind is TokenKind.FUNCTION:
            return self.function_declaration()
        if kind is TokenKind.RETURN:
            return self.return_statement()
        if kind is TokenKind.PRINT:
            return self.print_statement()
        if kind is TokenKind.IMPORT:
            return self.import_statement()
        if kind is TokenKind.IDENTIFIER:
            return self.assignment_or_call()
        if kind is TokenKind.LBRACE:
            return self.block_statement()
        raise ParseError(
            ErrorCode.UNEXPECTED_STATEMENT,
            span=self._token_span(self.current),
            file_path=self.file_path,
            actual=friendly_token_name(kind),
            actual_kind=kind,
        )

    def block_statement(self) -> BlockStatement:
        start = self._eat(TokenKind.LBRACE)
        body = []
        while not self._check(TokenKind.RBRACE) and not self._check(TokenKind.EOF):
            body.append(self.statement())
        self._eat(TokenKind.RBRACE)
        return BlockStatement(body=body, span=self._span_from(start))

    def variable_declaration(self) -> VariableDeclaration:
        start = self._eat(TokenKind.LET)
        name = self._eat(TokenKind.IDENTIFIER).value
        self._eat(TokenKind.ASSIGN)
        value = self.expression()
        self._eat(TokenKind.SEMICOLON)
        return VariableDeclaration(name=name, value=value, span=self._span_from(start))

    def assignment_or_call(self) -> Statement:
        start = self._eat(TokenKind.IDENTIFIER)
        if self._check(TokenKind.ASSIGN):
            self._advance()
            value = self.expression()
            self._eat(TokenKind.SEMICOLON)
            return AssignmentExpression(name=start.value, value=value, span=self._span_from(start))
        if self._check(TokenKind.LPAREN):
            call = self.function_call(start)
            self._eat(TokenKind.SEMICOLON)
            return call
        expected = f"{friendly_token_name(TokenKind.ASSIGN)} or {friendly_token_name(TokenKind.LPAREN)}"
        raise self._unexpected(expected)

    def if_statement(self) -> IfStatement:
        start = self._eat(TokenKind.IF)
        self._eat(TokenKind.LPAREN)
        test = self.expression()
        self._eat(TokenKind.RPAREN)
        consequent = self.statement()
        alternate = None
        # The else is consumed here, so it always binds to the innermost open if.
        if self._check(TokenKind.ELSE):
            self._advance()
            alternate = self.statement()
        return IfStatement(test=test, consequent=consequent, alternate=alternate, span=self._span_from(start))

    def while_statement(self) -> WhileStatement:
        start = self._eat(TokenKind.WHILE)
        self._eat(TokenKind.LPAREN)
        test = self.expression()
        self._eat(TokenKind.RPAREN)
        body = self.statement()
        return WhileStatement(test=test, body=body, span=self._span_from(start))

    def function_declaration(self) -> FunctionDeclaration:
        start = self._eat(TokenKind.FUNCTION)
        name = self._eat(TokenKind.IDENTIFIER).value
        self._eat(TokenKind.LPAREN)
        params = []
        if not self._check(TokenKind.RPAREN):
            params.append(self._eat(TokenKind.IDENTIFIER).value)
            while self._check(TokenKind.COMMA):
                self._advance()
                params.append(self._eat(TokenKind.IDENTIFIER).value)
        self._eat(TokenKind.RPAREN)
        body = self.statement()
        return FunctionDeclaration(name=name, params=params, body=body, span=self._span_from(start))

    def return_statement(self) -> ReturnStatement:
        start = self._eat(TokenKind.RETURN)
        argument = self.expression()
        self._eat(TokenKind.SEMICOLON)
        return ReturnStatement(argument=argument, span=self._span_from(start))

    def print_statement(self) -> PrintStatement:
        start = self._eat(TokenKind.PRINT)
        self._eat(TokenKind.LPAREN)
        argument = self.expression()
        self._eat(TokenKind.RPAREN)
        self._eat(TokenKind.SEMICOLON)
        return PrintStatement(argument=argument, span=self._span_from(start))

    def import_statement(self) -> ImportStatement:
        start = self._eat(TokenKind.IMPORT)
        self._eat(TokenKind.LPAREN)
        path = self._eat(TokenKind.STRING).value
        self._eat(TokenKind.RPAREN)
        self._eat(TokenKind.SEMICOLON)
        return ImportStatement(path=path, span=self._span_from(start))

    # --- Expressions ---
    def expression(self) -> Expression:
        return self.logical_or()

    def _left_associative(self, operand: Callable[[], Expression], operators: Set[str], node_class: Type[ASTNode]) -> Expression:
        """Helper to build a left-associative tree for one precedence level."""
        start = self.current
        left = operand()
        while self.current.kind.value in operators:
            operator = OPERATOR_SYMBOLS[self._advance().kind.value]
            right = operand()
            left = node_class(operator=operator, left=left, right=right, span=self._span_from(start))
        return left

    def logical_or(self) -> Expression:
        return self._left_associative(self.logical_and, LOGICAL_OR_OPERATORS, LogicalExpression)

    def logical_and(self) -> Expression:
        return self._left_associative(self.equality, LOGICAL_AND_OPERATORS, LogicalExpression)

    def equality(self) -> Expression:
        return self._left_associative(self.relational, EQUALITY_OPERATORS, BinaryExpression)

    def relational(self) -> Expression:
        return self._left_associative(self.additive, RELATIONAL_OPERATORS, BinaryExpression)

    def additive(self) -> Expression:
        return self._left_associative(self.multiplicative, ADDITIVE_OPERATORS, BinaryExpression)

    def multiplicative(self) -> Expression:
        return self._left_associative(self.primary, MULTIPLICATIVE_OPERATORS, BinaryExpression)

    def primary(self) -> Expression:
        token = self.current
        if token.kind in (TokenKind.NUMBER, TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE):
            self._advance()
            return Literal(value=token.value, span=self._token_span(token))
        if token.kind is TokenKind.IDENTIFIER:
            self._advance()
            if self._check(TokenKind.LPAREN):
                return self.function_call(token)
            return Identifier(name=token.value, span=self._token_span(token))
        if token.kind is TokenKind.LPAREN:
            self._advance()
            inner = self.expression()
            self._eat(TokenKind.RPAREN)
            return inner
        raise self._unexpected("a value or expression")

    def function_call(self, name_token: Token) -> CallExpression:
        """Parses `(args)` after an already consumed callee name."""
        self._eat(TokenKind.LPAREN)
        arguments = []
        if not self._check(TokenKind.RPAREN):
            arguments.append(self.expression())
            while self._check(TokenKind.COMMA):
                self._advance()
                arguments.append(self.expression())
        self._eat(TokenKind.RPAREN)
        return CallExpression(callee=name_token.value, arguments=arguments, span=self._span_from(name_token))


def parse_tokens(tokens: List[Token], file_path: Optional[str] = None) -> Program:
    return Parser(tokens, file_path=file_path).parse()


def parse_script(script_content: str, file_path: Optional[str] = None) -> Program:
    """Tokenizes and parses the script content into a Program AST."""
    try:
        tokens = tokenize(script_content)
    except LexError as e:
        if file_path is None:
            raise
        raise e.with_file_path(file_path) from e
    return parse_tokens(tokens, file_path=file_path)
