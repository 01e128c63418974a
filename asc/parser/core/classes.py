"""
The AScript syntax tree built by the parser and consumed by the evaluator,
the code emitter and the language server.

Nodes are frozen pydantic models. Every node carries a `Span` with its first
and last token position so runtime and import errors can point at the source.
The node set is closed: `Statement` and `Expression` enumerate every kind the
parser can build, and the evaluator and emitter dispatch on these classes.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

# --- Positions ---


class Span(BaseModel):
    """1-based start and end positions of a node in its source file."""

    model_config = ConfigDict(frozen=True)

    s_line: int
    s_col: int
    e_line: int
    e_col: int


class ASTNode(BaseModel):
    """Common base: every node knows where it came from."""

    model_config = ConfigDict(frozen=True)

    span: Span


# --- Expressions ---


class Literal(ASTNode):
    value: Union[bool, int, float, str]


class Identifier(ASTNode):
    name: str


class BinaryExpression(ASTNode):
    operator: str
    left: "Expression"
    right: "Expression"


class LogicalExpression(ASTNode):
    operator: str
    left: "Expression"
    right: "Expression"


class CallExpression(ASTNode):
    callee: str
    arguments: List["Expression"]


Expression = Union[Literal, Identifier, BinaryExpression, LogicalExpression, CallExpression]


# --- Statements ---


class VariableDeclaration(ASTNode):
    name: str
    value: Expression


class AssignmentExpression(ASTNode):
    name: str
    value: Expression


class BlockStatement(ASTNode):
    body: List["Statement"]


class IfStatement(ASTNode):
    test: Expression
    consequent: "Statement"
    alternate: Optional["Statement"] = None


class WhileStatement(ASTNode):
    test: Expression
    body: "Statement"


class FunctionDeclaration(ASTNode):
    name: str
    params: List[str]
    body: "Statement"


class ReturnStatement(ASTNode):
    argument: Expression


class PrintStatement(ASTNode):
    argument: Expression


class ImportStatement(ASTNode):
    """Only meaningful to the compiler: the imported file is inlined at this site."""

    path: str


Statement = Union[
    VariableDeclaration,
    AssignmentExpression,
    BlockStatement,
    IfStatement,
    WhileStatement,
    FunctionDeclaration,
    ReturnStatement,
    PrintStatement,
    ImportStatement,
    CallExpression,
]


# --- Files ---


class Program(ASTNode):
    """One parsed source file: its statements in order."""

    body: List[Statement]


for _model in (BinaryExpression, LogicalExpression, CallExpression, BlockStatement, IfStatement, WhileStatement, FunctionDeclaration, Program):
    _model.model_rebuild()


# Anything the evaluator or emitter can be handed
Node = Union[Statement, Expression, Program]
