from typing import List, Optional, Union

from asc.parser.core.classes import *


def get_span(s_line: int = 1, s_col: int = 1, e_line: int = 1, e_col: int = 1):
    return Span(s_line=s_line, s_col=s_col, e_line=e_line, e_col=e_col)


def get_literal(value: Union[bool, int, float, str]):
    return Literal(span=get_span(), value=value)


def get_identifier(name: str):
    return Identifier(span=get_span(), name=name)


def get_binary(operator: str, left: Expression, right: Expression):
    return BinaryExpression(span=get_span(), operator=operator, left=left, right=right)


def get_logical(operator: str, left: Expression, right: Expression):
    return LogicalExpression(span=get_span(), operator=operator, left=left, right=right)


def get_call(callee: str, arguments: List[Expression]):
    return CallExpression(span=get_span(), callee=callee, arguments=arguments)


def get_variable_declaration(name: str, value: Expression):
    return VariableDeclaration(span=get_span(), name=name, value=value)


def get_assignment(name: str, value: Expression):
    return AssignmentExpression(span=get_span(), name=name, value=value)


def get_block(body: List[Statement]):
    return BlockStatement(span=get_span(), body=body)


def get_if(test: Expression, consequent: Statement, alternate: Optional[Statement] = None):
    return IfStatement(span=get_span(), test=test, consequent=consequent, alternate=alternate)


def get_while(test: Expression, body: Statement):
    return WhileStatement(span=get_span(), test=test, body=body)


def get_function(name: str, params: List[str], body: Statement):
    return FunctionDeclaration(span=get_span(), name=name, params=params, body=body)


def get_return(argument: Expression):
    return ReturnStatement(span=get_span(), argument=argument)


def get_print(argument: Expression):
    return PrintStatement(span=get_span(), argument=argument)


def get_import(path: str):
    return ImportStatement(span=get_span(), path=path)


def get_program(body: List[Statement]):
    return Program(span=get_span(), body=body)
