import operator
import sys
from contextlib import contextmanager
from typing import Any, Callable, Dict, Optional, TextIO

from asc.exceptions import ErrorCode, InternalCompilerError, ScriptRuntimeError
from asc.parser.core.classes import *

from .scope import FunctionValue, Scope, is_truthy, to_display, type_name

# Marks the pending-return register as empty. `None` is a legal return value.
NO_RETURN = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _divide(left, right):
    quotient = left / right
    if isinstance(left, int) and isinstance(right, int) and quotient.is_integer():
        return int(quotient)
    return quotient


def _remainder(left, right):
    # Truncating remainder: the result takes the sign of the dividend.
    result = left % right
    if result and (result < 0) != (left < 0):
        result -= right
    return result


ARITHMETIC_OPERATIONS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "%": _remainder,
}

COMPARISON_OPERATIONS: Dict[str, Callable[[Any, Any], Any]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}

def _strictly_equal(left, right) -> bool:
    # Booleans never equal numbers, although Python treats True as 1.
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


EQUALITY_OPERATIONS: Dict[str, Callable[[Any, Any], Any]] = {
    "==": _strictly_equal,
    "!=": lambda left, right: not _strictly_equal(left, right),
}


class Evaluator:
    """
    Executes a Program AST directly.

    State is the current scope (whose parent chain is the frame stack) and a
    one-slot pending-return register. A `return` fills the register; blocks,
    loops and the program loop stop after any statement that leaves it filled,
    and the nearest call boundary empties it and uses it as the call's result.
    """

    def __init__(self, output: Optional[TextIO] = None, file_path: Optional[str] = None):
        self.output = output or sys.stdout
        self.file_path = file_path
        self.global_scope = Scope()
        self.scope = self.global_scope
        self.pending_return = NO_RETURN

        self._handlers: Dict[type, Callable[[Any], Any]] = {
            Program: self._execute_program,
            BlockStatement: self._execute_block,
            VariableDeclaration: self._execute_variable_declaration,
            AssignmentExpression: self._execute_assignment,
            IfStatement: self._execute_if,
            WhileStatement: self._execute_while,
            FunctionDeclaration: self._execute_function_declaration,
            ReturnStatement: self._execute_return,
            PrintStatement: self._execute_print,
            ImportStatement: self._execute_import,
            CallExpression: self._evaluate_call,
            BinaryExpression: self._evaluate_binary,
            LogicalExpression: self._evaluate_logical,
            Literal: self._evaluate_literal,
            Identifier: self._evaluate_identifier,
        }

    def evaluate(self, node: Node) -> Any:
        """Executes a statement or evaluates an expression, returning its value."""
        handler = self._handlers.get(type(node))
        if handler is None:
            raise InternalCompilerError(f"The evaluator has no handler for node type '{type(node).__name__}'.")
        return handler(node)

    def run(self, program: Program) -> Any:
        """Runs a whole program and returns the value of the last executed statement."""
        try:
            return self.evaluate(program)
        finally:
            self.pending_return = NO_RETURN

    # --- Scope management ---
    @contextmanager
    def _activate(self, scope: Scope):
        """Makes `scope` current for the duration of the block, however it exits."""
        previous = self.scope
        self.scope = scope
        try:
            yield scope
        finally:
            self.scope = previous

    def _error(self, code: ErrorCode, node: ASTNode, **kwargs) -> ScriptRuntimeError:
        return ScriptRuntimeError(code, span=node.span, file_path=self.file_path, **kwargs)

    def _run_statements(self, statements) -> Any:
        result = None
        for statement in statements:
            result = self.evaluate(statement)
            if self.pending_return is not NO_RETURN:
                break
        return result

    # --- Statements ---
    def _execute_program(self, node: Program) -> Any:
        return self._run_statements(node.body)

    def _execute_block(self, node: BlockStatement) -> Any:
        with self._activate(Scope(parent=self.scope)):
            return self._run_statements(node.body)

    def _execute_variable_declaration(self, node: VariableDeclaration) -> Any:
        value = self.evaluate(node.value)
        self.scope.declare(node.name, value)
        return value

    def _execute_assignment(self, node: AssignmentExpression) -> Any:
        value = self.evaluate(node.value)
        owner = self.scope.resolve(node.name)
        if owner is None:
            raise self._error(ErrorCode.UNDEFINED_VARIABLE, node, name=node.name)
        owner.bindings[node.name] = value
        return value

    def _execute_if(self, node: IfStatement) -> Any:
        if is_truthy(self.evaluate(node.test)):
            return self.evaluate(node.consequent)
        if node.alternate is not None:
            return self.evaluate(node.alternate)
        return None

    def _execute_while(self, node: WhileStatement) -> Any:
        result = None
        while is_truthy(self.evaluate(node.test)):
            result = self.evaluate(node.body)
            if self.pending_return is not NO_RETURN:
                break
        return result

    def _execute_function_declaration(self, node: FunctionDeclaration) -> FunctionValue:
        function = FunctionValue(node.name, node.params, node.body, closure=self.scope)
        self.scope.declare(node.name, function)
        return function

    def _execute_return(self, node: ReturnStatement) -> Any:
        value = self.evaluate(node.argument)
        self.pending_return = value
        return value

    def _execute_print(self, node: PrintStatement) -> Any:
        value = self.evaluate(node.argument)
        print(to_display(value), file=self.output)
        return value

    def _execute_import(self, node: ImportStatement) -> Any:
        raise self._error(ErrorCode.IMPORT_NOT_SUPPORTED, node, path=node.path)

    # --- Expressions ---
    def _evaluate_literal(self, node: Literal) -> Any:
        return node.value

    def _evaluate_identifier(self, node: Identifier) -> Any:
        owner = self.scope.resolve(node.name)
        if owner is None:
            raise self._error(ErrorCode.UNDEFINED_VARIABLE, node, name=node.name)
        return owner.bindings[node.name]

    def _evaluate_call(self, node: CallExpression) -> Any:
        # The callee is looked up by name at call time, from the caller's scope.
        owner = self.scope.resolve(node.callee)
        if owner is None:
            raise self._error(ErrorCode.UNDEFINED_VARIABLE, node, name=node.callee)
        function = owner.bindings[node.callee]
        arguments = [self.evaluate(argument) for argument in node.arguments]
        if not isinstance(function, FunctionValue):
            raise self._error(ErrorCode.NOT_A_FUNCTION, node, name=node.callee)

        call_scope = Scope(parent=function.closure)
        for index, param in enumerate(function.params):
            call_scope.declare(param, arguments[index] if index < len(arguments) else None)

        with self._activate(call_scope):
            result = self.evaluate(function.body)
        if self.pending_return is not NO_RETURN:
            result = self.pending_return
            self.pending_return = NO_RETURN
        return result

    def _evaluate_logical(self, node: LogicalExpression) -> Any:
        left = self.evaluate(node.left)
        if node.operator == "&&":
            return self.evaluate(node.right) if is_truthy(left) else left
        return left if is_truthy(left) else self.evaluate(node.right)

    def _evaluate_binary(self, node: BinaryExpression) -> Any:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        op = node.operator

        if op in EQUALITY_OPERATIONS:
            return EQUALITY_OPERATIONS[op](left, right)

        if op == "+" and (isinstance(left, str) or isinstance(right, str)):
            return to_display(left) + to_display(right)

        if op in COMPARISON_OPERATIONS:
            comparable = (_is_number(left) and _is_number(right)) or (isinstance(left, str) and isinstance(right, str))
            if not comparable:
                raise self._type_mismatch(node, left, right)
            return COMPARISON_OPERATIONS[op](left, right)

        if not (_is_number(left) and _is_number(right)):
            raise self._type_mismatch(node, left, right)
        try:
            return ARITHMETIC_OPERATIONS[op](left, right)
        except ZeroDivisionError as e:
            raise self._error(ErrorCode.DIVISION_BY_ZERO, node, op=op) from e

    def _type_mismatch(self, node: BinaryExpression, left: Any, right: Any) -> ScriptRuntimeError:
        return self._error(ErrorCode.OPERAND_TYPE_MISMATCH, node, op=node.operator, left_type=type_name(left), right_type=type_name(right))
