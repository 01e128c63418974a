"""
Runtime data structures for the tree-walking interpreter: the scope chain,
function values and the conversion of values to their printed form.
"""

from typing import Any, Dict, List, Optional

from asc.parser.core.classes import Statement


class Scope:
    """
    One binding environment. A scope owns its bindings and points at its parent;
    the chain from the innermost scope up to the global one is the frame stack.
    """

    def __init__(self, parent: Optional["Scope"] = None):
        self.parent = parent
        self.bindings: Dict[str, Any] = {}

    def declare(self, name: str, value: Any):
        """Binds `name` in this scope, shadowing any outer binding."""
        self.bindings[name] = value

    def resolve(self, name: str) -> Optional["Scope"]:
        """Returns the innermost scope that binds `name`, or None."""
        scope = self
        while scope is not None:
            if name in scope.bindings:
                return scope
            scope = scope.parent
        return None


class FunctionValue:
    """
    A user-defined function plus the scope that was current when it was declared.

    The closure holds the scope object itself: scopes pushed later on the
    declaring side are not part of its chain, while assignments to variables
    in the captured scopes stay visible.
    """

    def __init__(self, name: str, params: List[str], body: Statement, closure: Scope):
        self.name = name
        self.params = params
        self.body = body
        self.closure = closure

    def __repr__(self):
        return f"FunctionValue({self.name}({', '.join(self.params)}))"


def is_truthy(value: Any) -> bool:
    # Falsy set: false, 0, "", absent.
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def format_number(value) -> str:
    if isinstance(value, float):
        if value != value:
            return "NaN"
        if value in (float("inf"), float("-inf")):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_display(value: Any) -> str:
    """The external representation used by `print` and string concatenation."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, FunctionValue):
        return f"[Function: {value.name}]"
    return str(value)


def type_name(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, FunctionValue):
        return "function"
    return type(value).__name__
