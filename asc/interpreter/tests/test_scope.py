import pytest

from asc.interpreter.core.scope import FunctionValue, Scope, format_number, is_truthy, to_display, type_name
from asc.parser.utils.factory_helpers import get_block


def test_resolve_finds_the_innermost_binding():
    outer = Scope()
    outer.declare("x", 1)
    inner = Scope(parent=outer)
    inner.declare("x", 2)

    assert inner.resolve("x") is inner
    assert outer.resolve("x") is outer
    assert inner.resolve("missing") is None


def test_resolve_walks_up_the_chain():
    root = Scope()
    root.declare("g", "global")
    leaf = Scope(parent=Scope(parent=root))

    assert leaf.resolve("g") is root
    assert leaf.parent.resolve("g") is root
    assert leaf.bindings == {}


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(None, False, id="undefined"),
        pytest.param(False, False, id="false"),
        pytest.param(0, False, id="zero"),
        pytest.param(0.0, False, id="zero_float"),
        pytest.param("", False, id="empty_string"),
        pytest.param(True, True, id="true"),
        pytest.param(-3, True, id="negative"),
        pytest.param("false", True, id="non_empty_string"),
    ],
)
def test_is_truthy(value, expected):
    assert is_truthy(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param(3, "3", id="int"),
        pytest.param(3.0, "3", id="integral_float"),
        pytest.param(0.1, "0.1", id="float"),
        pytest.param(float("inf"), "Infinity", id="infinity"),
        pytest.param(float("-inf"), "-Infinity", id="negative_infinity"),
        pytest.param(float("nan"), "NaN", id="nan"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_to_display_and_type_name():
    function = FunctionValue("f", [], get_block([]), closure=Scope())

    assert [to_display(v) for v in (None, True, 7, "s", function)] == ["undefined", "true", "7", "s", "[Function: f]"]
    assert [type_name(v) for v in (None, False, 1.5, "s", function)] == ["undefined", "boolean", "number", "string", "function"]
