import pytest

from choccy.interpreter import Interpreter
from choccy.types.value import Value, append, make_number, make_qexpr, make_sexpr, make_symbol

# Builders for hand-made value trees. Python ints become Numbers, strings
# become Symbols and existing Values are appended as they are, so
#   sexpr("+", 1, qexpr(2, 3))
# builds (+ 1 {2 3}).


def _to_value(item) -> Value:
    if isinstance(item, Value):
        return item
    if isinstance(item, int):
        return make_number(item)
    return make_symbol(item)


def _build(parent: Value, items) -> Value:
    for item in items:
        append(parent, _to_value(item))
    return parent


@pytest.fixture
def sexpr():
    return lambda *items: _build(make_sexpr(), items)


@pytest.fixture
def qexpr():
    return lambda *items: _build(make_qexpr(), items)


@pytest.fixture
def interp():
    """Interpreter with the default settings."""
    return Interpreter()

