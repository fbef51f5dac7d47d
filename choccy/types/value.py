"""Tagged value type shared by the reader, evaluator and printer.

A `Value` is one of five kinds. Numbers, errors and symbols are leaves;
S-expressions and Q-expressions own an ordered list of child values.

Ownership is single and explicit: `append` moves a child into a parent,
list operations move children back out, and `release` retires a node and
everything below it. The `owned` and `released` flags make aliasing, double
release and use after release fail loudly instead of silently sharing state.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from choccy.errors import ChoccyKindError, ChoccyOwnershipError


class Kind(Enum):
    NUMBER = "number"
    ERROR = "error"
    SYMBOL = "symbol"
    SEXPR = "sexpr"
    QEXPR = "qexpr"


LIST_KINDS = frozenset({Kind.SEXPR, Kind.QEXPR})


class Value:
    __slots__ = ("kind", "num", "err", "sym", "cells", "owned", "released")

    def __init__(self, kind: Kind):
        self.kind = kind
        self.num: int = 0
        self.err: Optional[str] = None
        self.sym: Optional[str] = None
        self.cells: list[Value] = []
        # True while some list value holds this node as a child.
        self.owned = False
        self.released = False

    @property
    def is_list(self) -> bool:
        return self.kind in LIST_KINDS

    def __len__(self) -> int:
        return len(self.cells)

    def __eq__(self, other: object) -> bool:
        """Structural equality: same kind, same payload, equal children."""
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind != other.kind:
            return False
        if self.kind is Kind.NUMBER:
            return self.num == other.num
        if self.kind is Kind.ERROR:
            return self.err == other.err
        if self.kind is Kind.SYMBOL:
            return self.sym == other.sym
        return self.cells == other.cells

    # Values are mutable containers.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        if self.released:
            return f"Value({self.kind.name}, released)"
        if self.kind is Kind.NUMBER:
            return f"Number({self.num})"
        if self.kind is Kind.ERROR:
            return f"Error({self.err!r})"
        if self.kind is Kind.SYMBOL:
            return f"Symbol({self.sym!r})"
        name = "SExpr" if self.kind is Kind.SEXPR else "QExpr"
        return f"{name}[{', '.join(repr(c) for c in self.cells)}]"


# -------------------------------
# Constructors
# -------------------------------
def make_number(n: int) -> Value:
    v = Value(Kind.NUMBER)
    v.num = n
    return v


def make_error(msg: str) -> Value:
    v = Value(Kind.ERROR)
    v.err = msg
    return v


def make_symbol(s: str) -> Value:
    v = Value(Kind.SYMBOL)
    v.sym = s
    return v


def make_sexpr() -> Value:
    return Value(Kind.SEXPR)


def make_qexpr() -> Value:
    return Value(Kind.QEXPR)


# -------------------------------
# Ownership
# -------------------------------
def check_live(v: Value) -> Value:
    """Return `v`, raising ChoccyOwnershipError if it has been released."""
    if v.released:
        raise ChoccyOwnershipError(f"Use of released {v.kind.value} value")
    return v


def append(parent: Value, child: Value) -> Value:
    """Move `child` to the end of `parent`'s children and return `parent`."""
    check_live(parent)
    check_live(child)
    if not parent.is_list:
        raise ChoccyKindError(f"Cannot append to a {parent.kind.value} value")
    if child.owned:
        raise ChoccyOwnershipError("Value is already owned by another list")
    if child is parent:
        raise ChoccyOwnershipError("A list cannot contain itself")
    child.owned = True
    parent.cells.append(child)
    return parent


def release(v: Optional[Value]) -> None:
    """Release `v` and every value below it. `release(None)` does nothing.

    Walks the tree with an explicit stack so deeply nested values do not
    hit the interpreter's recursion limit.
    """
    if v is None:
        return
    if v.released:
        raise ChoccyOwnershipError(f"{v.kind.value} value released twice")
    if v.owned:
        raise ChoccyOwnershipError("Cannot release a value still owned by a list")
    stack = [v]
    while stack:
        node = stack.pop()
        node.released = True
        node.owned = False
        node.err = None
        node.sym = None
        stack.extend(node.cells)
        node.cells = []
