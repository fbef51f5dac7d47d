from __future__ import annotations

from choccy.errors import ChoccyIndexError, ChoccyKindError, ChoccyOwnershipError
from choccy.types.value import Value, check_live, release


def pop_at(lst: Value, i: int) -> Value:
    """Remove and return the child at index `i`; the caller now owns it."""
    check_live(lst)
    if not lst.is_list:
        raise ChoccyKindError(f"Cannot pop from a {lst.kind.value} value")
    if not 0 <= i < len(lst.cells):
        raise ChoccyIndexError(f"Index {i} out of range for list of {len(lst.cells)}")
    child = lst.cells.pop(i)
    child.owned = False
    return child


def take_at(lst: Value, i: int) -> Value:
    """Pop the child at index `i` and release the rest of `lst`."""
    child = pop_at(lst, i)
    release(lst)
    return child


def join(a: Value, b: Value) -> Value:
    """Move every child of `b` onto the end of `a`, release `b`, return `a`."""
    check_live(a)
    check_live(b)
    if a is b:
        raise ChoccyOwnershipError("Cannot join a list with itself")
    if not (a.is_list and b.is_list):
        raise ChoccyKindError(f"Cannot join {a.kind.value} and {b.kind.value} values")
    # Ownership moves from b to a; the owned flag stays set.
    a.cells.extend(b.cells)
    b.cells = []
    release(b)
    return a


def put_at(lst: Value, i: int, child: Value) -> Value:
    """Insert `child` at index `i` of `lst`, taking ownership of it."""
    check_live(lst)
    check_live(child)
    if not lst.is_list:
        raise ChoccyKindError(f"Cannot insert into a {lst.kind.value} value")
    if not 0 <= i <= len(lst.cells):
        raise ChoccyIndexError(f"Index {i} out of range for list of {len(lst.cells)}")
    if child.owned or child is lst:
        raise ChoccyOwnershipError("Value is already owned by another list")
    child.owned = True
    lst.cells.insert(i, child)
    return lst
