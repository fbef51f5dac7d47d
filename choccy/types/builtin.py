from __future__ import annotations

from enum import Enum
from typing import Optional


class Builtin(Enum):
    """The fixed set of operations a symbol in head position can name."""

    HEAD = "head"
    TAIL = "tail"
    LIST = "list"
    EVAL = "eval"
    JOIN = "join"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"

    @classmethod
    def lookup(cls, name: str) -> Optional[Builtin]:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def is_arithmetic(self) -> bool:
        return self in ARITHMETIC


ARITHMETIC = frozenset({Builtin.ADD, Builtin.SUB, Builtin.MUL, Builtin.DIV, Builtin.MOD, Builtin.POW})
