"""Convert an external syntax tree into a tree of owned `Value` nodes.

The reader accepts any node exposing `tag`, `contents` and `children`
(an mpc-style AST; `choccy.reader.parser.SyntaxNode` is one). It never
raises on malformed input: bad literals and unknown nodes become Error
values at the position they occur, for the evaluator to report.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from choccy import config
from choccy.types.value import (
    Value,
    append,
    make_error,
    make_number,
    make_qexpr,
    make_sexpr,
    make_symbol,
)

LOGGER = logging.getLogger(__name__)

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# Bracket characters carry no meaning once the tree is built.
_PUNCTUATION = frozenset({"(", ")", "{", "}"})


class AstNode(Protocol):
    tag: str
    contents: str
    children: Sequence[AstNode]


def parse_number(text: str) -> Value:
    """Return a Number for a signed 64-bit literal, else Error("Invalid number")."""
    try:
        n = int(text, 10)
    except ValueError:
        return make_error("Invalid number")
    if n < INT_MIN or n > INT_MAX:
        return make_error("Invalid number")
    return make_number(n)


def _skip(node: AstNode) -> bool:
    return node.contents in _PUNCTUATION or node.tag == "regex"


def read(node: AstNode, max_depth: Optional[int] = None, _depth: int = 0) -> Value:
    if max_depth is None:
        max_depth = config.get_max_depth()

    if "number" in node.tag:
        return parse_number(node.contents)
    if "symbol" in node.tag:
        return make_symbol(node.contents)

    if node.tag == ">" or "s_exp" in node.tag:
        make_list = make_sexpr
    elif "q_exp" in node.tag:
        make_list = make_qexpr
    else:
        return make_error("Invalid syntax node")

    if _depth >= max_depth:
        LOGGER.debug("reader nesting guard tripped at depth %d", _depth)
        return make_error("Maximum nesting depth exceeded")

    x = make_list()

    for child in node.children:
        if _skip(child):
            continue
        append(x, read(child, max_depth, _depth + 1))
    return x
