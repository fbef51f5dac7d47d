"""Core evaluator for choccy.

Reduces a Value tree to its canonical result. S-expressions are evaluated
child by child, then applied; every other kind evaluates to itself. Errors
are ordinary values: the first one found among an S-expression's children
becomes the result and everything else in flight is released.
"""

from __future__ import annotations

import logging
from typing import Optional

from choccy import config
from choccy.evaluation.builtins import apply_builtin
from choccy.evaluation.list_ops import pop_at, put_at, take_at
from choccy.types.value import Kind, Value, check_live, make_error, release

LOGGER = logging.getLogger(__name__)


def evaluate(v: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """
    Evaluate `v`, consuming it. The caller owns the returned value.
    """
    check_live(v)
    if v.kind is not Kind.SEXPR:
        return v

    if max_depth is None:
        max_depth = config.get_max_depth()
    if depth >= max_depth:
        LOGGER.debug("evaluation nesting guard tripped at depth %d", depth)
        release(v)
        return make_error("Maximum nesting depth exceeded")

    for i in range(len(v.cells)):
        child = pop_at(v, i)
        put_at(v, i, evaluate(child, depth + 1, max_depth))
    return evaluate_sexpr(v, depth, max_depth)


def evaluate_sexpr(v: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """
    Apply an S-expression whose children are already evaluated.
    """
    for i, child in enumerate(v.cells):
        if child.kind is Kind.ERROR:
            return take_at(v, i)

    if not v.cells:
        return v

    if len(v.cells) == 1:
        return take_at(v, 0)

    head = pop_at(v, 0)
    if head.kind is not Kind.SYMBOL:
        release(head)
        release(v)
        return make_error("S-expression doesn't start with symbol")

    name = head.sym
    release(head)
    result = apply_builtin(v, name, depth, max_depth)
    if result.kind is Kind.ERROR:
        LOGGER.debug("%r produced error: %s", name, result.err)
    return result
