"""Built-in functions for the choccy evaluator.

Every handler takes ownership of its argument list. On success the handler
returns a new result built from the arguments; on a validation failure it
releases everything it holds and returns an Error value.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from choccy.evaluation import list_ops
from choccy.evaluation.list_ops import pop_at, take_at
from choccy.types.builtin import Builtin
from choccy.types.value import Kind, Value, make_error, release

LOGGER = logging.getLogger(__name__)

BuiltinFn = Callable[[Value, int, Optional[int]], Value]

_WORD = 2**64
_SIGN = 2**63


def wrap_int(n: int) -> int:
    """Reduce `n` to the signed 64-bit two's-complement range."""
    n %= _WORD
    return n - _WORD if n >= _SIGN else n


def _fail(args: Value, msg: str) -> Value:
    release(args)
    return make_error(msg)


def _check_single_qexpr(args: Value, name: str, allow_empty: bool = False) -> Optional[Value]:
    """Validate a one-QExpr argument list. Returns an Error (args released) or None."""
    if len(args) > 1:
        return _fail(args, f"Function '{name}' passed too many arguments")
    if len(args) == 0:
        return _fail(args, f"Function '{name}' passed no arguments")
    if args.cells[0].kind is not Kind.QEXPR:
        return _fail(args, f"Function '{name}' passed incorrect type")
    if not allow_empty and not args.cells[0].cells:
        return _fail(args, f"Function '{name}' passed {{}}")
    return None


# -------------------------------
# List builtins
# -------------------------------
def builtin_head(args: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """Keep only the first element of a Q-expression."""
    err = _check_single_qexpr(args, "head")
    if err is not None:
        return err
    q = take_at(args, 0)
    while len(q) > 1:
        release(pop_at(q, 1))
    return q


def builtin_tail(args: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """Drop the first element of a Q-expression."""
    err = _check_single_qexpr(args, "tail")
    if err is not None:
        return err
    q = take_at(args, 0)
    release(pop_at(q, 0))
    return q


def builtin_list(args: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """Turn the argument S-expression into a Q-expression."""
    args.kind = Kind.QEXPR
    return args


def builtin_eval(args: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """Turn a Q-expression into an S-expression and evaluate it."""
    # Lazy import to avoid circular imports
    from choccy.evaluation.evaluator import evaluate

    err = _check_single_qexpr(args, "eval", allow_empty=True)
    if err is not None:
        return err
    x = take_at(args, 0)
    x.kind = Kind.SEXPR
    return evaluate(x, depth + 1, max_depth)


def builtin_join(args: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
    """Concatenate Q-expressions, left to right, into the first one."""
    if not args.cells:
        return _fail(args, "Function 'join' passed no arguments")
    for child in args.cells:
        if child.kind is not Kind.QEXPR:
            return _fail(args, "Function 'join' passed incorrect type")
    x = pop_at(args, 0)
    while args.cells:
        x = list_ops.join(x, pop_at(args, 0))
    release(args)
    return x


# -------------------------------
# Arithmetic
# -------------------------------
def _power(base: int, exponent: int) -> Optional[int]:
    """Integer power, wrapped to 64 bits; None when the base is 0 and the exponent negative."""
    if exponent >= 0:
        return wrap_int(pow(base, exponent, _WORD))
    # Negative exponents: the real result truncated toward zero.
    if base == 0:
        return None
    if base == 1:
        return 1
    if base == -1:
        return 1 if exponent % 2 == 0 else -1
    return 0


def _truncated_div(x: int, y: int) -> int:
    """Integer quotient rounded toward zero, like C `long` division."""
    q = abs(x) // abs(y)
    return -q if (x < 0) != (y < 0) else q


def _fold(op: Builtin, x: int, y: int) -> Optional[int]:
    """Apply one arithmetic step. None signals division by zero."""
    if op is Builtin.ADD:
        return wrap_int(x + y)
    if op is Builtin.SUB:
        return wrap_int(x - y)
    if op is Builtin.MUL:
        return wrap_int(x * y)
    if op is Builtin.DIV:
        return None if y == 0 else wrap_int(_truncated_div(x, y))
    if op is Builtin.MOD:
        return None if y == 0 else wrap_int(x - y * _truncated_div(x, y))
    if op is Builtin.POW:
        return _power(x, y)
    raise ValueError(f"{op.value} is not an arithmetic operator")


def arithmetic(args: Value, op: Union[Builtin, str]) -> Value:
    """Fold the Number arguments left to right with `op`."""
    if not isinstance(op, Builtin):
        op = Builtin(op)
    if not args.cells:
        return _fail(args, f"Operator '{op.value}' passed no arguments")
    for child in args.cells:
        if child.kind is not Kind.NUMBER:
            return _fail(args, "Non-number passed as operation argument")

    acc = pop_at(args, 0)
    if op is Builtin.SUB and not args.cells:
        acc.num = wrap_int(-acc.num)

    while args.cells:
        y = pop_at(args, 0)
        result = _fold(op, acc.num, y.num)
        release(y)
        if result is None:
            release(acc)
            return _fail(args, "Division by zero")
        acc.num = result

    release(args)
    return acc


def _arithmetic_handler(op: Builtin) -> BuiltinFn:
    def handler(args: Value, depth: int = 0, max_depth: Optional[int] = None) -> Value:
        return arithmetic(args, op)

    handler.__name__ = f"builtin_{op.name.lower()}"
    return handler


BUILTINS: dict[Builtin, BuiltinFn] = {
    Builtin.HEAD: builtin_head,
    Builtin.TAIL: builtin_tail,
    Builtin.LIST: builtin_list,
    Builtin.EVAL: builtin_eval,
    Builtin.JOIN: builtin_join,
    **{op: _arithmetic_handler(op) for op in Builtin if op.is_arithmetic},
}


def apply_builtin(
    args: Value, name: str, depth: int = 0, max_depth: Optional[int] = None
) -> Value:
    """Call the builtin named `name` with the argument list `args`."""
    builtin = Builtin.lookup(name)
    if builtin is None:
        return _fail(args, "Unknown function")
    LOGGER.debug("applying %s to %d argument(s)", builtin.value, len(args))
    return BUILTINS[builtin](args, depth, max_depth)
