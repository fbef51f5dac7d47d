"""
  choccy lexer and parser

Produces the immutable syntax tree consumed by `choccy.reader.tree_reader`.
The tree has the shape of an mpc AST for the grammar:

    number : /-?[0-9]+/ ;
    symbol : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&%^]+/ ;
    s_exp  : '(' <exp>* ')' ;
    q_exp  : '{' <exp>* '}' ;
    exp    : <number> | <symbol> | <s_exp> | <q_exp> ;
    choccy : /^/ <exp>* /$/ ;

    - root                -> SyntaxNode(">", children=(regex, exp..., regex))
    - numbers             -> SyntaxNode("expr|number|regex", "42")
    - symbols             -> SyntaxNode("expr|symbol|regex", "head")
    - ( ... )             -> SyntaxNode("expr|s_exp|>", children=(char "(", exp..., char ")"))
    - { ... }             -> SyntaxNode("expr|q_exp|>", children=(char "{", exp..., char "}"))

Parsing uses an explicit stack, so deep nesting never exhausts the Python
call stack; depth limits are applied later by the reader.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from choccy.errors import ChoccySyntaxError

LOGGER = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<number>-?[0-9]+)"  # tried before symbols, like the grammar
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&%^]+)"
)

ROOT_TAG = ">"
NUMBER_TAG = "expr|number|regex"
SYMBOL_TAG = "expr|symbol|regex"
S_EXP_TAG = "expr|s_exp|>"
Q_EXP_TAG = "expr|q_exp|>"

_OPENERS = {"lparen": S_EXP_TAG, "lbrace": Q_EXP_TAG}
_CLOSERS = {S_EXP_TAG: ")", Q_EXP_TAG: "}"}


@dataclass(frozen=True)
class SyntaxNode:
    tag: str
    contents: str = ""
    children: tuple[SyntaxNode, ...] = ()


def _position(source: str, pos: int) -> tuple[int, int]:
    line = source.count("\n", 0, pos) + 1
    column = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return line, column


def _fail(source: str, pos: int, message: str) -> ChoccySyntaxError:
    line, column = _position(source, pos)
    LOGGER.debug("syntax error at %d:%d: %s", line, column, message)
    return ChoccySyntaxError(message, line, column)


def _scan(source: str) -> Iterator[tuple[str, str, int]]:
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise _fail(source, pos, f"unexpected character {source[pos]!r}")
        if m.lastgroup != "comment":
            yield m.lastgroup, m.group(), pos
        pos = m.end()


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    for tok_type, tok_val, _ in _scan(source):
        yield tok_type, tok_val


def parse(source: str) -> SyntaxNode:
    """Parse a line of choccy source into its root syntax node."""
    # Each frame: (tag, start offset, children collected so far)
    stack: list[tuple[str, int, list[SyntaxNode]]] = [
        (ROOT_TAG, 0, [SyntaxNode("regex")])
    ]
    for tok_type, tok_val, pos in _scan(source):
        if tok_type in _OPENERS:
            stack.append((_OPENERS[tok_type], pos, [SyntaxNode("char", tok_val)]))
        elif tok_type in ("rparen", "rbrace"):
            tag, _, children = stack[-1]
            if tag == ROOT_TAG:
                raise _fail(source, pos, f"unexpected {tok_val!r}")
            if _CLOSERS[tag] != tok_val:
                raise _fail(
                    source, pos, f"expected {_CLOSERS[tag]!r} but found {tok_val!r}"
                )
            stack.pop()
            children.append(SyntaxNode("char", tok_val))
            stack[-1][2].append(SyntaxNode(tag, "", tuple(children)))
        elif tok_type == "number":
            stack[-1][2].append(SyntaxNode(NUMBER_TAG, tok_val))
        else:
            stack[-1][2].append(SyntaxNode(SYMBOL_TAG, tok_val))

    if len(stack) > 1:
        tag, start, _ = stack[-1]
        raise _fail(source, start, f"missing closing {_CLOSERS[tag]!r}")

    children = stack[0][2]
    children.append(SyntaxNode("regex"))
    return SyntaxNode(ROOT_TAG, "", tuple(children))
