"""Render values as choccy source text."""

from __future__ import annotations

from choccy.types.value import Kind, Value, check_live

_BRACKETS = {
    Kind.SEXPR: ("(", ")"),
    Kind.QEXPR: ("{", "}"),
}


def render_atom(v: Value) -> str:
    if v.kind is Kind.NUMBER:
        return str(v.num)
    if v.kind is Kind.ERROR:
        return f"Error: {v.err}"
    return v.sym


def render(v: Value) -> str:
    """Render `v`: numbers in decimal, errors as "Error: <message>",
    symbols verbatim and lists as their space-joined children in brackets.
    """
    check_live(v)
    if not v.is_list:
        return render_atom(v)

    # Explicit stack of (list, index of next child) so depth is unbounded.
    parts: list[str] = [_BRACKETS[v.kind][0]]
    stack: list[tuple[Value, int]] = [(v, 0)]
    while stack:
        node, i = stack.pop()
        if i == len(node.cells):
            parts.append(_BRACKETS[node.kind][1])
            continue
        if i > 0:
            parts.append(" ")
        stack.append((node, i + 1))
        child = check_live(node.cells[i])
        if child.is_list:
            parts.append(_BRACKETS[child.kind][0])
            stack.append((child, 0))
        else:
            parts.append(render_atom(child))
    return "".join(parts)
