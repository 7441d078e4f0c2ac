"""Render syntax nodes as compact, source-like text for humans.

The output mirrors the usual surface syntax (`a[1]`, `a.fetch(1)`,
`a[1..-1]`, `a[1] += 2`); it is meant for reports and diagnostics, not for
feeding back into a parser. Use `mutindex.sexp` for a lossless form.
"""

from __future__ import annotations

from mutindex.nodes import Child, Node, NodeKind

# Kinds that need parentheses when they appear as a call or index receiver.
_LOOSE_KINDS = frozenset(
    {NodeKind.IRANGE, NodeKind.ERANGE, NodeKind.INDEX_ASSIGN, NodeKind.OP_ASSIGN}
)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _receiver(child: Child) -> str:
    text = unparse(child)
    if isinstance(child, Node) and child.kind in _LOOSE_KINDS:
        return f"({text})"
    return text


def _arguments(children) -> str:
    return ", ".join(unparse(child) for child in children)


def unparse(node: Child, asgn_target: bool = False) -> str:
    """Return source-like text for `node`.

    `asgn_target` renders an INDEX_ASSIGN node in its compound-target layout,
    that is without a value.
    """
    if not isinstance(node, Node):
        return "" if node is None else str(node)

    kind = node.kind
    children = node.children

    if kind in (NodeKind.NIL, NodeKind.TRUE, NodeKind.FALSE):
        return kind.value
    if kind in (NodeKind.NAME, NodeKind.INT):
        return str(children[0])
    if kind is NodeKind.STR:
        return _quote(children[0])
    if kind is NodeKind.IRANGE:
        return f"{unparse(children[0])}..{unparse(children[1])}"
    if kind is NodeKind.ERANGE:
        return f"{unparse(children[0])}...{unparse(children[1])}"
    if kind is NodeKind.CALL:
        receiver, selector, *arguments = children
        call = selector if not arguments else f"{selector}({_arguments(arguments)})"
        if receiver is None:
            return call
        return f"{_receiver(receiver)}.{call}"
    if kind is NodeKind.INDEX:
        return f"{_receiver(children[0])}[{_arguments(children[1:])}]"
    if kind is NodeKind.INDEX_ASSIGN:
        if asgn_target:
            return f"{_receiver(children[0])}[{_arguments(children[1:])}]"
        return (
            f"{_receiver(children[0])}[{_arguments(children[1:-1])}]"
            f" = {unparse(children[-1])}"
        )
    if kind is NodeKind.OP_ASSIGN:
        target, operator, value = children
        return f"{unparse(target, asgn_target=True)} {operator}= {unparse(value)}"
    raise ValueError(f"Cannot unparse node kind {kind.name}")
