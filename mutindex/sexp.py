"""S-expression reader and writer for syntax nodes.

Grammar::

    node  := "(" KIND child* ")"
    child := node | INTEGER | STRING | SYMBOL

KIND is a `NodeKind` value (`index`, `int`, `call`, ...). Integers and
double-quoted strings become `int`/`str` atoms, bare symbols become `str`
atoms, and the reserved symbol `_` stands for an absent call receiver.

    (index (name a) (irange (int 1) (int -1)))
"""

from __future__ import annotations

import re

from mutindex.nodes import Child, Node, NodeKind

TOKEN_RE = re.compile(r'\s*(?:(\()|(\))|("(?:\\.|[^"\\])*")|([^\s()"]+))')
INTEGER_RE = re.compile(r"-?\d+\Z")
SYMBOL_RE = re.compile(r'[^\s()"\\]+\Z')
ABSENT = "_"


class SexpError(ValueError):
    """Raised for text that is not a well-formed node expression."""


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens = []
    position = 0
    text = text.rstrip()
    while position < len(text):
        match = TOKEN_RE.match(text, position)
        if match is None:
            raise SexpError(f"Unexpected character at offset {position}: {text[position:]!r}")
        open_paren, close_paren, string, symbol = match.groups()
        if open_paren:
            tokens.append(("open", open_paren))
        elif close_paren:
            tokens.append(("close", close_paren))
        elif string is not None:
            tokens.append(("string", string))
        else:
            tokens.append(("symbol", symbol))
        position = match.end()
    return tokens


def _unquote(token: str) -> str:
    return re.sub(r"\\(.)", r"\1", token[1:-1])


class _Reader:
    def __init__(self, tokens: list[tuple[str, str]]):
        self.tokens = tokens
        self.position = 0

    def _next(self) -> tuple[str, str]:
        if self.position >= len(self.tokens):
            raise SexpError("Unexpected end of input")
        token = self.tokens[self.position]
        self.position += 1
        return token

    def read_node(self) -> Node:
        kind_tag, value = self._next()
        if kind_tag != "open":
            raise SexpError(f"Expected '(', got {value!r}")
        kind_tag, value = self._next()
        if kind_tag != "symbol":
            raise SexpError(f"Expected a node kind, got {value!r}")
        try:
            kind = NodeKind(value)
        except ValueError:
            raise SexpError(f"Unknown node kind {value!r}") from None

        children: list[Child] = []
        while True:
            if self.position >= len(self.tokens):
                raise SexpError(f"Unclosed ({kind.value} ...)")
            kind_tag, value = self.tokens[self.position]
            if kind_tag == "close":
                self.position += 1
                return Node(kind, tuple(children))
            children.append(self.read_child())

    def read_child(self) -> Child:
        kind_tag, value = self.tokens[self.position]
        if kind_tag == "open":
            return self.read_node()
        self.position += 1
        if kind_tag == "string":
            return _unquote(value)
        if INTEGER_RE.match(value):
            return int(value)
        if value == ABSENT:
            return None
        return value


def loads(text: str) -> Node:
    """Read a single node from `text`."""
    tokens = _tokenize(text)
    if not tokens:
        raise SexpError("Empty expression")
    reader = _Reader(tokens)
    node = reader.read_node()
    if reader.position != len(tokens):
        raise SexpError(f"Trailing input after node: {tokens[reader.position][1]!r}")
    return node


def _dump_atom(atom: Child) -> str:
    if atom is None:
        return ABSENT
    if isinstance(atom, bool) or not isinstance(atom, (int, str)):
        raise SexpError(f"Cannot write atom {atom!r}")
    if isinstance(atom, int):
        return str(atom)
    if SYMBOL_RE.match(atom) and atom != ABSENT and not INTEGER_RE.match(atom):
        return atom
    escaped = atom.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def dumps(node: Node) -> str:
    """Write `node` as a single-line s-expression."""
    parts = [node.kind.value]
    for child in node.children:
        parts.append(dumps(child) if isinstance(child, Node) else _dump_atom(child))
    return f"({' '.join(parts)})"
