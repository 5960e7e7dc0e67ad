"""Reading Coxeter diagrams written in inline ASCII notation.

A diagram is a sequence of nodes, optionally separated by edges::

    [node] [edge]? [node] ... [node]

Nodes are single characters such as ``x`` or ``F``, parenthesized lengths
such as ``(1.0)`` or ``(-3.5)``, or virtual nodes such as ``*a`` or ``*-c``
that refer back to earlier nodes. Edges are integers such as ``3`` or
fractions such as ``5/2``. Whitespace may appear between tokens.

Positions in error messages are byte offsets into the UTF-8 encoded diagram.
"""

from __future__ import annotations

import math
from collections import deque

from miratope.cd import (
    Cd,
    CdParseError,
    Edge,
    EdgeRef,
    InvalidSymbol,
    MismatchedParenthesis,
    Node,
    NodeRef,
    UnexpectedEnding,
)
from miratope.coxeter import Cox

_U32_MAX = 2**32 - 1


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


class CdBuilder:
    """Reads a diagram into a :class:`Cd`.

    Nodes keep the order in which they appear. Edges are only added once the
    whole diagram has been read, since virtual nodes counted from the end
    cannot be resolved before that.
    """

    def __init__(self, diagram: str) -> None:
        self.diagram = diagram
        self._bytes = diagram.encode("utf-8")
        self._chars: list[tuple[int, str]] = []
        offset = 0
        for c in diagram:
            self._chars.append((offset, c))
            offset += len(c.encode("utf-8"))
        self._pos = 0

        self._cd = Cd()
        self._edge_queue: deque[EdgeRef] = deque()
        self._prev_node: NodeRef | None = None
        self._next_edge: Edge | None = None

    # Character stream.

    def _len(self) -> int:
        return len(self._bytes)

    def _unexpected_ending(self) -> UnexpectedEnding:
        return UnexpectedEnding(self._len())

    def _peek(self) -> tuple[int, str] | None:
        if self._pos < len(self._chars):
            return self._chars[self._pos]
        return None

    def _next(self) -> tuple[int, str] | None:
        item = self._peek()
        if item is not None:
            self._pos += 1
        return item

    def _peek_or(self) -> tuple[int, str]:
        item = self._peek()
        if item is None:
            raise self._unexpected_ending()
        return item

    def _next_or(self) -> tuple[int, str]:
        item = self._next()
        if item is None:
            raise self._unexpected_ending()
        return item

    def _skip_whitespace(self) -> None:
        while (item := self._peek()) is not None and item[1].isspace():
            self._pos += 1

    def _slice(self, init_idx: int, end_idx: int) -> str:
        try:
            return self._bytes[init_idx : end_idx + 1].decode("utf-8")
        except UnicodeDecodeError:
            raise CdParseError(end_idx) from None

    # Literals.

    def _parse_float(self, init_idx: int, end_idx: int) -> float:
        text = self._slice(init_idx, end_idx)
        if not text or "_" in text or any(c.isspace() for c in text):
            raise CdParseError(end_idx)
        try:
            return float(text)
        except ValueError:
            raise CdParseError(end_idx) from None

    def _parse_u32(self, init_idx: int, end_idx: int) -> int:
        text = self._slice(init_idx, end_idx)
        digits = text[1:] if text.startswith("+") else text
        if not digits or not all(_is_ascii_digit(c) for c in digits):
            raise CdParseError(end_idx)
        value = int(digits)
        if value > _U32_MAX:
            raise CdParseError(end_idx)
        return value

    # Tokens.

    def _parse_node(self) -> Node:
        """Reads a parenthesized length; the opening parenthesis is already read."""
        first = self._peek()
        if first is None:
            raise MismatchedParenthesis(self._len())
        init_idx = first[0]
        end_idx = init_idx

        while (item := self._next()) is not None:
            idx, c = item
            if c == ")":
                val = self._parse_float(init_idx, end_idx)
                if math.isnan(val):
                    raise InvalidSymbol(end_idx)
                return Node.ringed(val)
            end_idx = idx

        raise MismatchedParenthesis(self._len())

    def _create_node(self) -> None:
        self._skip_whitespace()
        idx, c = self._next_or()

        new_node = NodeRef(self._cd.node_count())

        if c == "(":
            self._cd.add_node(self._parse_node())
        elif c == "*":
            idx, c = self._next_or()
            negative = c == "-"
            if negative:
                idx, c = self._next_or()
            if "a" <= c <= "z":
                new_node = NodeRef(ord(c) - ord("a"), negative)
            else:
                raise InvalidSymbol(idx)
        else:
            self._cd.add_node(Node.from_char_or(c, idx))

        if self._prev_node is not None:
            if self._next_edge is not None:
                self._edge_queue.append(
                    EdgeRef(self._prev_node, new_node, self._next_edge)
                )
            self._next_edge = None

        self._prev_node = new_node

    def _parse_edge(self) -> Edge | None:
        first = self._peek()
        if first is None:
            raise self._unexpected_ending()
        init_idx, c = first
        if not _is_ascii_digit(c):
            return None

        numerator: int | None = None
        end_idx = init_idx

        while True:
            idx, c = self._peek_or()

            if c == "/":
                numerator = self._parse_u32(init_idx, end_idx)
                init_idx = idx + 1
            elif c in "(* " or "A" <= c <= "z":
                last = self._parse_u32(init_idx, end_idx)
                if numerator is None:
                    return Edge.integer(last, end_idx)
                return Edge.rational(numerator, last, end_idx)
            elif not _is_ascii_digit(c):
                raise InvalidSymbol(idx)

            end_idx = idx
            self._next()

    def _create_edge(self) -> None:
        self._skip_whitespace()
        self._next_edge = self._parse_edge()

    def _read(self) -> None:
        while True:
            self._create_node()
            if self._peek() is None:
                return
            self._create_edge()

    def build(self) -> Cd:
        """Reads the whole diagram and returns it, raising a CdError on failure."""
        self._read()
        length = self._cd.node_count()
        while self._edge_queue:
            edge_ref = self._edge_queue.popleft()
            a, b = edge_ref.indices(length)
            self._cd.add_edge(a, b, edge_ref.edge)
        return self._cd


def parse_cd(diagram: str) -> Cd:
    """Parses a Coxeter diagram from inline ASCII notation."""
    return CdBuilder(diagram).build()


def parse_cox(diagram: str) -> Cox:
    """Parses a Coxeter diagram and returns its Coxeter matrix."""
    return parse_cd(diagram).cox()