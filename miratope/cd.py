"""Coxeter diagrams: nodes, edges, errors and the diagram graph itself."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np

from miratope.coxeter import Cox
from miratope.geometry import SQRT_2, SQRT_3, SQRT_5


class CdError(Exception):
    """An error found while reading or building a Coxeter diagram."""


class MismatchedParenthesis(CdError):
    """A parenthesis was opened but never closed."""

    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"mismatched parenthesis at position {pos}")


class UnexpectedEnding(CdError):
    """The diagram ended unexpectedly."""

    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"CD ended unexpectedly at position {pos}")


class CdParseError(CdError):
    """A number couldn't be parsed."""

    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"parsing failed at position {pos}")


class InvalidSymbol(CdError):
    """An invalid symbol was found."""

    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"invalid symbol found at position {pos}")


class InvalidEdge(CdError):
    """An edge value is not a valid rational greater than one."""

    def __init__(self, num: int, den: int, pos: int) -> None:
        self.num = num
        self.den = den
        self.pos = pos
        super().__init__(f"invalid edge {num}/{den} at position {pos}")


class RepeatEdge(CdError):
    """An edge between the same two nodes was given twice."""

    def __init__(self, a: int, b: int) -> None:
        self.a = a
        self.b = b
        super().__init__(f"repeat edge between {a} and {b}")


def _format_float(x: float) -> str:
    if math.isfinite(x) and x == int(x) and abs(x) < 1e16:
        return str(int(x))
    return repr(x)


class NodeKind(enum.Enum):
    """The three kinds of node in a Coxeter diagram."""

    UNRINGED = "o"
    RINGED = "x"
    SNUB = "s"


_RINGED_VALUES = {
    "v": (SQRT_5 - 1.0) / 2.0,
    "x": 1.0,
    "q": SQRT_2,
    "f": (SQRT_5 + 1.0) / 2.0,
    "h": SQRT_3,
    "k": math.sqrt(SQRT_2 + 2.0),
    "u": 2.0,
    "w": SQRT_2 + 1.0,
    "F": (SQRT_5 + 3.0) / 2.0,
    "e": SQRT_3 + 1.0,
    "Q": SQRT_2 * 2.0,
    "d": 3.0,
    "V": SQRT_5 + 1.0,
    "U": SQRT_2 + 2.0,
    "A": (SQRT_5 + 1.0) / 4.0 + 1.0,
    "X": SQRT_2 * 2.0 + 1.0,
    "B": SQRT_5 + 2.0,
}


@dataclass(frozen=True)
class Node:
    """A mirror in a Coxeter diagram, with (twice) the generator's distance to it."""

    kind: NodeKind
    val: float = 0.0

    @classmethod
    def unringed(cls) -> Node:
        """A mirror containing the generator point."""
        return cls(NodeKind.UNRINGED, 0.0)

    @classmethod
    def ringed(cls, x: float) -> Node:
        """A mirror whose reflection of the generator creates an edge."""
        return cls(NodeKind.RINGED, float(x))

    @classmethod
    def snub(cls, x: float) -> Node:
        """A snub mirror at a given (doubled) distance."""
        return cls(NodeKind.SNUB, float(x))

    def value(self) -> float:
        """Twice the distance from the generator to this node's mirror."""
        if self.kind is NodeKind.UNRINGED:
            return 0.0
        return self.val

    def is_ringed(self) -> bool:
        return self.kind is NodeKind.RINGED

    @classmethod
    def from_char(cls, c: str) -> Node | None:
        """The node for a one-character symbol, or None if there is none."""
        if c == "o":
            return cls.unringed()
        if c == "s":
            return cls.snub(1.0)
        value = _RINGED_VALUES.get(c)
        return None if value is None else cls.ringed(value)

    @classmethod
    def from_char_or(cls, c: str, pos: int) -> Node:
        """Like ``from_char``, raising InvalidSymbol at ``pos`` on failure."""
        node = cls.from_char(c)
        if node is None:
            raise InvalidSymbol(pos)
        return node

    def __str__(self) -> str:
        if self.kind is NodeKind.UNRINGED:
            return "o"
        return f"{self.kind.value}({_format_float(self.val)})"


@dataclass(frozen=True)
class Edge:
    """An edge of value num/den, meaning an angle of π·den/num between mirrors."""

    num: int
    den: int

    @classmethod
    def rational(cls, num: int, den: int, pos: int) -> Edge:
        if num > 1 and den != 0 and den < num:
            return cls(num, den)
        raise InvalidEdge(num, den, pos)

    @classmethod
    def integer(cls, num: int, pos: int) -> Edge:
        return cls.rational(num, 1, pos)

    def value(self) -> float:
        return self.num / self.den

    def eq_two(self) -> bool:
        """Whether the edge has a value equivalent to 2."""
        return self.num == self.den * 2

    def __str__(self) -> str:
        if self.den == 1:
            return str(self.num)
        return f"{self.num} / {self.den}"


@dataclass(frozen=True)
class NodeRef:
    """A node position, counted from the start or (if negative) from the end."""

    position: int
    negative: bool = False

    def index(self, length: int) -> int:
        """The node's index in a diagram with ``length`` nodes."""
        if self.negative:
            return length - 1 - self.position
        return self.position


@dataclass(frozen=True)
class EdgeRef:
    """References to both ends of an edge, with the edge's value."""

    first: NodeRef
    other: NodeRef
    edge: Edge

    def indices(self, length: int) -> tuple[int, int]:
        return self.first.index(length), self.other.index(length)


class Cd:
    """A Coxeter diagram as an undirected graph of nodes joined by edges.

    Nodes not joined by an edge are perpendicular; edges of value 2 are
    therefore never stored.
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._edges: list[tuple[int, int, Edge]] = []

    def dim(self) -> int:
        """The dimension of the described polytope."""
        return self.node_count()

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def nodes(self) -> list[Node]:
        """The nodes, in the order they were added."""
        return list(self._nodes)

    def edges(self) -> list[tuple[int, int, Edge]]:
        """The edges as (a, b, edge) triples, in the order they were added."""
        return list(self._edges)

    def add_node(self, node: Node) -> int:
        """Adds a node and returns its index."""
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _find_edge(self, a: int, b: int) -> Edge | None:
        for x, y, edge in self._edges:
            if (x, y) == (a, b) or (x, y) == (b, a):
                return edge
        return None

    def add_edge(self, a: int, b: int, edge: Edge) -> None:
        """Joins two nodes; edges of value 2 are skipped.

        Raises RepeatEdge if the nodes are already joined.
        """
        if edge.eq_two():
            return
        for index in (a, b):
            if not 0 <= index < len(self._nodes):
                raise IndexError(f"node index {index} out of range")
        if self._find_edge(a, b) is not None:
            raise RepeatEdge(a, b)
        self._edges.append((a, b, edge))

    def node_vector(self) -> np.ndarray:
        """The vector of node values."""
        return np.array([node.value() for node in self._nodes], dtype=float)

    def minimal(self) -> bool:
        """Whether every connected component has a ringed node."""
        neighbours: list[list[int]] = [[] for _ in self._nodes]
        for a, b, _ in self._edges:
            neighbours[a].append(b)
            neighbours[b].append(a)

        seen = [False] * len(self._nodes)
        for start in range(len(self._nodes)):
            if seen[start]:
                continue
            seen[start] = True
            stack = [start]
            ringed = False
            while stack:
                node = stack.pop()
                ringed = ringed or self._nodes[node].is_ringed()
                for other in neighbours[node]:
                    if not seen[other]:
                        seen[other] = True
                        stack.append(other)
            if not ringed:
                return False
        return True

    def cox(self) -> Cox:
        """The Coxeter matrix of the diagram."""
        dim = self.dim()
        matrix = np.full((dim, dim), 2.0)
        np.fill_diagonal(matrix, 1.0)
        for a, b, edge in self._edges:
            if a != b:
                matrix[a, b] = edge.value()
                matrix[b, a] = edge.value()
        return Cox(matrix)

    def circumradius(self) -> float | None:
        """The norm of the generator point, or None if there is none."""
        generator = self.generator()
        if generator is None:
            return None
        return float(np.linalg.norm(generator))

    def generator(self) -> np.ndarray | None:
        """The generator point, solved against the mirror normals, or None."""
        normals = self.cox().normals()
        if normals is None:
            return None
        vector = self.node_vector()
        dim = vector.shape[0]
        if any(normals[i, i] == 0.0 for i in range(dim)):
            return None
        result = np.zeros(dim)
        for i in reversed(range(dim)):
            rest = float(normals[i, i + 1 :] @ result[i + 1 :])
            result[i] = (vector[i] - rest) / normals[i, i]
        return result

    def __str__(self) -> str:
        lines = [f"{self.dim()} Nodes", f"{self.edge_count()} Edges"]
        lines.extend(f"Node {i}: {node}" for i, node in enumerate(self._nodes))
        lines.extend(f"Edge {i}: {edge}" for i, (_, _, edge) in enumerate(self._edges))
        return "\n".join(lines) + "\n"