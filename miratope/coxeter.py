"""Coxeter matrices and the reflection groups they describe."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from miratope.gen_iter import GenIter
from miratope.geometry import EPS
from miratope.group_item import MatrixOps


class Cox:
    """A Coxeter matrix: entry (i, j) is the edge value between nodes i and j,
    2 when there is no edge, and 1 on the diagonal."""

    def __init__(self, matrix) -> None:
        self.matrix = np.array(matrix, dtype=float)

    def dim(self) -> int:
        """The number of nodes."""
        return self.matrix.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.matrix[index])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self.matrix[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cox):
            return NotImplemented
        return self.matrix.shape == other.matrix.shape and bool(
            np.array_equal(self.matrix, other.matrix)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Cox({self.matrix.tolist()!r})"

    def link(self, i: int, j: int, edge: float) -> None:
        """Joins two nodes with an edge of the given value."""
        self.matrix[i, j] = edge
        self.matrix[j, i] = edge

    @classmethod
    def trivial(cls) -> Cox:
        """The Coxeter matrix of the trivial 1D group."""
        return cls([[1.0]])

    @classmethod
    def _from_lin_diagram_iter(cls, edges: Iterable[float], dim: int) -> Cox:
        matrix = np.full((dim, dim), 2.0)
        np.fill_diagonal(matrix, 1.0)
        cox = cls(matrix)
        for i, edge in enumerate(edges):
            cox.link(i, i + 1, edge)
        return cox

    @classmethod
    def from_lin_diagram(cls, diagram: Iterable[float]) -> Cox:
        """The matrix of a linear diagram with the given edges.

        The diagram has as many nodes as edges, so its last edge has no node
        to reach and an index error is raised for a non-empty diagram.
        """
        edges = [float(x) for x in diagram]
        return cls._from_lin_diagram_iter(edges, len(edges))

    @classmethod
    def i2(cls, x: float) -> Cox:
        """The matrix of the I2(x) group."""
        return cls._from_lin_diagram_iter([float(x)], 2)

    @classmethod
    def a(cls, n: int) -> Cox:
        """The matrix of the An group."""
        if n < 1:
            raise ValueError("An needs at least one node")
        return cls._from_lin_diagram_iter([3.0] * (n - 1), n)

    @classmethod
    def b(cls, n: int) -> Cox:
        """The matrix of the Bn group."""
        if n < 2:
            raise ValueError("Bn needs at least two nodes")
        return cls._from_lin_diagram_iter([4.0] + [3.0] * (n - 2), n)

    @classmethod
    def d(cls, n: int) -> Cox:
        """The matrix of the Dn group."""
        cox = cls.a(n)
        cox.link(0, 1, 2.0)
        cox.link(0, 2, 3.0)
        return cox

    @classmethod
    def e(cls, n: int) -> Cox:
        """The matrix of the En group."""
        cox = cls.a(n)
        cox.link(0, 1, 2.0)
        cox.link(0, 3, 3.0)
        return cox

    @classmethod
    def h(cls, n: int) -> Cox:
        """The matrix of the Hn group."""
        if n < 2:
            raise ValueError("Hn needs at least two nodes")
        return cls._from_lin_diagram_iter([5.0] + [3.0] * (n - 2), n)

    def normals(self) -> np.ndarray | None:
        """An upper triangular matrix whose columns are unit normals of the
        mirrors, or None if the mirrors don't fit in spherical space."""
        dim = self.dim()
        mat = np.zeros((dim, dim))

        for i in range(dim):
            for j in range(i):
                dot = float(mat[: j + 1, i] @ mat[: j + 1, j])
                mat[j, i] = (math.cos(math.pi / self[i, j]) - dot) / mat[j, j]

            norm_sq = float(mat[:, i] @ mat[:, i])
            if norm_sq >= 1.0 - EPS:
                return None
            mat[i, i] = math.sqrt(1.0 - norm_sq)

        return mat

    def gen_iter(self) -> GenIter | None:
        """An iterator over the reflection group, or None if it isn't spherical."""
        normals = self.normals()
        if normals is None:
            return None
        dim = normals.shape[0]

        def reflection(n: np.ndarray) -> np.ndarray:
            return np.eye(dim) - np.outer(n, n) * (2.0 / float(n @ n))

        return GenIter(MatrixOps(dim), [reflection(normals[:, i]) for i in range(dim)])