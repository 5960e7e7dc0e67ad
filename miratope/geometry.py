"""Points, subspaces, hyperplanes and fuzzy-ordered matrices in n dimensions."""

from __future__ import annotations

import functools
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

EPS = 1e-7
"""Default tolerance for comparing values close to 1.0."""

PI = math.pi
TAU = math.tau
SQRT_2 = math.sqrt(2.0)
HALF_SQRT_2 = SQRT_2 / 2.0
SQRT_3 = 1.7320508075688772
SQRT_5 = 2.23606797749979


def _point(p) -> np.ndarray:
    return np.asarray(p, dtype=float)


@dataclass
class Hypersphere:
    """A hypersphere with a center and a (possibly negative) squared radius.

    A negative squared radius reciprocates and then reflects about the center.
    """

    center: np.ndarray
    squared_radius: float

    def __init__(self, center, squared_radius: float) -> None:
        self.center = _point(center)
        self.squared_radius = float(squared_radius)

    def radius(self) -> float:
        """The radius, or NaN if the squared radius is negative."""
        if self.squared_radius < 0:
            return math.nan
        return math.sqrt(self.squared_radius)

    @classmethod
    def with_radius(cls, center, radius: float) -> Hypersphere:
        return cls(center, radius * radius)

    @classmethod
    def with_squared_radius(cls, center, squared_radius: float) -> Hypersphere:
        return cls(center, squared_radius)

    @classmethod
    def unit(cls, dim: int) -> Hypersphere:
        """The unit hypersphere centered at the origin."""
        return cls(np.zeros(dim), 1.0)

    def reciprocate(self, p) -> np.ndarray | None:
        """Reciprocates a point, or returns None if it is too close to the center."""
        q = _point(p) - self.center
        s = float(q @ q)
        if s < EPS:
            return None
        return q / s * self.squared_radius + self.center


@dataclass
class Subspace:
    """An affine subspace through a point, spanned by an orthonormal basis."""

    offset: np.ndarray
    basis: list[np.ndarray] = field(default_factory=list)

    def __init__(self, offset) -> None:
        self.offset = _point(offset).copy()
        self.basis = []

    def dim(self) -> int:
        """The dimension of the ambient space."""
        return self.offset.shape[0]

    def rank(self) -> int:
        """The number of vectors in the basis."""
        return len(self.basis)

    def is_hyperplane(self) -> bool:
        return self.dim() == self.rank() + 1

    def is_full_rank(self) -> bool:
        return self.dim() == self.rank()

    def add(self, p) -> np.ndarray | None:
        """Adds a point; returns the new basis vector, or None if it already lies here."""
        p = _point(p)
        v = p - self.project(p)
        norm = float(np.linalg.norm(v))
        if norm > EPS:
            v = v / norm
            self.basis.append(v)
            return v
        return None

    @staticmethod
    def _start(points: Iterable) -> tuple[Subspace, Iterator]:
        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            raise ValueError(
                "a subspace can't be created from an empty point array"
            ) from None
        return Subspace(first), it

    @classmethod
    def from_points(cls, points: Iterable) -> Subspace:
        """Builds the affine hull of the points, stopping early at full rank."""
        subspace, rest = cls._start(points)
        for p in rest:
            if subspace.add(p) is not None and subspace.is_full_rank():
                break
        return subspace

    @classmethod
    def from_points_with(cls, points: Iterable, rank: int) -> Subspace | None:
        """Builds the affine hull, or None as soon as it exceeds the given rank."""
        subspace, rest = cls._start(points)
        for p in rest:
            if subspace.add(p) is not None and subspace.rank() > rank:
                return None
        return subspace

    def project(self, p) -> np.ndarray:
        """Projects a point onto the subspace."""
        d = _point(p) - self.offset
        q = self.offset.copy()
        for b in self.basis:
            q += b * float(d @ b)
        return q

    def flatten(self, p) -> np.ndarray:
        """Coordinates of the projection of a point in the subspace's basis."""
        d = _point(p) - self.offset
        return np.array([float(d @ b) for b in self.basis], dtype=float)

    def flatten_all(self, points: Sequence) -> Sequence:
        """Flattens every point, returning the input itself when of full rank."""
        if self.is_full_rank():
            return points
        return [self.flatten(p) for p in points]

    def distance(self, p) -> float:
        """Distance from a point to the subspace."""
        p = _point(p)
        return float(np.linalg.norm(p - self.project(p)))

    def is_outer(self, p) -> bool:
        """Whether the point lies on the subspace."""
        return abs(self.distance(p)) <= EPS

    def normal(self, p) -> np.ndarray | None:
        """A unit normal pointing towards p, or None if p lies on the subspace."""
        p = _point(p)
        v = p - self.project(p)
        norm = float(np.linalg.norm(v))
        if norm <= EPS:
            return None
        return v / norm


class Hyperplane:
    """An oriented hyperplane with a normal vector."""

    def __init__(self, normal, pos: float) -> None:
        normal = _point(normal)
        rank = normal.shape[0]
        self.subspace = Subspace(normal * pos)
        self._normal = normal
        e = np.zeros(rank)
        for i in range(rank):
            e[i] = 1.0
            e += normal * (pos - float(e @ normal))
            self.subspace.add(e)
            e[i] = 0.0

    @property
    def normal(self) -> np.ndarray:
        return self._normal

    def project(self, p) -> np.ndarray:
        return self.subspace.project(p)

    def distance(self, p) -> float:
        """Signed distance; positive on the side the normal points to."""
        p = _point(p)
        return float((p - self.project(p)) @ self._normal)

    def flatten(self, p) -> np.ndarray:
        return self.subspace.flatten(p)

    def is_outer(self, p) -> bool:
        return abs(self.distance(p)) <= EPS

    def intersect(self, segment: Segment) -> np.ndarray | None:
        """The intersection with a line segment, or None if there is none."""
        d0 = self.distance(segment.start)
        d1 = self.distance(segment.end)
        if abs(d0 - d1) > EPS and (d0 < -EPS) != (d1 < -EPS):
            return segment.at(d1 / (d1 - d0))
        return None


@dataclass
class Segment:
    """A line segment between two points."""

    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        self.start = _point(self.start)
        self.end = _point(self.end)

    def at(self, t: float) -> np.ndarray:
        """The point start*t + end*(1-t); on the segment when 0 <= t <= 1."""
        return self.start * t + self.end * (1.0 - t)


@functools.total_ordering
class MatrixOrd:
    """A matrix under fuzzy lexicographic order, tolerant of rounding errors."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, matrix) -> None:
        self.matrix = np.asarray(matrix, dtype=float)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.matrix.shape

    def __iter__(self) -> Iterator[float]:
        return iter(self.matrix.ravel(order="F").tolist())

    def __getitem__(self, index):
        return self.matrix[index]

    def __repr__(self) -> str:
        return f"MatrixOrd({self.matrix.tolist()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixOrd):
            return NotImplemented
        if self.shape != other.shape:
            raise ValueError("matrix shape mismatch")
        return all(abs(x - y) <= EPS for x, y in zip(self, other))

    def __lt__(self, other: MatrixOrd) -> bool:
        if not isinstance(other, MatrixOrd):
            return NotImplemented
        for x, y in zip(self, other):
            if not abs(x - y) <= EPS:
                if math.isnan(x) or math.isnan(y):
                    raise ValueError("matrix has NaN values")
                return x < y
        return False