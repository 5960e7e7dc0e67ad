"""Symmetry groups: constructions, products and derived groups of matrices."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator
from typing import Any

import numpy as np

from miratope.coxeter import Cox
from miratope.cyclic import Cyclic
from miratope.geometry import MatrixOrd
from miratope.group_item import GroupItemOps, MatrixOps, QuaternionOps
from miratope.pairs import Pair
from miratope.parse import parse_cox
from miratope.permutation import Permutation, PermutationIter, PermutationOps

_QUATERNIONS = QuaternionOps()


class _Lazy:
    """An iterable that builds a fresh iterator every time it is iterated."""

    def __init__(self, factory: Callable[[], Iterator[Any]]) -> None:
        self._factory = factory

    def __iter__(self) -> Iterator[Any]:
        return self._factory()


def _values_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        a_arr = np.asarray(a, dtype=float)
        b_arr = np.asarray(b, dtype=float)
        return a_arr.shape == b_arr.shape and MatrixOrd(a_arr) == MatrixOrd(b_arr)
    return bool(a == b)


class Group:
    """The elements of a group, together with its dimension and operations.

    Building a group asserts that the elements are closed under the
    operation, contain the identity and contain every inverse. Groups built
    from a one-shot source can be iterated once; use :meth:`cache` to keep
    the elements for repeated iteration.
    """

    def __init__(
        self, dim: Any, elements: Iterable[Any], ops: GroupItemOps | None = None
    ) -> None:
        self.dim = dim
        self.ops = ops if ops is not None else MatrixOps(dim)
        self._elements = elements

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    # Derived groups.

    def iso(self, dim: Any, ops: GroupItemOps, f: Callable[[Any], Any]) -> Group:
        """The image of the group under an isomorphism ``f``."""
        return Group(dim, _Lazy(lambda: map(f, self)), ops)

    def sub(self, predicate: Callable[[Any], bool]) -> Group:
        """The subgroup of the elements satisfying a predicate."""
        return Group(self.dim, _Lazy(lambda: filter(predicate, self)), self.ops)

    def cache(self) -> Group:
        """A copy of the group that stores all of its elements."""
        return Group(self.dim, list(self), self.ops)

    def permutations(self) -> Group:
        """The permutation group given by left multiplication on the elements."""
        elements = list(self)
        n = len(elements)
        perms = PermutationIter(elements, self.ops)
        return Group(n, perms, PermutationOps(n))

    # Basic constructions.

    @classmethod
    def trivial(cls, dim: int) -> Group:
        """The group holding only the identity matrix."""
        ops = MatrixOps(dim)
        return cls(dim, [ops.identity()], ops)

    @classmethod
    def cyclic_gen(cls, dim: int, gen) -> Group:
        """The cyclic group generated by a matrix."""
        ops = MatrixOps(dim)
        return cls(dim, Cyclic(np.asarray(gen, dtype=float), ops), ops)

    @classmethod
    def cyclic(cls, n: int) -> Group:
        """The cyclic group generated by a 2π / n rotation in the plane."""
        angle = math.tau / n
        s, c = math.sin(angle), math.cos(angle)
        return cls.cyclic_gen(2, np.array([[c, -s], [s, c]]))

    @classmethod
    def coxeter(cls, cox: Cox) -> Group | None:
        """The reflection group of a Coxeter matrix, or None if not spherical."""
        gens = cox.gen_iter()
        if gens is None:
            return None
        return cls(cox.dim(), gens, gens.ops)

    @classmethod
    def parse(cls, diagram: str) -> Group | None:
        """Parses a Coxeter diagram into its reflection group.

        Returns None if the group isn't spherical; raises CdError if the
        diagram can't be read.
        """
        return cls.coxeter(parse_cox(diagram))

    @classmethod
    def _spherical(cls, cox: Cox) -> Group:
        group = cls.coxeter(cox)
        if group is None:
            raise ValueError("the Coxeter group is not spherical")
        return group

    @classmethod
    def simplex(cls, n: int) -> Group:
        """The A(n) group."""
        return cls._spherical(Cox.a(n))

    @classmethod
    def hypercube(cls, n: int) -> Group:
        """The B(n) group."""
        return cls._spherical(Cox.b(n))

    @classmethod
    def demihypercube(cls, n: int) -> Group:
        """The D(n) group."""
        return cls._spherical(Cox.d(n))

    @classmethod
    def gosset(cls, n: int) -> Group:
        """The E(n) group, for n from 4 to 8."""
        if not 4 <= n <= 8:
            raise ValueError(f"E({n}) is not a Gosset group; n must be 4 to 8")
        return cls._spherical(Cox.e(n))

    @classmethod
    def pentagonal(cls, n: int) -> Group:
        """The H(n) group, for n from 2 to 4."""
        if not 2 <= n <= 4:
            raise ValueError(f"H({n}) is not a pentagonal group; n must be 2 to 4")
        return cls._spherical(Cox.h(n))

    @classmethod
    def two(cls, dim: int, gen) -> Group:
        """The group of the identity and an involution."""
        ops = MatrixOps(dim)
        return cls(dim, [ops.identity(), np.asarray(gen, dtype=float)], ops)

    @classmethod
    def central_inv(cls, dim: int) -> Group:
        """The group of the identity and central inversion."""
        if dim < 1:
            raise ValueError("central inversion needs at least one dimension")
        return cls.two(dim, -np.eye(dim))

    @classmethod
    def reflection_at(cls, dim: int, idx: int) -> Group:
        """The group of the identity and the reflection of one coordinate."""
        if dim < 1:
            raise ValueError("a reflection needs at least one dimension")
        refl = np.eye(dim)
        refl[idx, idx] = -1.0
        return cls.two(dim, refl)

    @classmethod
    def involution(cls) -> Group:
        """The symmetric group on two elements."""
        return cls(
            2, [Permutation([0, 1]), Permutation([1, 0])], PermutationOps(2)
        )

    @classmethod
    def dihedral_2(cls, n: int) -> Group:
        """The planar dihedral group of a 2π / n rotation and an x reflection."""
        return cls.cyclic(n).with_reflection_at(0)

    @classmethod
    def dihedral_3(cls, n: int) -> Group:
        """The dihedral group of a 2π / n rotation and a z reflection in space."""
        return cls.cyclic(n).pad(1).with_reflection_at(2)

    # Matrix group operations.

    def pad(self, dim: int) -> Group:
        """Adds ``dim`` fixed dimensions to every matrix."""
        return self.direct_product(Group.trivial(dim))

    def rotations(self) -> Group:
        """The subgroup of matrices with positive determinant."""
        return self.sub(lambda el: float(np.linalg.det(el)) > 0.0)

    def matrix_product(self, other: Group) -> Group:
        """All products of an element of ``self`` and one of ``other``.

        The groups must commute for the result to be a group.
        """
        pairs = Pair(list(self), list(other))
        return Group(self.dim, _Lazy(lambda: pairs.map(lambda a, b: a @ b)), self.ops)

    def with_central_inv(self) -> Group:
        """The group with central inversion appended to every element."""
        return self.matrix_product(Group.central_inv(self.dim))

    def with_reflection_at(self, idx: int) -> Group:
        """The group with a coordinate reflection appended to every element."""
        return self.matrix_product(Group.reflection_at(self.dim, idx))

    def direct_product(self, other: Group) -> Group:
        """The direct product, with pairs mapped to their direct sum."""
        dim = self.dim + other.dim
        pairs = Pair(list(self), list(other))
        return Group(dim, _Lazy(lambda: pairs.map(direct_sum)), MatrixOps(dim))

    def swirl_hom(
        self,
        other: Group,
        alpha: Callable[[np.ndarray], Any],
        beta: Callable[[np.ndarray], Any],
    ) -> Group:
        """The swirl (diploid) group of two 3D rotation groups.

        Only pairs whose images under the homomorphisms ``alpha`` and
        ``beta`` agree are combined.
        """
        if self.dim != 3 or other.dim != 3:
            raise ValueError("swirl groups need two 3-dimensional groups")

        first = [(alpha(mat), mat_to_quat(mat)) for mat in self]
        second = [(beta(mat), mat_to_quat(mat)) for mat in other]
        pairs = Pair(first, second)

        def combine(a, b):
            (a_val, q), (b_val, r) = a, b
            if not _values_equal(a_val, b_val):
                return None
            prod = mat_from_quats(q, r)
            return (-prod, prod)

        def elements() -> Iterator[np.ndarray]:
            for both in pairs.filter_map(combine):
                yield from both

        return Group(4, _Lazy(elements), MatrixOps(4))

    def swirl(self, other: Group) -> Group:
        """The swirl (diploid) group of two 3D rotation groups."""
        return self.swirl_hom(other, lambda _: None, lambda _: None)

    def step_hom(self, f: Callable[[np.ndarray], np.ndarray]) -> Group:
        """The step prism group of a homomorphism into another matrix group."""
        dim = 2 * self.dim
        return self.iso(dim, MatrixOps(dim), lambda mat: direct_sum(mat, f(mat)))


def mat_to_quat(mat) -> np.ndarray:
    """The unit quaternion ``[w, i, j, k]`` of the top-left 3×3 rotation block."""
    m = np.asarray(mat, dtype=float)[:3, :3]
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        q = [0.25 * s, (m[2, 1] - m[1, 2]) / s, (m[0, 2] - m[2, 0]) / s,
             (m[1, 0] - m[0, 1]) / s]
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2]) * 2.0
        q = [(m[2, 1] - m[1, 2]) / s, 0.25 * s, (m[0, 1] + m[1, 0]) / s,
             (m[0, 2] + m[2, 0]) / s]
    elif m[1, 1] > m[2, 2]:
        s = math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2]) * 2.0
        q = [(m[0, 2] - m[2, 0]) / s, (m[0, 1] + m[1, 0]) / s, 0.25 * s,
             (m[1, 2] + m[2, 1]) / s]
    else:
        s = math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1]) * 2.0
        q = [(m[1, 0] - m[0, 1]) / s, (m[0, 2] + m[2, 0]) / s,
             (m[1, 2] + m[2, 1]) / s, 0.25 * s]
    quat = np.array(q, dtype=float)
    return quat / float(np.linalg.norm(quat))


def mat_from_quats(q, r) -> np.ndarray:
    """The 4×4 matrix of ``v ↦ q·v·r`` on quaternions in the basis 1, i, j, k."""
    q = np.asarray(q, dtype=float)
    r = np.asarray(r, dtype=float)
    columns = [
        _QUATERNIONS.mul(_QUATERNIONS.mul(q, basis), r) for basis in np.eye(4)
    ]
    return np.column_stack(columns)


def direct_sum(mat1, mat2) -> np.ndarray:
    """The block-diagonal direct sum of two square matrices."""
    a = np.asarray(mat1, dtype=float)
    b = np.asarray(mat2, dtype=float)
    n1, n2 = a.shape[0], b.shape[0]
    result = np.zeros((n1 + n2, n1 + n2))
    result[:n1, :n1] = a
    result[n1:, n1:] = b
    return result