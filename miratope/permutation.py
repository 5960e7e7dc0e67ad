"""Permutations and the permutation representation of a group."""

from __future__ import annotations

import bisect
import functools
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from miratope.group_item import GroupItemOps


@functools.total_ordering
class Permutation:
    """A permutation of ``0..n``, mapping index ``i`` to ``self[i]``.

    Permutations are ordered lexicographically.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Iterable[int]) -> None:
        entries = [int(i) for i in data]
        if sorted(entries) != list(range(len(entries))):
            raise ValueError(f"not a permutation: {entries}")
        self._data = entries

    @classmethod
    def identity(cls, n: int) -> Permutation:
        return cls(range(n))

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> int:
        return self._data[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"Permutation({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._data == other._data

    def __lt__(self, other: Permutation) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self._data < other._data

    def swap(self, i: int, j: int) -> None:
        """Swaps two entries in place."""
        self._data[i], self._data[j] = self._data[j], self._data[i]

    def __mul__(self, other: Permutation) -> Permutation:
        """The composition sending ``i`` to ``other[self[i]]``."""
        if not isinstance(other, Permutation):
            return NotImplemented
        return Permutation(other[i] for i in self._data)

    def inverse(self) -> Permutation:
        inv = [0] * len(self._data)
        for i, j in enumerate(self._data):
            inv[j] = i
        return Permutation(inv)


@dataclass(frozen=True)
class PermutationOps(GroupItemOps):
    """Permutations of a fixed length under composition."""

    n: int

    def identity(self) -> Permutation:
        return Permutation.identity(self.n)

    def inverse(self, x: Permutation) -> Permutation:
        return x.inverse()

    def mul(self, a: Permutation, b: Permutation) -> Permutation:
        return a * b

    def key(self, x: Permutation) -> Permutation:
        return x


class PermutationIter:
    """Yields, for each group element ``a``, the permutation induced by ``b ↦ a·b``."""

    def __init__(self, elements: Iterable[Any], ops: GroupItemOps) -> None:
        self.elements = list(elements)
        self.ops = ops
        keys = [ops.key(el) for el in self.elements]
        order = sorted(range(len(keys)), key=lambda i: keys[i])
        self._sorted_keys = [keys[i] for i in order]
        self._sorted_indices = order

    def _index(self, el: Any) -> int:
        k = self.ops.key(el)
        pos = bisect.bisect_left(self._sorted_keys, k)
        if pos < len(self._sorted_keys) and self._sorted_keys[pos] == k:
            return self._sorted_indices[pos]
        raise ValueError("the elements are not closed under multiplication")

    def __iter__(self) -> Iterator[Permutation]:
        for a in self.elements:
            yield Permutation(self._index(self.ops.mul(a, b)) for b in self.elements)

    def __len__(self) -> int:
        return len(self.elements)


def _compose_all(perms: Sequence[Permutation]) -> Permutation:
    return functools.reduce(lambda p, q: p * q, perms)