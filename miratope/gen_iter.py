"""Breadth-first enumeration of a group given by a set of generators."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Sequence
from typing import Any

from sortedcontainers import SortedKeyList

from miratope.group_item import GroupItemOps


class _Entry:
    """A group element's key with the number of times it has been found."""

    __slots__ = ("key", "count")

    def __init__(self, key: Any, count: int) -> None:
        self.key = key
        self.count = count


class GenIter:
    """Iterates over the group generated by some elements, in BFS order.

    Every element is found once for each generator. A lookup table keeps the
    elements that may still be found again, and a queue holds those not yet
    multiplied by every generator. The identity is yielded when it is first
    reached as a product, not up front.
    """

    def __init__(self, ops: GroupItemOps, gens: Sequence[Any]) -> None:
        self.ops = ops
        self.gens = list(gens)
        if not self.gens:
            raise ValueError("a generated group needs at least one generator")

        identity = ops.identity()
        self._queue: deque[Any] = deque([identity])
        # The identity is recorded as found zero times, so that it is neither
        # queued nor yielded twice.
        self._elements = SortedKeyList(key=lambda entry: entry.key)
        self._elements.add(_Entry(ops.key(identity), 0))
        self._gen_idx = 0

    def _insert(self, el: Any) -> bool:
        """Records an element; returns whether it should be yielded."""
        key = self.ops.key(el)
        pos = self._elements.bisect_key_left(key)
        if pos < len(self._elements) and self._elements[pos].key == key:
            entry = self._elements[pos]
            value = entry.count
            if value != len(self.gens) - 1:
                entry.count = value + 1
            else:
                del self._elements[pos]
            return value == 0

        self._elements.add(_Entry(key, 1))
        self._queue.append(el)
        return True

    def _next_el_gen(self) -> tuple[Any, Any] | None:
        if not self._queue:
            return None

        gen = self.gens[self._gen_idx]
        self._gen_idx += 1
        if self._gen_idx == len(self.gens):
            self._gen_idx = 0
            el = self._queue.popleft()
        else:
            el = self._queue[0]
        return el, gen

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        while True:
            pair = self._next_el_gen()
            if pair is None:
                raise StopIteration
            el, gen = pair
            new_el = self.ops.mul(el, gen)
            if self._insert(new_el):
                return new_el