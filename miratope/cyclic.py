"""Iteration over a cyclic group."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from miratope.group_item import GroupItemOps, ScalarOps


class Cyclic:
    """The cyclic group generated by a single element.

    Yields ``gen, gen², ...`` up to and including the identity.
    """

    def __init__(self, gen: Any, ops: GroupItemOps | None = None) -> None:
        self.gen = gen
        self.ops = ops if ops is not None else ScalarOps()

    def __iter__(self) -> Iterator[Any]:
        cur = self.gen
        while True:
            yield cur
            cur = self.ops.mul(cur, self.gen)
            if self.ops.eq(cur, self.gen):
                return