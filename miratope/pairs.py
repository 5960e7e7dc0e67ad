"""Iteration over all pairs drawn from two sequences."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator
from typing import Any


class Pair:
    """Two sequences whose pairs are visited with the first index varying fastest.

    If no second sequence is given, pairs are drawn from the first one twice.
    """

    def __init__(self, first: Iterable[Any], second: Iterable[Any] | None = None) -> None:
        self.first = list(first)
        self.second = self.first if second is None else list(second)

    def _pairs(self) -> Iterator[tuple[Any, Any]]:
        for b in self.second:
            for a in self.first:
                yield a, b

    def map(self, f: Callable[[Any, Any], Any]) -> Iterator[Any]:
        """Applies a function to every pair."""
        for a, b in self._pairs():
            yield f(a, b)

    def filter_map(self, f: Callable[[Any, Any], Any]) -> Iterator[Any]:
        """Applies a function to every pair, skipping results that are None."""
        for a, b in self._pairs():
            result = f(a, b)
            if result is not None:
                yield result

    def cloned(self) -> Iterator[tuple[Any, Any]]:
        """Yields copies of every pair as tuples."""
        return self.map(lambda a, b: (copy.copy(a), copy.copy(b)))