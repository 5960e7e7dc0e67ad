"""Operations that let values of various types act as elements of a group."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np

from miratope.geometry import MatrixOrd


class GroupItemOps(ABC):
    """The group operations for some type of value.

    ``key`` maps a value to a totally ordered key that is resistant to small
    perturbations, so that values can be looked up in sorted structures.
    """

    @abstractmethod
    def identity(self) -> Any:
        """The multiplicative identity."""

    @abstractmethod
    def inverse(self, x: Any) -> Any:
        """The multiplicative inverse of a value."""

    @abstractmethod
    def mul(self, a: Any, b: Any) -> Any:
        """The product of two values."""

    @abstractmethod
    def key(self, x: Any) -> Any:
        """An ordered key for a value."""

    def eq(self, a: Any, b: Any) -> bool:
        """Whether two values are equal under their keys."""
        return self.key(a) == self.key(b)


@dataclass(frozen=True)
class ScalarOps(GroupItemOps):
    """Real numbers under multiplication, compared exactly."""

    def identity(self) -> float:
        return 1.0

    def inverse(self, x: float) -> float:
        x = float(x)
        if x == 0.0:
            return math.copysign(math.inf, x)
        return 1.0 / x

    def mul(self, a: float, b: float) -> float:
        return float(a) * float(b)

    def key(self, x: float) -> float:
        return float(x)


@dataclass(frozen=True)
class MatrixOps(GroupItemOps):
    """Square matrices of a fixed size under matrix multiplication."""

    dim: int

    def identity(self) -> np.ndarray:
        return np.eye(self.dim)

    def inverse(self, x) -> np.ndarray:
        """The inverse matrix; a singular matrix is returned unchanged."""
        mat = np.array(x, dtype=float)
        try:
            return np.linalg.inv(mat)
        except np.linalg.LinAlgError:
            return mat

    def mul(self, a, b) -> np.ndarray:
        return np.asarray(a, dtype=float) @ np.asarray(b, dtype=float)

    def key(self, x) -> MatrixOrd:
        return MatrixOrd(x)


@dataclass(frozen=True)
class QuaternionOps(GroupItemOps):
    """Quaternions stored as arrays ``[w, i, j, k]`` under the Hamilton product.

    Keys order the vector part first and the scalar part last.
    """

    def identity(self) -> np.ndarray:
        return np.array([1.0, 0.0, 0.0, 0.0])

    def inverse(self, x) -> np.ndarray:
        q = np.asarray(x, dtype=float)
        norm_sq = float(q @ q)
        if norm_sq == 0.0:
            raise ZeroDivisionError("the zero quaternion has no inverse")
        conj = np.array([q[0], -q[1], -q[2], -q[3]])
        return conj / norm_sq

    def mul(self, a, b) -> np.ndarray:
        w1, x1, y1, z1 = (float(c) for c in a)
        w2, x2, y2, z2 = (float(c) for c in b)
        return np.array(
            [
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            ]
        )

    def key(self, x) -> MatrixOrd:
        q = np.asarray(x, dtype=float)
        return MatrixOrd(np.array([q[1], q[2], q[3], q[0]]).reshape(4, 1))