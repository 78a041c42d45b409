from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from ..typing import FloatArray, IntArray


class CoefficientEntry(NamedTuple):
    row: int
    col: int
    weight: float


@dataclass(slots=True)
class CoefficientList:
    """Append-only triplet store; repeated ``(row, col)`` pairs are summed later."""

    rows: list[int] = field(default_factory=list)
    cols: list[int] = field(default_factory=list)
    weights: list[float] = field(default_factory=list)

    def append(self, row: int, col: int, weight: float) -> None:
        self.rows.append(int(row))
        self.cols.append(int(col))
        self.weights.append(float(weight))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[CoefficientEntry]:
        for r, c, w in zip(self.rows, self.cols, self.weights, strict=True):
            yield CoefficientEntry(r, c, w)

    def arrays(self) -> tuple[IntArray, IntArray, FloatArray]:
        return (
            np.asarray(self.rows, dtype=np.int64),
            np.asarray(self.cols, dtype=np.int64),
            np.asarray(self.weights, dtype=float),
        )


@dataclass(slots=True)
class LinearSystem:
    """Coefficient list and right-hand side for one solve."""

    n: int
    coefficients: CoefficientList
    rhs: FloatArray

    @classmethod
    def empty(cls, n: int) -> LinearSystem:
        if n <= 0:
            raise ValueError("system size must be > 0")
        return cls(n=n, coefficients=CoefficientList(), rhs=np.zeros(n, dtype=float))

    @property
    def n_entries(self) -> int:
        return len(self.coefficients)
