# src/gridfield/numerics/indexing.py
"""
The one mapping between grid coordinates and unknown numbers.

Matrix rows/columns, right-hand-side positions and the reshaped output field
all go through :class:`UnknownIndex`; nothing else in the package spells out
``i + j*nx``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import NDArray

__all__ = ["UnknownIndex"]


@dataclass(frozen=True, slots=True)
class UnknownIndex:
    nx: int
    ny: int

    @property
    def size(self) -> int:
        return self.nx * self.ny

    def contains(self, i: int, j: int) -> bool:
        return 0 <= i < self.nx and 0 <= j < self.ny

    def flatten(self, i: int, j: int) -> int:
        """Unknown number of node ``(i, j)``."""
        if not self.contains(i, j):
            raise IndexError(f"node ({i}, {j}) outside {self.nx}x{self.ny} grid")
        return i + j * self.nx

    def unflatten(self, node_id: int) -> tuple[int, int]:
        """Inverse of :meth:`flatten`: return ``(i, j)``."""
        if not (0 <= node_id < self.size):
            raise IndexError(f"unknown {node_id} outside [0, {self.size})")
        j, i = divmod(int(node_id), self.nx)
        return i, j

    def to_field(self, vector: NDArray[np.floating]) -> NDArray[np.floating]:
        """Reshape a flat solution into ``F`` with ``F[j, i] == vector[flatten(i, j)]``.

        Row-major (C order) reshape to ``(ny, nx)`` puts element ``i + j*nx`` at
        ``[j, i]``, which is exactly :meth:`flatten`.
        """
        v = np.asarray(vector, dtype=float)
        if v.shape != (self.size,):
            raise ValueError(f"vector must have shape {(self.size,)} got {v.shape}")
        return cast(NDArray[np.floating], v.reshape((self.ny, self.nx), order="C").copy())

    def from_field(self, field: NDArray[np.floating]) -> NDArray[np.floating]:
        """Flatten a ``(ny, nx)`` field back into unknown order."""
        f = np.asarray(field, dtype=float)
        if f.shape != (self.ny, self.nx):
            raise ValueError(f"field must have shape {(self.ny, self.nx)} got {f.shape}")
        return cast(NDArray[np.floating], f.reshape(self.size, order="C").copy())
