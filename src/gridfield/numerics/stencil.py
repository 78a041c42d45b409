"""
numerics/stencil.py
Responsibility: the 5-point Laplacian stencil and how one stencil term lands
in the linear system.

    4 u(i,j) - u(i-1,j) - u(i+1,j) - u(i,j-1) - u(i,j+1) = 0

A term whose point is a free unknown becomes a matrix entry; a term whose
point has a known (Dirichlet) value is moved to the right-hand side.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .classify import PointKind, classify_point
from .types import LinearSystem

if TYPE_CHECKING:
    from ..geometry import Geometry

__all__ = ["FIVE_POINT_STENCIL", "insert_coefficient"]

# (di, dj, weight) in application order: left, right, up, down, self.
# Any order gives the same matrix; keeping it fixed keeps coefficient lists
# reproducible.
FIVE_POINT_STENCIL: tuple[tuple[int, int, float], ...] = (
    (-1, 0, -1.0),
    (1, 0, -1.0),
    (0, -1, -1.0),
    (0, 1, -1.0),
    (0, 0, 4.0),
)


def insert_coefficient(
    system: LinearSystem,
    geometry: Geometry,
    node_id: int,
    ni: int,
    nj: int,
    weight: float,
) -> None:
    """Add the stencil term ``weight * u(ni, nj)`` to equation ``node_id``."""
    point = classify_point(geometry, ni, nj)
    if point.kind is PointKind.INTERIOR:
        system.coefficients.append(node_id, geometry.index.flatten(ni, nj), weight)
    else:
        system.rhs[node_id] -= weight * point.known_value(geometry)
