# src/gridfield/numerics/classify.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..geometry import BoxBoundary, Geometry

__all__ = [
    "PointKind",
    "PointClass",
    "INTERIOR",
    "box_value",
    "circle_at",
    "classify_point",
]


class PointKind(str, Enum):
    INTERIOR = "interior"
    OUTSIDE_LEFT = "outside_left"  # i == -1
    OUTSIDE_RIGHT = "outside_right"  # i == nx
    OUTSIDE_TOP = "outside_top"  # j == -1
    OUTSIDE_BOTTOM = "outside_bottom"  # j == ny
    INSIDE_CIRCLE = "inside_circle"

    @property
    def is_outside(self) -> bool:
        return self in _OUTSIDE


_OUTSIDE = frozenset(
    {
        PointKind.OUTSIDE_LEFT,
        PointKind.OUTSIDE_RIGHT,
        PointKind.OUTSIDE_TOP,
        PointKind.OUTSIDE_BOTTOM,
    }
)


@dataclass(frozen=True, slots=True)
class PointClass:
    kind: PointKind
    circle: int | None = None  # set only for INSIDE_CIRCLE

    def known_value(self, geometry: Geometry) -> float:
        """Dirichlet value carried by a non-interior point."""
        if self.kind is PointKind.INSIDE_CIRCLE:
            assert self.circle is not None
            return geometry.circles[self.circle].value
        if self.kind.is_outside:
            return box_value(geometry.box, self.kind)
        raise ValueError("interior points carry no known value")


INTERIOR = PointClass(PointKind.INTERIOR)

_OUTSIDE_CLASSES = {k: PointClass(k) for k in _OUTSIDE}


def box_value(box: BoxBoundary, kind: PointKind) -> float:
    if kind is PointKind.OUTSIDE_LEFT:
        return box.left
    if kind is PointKind.OUTSIDE_RIGHT:
        return box.right
    if kind is PointKind.OUTSIDE_TOP:
        return box.top
    if kind is PointKind.OUTSIDE_BOTTOM:
        return box.bottom
    raise ValueError(f"{kind} is not a box edge")


def circle_at(geometry: Geometry, i: int, j: int) -> int | None:
    """Index of the first circle containing in-grid node ``(i, j)``, else None."""
    grid = geometry.grid
    if not grid.index.contains(i, j):
        return None
    x = grid.x_of(i)
    y = grid.y_of(j)
    for k, c in enumerate(geometry.circles):
        if c.contains(x, y):
            return k
    return None


def classify_point(geometry: Geometry, i: int, j: int) -> PointClass:
    """Classify a node or stencil neighbour.

    Box edges are checked first, in the order left, right, top, bottom; only
    coordinates inside ``[0, nx) x [0, ny)`` are ever tested against circles,
    so a circle reaching past the box never captures an edge neighbour.
    """
    nx = geometry.grid.nx
    ny = geometry.grid.ny
    # stencil neighbours are at most one step outside and never diagonal
    assert -1 <= i <= nx and -1 <= j <= ny, f"({i}, {j}) not a stencil neighbour"
    assert (0 <= i < nx) or (0 <= j < ny), f"({i}, {j}) is a corner"

    if i == -1:
        return _OUTSIDE_CLASSES[PointKind.OUTSIDE_LEFT]
    if i == nx:
        return _OUTSIDE_CLASSES[PointKind.OUTSIDE_RIGHT]
    if j == -1:
        return _OUTSIDE_CLASSES[PointKind.OUTSIDE_TOP]
    if j == ny:
        return _OUTSIDE_CLASSES[PointKind.OUTSIDE_BOTTOM]

    k = circle_at(geometry, i, j)
    if k is not None:
        return PointClass(PointKind.INSIDE_CIRCLE, circle=k)
    return INTERIOR
