# src/gridfield/geometry.py
from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidGeometryError
from .numerics.indexing import UnknownIndex

__all__ = [
    "Grid",
    "BoxBoundary",
    "Circle",
    "Geometry",
]


def _require_finite(**values: float) -> None:
    for name, v in values.items():
        if not math.isfinite(v):
            raise InvalidGeometryError(f"{name} must be finite, got {v!r}")


def _as_count(name: str, v) -> int:
    if isinstance(v, bool):
        raise InvalidGeometryError(f"{name} must be an integer, got {v!r}")
    try:
        n = int(v)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidGeometryError(f"{name} must be an integer, got {v!r}") from e
    if n != v:
        raise InvalidGeometryError(f"{name} must be an integer, got {v!r}")
    if n <= 0:
        raise InvalidGeometryError(f"{name} must be > 0, got {n}")
    return n


@dataclass(frozen=True, slots=True)
class Grid:
    """Uniform node lattice over ``[x_min, x_max) x [y_min, y_max)``.

    Node ``(i, j)`` sits at ``x_min + i*dx, y_min + j*dy`` with
    ``dx = (x_max - x_min)/nx`` and ``dy = (y_max - y_min)/ny``. The upper
    bounds themselves are not nodes; they are where the right/bottom box
    values live.
    """

    nx: int
    ny: int
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "nx", _as_count("nx", self.nx))
        object.__setattr__(self, "ny", _as_count("ny", self.ny))
        for name in ("x_min", "x_max", "y_min", "y_max"):
            object.__setattr__(self, name, float(getattr(self, name)))
        _require_finite(
            x_min=self.x_min, x_max=self.x_max, y_min=self.y_min, y_max=self.y_max
        )
        if not (self.x_min < self.x_max):
            raise InvalidGeometryError("Need x_min < x_max")
        if not (self.y_min < self.y_max):
            raise InvalidGeometryError("Need y_min < y_max")

    @property
    def dx(self) -> float:
        return (self.x_max - self.x_min) / self.nx

    @property
    def dy(self) -> float:
        return (self.y_max - self.y_min) / self.ny

    @property
    def n_unknowns(self) -> int:
        return self.nx * self.ny

    @property
    def index(self) -> UnknownIndex:
        return UnknownIndex(nx=self.nx, ny=self.ny)

    def x_of(self, i: int) -> float:
        return self.x_min + i * self.dx

    def y_of(self, j: int) -> float:
        return self.y_min + j * self.dy

    def x_nodes(self) -> NDArray[np.floating]:
        return self.x_min + np.arange(self.nx, dtype=float) * self.dx

    def y_nodes(self) -> NDArray[np.floating]:
        return self.y_min + np.arange(self.ny, dtype=float) * self.dy


@dataclass(frozen=True, slots=True)
class BoxBoundary:
    """Dirichlet values just outside the four grid edges.

    ``top`` applies at ``j == -1``, ``bottom`` at ``j == ny``, ``left`` at
    ``i == -1`` and ``right`` at ``i == nx``.
    """

    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    def __post_init__(self) -> None:
        for name in ("top", "bottom", "left", "right"):
            object.__setattr__(self, name, float(getattr(self, name)))


@dataclass(frozen=True, slots=True)
class Circle:
    center_x: float
    center_y: float
    radius: float
    value: float

    def __post_init__(self) -> None:
        for name in ("center_x", "center_y", "radius", "value"):
            object.__setattr__(self, name, float(getattr(self, name)))
        _require_finite(
            center_x=self.center_x, center_y=self.center_y, radius=self.radius
        )
        # radius 0 is a legal single-point condition
        if self.radius < 0.0:
            raise InvalidGeometryError(f"radius must be >= 0, got {self.radius}")

    def contains(self, x: float, y: float) -> bool:
        ddx = x - self.center_x
        ddy = y - self.center_y
        return ddx * ddx + ddy * ddy <= self.radius * self.radius


@dataclass(frozen=True, slots=True)
class Geometry:
    """Everything the assembler needs: grid, box values and ordered circles.

    Circle order matters: where circles overlap, the first one in the
    sequence wins.
    """

    grid: Grid
    box: BoxBoundary = field(default_factory=BoxBoundary)
    circles: tuple[Circle, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.grid, Grid):
            raise InvalidGeometryError("grid must be a Grid")
        if not isinstance(self.box, BoxBoundary):
            raise InvalidGeometryError("box must be a BoxBoundary")
        circles = tuple(self.circles)
        for k, c in enumerate(circles):
            if not isinstance(c, Circle):
                raise InvalidGeometryError(f"circles[{k}] must be a Circle")
        object.__setattr__(self, "circles", circles)

    @classmethod
    def from_parts(
        cls,
        *,
        nx: int,
        ny: int,
        bounds: tuple[float, float, float, float],
        box: BoxBoundary | tuple[float, float, float, float] = BoxBoundary(),
        circles: Iterable[Circle | tuple[float, float, float, float]] = (),
    ) -> Geometry:
        """Build from plain numbers; ``bounds`` is ``(x_min, x_max, y_min, y_max)``
        and ``box`` may be ``(top, bottom, left, right)``."""
        x_min, x_max, y_min, y_max = bounds
        grid = Grid(nx=nx, ny=ny, x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)
        if not isinstance(box, BoxBoundary):
            box = BoxBoundary(*box)
        circ = tuple(c if isinstance(c, Circle) else Circle(*c) for c in circles)
        return cls(grid=grid, box=box, circles=circ)

    @property
    def index(self) -> UnknownIndex:
        return self.grid.index

    @property
    def n_unknowns(self) -> int:
        return self.grid.n_unknowns
