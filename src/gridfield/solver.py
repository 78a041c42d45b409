from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from time import perf_counter
from typing import cast

from .config import SolverConfig
from .geometry import BoxBoundary, Circle, Geometry, Grid
from .numerics.assembly import build_linear_system
from .numerics.sparse import solve_spd, system_matrix
from .typing import FloatArray

__all__ = ["FieldSolution", "FieldSolver", "solve_field"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldSolution:
    geometry: Geometry
    field: FloatArray  # (ny, nx), field[j, i]
    backend: str
    n_entries: int
    build_ms: float
    solve_ms: float

    @property
    def x(self) -> FloatArray:
        return self.geometry.grid.x_nodes()

    @property
    def y(self) -> FloatArray:
        return self.geometry.grid.y_nodes()

    @property
    def n_unknowns(self) -> int:
        return self.geometry.n_unknowns

    @property
    def vector(self) -> FloatArray:
        """Solution in unknown order (``i + j*nx``)."""
        return self.geometry.index.from_field(self.field)

    def value_at(self, i: int, j: int) -> float:
        if not self.geometry.index.contains(i, j):
            raise IndexError(f"node ({i}, {j}) outside grid")
        return float(self.field[j, i])


def solve_field(
    geometry: Geometry,
    *,
    config: SolverConfig | None = None,
) -> FieldSolution:
    """Assemble, factor and solve the Laplace problem described by ``geometry``.

    Either a complete field is returned or an exception propagates; there are
    no partial results.
    """
    cfg = config if config is not None else SolverConfig()

    t0 = perf_counter()
    system = build_linear_system(geometry)
    A = system_matrix(system)
    t1 = perf_counter()
    logger.info(
        "The problem has been built: %d unknowns, %d coefficients (%d nonzeros).",
        system.n,
        system.n_entries,
        A.nnz,
    )

    x = solve_spd(A, system.rhs, config=cfg)
    t2 = perf_counter()

    field = geometry.index.to_field(x)
    grid = geometry.grid
    logger.info(
        "For n of %dx%d, the elapsed time is: %.6f s", grid.nx, grid.ny, t2 - t0
    )

    return FieldSolution(
        geometry=geometry,
        field=cast(FloatArray, field),
        backend=cfg.backend.value,
        n_entries=system.n_entries,
        build_ms=1e3 * (t1 - t0),
        solve_ms=1e3 * (t2 - t1),
    )


class FieldSolver:
    """Object form of :func:`solve_field`.

    Inputs are validated at construction, so an invalid grid fails before any
    assembly happens.
    """

    def __init__(
        self,
        grid: Grid,
        box: BoxBoundary,
        circles: Iterable[Circle] = (),
        *,
        config: SolverConfig | None = None,
    ) -> None:
        self.geometry = Geometry(grid=grid, box=box, circles=tuple(circles))
        self.config = config if config is not None else SolverConfig()

    def solve(self) -> FieldSolution:
        return solve_field(self.geometry, config=self.config)
