from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass

import pandas as pd

from ..config import SolverBackend, SolverConfig
from ..geometry import BoxBoundary, Circle, Geometry
from ..numerics.assembly import build_linear_system
from ..numerics.sparse import residual_norm, system_matrix
from ..solver import solve_field

# ----------------------------
# Results dataclass
# ----------------------------


@dataclass(frozen=True, slots=True)
class RefinementRun:
    # Identifiers
    n: int
    backend: str

    # sizes
    n_unknowns: int
    n_entries: int

    # outputs
    build_ms: float
    solve_ms: float
    residual: float  # max |A x - b|
    center_value: float  # field at (nx//2, ny//2)


def _coerce_backend(b: str | SolverBackend) -> SolverBackend:
    try:
        return SolverBackend(b)
    except ValueError as e:
        raise ValueError(
            f"Unknown backend='{b}'. Expected one of: {[x.value for x in SolverBackend]}"
        ) from e


def run_one(geometry: Geometry, *, backend: str | SolverBackend) -> RefinementRun:
    cfg = SolverConfig(backend=_coerce_backend(backend))
    sol = solve_field(geometry, config=cfg)

    system = build_linear_system(geometry)
    res = residual_norm(system_matrix(system), sol.vector, system.rhs)

    grid = geometry.grid
    return RefinementRun(
        n=grid.nx,
        backend=cfg.backend.value,
        n_unknowns=sol.n_unknowns,
        n_entries=sol.n_entries,
        build_ms=sol.build_ms,
        solve_ms=sol.solve_ms,
        residual=res,
        center_value=sol.value_at(grid.nx // 2, grid.ny // 2),
    )


def run_refinement_sweep(
    *,
    bounds: tuple[float, float, float, float],
    box: BoxBoundary,
    circles: Iterable[Circle] = (),
    sizes: Sequence[int] = (8, 16, 32, 64),
    backends: Sequence[str | SolverBackend] = (SolverBackend.SPLU,),
) -> pd.DataFrame:
    """Solve the same physical problem on ``n x n`` grids for each ``n``.

    Returns one row per (n, backend) with timings, residual and the value at
    the centre node, which should settle as ``n`` grows.
    """
    if not sizes:
        raise ValueError("sizes must not be empty")
    circ = tuple(circles)

    rows: list[dict] = []
    for n in sizes:
        geometry = Geometry.from_parts(nx=n, ny=n, bounds=bounds, box=box, circles=circ)
        for b in backends:
            rows.append(asdict(run_one(geometry, backend=b)))

    return pd.DataFrame(rows)
