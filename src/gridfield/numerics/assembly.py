from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .classify import circle_at
from .stencil import FIVE_POINT_STENCIL, insert_coefficient
from .types import LinearSystem

if TYPE_CHECKING:
    from ..geometry import Geometry

logger = logging.getLogger(__name__)


def build_linear_system(geometry: Geometry) -> LinearSystem:
    """Assemble the 5-point system for every node of the grid.

    Nodes are visited row by row (``j`` outer, ``i`` inner). A node lying in
    a circle gets the identity equation ``u = value`` and no stencil; every
    other node gets the full stencil against its own unknown number.
    """
    grid = geometry.grid
    index = geometry.index
    nx, ny = grid.nx, grid.ny
    if nx * ny <= 0:
        raise ValueError("grid has no nodes")

    system = LinearSystem.empty(index.size)
    n_fixed = 0

    for j in range(ny):
        for i in range(nx):
            node_id = index.flatten(i, j)

            k = circle_at(geometry, i, j) if geometry.circles else None
            if k is not None:
                system.coefficients.append(node_id, node_id, 1.0)
                system.rhs[node_id] = geometry.circles[k].value
                n_fixed += 1
                continue

            for di, dj, w in FIVE_POINT_STENCIL:
                insert_coefficient(system, geometry, node_id, i + di, j + dj, w)

    logger.debug(
        "Assembled %dx%d system: %d entries, %d nodes fixed by circles",
        system.n,
        system.n,
        system.n_entries,
        n_fixed,
    )
    return system
