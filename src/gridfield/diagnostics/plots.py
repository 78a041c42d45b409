from __future__ import annotations

import numpy as np
import pandas as pd

from ..solver import FieldSolution
from ._mpl import get_plt, pretty_ax, require_columns


def plot_field(
    solution: FieldSolution,
    *,
    levels: int = 20,
    show_circles: bool = True,
    cmap: str = "viridis",
    figsize=(6, 5),
):
    """Filled contour of ``solution.field`` in physical coordinates.

    Row ``j`` grows downwards in the grid (``top`` is ``j == -1``), so the
    y axis is inverted to match the file layout.
    """
    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)

    geom = solution.geometry
    X, Y = np.meshgrid(solution.x, solution.y)  # (ny, nx), same as field
    if geom.grid.nx > 1 and geom.grid.ny > 1:
        cs = ax.contourf(X, Y, solution.field, levels=levels, cmap=cmap)
    else:
        cs = ax.pcolormesh(X, Y, solution.field, cmap=cmap, shading="nearest")
    fig.colorbar(cs, ax=ax, label="u")

    if show_circles:
        for c in geom.circles:
            ax.add_patch(
                plt.Circle(
                    (c.center_x, c.center_y), c.radius, fill=False, color="w", lw=1.0
                )
            )

    ax.set_xlim(geom.grid.x_min, geom.grid.x_max)
    ax.set_ylim(geom.grid.y_max, geom.grid.y_min)
    ax.set_aspect("equal")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(f"{geom.grid.nx}x{geom.grid.ny} field ({solution.backend})")
    pretty_ax(ax, grid=False)
    return fig, ax


def plot_refinement(
    df: pd.DataFrame,
    *,
    time_col: str = "solve_ms",
    logy: bool = True,
    figsize=(7, 4),
):
    """Runtime vs number of unknowns, one line per backend."""
    require_columns(df, ["n_unknowns", "backend", time_col])

    plt = get_plt()
    fig, ax = plt.subplots(1, 1, figsize=figsize, constrained_layout=True)

    for backend, g in df.groupby("backend", sort=True):
        g = g.sort_values("n_unknowns")
        ax.plot(
            g["n_unknowns"].to_numpy(),
            g[time_col].astype(float).to_numpy(),
            "o-",
            label=str(backend),
        )

    ax.set_xscale("log")
    if logy:
        ax.set_yscale("log")
    ax.set_xlabel("unknowns")
    ax.set_ylabel(time_col)
    ax.legend()
    pretty_ax(ax)
    return fig, ax
