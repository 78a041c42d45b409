"""Pytest helpers for the gridfield library."""

from __future__ import annotations

import numpy as np
import pytest

from gridfield.geometry import BoxBoundary, Circle, Geometry


@pytest.fixture
def make_geometry():
    """Factory fixture: Geometry from plain numbers."""

    def _make(
        *,
        nx: int = 3,
        ny: int = 3,
        bounds: tuple[float, float, float, float] = (0.0, 3.0, 0.0, 3.0),
        box: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0),
        circles: tuple[tuple[float, float, float, float], ...] = (),
    ) -> Geometry:
        return Geometry.from_parts(
            nx=nx,
            ny=ny,
            bounds=bounds,
            box=BoxBoundary(*box),
            circles=tuple(Circle(*c) for c in circles),
        )

    return _make


@pytest.fixture
def plates_geometry(make_geometry) -> Geometry:
    """3x3 grid on [0,3]^2 with top=1 and every other edge at 0."""
    return make_geometry(box=(1.0, 0.0, 0.0, 0.0))


@pytest.fixture
def dense_reference():
    """Independent dense 5-point solve (no circles), for cross-checking.

    Built with Kronecker products instead of the assembler so an index mix-up
    in one does not hide in the other.
    """

    def _solve(geometry: Geometry) -> np.ndarray:
        nx, ny = geometry.grid.nx, geometry.grid.ny
        box = geometry.box

        def T(n: int) -> np.ndarray:
            return 2.0 * np.eye(n) - np.eye(n, k=1) - np.eye(n, k=-1)

        A = np.kron(np.eye(ny), T(nx)) + np.kron(T(ny), np.eye(nx))
        b = np.zeros((ny, nx))
        b[0, :] += box.top
        b[-1, :] += box.bottom
        b[:, 0] += box.left
        b[:, -1] += box.right
        u = np.linalg.solve(A, b.reshape(-1))
        return u.reshape(ny, nx)

    return _solve
