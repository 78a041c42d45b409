# src/gridfield/numerics/sparse.py
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

import numpy as np
import scipy.sparse as sp
from numpy.typing import NDArray
from scipy.linalg import cho_solve_banded, cholesky_banded
from scipy.sparse.linalg import splu

from ..config import SolverBackend, SolverConfig
from ..exceptions import FactorizationError, NotPositiveDefiniteError
from .types import CoefficientList, LinearSystem

__all__ = [
    "SPDFactor",
    "triplets_to_csr",
    "system_matrix",
    "is_symmetric",
    "upper_bandwidth",
    "factor_spd_splu",
    "factor_spd_banded",
    "factor_spd",
    "solve_spd",
    "residual_norm",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SPDFactor:
    """A factored symmetric positive-definite matrix, reusable for many RHS."""

    n: int
    backend: SolverBackend
    _solve: Callable[[NDArray[np.floating]], NDArray[np.floating]]

    def solve(self, rhs: NDArray[np.floating]) -> NDArray[np.floating]:
        b = np.asarray(rhs, dtype=float)
        if b.shape != (self.n,):
            raise ValueError(f"rhs must have shape {(self.n,)} got {b.shape}")
        return cast(NDArray[np.floating], np.asarray(self._solve(b), dtype=float))


def triplets_to_csr(coefficients: CoefficientList, n: int) -> sp.csr_matrix:
    """
    Build an ``n x n`` CSR matrix from a coefficient list.

    Entries that share ``(row, col)`` are summed, never overwritten.
    """
    rows, cols, vals = coefficients.arrays()
    if rows.size and (
        rows.min() < 0 or cols.min() < 0 or rows.max() >= n or cols.max() >= n
    ):
        raise ValueError(f"coefficient indices must lie in [0, {n})")
    A = sp.coo_matrix((vals, (rows, cols)), shape=(n, n)).tocsr()
    A.sum_duplicates()
    return A


def system_matrix(system: LinearSystem) -> sp.csr_matrix:
    return triplets_to_csr(system.coefficients, system.n)


def is_symmetric(A: sp.spmatrix, tol: float = 1e-12) -> bool:
    diff = (A - A.T).tocoo()
    if diff.nnz == 0:
        return True
    scale = max(1.0, float(abs(A).max()))
    return bool(np.max(np.abs(diff.data)) <= tol * scale)


def upper_bandwidth(A: sp.spmatrix) -> int:
    coo = A.tocoo()
    if coo.nnz == 0:
        return 0
    return int(max(0, np.max(coo.col - coo.row)))


def factor_spd_splu(A: sp.spmatrix) -> SPDFactor:
    """
    Cholesky-equivalent factorization through SuperLU.

    With ``diag_pivot_thresh=0`` in symmetric mode SuperLU pivots on the
    diagonal whenever it is nonzero, i.e. it computes ``L D L^T`` with
    ``D = diag(U)``. The matrix is positive-definite iff that happened for
    every column (``perm_r == perm_c``) and every pivot is > 0.

    Raises NotPositiveDefiniteError otherwise.
    """
    n = int(A.shape[0])
    A_csc = sp.csc_matrix(A, dtype=float)
    try:
        lu = splu(
            A_csc,
            permc_spec="MMD_AT_PLUS_A",
            diag_pivot_thresh=0.0,
            options={"SymmetricMode": True},
        )
    except RuntimeError as e:  # SuperLU: "Factor is exactly singular"
        raise NotPositiveDefiniteError(f"sparse factorization failed: {e}") from e

    if not np.array_equal(lu.perm_r, lu.perm_c):
        raise NotPositiveDefiniteError("off-diagonal pivoting was required")
    pivots = lu.U.diagonal()
    if not np.all(pivots > 0.0):
        bad = int(np.argmin(pivots))
        raise NotPositiveDefiniteError(
            f"non-positive pivot {float(pivots[bad]):.3e} at step {bad}"
        )

    return SPDFactor(n=n, backend=SolverBackend.SPLU, _solve=lu.solve)


def factor_spd_banded(A: sp.spmatrix) -> SPDFactor:
    """
    Banded Cholesky via SciPy's LAPACK wrappers.

    Row-major numbering makes the 5-point matrix banded with half-bandwidth
    ``nx``; the upper band is packed into LAPACK storage
    ``ab[u + i - j, j] = A[i, j]``. Memory is ``(u+1)*n`` so prefer
    :func:`factor_spd_splu` for large grids.
    """
    n = int(A.shape[0])
    coo = sp.coo_matrix(A, dtype=float)
    coo.sum_duplicates()
    u = upper_bandwidth(coo)

    upper = coo.row <= coo.col
    rows = coo.row[upper]
    cols = coo.col[upper]

    ab = np.zeros((u + 1, n), dtype=float)
    ab[u + rows - cols, cols] = coo.data[upper]

    try:
        cb = cholesky_banded(ab, lower=False, check_finite=False)
    except np.linalg.LinAlgError as e:
        raise NotPositiveDefiniteError(f"banded Cholesky failed: {e}") from e

    def _solve(b: NDArray[np.floating]) -> NDArray[np.floating]:
        return cast(
            NDArray[np.floating], cho_solve_banded((cb, False), b, check_finite=False)
        )

    return SPDFactor(n=n, backend=SolverBackend.BANDED, _solve=_solve)


_FACTORIZERS: dict[SolverBackend, Callable[[sp.spmatrix], SPDFactor]] = {
    SolverBackend.SPLU: factor_spd_splu,
    SolverBackend.BANDED: factor_spd_banded,
}


def factor_spd(A: sp.spmatrix, *, config: SolverConfig | None = None) -> SPDFactor:
    cfg = config if config is not None else SolverConfig()

    if A.shape[0] != A.shape[1]:
        raise ValueError(f"matrix must be square, got shape {A.shape}")
    if A.shape[0] == 0:
        raise ValueError("matrix is empty")
    if cfg.check_symmetry and not is_symmetric(A, tol=cfg.symmetry_tol):
        raise NotPositiveDefiniteError("matrix is not symmetric")

    return _FACTORIZERS[cfg.backend](A)


def solve_spd(
    A: sp.spmatrix,
    rhs: NDArray[np.floating],
    *,
    config: SolverConfig | None = None,
) -> NDArray[np.floating]:
    """
    Factor ``A`` and solve ``A x = rhs``.

    Notes:
    - There is no retry: a deterministic system that fails once fails again.
    - Raises NotPositiveDefiniteError from the factorization and
      FactorizationError when the solution contains NaN/inf.
    """
    cfg = config if config is not None else SolverConfig()
    b = np.asarray(rhs, dtype=float)
    if b.shape != (A.shape[0],):
        raise ValueError(f"rhs must have shape {(A.shape[0],)} got {b.shape}")

    factor = factor_spd(A, config=cfg)
    x = factor.solve(b)

    if cfg.check_finite and not np.all(np.isfinite(x)):
        n_bad = int(np.count_nonzero(~np.isfinite(x)))
        raise FactorizationError(f"solution has {n_bad} non-finite values")
    logger.debug("Solved %d unknowns with backend=%s", factor.n, factor.backend.value)
    return x


def residual_norm(
    A: sp.spmatrix, x: NDArray[np.floating], rhs: NDArray[np.floating]
) -> float:
    """Max-norm of ``A x - rhs``."""
    r = A @ np.asarray(x, dtype=float) - np.asarray(rhs, dtype=float)
    return float(np.max(np.abs(r))) if r.size else 0.0
