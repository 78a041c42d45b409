# src/gridfield/numerics/__init__.py
"""
Numerical building blocks (advanced API).

Top-level package `gridfield` exposes the everyday solve API.
This subpackage exposes the stencil assembly and sparse solve pieces.
"""

from .assembly import build_linear_system
from .classify import PointClass, PointKind, circle_at, classify_point
from .indexing import UnknownIndex
from .sparse import (
    SPDFactor,
    factor_spd,
    factor_spd_banded,
    factor_spd_splu,
    is_symmetric,
    residual_norm,
    solve_spd,
    system_matrix,
    triplets_to_csr,
)
from .stencil import FIVE_POINT_STENCIL, insert_coefficient
from .types import CoefficientEntry, CoefficientList, LinearSystem

__all__ = [
    # Indexing
    "UnknownIndex",
    # Classification
    "PointKind",
    "PointClass",
    "circle_at",
    "classify_point",
    # Stencil / assembly
    "FIVE_POINT_STENCIL",
    "insert_coefficient",
    "CoefficientEntry",
    "CoefficientList",
    "LinearSystem",
    "build_linear_system",
    # Sparse solve
    "SPDFactor",
    "triplets_to_csr",
    "system_matrix",
    "is_symmetric",
    "factor_spd",
    "factor_spd_splu",
    "factor_spd_banded",
    "solve_spd",
    "residual_norm",
]
