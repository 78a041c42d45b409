"""
gridfield

Finite-difference solver for the 2D Laplace equation on a rectangular grid
with Dirichlet box edges and circular inclusions.

The main user-facing objects are exposed at the top level, so you can write,
for example:

    from gridfield import Geometry, solve_field
"""

from .config import OutputConfig, SolverBackend, SolverConfig
from .exceptions import (
    FactorizationError,
    InvalidGeometryError,
    NotPositiveDefiniteError,
    PropertiesFormatError,
)
from .geometry import BoxBoundary, Circle, Geometry, Grid
from .io import read_properties, write_field
from .logging_config import setup_logging
from .solver import FieldSolution, FieldSolver, solve_field

__all__ = [
    # Geometry
    "Grid",
    "BoxBoundary",
    "Circle",
    "Geometry",
    # Config
    "SolverBackend",
    "SolverConfig",
    "OutputConfig",
    # Solve
    "FieldSolution",
    "FieldSolver",
    "solve_field",
    # I/O
    "read_properties",
    "write_field",
    "setup_logging",
    # Errors
    "InvalidGeometryError",
    "PropertiesFormatError",
    "FactorizationError",
    "NotPositiveDefiniteError",
]
