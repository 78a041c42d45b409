import numpy as np


class InvalidGeometryError(ValueError):
    """Raised when grid, box or circle data cannot describe a solvable problem.

    Examples are a grid with ``nx <= 0`` or ``ny <= 0``, degenerate bounds
    (``x_max <= x_min``), non-finite bounds, or a circle with a negative
    radius. The error is raised at construction so no partial assembly or
    solve is ever attempted.
    """


class PropertiesFormatError(ValueError):
    """Raised when a properties file cannot be parsed into a geometry."""


class FactorizationError(np.linalg.LinAlgError):
    """Raised when the sparse system cannot be factored or solved."""


class NotPositiveDefiniteError(FactorizationError):
    """Raised when the assembled matrix is not symmetric positive-definite.

    Notes
    -----
    For a well-formed geometry the 5-point matrix is symmetric
    positive-definite by construction. Seeing this error means the
    coefficient list was built by hand or a node ended up disconnected.
    """
