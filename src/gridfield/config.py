from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SolverBackend(str, Enum):
    SPLU = "splu"  # sparse LU in symmetric mode, checked to be a Cholesky
    BANDED = "banded"  # dense-band Cholesky (scipy.linalg.cholesky_banded)


@dataclass(frozen=True, slots=True)
class SolverConfig:
    backend: SolverBackend = SolverBackend.SPLU
    check_symmetry: bool = True
    symmetry_tol: float = 1e-12
    check_finite: bool = True

    def __post_init__(self) -> None:
        try:
            backend = SolverBackend(self.backend)
        except ValueError as e:
            raise ValueError(
                f"Unknown backend={self.backend!r}. Expected one of: "
                f"{[b.value for b in SolverBackend]}"
            ) from e
        # allow plain strings; frozen so go through object.__setattr__
        object.__setattr__(self, "backend", backend)
        if self.symmetry_tol < 0:
            raise ValueError("symmetry_tol must be >= 0")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    fmt: str = "%.6g"
    delimiter: str = " "

    def __post_init__(self) -> None:
        if "%" not in self.fmt:
            raise ValueError("fmt must be a printf-style format, e.g. '%.6g'")
