"""Reading properties files and writing solved fields.

Properties file layout (whitespace separated, ``#`` starts a comment)::

    x_min x_max nx
    y_min y_max ny
    top bottom left right
    cx cy radius value      # zero or more circle records

Line breaks carry no meaning; the file is read as a stream of numbers.
"""

from __future__ import annotations

import io
import logging
import math
from os import PathLike
from pathlib import Path

import numpy as np

from .config import OutputConfig
from .exceptions import PropertiesFormatError
from .geometry import BoxBoundary, Circle, Geometry, Grid
from .typing import FloatArray

__all__ = [
    "parse_properties",
    "read_properties",
    "format_field",
    "write_field",
]

logger = logging.getLogger(__name__)

_HEADER_TOKENS = 10  # 2 grid lines of 3 + 4 box values
_CIRCLE_TOKENS = 4


def _tokens(text: str) -> list[str]:
    out: list[str] = []
    for line in text.splitlines():
        out.extend(line.split("#", 1)[0].split())
    return out


def _to_float(tok: str, what: str) -> float:
    try:
        return float(tok)
    except ValueError as e:
        raise PropertiesFormatError(f"{what}: expected a number, got {tok!r}") from e


def _to_count(tok: str, what: str) -> int:
    v = _to_float(tok, what)
    if not math.isfinite(v) or v != int(v):
        raise PropertiesFormatError(f"{what}: expected an integer, got {tok!r}")
    return int(v)


def parse_properties(text: str) -> Geometry:
    """Parse properties text into a :class:`Geometry`.

    Every complete 4-number record after the header becomes a circle, in file
    order. A trailing incomplete record is an error rather than being dropped.
    """
    toks = _tokens(text)
    if len(toks) < _HEADER_TOKENS:
        raise PropertiesFormatError(
            f"expected at least {_HEADER_TOKENS} numbers in header, got {len(toks)}"
        )

    x_min = _to_float(toks[0], "x_min")
    x_max = _to_float(toks[1], "x_max")
    nx = _to_count(toks[2], "nx")
    y_min = _to_float(toks[3], "y_min")
    y_max = _to_float(toks[4], "y_max")
    ny = _to_count(toks[5], "ny")
    top, bottom, left, right = (
        _to_float(t, name)
        for t, name in zip(toks[6:10], ("top", "bottom", "left", "right"), strict=True)
    )

    rest = toks[_HEADER_TOKENS:]
    if len(rest) % _CIRCLE_TOKENS != 0:
        raise PropertiesFormatError(
            f"circle records need {_CIRCLE_TOKENS} numbers each; "
            f"{len(rest) % _CIRCLE_TOKENS} left over"
        )

    circles: list[Circle] = []
    for k in range(0, len(rest), _CIRCLE_TOKENS):
        n = k // _CIRCLE_TOKENS
        cx, cy, r, v = (
            _to_float(t, f"circle {n}") for t in rest[k : k + _CIRCLE_TOKENS]
        )
        circles.append(Circle(center_x=cx, center_y=cy, radius=r, value=v))

    grid = Grid(nx=nx, ny=ny, x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)
    box = BoxBoundary(top=top, bottom=bottom, left=left, right=right)
    return Geometry(grid=grid, box=box, circles=tuple(circles))


def read_properties(path: str | PathLike[str]) -> Geometry:
    p = Path(path)
    geometry = parse_properties(p.read_text(encoding="utf-8"))
    logger.debug("Read %s: %d circles", p, len(geometry.circles))
    return geometry


def _check_field(field: FloatArray) -> FloatArray:
    f = np.asarray(field, dtype=float)
    if f.ndim != 2:
        raise ValueError(f"field must be 2D (ny, nx), got shape {f.shape}")
    return f


def format_field(field: FloatArray, cfg: OutputConfig | None = None) -> str:
    """One line per grid row ``j``, values in ``i`` order."""
    cfg = cfg if cfg is not None else OutputConfig()
    buf = io.StringIO()
    np.savetxt(buf, _check_field(field), fmt=cfg.fmt, delimiter=cfg.delimiter)
    return buf.getvalue()


def write_field(
    path: str | PathLike[str],
    field: FloatArray,
    cfg: OutputConfig | None = None,
) -> Path:
    p = Path(path)
    p.write_text(format_field(field, cfg), encoding="utf-8")
    logger.debug("Wrote %s", p)
    return p
