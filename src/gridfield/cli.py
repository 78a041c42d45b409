"""Command line entry point.

    gridfield properties.txt field.txt
    python -m gridfield properties.txt field.txt --backend banded -v
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from .config import OutputConfig, SolverBackend, SolverConfig
from .exceptions import FactorizationError, PropertiesFormatError
from .io import read_properties, write_field
from .logging_config import setup_logging
from .solver import solve_field

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="gridfield",
        description=(
            "Solve the 2D Laplace equation on a rectangular grid with Dirichlet "
            "box edges and circular inclusions."
        ),
    )
    ap.add_argument("input", help="properties file (grid, box values, circles)")
    ap.add_argument("output", help="file to write the solved field to")
    ap.add_argument(
        "--backend",
        choices=[b.value for b in SolverBackend],
        default=SolverBackend.SPLU.value,
        help="factorization backend (default: %(default)s)",
    )
    ap.add_argument(
        "--fmt",
        default=OutputConfig().fmt,
        help="printf-style number format for the output file (default: %(default)s)",
    )
    ap.add_argument("--log-file", default=None, help="also write the log here")
    verb = ap.add_mutually_exclusive_group()
    verb.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    verb.add_argument("-q", "--quiet", action="store_true", help="warnings only")
    return ap


def _log_geometry(geometry) -> None:
    g = geometry.grid
    b = geometry.box
    logger.info(
        "Grid properties: nx=%d ny=%d x=[%g, %g] y=[%g, %g]",
        g.nx,
        g.ny,
        g.x_min,
        g.x_max,
        g.y_min,
        g.y_max,
    )
    logger.info(
        "Box boundary conditions: top=%g bottom=%g left=%g right=%g",
        b.top,
        b.bottom,
        b.left,
        b.right,
    )
    logger.info("Circular boundary conditions: %d", len(geometry.circles))
    for k, c in enumerate(geometry.circles):
        logger.info(
            "  circle %d: center=(%g, %g) radius=%g value=%g",
            k,
            c.center_x,
            c.center_y,
            c.radius,
            c.value,
        )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    setup_logging(level, log_file=args.log_file)

    logger.info("input file: %s", args.input)
    logger.info("output file: %s", args.output)

    try:
        out_cfg = OutputConfig(fmt=args.fmt)
        geometry = read_properties(args.input)
        _log_geometry(geometry)
        solution = solve_field(geometry, config=SolverConfig(backend=args.backend))
        write_field(args.output, solution.field, out_cfg)
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    except PropertiesFormatError as e:
        logger.error("Malformed properties file %s: %s", args.input, e)
        return 1
    except FactorizationError as e:
        logger.error("Solve failed: %s", e)
        return 1
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 1

    logger.info("Wrote %dx%d field to %s", *solution.field.shape[::-1], args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
