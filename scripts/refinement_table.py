"""Grid refinement table for a plate/circle configuration.

Run from the repository root:

    PYTHONPATH=src python scripts/refinement_table.py
    PYTHONPATH=src python scripts/refinement_table.py --sizes 16 32 64 128 --backends splu
"""

from __future__ import annotations

import argparse

from gridfield import BoxBoundary, Circle, setup_logging
from gridfield.diagnostics import run_refinement_sweep


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[8, 16, 32, 64])
    ap.add_argument("--backends", nargs="+", default=["splu", "banded"])
    ap.add_argument("--csv", default=None, help="also write the table as CSV")
    args = ap.parse_args()

    setup_logging("WARNING")
    df = run_refinement_sweep(
        bounds=(0.0, 1.0, 0.0, 1.0),
        box=BoxBoundary(top=1.0),
        circles=(Circle(0.5, 0.5, 0.15, 0.0),),
        sizes=args.sizes,
        backends=args.backends,
    )
    print(df.to_string(index=False, float_format=lambda v: f"{v:.4g}"))
    if args.csv:
        df.to_csv(args.csv, index=False)


if __name__ == "__main__":
    main()
