"""Solve the example properties file and plot the field.

    python examples/plot_field.py examples/properties.txt
"""

from __future__ import annotations

import argparse

from gridfield import read_properties, setup_logging, solve_field
from gridfield.diagnostics._mpl import get_plt
from gridfield.diagnostics.plots import plot_field


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("properties")
    ap.add_argument("--save", default=None, help="write the figure here instead of showing it")
    args = ap.parse_args()

    setup_logging("INFO")
    sol = solve_field(read_properties(args.properties))
    fig, _ = plot_field(sol)

    if args.save:
        fig.savefig(args.save, dpi=150)
    else:
        get_plt().show()


if __name__ == "__main__":
    main()
