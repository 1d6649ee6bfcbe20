"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from philosim.args import ArgumentError, parse_args
from philosim.simulation import run_simulation


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the simulation and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        settings = parse_args(argv)
    except ArgumentError as exc:
        print(exc)
        return 1
    try:
        run_simulation(settings)
    except RuntimeError:
        print("Error: Thread creation failed.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())