#!/usr/bin/env python3
"""
Computor - Polynomial Equation Solver

Main entry point for the Computor application.
This file serves as a thin wrapper that delegates all functionality
to the computor_pkg package.

Usage:
    python computor.py "5 * X^0 + 4 * X^1 = 4 * X^0"
    python computor.py --format json "X^2 + 1 = 0"
    python computor.py --help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Computor.

    Delegates to the computor_pkg.cli module, which handles argument
    parsing, solving, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from computor_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import computor_pkg: {e}", file=sys.stderr)
        print("Please ensure all dependencies are installed: pip install -e .", file=sys.stderr)
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
