"""Command-line interface for Computor.

    computor "5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0"
    computor --format json "X^2 + 1 = 0"
    computor --health-check
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, NoReturn

import sympy as sp

from .config import VERSION
from .logging_config import get_logger, setup_logging
from .solver import PolynomialSolver, format_result, solve_equation, verify_roots
from .types import FormatError, SolveResult

logger = get_logger("cli")

USAGE = 'Usage: computor "equation"'


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Computor health check...")
    print("-" * 50)

    print(f"[OK] SymPy {sp.__version__} available")
    checks_passed += 1

    # Check parsing
    try:
        from .parser import parse

        coefficients = parse("5 * X^0 + 4 * X^1 = 4 * X^0")
        if coefficients == {0: 1.0, 1: 4.0}:
            print("[OK] Basic parsing works")
            checks_passed += 1
        else:
            print(f"[FAIL] Basic parsing failed: got {coefficients}")
            checks_failed += 1
    except FormatError as e:
        print(f"[FAIL] Parsing check failed: {e}")
        checks_failed += 1

    # Check square root
    from .solver import newton_sqrt

    root = newton_sqrt(2.0)
    if abs(root * root - 2.0) < 1e-9:
        print("[OK] Newton square root works")
        checks_passed += 1
    else:
        print(f"[FAIL] Newton square root returned {root}")
        checks_failed += 1

    # Cross-check quadratic roots against SymPy
    x = sp.Symbol("X")
    samples = ["X^2 - 4 = 0", "2 * X^2 + 3 * X^1 - 5 = 0", "X^2 + X^1 + 1 = 0"]
    for equation in samples:
        try:
            result = solve_equation(equation)
            poly = sp.Poly(
                sum(c * x**e for e, c in result.coefficients.items()), x
            )
            expected = sorted(
                (complex(r) for r in poly.nroots()), key=lambda z: (round(z.real, 9), z.imag)
            )
            actual = sorted(
                (complex(r) for r in result.roots), key=lambda z: (round(z.real, 9), z.imag)
            )
            if len(expected) == len(actual) and all(
                abs(e - a) < 1e-6 for e, a in zip(expected, actual)
            ):
                print(f"[OK] {equation} matches SymPy")
                checks_passed += 1
            else:
                print(f"[FAIL] {equation}: got {actual}, SymPy says {expected}")
                checks_failed += 1
        except FormatError as e:
            print(f"[FAIL] {equation}: {e}")
            checks_failed += 1

    print("-" * 50)
    print(f"Health check: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def print_result_pretty(
    res: SolveResult, output_format: str = "human", verify: bool = False
) -> None:
    """Print result in specified format.

    Args:
        res: Result of solving one equation
        output_format: "json" for JSON output, "human" for human-readable
        verify: Also report SymPy residuals for the roots
    """
    residual = None
    if verify and res.roots:
        residual = max(verify_roots(res.coefficients, res.roots))

    if output_format == "json":
        data: dict[str, Any] = res.to_dict()
        if residual is not None:
            data["max_residual"] = residual
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    for line in format_result(res):
        print(line)
    if residual is not None:
        print(f"Verification: max residual {residual:.3g}")


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Computor CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = _ArgumentParser(
        prog="computor",
        description="Solve polynomial equations of degree 0, 1 or 2.",
    )
    parser.add_argument(
        "equation",
        nargs="*",
        help='Equation to solve, e.g. "5 * X^0 + 4 * X^1 = 4 * X^0"',
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check the roots by evaluating the polynomial with SymPy",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    # a space-free equation such as "-X^2+4=0" looks like an unknown option
    args, extras = parser.parse_known_args(argv)
    equations = list(args.equation) + [arg for arg in extras if "=" in arg]
    unknown = [arg for arg in extras if "=" not in arg]

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if unknown or len(equations) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    equation = equations[0]
    try:
        if args.format == "human" and not args.verify:
            PolynomialSolver().solve(equation)
        else:
            print_result_pretty(
                solve_equation(equation), output_format=args.format, verify=args.verify
            )
    except FormatError as e:
        logger.info("rejected %r: %s (%s)", equation, e, e.code)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
