"""Core polynomial solving module.

This module provides:
- Degree detection and reduced-form rendering for a coefficient map
- A Newton-Raphson square root used for the discriminant
- Dedicated handlers for degree 0, 1 and 2 equations
- Human-readable result lines
- Root verification through SymPy

Degrees above MAX_SOLVABLE_DEGREE are reported, never solved.
Pure functions return SolveResult objects; PolynomialSolver prints them.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

import sympy as sp

from .config import (
    INTEGER_TOLERANCE,
    MAX_SOLVABLE_DEGREE,
    SQRT_EPSILON,
    SQRT_MAX_ITERATIONS,
    VARIABLE_SYMBOL,
)
from .logging_config import get_logger
from .parser import format_number, parse
from .types import (
    ALL_REAL,
    COMPLEX,
    DOUBLE,
    NO_SOLUTION,
    SINGLE,
    TOO_HIGH,
    TWO_REAL,
    CoefficientMap,
    Root,
    SolveResult,
)

logger = get_logger("solver")


def newton_sqrt(x: float) -> float:
    """Square root by Newton-Raphson iteration.

    Starts from x itself and applies r = (r + x/r) / 2 until two successive
    values differ by less than SQRT_EPSILON; the earlier of the two is
    returned. Negative input returns -1.0, which no caller should ever see.
    Infinity and NaN come back unchanged.
    """
    if x < 0:
        return -1.0
    if x == 0:
        return 0.0
    if not math.isfinite(x):
        return x

    result = float(x)
    for _ in range(SQRT_MAX_ITERATIONS):
        new_result = 0.5 * (result + x / result)
        if abs(new_result - result) < SQRT_EPSILON:
            break
        result = new_result
    else:
        # iterates of very large inputs can alternate between neighbouring floats
        logger.warning(
            "newton_sqrt(%r) stopped after %d iterations", x, SQRT_MAX_ITERATIONS
        )
    return result


def get_degree(coefficients: CoefficientMap) -> int:
    """Highest exponent with a non-zero coefficient, 0 if there is none."""
    degree = 0
    for exponent, coefficient in coefficients.items():
        if coefficient != 0 and exponent > degree:
            degree = exponent
    return degree


def reduced_form(coefficients: CoefficientMap) -> str:
    """Render the coefficient map as "a * X^0 + b * X^1 ... = 0".

    Only non-zero terms are shown, in ascending exponent order. A map with no
    non-zero coefficient renders as "0 * X^0 = 0".
    """
    parts: List[str] = []
    for exponent in range(get_degree(coefficients) + 1):
        coefficient = coefficients.get(exponent, 0.0)
        if coefficient == 0:
            continue
        if parts:
            parts.append(" - " if coefficient < 0 else " + ")
        elif coefficient < 0:
            parts.append("-")
        parts.append(f"{format_number(abs(coefficient))} * {VARIABLE_SYMBOL}^{exponent}")
    if not parts:
        parts.append(f"0 * {VARIABLE_SYMBOL}^0")
    return "".join(parts) + " = 0"


def _is_integer(value: float) -> bool:
    if not math.isfinite(value):
        return False
    return abs(value - round(value)) < INTEGER_TOLERANCE


def _solve_degree0(coefficients: CoefficientMap) -> Dict[str, Any]:
    if coefficients.get(0, 0.0) == 0:
        return {"result_type": ALL_REAL}
    return {"result_type": NO_SOLUTION}


def _solve_degree1(coefficients: CoefficientMap) -> Dict[str, Any]:
    a = coefficients.get(1, 0.0)
    b = coefficients.get(0, 0.0)
    if a == 0:
        return _solve_degree0(coefficients)

    solution = -b / a
    return {
        "result_type": SINGLE,
        "roots": [solution],
        "solutions": [format_number(solution)],
    }


def _complex_solutions(a: float, b: float, sqrt_neg_delta: float) -> List[str]:
    """Display strings for the conjugate pair (-b ± i·sqrt(-Δ)) / 2a.

    Exact "p/q + ri/q" fractions when a, b and sqrt(-Δ) are integers,
    decimal real and imaginary parts otherwise.
    """
    if _is_integer(a) and _is_integer(b) and _is_integer(sqrt_neg_delta):
        denominator = 2 * int(round(a))
        numerator = -int(round(b))
        imaginary = int(round(sqrt_neg_delta))
        if denominator < 0:
            denominator, numerator = -denominator, -numerator
        return [
            f"{numerator}/{denominator} + {imaginary}i/{denominator}",
            f"{numerator}/{denominator} - {imaginary}i/{denominator}",
        ]

    real_part = format_number(-b / (2 * a))
    imaginary_part = format_number(abs(sqrt_neg_delta / (2 * a)))
    return [
        f"{real_part} + {imaginary_part}i",
        f"{real_part} - {imaginary_part}i",
    ]


def _solve_degree2(coefficients: CoefficientMap) -> Dict[str, Any]:
    a = coefficients.get(2, 0.0)
    b = coefficients.get(1, 0.0)
    c = coefficients.get(0, 0.0)
    if a == 0:
        return _solve_degree1(coefficients)

    discriminant = b * b - 4 * a * c
    logger.debug("discriminant of %r is %r", coefficients, discriminant)

    if discriminant > 0:
        sqrt_delta = newton_sqrt(discriminant)
        roots: List[Root] = [
            (-b + sqrt_delta) / (2 * a),
            (-b - sqrt_delta) / (2 * a),
        ]
        return {
            "result_type": TWO_REAL,
            "discriminant": discriminant,
            "roots": roots,
            "solutions": [format_number(root) for root in roots],
        }
    if discriminant == 0:
        solution = -b / (2 * a)
        return {
            "result_type": DOUBLE,
            "discriminant": discriminant,
            "roots": [solution],
            "solutions": [format_number(solution)],
        }

    sqrt_neg_delta = newton_sqrt(-discriminant)
    real_part = -b / (2 * a)
    imaginary_part = abs(sqrt_neg_delta / (2 * a))
    return {
        "result_type": COMPLEX,
        "discriminant": discriminant,
        "roots": [
            complex(real_part, imaginary_part),
            complex(real_part, -imaginary_part),
        ],
        "solutions": _complex_solutions(a, b, sqrt_neg_delta),
    }


_HANDLERS = {
    0: _solve_degree0,
    1: _solve_degree1,
    2: _solve_degree2,
}


def solve_coefficients(coefficients: CoefficientMap) -> SolveResult:
    """Classify and solve an already reduced polynomial."""
    degree = get_degree(coefficients)
    form = reduced_form(coefficients)
    if degree > MAX_SOLVABLE_DEGREE:
        logger.info("degree %d is above %d, not solving", degree, MAX_SOLVABLE_DEGREE)
        return SolveResult(
            coefficients=dict(coefficients),
            reduced_form=form,
            degree=degree,
            result_type=TOO_HIGH,
        )

    fields = _HANDLERS[degree](coefficients)
    return SolveResult(
        coefficients=dict(coefficients), reduced_form=form, degree=degree, **fields
    )


def solve_equation(equation: str) -> SolveResult:
    """Parse and solve an equation without printing anything.

    Raises:
        FormatError: if the equation cannot be parsed
    """
    return solve_coefficients(parse(equation))


def format_result(result: SolveResult) -> List[str]:
    """Human-readable output lines for a result, in display order."""
    lines = [
        f"Reduced form: {result.reduced_form}",
        f"Polynomial degree: {result.degree}",
    ]
    typ = result.result_type
    if typ == TOO_HIGH:
        lines.append(
            f"The polynomial degree is strictly greater than {MAX_SOLVABLE_DEGREE}, "
            "I can't solve."
        )
    elif typ == ALL_REAL:
        lines.append("Any real number is a solution.")
    elif typ == NO_SOLUTION:
        lines.append("No solution.")
    elif typ == SINGLE:
        lines.append("The solution is:")
        lines.extend(result.solutions)
    elif typ == TWO_REAL:
        lines.append("Discriminant is strictly positive, the two solutions are:")
        lines.extend(result.solutions)
    elif typ == DOUBLE:
        lines.append("Discriminant is zero, the solution is:")
        lines.extend(result.solutions)
    elif typ == COMPLEX:
        lines.append(
            "Discriminant is strictly negative, the two complex solutions are:"
        )
        lines.extend(result.solutions)
    return lines


def verify_roots(coefficients: CoefficientMap, roots: List[Root]) -> List[float]:
    """Evaluate the polynomial at each root with SymPy.

    Args:
        coefficients: Reduced coefficient map
        roots: Real or complex roots to check

    Returns:
        Absolute value of P(root) for each root, in the same order
    """
    x = sp.Symbol(VARIABLE_SYMBOL)
    expr = sp.Add(
        *[
            sp.Float(coefficient) * x**exponent
            for exponent, coefficient in coefficients.items()
            if coefficient != 0
        ]
    )
    residuals = []
    for root in roots:
        value = complex(root)
        if not (math.isfinite(value.real) and math.isfinite(value.imag)):
            residuals.append(math.inf)
            continue
        point = sp.Float(value.real) + sp.I * sp.Float(value.imag)
        residual = abs(complex(sp.N(expr.subs(x, point))))
        residuals.append(residual)
    logger.debug("residuals for %r: %r", roots, residuals)
    return residuals


class PolynomialSolver:
    """Reusable solver that prints the outcome of one equation per call.

    Only the state of the most recent equation is kept.
    """

    def __init__(self) -> None:
        self.coefficients: CoefficientMap = {}
        self.result: SolveResult | None = None

    def solve(self, equation: str) -> None:
        """Parse, solve and print *equation*.

        Raises:
            FormatError: if the equation cannot be parsed
        """
        self.coefficients = {}
        self.result = None
        self.coefficients = parse(equation)
        self.result = solve_coefficients(self.coefficients)
        for line in format_result(self.result):
            print(line)
