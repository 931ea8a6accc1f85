"""Equation parsing module.

This module handles:
- Input validation (length, single '=' separator)
- Lexing each side into sign tokens and term chunks
- Grouping chunks into signed terms with a two-state machine
- Term parsing into (coefficient, exponent) pairs
- Accumulation into a coefficient map representing LHS - RHS = 0
- Number formatting shared by the solver output
"""

from __future__ import annotations

import math
from typing import Any, Iterator

from .config import (
    CONSTANT_REGEX,
    MAX_INPUT_LENGTH,
    OUTPUT_PRECISION,
    SIGN_TOKENS,
    TERM_REGEX,
)
from .logging_config import get_logger
from .types import CoefficientMap, FormatError, Term

logger = get_logger("parser")

# Term grouping states
EXPECT_TERM_START = "ExpectTermStart"
IN_TERM = "InTerm"


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with the configured number of significant digits.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        Formatted string, e.g. "-1", "0.333333", "1e+10"
    """
    if precision is None:
        precision = OUTPUT_PRECISION
    try:
        number = float(val)
    except (ValueError, TypeError, OverflowError):
        return str(val)
    if number == 0:
        number = 0.0  # no "-0"
    fmt = "{:." + str(int(precision)) + "g}"
    return fmt.format(number)


def tokenize(side: str) -> Iterator[str]:
    """Yield '+' and '-' as standalone tokens and every other run of
    non-whitespace characters as a chunk.

    "4 * X^2-3" -> "4", "*", "X^2", "-", "3"
    """
    chunk: list[str] = []
    for char in side:
        if char in SIGN_TOKENS or char.isspace():
            if chunk:
                yield "".join(chunk)
                chunk = []
            if char in SIGN_TOKENS:
                yield char
        else:
            chunk.append(char)
    if chunk:
        yield "".join(chunk)


def split_terms(side: str) -> list[str]:
    """Group the tokens of one equation side into signed term strings.

    A sign token closes the term being built and opens a new one. Chunks
    between signs are glued together, so "4 * X^2" becomes "4*X^2".
    A lone "-" that is never followed by a chunk is kept as the term "-",
    which parse_term rejects.
    """
    terms: list[str] = []
    state = EXPECT_TERM_START
    sign = ""
    body = ""
    for token in tokenize(side):
        if token in SIGN_TOKENS:
            if state == IN_TERM or sign == "-":
                terms.append(sign + body)
            sign = "-" if token == "-" else ""
            body = ""
            state = EXPECT_TERM_START
        else:
            body += token
            state = IN_TERM
    if state == IN_TERM or sign == "-":
        terms.append(sign + body)
    logger.debug("split %r into %r", side, terms)
    return terms


def _to_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise FormatError(
            f"Invalid coefficient: {text}", "INVALID_COEFFICIENT"
        ) from None
    if not math.isfinite(value):
        raise FormatError(f"Coefficient out of range: {text}", "INVALID_COEFFICIENT")
    return value


def parse_term(term: str, is_right: bool = False) -> Term:
    """Parse one signed term, as produced by split_terms (no inner whitespace).

    Two shapes are accepted: "[sign][coefficient][*]X^<digits>" and a plain
    signed decimal constant (exponent 0). Terms from the right-hand side
    come back negated.

    Raises:
        FormatError: if the term matches neither shape or its coefficient
            is not a number
    """
    text = term.strip()
    match = TERM_REGEX.match(text)
    if match:
        coefficient_text = match.group("coefficient")
        if coefficient_text in ("", "+"):
            coefficient = 1.0
        elif coefficient_text == "-":
            coefficient = -1.0
        else:
            coefficient = _to_float(coefficient_text)
        exponent = int(match.group("exponent"))
    elif CONSTANT_REGEX.match(text):
        coefficient = _to_float(text)
        exponent = 0
    else:
        raise FormatError(f"Invalid term format: {text}", "INVALID_TERM")

    if is_right:
        coefficient = -coefficient
    return Term(coefficient=coefficient, exponent=exponent)


def parse_side(side: str, is_right: bool, coefficients: CoefficientMap) -> None:
    """Parse one side of the equation and add its terms into *coefficients*."""
    for text in split_terms(side.strip()):
        term = parse_term(text, is_right)
        coefficients[term.exponent] = (
            coefficients.get(term.exponent, 0.0) + term.coefficient
        )
        logger.debug(
            "term %r -> %s * X^%d (%s side)",
            text,
            term.coefficient,
            term.exponent,
            "right" if is_right else "left",
        )


def parse(text: str) -> CoefficientMap:
    """Reduce an equation to a coefficient map of LHS - RHS = 0.

    Args:
        text: Equation such as "5 * X^0 + 4 * X^1 = 4 * X^0"

    Returns:
        Mapping from exponent to summed coefficient

    Raises:
        FormatError: on overly long input, a missing or repeated '=',
            or a malformed term
    """
    if len(text) > MAX_INPUT_LENGTH:
        raise FormatError(
            f"Input too long (max {MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    sides = text.split("=")
    if len(sides) != 2:
        raise FormatError("Invalid equation format", "INVALID_EQUATION")

    coefficients: CoefficientMap = {}
    parse_side(sides[0], False, coefficients)
    parse_side(sides[1], True, coefficients)
    logger.info("parsed %r into %r", text, coefficients)
    return coefficients
