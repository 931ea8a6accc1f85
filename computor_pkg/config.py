"""Centralized configuration for Computor.

This module defines:
- Input validation limits
- Output formatting precision
- Numeric constants for the square root and integer detection
- Regex patterns for term parsing

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with COMPUTOR_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("computor")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("COMPUTOR_MAX_INPUT_LENGTH", "10000"))  # characters

# Output configuration
OUTPUT_PRECISION = int(
    os.getenv("COMPUTOR_OUTPUT_PRECISION", "6")
)  # significant digits

# Tolerance for deciding that a float "is" an integer (exact fraction display)
INTEGER_TOLERANCE = float(os.getenv("COMPUTOR_INTEGER_TOLERANCE", "1e-9"))

# Solver limits
MAX_SOLVABLE_DEGREE = 2

# Newton-Raphson square root. The epsilon drives displayed precision, keep it fixed.
SQRT_EPSILON = 1e-10
SQRT_MAX_ITERATIONS = 1000

VARIABLE_SYMBOL = "X"
SIGN_TOKENS = ("+", "-")

# coefficient * X^power, e.g. "-4.5*X^2", "X^0", "+3X^1"
TERM_REGEX = re.compile(
    r"^(?P<coefficient>[+-]?\d*\.?\d*)\*?"
    + re.escape(VARIABLE_SYMBOL)
    + r"\^(?P<exponent>\d+)$"
)
# plain constant, e.g. "5", "-2.", "+0.25"
CONSTANT_REGEX = re.compile(r"^[+-]?\d+\.?\d*$")
