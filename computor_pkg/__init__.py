"""Computor package: parser, solver, and CLI for polynomial equations up to degree 2."""

from .parser import parse
from .solver import PolynomialSolver, newton_sqrt, solve_equation, verify_roots
from .types import FormatError, SolveResult

__all__ = [
    "parse",
    "solve_equation",
    "PolynomialSolver",
    "newton_sqrt",
    "verify_roots",
    "FormatError",
    "SolveResult",
]
