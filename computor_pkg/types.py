"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

# exponent -> coefficient; a missing exponent means a zero coefficient
CoefficientMap = Dict[int, float]

Root = Union[float, complex]

# SolveResult.result_type values
TOO_HIGH = "too_high"
ALL_REAL = "all_real"
NO_SOLUTION = "no_solution"
SINGLE = "single"
TWO_REAL = "two_real"
DOUBLE = "double"
COMPLEX = "complex"


@dataclass(frozen=True)
class Term:
    """One signed term of an equation side, already negated for the right side."""

    coefficient: float
    exponent: int


@dataclass
class SolveResult:
    """Result of solving one polynomial equation."""

    coefficients: CoefficientMap
    reduced_form: str
    degree: int
    result_type: str
    discriminant: float | None = None
    roots: List[Root] = field(default_factory=list)
    solutions: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": True,
            "type": self.result_type,
            "reduced_form": self.reduced_form,
            "degree": self.degree,
            "coefficients": {
                str(exponent): self.coefficients[exponent]
                for exponent in sorted(self.coefficients)
            },
        }
        if self.discriminant is not None:
            result_dict["discriminant"] = self.discriminant
        if self.roots:
            result_dict["roots"] = [
                {"real": root.real, "imag": root.imag}
                if isinstance(root, complex)
                else {"real": root, "imag": 0.0}
                for root in self.roots
            ]
        if self.solutions:
            result_dict["solutions"] = list(self.solutions)
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        parts = [
            f"result_type={self.result_type!r}",
            f"degree={self.degree}",
            f"reduced_form={self.reduced_form!r}",
        ]
        if self.discriminant is not None:
            parts.append(f"discriminant={self.discriminant!r}")
        if self.solutions:
            parts.append(f"solutions={self.solutions!r}")
        return f"SolveResult({', '.join(parts)})"


class FormatError(Exception):
    """Raised when an equation or one of its terms is malformed."""

    def __init__(self, message: str, code: str = "INVALID_EQUATION"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
