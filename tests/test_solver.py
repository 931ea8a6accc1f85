"""Unit tests for solver module."""

import contextlib
import io
import json
import math
import unittest
from unittest import mock

from computor_pkg.solver import (
    PolynomialSolver,
    _is_integer,
    format_result,
    get_degree,
    newton_sqrt,
    reduced_form,
    solve_coefficients,
    solve_equation,
)
from computor_pkg.types import FormatError


class TestReducedForm(unittest.TestCase):
    """Test reduced form rendering and degree detection."""

    def test_ascending_order(self):
        self.assertEqual(
            reduced_form({2: -9.3, 0: 4.0, 1: 4.0}),
            "4 * X^0 + 4 * X^1 - 9.3 * X^2 = 0",
        )

    def test_negative_first_term(self):
        self.assertEqual(reduced_form({2: -1.0, 0: -3.0}), "-3 * X^0 - 1 * X^2 = 0")

    def test_zero_terms_skipped(self):
        self.assertEqual(reduced_form({3: 1.0, 1: 1.0, 0: 0.0}), "1 * X^1 + 1 * X^3 = 0")

    def test_all_zero(self):
        self.assertEqual(reduced_form({0: 0.0, 2: 0.0}), "0 * X^0 = 0")
        self.assertEqual(reduced_form({}), "0 * X^0 = 0")

    def test_degree_ignores_zero_coefficients(self):
        self.assertEqual(get_degree({3: 0.0, 1: 1.0, 0: 1.0}), 1)
        self.assertEqual(get_degree({}), 0)
        self.assertEqual(get_degree({5: -2.0}), 5)


class TestEquationSolving(unittest.TestCase):
    """Test equation solving by degree."""

    def test_constants_on_both_sides(self):
        result = solve_equation("5 * X^0 + 4 * X^1 = 4 * X^0")
        self.assertEqual(result.reduced_form, "1 * X^0 + 4 * X^1 = 0")
        self.assertEqual(result.degree, 1)
        self.assertEqual(result.result_type, "single")
        self.assertEqual(result.solutions, ["-0.25"])

    def test_linear_minus_one(self):
        result = solve_equation("8 * X^0 + 4 * X^1 = 4 * X^0")
        self.assertEqual(result.reduced_form, "4 * X^0 + 4 * X^1 = 0")
        self.assertEqual(result.solutions, ["-1"])

    def test_linear_zero_root_has_no_sign(self):
        result = solve_equation("3 * X^1 = 0")
        self.assertEqual(result.solutions, ["0"])

    def test_two_real_roots(self):
        result = solve_equation("X^2 - 4 = 0")
        self.assertEqual(result.degree, 2)
        self.assertEqual(result.result_type, "two_real")
        self.assertEqual(result.discriminant, 16.0)
        self.assertEqual(result.solutions, ["2", "-2"])

    def test_two_real_roots_decimal(self):
        result = solve_equation("5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0")
        self.assertEqual(result.reduced_form, "4 * X^0 + 4 * X^1 - 9.3 * X^2 = 0")
        first, second = result.roots
        self.assertAlmostEqual(first, -0.475131, places=5)
        self.assertAlmostEqual(second, 0.905239, places=5)

    def test_double_root(self):
        result = solve_equation("X^2 + 2 * X^1 + 1 = 0")
        self.assertEqual(result.result_type, "double")
        self.assertEqual(result.discriminant, 0.0)
        self.assertEqual(result.solutions, ["-1"])

    def test_complex_exact_fractions(self):
        result = solve_equation("X^2 + 1 = 0")
        self.assertEqual(result.result_type, "complex")
        self.assertEqual(result.discriminant, -4.0)
        self.assertEqual(result.solutions, ["0/2 + 2i/2", "0/2 - 2i/2"])
        self.assertAlmostEqual(result.roots[0].real, 0.0)
        self.assertAlmostEqual(result.roots[0].imag, 1.0)

    def test_complex_exact_fractions_non_unit(self):
        result = solve_equation("2 * X^2 + 2 * X^1 + 1 = 0")
        self.assertEqual(result.solutions, ["-2/4 + 2i/4", "-2/4 - 2i/4"])

    def test_complex_negative_leading_coefficient(self):
        result = solve_equation("-1 * X^2 + 2 * X^1 - 5 = 0")
        # -2/-2 is shown as 2/2
        self.assertEqual(result.solutions, ["2/2 + 4i/2", "2/2 - 4i/2"])

    def test_complex_decimal(self):
        result = solve_equation("X^2 + X^1 + 1 = 0")
        self.assertEqual(result.solutions, ["-0.5 + 0.866025i", "-0.5 - 0.866025i"])

    def test_degree_too_high(self):
        result = solve_equation("X^3 + X^1 = 0")
        self.assertEqual(result.degree, 3)
        self.assertEqual(result.result_type, "too_high")
        self.assertEqual(result.roots, [])

    def test_trailing_zero_coefficient(self):
        result = solve_equation("0 * X^3 + X^1 + 1 = 0")
        self.assertEqual(result.degree, 1)
        self.assertEqual(result.solutions, ["-1"])

    def test_any_real_number(self):
        result = solve_equation("8 * X^0 = 8 * X^0")
        self.assertEqual(result.reduced_form, "0 * X^0 = 0")
        self.assertEqual(result.degree, 0)
        self.assertEqual(result.result_type, "all_real")

    def test_no_solution(self):
        result = solve_equation("5 = 3")
        self.assertEqual(result.result_type, "no_solution")

    def test_zero_leading_coefficient_fallback(self):
        result = solve_coefficients({2: 0.0, 1: 2.0, 0: -4.0})
        self.assertEqual(result.degree, 1)
        self.assertEqual(result.solutions, ["2"])

    def test_format_error_propagates(self):
        with self.assertRaises(FormatError):
            solve_equation("X^2 + 1")

    def test_overflowing_discriminant(self):
        big = "1" + "0" * 200
        result = solve_equation(f"{big} * X^2 + {big} = 0")
        self.assertEqual(result.result_type, "complex")
        self.assertEqual(result.discriminant, float("-inf"))
        self.assertEqual(result.solutions, ["0 + infi", "0 - infi"])

    def test_nan_discriminant(self):
        big = "1" + "0" * 200
        result = solve_equation(f"{big} * X^2 + {big} * X^1 + {big} = 0")
        self.assertEqual(result.result_type, "complex")
        self.assertTrue(math.isnan(result.discriminant))
        self.assertEqual(result.solutions, ["-0.5 + nani", "-0.5 - nani"])

    def test_infinite_positive_discriminant(self):
        big = "1" + "0" * 200
        result = solve_equation(f"-{big} * X^2 + {big} = 0")
        self.assertEqual(result.result_type, "two_real")
        self.assertEqual(result.solutions, ["-inf", "inf"])


class TestFormatResult(unittest.TestCase):
    """Test the human-readable output lines."""

    def test_linear_lines(self):
        lines = format_result(solve_equation("8 * X^0 + 4 * X^1 = 4 * X^0"))
        self.assertEqual(
            lines,
            [
                "Reduced form: 4 * X^0 + 4 * X^1 = 0",
                "Polynomial degree: 1",
                "The solution is:",
                "-1",
            ],
        )

    def test_positive_discriminant_lines(self):
        lines = format_result(solve_equation("X^2 - 4 = 0"))
        self.assertEqual(
            lines[2:],
            ["Discriminant is strictly positive, the two solutions are:", "2", "-2"],
        )

    def test_zero_discriminant_line(self):
        lines = format_result(solve_equation("X^2 = 0"))
        self.assertEqual(lines[2:], ["Discriminant is zero, the solution is:", "0"])

    def test_negative_discriminant_line(self):
        lines = format_result(solve_equation("X^2 + 1 = 0"))
        self.assertEqual(
            lines[2],
            "Discriminant is strictly negative, the two complex solutions are:",
        )

    def test_too_high_line(self):
        lines = format_result(solve_equation("X^3 = 0"))
        self.assertEqual(
            lines,
            [
                "Reduced form: 1 * X^3 = 0",
                "Polynomial degree: 3",
                "The polynomial degree is strictly greater than 2, I can't solve.",
            ],
        )

    def test_degree_zero_lines(self):
        self.assertEqual(
            format_result(solve_equation("4 = 4"))[2], "Any real number is a solution."
        )
        self.assertEqual(format_result(solve_equation("4 = 5"))[2], "No solution.")


class TestNewtonSqrt(unittest.TestCase):
    """Test the Newton-Raphson square root."""

    def test_representative_values(self):
        for x in (1.0, 2.0, 4.0, 10.0, 16.0, 0.25, 1e-6):
            with self.subTest(x=x):
                root = newton_sqrt(x)
                self.assertLess(abs(root * root - x), 1e-9)

    def test_zero(self):
        self.assertEqual(newton_sqrt(0.0), 0.0)

    def test_negative_input(self):
        self.assertEqual(newton_sqrt(-4.0), -1.0)

    def test_huge_input(self):
        for x in (1e100, 1e300, 1.7e308):
            with self.subTest(x=x):
                self.assertAlmostEqual(newton_sqrt(x) / math.sqrt(x), 1.0, places=12)

    def test_tiny_input(self):
        for x in (1e-12, 1e-300, 5e-324):
            with self.subTest(x=x):
                root = newton_sqrt(x)
                self.assertTrue(math.isfinite(root))
                self.assertLess(abs(root * root - x), 1e-9)

    def test_non_finite_input_returned_unchanged(self):
        with mock.patch("computor_pkg.solver.logger") as log:
            self.assertEqual(newton_sqrt(math.inf), math.inf)
            self.assertTrue(math.isnan(newton_sqrt(math.nan)))
        log.warning.assert_not_called()
        self.assertEqual(newton_sqrt(-math.inf), -1.0)

    def test_integer_check_rejects_non_finite(self):
        self.assertTrue(_is_integer(2.0000000000000004))
        self.assertFalse(_is_integer(math.inf))
        self.assertFalse(_is_integer(math.nan))
        self.assertFalse(_is_integer(0.5))

    def test_iteration_cap_is_logged(self):
        with mock.patch("computor_pkg.solver.SQRT_MAX_ITERATIONS", 3):
            with self.assertLogs("computor.solver", level="WARNING"):
                root = newton_sqrt(1e6)
        self.assertTrue(math.isfinite(root))


class TestPolynomialSolver(unittest.TestCase):
    """Test the printing solver."""

    def _run(self, solver, equation):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            solver.solve(equation)
        return buffer.getvalue().splitlines()

    def test_prints_lines(self):
        lines = self._run(PolynomialSolver(), "X^2 - 4 = 0")
        self.assertEqual(
            lines,
            [
                "Reduced form: -4 * X^0 + 1 * X^2 = 0",
                "Polynomial degree: 2",
                "Discriminant is strictly positive, the two solutions are:",
                "2",
                "-2",
            ],
        )

    def test_reuse_resets_state(self):
        solver = PolynomialSolver()
        self._run(solver, "X^2 - 4 = 0")
        lines = self._run(solver, "X^1 = 5")
        self.assertEqual(solver.coefficients, {1: 1.0, 0: -5.0})
        self.assertEqual(lines[0], "Reduced form: -5 * X^0 + 1 * X^1 = 0")

    def test_failure_clears_state(self):
        solver = PolynomialSolver()
        self._run(solver, "X^2 - 4 = 0")
        with self.assertRaises(FormatError):
            self._run(solver, "X^2 = 1 = 2")
        self.assertEqual(solver.coefficients, {})
        self.assertIsNone(solver.result)


class TestResultSerialization(unittest.TestCase):
    """Test SolveResult.to_dict."""

    def test_to_dict(self):
        data = solve_equation("X^2 - 4 = 0").to_dict()
        self.assertTrue(data["ok"])
        self.assertEqual(data["type"], "two_real")
        self.assertEqual(data["degree"], 2)
        self.assertEqual(data["coefficients"], {"0": -4.0, "2": 1.0})
        self.assertEqual(data["solutions"], ["2", "-2"])
        self.assertEqual(len(data["roots"]), 2)
        json.dumps(data)

    def test_complex_roots_serialize(self):
        data = solve_equation("X^2 + 1 = 0").to_dict()
        self.assertAlmostEqual(data["roots"][0]["imag"], 1.0)
        self.assertAlmostEqual(data["roots"][1]["imag"], -1.0)

    def test_too_high_has_no_roots(self):
        data = solve_equation("X^4 = 1").to_dict()
        self.assertNotIn("roots", data)
        self.assertNotIn("discriminant", data)


class TestPackageExports(unittest.TestCase):
    """Test the names re-exported by the package."""

    def test_public_names(self):
        import computor_pkg

        for name in computor_pkg.__all__:
            with self.subTest(name=name):
                self.assertTrue(hasattr(computor_pkg, name))
        self.assertIs(computor_pkg.solve_equation, solve_equation)


if __name__ == "__main__":
    unittest.main()
