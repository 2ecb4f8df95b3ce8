import math

import pytest
import scipy.optimize
import torch

from torchspline.root_finding import BracketError, bracketed_newton


class TestBracketedNewton:
    """Tests for Newton iteration safeguarded by bisection."""

    def test_simple_quadratic(self):
        """Find sqrt(2) by solving x^2 - 2 = 0."""
        f = lambda x: x**2 - 2
        df = lambda x: 2 * x
        x0 = torch.tensor([1.5], dtype=torch.float64)

        root, converged = bracketed_newton(f, x0, 0.0, 2.0, df=df)

        torch.testing.assert_close(
            root, torch.tensor([math.sqrt(2)], dtype=torch.float64)
        )
        assert converged.all()

    def test_batched_brackets(self):
        """Each element uses its own bracket."""
        c = torch.tensor([2.0, 3.0, 4.0, 5.0], dtype=torch.float64)
        f = lambda x: x**2 - c
        df = lambda x: 2 * x

        roots, converged = bracketed_newton(
            f, torch.full((4,), 1.0, dtype=torch.float64), 1.0, c, df=df
        )

        torch.testing.assert_close(roots, torch.sqrt(c))
        assert converged.all()

    def test_falls_back_to_bisection(self):
        """Plain Newton on arctan diverges from x0 = 3; the bracket keeps it."""
        f = torch.atan
        df = lambda x: 1 / (1 + x**2)
        x0 = torch.tensor([3.0], dtype=torch.float64)

        root, converged = bracketed_newton(f, x0, -2.0, 5.0, df=df)

        torch.testing.assert_close(
            root, torch.zeros(1, dtype=torch.float64), atol=1e-10, rtol=0
        )
        assert converged.all()

    def test_zero_derivative_start(self):
        """A flat start point does not produce non-finite iterates."""
        f = lambda x: x**3 - 1
        df = lambda x: 3 * x**2
        x0 = torch.tensor([0.0], dtype=torch.float64)

        root, converged = bracketed_newton(f, x0, -1.0, 3.0, df=df)

        torch.testing.assert_close(
            root, torch.ones(1, dtype=torch.float64)
        )
        assert converged.all()

    def test_initial_guess_clamped(self):
        f = lambda x: x - 0.25
        df = lambda x: torch.ones_like(x)
        x0 = torch.tensor([10.0], dtype=torch.float64)

        root, converged = bracketed_newton(f, x0, 0.0, 1.0, df=df)

        torch.testing.assert_close(
            root, torch.tensor([0.25], dtype=torch.float64)
        )
        assert converged.all()

    def test_maxiter_reports_not_converged(self):
        f = torch.atan
        df = lambda x: 1 / (1 + x**2)
        x0 = torch.tensor([3.0], dtype=torch.float64)

        root, converged = bracketed_newton(f, x0, -2.0, 5.0, df=df, maxiter=1)

        assert not converged.any()
        assert torch.isfinite(root).all()
        assert -2.0 <= root.item() <= 5.0

    def test_reversed_bracket_raises(self):
        f = lambda x: x
        df = lambda x: torch.ones_like(x)

        with pytest.raises(BracketError):
            bracketed_newton(f, torch.tensor([0.0]), 1.0, -1.0, df=df)

    def test_matches_scipy_brentq(self):
        f = lambda x: torch.cos(x) - x
        df = lambda x: -torch.sin(x) - 1
        x0 = torch.tensor([0.5], dtype=torch.float64)

        root, converged = bracketed_newton(f, x0, 0.0, 1.0, df=df)
        expected = scipy.optimize.brentq(lambda x: math.cos(x) - x, 0.0, 1.0)

        torch.testing.assert_close(
            root, torch.tensor([expected], dtype=torch.float64)
        )
        assert converged.all()

    def test_float32(self):
        f = lambda x: x**2 - 2
        df = lambda x: 2 * x
        x0 = torch.tensor([1.0], dtype=torch.float32)

        root, converged = bracketed_newton(f, x0, 0.0, 2.0, df=df)

        assert root.dtype == torch.float32
        torch.testing.assert_close(
            root, torch.tensor([math.sqrt(2)], dtype=torch.float32)
        )
        assert converged.all()
