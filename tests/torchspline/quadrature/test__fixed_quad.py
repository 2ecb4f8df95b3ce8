"""Tests for fixed-order Gauss-Legendre quadrature."""

import math

import numpy as np
import pytest
import scipy.integrate
import torch


def _parabola_speed(t):
    """Speed of the curve (t, t**2)."""
    return torch.sqrt(1 + 4 * t**2)


def _parabola_length(b):
    return b / 2 * torch.sqrt(1 + 4 * b**2) + torch.asinh(2 * b) / 4


class TestFixedQuad:
    def test_parabola_arc_length(self):
        from torchspline.quadrature import fixed_quad

        length = fixed_quad(_parabola_speed, 0.0, 1.0, n=32)

        torch.testing.assert_close(
            length,
            torch.tensor(
                math.sqrt(5) / 2 + math.asinh(2) / 4, dtype=torch.float64
            ),
        )

    def test_same_rule_as_scipy(self):
        from torchspline.quadrature import fixed_quad

        speed = lambda t: torch.sqrt(1 + (3 * t**2 - 1) ** 2)
        result = fixed_quad(speed, -1.0, 2.0, n=10)
        expected, _ = scipy.integrate.fixed_quad(
            lambda t: np.sqrt(1 + (3 * t**2 - 1) ** 2), -1.0, 2.0, n=10
        )

        torch.testing.assert_close(
            result,
            torch.tensor(expected, dtype=torch.float64),
            rtol=1e-12,
            atol=0,
        )

    def test_cumulative_lengths(self):
        """A batch of upper bounds gives one length per bound."""
        from torchspline.quadrature import fixed_quad

        b = torch.linspace(0.25, 3.0, 12, dtype=torch.float64)
        lengths = fixed_quad(_parabola_speed, 0.0, b, n=32)

        assert lengths.shape == (12,)
        torch.testing.assert_close(lengths, _parabola_length(b))

    def test_elementwise_bounds(self):
        """Lower and upper bounds are paired elementwise"""
        from torchspline.quadrature import fixed_quad

        a = torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64)
        b = torch.tensor([1.0, 3.0, 2.5], dtype=torch.float64)
        result = fixed_quad(lambda x: x, a, b, n=2)

        torch.testing.assert_close(result, (b**2 - a**2) / 2)

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
    def test_polynomial_exact(self, n):
        """Fixed quad should be exact for polynomials of degree <= 2n-1"""
        from torchspline.quadrature import fixed_quad

        degree = 2 * n - 1
        result = fixed_quad(lambda x: x**degree + x ** (degree - 1), 0, 1, n=n)
        expected = 1 / (degree + 1) + 1 / degree

        torch.testing.assert_close(
            result, torch.tensor(expected, dtype=torch.float64)
        )

    def test_vector_integrand(self):
        """Vector-valued integrands keep their trailing dimension"""
        from torchspline.quadrature import fixed_quad

        def f(x):
            return torch.stack([torch.ones_like(x), x, x**2], dim=-1)

        result = fixed_quad(f, 0, 2, n=4)

        torch.testing.assert_close(
            result,
            torch.tensor([2.0, 2.0, 8.0 / 3.0], dtype=torch.float64),
        )

    def test_vector_integrand_batched(self):
        from torchspline.quadrature import fixed_quad

        b = torch.tensor([1.0, 2.0], dtype=torch.float64)

        def f(x):
            return torch.stack([x, 2 * x], dim=-1)

        result = fixed_quad(f, 0, b, n=3)

        assert result.shape == (2, 2)
        expected = torch.stack([b**2 / 2, b**2], dim=-1)
        torch.testing.assert_close(result, expected)

    def test_reversed_limits(self):
        """Swapping the limits negates the integral"""
        from torchspline.quadrature import fixed_quad

        forward = fixed_quad(torch.cos, 0, 1, n=10)
        backward = fixed_quad(torch.cos, 1, 0, n=10)

        torch.testing.assert_close(backward, -forward)


class TestFixedQuadGradients:
    def test_gradient_wrt_curve_parameter(self):
        """Differentiating the length of (t, theta * t**2) under the integral."""
        from torchspline.quadrature import fixed_quad

        theta = torch.tensor(2.0, dtype=torch.float64, requires_grad=True)

        length = fixed_quad(
            lambda t: torch.sqrt(1 + 4 * theta**2 * t**2), 0.0, 1.0, n=32
        )
        length.backward()

        value = theta.detach()
        expected = fixed_quad(
            lambda t: 4 * value * t**2 / torch.sqrt(1 + 4 * value**2 * t**2),
            0.0,
            1.0,
            n=32,
        )
        torch.testing.assert_close(theta.grad, expected)

    def test_gradient_wrt_upper_bound(self):
        """The length grows at the speed of the curve at the upper bound."""
        from torchspline.quadrature import fixed_quad

        b = torch.tensor(1.5, dtype=torch.float64, requires_grad=True)

        length = fixed_quad(_parabola_speed, 0.0, b, n=32)
        length.backward()

        torch.testing.assert_close(b.grad, _parabola_speed(b.detach()))
