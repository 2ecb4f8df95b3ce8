"""Tests for spline arc length."""

import math

import pytest
import scipy.integrate
import torch

# Eleven points on the diagonal, 100 * sqrt(2) from first to last
LINE = [0.0, 1.0, 3.0, 6.0, 10.0, 15.0, 21.0, 28.0, 45.0, 70.0, 100.0]

CUBIC_POINTS = [[-4.0, -1.0], [0.0, 1.0], [1.0, 3.0], [6.0, -4.0], [5.0, 0.0]]


def _line_points(padding):
    """Points on the line, extended linearly by ``padding`` points per end."""
    x = torch.tensor(LINE, dtype=torch.float64)
    step_before = x[1] - x[0]
    step_after = x[-1] - x[-2]
    before = x[0] - step_before * torch.arange(padding, 0, -1, dtype=torch.float64)
    after = x[-1] + step_after * torch.arange(1, padding + 1, dtype=torch.float64)
    x = torch.cat([before, x, after])
    return torch.stack([x, x], dim=-1)


def _line_spline(name):
    from torchspline import spline

    builders = {
        "uniform_b": lambda: spline.uniform_cubic_b_spline(_line_points(1)),
        "uniform_cr": lambda: spline.uniform_cr_spline(_line_points(1)),
        "generic_b_3": lambda: spline.generic_b_spline(_line_points(1)),
        "generic_b_5": lambda: spline.generic_b_spline(_line_points(2), degree=5),
        "cubic_hermite_alpha_05": lambda: spline.cubic_hermite_spline(
            _line_points(1), alpha=0.5
        ),
        "cubic_hermite_alpha_1": lambda: spline.cubic_hermite_spline(
            _line_points(1), alpha=1.0
        ),
        "quintic_alpha_05": lambda: spline.quintic_hermite_spline(
            _line_points(2), alpha=0.5
        ),
        "quintic_alpha_1": lambda: spline.quintic_hermite_spline(
            _line_points(2), alpha=1.0
        ),
        "natural_alpha_05": lambda: spline.natural_spline(
            _line_points(0), alpha=0.5
        ),
        "natural_alpha_1": lambda: spline.natural_spline(
            _line_points(0), alpha=1.0
        ),
    }
    return builders[name]()


LINE_FAMILIES = [
    "uniform_b",
    "uniform_cr",
    "generic_b_3",
    "generic_b_5",
    "cubic_hermite_alpha_05",
    "cubic_hermite_alpha_1",
    "quintic_alpha_05",
    "quintic_alpha_1",
    "natural_alpha_05",
    "natural_alpha_1",
]

APPROXIMATING = ("uniform_b", "generic_b_3", "generic_b_5")

INTERPOLATING = [name for name in LINE_FAMILIES if name not in APPROXIMATING]


class TestArcLength:
    @pytest.mark.parametrize("name", LINE_FAMILIES)
    def test_total_length_is_full_arc_length(self, name):
        from torchspline.spline import (
            spline_arc_length,
            spline_max_t,
            spline_total_length,
        )

        spline = _line_spline(name)

        total = spline_total_length(spline)
        full = spline_arc_length(spline, 0.0, spline_max_t(spline))

        assert torch.equal(total, full)

    @pytest.mark.parametrize("name", INTERPOLATING)
    def test_collinear_total_length(self, name):
        from torchspline.spline import spline_total_length

        spline = _line_spline(name)

        torch.testing.assert_close(
            spline_total_length(spline),
            torch.tensor(100 * math.sqrt(2), dtype=torch.float64),
            rtol=1e-2,
            atol=0,
        )

    @pytest.mark.parametrize("name", LINE_FAMILIES)
    @pytest.mark.parametrize("fractions", [(0.0, 1.0), (0.2, 0.7), (0.51, 0.53)])
    def test_collinear_partial_length(self, name, fractions):
        """Along a line the arc length is the distance between the end points."""
        from torchspline.spline import (
            spline_arc_length,
            spline_max_t,
            spline_position,
        )

        spline = _line_spline(name)
        max_t = spline_max_t(spline)
        a = fractions[0] * max_t
        b = fractions[1] * max_t

        length = spline_arc_length(spline, a, b)
        distance = torch.linalg.vector_norm(
            spline_position(spline, b) - spline_position(spline, a)
        )

        torch.testing.assert_close(length, distance, rtol=1e-2, atol=0)

    def test_segment_lengths_sum_to_total(self):
        from torchspline.spline import (
            natural_spline,
            spline_segment_lengths,
            spline_total_length,
        )

        spline = natural_spline(
            torch.tensor(CUBIC_POINTS, dtype=torch.float64), alpha=0.5
        )

        lengths = spline_segment_lengths(spline)

        assert lengths.shape == (4,)
        assert torch.all(lengths > 0)
        torch.testing.assert_close(lengths.sum(), spline_total_length(spline))

    def test_additive(self):
        from torchspline.spline import cubic_hermite_spline, spline_arc_length

        spline = cubic_hermite_spline(
            torch.tensor(CUBIC_POINTS, dtype=torch.float64), alpha=0.5
        )
        a = 0.1
        m = 0.9 * spline.segment_knots[1].item()
        b = spline.segment_knots[-1].item()

        torch.testing.assert_close(
            spline_arc_length(spline, a, b),
            spline_arc_length(spline, a, m) + spline_arc_length(spline, m, b),
        )

    def test_reversed_bounds_negate(self):
        from torchspline.spline import natural_spline, spline_arc_length

        spline = natural_spline(torch.tensor(CUBIC_POINTS, dtype=torch.float64))

        torch.testing.assert_close(
            spline_arc_length(spline, 3.0, 1.0),
            -spline_arc_length(spline, 1.0, 3.0),
        )

    def test_empty_interval(self):
        from torchspline.spline import natural_spline, spline_arc_length

        spline = natural_spline(torch.tensor(CUBIC_POINTS, dtype=torch.float64))

        assert spline_arc_length(spline, 1.5, 1.5).item() == 0.0

    def test_matches_scipy_quad(self):
        from torchspline.spline import natural_spline, spline_arc_length, spline_tangent

        spline = natural_spline(
            torch.tensor(CUBIC_POINTS, dtype=torch.float64), alpha=1.0
        )

        def speed(t):
            tangent = spline_tangent(spline, float(t)).tangent
            return torch.linalg.vector_norm(tangent).item()

        b = spline.segment_knots[-1].item()
        expected, _ = scipy.integrate.quad(
            speed, 0.0, b, points=spline.segment_knots[1:-1].tolist(), limit=200
        )

        torch.testing.assert_close(
            spline_arc_length(spline, 0.0, b),
            torch.tensor(expected, dtype=torch.float64),
            rtol=1e-6,
            atol=1e-9,
        )

    def test_bounds_must_be_scalar(self):
        from torchspline.spline import natural_spline, spline_arc_length

        spline = natural_spline(torch.tensor(CUBIC_POINTS, dtype=torch.float64))

        with pytest.raises(ValueError):
            spline_arc_length(spline, torch.zeros(2), 1.0)

    def test_gradient_wrt_points(self):
        from torchspline.spline import natural_spline, spline_total_length

        points = torch.tensor(CUBIC_POINTS, dtype=torch.float64, requires_grad=True)

        length = spline_total_length(natural_spline(points))
        length.backward()

        assert points.grad is not None
        assert torch.isfinite(points.grad).all()
