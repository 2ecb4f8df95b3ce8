"""Tests for the uniform basis-matrix splines."""

import numpy as np
import pytest
import scipy.interpolate
import torch


@pytest.fixture
def points():
    return torch.tensor(
        [
            [-4.0, -1.0],
            [0.0, 1.0],
            [1.0, 3.0],
            [6.0, -4.0],
            [5.0, 0.0],
            [7.0, 2.0],
        ],
        dtype=torch.float64,
    )


class TestUniformCubicBSpline:
    def test_returns_tensorclass(self, points):
        from torchspline.spline import UniformCubicBSpline, uniform_cubic_b_spline

        spline = uniform_cubic_b_spline(points)

        assert isinstance(spline, UniformCubicBSpline)
        assert spline.coefficients.shape == (3, 4, 2)
        assert spline.segment_knots.shape == (4,)
        assert spline.extrapolate == "extrapolate"

    def test_domain(self, points):
        from torchspline.spline import spline_max_t, spline_t, uniform_cubic_b_spline

        spline = uniform_cubic_b_spline(points)

        assert spline_max_t(spline).item() == 3.0
        assert spline_t(spline, 0).item() == -1.0
        assert spline_t(spline, 1).item() == 0.0

    def test_position_at_knots(self, points):
        """At a knot the curve is (P[i] + 4 P[i+1] + P[i+2]) / 6."""
        from torchspline.spline import spline_position, uniform_cubic_b_spline

        spline = uniform_cubic_b_spline(points)

        t = torch.arange(4, dtype=torch.float64)
        expected = (points[:-2] + 4 * points[1:-1] + points[2:]) / 6

        torch.testing.assert_close(spline_position(spline, t), expected)

    def test_matches_scipy(self, points):
        from torchspline.spline import spline_wiggle, uniform_cubic_b_spline

        spline = uniform_cubic_b_spline(points)
        n = points.shape[0]

        reference = scipy.interpolate.BSpline(
            np.arange(n + 4, dtype=np.float64) - 3, points.numpy(), 3
        )

        t = torch.linspace(0, 3, 31, dtype=torch.float64)
        result = spline_wiggle(spline, t)

        for nu, value in enumerate(result):
            expected = reference(t.numpy(), nu=nu)
            torch.testing.assert_close(value, torch.from_numpy(expected))

    def test_too_few_points(self):
        from torchspline.spline import KnotError, uniform_cubic_b_spline

        with pytest.raises(KnotError):
            uniform_cubic_b_spline(torch.zeros(3, 2, dtype=torch.float64))

    def test_points_must_be_2d(self):
        from torchspline.spline import uniform_cubic_b_spline

        with pytest.raises(ValueError):
            uniform_cubic_b_spline(torch.zeros(6, dtype=torch.float64))

    def test_integer_points_promoted(self):
        from torchspline.spline import uniform_cubic_b_spline

        spline = uniform_cubic_b_spline(torch.arange(8).reshape(4, 2))

        assert spline.points.is_floating_point()


class TestUniformCRSpline:
    def test_interpolates_inner_points(self, points):
        from torchspline.spline import spline_position, uniform_cr_spline

        spline = uniform_cr_spline(points)

        t = torch.arange(4, dtype=torch.float64)

        torch.testing.assert_close(spline_position(spline, t), points[1:-1])

    def test_tangent_at_knots(self, points):
        """Tangent at P[i] is (P[i+1] - P[i-1]) / 2."""
        from torchspline.spline import spline_tangent, uniform_cr_spline

        spline = uniform_cr_spline(points)

        t = torch.arange(4, dtype=torch.float64)
        expected = (points[2:] - points[:-2]) / 2

        torch.testing.assert_close(spline_tangent(spline, t).tangent, expected)

    def test_original_points(self, points):
        from torchspline.spline import spline_original_points, uniform_cr_spline

        spline = uniform_cr_spline(points)
        original = spline_original_points(spline)

        torch.testing.assert_close(original, points)
        assert original.data_ptr() != spline.points.data_ptr()

    def test_curvature_jumps_at_knots(self, points):
        """Catmull-Rom is C1 only, curvature differs across a knot."""
        from torchspline.spline import spline_curvature, uniform_cr_spline

        spline = uniform_cr_spline(points)

        eps = 1e-9
        t = torch.tensor([1.0 - eps, 1.0 + eps], dtype=torch.float64)
        result = spline_curvature(spline, t)

        torch.testing.assert_close(
            result.tangent[0], result.tangent[1], atol=1e-6, rtol=0
        )
        assert not torch.allclose(result.curvature[0], result.curvature[1])
