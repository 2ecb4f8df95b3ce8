"""Argument checks shared by the spline constructors."""

import torch
from torch import Tensor

from ._knot_error import KnotError

EXTRAPOLATE_MODES = ("error", "clamp", "extrapolate", "periodic")


def validate_points(points: Tensor, min_points: int, family: str) -> Tensor:
    """Check control points and return a floating copy of shape (n, d)."""
    points = torch.as_tensor(points)

    if points.dim() != 2:
        raise ValueError(
            f"{family} control points must have shape (n, d), got {tuple(points.shape)}"
        )
    if not points.is_floating_point():
        points = points.to(torch.get_default_dtype())
    if points.shape[0] < min_points:
        raise KnotError(
            f"{family} requires at least {min_points} control points, "
            f"got {points.shape[0]}"
        )

    return points.clone()


def validate_extrapolate(extrapolate: str, loop: bool = False) -> str:
    """Check an out-of-domain policy against the curve topology."""
    if extrapolate not in EXTRAPOLATE_MODES:
        raise ValueError(
            f"Unknown extrapolate mode {extrapolate!r}, "
            f"expected one of {EXTRAPOLATE_MODES}"
        )
    if extrapolate == "periodic" and not loop:
        raise ValueError("extrapolate='periodic' requires a looping spline")
    return extrapolate
