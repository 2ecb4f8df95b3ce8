"""Benchmark spline construction, arc length and length inversion.

Times each family over growing control point counts to check that the
natural spline's tridiagonal solve and the batched quadrature scale
linearly with the number of segments.
"""

import time

import torch

from torchspline.spline import (
    cubic_hermite_spline,
    generic_b_spline,
    natural_spline,
    quintic_hermite_spline,
    spline_solve_length,
    spline_total_length,
    uniform_cubic_b_spline,
)

FAMILIES = {
    "uniform_b": uniform_cubic_b_spline,
    "generic_b_5": lambda p: generic_b_spline(p, degree=5),
    "hermite": lambda p: cubic_hermite_spline(p, alpha=0.5),
    "quintic": lambda p: quintic_hermite_spline(p, alpha=0.5),
    "natural": lambda p: natural_spline(p, alpha=0.5),
}


def _time(fn, n_iterations: int) -> float:
    # Warmup
    for _ in range(3):
        fn()

    start = time.perf_counter()
    for _ in range(n_iterations):
        fn()

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000  # ms


def benchmark_family(
    name: str, n_points: int, n_iterations: int = 10
) -> tuple[float, float, float]:
    """Benchmark one family at a given size.

    Parameters
    ----------
    name : str
        Key into ``FAMILIES``.
    n_points : int
        Number of control points.
    n_iterations : int
        Number of iterations for timing.

    Returns
    -------
    tuple[float, float, float]
        Average construction, total length and inversion time in
        milliseconds.
    """
    points = torch.randn(n_points, 3, dtype=torch.float64).cumsum(dim=0)
    build = FAMILIES[name]
    spline = build(points)

    total = spline_total_length(spline)
    lengths = torch.linspace(0, 1, 64, dtype=torch.float64) * total

    ms_build = _time(lambda: build(points), n_iterations)
    ms_length = _time(lambda: spline_total_length(spline), n_iterations)
    ms_solve = _time(
        lambda: spline_solve_length(spline, 0.0, lengths), n_iterations
    )

    return ms_build, ms_length, ms_solve


def main():
    """Run benchmarks across families and sizes."""
    sizes = [16, 64, 256, 1024]

    print("Spline Arc Length Benchmark")
    print("=" * 70)
    print(
        f"{'Family':>12} {'Points':>8} {'Build (ms)':>12} "
        f"{'Length (ms)':>12} {'Solve (ms)':>12}"
    )
    print("-" * 70)

    for name in FAMILIES:
        for n_points in sizes:
            ms_build, ms_length, ms_solve = benchmark_family(name, n_points)
            print(
                f"{name:>12} {n_points:>8} {ms_build:>12.3f} "
                f"{ms_length:>12.3f} {ms_solve:>12.3f}"
            )

    print("=" * 70)


if __name__ == "__main__":
    main()
