"""
Successive Parabolic Interpolation Search
=========================================

Derivative-free refinement of the bandwidth adjustment factor rho.

Each iteration evaluates the objective at the centre of the bracket
[x0, x2], fits a parabola through the three points and moves to its
vertex. The bracket then keeps the half on the vertex's side of the
centre point:

- vertex above the centre: x0 <- x1
- otherwise:               x2 <- x1

The rule looks at the vertex position, not at the evaluated costs, so it
relies on the cost being locally unimodal around the initial estimate.
There is no tolerance test; the search stops after ``max_iterations`` or
when the parabola degenerates (denominator below ``tol``, or a
non-finite cost), in which case the previous vertex is kept.
"""

import numpy as np
from typing import Callable, List, NamedTuple, Tuple


class OptimizationResult(NamedTuple):
    """Outcome of a parabolic search."""
    rho: float
    rho_hat: float
    n_iter: int
    n_evaluations: int
    degenerate: bool
    trace: List[Tuple[int, float, float, float, float]]


def parabola_vertex(x0: float, y0: float,
                    x1: float, y1: float,
                    x2: float, y2: float) -> Tuple[float, float]:
    """
    Numerator and denominator of the vertex of the parabola through three
    points; the vertex abscissa is 0.5 * t0 / t1.
    """
    t0 = (y0 * (x1 * x1 - x2 * x2) +
          y1 * (x2 * x2 - x0 * x0) +
          y2 * (x0 * x0 - x1 * x1))
    t1 = (y0 * (x1 - x2) +
          y1 * (x2 - x0) +
          y2 * (x0 - x1))
    return t0, t1


def parabolic_search(
    objective: Callable[[float], float],
    rho_hat: float,
    max_iterations: int = 10,
    bracket: Tuple[float, float] = (0.9, 1.1),
    tol: float = 1e-9,
    verbose: bool = False
) -> OptimizationResult:
    """
    Minimize ``objective`` around an initial estimate by successive
    parabolic interpolation.

    Args:
        objective: Cost as a function of rho (RMS ISI for filter design)
        rho_hat: Initial estimate; the bracket starts at
                 [bracket[0]*rho_hat, bracket[1]*rho_hat]
        max_iterations: Iteration cap (default: 10)
        bracket: Relative bracket around rho_hat (default: (0.9, 1.1))
        tol: Minimum magnitude of the parabola denominator (default: 1e-9)
        verbose: Print rho and the cost in dB after each iteration. This
                 costs one extra objective evaluation per iteration.

    Returns:
        OptimizationResult with the final vertex as ``rho``
    """
    n_evaluations = 0

    def evaluate(x):
        nonlocal n_evaluations
        n_evaluations += 1
        return objective(x)

    x0 = rho_hat * bracket[0]
    x2 = rho_hat * bracket[1]
    y0 = evaluate(x0)
    y2 = evaluate(x2)

    x_hat = rho_hat
    degenerate = False
    trace = []
    n_iter = 0

    for p in range(max_iterations):
        x1 = 0.5 * (x0 + x2)
        y1 = evaluate(x1)

        t0, t1 = parabola_vertex(x0, y0, x1, y1, x2, y2)

        if abs(t1) < tol or not np.isfinite(t1):
            degenerate = True
            break

        x_hat = 0.5 * t0 / t1
        n_iter = p + 1
        trace.append((n_iter, x0, x1, x2, x_hat))

        if x_hat > x1:
            x0, y0 = x1, y1
        else:
            x2, y2 = x1, y1

        if verbose:
            # diagnostics only, not counted towards the search
            y_hat = objective(x_hat)
            with np.errstate(divide='ignore'):
                isi_db = 20 * np.log10(y_hat)
            print(f"  {n_iter:4d} : rho={x_hat:12.8f}, isi={isi_db:12.6f} dB")

    if verbose and degenerate:
        print(f"  search stopped after {n_iter} iterations (flat parabola)")

    return OptimizationResult(
        rho=float(x_hat),
        rho_hat=float(rho_hat),
        n_iter=n_iter,
        n_evaluations=n_evaluations,
        degenerate=degenerate,
        trace=trace
    )
