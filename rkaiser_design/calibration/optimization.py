"""
Bandwidth Adjustment Calibration Module
=======================================
Runs the exact (ISI-optimized) design over a grid of filter delays and
excess bandwidths, then refits the regression rho = c0 + c1*ln(beta - c2)
used for the initial estimate. This is how the tabulated coefficients for
m = 1..6 are reproduced or extended to other delays.
"""

import numpy as np
from tqdm import tqdm
from typing import Dict, List, Optional
import warnings

from ..core.rho_estimation import rho_regression_coefficients
from ..models.rkaiser import RKaiserDesigner


def fit_rho_regression(
    beta: np.ndarray,
    rho: np.ndarray,
    c2_grid: Optional[np.ndarray] = None
) -> Dict[str, float]:
    """
    Fits rho = c0 + c1*ln(beta - c2).

    c2 is found by grid search; for each candidate, (c0, c1) follow from
    linear least squares in ln(beta - c2).

    Args:
        beta: Excess bandwidth samples.
        rho: Optimum rho at each beta.
        c2_grid: Candidate offsets; all must be below min(beta).
                 Default: 400 points in [0, 0.999*min(beta)).

    Returns:
        Dictionary with 'c0', 'c1', 'c2' and the fit 'rmse'.
    """
    beta = np.asarray(beta, dtype=np.float64)
    rho = np.asarray(rho, dtype=np.float64)

    valid = np.isfinite(beta) & np.isfinite(rho)
    beta, rho = beta[valid], rho[valid]
    if len(beta) < 3:
        raise ValueError(f"Need at least 3 finite (beta, rho) samples, got {len(beta)}")

    if c2_grid is None:
        c2_grid = np.linspace(0.0, 0.999 * np.min(beta), 400, endpoint=False)
    c2_grid = np.asarray(c2_grid, dtype=np.float64)
    c2_grid = c2_grid[c2_grid < np.min(beta)]
    if len(c2_grid) == 0:
        raise ValueError("No c2 candidates below min(beta)")

    best = None
    for c2 in c2_grid:
        X = np.column_stack([np.ones_like(beta), np.log(beta - c2)])
        coef, _, _, _ = np.linalg.lstsq(X, rho, rcond=None)
        rmse = float(np.sqrt(np.mean((X @ coef - rho)**2)))
        if best is None or rmse < best['rmse']:
            best = {'c0': float(coef[0]), 'c1': float(coef[1]), 'c2': float(c2), 'rmse': rmse}

    return best


def run_rho_calibration(
    m_values: List[int] = [1, 2, 3, 4, 5, 6],
    beta_grid: Optional[List[float]] = None,
    k: int = 2,
    dt: float = 0.0,
    c2_grid: Optional[np.ndarray] = None,
    max_iterations: int = 10,
    verbose: bool = True,
    plot: bool = False
) -> Dict:
    """
    Builds the optimum-rho table over (m, beta) and refits the regression
    for every m.

    Args:
        m_values: Filter delays to calibrate.
        beta_grid: Excess bandwidths (default: 0.05..0.95 in 0.05 steps).
        k: Samples per symbol used for the designs.
        dt: Fractional sample delay used for the designs.
        c2_grid: Candidate c2 values passed to ``fit_rho_regression``.
        max_iterations: Parabolic search iteration cap.
        verbose: Print progress and the fitted table.
        plot: Show a heatmap of the rho table.

    Returns:
        Dictionary containing the rho/ISI tables and per-m coefficients.
    """
    if beta_grid is None:
        beta_grid = np.round(np.arange(0.05, 0.951, 0.05), 2)
    beta_grid = np.asarray(beta_grid, dtype=np.float64)
    m_values = [int(m) for m in m_values]

    if verbose:
        print(f"\nStarting rho calibration (k={k}, dt={dt})...")
        print(f"   {len(m_values)} delays x {len(beta_grid)} excess bandwidths")

    designer = RKaiserDesigner(max_iterations=max_iterations, verbose=False)

    rho_table = np.zeros((len(m_values), len(beta_grid)))
    isi_table = np.zeros((len(m_values), len(beta_grid)))

    if verbose:
        pbar = tqdm(total=rho_table.size, unit="design", desc="Calibration")

    for i, m in enumerate(m_values):
        for j, beta in enumerate(beta_grid):
            result = designer.design(k, m, beta, dt, caller="run_rho_calibration")
            rho_table[i, j] = result.rho
            isi_table[i, j] = result.isi.mse
            if verbose:
                pbar.update(1)

    if verbose:
        pbar.close()

    coefficients = {}
    for i, m in enumerate(m_values):
        try:
            coefficients[m] = fit_rho_regression(beta_grid, rho_table[i], c2_grid)
        except (ValueError, np.linalg.LinAlgError) as e:
            warnings.warn(f"Regression fit failed for m={m}: {e}", UserWarning)

    result = {
        'k': k,
        'dt': dt,
        'm_values': m_values,
        'beta_grid': beta_grid,
        'rho_table': rho_table,
        'isi_table': isi_table,
        'coefficients': coefficients,
    }

    if verbose:
        print(f"\n{'m':<4} | {'c0':<10} | {'c1':<10} | {'c2':<10} | {'RMSE':<8} | {'tabulated (c0, c1, c2)'}")
        print("-" * 80)
        for m, c in coefficients.items():
            ref = rho_regression_coefficients(m)
            print(f"{m:<4} | {c['c0']:<10.6f} | {c['c1']:<10.6f} | {c['c2']:<10.6f} | "
                  f"{c['rmse']:<8.5f} | ({ref[0]:.4f}, {ref[1]:.4f}, {ref[2]:.4f})")

    if plot:
        from ..visualization import plot_rho_table
        plot_rho_table(result)

    return result
