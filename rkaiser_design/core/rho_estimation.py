"""
Bandwidth Adjustment Estimation
===============================

Empirical regression for the rho factor that shifts the Kaiser-windowed
sinc cutoff so its self-convolution approaches a Nyquist pulse:

    rho_hat = c0 + c1 * ln(beta - c2)

The coefficients were fitted per filter delay m. Delays 1..6 use the
tabulated fits; longer filters use smooth fits of the coefficients
themselves.
"""

import numpy as np
from typing import Tuple

from ..preprocessing.validation import InvalidArgumentError


# (c0, c1, c2) per filter delay m
RHO_REGRESSION_TABLE = {
    1: (0.78583556, 0.05439958, 0.37818679),
    2: (0.82194722, 0.06170731, 0.16362774),
    3: (0.84686762, 0.07475776, 0.05263769),
    4: (0.86538726, 0.07374587, 0.03491642),
    5: (0.87861007, 0.06981039, 0.03553645),
    6: (0.88901162, 0.06708569, 0.03459680),
}


def rho_regression_coefficients(m: int) -> Tuple[float, float, float]:
    """
    Regression coefficients (c0, c1, c2) for filter delay ``m``.

    Args:
        m: Filter delay in symbols (>= 1)

    Returns:
        Tuple (c0, c1, c2)
    """
    if m < 1:
        raise InvalidArgumentError(
            f"rho_regression_coefficients(): m must be greater than 0, got {m}"
        )

    if m in RHO_REGRESSION_TABLE:
        return RHO_REGRESSION_TABLE[m]

    c0 = 0.057918 * np.log(m) + 0.784313
    if m <= 3:
        c1 = 0.0099427 * m + 0.0447250
    else:
        c1 = -0.0026685 * m + 0.0835030
    c2 = 0.03373 + np.exp(-0.30382 * m * m - 0.19451 * m - 0.56171)
    return float(c0), float(c1), float(c2)


def estimate_rho(m: int, beta: float) -> float:
    """
    Approximate bandwidth adjustment factor from filter delay and excess
    bandwidth.

    Args:
        m: Filter delay in symbols (>= 1)
        beta: Excess bandwidth factor in [0, 1]

    Returns:
        rho_hat in [0, 1]

    Raises:
        InvalidArgumentError: If m < 1 or beta is outside [0, 1]
    """
    if m < 1:
        raise InvalidArgumentError(f"estimate_rho(): m must be greater than 0, got {m}")
    if not (0.0 <= beta <= 1.0):
        raise InvalidArgumentError(f"estimate_rho(): beta must be in [0,1], got {beta}")

    c0, c1, c2 = rho_regression_coefficients(m)

    # keep the log argument positive
    if c2 >= beta:
        c2 = 0.999 * beta

    arg = beta - c2
    log_term = np.log(arg) if arg > 0 else -np.inf
    rho_hat = c0 + c1 * log_term

    return float(min(max(rho_hat, 0.0), 1.0))
