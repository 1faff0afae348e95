"""
Inter-Symbol Interference Measurement
=====================================

Scores a root-Nyquist candidate by its matched-filter cascade. The cascade
h * h is the filter's autocorrelation, so the ISI at the i-th symbol offset
is rxx(i*k) / rxx(0). Both the RMS and the peak over the 2m symbol offsets
inside the filter span are reported.
"""

import numpy as np
from numba import njit
from typing import NamedTuple


class IsiMetrics(NamedTuple):
    """RMS (``mse``) and peak (``max``) ISI relative to the main response."""
    mse: float
    max: float


@njit(cache=True)
def filter_autocorr(h: np.ndarray, lag: int) -> float:
    """Compute rxx(lag) = sum_i h[i] * h[i - lag] for a real filter."""
    n = len(h)
    acc = 0.0
    for i in range(lag, n):
        acc += h[i] * h[i - lag]
    return acc


@njit(cache=True)
def _filter_isi_numba(h, k, m):
    rxx0 = filter_autocorr(h, 0)
    isi_mse = 0.0
    isi_max = 0.0
    for i in range(1, 2 * m + 1):
        e = abs(filter_autocorr(h, i * k)) / rxx0
        isi_mse += e * e
        if i == 1 or e > isi_max:
            isi_max = e
    return np.sqrt(isi_mse / (2 * m)), isi_max


def measure_filter_isi(h: np.ndarray, k: int, m: int) -> IsiMetrics:
    """
    Measure ISI of a root-Nyquist filter of length 2*k*m+1.

    Args:
        h: Filter taps, shape (2*k*m+1,)
        k: Samples per symbol
        m: Filter delay in symbols

    Returns:
        IsiMetrics(mse, max)

    Raises:
        ValueError: If the length does not match k and m, or the filter
                    has zero energy
    """
    h = np.ascontiguousarray(h, dtype=np.float64)
    if k < 1 or m < 1:
        raise ValueError(f"measure_filter_isi(): k and m must be positive, got k={k}, m={m}")
    if h.ndim != 1 or len(h) != 2 * k * m + 1:
        raise ValueError(
            f"measure_filter_isi(): expected {2 * k * m + 1} taps for k={k}, m={m}, "
            f"got shape {h.shape}"
        )
    if not np.any(h):
        raise ValueError("measure_filter_isi(): filter has zero energy")

    isi_mse, isi_max = _filter_isi_numba(h, int(k), int(m))
    return IsiMetrics(mse=float(isi_mse), max=float(isi_max))
