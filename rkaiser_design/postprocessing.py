"""
Analysis of designed filters: spectrum, matched-filter cascade and
stopband level.
"""

import numpy as np
from typing import Tuple


def compute_frequency_response(h: np.ndarray, n_fft: int = 4096) -> Tuple[np.ndarray, np.ndarray]:
    """
    Magnitude response of a real FIR filter.

    Args:
        h: Filter taps
        n_fft: FFT size, zero-padded (default: 4096)

    Returns:
        f: Frequencies in [0, 0.5] cycles/sample
        H_db: Magnitude in dB relative to the DC gain
    """
    h = np.asarray(h, dtype=np.float64)
    n_fft = max(int(n_fft), len(h))

    H = np.abs(np.fft.rfft(h, n_fft))
    f = np.fft.rfftfreq(n_fft)

    # Avoid log of zero
    ref = H[0] if H[0] > 0 else np.max(H)
    with np.errstate(divide='ignore'):
        H_db = 20 * np.log10(H / ref)
    return f, H_db


def compute_matched_response(h: np.ndarray, k: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Transmit/receive cascade of a root-Nyquist filter.

    Args:
        h: Filter taps, length 2*k*m+1
        k: Samples per symbol

    Returns:
        g: Cascade h * h normalized to a unit peak, length 2*len(h)-1
        g_sym: Cascade sampled every k samples, aligned on the peak
    """
    h = np.asarray(h, dtype=np.float64)
    g = np.convolve(h, h)
    g = g / g[len(h) - 1]

    centre = len(h) - 1
    g_sym = g[centre % k::k]
    return g, g_sym


def estimate_stopband_attenuation(h: np.ndarray, k: int, beta: float,
                                  n_fft: int = 4096) -> float:
    """
    Peak sidelobe level beyond the band edge (1 + beta) / (2k), in dB.

    Returns a positive attenuation, e.g. 45.0 for sidelobes at -45 dB.
    """
    f, H_db = compute_frequency_response(h, n_fft)
    band_edge = (1 + beta) / (2 * k)
    stopband = H_db[f >= band_edge]
    if len(stopband) == 0:
        raise ValueError(f"No stopband bins above f={band_edge:.4f} with n_fft={n_fft}")
    return float(-np.max(stopband))
