"""
Kaiser-Windowed Sinc FIR Synthesizer
====================================

Generic lowpass FIR design by the window method:

1. **Sinc prototype**: ideal lowpass response truncated to ``n`` taps and
   shifted by a fractional sample delay ``mu``
2. **Kaiser window**: shape factor derived from the target stopband
   attenuation with Kaiser's empirical formula
3. **Numba kernels**: the tap loop and the Bessel series are compiled

References:
- Kaiser (1974) - Nonrecursive digital filter design using the I0-sinh window
- Vaidyanathan (1993) - Multirate Systems and Filter Banks, Section 3.2.1
"""

import numpy as np
from numba import njit


@njit(cache=True)
def besseli0(x: float) -> float:
    """
    Zeroth-order modified Bessel function of the first kind.

    Power series I0(x) = sum_k ((x/2)^k / k!)^2, summed until the next
    term no longer changes the result at double precision.
    """
    y = 0.5 * x
    term = 1.0
    total = 1.0
    for k in range(1, 500):
        r = y / k
        term *= r * r
        total += term
        if term < 1e-17 * total:
            break
    return total


def kaiser_beta_As(As: float) -> float:
    """
    Kaiser window shape factor for a stopband attenuation of ``As`` dB.

    Args:
        As: Target stopband attenuation in dB (sign is ignored)

    Returns:
        Shape factor beta >= 0
    """
    As = abs(As)
    if As > 50.0:
        return 0.1102 * (As - 8.7)
    elif As > 21.0:
        return 0.5842 * (As - 21.0) ** 0.4 + 0.07886 * (As - 21.0)
    return 0.0


@njit(cache=True)
def _kaiser_window_numba(n, beta, mu):
    """Kaiser window of length n, sampled with fractional offset mu."""
    w = np.empty(n, dtype=np.float64)
    b = besseli0(beta)
    for i in range(n):
        t = i - (n - 1) / 2.0 + mu
        r = 2.0 * t / n
        arg = 1.0 - r * r
        if arg < 0.0:
            # fractional delay pushed the sample outside the window support
            w[i] = 0.0
        else:
            w[i] = besseli0(beta * np.sqrt(arg)) / b
    return w


@njit(cache=True)
def _windowed_sinc_numba(n, fc, beta, mu):
    """Sinc(fc*t) weighted by the Kaiser window, t centred on (n-1)/2 - mu."""
    w = _kaiser_window_numba(n, beta, mu)
    h = np.empty(n, dtype=np.float64)
    for i in range(n):
        t = i - (n - 1) / 2.0 + mu
        x = np.pi * fc * t
        if x == 0.0:
            s = 1.0
        else:
            s = np.sin(x) / x
        h[i] = s * w[i]
    return h


def kaiser_window(n: int, beta: float, mu: float = 0.0) -> np.ndarray:
    """
    Kaiser window with optional fractional sample offset.

    Args:
        n: Window length (>= 1)
        beta: Shape factor (>= 0)
        mu: Fractional sample offset in [-1, 1]

    Returns:
        Window samples, shape (n,)
    """
    if n < 1:
        raise ValueError(f"kaiser_window(): n must be at least 1, got {n}")
    if beta < 0:
        raise ValueError(f"kaiser_window(): beta must be non-negative, got {beta}")
    if mu < -1.0 or mu > 1.0:
        raise ValueError(f"kaiser_window(): mu must be in [-1,1], got {mu}")
    return _kaiser_window_numba(int(n), float(beta), float(mu))


def design_kaiser_fir(n: int, fc: float, As: float, mu: float = 0.0) -> np.ndarray:
    """
    Design a Kaiser-windowed sinc lowpass filter.

    The prototype is sinc(fc*t) with t = i - (n-1)/2 + mu, so ``fc`` is the
    cutoff relative to half the sample rate (fc = 1 is Nyquist).

    Args:
        n: Filter length (>= 1)
        fc: Normalized cutoff frequency. sinc is even, so the sign is
            irrelevant; fc = 0 gives the bare window.
        As: Stopband attenuation in dB, sets the window shape factor
        mu: Fractional sample delay in [-1, 1]

    Returns:
        Filter taps, shape (n,), float64
    """
    if n < 1:
        raise ValueError(f"design_kaiser_fir(): n must be at least 1, got {n}")
    if not np.isfinite(fc):
        raise ValueError(f"design_kaiser_fir(): fc must be finite, got {fc}")
    if mu < -1.0 or mu > 1.0:
        raise ValueError(f"design_kaiser_fir(): mu must be in [-1,1], got {mu}")

    beta = kaiser_beta_As(As)
    return _windowed_sinc_numba(int(n), float(fc), float(beta), float(mu))
