"""
Coefficient Loading Utilities
=============================

Reads designs written by ``RKaiserDesignResult.save`` back into memory
with validation.
"""

import json
import numpy as np
from typing import Optional, Tuple
import os


def load_coefficients(coeff_file: str,
                      info_file: Optional[str] = None,
                      verbose: bool = True) -> Tuple[np.ndarray, Optional[dict]]:
    """
    Loads filter coefficients and, optionally, the design metadata.

    Parameters
    ----------
    coeff_file : str
        Path to a text file with one tap per line
    info_file : str, optional
        Path to the JSON metadata written alongside the taps
    verbose : bool
        Print loading progress

    Returns
    -------
    h, info
        Taps as float64 array and the metadata dict (None if not given)
    """
    for filepath, name in [(coeff_file, "coefficients"), (info_file, "info")]:
        if filepath is not None and not os.path.exists(filepath):
            raise FileNotFoundError(f"{name} file not found: {filepath}")

    if verbose:
        print(f"Loading coefficients: {coeff_file}")
    h = np.loadtxt(coeff_file, dtype=np.float64, ndmin=1)

    if h.ndim != 1:
        raise ValueError(f"Expected a single column of taps, got shape {h.shape}")
    if len(h) % 2 == 0:
        raise ValueError(f"Root-Nyquist filters have odd length 2*k*m+1, got {len(h)} taps")

    if verbose:
        print(f"  ✓ {len(h)} taps, energy {np.sum(h * h):.6f}")

    info = None
    if info_file is not None:
        with open(info_file, 'r') as f:
            info = json.load(f)

        n_expected = 2 * info['k'] * info['m'] + 1
        if n_expected != len(h):
            raise ValueError(
                f"Tap count ({len(h)}) != 2*k*m+1 ({n_expected}) from {info_file}"
            )
        if verbose:
            print(f"  ✓ k={info['k']}, m={info['m']}, beta={info['beta']}, "
                  f"rho={info['rho']:.6f} ({info['method']})")

    return h, info
