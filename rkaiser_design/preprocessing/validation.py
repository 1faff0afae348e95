"""
Parameter validation and energy normalization for filter designs.
"""

import numpy as np
from typing import NamedTuple, Optional


class InvalidArgumentError(ValueError):
    """Raised when design parameters are outside their valid ranges."""


class FilterSpec(NamedTuple):
    """
    Root-Nyquist filter parameters.

    k: samples per symbol, m: filter delay in symbols, beta: excess
    bandwidth, dt: fractional sample delay.
    """
    k: int
    m: int
    beta: float
    dt: float = 0.0

    @property
    def n(self) -> int:
        """Filter length 2*k*m+1."""
        return 2 * self.k * self.m + 1


def validate_filter_spec(k: int, m: int, beta: float, dt: float = 0.0,
                         caller: str = "design_rkaiser_filter") -> FilterSpec:
    """
    Check design parameters and pack them into a FilterSpec.

    Args:
        k: Samples per symbol (>= 2)
        m: Filter delay in symbols (>= 1)
        beta: Excess bandwidth factor, open interval (0, 1)
        dt: Fractional sample delay in [-1, 1]
        caller: Entry point name used in error messages

    Returns:
        FilterSpec

    Raises:
        InvalidArgumentError: On the first violated constraint
    """
    if int(k) != k or k < 2:
        raise InvalidArgumentError(f"{caller}(), k must be an integer of at least 2, got {k}")
    if int(m) != m or m < 1:
        raise InvalidArgumentError(f"{caller}(), m must be an integer of at least 1, got {m}")
    if not (0.0 < beta < 1.0):
        raise InvalidArgumentError(f"{caller}(), beta must be in (0,1), got {beta}")
    if not (-1.0 <= dt <= 1.0):
        raise InvalidArgumentError(f"{caller}(), dt must be in [-1,1], got {dt}")

    return FilterSpec(k=int(k), m=int(m), beta=float(beta), dt=float(dt))


def validate_output_buffer(out: Optional[np.ndarray], n: int,
                           caller: str = "design_rkaiser_filter") -> None:
    """Check that a caller-supplied buffer can hold ``n`` real taps."""
    if out is None:
        return
    if not isinstance(out, np.ndarray):
        raise InvalidArgumentError(f"{caller}(), out must be a numpy array")
    if out.shape != (n,):
        raise InvalidArgumentError(
            f"{caller}(), out must have shape ({n},), got {out.shape}"
        )
    if not np.issubdtype(out.dtype, np.floating):
        raise InvalidArgumentError(
            f"{caller}(), out must have a floating dtype, got {out.dtype}"
        )


def normalize_filter_energy(h: np.ndarray, k: int) -> np.ndarray:
    """
    Scale taps so that sum(h**2) == k (unit energy per symbol).

    Args:
        h: Filter taps
        k: Samples per symbol

    Returns:
        Rescaled copy of h
    """
    h = np.asarray(h, dtype=np.float64)
    e2 = float(np.sum(h * h))
    if e2 <= 0 or not np.isfinite(e2):
        raise ValueError(f"normalize_filter_energy(): cannot normalize filter with energy {e2}")
    return h * np.sqrt(k / e2)
