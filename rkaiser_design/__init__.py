"""
rkaiser-design - Root-Nyquist Kaiser-Windowed Sinc Filter Design
================================================================

Frequency-shifted root-Nyquist FIR filters for pulse shaping and matched
filtering, built from a Kaiser-windowed sinc whose bandwidth adjustment is
tuned to minimize inter-symbol interference.

Key Features:
- Empirical estimate of the bandwidth adjustment factor rho
- Parabolic search refining rho against the measured ISI
- Numba-accelerated window synthesis and ISI measurement
- Approximate (estimate-only) design for quick use
- Regression calibration over (m, beta) grids

Quick Start:
    >>> from rkaiser_design import design_rkaiser_filter
    >>> h = design_rkaiser_filter(k=2, m=3, beta=0.3)
    >>> len(h), round(float((h**2).sum()), 6)
    (13, 2.0)
"""

__version__ = "1.0.0"

# Parameters and errors
from .preprocessing.validation import (
    InvalidArgumentError,
    FilterSpec,
    normalize_filter_energy
)

# Core algorithms
from .core.rho_estimation import estimate_rho, rho_regression_coefficients
from .core.isi import IsiMetrics, measure_filter_isi
from .core.kaiser_window import design_kaiser_fir, kaiser_beta_As
from .core.optimizer import OptimizationResult, parabolic_search

# Design
from .models.rkaiser import (
    RKaiserDesigner,
    RKaiserDesignResult,
    design_rkaiser_filter,
    design_rkaiser_filter_approximate,
    design_rkaiser_filter_with_rho,
    rkaiser_filter_isi
)

# Data handling
from .preprocessing.loader import load_coefficients

# Calibration
from .calibration.optimization import run_rho_calibration, fit_rho_regression

# Analysis
from .postprocessing import (
    compute_frequency_response,
    compute_matched_response,
    estimate_stopband_attenuation
)

__all__ = [
    # Design entry points
    'design_rkaiser_filter',
    'design_rkaiser_filter_approximate',
    'design_rkaiser_filter_with_rho',
    'RKaiserDesigner',
    'RKaiserDesignResult',

    # Parameters and errors
    'FilterSpec',
    'InvalidArgumentError',

    # Building blocks
    'estimate_rho',
    'rho_regression_coefficients',
    'rkaiser_filter_isi',
    'parabolic_search',
    'OptimizationResult',
    'design_kaiser_fir',
    'kaiser_beta_As',
    'measure_filter_isi',
    'IsiMetrics',
    'normalize_filter_energy',

    # Data handling
    'load_coefficients',

    # Calibration
    'run_rho_calibration',
    'fit_rho_regression',

    # Analysis
    'compute_frequency_response',
    'compute_matched_response',
    'estimate_stopband_attenuation',

    # Metadata
    '__version__',
]


def get_version_info() -> dict:
    """Get detailed version information."""
    return {
        'version': __version__,
        'features': [
            'Regression estimate of the bandwidth adjustment',
            'ISI-minimizing parabolic search',
            'Numba-accelerated Kaiser window synthesis',
            'Regression calibration',
        ]
    }
