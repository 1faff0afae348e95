"""
Core root-Nyquist Kaiser design algorithms.
"""

from .kaiser_window import design_kaiser_fir, kaiser_beta_As, kaiser_window
from .isi import IsiMetrics, measure_filter_isi
from .rho_estimation import estimate_rho, rho_regression_coefficients
from .optimizer import OptimizationResult, parabolic_search

__all__ = [
    'design_kaiser_fir',
    'kaiser_beta_As',
    'kaiser_window',
    'IsiMetrics',
    'measure_filter_isi',
    'estimate_rho',
    'rho_regression_coefficients',
    'OptimizationResult',
    'parabolic_search'
]
