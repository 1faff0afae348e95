"""
Calibration of the bandwidth adjustment regression.
"""

from .optimization import fit_rho_regression, run_rho_calibration

__all__ = ['fit_rho_regression', 'run_rho_calibration']
