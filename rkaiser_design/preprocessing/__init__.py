"""
Parameter validation, energy normalization and coefficient loading.
"""

from .validation import (
    InvalidArgumentError,
    FilterSpec,
    validate_filter_spec,
    validate_output_buffer,
    normalize_filter_energy
)
from .loader import load_coefficients

__all__ = [
    'InvalidArgumentError',
    'FilterSpec',
    'validate_filter_spec',
    'validate_output_buffer',
    'normalize_filter_energy',
    'load_coefficients'
]
