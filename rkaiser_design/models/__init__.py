"""
Root-Nyquist Kaiser filter design models.
"""

from .rkaiser import (
    RKaiserDesigner,
    RKaiserDesignResult,
    design_rkaiser_filter,
    design_rkaiser_filter_approximate,
    design_rkaiser_filter_with_rho,
    rkaiser_filter_isi,
    rkaiser_filter_parameters
)

__all__ = [
    'RKaiserDesigner',
    'RKaiserDesignResult',
    'design_rkaiser_filter',
    'design_rkaiser_filter_approximate',
    'design_rkaiser_filter_with_rho',
    'rkaiser_filter_isi',
    'rkaiser_filter_parameters'
]
