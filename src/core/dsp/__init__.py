"""
DSP (Digital Signal Processing) Module

Provides audio processing related functions:
- BiquadFilter: Two-pole, two-zero filter with coefficient design
"""

from core.dsp.biquad_filter import BiquadFilter
from models.filter_design import BiquadCoefficients, DesignResult, FilterType

__all__ = [
    "BiquadFilter",
    "BiquadCoefficients",
    "DesignResult",
    "FilterType",
]
