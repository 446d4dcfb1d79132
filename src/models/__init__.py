"""
Data Models Module
"""

from .audio_events import SampleRateChange
from .diagnostic import Diagnostic, Severity
from .filter_design import BiquadCoefficients, DesignResult, FilterType

__all__ = [
    'SampleRateChange',
    'Diagnostic',
    'Severity',
    'BiquadCoefficients',
    'DesignResult',
    'FilterType',
]
