"""
Biquad DSP Core Module
"""

from .event_bus import EventBus, EventType
from .audio_context import AudioContext, RateChangeSubscription, DEFAULT_SAMPLE_RATE
from .diagnostics import LoggingDiagnosticSink
from .dsp import BiquadFilter

__all__ = [
    'EventBus',
    'EventType',
    'AudioContext',
    'RateChangeSubscription',
    'DEFAULT_SAMPLE_RATE',
    'LoggingDiagnosticSink',
    'BiquadFilter',
]
