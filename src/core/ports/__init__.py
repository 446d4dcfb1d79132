# -*- coding: utf-8 -*-
"""
Ports Interfaces Package

Defines the interfaces between DSP components and the audio context that
hosts them (sample rate, rate-change registry, diagnostics).

Design Principles:
- Use Protocol to define interfaces, supporting structural subtyping.
- Filters depend on these interfaces rather than concrete implementations.
- Facilitates replacing with fake/mock during testing.
"""

from core.ports.audio import IRateChangeObserver, ISampleRateProvider
from core.ports.diagnostics import IDiagnosticSink

__all__ = [
    "IRateChangeObserver",
    "ISampleRateProvider",
    "IDiagnosticSink",
]
