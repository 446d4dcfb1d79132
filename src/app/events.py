# -*- coding: utf-8 -*-
"""
Event Types Module

Re-exports EventType and the event payloads so host code does not need to
import from the core layer directly.

Usage Example:
    from app.events import EventType

    container.event_bus.subscribe(EventType.DIAGNOSTIC_REPORTED, on_diagnostic)
"""

from core.event_bus import EventType
from models.audio_events import SampleRateChange
from models.diagnostic import Diagnostic

__all__ = ["EventType", "SampleRateChange", "Diagnostic"]
