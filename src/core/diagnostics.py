# -*- coding: utf-8 -*-
"""
Diagnostics Module

Default notification sink: writes to the standard logging system and, when
an event bus is attached, republishes each notification as an event.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.event_bus import EventBus, EventType
from models.diagnostic import Diagnostic, Severity

logger = logging.getLogger(__name__)


class LoggingDiagnosticSink:
    """
    Logging Diagnostic Sink

    Usage example:
        sink = LoggingDiagnosticSink(event_bus)
        sink.report(Severity.WARNING, "radius argument (1.5) is out of range!")
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        log: Optional[logging.Logger] = None,
    ):
        self._event_bus = event_bus
        self._log = log or logger

    def report(self, severity: Severity, message: str) -> None:
        self._log.log(severity.log_level, "%s", message)
        if self._event_bus is not None:
            self._event_bus.publish(
                EventType.DIAGNOSTIC_REPORTED, Diagnostic(severity, message)
            )
