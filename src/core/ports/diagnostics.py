# -*- coding: utf-8 -*-
"""
Diagnostics Port Interface

Notification channel consuming {severity, message} pairs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from models.diagnostic import Severity


@runtime_checkable
class IDiagnosticSink(Protocol):
    """Diagnostic Sink Interface

    Current implementation: LoggingDiagnosticSink
    """

    def report(self, severity: "Severity", message: str) -> None:
        """Deliver one notification

        Args:
            severity: Diagnostic severity
            message: Human-readable description
        """
        ...
