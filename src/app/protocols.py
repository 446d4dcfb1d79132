# -*- coding: utf-8 -*-
"""
Protocols Definition Module

Defines the interface protocols (Protocol) for the services held by the
application container.
Uses Protocol instead of ABC to support structural subtyping checks.

Design Decisions:
- Default to using Protocol + @runtime_checkable
- Runtime checks are performed as one-time assertions during testing
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from services.config_service import FilterSettings


# =============================================================================
# Event Bus Protocol
# =============================================================================

@runtime_checkable
class IEventBus(Protocol):
    """Event Bus Interface

    Provides a publish-subscribe pattern event system.
    """

    def subscribe(
        self,
        event_type: Enum,
        callback: Callable[[Any], None]
    ) -> str:
        """Subscribe to an event

        Returns:
            Subscription ID, used to unsubscribe
        """
        ...

    def unsubscribe(self, subscription_id: str) -> bool:
        """Unsubscribe from an event

        Returns:
            True if successfully unsubscribed
        """
        ...

    def publish(self, event_type: Enum, data: Any = None) -> int:
        """Publish an event

        Returns:
            Number of callbacks invoked
        """
        ...


# =============================================================================
# Ports re-exported for the application layer
# =============================================================================

from core.ports.audio import IRateChangeObserver, ISampleRateProvider
from core.ports.diagnostics import IDiagnosticSink


# =============================================================================
# Configuration Service Protocol
# =============================================================================

@runtime_checkable
class IConfigService(Protocol):
    """Configuration Service Interface"""

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value

        Args:
            key: Configuration key, supports dot-separated nested keys
            default: Default value
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value"""
        ...

    def save(self) -> bool:
        """Save configuration to file"""
        ...

    def get_sample_rate(self) -> float:
        """Configured sample rate (Hz)"""
        ...

    def get_filter_settings(self) -> "FilterSettings":
        """Filter defaults"""
        ...


__all__ = [
    "IEventBus",
    "IConfigService",
    "IRateChangeObserver",
    "ISampleRateProvider",
    "IDiagnosticSink",
]
