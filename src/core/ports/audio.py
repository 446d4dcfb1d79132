# -*- coding: utf-8 -*-
"""
Audio Context Port Interfaces

Defines what a DSP component may expect from the audio context that drives
it: a sample-rate query and a rate-change observer registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.audio_context import RateChangeSubscription
    from models.diagnostic import Severity


@runtime_checkable
class IRateChangeObserver(Protocol):
    """Receives sample-rate change notifications"""

    def sample_rate_changed(self, new_rate: float, old_rate: float) -> None:
        """Called after the context's sample rate changed

        Args:
            new_rate: Sample rate now in effect (Hz)
            old_rate: Previous sample rate (Hz)
        """
        ...


@runtime_checkable
class ISampleRateProvider(Protocol):
    """Audio Context Interface

    Current implementation: AudioContext
    """

    @property
    def sample_rate(self) -> float:
        """Current sample rate (Hz)"""
        ...

    def add_rate_change_observer(
        self, observer: IRateChangeObserver
    ) -> "RateChangeSubscription":
        """Register an observer for rate changes

        Returns:
            Handle that releases the registration
        """
        ...

    def remove_rate_change_observer(
        self, subscription: "RateChangeSubscription"
    ) -> bool:
        """Release a registration

        Returns:
            True if the registration was still active
        """
        ...

    def report(self, severity: "Severity", message: str) -> None:
        """Forward a diagnostic to the context's sink"""
        ...
