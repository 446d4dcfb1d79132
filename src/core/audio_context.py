# -*- coding: utf-8 -*-
"""
Audio Context Module

Explicit owner of the sample rate shared by a group of DSP components.

Replaces process-wide sample-rate state: every filter is handed the context
it runs in, queries the rate from it at design time, and registers with it
for rate-change notifications through a subscription handle.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Optional, Set

from core.diagnostics import LoggingDiagnosticSink
from core.event_bus import EventBus, EventType
from core.ports.audio import IRateChangeObserver
from core.ports.diagnostics import IDiagnosticSink
from models.audio_events import SampleRateChange
from models.diagnostic import Severity

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 44100.0


class RateChangeSubscription:
    """
    Handle for one rate-change registration

    Releasing is idempotent. Also usable as a context manager.
    """

    def __init__(self, context: "AudioContext", subscription_id: str):
        self._context = context
        self._id = subscription_id
        self._active = True

    @property
    def id(self) -> str:
        return self._id

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> bool:
        """
        Release the registration.

        Returns:
            bool: True if this call released it, False if already released.
        """
        if not self._active:
            return False
        self._active = False
        return self._context._drop_observer(self._id)

    def __enter__(self) -> "RateChangeSubscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "active" if self._active else "released"
        return f"RateChangeSubscription({self._id!r}, {state})"


class AudioContext:
    """
    Audio Context

    Holds the sample rate, a rate-change observer registry and the
    diagnostics sink used by the components running in it.

    Observers are held weakly: registering does not keep a component alive.

    Usage example:
        context = AudioContext(48000.0)
        subscription = context.add_rate_change_observer(my_filter)

        context.set_sample_rate(96000.0)  # my_filter.sample_rate_changed(96000.0, 48000.0)

        subscription.release()
    """

    def __init__(
        self,
        sample_rate: float = DEFAULT_SAMPLE_RATE,
        event_bus: Optional[EventBus] = None,
        diagnostics: Optional[IDiagnosticSink] = None,
    ):
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")

        self._sample_rate = float(sample_rate)
        self._event_bus = event_bus or EventBus()
        self._diagnostics = diagnostics or LoggingDiagnosticSink(self._event_bus)
        self._observer_ids: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def sample_rate(self) -> float:
        """Current sample rate (Hz)"""
        return self._sample_rate

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def diagnostics(self) -> IDiagnosticSink:
        return self._diagnostics

    @property
    def observer_count(self) -> int:
        """Number of active rate-change registrations"""
        with self._lock:
            return len(self._observer_ids)

    def set_sample_rate(self, rate: float) -> bool:
        """
        Change the sample rate and notify observers.

        Args:
            rate: New sample rate (Hz), must be positive

        Returns:
            bool: False if the rate was rejected
        """
        if rate <= 0:
            self.report(
                Severity.WARNING,
                f"AudioContext.set_sample_rate: sample rate argument ({rate}) must be positive!",
            )
            return False

        with self._lock:
            old_rate = self._sample_rate
            if rate == old_rate:
                return True
            self._sample_rate = float(rate)

        logger.debug("Sample rate changed: %s -> %s", old_rate, rate)
        self._event_bus.publish(
            EventType.SAMPLE_RATE_CHANGED, SampleRateChange(float(rate), old_rate)
        )
        return True

    def add_rate_change_observer(
        self, observer: IRateChangeObserver
    ) -> RateChangeSubscription:
        """
        Register an observer for sample-rate changes.

        Args:
            observer: Object with a sample_rate_changed(new_rate, old_rate) method

        Returns:
            RateChangeSubscription: Handle used to release the registration
        """
        observer_ref = weakref.ref(observer)

        def _deliver(change: SampleRateChange) -> None:
            target = observer_ref()
            if target is not None:
                target.sample_rate_changed(change.new_rate, change.old_rate)

        subscription_id = self._event_bus.subscribe(
            EventType.SAMPLE_RATE_CHANGED, _deliver
        )
        with self._lock:
            self._observer_ids.add(subscription_id)

        logger.debug("Rate-change observer registered: %s", type(observer).__name__)
        return RateChangeSubscription(self, subscription_id)

    def remove_rate_change_observer(self, subscription: RateChangeSubscription) -> bool:
        """
        Release a registration.

        Returns:
            bool: True if the registration was still active
        """
        return subscription.release()

    def clear_observers(self) -> int:
        """
        Drop every rate-change registration.

        Subscriptions still held by observers become inert; releasing them
        afterwards returns False.

        Returns:
            int: Number of registrations dropped
        """
        with self._lock:
            observer_ids = list(self._observer_ids)
            self._observer_ids.clear()

        for subscription_id in observer_ids:
            self._event_bus.unsubscribe(subscription_id)

        if observer_ids:
            logger.debug("Dropped %d rate-change observers", len(observer_ids))
        return len(observer_ids)

    def report(self, severity: Severity, message: str) -> None:
        """Forward a diagnostic to the context's sink"""
        self._diagnostics.report(severity, message)

    def _drop_observer(self, subscription_id: str) -> bool:
        with self._lock:
            if subscription_id not in self._observer_ids:
                return False
            self._observer_ids.discard(subscription_id)
        return self._event_bus.unsubscribe(subscription_id)
