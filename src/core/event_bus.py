# -*- coding: utf-8 -*-
"""
Event Bus Module - Publish-Subscribe Pattern Implementation

Carries sample-rate changes and diagnostics between the audio context and
the components registered with it.

Design Notes:
- Each AudioContext owns its own bus; there is no process-wide instance
- Delivery is synchronous, in the publishing thread
- Subscription may happen from any thread
"""

from typing import Dict, Callable, Any
from enum import Enum
import threading
import uuid
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event type enumeration"""

    # Audio context events
    SAMPLE_RATE_CHANGED = "sample_rate_changed"

    # System events
    DIAGNOSTIC_REPORTED = "diagnostic_reported"


class EventBus:
    """
    Event Bus

    Usage example:
        event_bus = EventBus()

        def on_rate_changed(change):
            logger.info("Sample rate: %s", change.new_rate)

        sub_id = event_bus.subscribe(EventType.SAMPLE_RATE_CHANGED, on_rate_changed)
        event_bus.publish(EventType.SAMPLE_RATE_CHANGED, change)
        event_bus.unsubscribe(sub_id)
    """

    def __init__(self):
        self._subscribers: Dict[EventType, Dict[str, Callable]] = {}
        self._sub_lock = threading.Lock()

    def subscribe(
        self,
        event_type: EventType,
        callback: Callable[[Any], None]
    ) -> str:
        """
        Subscribe to event

        Args:
            event_type: Event type
            callback: Callback function, receiving event data as an argument

        Returns:
            str: Subscription ID, used for unsubscription
        """
        subscription_id = str(uuid.uuid4())

        with self._sub_lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = {}
            self._subscribers[event_type][subscription_id] = callback

        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Unsubscribe

        Args:
            subscription_id: The ID returned when subscribing

        Returns:
            bool: Whether the unsubscription was successful
        """
        with self._sub_lock:
            for event_type in self._subscribers:
                if subscription_id in self._subscribers[event_type]:
                    del self._subscribers[event_type][subscription_id]
                    return True
        return False

    def publish(self, event_type: EventType, data: Any = None) -> int:
        """
        Publish event synchronously

        Callbacks run in the current thread, in subscription order.

        Args:
            event_type: Event type
            data: Event data

        Returns:
            int: Number of callbacks invoked
        """
        with self._sub_lock:
            callbacks = list(self._subscribers.get(event_type, {}).values())

        for callback in callbacks:
            self._safe_call(callback, data)
        return len(callbacks)

    def subscriber_count(self, event_type: EventType) -> int:
        """Number of live subscriptions for an event type"""
        with self._sub_lock:
            return len(self._subscribers.get(event_type, {}))

    def _safe_call(self, callback: Callable, data: Any) -> None:
        """Safely call a callback function"""
        try:
            callback(data)
        except Exception as e:
            # Avoid loop: Do not publish a diagnostic for a failing subscriber
            logger.error("Event callback execution error: %s", e)

    def clear(self) -> None:
        """Clear all subscriptions"""
        with self._sub_lock:
            self._subscribers.clear()
