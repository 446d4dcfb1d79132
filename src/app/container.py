# -*- coding: utf-8 -*-
"""
Application Container Module

Defines the dependency container holding the audio context, its event bus,
the diagnostics sink and configuration, and hands out filters bound to them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from core.dsp.biquad_filter import BiquadFilter
from models.filter_design import FilterType

if TYPE_CHECKING:
    from app.protocols import IConfigService, IEventBus
    from core.audio_context import AudioContext
    from core.ports.diagnostics import IDiagnosticSink

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Application Dependency Container

    Usage Example:
        container = AppContainerFactory.create()
        lowpass = container.create_filter()
        out = lowpass.transform(0.5)
        container.cleanup()
    """

    config: "IConfigService"
    event_bus: "IEventBus"
    audio_context: "AudioContext"
    diagnostics: "IDiagnosticSink"

    # Filters created through create_filter(), released by cleanup()
    _filters: List[BiquadFilter] = field(default_factory=list, repr=False)

    def create_filter(
        self,
        channels: Optional[int] = None,
        apply_default_design: bool = True,
    ) -> BiquadFilter:
        """Create a filter bound to this container's audio context

        Args:
            channels: Channel count (defaults to filter.channels)
            apply_default_design: Apply the configured cookbook design;
                when False the filter stays a pass-through

        Returns:
            The new filter
        """
        settings = self.config.get_filter_settings()
        biquad = BiquadFilter(
            self.audio_context,
            channels=settings.channels if channels is None else channels,
            diagnostics=self.diagnostics,
        )
        biquad.ignore_sample_rate_change(settings.ignore_sample_rate_change)

        if apply_default_design:
            filter_type = FilterType.from_name(settings.default_type)
            if filter_type is None:
                logger.warning(
                    "Unknown filter.default_type %r, leaving filter as pass-through",
                    settings.default_type,
                )
            else:
                biquad.set_filter_type(
                    filter_type, settings.default_frequency, settings.default_q
                )

        self._filters.append(biquad)
        return biquad

    @property
    def filter_count(self) -> int:
        return len(self._filters)

    def cleanup(self) -> None:
        """Clean up all resources

        Should be called when the host shuts the audio graph down.
        """
        for biquad in self._filters:
            biquad.close()
        self._filters.clear()

        # Filters built directly on the context are registered too
        if self.audio_context is not None:
            self.audio_context.clear_observers()

        if self.event_bus and hasattr(self.event_bus, 'clear'):
            self.event_bus.clear()
