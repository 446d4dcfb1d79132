# -*- coding: utf-8 -*-
"""
Container Factory Module

Responsible for creating and assembling all application dependencies.

This is the **only** instance creation point (Composition Root) for the
audio context and the services around it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.container import AppContainer

logger = logging.getLogger(__name__)


class AppContainerFactory:
    """Application Container Factory

    Usage Example:
        # Host application
        container = AppContainerFactory.create()

        # In tests
        container = AppContainerFactory.create_for_testing(sample_rate=48000.0)
    """

    @staticmethod
    def create(config_path: str = "config/default_config.yaml") -> "AppContainer":
        """Create Application Container

        Args:
            config_path: Configuration file path

        Returns:
            A configured AppContainer instance
        """
        from services.config_service import ConfigService

        logger.info("Creating application container...")

        config = ConfigService(config_path)
        container = AppContainerFactory._assemble(config, config.get_sample_rate())

        logger.info(
            "Application container creation complete (sample rate %s)",
            container.audio_context.sample_rate,
        )
        return container

    @staticmethod
    def create_for_testing(
        sample_rate: float = 44100.0,
        config_path: Optional[str] = None,
    ) -> "AppContainer":
        """Create a container for testing

        Args:
            sample_rate: Sample rate of the audio context (ignores configuration)
            config_path: Configuration file path (template + user file when None)

        Returns:
            A configured test AppContainer instance
        """
        from services.config_service import ConfigService

        logger.info("Creating test application container...")

        config = ConfigService(config_path)
        return AppContainerFactory._assemble(config, sample_rate)

    @staticmethod
    def _assemble(config, sample_rate: float) -> "AppContainer":
        from app.container import AppContainer
        from core.audio_context import AudioContext
        from core.diagnostics import LoggingDiagnosticSink
        from core.event_bus import EventBus

        # === 1. Event Bus ===
        event_bus = EventBus()

        # === 2. Diagnostics ===
        diagnostics = LoggingDiagnosticSink(event_bus)

        # === 3. Audio Context ===
        audio_context = AudioContext(
            sample_rate, event_bus=event_bus, diagnostics=diagnostics
        )

        return AppContainer(
            config=config,
            event_bus=event_bus,
            audio_context=audio_context,
            diagnostics=diagnostics,
        )
