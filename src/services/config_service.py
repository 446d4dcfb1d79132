"""
Configuration Service Module

Manages filter and audio-context configuration read/write.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from pathlib import Path
import os
import sys
import yaml
import threading
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterSettings:
    """Filter defaults resolved from configuration."""
    channels: int = 1
    ignore_sample_rate_change: bool = False
    default_type: str = "low_pass"
    default_frequency: float = 1000.0
    default_q: float = 0.7071


class ConfigService:
    """
    Configuration Service - Singleton Pattern

    Manages configuration, supporting reading and saving from YAML files.

    Usage Example:
        config = ConfigService("config/default_config.yaml")

        # Get configuration
        rate = config.get("audio.sample_rate", 44100.0)

        # Set configuration
        config.set("filter.channels", 2)
        config.save()
    """

    _instance: Optional['ConfigService'] = None
    _lock = threading.Lock()

    def __new__(cls, config_path: str = None) -> 'ConfigService':
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: str = None):
        if self._initialized:
            return

        self._default_config_path = "config/default_config.yaml"
        default_path = Path(self._default_config_path)
        provided_path = Path(config_path) if config_path else None

        # Passing the template path still means "default mode" (save to the user directory)
        self._use_custom_path = provided_path is not None and provided_path != default_path

        if self._use_custom_path:
            # Custom path: Used for both loading and saving
            self._user_config_path = provided_path
        else:
            # Default path: Load repository template, save to user directory
            self._user_config_path = self._get_user_config_path()

        self._config: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._initialized = True

        self._load()

    @staticmethod
    def _get_user_config_path() -> Path:
        """Get user configuration file path (platform-specific)"""
        if sys.platform == "win32":
            base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / "biquad-dsp" / "config.yaml"

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path

    def _load(self) -> None:
        """Load and merge from default and user configuration"""
        self._config = self._get_default_config()

        if self._use_custom_path:
            # Custom path mode: Only load from this path
            self._merge_file(self._user_config_path, "custom")
        else:
            # Default mode: repository template, then user overrides
            self._merge_file(Path(self._default_config_path), "default")
            self._merge_file(self._user_config_path, "user")

    def _merge_file(self, path: Path, label: str) -> None:
        if not path.exists():
            return
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load %s configuration: %s", label, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("Ignoring %s configuration %s: not a mapping", label, path)
            return
        self._deep_merge(self._config, loaded)
        logger.debug("Loaded %s configuration from: %s", label, path)

    def _deep_merge(self, base: Dict, override: Dict) -> None:
        """Deep merge dictionaries, override overwrites base"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            'audio': {
                'sample_rate': 44100.0,
            },
            'filter': {
                'channels': 1,
                'ignore_sample_rate_change': False,
                'default_type': 'low_pass',
                'default_frequency': 1000.0,
                'default_q': 0.7071,
            },
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports dot-separated nested keys, e.g., "audio.sample_rate".

        Args:
            key: Configuration key
            default: Default value

        Returns:
            Configuration value or the default value.
        """
        with self._lock:
            keys = key.split('.')
            value = self._config

            try:
                for k in keys:
                    value = value[k]
                return value
            except (KeyError, TypeError):
                return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (dot-separated)
            value: Configuration value
        """
        with self._lock:
            keys = key.split('.')
            config = self._config

            # Navigate to the parent node
            for k in keys[:-1]:
                if k not in config:
                    config[k] = {}
                config = config[k]

            config[keys[-1]] = value

    def get_sample_rate(self) -> float:
        """Configured sample rate; falls back to 44100 for unusable values."""
        value = self.get("audio.sample_rate", 44100.0)
        try:
            rate = float(value)
        except (TypeError, ValueError):
            rate = 0.0
        if rate <= 0:
            logger.warning("Invalid audio.sample_rate %r, using 44100", value)
            return 44100.0
        return rate

    def get_filter_settings(self) -> FilterSettings:
        """Resolve the filter section into typed settings."""
        defaults = FilterSettings()
        channels = self.get("filter.channels", defaults.channels)
        if not isinstance(channels, int) or channels < 1:
            logger.warning("Invalid filter.channels %r, using %d", channels, defaults.channels)
            channels = defaults.channels
        return FilterSettings(
            channels=channels,
            ignore_sample_rate_change=bool(
                self.get("filter.ignore_sample_rate_change", defaults.ignore_sample_rate_change)
            ),
            default_type=str(self.get("filter.default_type", defaults.default_type)),
            default_frequency=float(self.get("filter.default_frequency", defaults.default_frequency)),
            default_q=float(self.get("filter.default_q", defaults.default_q)),
        )

    def get_all(self) -> Dict[str, Any]:
        """Get all configurations."""
        with self._lock:
            return self._config.copy()

    def save(self) -> bool:
        """
        Save configuration to the user configuration file.

        Returns:
            bool: True if saving was successful.
        """
        try:
            self._user_config_path.parent.mkdir(parents=True, exist_ok=True)

            with self._lock:
                with open(self._user_config_path, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, allow_unicode=True, default_flow_style=False)
            logger.debug("Configuration saved to: %s", self._user_config_path)
            return True
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to save configuration: %s", e)
            return False

    def reload(self) -> None:
        """Reload configuration from disk"""
        with self._lock:
            self._load()

    def reset(self) -> None:
        """Reset to default configuration."""
        with self._lock:
            self._config = self._get_default_config()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing only)."""
        with cls._lock:
            cls._instance = None
