"""
Service Layer Module
"""

from .config_service import ConfigService, FilterSettings

__all__ = [
    'ConfigService',
    'FilterSettings',
]
