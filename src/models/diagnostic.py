"""
Diagnostic data model
"""

from dataclasses import dataclass
from enum import Enum
import logging


class Severity(Enum):
    """Diagnostic severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        """Matching stdlib logging level"""
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    """A single {severity, message} notification."""
    severity: Severity
    message: str

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.message}"
