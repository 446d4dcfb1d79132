"""
Filter Design Module

Value types shared by the biquad coefficient-design operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FilterType(Enum):
    """Canonical bilinear-transform filter responses"""
    LOW_PASS = "low_pass"
    HIGH_PASS = "high_pass"
    BAND_PASS = "band_pass"
    BAND_REJECT = "band_reject"
    ALL_PASS = "all_pass"

    @classmethod
    def from_name(cls, name: str) -> Optional["FilterType"]:
        """
        Get filter type by name.

        Args:
            name: Type name (e.g., "lowpass", "Band-Pass", "all pass").

        Returns:
            FilterType, or None for unknown names.
        """
        normalized = name.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            pass
        # Accept the compact spelling ("lowpass", "bandreject")
        for member in cls:
            if member.value.replace("_", "") == normalized:
                return member
        return None


@dataclass(frozen=True)
class BiquadCoefficients:
    """
    Normalized biquad coefficient set

    The leading feedback coefficient a0 is always 1 and is not stored.

    Attributes:
        b0, b1, b2: Feed-forward (zero) coefficients.
        a1, a2: Feedback (pole) coefficients.
    """
    b0: float = 1.0
    b1: float = 0.0
    b2: float = 0.0
    a1: float = 0.0
    a2: float = 0.0

    @property
    def a0(self) -> float:
        return 1.0

    @property
    def b(self) -> Tuple[float, float, float]:
        return (self.b0, self.b1, self.b2)

    @property
    def a(self) -> Tuple[float, float, float]:
        return (1.0, self.a1, self.a2)

    @classmethod
    def identity(cls) -> "BiquadCoefficients":
        """Pass-through coefficients (b = [1, 0, 0], a = [1, 0, 0])."""
        return cls()


@dataclass(frozen=True)
class DesignResult:
    """
    Outcome of a coefficient-design call

    Attributes:
        ok: True if the coefficients were updated.
        message: Reason for rejection (empty on success).
    """
    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls) -> "DesignResult":
        return cls(True)

    @classmethod
    def failure(cls, message: str) -> "DesignResult":
        return cls(False, message)
