"""
Audio event payloads
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SampleRateChange:
    """
    Payload of a sample-rate change notification

    Attributes:
        new_rate: Sample rate now in effect (Hz).
        old_rate: Sample rate before the change (Hz).
    """
    new_rate: float
    old_rate: float
