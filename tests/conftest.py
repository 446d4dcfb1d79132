"""
Test Configuration File

Unified setup for Python path, avoiding sys.path.insert in each test file.
Provides shared audio-context fixtures.
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


SAMPLE_RATE = 44100.0


class RecordingSink:
    """Diagnostic sink that keeps every notification for assertions."""

    def __init__(self):
        self.records: List = []

    def report(self, severity, message):
        from models.diagnostic import Diagnostic
        self.records.append(Diagnostic(severity, message))

    @property
    def messages(self) -> List[str]:
        return [record.message for record in self.records]

    def clear(self) -> None:
        self.records.clear()


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def audio_context(recording_sink):
    """Audio context at 44.1 kHz whose diagnostics land in recording_sink."""
    from core.audio_context import AudioContext

    return AudioContext(SAMPLE_RATE, diagnostics=recording_sink)


@pytest.fixture
def biquad(audio_context):
    from core.dsp.biquad_filter import BiquadFilter

    filt = BiquadFilter(audio_context)
    yield filt
    filt.close()
