"""
Biquad Filter Implementation

A two-pole, two-zero recursive filter with coefficient-design helpers for
resonances, notches and the canonical bilinear-transform responses.
"""

from __future__ import annotations

import array
import cmath
import logging
import math
import weakref
from typing import List, Optional, Sequence, Tuple, Union

from core.ports.audio import ISampleRateProvider
from core.ports.diagnostics import IDiagnosticSink
from models.diagnostic import Severity
from models.filter_design import BiquadCoefficients, DesignResult, FilterType

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


class BiquadFilter:
    """
    Biquad Filter

    Computes, per channel:

        y[n] = gain * (b0*x[n] + b1*x[n-1] + b2*x[n-2]) - a1*y[n-1] - a2*y[n-2]

    The leading feedback coefficient a0 is fixed at 1. A new filter is a
    pass-through (b = [1, 0, 0], a = [1, 0, 0]) until one of the design
    methods is called.

    The filter registers with its audio context for sample-rate changes and
    releases the registration on close(), on leaving a ``with`` block, or
    when it is garbage collected.

    Not thread-safe: designing and transforming must happen on one thread,
    or under the caller's own locking.
    """

    def __init__(
        self,
        context: ISampleRateProvider,
        channels: int = 1,
        diagnostics: Optional[IDiagnosticSink] = None,
    ):
        """
        Initialize Biquad filter

        Args:
            context: Audio context providing the sample rate
            channels: Number of independent channel histories
            diagnostics: Sink for warnings (defaults to the context's sink)
        """
        if channels < 1:
            raise ValueError("BiquadFilter needs at least one channel")

        self._context = context
        self._diagnostics = diagnostics
        self._channels = channels
        self._gain = 1.0
        self._ignore_sample_rate_change = False

        # Filter coefficients, a[0] is always 1
        self._b: List[float] = [1.0, 0.0, 0.0]
        self._a: List[float] = [1.0, 0.0, 0.0]

        # Filter state (independent for each channel): [current, n-1, n-2]
        self._inputs = [[0.0, 0.0, 0.0] for _ in range(channels)]
        self._outputs = [[0.0, 0.0, 0.0] for _ in range(channels)]

        self._subscription = context.add_rate_change_observer(self)
        self._finalizer = weakref.finalize(self, self._subscription.release)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the rate-change registration. Safe to call twice."""
        self._finalizer()

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    def __enter__(self) -> "BiquadFilter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def sample_rate(self) -> float:
        return self._context.sample_rate

    @property
    def coefficients(self) -> BiquadCoefficients:
        """Snapshot of the current coefficients"""
        return BiquadCoefficients(
            self._b[0], self._b[1], self._b[2], self._a[1], self._a[2]
        )

    @property
    def b(self) -> Tuple[float, float, float]:
        return (self._b[0], self._b[1], self._b[2])

    @property
    def a(self) -> Tuple[float, float, float]:
        return (self._a[0], self._a[1], self._a[2])

    @property
    def a0(self) -> float:
        return self._a[0]

    @property
    def b0(self) -> float:
        return self._b[0]

    @property
    def b1(self) -> float:
        return self._b[1]

    @property
    def b2(self) -> float:
        return self._b[2]

    @property
    def a1(self) -> float:
        return self._a[1]

    @property
    def a2(self) -> float:
        return self._a[2]

    @property
    def gain(self) -> float:
        return self._gain

    def set_gain(self, gain: float) -> None:
        """Set the gain applied to each input sample"""
        self._gain = gain

    def input_history(self, channel: int = 0) -> Tuple[float, float, float]:
        """Input history of a channel, newest first"""
        return tuple(self._inputs[self._check_channel(channel)])

    def output_history(self, channel: int = 0) -> Tuple[float, float, float]:
        """Output history of a channel, newest first"""
        return tuple(self._outputs[self._check_channel(channel)])

    def last_out(self, channel: int = 0) -> float:
        """Most recent output sample of a channel"""
        return self._outputs[self._check_channel(channel)][0]

    # ------------------------------------------------------------------
    # Direct coefficient assignment
    # ------------------------------------------------------------------

    def set_coefficients(
        self,
        b0: float,
        b1: float,
        b2: float,
        a1: float,
        a2: float,
        clear_state: bool = False,
    ) -> None:
        """
        Install a full coefficient set.

        Arbitrary values are accepted; keeping the poles inside the unit
        circle is up to the caller.

        Args:
            clear_state: Zero the history after installing, otherwise keep it
        """
        self._b[0] = b0
        self._b[1] = b1
        self._b[2] = b2
        self._a[1] = a1
        self._a[2] = a2

        if clear_state:
            self.clear()

    def set_b0(self, b0: float) -> None:
        self._b[0] = b0

    def set_b1(self, b1: float) -> None:
        self._b[1] = b1

    def set_b2(self, b2: float) -> None:
        self._b[2] = b2

    def set_a1(self, a1: float) -> None:
        self._a[1] = a1

    def set_a2(self, a2: float) -> None:
        self._a[2] = a2

    # ------------------------------------------------------------------
    # Coefficient design
    # ------------------------------------------------------------------

    def set_resonance(
        self, frequency: float, radius: float, normalize: bool = False
    ) -> DesignResult:
        """
        Place a conjugate pole pair for a resonance at ``frequency``.

        Args:
            frequency: Resonance frequency (Hz), 0 to sample_rate / 2
            radius: Pole radius, 0 <= radius < 1; closer to 1 is narrower
            normalize: Put zeros at +-1 and scale for unit peak gain.
                When False the zeros are left as they are.

        Returns:
            DesignResult: failure (with a warning reported) on bad arguments
        """
        sample_rate = self._context.sample_rate
        if not 0.0 <= frequency <= 0.5 * sample_rate:
            return self._reject(
                f"BiquadFilter.set_resonance: frequency argument ({frequency}) is out of range!"
            )
        if not 0.0 <= radius < 1.0:
            return self._reject(
                f"BiquadFilter.set_resonance: radius argument ({radius}) is out of range!"
            )

        self._a[2] = radius * radius
        self._a[1] = -2.0 * radius * math.cos(TWO_PI * frequency / sample_rate)

        if normalize:
            # Zeros at +-1, peak gain normalized
            self._b[0] = 0.5 - 0.5 * self._a[2]
            self._b[1] = 0.0
            self._b[2] = -self._b[0]

        return DesignResult.success()

    def set_notch(self, frequency: float, radius: float) -> DesignResult:
        """
        Place a conjugate zero pair for a notch at ``frequency``.

        The poles are untouched and the gain is not normalized. A radius of
        1 gives a true null; larger finite radii are accepted.
        """
        sample_rate = self._context.sample_rate
        if not 0.0 <= frequency <= 0.5 * sample_rate:
            return self._reject(
                f"BiquadFilter.set_notch: frequency argument ({frequency}) is out of range!"
            )
        if not radius >= 0.0:
            return self._reject(
                f"BiquadFilter.set_notch: radius argument ({radius}) is negative!"
            )
        if not math.isfinite(radius):
            return self._reject(
                f"BiquadFilter.set_notch: radius argument ({radius}) is not finite!"
            )

        self._b[2] = radius * radius
        self._b[1] = -2.0 * radius * math.cos(TWO_PI * frequency / sample_rate)
        return DesignResult.success()

    def set_filter_type(
        self,
        filter_type: Union[FilterType, str],
        frequency: float,
        q: float,
    ) -> DesignResult:
        """
        Design a canonical response with the bilinear transform.

        Everything is validated before any coefficient is written, so a
        rejected call leaves both poles and zeros as they were.

        Args:
            filter_type: FilterType member or its name ("low_pass", "allpass", ...)
            frequency: Cutoff / center frequency (Hz), non-negative
            q: Quality factor, non-negative
        """
        if not frequency >= 0.0:
            return self._reject(
                f"BiquadFilter.set_filter_type: frequency argument ({frequency}) is negative!"
            )
        if not math.isfinite(frequency):
            return self._reject(
                f"BiquadFilter.set_filter_type: frequency argument ({frequency}) is not finite!"
            )
        if not q >= 0.0:
            return self._reject(
                f"BiquadFilter.set_filter_type: Q argument ({q}) is negative!"
            )
        if not math.isfinite(q):
            return self._reject(
                f"BiquadFilter.set_filter_type: Q argument ({q}) is not finite!"
            )

        resolved = self._resolve_filter_type(filter_type)
        if resolved is None:
            return self._reject(
                f"BiquadFilter.set_filter_type: filter type ({filter_type!r}) is invalid!"
            )

        k = math.tan(math.pi * frequency / self._context.sample_rate)
        k_sqr = k * k
        norm = k_sqr * q + k + q
        if norm == 0.0:
            return self._reject(
                f"BiquadFilter.set_filter_type: frequency ({frequency}) and Q ({q}) give a degenerate design!"
            )
        denom = 1.0 / norm

        # Common to all supported types
        a1 = 2.0 * q * (k_sqr - 1.0) * denom
        a2 = (k_sqr * q - k + q) * denom

        if resolved is FilterType.LOW_PASS:
            b0 = k_sqr * q * denom
            b1 = 2.0 * b0
            b2 = b0
        elif resolved is FilterType.HIGH_PASS:
            b0 = q * denom
            b1 = -2.0 * b0
            b2 = b0
        elif resolved is FilterType.BAND_PASS:
            b0 = k * denom
            b1 = 0.0
            b2 = -b0
        elif resolved is FilterType.BAND_REJECT:
            b0 = q * (k_sqr + 1.0) * denom
            b1 = 2.0 * q * (k_sqr - 1.0) * denom
            b2 = b0
        else:  # ALL_PASS
            b0 = a2
            b1 = a1
            b2 = 1.0

        self._b[0], self._b[1], self._b[2] = b0, b1, b2
        self._a[1], self._a[2] = a1, a2
        return DesignResult.success()

    def set_equal_gain_zeroes(self) -> None:
        """Zeros at +-1 with unit numerator gain (b = [1, 0, -1])."""
        self._b[0] = 1.0
        self._b[1] = 0.0
        self._b[2] = -1.0

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def transform(self, sample: float, channel: int = 0) -> float:
        """
        Filter one sample.

        Args:
            sample: Input sample
            channel: Channel whose history is used

        Returns:
            Output sample
        """
        inputs = self._inputs[self._check_channel(channel)]
        outputs = self._outputs[channel]
        b = self._b
        a = self._a

        x0 = self._gain * sample
        y0 = (b[0] * x0 + b[1] * inputs[0] + b[2] * inputs[1]
              - a[1] * outputs[0] - a[2] * outputs[1])

        inputs[2] = inputs[1]
        inputs[1] = inputs[0]
        inputs[0] = x0
        outputs[2] = outputs[1]
        outputs[1] = outputs[0]
        outputs[0] = y0
        return y0

    def process(self, samples: Sequence[float]) -> array.array:
        """
        Filter a block of interleaved frames.

        Args:
            samples: Interleaved samples [ch0, ch1, ..., ch0, ch1, ...]

        Returns:
            Filtered samples, same layout
        """
        channels = self._channels
        if len(samples) % channels:
            raise ValueError(
                f"Block length {len(samples)} is not a multiple of {channels} channels"
            )

        result = array.array('d', [0.0] * len(samples))
        for i, sample in enumerate(samples):
            result[i] = self.transform(sample, i % channels)
        return result

    def clear(self) -> None:
        """Reset filter state (coefficients are kept)"""
        for history in self._inputs:
            history[0] = history[1] = history[2] = 0.0
        for history in self._outputs:
            history[0] = history[1] = history[2] = 0.0

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def frequency_response(self, frequency: float) -> complex:
        """Complex response H(e^jw) at ``frequency`` (Hz), gain included."""
        omega = TWO_PI * frequency / self._context.sample_rate
        z1 = cmath.exp(-1j * omega)
        z2 = z1 * z1
        numerator = self._b[0] + self._b[1] * z1 + self._b[2] * z2
        denominator = 1.0 + self._a[1] * z1 + self._a[2] * z2
        if denominator == 0:
            return complex(math.inf, 0.0)
        return self._gain * numerator / denominator

    def magnitude_response(self, frequency: float) -> float:
        return abs(self.frequency_response(frequency))

    def phase_delay(self, frequency: float) -> float:
        """
        Phase delay in samples at ``frequency`` (Hz).

        Reports a warning and returns 0.0 outside (0, sample_rate / 2].
        """
        sample_rate = self._context.sample_rate
        if not 0.0 < frequency <= 0.5 * sample_rate:
            self._report(
                Severity.WARNING,
                f"BiquadFilter.phase_delay: frequency argument ({frequency}) is out of range!",
            )
            return 0.0

        omega_t = TWO_PI * frequency / sample_rate

        real = sum(coef * math.cos(i * omega_t) for i, coef in enumerate(self._b))
        imag = -sum(coef * math.sin(i * omega_t) for i, coef in enumerate(self._b))
        phase = math.atan2(self._gain * imag, self._gain * real)

        real = sum(coef * math.cos(i * omega_t) for i, coef in enumerate(self._a))
        imag = -sum(coef * math.sin(i * omega_t) for i, coef in enumerate(self._a))
        phase -= math.atan2(imag, real)

        phase = math.fmod(-phase, TWO_PI)
        return phase / omega_t

    # ------------------------------------------------------------------
    # Sample-rate notifications
    # ------------------------------------------------------------------

    def ignore_sample_rate_change(self, ignore: bool = True) -> None:
        """Suppress (or restore) the stale-coefficient warning"""
        self._ignore_sample_rate_change = ignore

    def sample_rate_changed(self, new_rate: float, old_rate: float) -> None:
        """
        Called by the audio context after a rate change.

        Coefficients are not rescaled; designs made at the old rate are
        stale and must be recomputed by the caller.
        """
        logger.debug("Sample rate changed %s -> %s", old_rate, new_rate)
        if not self._ignore_sample_rate_change:
            self._report(
                Severity.WARNING,
                "BiquadFilter.sample_rate_changed: you may need to recompute filter coefficients!",
            )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_filter_type(filter_type: Union[FilterType, str]) -> Optional[FilterType]:
        if isinstance(filter_type, FilterType):
            return filter_type
        if isinstance(filter_type, str):
            return FilterType.from_name(filter_type)
        return None

    def _check_channel(self, channel: int) -> int:
        if not 0 <= channel < self._channels:
            raise IndexError(
                f"channel {channel} out of range for {self._channels}-channel filter"
            )
        return channel

    def _report(self, severity: Severity, message: str) -> None:
        if self._diagnostics is not None:
            self._diagnostics.report(severity, message)
        else:
            self._context.report(severity, message)

    def _reject(self, message: str) -> DesignResult:
        self._report(Severity.WARNING, message)
        return DesignResult.failure(message)
