"""Down-mixing and resampling of a raw 16-bit audio stream."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from chromakit.resample import Resampler

logger = logging.getLogger(__name__)

MIN_SAMPLE_RATE = 1000
MAX_BUFFER_SIZE = 1024 * 32

RESAMPLE_FILTER_LENGTH = 16
RESAMPLE_PHASE_SHIFT = 8
RESAMPLE_LINEAR = False
RESAMPLE_CUTOFF = 0.8


class AudioConsumer(Protocol):
    def consume(self, samples: list[int]) -> None: ...


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class AudioProcessor:
    """Mixes interleaved audio down to mono and converts it to a target sample rate.

    Processed mono samples are handed in blocks to ``consumer.consume``.
    """

    def __init__(self, sample_rate: int, consumer: AudioConsumer) -> None:
        self.target_sample_rate = sample_rate
        self.consumer = consumer
        self._buffer: list[int] = []
        self._num_channels: int | None = None
        self._resampler: Resampler | None = None

    def reset(self, sample_rate: int, num_channels: int) -> None:
        """Prepare for a new audio stream with the given format."""
        if num_channels <= 0:
            raise ValueError("no audio channels")
        if sample_rate <= MIN_SAMPLE_RATE:
            raise ValueError(
                f"sample rate must be greater than {MIN_SAMPLE_RATE} ({sample_rate})"
            )
        self._buffer = []
        self._resampler = None
        if sample_rate != self.target_sample_rate:
            self._resampler = Resampler(
                self.target_sample_rate,
                sample_rate,
                RESAMPLE_FILTER_LENGTH,
                RESAMPLE_PHASE_SHIFT,
                RESAMPLE_LINEAR,
                RESAMPLE_CUTOFF,
            )
        self._num_channels = num_channels

    def _downmix(self, samples: Sequence[int], start: int, count: int) -> list[int]:
        channels = self._num_channels
        assert channels is not None
        begin = start * channels
        end = (start + count) * channels
        if channels == 1:
            return list(samples[begin:end])
        if channels == 2:
            return [
                _trunc_div(left + right, 2)
                for left, right in zip(samples[begin:end:2], samples[begin + 1 : end : 2])
            ]
        return [
            _trunc_div(sum(samples[pos : pos + channels]), channels)
            for pos in range(begin, end, channels)
        ]

    def consume(self, samples: Sequence[int]) -> None:
        """Process a chunk of interleaved samples from the audio stream."""
        if self._num_channels is None:
            raise RuntimeError("reset() must be called before consume()")
        if len(samples) % self._num_channels:
            raise ValueError("sample count is not a multiple of the channel count")
        frames = len(samples) // self._num_channels
        position = 0
        while position < frames:
            take = min(MAX_BUFFER_SIZE - len(self._buffer), frames - position)
            self._buffer.extend(self._downmix(samples, position, take))
            position += take
            if len(self._buffer) == MAX_BUFFER_SIZE:
                self._resample()
                if len(self._buffer) == MAX_BUFFER_SIZE:
                    logger.debug("resampling failed to consume any input")
                    return

    def flush(self) -> None:
        """Process any buffered input that has not been processed yet."""
        if self._buffer:
            self._resample()

    def _resample(self) -> None:
        if self._resampler is None:
            block = self._buffer
            self._buffer = []
            self.consumer.consume(block)
            return
        output, consumed = self._resampler.resample(self._buffer, MAX_BUFFER_SIZE, True)
        if len(output) > MAX_BUFFER_SIZE:
            logger.debug("resampling overwrote output buffer")
            output = output[:MAX_BUFFER_SIZE]
        self.consumer.consume(output)
        if consumed > len(self._buffer):
            logger.debug("resampling overread input buffer")
            self._buffer = []
        else:
            self._buffer = self._buffer[consumed:]