"""Mapping of FFT frame energies onto the twelve pitch classes."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol

from chromakit.utils import freq_to_index, index_to_freq

NUM_BANDS = 12


class FeatureVectorConsumer(Protocol):
    def consume(self, features: list[float]) -> None: ...


def _freq_to_octave(freq: float, base: float = 440.0 / 16.0) -> float:
    return math.log(freq / base) / math.log(2.0)


class Chroma:
    """Sums the energy of FFT bins into twelve chroma bands per frame."""

    def __init__(
        self,
        min_freq: int,
        max_freq: int,
        frame_size: int,
        sample_rate: int,
        consumer: FeatureVectorConsumer,
    ) -> None:
        self.interpolate = False
        self.consumer = consumer
        self._notes = [0] * frame_size
        self._notes_frac = [0.0] * frame_size
        self._min_index = max(1, freq_to_index(min_freq, frame_size, sample_rate))
        self._max_index = min(frame_size // 2, freq_to_index(max_freq, frame_size, sample_rate))
        for i in range(self._min_index, self._max_index):
            octave = _freq_to_octave(index_to_freq(i, frame_size, sample_rate))
            note = NUM_BANDS * (octave - math.floor(octave))
            self._notes[i] = int(note)
            self._notes_frac[i] = note - int(note)

    def reset(self) -> None:
        """Prepare for a new stream; the transform keeps no state between frames."""

    def consume(self, frame: Sequence[float]) -> None:
        """Turn one frame of bin energies into a chroma vector for the consumer."""
        features = [0.0] * NUM_BANDS
        for i in range(self._min_index, self._max_index):
            note = self._notes[i]
            energy = frame[i]
            if self.interpolate:
                frac = self._notes_frac[i]
                note2 = note
                a = 1.0
                if frac < 0.5:
                    note2 = (note + NUM_BANDS - 1) % NUM_BANDS
                    a = 0.5 + frac
                if frac > 0.5:
                    note2 = (note + 1) % NUM_BANDS
                    a = 1.5 - frac
                features[note] += energy * a
                features[note2] += energy * (1.0 - a)
            else:
                features[note] += energy
        self.consumer.consume(features)