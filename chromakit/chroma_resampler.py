"""Averaging of consecutive chroma vectors to lower their rate."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

NUM_BANDS = 12


class FeatureVectorConsumer(Protocol):
    def consume(self, features: list[float]) -> None: ...


class ChromaResampler:
    """Emits the mean of every ``factor`` consecutive chroma vectors."""

    def __init__(self, factor: int, consumer: FeatureVectorConsumer) -> None:
        if factor <= 0:
            raise ValueError("factor must be positive")
        self.factor = factor
        self.consumer = consumer
        self._result = [0.0] * NUM_BANDS
        self._iteration = 0

    def reset(self) -> None:
        """Discard the partially accumulated average."""
        self._iteration = 0
        self._result = [0.0] * NUM_BANDS

    def consume(self, features: Sequence[float]) -> None:
        """Accumulate a vector, emitting the average after every ``factor`` vectors."""
        self._result = [acc + value for acc, value in zip(self._result, features[:NUM_BANDS])]
        self._iteration += 1
        if self._iteration == self.factor:
            self.consumer.consume([value / self.factor for value in self._result])
            self.reset()