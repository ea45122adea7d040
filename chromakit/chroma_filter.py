"""FIR filtering of chroma vectors along the time axis."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

NUM_BANDS = 12
_BUFFER_ROWS = 8


class FeatureVectorConsumer(Protocol):
    def consume(self, features: list[float]) -> None: ...


class ChromaFilter:
    """Convolves consecutive chroma vectors with a short list of coefficients."""

    def __init__(self, coefficients: Sequence[float], consumer: FeatureVectorConsumer) -> None:
        if not 1 <= len(coefficients) <= _BUFFER_ROWS:
            raise ValueError(f"filter must have between 1 and {_BUFFER_ROWS} coefficients")
        self.coefficients = tuple(coefficients)
        self.consumer = consumer
        self._buffer: list[list[float]] = [[0.0] * NUM_BANDS for _ in range(_BUFFER_ROWS)]
        self._buffer_offset = 0
        self._buffer_size = 1

    def reset(self) -> None:
        """Forget previously buffered vectors."""
        self._buffer_size = 1
        self._buffer_offset = 0

    def consume(self, features: Sequence[float]) -> None:
        """Add a vector; once enough have arrived, emit the filtered vector."""
        length = len(self.coefficients)
        self._buffer[self._buffer_offset] = list(features)
        self._buffer_offset = (self._buffer_offset + 1) % _BUFFER_ROWS
        if self._buffer_size < length:
            self._buffer_size += 1
            return
        offset = (self._buffer_offset + _BUFFER_ROWS - length) % _BUFFER_ROWS
        rows = [self._buffer[(offset + j) % _BUFFER_ROWS] for j in range(length)]
        result = []
        for band in range(NUM_BANDS):
            total = 0.0
            for row, coefficient in zip(rows, self.coefficients):
                total += row[band] * coefficient
            result.append(total)
        self.consumer.consume(result)