"""Numeric helpers shared by the audio fingerprinting pipeline."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence

_GRAY_CODES = (0, 1, 3, 2)


def round_half_away(x: float) -> float:
    """Round to the nearest integer, with halves rounded away from zero."""
    if x >= 0.0:
        return float(math.floor(x + 0.5))
    return float(math.ceil(x - 0.5))


def hamming_window(size: int, scale: float = 1.0) -> list[float]:
    """Return a Hamming window of ``size`` points multiplied by ``scale``."""
    denominator = size - 1
    window = []
    for i in range(size):
        angle = i * 2.0 * math.pi / denominator if denominator else math.nan
        window.append(scale * (0.54 - 0.46 * math.cos(angle)))
    return window


def apply_window(values: Iterable[float], window: Iterable[float]) -> list[float]:
    """Multiply ``values`` element-wise by ``window``."""
    return [value * weight for value, weight in zip(values, window)]


def euclidean_norm(values: Iterable[float]) -> float:
    """Return the Euclidean (L2) norm of ``values``."""
    squares = sum(value * value for value in values)
    return math.sqrt(squares) if squares > 0 else 0.0


def normalize_vector(
    values: Sequence[float],
    norm_func: Callable[[Sequence[float]], float] = euclidean_norm,
    threshold: float = 0.01,
) -> list[float]:
    """Divide ``values`` by their norm, or zero them if the norm is below ``threshold``."""
    norm = norm_func(values)
    if norm < threshold:
        return [0.0] * len(values)
    return [value / norm for value in values]


def gray_code(i: int) -> int:
    """Return the two-bit Gray code for ``i`` in the range 0..3."""
    if not 0 <= i < len(_GRAY_CODES):
        raise ValueError(f"gray code index out of range: {i}")
    return _GRAY_CODES[i]


def index_to_freq(i: int, frame_size: int, sample_rate: int) -> float:
    """Return the frequency in Hz of FFT bin ``i``."""
    return float(i) * sample_rate / frame_size


def freq_to_index(freq: float, frame_size: int, sample_rate: int) -> int:
    """Return the FFT bin index nearest to ``freq``."""
    return int(round_half_away(frame_size * freq / sample_rate))


def freq_to_bark(f: float) -> float:
    """Convert a frequency in Hz to the Bark scale (Traunmüller's formula)."""
    z = (26.81 * f) / (1960.0 + f) - 0.53
    if z < 2.0:
        z = z + 0.15 * (2.0 - z)
    elif z > 20.1:
        z = z + 0.22 * (z - 20.1)
    return z


def count_set_bits(value: int) -> int:
    """Count the one bits in ``value``.

    Negative numbers are taken in two's complement, 32 bits wide when they
    fit and 64 bits wide otherwise.
    """
    if value < 0:
        if value >= -(1 << 31):
            value &= (1 << 32) - 1
        elif value >= -(1 << 63):
            value &= (1 << 64) - 1
        else:
            raise OverflowError(f"value does not fit in 64 bits: {value}")
    return bin(value).count("1")


def hamming_distance(a: int, b: int) -> int:
    """Return the number of bits in which ``a`` and ``b`` differ."""
    return count_set_bits(a ^ b)