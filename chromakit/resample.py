"""Polyphase windowed-sinc resampler for 16-bit audio."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence

FILTER_SHIFT = 15
WINDOW_TYPE = 9
_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder taking the sign of the dividend."""
    return a - b * _cdiv(a, b)


def _wrap32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _to_float32(x: float) -> float:
    return struct.unpack("f", struct.pack("f", x))[0]


def _clip(value: int, low: int, high: int) -> int:
    return low if value < low else high if value > high else value


def bessel(x: float) -> float:
    """Zeroth-order modified Bessel function of the first kind."""
    v = 1.0
    last = 0.0
    t = 1.0
    x = x * x / 4
    i = 1
    while v != last:
        last = v
        t *= x / (i * i)
        v += t
        i += 1
    return v


def build_filter(
    factor: float,
    tap_count: int,
    phase_count: int,
    scale: int,
    window_type: int,
) -> list[int]:
    """Build a polyphase filter bank as 16-bit integer coefficients.

    ``window_type`` 0 selects a cubic filter, 1 a Blackman-Nuttall windowed
    sinc and larger values a Kaiser windowed sinc with that beta. Each
    phase's coefficients sum to about ``scale``.
    """
    center = (tap_count - 1) // 2
    factor = min(factor, 1.0)
    bank: list[int] = []
    for ph in range(phase_count):
        tab = []
        for i in range(tap_count):
            offset = (i - center) - ph / phase_count
            x = math.pi * offset * factor
            y = 1.0 if x == 0 else math.sin(x) / x
            if window_type == 0:
                d = -0.5
                ax = abs(offset * factor)
                if ax < 1.0:
                    y = 1 - 3 * ax * ax + 2 * ax * ax * ax + d * (-ax * ax + ax * ax * ax)
                else:
                    y = d * (-4 + 8 * ax - 5 * ax * ax + ax * ax * ax)
            elif window_type == 1:
                w = 2.0 * x / (factor * tap_count) + math.pi
                y *= (
                    0.3635819
                    - 0.4891775 * math.cos(w)
                    + 0.1365995 * math.cos(2 * w)
                    - 0.0106411 * math.cos(3 * w)
                )
            else:
                w = 2.0 * x / (factor * tap_count * math.pi)
                y *= bessel(window_type * math.sqrt(max(1 - w * w, 0)))
            tab.append(y)
        norm = sum(tab)
        bank.extend(
            _clip(round(_to_float32(value * scale / norm)), _INT16_MIN, _INT16_MAX)
            for value in tab
        )
    return bank


class Resampler:
    """Stateful sample-rate converter working on blocks of 16-bit samples."""

    def __init__(
        self,
        out_rate: int,
        in_rate: int,
        filter_length: int = 16,
        phase_shift: int = 8,
        linear: bool = False,
        cutoff: float = 0.8,
    ) -> None:
        if out_rate <= 0 or in_rate <= 0:
            raise ValueError("sample rates must be positive")
        factor = min(out_rate * cutoff / in_rate, 1.0)
        phase_count = 1 << phase_shift

        self.phase_shift = phase_shift
        self.phase_mask = phase_count - 1
        self.linear = bool(linear)
        self.filter_length = max(math.ceil(filter_length / factor), 1)

        length = self.filter_length
        bank = build_filter(factor, length, phase_count, 1 << FILTER_SHIFT, WINDOW_TYPE)
        # One extra phase so linear interpolation can read past the last one.
        bank.append(bank[length - 1])
        bank.extend(bank[: length - 1])
        self.filter_bank = bank

        self.src_incr = out_rate
        self.ideal_dst_incr = in_rate * phase_count
        self.dst_incr = self.ideal_dst_incr
        self.index = -phase_count * ((length - 1) // 2)
        self.frac = 0
        self.compensation_distance = 0

    def compensate(self, sample_delta: int, compensation_distance: int) -> None:
        """Stretch the next ``compensation_distance`` outputs by ``sample_delta`` samples."""
        self.compensation_distance = compensation_distance
        self.dst_incr = self.ideal_dst_incr - _cdiv(
            self.ideal_dst_incr * sample_delta, compensation_distance
        )

    def resample(
        self, src: Sequence[int], dst_size: int, update_ctx: bool = True
    ) -> tuple[list[int], int]:
        """Resample ``src`` into at most ``dst_size`` samples.

        Returns the output samples and the number of input samples consumed.
        The internal position is advanced only when ``update_ctx`` is true.
        """
        if not src:
            raise ValueError("source block is empty")
        src_size = len(src)
        index = self.index
        frac = self.frac
        src_incr = self.src_incr
        dst_incr_frac = _cmod(self.dst_incr, src_incr)
        dst_incr = _cdiv(self.dst_incr, src_incr)
        compensation_distance = self.compensation_distance
        length = self.filter_length
        bank = self.filter_bank
        dst: list[int] = []

        if compensation_distance == 0 and length == 1 and self.phase_shift == 0:
            index2 = index << 32
            incr = _cdiv((1 << 32) * self.dst_incr, src_incr)
            dst_size = min(dst_size, _cdiv((src_size - 1 - index) * src_incr, self.dst_incr))
            for _ in range(max(dst_size, 0)):
                dst.append(src[index2 >> 32])
                index2 += incr
            produced = len(dst)
            frac += produced * dst_incr_frac
            index += produced * dst_incr
            index += _cdiv(frac, src_incr)
            frac = _cmod(frac, src_incr)
        else:
            for dst_index in range(dst_size):
                base = length * (index & self.phase_mask)
                taps = bank[base : base + length]
                sample_index = index >> self.phase_shift

                if sample_index < 0:
                    val = _wrap32(
                        sum(src[abs(sample_index + i) % src_size] * tap for i, tap in enumerate(taps))
                    )
                elif sample_index + length > src_size:
                    break
                elif self.linear:
                    window = src[sample_index : sample_index + length]
                    next_taps = bank[base + length : base + 2 * length]
                    val = _wrap32(sum(s * t for s, t in zip(window, taps)))
                    v2 = _wrap32(sum(s * t for s, t in zip(window, next_taps)))
                    val = _wrap32(val + _cdiv(_wrap32(v2 - val) * frac, src_incr))
                else:
                    window = src[sample_index : sample_index + length]
                    val = _wrap32(sum(s * t for s, t in zip(window, taps)))

                val = (val + (1 << (FILTER_SHIFT - 1))) >> FILTER_SHIFT
                dst.append(_clip(val, _INT16_MIN, _INT16_MAX))

                frac += dst_incr_frac
                index += dst_incr
                if frac >= src_incr:
                    frac -= src_incr
                    index += 1

                if dst_index + 1 == compensation_distance:
                    compensation_distance = 0
                    dst_incr_frac = _cmod(self.ideal_dst_incr, src_incr)
                    dst_incr = _cdiv(self.ideal_dst_incr, src_incr)

        produced = len(dst)
        consumed = max(index, 0) >> self.phase_shift
        if index >= 0:
            index &= self.phase_mask

        if compensation_distance:
            compensation_distance -= produced
            if compensation_distance <= 0:
                raise RuntimeError("compensation distance overrun")

        if update_ctx:
            self.frac = frac
            self.index = index
            self.dst_incr = dst_incr_frac + src_incr * dst_incr
            self.compensation_distance = compensation_distance

        return dst, consumed