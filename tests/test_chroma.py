import pytest

from chromakit.chroma import Chroma

SAMPLE_RATE = 11025
FRAME_SIZE = 4096
MIN_FREQ = 28
MAX_FREQ = 3520


class Collector:
    def __init__(self):
        self.rows = []

    def consume(self, features):
        self.rows.append(list(features))


def make(interpolate=False):
    collector = Collector()
    chroma = Chroma(MIN_FREQ, MAX_FREQ, FRAME_SIZE, SAMPLE_RATE, collector)
    chroma.interpolate = interpolate
    return chroma, collector


def frame_with(index, energy=1.0):
    frame = [0.0] * FRAME_SIZE
    frame[index] = energy
    return frame


def test_single_bin_goes_to_one_band():
    chroma, collector = make()
    chroma.consume(frame_with(163, 2.5))
    row = collector.rows[0]
    assert len(row) == 12
    assert sum(1 for v in row if v) == 1
    assert sum(row) == pytest.approx(2.5)


def test_octave_maps_to_same_band():
    chroma, collector = make()
    chroma.consume(frame_with(163))
    chroma.consume(frame_with(326))
    first, second = collector.rows
    assert first.index(1.0) == second.index(1.0)


def test_bins_outside_range_are_ignored():
    chroma, collector = make()
    chroma.consume(frame_with(0, 5.0))
    chroma.consume(frame_with(FRAME_SIZE // 2, 5.0))
    assert collector.rows == [[0.0] * 12, [0.0] * 12]


def test_interpolation_preserves_energy_in_adjacent_bands():
    chroma, collector = make(interpolate=True)
    for index in (100, 163, 250, 500):
        chroma.consume(frame_with(index, 3.0))
    for row in collector.rows:
        assert sum(row) == pytest.approx(3.0)
        nonzero = [i for i, v in enumerate(row) if v > 1e-12]
        assert 1 <= len(nonzero) <= 2
        if len(nonzero) == 2:
            a, b = nonzero
            assert (b - a) % 12 in (1, 11)


def test_reset_keeps_mapping():
    chroma, collector = make()
    chroma.consume(frame_with(200))
    chroma.reset()
    chroma.consume(frame_with(200))
    assert collector.rows[0] == collector.rows[1]