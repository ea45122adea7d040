import pytest

from chromakit.audio_processor import MAX_BUFFER_SIZE, AudioProcessor


class Collector:
    def __init__(self):
        self.blocks = []

    def consume(self, samples):
        self.blocks.append(list(samples))

    @property
    def samples(self):
        return [s for block in self.blocks for s in block]


def make(sample_rate=11025):
    collector = Collector()
    return AudioProcessor(sample_rate, collector), collector


def test_mono_pass_through():
    processor, collector = make()
    processor.reset(11025, 1)
    data = [1000, 2000, 3000, 4000, 5000, 6000]
    processor.consume(data)
    processor.flush()
    assert collector.samples == data


def test_stereo_downmix_truncates_toward_zero():
    processor, collector = make()
    processor.reset(11025, 2)
    processor.consume([1000, 2000, -3, 0])
    processor.flush()
    assert collector.samples == [1500, -1]


def test_multichannel_downmix():
    processor, collector = make()
    processor.reset(11025, 3)
    processor.consume([3, 3, 3, -4, -4, -5])
    processor.flush()
    assert collector.samples == [3, -4]


def test_flush_without_data_emits_nothing():
    processor, collector = make()
    processor.reset(11025, 1)
    processor.flush()
    assert collector.blocks == []


def test_full_buffer_is_emitted_during_consume():
    processor, collector = make()
    processor.reset(11025, 1)
    data = [i % 100 for i in range(MAX_BUFFER_SIZE + 100)]
    processor.consume(data)
    assert [len(b) for b in collector.blocks] == [MAX_BUFFER_SIZE]
    processor.flush()
    assert [len(b) for b in collector.blocks] == [MAX_BUFFER_SIZE, 100]
    assert collector.samples == data


def test_resampling_keeps_constant_signal():
    processor, collector = make(11025)
    processor.reset(44100, 1)
    processor.consume([1000] * 8000)
    processor.flush()
    output = collector.samples
    assert 1900 < len(output) <= 2000
    assert all(995 <= s <= 1005 for s in output)


def test_reset_rejects_no_channels():
    processor, _ = make()
    with pytest.raises(ValueError):
        processor.reset(44100, 0)


def test_reset_rejects_low_sample_rate():
    processor, _ = make()
    with pytest.raises(ValueError):
        processor.reset(1000, 1)


def test_consume_rejects_partial_frames():
    processor, _ = make()
    processor.reset(11025, 2)
    with pytest.raises(ValueError):
        processor.consume([1, 2, 3])


def test_consume_before_reset_fails():
    processor, _ = make()
    with pytest.raises(RuntimeError):
        processor.consume([1, 2])