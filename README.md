# chromakit

Pure-Python building blocks for chroma-based audio fingerprinting. Each
stage takes its input through a `consume` method and passes what it
produces on to the next stage, its *consumer*. A consumer is any object
with a `consume` method.

No third-party dependencies are needed.

## Stages

- `chromakit.audio_processor.AudioProcessor(sample_rate, consumer)`:
  mixes interleaved 16-bit samples down to mono (channels are averaged,
  truncating toward zero) and, when the stream's rate differs from
  `sample_rate`, resamples them. Output is handed to the consumer in blocks
  of up to 32768 samples.
  - `reset(sample_rate, num_channels)` prepares for a new stream. It raises
    `ValueError` when `num_channels` is not positive or the sample rate is
    1000 Hz or less.
  - `consume(samples)` takes interleaved samples. It raises `RuntimeError`
    if `reset` has not been called and `ValueError` if the number of
    samples is not a multiple of the channel count.
  - `flush()` passes on whatever is still buffered.
- `chromakit.resample.Resampler(out_rate, in_rate, filter_length=16,
  phase_shift=8, linear=False, cutoff=0.8)`: a stateful polyphase
  Kaiser-windowed-sinc resampler with 16-bit fixed-point taps.
  `resample(src, dst_size, update_ctx=True)` returns a tuple of the output
  samples and the number of input samples consumed; `compensate(sample_delta,
  compensation_distance)` stretches or shrinks the next outputs. The module
  also offers `build_filter` and `bessel`.
- `chromakit.chroma.Chroma(min_freq, max_freq, frame_size, sample_rate,
  consumer)`: folds the energies of one spectrum frame (a sequence indexed
  by bin) into 12 pitch-class bands. Set `interpolate = True` to spread
  each bin's energy between neighbouring bands.
- `chromakit.chroma_filter.ChromaFilter(coefficients, consumer)`: applies a
  FIR filter of 1 to 8 coefficients across successive chroma vectors
  (blurring, differencing). Output starts once as many vectors as there are
  coefficients have arrived.
- `chromakit.chroma_resampler.ChromaResampler(factor, consumer)`: emits the
  mean of every `factor` chroma vectors.
- `chromakit.utils`: `round_half_away`, `hamming_window`, `apply_window`,
  `euclidean_norm`, `normalize_vector`, `gray_code`, `index_to_freq`,
  `freq_to_index`, `freq_to_bark`, `count_set_bits` and `hamming_distance`.

All stages except `AudioProcessor` have a `reset()` method that clears
their buffered state.

## Example

```python
from chromakit.chroma_filter import ChromaFilter


class Collector:
    def __init__(self):
        self.rows = []

    def consume(self, features):
        self.rows.append(list(features))


rows = Collector()
blur = ChromaFilter([0.5, 0.5], rows)
blur.consume([0.0, 5.0] + [0.0] * 10)
blur.consume([1.0, 6.0] + [0.0] * 10)
print(rows.rows[0][:2])   # [0.5, 5.5]
```

Feeding audio:

```python
from chromakit.audio_processor import AudioProcessor

blocks = Collector()
processor = AudioProcessor(11025, blocks)
processor.reset(44100, 2)                 # source rate and channel count
processor.consume(interleaved_samples)
processor.flush()
```

## What it does not do

chromakit provides the stages above and nothing more. It has no spectrum
(FFT) stage, so the frames given to `Chroma` must be computed elsewhere; it
does not normalise chroma vectors into an image, compute, compress or
compare fingerprints, or decode audio files. There is no command-line tool.

## Running the tests

Install the `test` extra and run pytest from the source tree:

```
pip install .[test]
pytest
```