import pytest

from chromakit.chroma_filter import ChromaFilter


class Collector:
    def __init__(self):
        self.rows = []

    def consume(self, features):
        self.rows.append(list(features))


def row(a, b):
    return [a, b] + [0.0] * 10


def test_blur2():
    image = Collector()
    flt = ChromaFilter([0.5, 0.5], image)
    for values in (row(0.0, 5.0), row(1.0, 6.0), row(2.0, 7.0)):
        flt.consume(values)
    assert len(image.rows) == 2
    assert image.rows[0][0] == 0.5
    assert image.rows[1][0] == 1.5
    assert image.rows[0][1] == 5.5
    assert image.rows[1][1] == 6.5


def test_blur3():
    image = Collector()
    flt = ChromaFilter([0.5, 0.7, 0.5], image)
    for values in (row(0.0, 5.0), row(1.0, 6.0), row(2.0, 7.0), row(3.0, 8.0)):
        flt.consume(values)
    assert len(image.rows) == 2
    assert image.rows[0][0] == pytest.approx(1.7)
    assert image.rows[1][0] == pytest.approx(3.399999999999999)
    assert image.rows[0][1] == pytest.approx(10.199999999999999)
    assert image.rows[1][1] == pytest.approx(11.899999999999999)


def test_diff():
    image = Collector()
    flt = ChromaFilter([1.0, -1.0], image)
    for values in (row(0.0, 5.0), row(1.0, 6.0), row(2.0, 7.0)):
        flt.consume(values)
    assert len(image.rows) == 2
    assert image.rows[0][0] == -1.0
    assert image.rows[1][0] == -1.0
    assert image.rows[0][1] == -1.0
    assert image.rows[1][1] == -1.0


def test_reset_requires_full_window_again():
    image = Collector()
    flt = ChromaFilter([0.5, 0.5], image)
    flt.consume(row(0.0, 5.0))
    flt.consume(row(1.0, 6.0))
    flt.reset()
    flt.consume(row(2.0, 7.0))
    assert len(image.rows) == 1
    flt.consume(row(2.0, 7.0))
    assert len(image.rows) == 2
    assert image.rows[1][0] == 2.0


@pytest.mark.parametrize("coefficients", [[], [1.0] * 9])
def test_invalid_length(coefficients):
    with pytest.raises(ValueError):
        ChromaFilter(coefficients, Collector())