"""Stages for chroma-based audio analysis: channel mixing, resampling and chroma features."""

__version__ = "1.4.4"
__all__ = ["__version__"]