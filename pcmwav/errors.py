"""Exception types raised by pcmwav."""

from __future__ import annotations


class PcmWavError(Exception):
    pass


class InvalidFormatError(PcmWavError, ValueError):
    """A PCM format descriptor (or a value derived from it) is unusable."""


class SizeOverflowError(InvalidFormatError):
    """A value does not fit the fixed-width field it must be stored in."""


class WavParseError(PcmWavError, ValueError):
    """Bytes that were expected to hold a canonical PCM WAV header do not."""
