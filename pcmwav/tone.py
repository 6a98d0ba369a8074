"""Sample encoding and test-tone generation.

This is where a descriptor's `signed` and `big_endian` fields matter: they
decide how float samples in [-1, 1] become PCM bytes. The WAV header does not
depend on them.
"""

from __future__ import annotations

import numpy as np

from pcmwav.errors import InvalidFormatError
from pcmwav.format import PcmFormat, frame_size_of


_MAX_ENCODED_BITS = 32


def _full_scale(bits: int) -> int:
    return (1 << (bits - 1)) - 1


def _check_bits(fmt: PcmFormat) -> int:
    frame_size_of(fmt)
    bits = int(fmt.bits_per_sample)
    if bits > _MAX_ENCODED_BITS:
        raise InvalidFormatError(
            f"sample encoding supports up to {_MAX_ENCODED_BITS} bits, got {bits}"
        )
    return bits


def _sample_dtype(fmt: PcmFormat) -> np.dtype:
    order = ">" if fmt.big_endian else "<"
    kind = "i" if fmt.signed else "u"
    return np.dtype(f"{order}{kind}{fmt.bits_per_sample // 8}")


def _as_frames(samples, channels: int) -> np.ndarray:
    arr = np.asarray(samples, dtype=np.float64)
    if arr.ndim == 1:
        # Mono signal: same samples on every channel.
        arr = np.repeat(arr[:, None], channels, axis=1)
    if arr.ndim != 2 or arr.shape[1] != channels:
        raise ValueError(
            f"expected samples shaped (frames, {channels}), got {tuple(arr.shape)}"
        )
    return arr


def encode_samples(samples, fmt: PcmFormat) -> bytes:
    """Quantize float samples in [-1, 1] to interleaved PCM bytes for `fmt`."""
    bits = _check_bits(fmt)
    frames = _as_frames(samples, fmt.channel_count)
    ints = np.round(np.clip(frames, -1.0, 1.0) * _full_scale(bits)).astype(np.int64)
    if not fmt.signed:
        ints = ints + (1 << (bits - 1))

    if bits != 24:
        return ints.astype(_sample_dtype(fmt)).tobytes()

    # No native 24-bit dtype: split each value into three bytes.
    raw = ints & 0xFFFFFF
    parts = [(raw >> shift) & 0xFF for shift in (0, 8, 16)]
    if fmt.big_endian:
        parts.reverse()
    return np.stack(parts, axis=-1).astype(np.uint8).tobytes()


def decode_samples(pcm: bytes, fmt: PcmFormat) -> np.ndarray:
    """Inverse of `encode_samples`: float64 array shaped (frames, channels)."""
    bits = _check_bits(fmt)
    frame_size = fmt.frame_size
    if len(pcm) % frame_size != 0:
        raise InvalidFormatError(
            f"PCM length {len(pcm)} is not a whole number of {frame_size}-byte frames"
        )

    if bits != 24:
        ints = np.frombuffer(pcm, dtype=_sample_dtype(fmt)).astype(np.int64)
    else:
        triples = np.frombuffer(pcm, dtype=np.uint8).reshape(-1, 3).astype(np.int64)
        if fmt.big_endian:
            triples = triples[:, ::-1]
        ints = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
        if fmt.signed:
            ints = np.where(ints >= (1 << 23), ints - (1 << 24), ints)

    if not fmt.signed:
        ints = ints - (1 << (bits - 1))
    return (ints / _full_scale(bits)).reshape(-1, fmt.channel_count)


def sine_wave(
    seconds: float,
    frequency_hz: float,
    fmt: PcmFormat,
    *,
    amplitude: float = 0.9,
) -> np.ndarray:
    """Return a sine tone shaped (frames, channels) with values in [-1, 1]."""
    if seconds < 0:
        raise ValueError(f"seconds must be non-negative, got {seconds}")
    if frequency_hz <= 0:
        raise ValueError(f"frequency_hz must be positive, got {frequency_hz}")
    if not 0.0 <= amplitude <= 1.0:
        raise ValueError(f"amplitude must be within [0, 1], got {amplitude}")

    rate = fmt.sample_rate_hz
    frames = int(round(seconds * rate))
    t = np.arange(frames, dtype=np.float64) / float(rate)
    wave = amplitude * np.sin(2.0 * np.pi * frequency_hz * t)
    return np.repeat(wave[:, None], fmt.channel_count, axis=1)


def tone_pcm(
    seconds: float,
    frequency_hz: float,
    fmt: PcmFormat,
    *,
    amplitude: float = 0.9,
) -> bytes:
    return encode_samples(sine_wave(seconds, frequency_hz, fmt, amplitude=amplitude), fmt)
