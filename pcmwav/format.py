"""PCM format descriptor and duration math.

The descriptor is a frozen value validated at construction. The free
functions here re-check the fields they divide by, so any object carrying the
same attributes (for example one built with `object.__new__`) fails with
`InvalidFormatError` instead of a ZeroDivisionError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pcmwav.errors import InvalidFormatError


DEFAULT_SAMPLE_RATE_HZ = 44100
DEFAULT_BITS_PER_SAMPLE = 16
DEFAULT_CHANNEL_COUNT = 1
DEFAULT_SIGNED = True
DEFAULT_BIG_ENDIAN = False


def _require_positive_int(name: str, value: Any) -> int:
    # bool is an int subclass; True would silently mean 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFormatError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidFormatError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class PcmFormat:
    sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE
    channel_count: int = DEFAULT_CHANNEL_COUNT
    signed: bool = DEFAULT_SIGNED
    big_endian: bool = DEFAULT_BIG_ENDIAN

    def __post_init__(self) -> None:
        _require_positive_int("sample_rate_hz", self.sample_rate_hz)
        bits = _require_positive_int("bits_per_sample", self.bits_per_sample)
        if bits % 8 != 0:
            raise InvalidFormatError(
                f"bits_per_sample must be a multiple of 8, got {bits}"
            )
        _require_positive_int("channel_count", self.channel_count)
        if not isinstance(self.signed, bool):
            raise InvalidFormatError(f"signed must be a bool, got {self.signed!r}")
        if not isinstance(self.big_endian, bool):
            raise InvalidFormatError(
                f"big_endian must be a bool, got {self.big_endian!r}"
            )

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    @property
    def frame_size(self) -> int:
        """Bytes in one frame (one sample for every channel)."""
        return self.bytes_per_sample * self.channel_count

    @property
    def byte_rate(self) -> int:
        """Bytes of sample data per second of audio."""
        return self.frame_size * self.sample_rate_hz

    def to_dict(self) -> dict[str, Any]:
        return {
            "sample_rate_hz": self.sample_rate_hz,
            "bits_per_sample": self.bits_per_sample,
            "channel_count": self.channel_count,
            "signed": self.signed,
            "big_endian": self.big_endian,
        }


def default_format() -> PcmFormat:
    """Return the canonical recording format (44.1kHz, 16-bit, mono, signed LE)."""
    return PcmFormat()


def create_format(
    sample_rate_hz: int | float,
    bits_per_sample: int,
    channel_count: int,
    signed: bool = DEFAULT_SIGNED,
    big_endian: bool = DEFAULT_BIG_ENDIAN,
) -> PcmFormat:
    """Build a validated descriptor for a non-default format.

    `sample_rate_hz` may be a float as long as it is integral (44100.0);
    fractional rates cannot be stored in a WAV header and are rejected.
    """
    rate: Any = sample_rate_hz
    if isinstance(rate, float):
        if not rate.is_integer():
            raise InvalidFormatError(
                f"sample_rate_hz must be a whole number of Hz, got {rate}"
            )
        rate = int(rate)
    return PcmFormat(
        sample_rate_hz=rate,
        bits_per_sample=bits_per_sample,
        channel_count=channel_count,
        signed=signed,
        big_endian=big_endian,
    )


def frame_size_of(fmt: PcmFormat) -> int:
    bits = _require_positive_int("bits_per_sample", fmt.bits_per_sample)
    if bits % 8 != 0:
        raise InvalidFormatError(f"bits_per_sample must be a multiple of 8, got {bits}")
    channels = _require_positive_int("channel_count", fmt.channel_count)
    return (bits // 8) * channels


def byte_rate_of(fmt: PcmFormat) -> int:
    rate = _require_positive_int("sample_rate_hz", fmt.sample_rate_hz)
    return frame_size_of(fmt) * rate


def duration_seconds(fmt: PcmFormat, data_length_bytes: int) -> int:
    """Return whole seconds of audio in `data_length_bytes` of PCM.

    Partial seconds are truncated, so anything under one second is 0.
    """
    if isinstance(data_length_bytes, bool) or not isinstance(data_length_bytes, int):
        raise TypeError(f"data_length_bytes must be an int, got {data_length_bytes!r}")
    if data_length_bytes < 0:
        raise ValueError(f"data_length_bytes must be non-negative, got {data_length_bytes}")
    bytes_per_second = byte_rate_of(fmt)
    return data_length_bytes // bytes_per_second
