from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from pcmwav.errors import InvalidFormatError
from pcmwav.format import PcmFormat, create_format, default_format, duration_seconds


def test_default_format_is_cd_rate_16bit_mono() -> None:
    fmt = default_format()
    assert fmt.sample_rate_hz == 44100
    assert fmt.bits_per_sample == 16
    assert fmt.channel_count == 1
    assert fmt.signed is True
    assert fmt.big_endian is False


def test_default_format_is_value_stable() -> None:
    assert default_format() == default_format()


def test_format_is_immutable() -> None:
    fmt = default_format()
    with pytest.raises(FrozenInstanceError):
        fmt.channel_count = 2  # type: ignore[misc]


def test_derived_sizes() -> None:
    fmt = PcmFormat(sample_rate_hz=48000, bits_per_sample=24, channel_count=2)
    assert fmt.bytes_per_sample == 3
    assert fmt.frame_size == 6
    assert fmt.byte_rate == 288000


@pytest.mark.parametrize(
    "kwargs",
    [
        {"channel_count": 0},
        {"channel_count": -1},
        {"sample_rate_hz": 0},
        {"bits_per_sample": 0},
        {"bits_per_sample": 12},
        {"bits_per_sample": True},
        {"sample_rate_hz": 44100.5},
        {"signed": 1},
    ],
)
def test_invalid_descriptor_rejected(kwargs) -> None:
    with pytest.raises(InvalidFormatError):
        PcmFormat(**kwargs)


def test_invalid_format_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        PcmFormat(channel_count=0)


def test_create_format_accepts_integral_float_rate() -> None:
    fmt = create_format(44100.0, 16, 2)
    assert fmt.sample_rate_hz == 44100
    assert isinstance(fmt.sample_rate_hz, int)
    assert fmt.channel_count == 2


def test_create_format_rejects_fractional_rate() -> None:
    with pytest.raises(InvalidFormatError):
        create_format(22050.5, 16, 1)


def test_duration_seconds_whole_seconds() -> None:
    fmt = default_format()
    assert duration_seconds(fmt, 44100 * 2) == 1
    assert duration_seconds(fmt, 44100 * 2 * 2) == 2


def test_duration_seconds_truncates_below_one_second() -> None:
    assert duration_seconds(default_format(), (44100 // 10) * 2) == 0
    assert duration_seconds(default_format(), 0) == 0


def test_duration_seconds_truncates_partial_second() -> None:
    assert duration_seconds(default_format(), 44100 * 2 * 3 - 1) == 2


def test_duration_seconds_accounts_for_channels_and_width() -> None:
    fmt = PcmFormat(sample_rate_hz=8000, bits_per_sample=32, channel_count=2)
    assert duration_seconds(fmt, 8000 * 8 * 5) == 5


def test_duration_seconds_is_monotonic() -> None:
    fmt = PcmFormat(sample_rate_hz=8000, bits_per_sample=8, channel_count=1)
    values = [duration_seconds(fmt, n) for n in range(0, 40000, 997)]
    assert values == sorted(values)


def test_duration_seconds_rejects_negative_length() -> None:
    with pytest.raises(ValueError):
        duration_seconds(default_format(), -1)


def test_duration_seconds_rejects_descriptor_built_around_validation() -> None:
    # A zero-channel descriptor that skipped __post_init__ must still fail cleanly.
    fmt = object.__new__(PcmFormat)
    for name, value in (
        ("sample_rate_hz", 44100),
        ("bits_per_sample", 16),
        ("channel_count", 0),
        ("signed", True),
        ("big_endian", False),
    ):
        object.__setattr__(fmt, name, value)
    with pytest.raises(InvalidFormatError):
        duration_seconds(fmt, 1000)


def test_to_dict_round_trips_through_constructor() -> None:
    fmt = PcmFormat(sample_rate_hz=22050, bits_per_sample=8, channel_count=2, signed=False)
    assert PcmFormat(**fmt.to_dict()) == fmt


def test_package_exports_public_operations() -> None:
    import pcmwav

    for name in (
        "default_format",
        "duration_seconds",
        "write_header",
        "is_wav",
        "wav_duration_seconds",
        "tone_pcm",
        "encode_samples",
        "decode_samples",
    ):
        assert name in pcmwav.__all__
        assert callable(getattr(pcmwav, name))
