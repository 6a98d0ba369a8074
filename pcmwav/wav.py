"""Canonical 44-byte RIFF/WAVE header for linear PCM.

Layout (all integers little-endian):

    0  "RIFF"          4  36 + data length    8  "WAVE"
    12 "fmt "          16 16 (fmt size)       20 1 (PCM)
    22 channels        24 sample rate         28 byte rate
    32 block align     34 bits per sample
    36 "data"          40 data length

The header never varies in size. The descriptor's `signed` and `big_endian`
fields describe the sample data that follows, not the header itself.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from pcmwav.errors import InvalidFormatError, SizeOverflowError, WavParseError
from pcmwav.format import PcmFormat, byte_rate_of, duration_seconds, frame_size_of


logger = logging.getLogger(__name__)

HEADER_SIZE = 44
FMT_CHUNK_SIZE = 16
WAVE_FORMAT_PCM = 1
RIFF_SIZE_OVERHEAD = HEADER_SIZE - 8

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

PathLike = Union[str, Path]


@dataclass(frozen=True)
class WavHeader:
    fmt: PcmFormat
    data_length: int
    riff_size: int

    @property
    def duration_seconds(self) -> int:
        return duration_seconds(self.fmt, self.data_length)

    def to_dict(self) -> dict[str, object]:
        return {
            **self.fmt.to_dict(),
            "data_length": self.data_length,
            "riff_size": self.riff_size,
            "byte_rate": self.fmt.byte_rate,
            "block_align": self.fmt.frame_size,
            "duration_seconds": self.duration_seconds,
        }


def _check_field(name: str, value: int, limit: int) -> int:
    if value > limit:
        raise SizeOverflowError(f"{name} {value} does not fit in the header (max {limit})")
    return value


def build_header(data_length_bytes: int, fmt: PcmFormat) -> bytes:
    """Return the 44-byte header describing `data_length_bytes` of PCM."""
    if isinstance(data_length_bytes, bool) or not isinstance(data_length_bytes, int):
        raise TypeError(f"data_length_bytes must be an int, got {data_length_bytes!r}")
    if data_length_bytes < 0:
        raise ValueError(f"data_length_bytes must be non-negative, got {data_length_bytes}")

    block_align = frame_size_of(fmt)
    byte_rate = byte_rate_of(fmt)
    riff_size = _check_field("RIFF chunk size", RIFF_SIZE_OVERHEAD + data_length_bytes, _U32_MAX)

    return _HEADER_STRUCT.pack(
        b"RIFF",
        riff_size,
        b"WAVE",
        b"fmt ",
        FMT_CHUNK_SIZE,
        WAVE_FORMAT_PCM,
        _check_field("channel count", fmt.channel_count, _U16_MAX),
        _check_field("sample rate", fmt.sample_rate_hz, _U32_MAX),
        _check_field("byte rate", byte_rate, _U32_MAX),
        _check_field("block align", block_align, _U16_MAX),
        _check_field("bits per sample", fmt.bits_per_sample, _U16_MAX),
        b"data",
        data_length_bytes,
    )


def write_header(sink: BinaryIO, data_length_bytes: int, fmt: PcmFormat) -> None:
    """Write the header for `data_length_bytes` of PCM to `sink` in one call.

    Validation happens before anything is written; a failing sink raises its
    own OSError and the caller owns cleanup.
    """
    header = build_header(data_length_bytes, fmt)
    sink.write(header)


def is_wav(data: bytes) -> bool:
    head = bytes(data[:12])
    return len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"WAVE"


def parse_header(data: bytes) -> WavHeader:
    """Decode a canonical 44-byte PCM header (the inverse of `build_header`)."""
    if len(data) < HEADER_SIZE:
        raise WavParseError(f"expected {HEADER_SIZE} header bytes, got {len(data)}")

    (
        riff,
        riff_size,
        wave,
        fmt_id,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits,
        data_id,
        data_length,
    ) = _HEADER_STRUCT.unpack(bytes(data[:HEADER_SIZE]))

    if riff != b"RIFF" or wave != b"WAVE":
        raise WavParseError("not a RIFF/WAVE container")
    if fmt_id != b"fmt ":
        raise WavParseError(f"expected 'fmt ' chunk at offset 12, found {fmt_id!r}")
    if fmt_size != FMT_CHUNK_SIZE:
        raise WavParseError(f"unsupported fmt chunk size {fmt_size} (expected 16)")
    if audio_format != WAVE_FORMAT_PCM:
        raise WavParseError(f"unsupported audio format code {audio_format} (expected 1)")
    if data_id != b"data":
        raise WavParseError(f"expected 'data' chunk at offset 36, found {data_id!r}")

    try:
        # 8-bit WAV samples are unsigned; wider ones are signed.
        fmt = PcmFormat(
            sample_rate_hz=sample_rate,
            bits_per_sample=bits,
            channel_count=channels,
            signed=bits != 8,
            big_endian=False,
        )
    except InvalidFormatError as e:
        raise WavParseError(f"invalid fmt chunk: {e}") from e

    if block_align != fmt.frame_size:
        raise WavParseError(
            f"block align {block_align} does not match {channels} channel(s) of {bits}-bit samples"
        )
    if byte_rate != fmt.byte_rate:
        raise WavParseError(f"byte rate {byte_rate} does not match expected {fmt.byte_rate}")

    return WavHeader(fmt=fmt, data_length=data_length, riff_size=riff_size)


def _check_whole_frames(length: int, fmt: PcmFormat) -> None:
    frame_size = frame_size_of(fmt)
    if length % frame_size != 0:
        raise InvalidFormatError(
            f"PCM length {length} is not a whole number of {frame_size}-byte frames"
        )


def write_wav(sink: BinaryIO, pcm: bytes, fmt: PcmFormat) -> int:
    """Write header + PCM to `sink`; return the number of bytes written."""
    data = bytes(pcm)
    _check_whole_frames(len(data), fmt)
    write_header(sink, len(data), fmt)
    sink.write(data)
    return HEADER_SIZE + len(data)


def save_wav(path: PathLike, pcm: bytes, fmt: PcmFormat) -> Path:
    out_path = Path(path)
    data = bytes(pcm)
    # Fail before creating the file.
    _check_whole_frames(len(data), fmt)
    build_header(len(data), fmt)
    with open(out_path, "wb") as fh:
        written = write_wav(fh, data, fmt)
    logger.debug("Wrote %s bytes to %s", written, out_path)
    return out_path


def read_wav(path: PathLike) -> tuple[WavHeader, bytes]:
    """Return the parsed header and exactly `data_length` bytes of PCM."""
    with open(path, "rb") as fh:
        header = parse_header(fh.read(HEADER_SIZE))
        pcm = fh.read(header.data_length)
    if len(pcm) < header.data_length:
        raise WavParseError(
            f"{path}: header declares {header.data_length} data bytes, file has {len(pcm)}"
        )
    return header, pcm


def wav_duration_seconds(path: PathLike) -> int:
    """Return whole seconds of audio in a canonical WAV file."""
    with open(path, "rb") as fh:
        header = parse_header(fh.read(HEADER_SIZE))
    return header.duration_seconds
