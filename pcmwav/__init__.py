"""PCM format descriptors and canonical WAV headers."""

from pcmwav.errors import (
    InvalidFormatError,
    PcmWavError,
    SizeOverflowError,
    WavParseError,
)
from pcmwav.format import (
    PcmFormat,
    create_format,
    default_format,
    duration_seconds,
)
from pcmwav.tone import (
    decode_samples,
    encode_samples,
    sine_wave,
    tone_pcm,
)
from pcmwav.wav import (
    HEADER_SIZE,
    WavHeader,
    build_header,
    is_wav,
    parse_header,
    read_wav,
    save_wav,
    wav_duration_seconds,
    write_header,
    write_wav,
)

__all__ = [
    "HEADER_SIZE",
    "InvalidFormatError",
    "PcmFormat",
    "PcmWavError",
    "SizeOverflowError",
    "WavHeader",
    "WavParseError",
    "build_header",
    "create_format",
    "decode_samples",
    "default_format",
    "duration_seconds",
    "encode_samples",
    "is_wav",
    "parse_header",
    "read_wav",
    "save_wav",
    "sine_wave",
    "tone_pcm",
    "wav_duration_seconds",
    "write_header",
    "write_wav",
]
