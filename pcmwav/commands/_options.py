from __future__ import annotations

import functools
from typing import Any, Callable, Optional

import click

from pcmwav.config import PcmWavConfigError, get_preferred_format
from pcmwav.errors import PcmWavError
from pcmwav.format import PcmFormat


def format_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --rate/--bits/--channels/--sample-type/--byte-order to a command.

    The wrapped callback receives the resolved descriptor as `fmt`.
    """

    @click.option("--rate", "sample_rate_hz", type=int, help="Sample rate in Hz.")
    @click.option("--bits", "bits_per_sample", type=int, help="Bits per sample (8, 16, 24, 32).")
    @click.option("--channels", "channel_count", type=int, help="Channel count.")
    @click.option(
        "--sample-type",
        type=click.Choice(["signed", "unsigned"]),
        help="Sample signedness (affects sample encoding only).",
    )
    @click.option(
        "--byte-order",
        type=click.Choice(["little", "big"]),
        help="Sample byte order (affects sample encoding only).",
    )
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        overrides = {
            key: kwargs.pop(key) for key in ("sample_rate_hz", "bits_per_sample", "channel_count")
        }
        sample_type = kwargs.pop("sample_type")
        byte_order = kwargs.pop("byte_order")
        if sample_type is not None:
            overrides["signed"] = sample_type == "signed"
        if byte_order is not None:
            overrides["big_endian"] = byte_order == "big"
        kwargs["fmt"] = resolve_format(**overrides)
        return func(*args, **kwargs)

    return wrapper


def resolve_format(**overrides: Optional[object]) -> PcmFormat:
    """Configured format with any explicitly passed option applied on top."""
    try:
        return get_preferred_format(**overrides)
    except (PcmWavError, PcmWavConfigError) as e:
        raise click.ClickException(str(e)) from e


def describe_format(fmt: PcmFormat) -> str:
    sign = "signed" if fmt.signed else "unsigned"
    order = "big-endian" if fmt.big_endian else "little-endian"
    layout = "mono" if fmt.channel_count == 1 else f"{fmt.channel_count}ch"
    return f"{fmt.sample_rate_hz} Hz, {fmt.bits_per_sample}-bit {sign} {order}, {layout}"
