"""`pcmwav format`, `pcmwav duration` and `pcmwav header`."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from pcmwav.commands._options import describe_format, format_options
from pcmwav.errors import PcmWavError
from pcmwav.format import PcmFormat, duration_seconds
from pcmwav.wav import HEADER_SIZE, build_header, write_header


@click.command("format")
@click.option("-j", "--json", "json_", is_flag=True, help="Output structured JSON.")
@format_options
def format_cmd(json_: bool, fmt: PcmFormat) -> None:
    """Show the effective recording format (defaults + config + options)."""
    if json_:
        payload = fmt.to_dict()
        payload.update(frame_size=fmt.frame_size, byte_rate=fmt.byte_rate)
        click.echo(json.dumps(payload))
        return

    click.echo(describe_format(fmt))
    click.echo(f"frame size: {fmt.frame_size} bytes")
    click.echo(f"byte rate: {fmt.byte_rate} bytes/s")


@click.command("duration")
@click.argument("data_length", type=click.IntRange(min=0))
@format_options
def duration(data_length: int, fmt: PcmFormat) -> None:
    """Print whole seconds of audio in DATA_LENGTH bytes of PCM."""
    try:
        click.echo(duration_seconds(fmt, data_length))
    except PcmWavError as e:
        raise click.ClickException(str(e)) from e


@click.command("header")
@click.argument("data_length", type=click.IntRange(min=0))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the raw 44-byte header to this file instead of printing hex.",
)
@format_options
def header(data_length: int, output: Optional[Path], fmt: PcmFormat) -> None:
    """Emit the WAV header for DATA_LENGTH bytes of PCM.

    \b
    Examples:
      pcmwav header 88200
      pcmwav header 88200 -o header.bin
      pcmwav header 88200 --rate 48000 --channels 2
    """
    try:
        header_bytes = build_header(data_length, fmt)
    except PcmWavError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(header_bytes.hex())
        return

    try:
        with open(output, "wb") as fh:
            write_header(fh, data_length, fmt)
    except OSError as e:
        raise click.ClickException(f"Could not write {output}: {e}") from e
    click.echo(f"Wrote {HEADER_SIZE}-byte header to: {output}", err=True)
