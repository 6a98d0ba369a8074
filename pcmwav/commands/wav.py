"""Commands that read or write whole WAV files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from pcmwav.commands._options import describe_format, format_options
from pcmwav.errors import PcmWavError
from pcmwav.format import PcmFormat, duration_seconds
from pcmwav.tone import tone_pcm
from pcmwav.wav import HEADER_SIZE, parse_header, save_wav


logger = logging.getLogger(__name__)


def _save(out_wav: Path, pcm: bytes, fmt: PcmFormat) -> None:
    try:
        save_wav(out_wav, pcm, fmt)
    except PcmWavError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Could not write {out_wav}: {e}") from e
    click.echo(
        f"Wrote {out_wav} ({HEADER_SIZE + len(pcm)} bytes, "
        f"{duration_seconds(fmt, len(pcm))}s of {describe_format(fmt)})"
    )


@click.command("wrap")
@click.argument(
    "raw_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.argument("out_wav", type=click.Path(dir_okay=False, writable=True, path_type=Path))
@format_options
def wrap(raw_file: Path, out_wav: Path, fmt: PcmFormat) -> None:
    """Wrap headerless PCM from RAW_FILE into the WAV file OUT_WAV.

    The raw data must already be encoded in the chosen format.
    """
    pcm = raw_file.read_bytes()
    logger.debug("Read %s bytes of raw PCM from %s", len(pcm), raw_file)
    _save(out_wav, pcm, fmt)


@click.command("inspect")
@click.argument(
    "wav_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option("-j", "--json", "json_", is_flag=True, help="Output structured JSON.")
def inspect(wav_file: Path, json_: bool) -> None:
    """Decode and print the header of WAV_FILE."""
    with open(wav_file, "rb") as fh:
        head = fh.read(HEADER_SIZE)
    try:
        header = parse_header(head)
    except PcmWavError as e:
        raise click.ClickException(f"{wav_file}: {e}") from e

    payload_size = wav_file.stat().st_size - HEADER_SIZE
    if json_:
        out = header.to_dict()
        out["payload_bytes_on_disk"] = payload_size
        click.echo(json.dumps(out))
    else:
        click.echo(f"format: {describe_format(header.fmt)}")
        click.echo(f"data length: {header.data_length} bytes")
        click.echo(f"RIFF size: {header.riff_size} bytes")
        click.echo(f"duration: {header.duration_seconds}s")

    if payload_size < header.data_length:
        click.echo(
            f"Warning: header declares {header.data_length} data bytes but only "
            f"{payload_size} follow it",
            err=True,
        )


@click.command("tone")
@click.argument("out_wav", type=click.Path(dir_okay=False, writable=True, path_type=Path))
@click.option("--seconds", default=1.0, type=click.FloatRange(min=0.0), show_default=True)
@click.option("--frequency", default=440.0, type=click.FloatRange(min=0.0, min_open=True), show_default=True)
@click.option("--amplitude", default=0.9, type=click.FloatRange(0.0, 1.0), show_default=True)
@format_options
def tone(out_wav: Path, seconds: float, frequency: float, amplitude: float, fmt: PcmFormat) -> None:
    """Write a sine test tone to OUT_WAV."""
    try:
        pcm = tone_pcm(seconds, frequency, fmt, amplitude=amplitude)
    except PcmWavError as e:
        raise click.ClickException(str(e)) from e
    _save(out_wav, pcm, fmt)
