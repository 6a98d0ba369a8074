"""`pcmwav config …` commands."""

from __future__ import annotations

import click

from pcmwav.commands._options import describe_format, resolve_format
from pcmwav.config import (
    KNOWN_VARS,
    PcmWavConfigError,
    env_file_path,
    env_file_permissions_ok,
    read_env_file,
    upsert_env_var,
    validate_setting,
)


_ALIASES = {
    "sample-rate": "PCMWAV_SAMPLE_RATE",
    "rate": "PCMWAV_SAMPLE_RATE",
    "bits": "PCMWAV_BITS_PER_SAMPLE",
    "bits-per-sample": "PCMWAV_BITS_PER_SAMPLE",
    "channels": "PCMWAV_CHANNELS",
    "signed": "PCMWAV_SIGNED",
    "big-endian": "PCMWAV_BIG_ENDIAN",
    "log-level": "PCMWAV_LOG_LEVEL",
}


@click.group(name="config")
def config_group() -> None:
    """Manage pcmwav configuration."""


@config_group.command("show")
def config_show() -> None:
    """Show the env file and the format it resolves to."""
    env_path = env_file_path()
    click.echo(f"env file: {env_path}")
    click.echo(f"env file exists: {env_path.exists()}")
    if env_file_permissions_ok(env_path) is False:
        click.echo(f"Warning: expected permissions 0600 on: {env_path}", err=True)

    stored = read_env_file(env_path)
    for name in KNOWN_VARS:
        if name in stored:
            click.echo(f"{name}={stored[name]}")

    click.echo(f"effective format: {describe_format(resolve_format())}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store KEY=VALUE in the pcmwav env file.

    KEY is a variable name (PCMWAV_SAMPLE_RATE) or an alias (sample-rate,
    bits, channels, signed, big-endian, log-level).
    """
    name = _ALIASES.get(key.strip().lower(), key.strip().upper())
    try:
        normalized = validate_setting(name, value)
    except PcmWavConfigError as e:
        raise click.ClickException(str(e)) from e

    env_path = upsert_env_var(name, normalized)
    click.echo(f"Wrote {name}={normalized} to: {env_path}")
