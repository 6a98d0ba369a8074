"""Click commands for the pcmwav CLI."""

from __future__ import annotations

import click

from .config import config_group
from .format import duration, format_cmd, header
from .wav import inspect, tone, wrap


def register(main: click.Group) -> None:
    main.add_command(config_group)

    main.add_command(format_cmd)
    main.add_command(duration)
    main.add_command(header)

    main.add_command(wrap)
    main.add_command(inspect)
    main.add_command(tone)
