"""Command-line interface for pcmwav."""

from __future__ import annotations

import logging

import click

from pcmwav.commands import register
from pcmwav.logging_utils import configure_logging


logger = logging.getLogger(__name__)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr.")
def main(debug: bool) -> None:
    """pcmwav - PCM format and WAV header tool."""
    level = configure_logging(debug=debug)
    logger.debug("Logging configured at level %s", logging.getLevelName(level))


register(main)


if __name__ == "__main__":
    main()
