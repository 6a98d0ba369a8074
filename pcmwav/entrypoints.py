"""Console-script entrypoints that wrap the main Click CLI."""

from __future__ import annotations

import sys
from typing import Optional


def wrap_main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the `pcmwav-wrap` console script."""
    from pcmwav.cli import main as cli_main

    args = list(sys.argv[1:] if argv is None else argv)
    cli_main.main(args=["wrap", *args], prog_name="pcmwav-wrap")
