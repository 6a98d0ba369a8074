"""Logging configuration helpers for pcmwav."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from pcmwav.config import get_log_level


_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s[%(process)d]: %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _parse_log_level(level: Optional[str], *, default: int) -> int:
    if not level:
        return default
    normalized = str(level).strip().upper()
    if normalized.isdigit():
        return int(normalized)
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed
    return default


def configure_logging(*, debug: bool = False, default_level: int = logging.WARNING) -> int:
    """Configure process-wide logging and return the level in effect.

    Precedence:
      1) `--debug` enables DEBUG.
      2) `PCMWAV_LOG_LEVEL` (env or env file) overrides the default.
      3) `default_level` otherwise.
    """
    if debug:
        level = logging.DEBUG
    else:
        level = _parse_log_level(get_log_level(), default=default_level)

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        for handler in root.handlers:
            handler.setLevel(level)
        return level

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT))
    root.addHandler(handler)
    return level
