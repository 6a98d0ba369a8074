"""Configuration and environment loading for the pcmwav CLI.

The library functions in `pcmwav.format` and `pcmwav.wav` never read the
environment. Only the CLI resolves a preferred format from:
  1) the process environment,
  2) ~/.config/pcmwav/pcmwav.env,
  3) a local `.env`,
  4) the canonical defaults.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import replace
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, find_dotenv, load_dotenv

from pcmwav.errors import InvalidFormatError
from pcmwav.format import PcmFormat, default_format


APP_NAME = "pcmwav"

SAMPLE_RATE_VAR = "PCMWAV_SAMPLE_RATE"
BITS_PER_SAMPLE_VAR = "PCMWAV_BITS_PER_SAMPLE"
CHANNELS_VAR = "PCMWAV_CHANNELS"
SIGNED_VAR = "PCMWAV_SIGNED"
BIG_ENDIAN_VAR = "PCMWAV_BIG_ENDIAN"
LOG_LEVEL_VAR = "PCMWAV_LOG_LEVEL"

KNOWN_VARS = (
    SAMPLE_RATE_VAR,
    BITS_PER_SAMPLE_VAR,
    CHANNELS_VAR,
    SIGNED_VAR,
    BIG_ENDIAN_VAR,
    LOG_LEVEL_VAR,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_ENV_LOADED = False


class PcmWavConfigError(RuntimeError):
    pass


def config_home() -> Path:
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home)
    return Path.home() / ".config"


def config_dir(*, create: bool = False) -> Path:
    path = config_home() / APP_NAME
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def env_file_path() -> Path:
    return config_dir() / f"{APP_NAME}.env"


def load_environment(*, load_cwd_dotenv: bool = True) -> None:
    """Load pcmwav configuration into environment variables (once per process).

    Existing process env always wins over either file.
    """
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True

    env_path = env_file_path()
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)

    if load_cwd_dotenv:
        local_env = find_dotenv(usecwd=True)
        if local_env:
            load_dotenv(dotenv_path=local_env, override=False)


def _env_value(name: str) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise PcmWavConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise PcmWavConfigError(f"{name} must be positive, got {value}")
    return value


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise PcmWavConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


_INT_VARS = (SAMPLE_RATE_VAR, BITS_PER_SAMPLE_VAR, CHANNELS_VAR)
_BOOL_VARS = (SIGNED_VAR, BIG_ENDIAN_VAR)


def validate_setting(name: str, value: str) -> str:
    """Check a value before it is stored; returns it normalized."""
    if name not in KNOWN_VARS:
        raise PcmWavConfigError(
            f"Unknown setting {name!r}; expected one of: {', '.join(KNOWN_VARS)}"
        )
    if name in _INT_VARS:
        return str(_parse_positive_int(name, value))
    if name in _BOOL_VARS:
        return "true" if _parse_bool(name, value) else "false"
    return _normalize_log_level(name, value)


def _normalize_log_level(name: str, raw: str) -> str:
    normalized = raw.strip().upper()
    if normalized.isdigit() or isinstance(logging.getLevelName(normalized), int):
        return normalized
    raise PcmWavConfigError(
        f"{name} must be a logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) "
        f"or a number, got {raw!r}"
    )


def _env_positive_int(name: str) -> Optional[int]:
    raw = _env_value(name)
    if raw is None:
        return None
    return _parse_positive_int(name, raw)


def _env_bool(name: str) -> Optional[bool]:
    raw = _env_value(name)
    if raw is None:
        return None
    return _parse_bool(name, raw)


def get_preferred_format(*, load_env: bool = True, **explicit: object) -> PcmFormat:
    """Return the default format with configured and explicit overrides applied.

    Fields passed in `explicit` (None means "not given") win over the env, and
    their env vars are not parsed at all, so a bad stored value can always be
    overridden from the command line.
    """
    if load_env:
        load_environment()

    overrides = {key: value for key, value in explicit.items() if value is not None}
    configured: dict[str, object] = {}
    for field, name in (
        ("sample_rate_hz", SAMPLE_RATE_VAR),
        ("bits_per_sample", BITS_PER_SAMPLE_VAR),
        ("channel_count", CHANNELS_VAR),
    ):
        if field in overrides:
            continue
        value = _env_positive_int(name)
        if value is not None:
            configured[field] = value
    for field, name in (("signed", SIGNED_VAR), ("big_endian", BIG_ENDIAN_VAR)):
        if field in overrides:
            continue
        flag = _env_bool(name)
        if flag is not None:
            configured[field] = flag

    try:
        base = replace(default_format(), **configured)
    except InvalidFormatError as e:
        raise PcmWavConfigError(f"Configured format is invalid: {e}") from e
    return replace(base, **overrides)


def get_log_level(*, load_env: bool = True) -> Optional[str]:
    if load_env:
        load_environment()
    return _env_value(LOG_LEVEL_VAR)


def read_env_file(path: Optional[Path] = None) -> dict[str, str]:
    """Return the key/value pairs stored in the env file (no interpolation)."""
    env_path = env_file_path() if path is None else Path(path)
    if not env_path.exists():
        return {}
    values = dotenv_values(env_path, interpolate=False)
    return {key: (value or "") for key, value in values.items() if key}


def _atomic_write(path: Path, content: str) -> None:
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    os.replace(tmp_path, path)


def upsert_env_var(
    name: str,
    value: str,
    *,
    path: Optional[Path] = None,
    file_mode: int = 0o600,
) -> Path:
    """Set or update a variable in the env file; returns the file path."""
    if "\n" in value or "\r" in value:
        raise ValueError("invalid value: must be single-line")

    env_path = env_file_path() if path is None else Path(path)
    env_path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    if env_path.exists():
        lines = env_path.read_text(encoding="utf-8").splitlines(True)

    def _is_target_line(raw_line: str) -> bool:
        stripped = raw_line.lstrip()
        if not stripped or stripped.startswith("#"):
            return False
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].lstrip()
        key, _sep, _rest = stripped.partition("=")
        return key.strip() == name

    rendered = f"{name}={value}\n"
    found = False
    new_lines: list[str] = []
    for line in lines:
        if _is_target_line(line):
            new_lines.append(rendered)
            found = True
        else:
            new_lines.append(line)

    if not found:
        if new_lines and not new_lines[-1].endswith("\n"):
            new_lines[-1] += "\n"
        new_lines.append(rendered)

    _atomic_write(env_path, "".join(new_lines))
    os.chmod(env_path, file_mode)

    # Keep the running process in step; an explicit process env still wins.
    os.environ.setdefault(name, value)
    return env_path


def env_file_permissions_ok(path: Optional[Path] = None) -> Optional[bool]:
    env_path = env_file_path() if path is None else Path(path)
    try:
        st = env_path.stat()
    except FileNotFoundError:
        return None
    return stat.S_IMODE(st.st_mode) == 0o600
