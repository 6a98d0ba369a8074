from __future__ import annotations

from pathlib import Path

import pytest

import pcmwav.config as config


@pytest.fixture()
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate $HOME + XDG dirs so tests never touch real user files."""
    home = tmp_path / "home"
    home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

    # setenv first so teardown removes anything load_dotenv adds later.
    for name in config.KNOWN_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    # Never pick up a developer's env file or a stray `.env` in the cwd.
    monkeypatch.setattr(config, "_ENV_LOADED", True)
    monkeypatch.chdir(tmp_path)
    return home
