from __future__ import annotations

import json
import wave
from pathlib import Path

import pytest
from click.testing import CliRunner

from pcmwav.cli import main
from pcmwav.wav import build_header, read_wav
from pcmwav.format import default_format


def _invoke(*args: str):
    return CliRunner().invoke(main, list(args))


def test_format_shows_defaults(isolated_home: Path) -> None:
    result = _invoke("format")
    assert result.exit_code == 0, result.output
    assert "44100 Hz, 16-bit signed little-endian, mono" in result.output
    assert "byte rate: 88200 bytes/s" in result.output


def test_format_json_applies_env_then_options(isolated_home: Path, monkeypatch) -> None:
    monkeypatch.setenv("PCMWAV_CHANNELS", "2")
    result = _invoke("format", "--json", "--rate", "48000", "--bits", "8", "--sample-type", "unsigned")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["sample_rate_hz"] == 48000
    assert payload["bits_per_sample"] == 8
    assert payload["channel_count"] == 2
    assert payload["signed"] is False
    assert payload["frame_size"] == 2


def test_format_reports_bad_config(isolated_home: Path, monkeypatch) -> None:
    monkeypatch.setenv("PCMWAV_CHANNELS", "zero")
    result = _invoke("format")
    assert result.exit_code == 1
    assert "PCMWAV_CHANNELS" in result.output


@pytest.mark.parametrize("length,expected", [("88200", "1"), ("176400", "2"), ("8820", "0")])
def test_duration(isolated_home: Path, length: str, expected: str) -> None:
    result = _invoke("duration", length)
    assert result.exit_code == 0, result.output
    assert result.output.strip() == expected


def test_duration_rejects_negative_length(isolated_home: Path) -> None:
    result = _invoke("duration", "--", "-1")
    assert result.exit_code == 2


def test_duration_rejects_zero_channels(isolated_home: Path) -> None:
    result = _invoke("duration", "100", "--channels", "0")
    assert result.exit_code == 1
    assert "channel_count" in result.output


def test_header_prints_hex(isolated_home: Path) -> None:
    result = _invoke("header", "88200")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == build_header(88200, default_format()).hex()


def test_header_writes_file(isolated_home: Path, tmp_path: Path) -> None:
    out = tmp_path / "header.bin"
    result = _invoke("header", "10", "-o", str(out), "--channels", "2")
    assert result.exit_code == 0, result.output
    data = out.read_bytes()
    assert len(data) == 44
    assert data[:4] == b"RIFF"


def test_header_reports_overflow(isolated_home: Path) -> None:
    result = _invoke("header", str(2**32))
    assert result.exit_code == 1
    assert "does not fit" in result.output


def test_wrap_produces_playable_wav(isolated_home: Path, tmp_path: Path) -> None:
    raw = tmp_path / "take.raw"
    raw.write_bytes(b"\x00\x01" * 16000)
    out = tmp_path / "take.wav"

    result = _invoke("wrap", str(raw), str(out), "--rate", "16000")
    assert result.exit_code == 0, result.output
    assert "1s of 16000 Hz" in result.output

    with wave.open(str(out), "rb") as wf:
        assert wf.getframerate() == 16000
        assert wf.getnchannels() == 1
        assert wf.getnframes() == 16000


def test_wrap_rejects_partial_frames(isolated_home: Path, tmp_path: Path) -> None:
    raw = tmp_path / "odd.raw"
    raw.write_bytes(b"\x00" * 3)
    result = _invoke("wrap", str(raw), str(tmp_path / "odd.wav"))
    assert result.exit_code == 1
    assert "whole number" in result.output
    assert not (tmp_path / "odd.wav").exists()


def test_inspect_text_and_json(isolated_home: Path, tmp_path: Path) -> None:
    path = tmp_path / "a.wav"
    path.write_bytes(build_header(88200, default_format()) + b"\x00" * 88200)

    result = _invoke("inspect", str(path))
    assert result.exit_code == 0, result.output
    assert "data length: 88200 bytes" in result.output
    assert "duration: 1s" in result.output

    result = _invoke("inspect", "--json", str(path))
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["data_length"] == 88200
    assert payload["payload_bytes_on_disk"] == 88200
    assert payload["block_align"] == 2


def test_inspect_warns_on_truncated_file(isolated_home: Path, tmp_path: Path) -> None:
    path = tmp_path / "short.wav"
    path.write_bytes(build_header(1000, default_format()) + b"\x00" * 10)
    result = _invoke("inspect", str(path))
    assert result.exit_code == 0
    assert "only 10 follow it" in result.output


def test_inspect_rejects_non_wav(isolated_home: Path, tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello world " * 10)
    result = _invoke("inspect", str(path))
    assert result.exit_code == 1
    assert "not a RIFF/WAVE container" in result.output


def test_tone_writes_requested_length(isolated_home: Path, tmp_path: Path) -> None:
    out = tmp_path / "tone.wav"
    result = _invoke(
        "tone", str(out), "--seconds", "0.5", "--frequency", "1000", "--rate", "8000", "--channels", "2"
    )
    assert result.exit_code == 0, result.output

    header, pcm = read_wav(out)
    assert header.fmt.channel_count == 2
    assert len(pcm) == 4000 * 2 * 2


def test_config_set_and_show(isolated_home: Path) -> None:
    result = _invoke("config", "set", "sample-rate", " 48000 ")
    assert result.exit_code == 0, result.output

    env_path = isolated_home / ".config" / "pcmwav" / "pcmwav.env"
    assert "PCMWAV_SAMPLE_RATE=48000" in env_path.read_text(encoding="utf-8")

    result = _invoke("config", "show")
    assert result.exit_code == 0, result.output
    assert "PCMWAV_SAMPLE_RATE=48000" in result.output
    assert "env file exists: True" in result.output


def test_config_set_rejects_unknown_key(isolated_home: Path) -> None:
    result = _invoke("config", "set", "volume", "11")
    assert result.exit_code == 1
    assert "Unknown setting" in result.output


def test_config_set_rejects_bad_value(isolated_home: Path) -> None:
    result = _invoke("config", "set", "channels", "two")
    assert result.exit_code == 1
    assert "must be an integer" in result.output


def test_wrap_entrypoint_forwards_to_wrap(isolated_home: Path, tmp_path: Path) -> None:
    from pcmwav.entrypoints import wrap_main

    raw = tmp_path / "in.raw"
    raw.write_bytes(b"\x00\x00" * 44100)
    out = tmp_path / "out.wav"

    with pytest.raises(SystemExit) as exc:
        wrap_main([str(raw), str(out)])
    assert exc.value.code == 0
    assert read_wav(out)[0].duration_seconds == 1


def test_explicit_option_overrides_bad_stored_setting(isolated_home: Path, monkeypatch) -> None:
    monkeypatch.setenv("PCMWAV_BITS_PER_SAMPLE", "12")

    result = _invoke("duration", "88200", "--bits", "16")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "1"

    # Without the option the stored value is still reported.
    result = _invoke("duration", "88200")
    assert result.exit_code == 1
    assert "bits_per_sample must be a multiple of 8" in result.output


def test_config_set_rejects_unknown_log_level(isolated_home: Path) -> None:
    result = _invoke("config", "set", "log-level", "chatty")
    assert result.exit_code == 1
    assert "PCMWAV_LOG_LEVEL" in result.output
    assert not (isolated_home / ".config" / "pcmwav" / "pcmwav.env").exists()


def test_config_set_applies_to_same_process(isolated_home: Path) -> None:
    result = _invoke("config", "set", "channels", "2")
    assert result.exit_code == 0, result.output

    result = _invoke("format", "--json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["channel_count"] == 2
