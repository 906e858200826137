"""Command-line parsing for run.py."""

from __future__ import annotations

import pytest

import run
from chipette.video import DEFAULT_PALETTE, MONOCHROME


def test_defaults(tmp_path) -> None:
    args = run.build_arg_parser().parse_args([str(tmp_path / "game.ch8")])

    assert args.scale == 12
    assert args.rate == 600
    assert not args.debug
    assert not args.monochrome
    assert args.seed is None


def test_missing_rom_exits_with_error(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(tmp_path / "missing.ch8")])

    assert excinfo.value.code == 2
    assert "ROM file not found" in capsys.readouterr().err


@pytest.mark.parametrize("flag", ["--scale", "--rate"])
def test_non_positive_values_rejected(tmp_path, flag) -> None:
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x12\x00")

    with pytest.raises(SystemExit):
        run.main([str(rom), flag, "0"])


def test_main_builds_config_and_reports_failure(tmp_path, monkeypatch, capsys) -> None:
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x12\x00")
    captured = {}

    class FailingApp:
        def __init__(self, config) -> None:
            captured["config"] = config

        def run(self) -> None:
            raise RuntimeError("Machine fault: boom")

    monkeypatch.setattr(run, "Chip8App", FailingApp)

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(rom), "--monochrome", "--seed", "7", "--debug"])

    assert excinfo.value.code == 1
    assert "Machine fault: boom" in capsys.readouterr().err
    config = captured["config"]
    assert config.palette == MONOCHROME
    assert config.rng_seed == 7
    assert config.debug


def test_main_returns_zero_on_clean_exit(tmp_path, monkeypatch) -> None:
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x12\x00")

    class QuietApp:
        def __init__(self, config) -> None:
            assert config.palette == DEFAULT_PALETTE

        def run(self) -> None:
            return None

    monkeypatch.setattr(run, "Chip8App", QuietApp)

    assert run.main([str(rom)]) == 0
