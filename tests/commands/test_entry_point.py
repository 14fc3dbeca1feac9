"""Tests for the console-script entry point."""

import importlib

import pytest

import cursor_setup


def test_console_script_runs_the_cli_group(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.argv", ["cursor-setup-ubuntu", "--help"])

    with pytest.raises(SystemExit) as exc_info:
        cursor_setup.main()

    assert exc_info.value.code == 0
    assert "install-file" in capsys.readouterr().out


def test_entry_point_is_defined_once() -> None:
    assert not hasattr(importlib.import_module("cursor_setup.cli.cli"), "main")
