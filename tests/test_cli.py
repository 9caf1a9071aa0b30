"""Tests for the shared CLI helpers in recordgen.cli."""

import json
from pathlib import Path

import pytest
import typer

from recordgen.cli import error_exit, get_config, json_print, rel_display_path, report_error
from recordgen.errors import UnknownOptionError

# ---------------------------------------------------------------------------
# error_exit()
# ---------------------------------------------------------------------------


class TestErrorExit:
    def test_plain_stderr_and_exit(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            error_exit("something broke")
        assert exc_info.value.exit_code == 1
        captured = capsys.readouterr()
        assert "something broke" in captured.err
        assert captured.out == ""

    def test_custom_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            error_exit("fatal", code=2)
        assert exc_info.value.exit_code == 2

    def test_json_mode_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit):
            error_exit("bad input", json_mode=True)
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"error": "bad input"}
        assert captured.err == ""


class TestJsonPrint:
    def test_dict_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        json_print({"status": "ok", "count": 42})
        assert json.loads(capsys.readouterr().out) == {"status": "ok", "count": 42}

    def test_pretty_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
        json_print({"a": 1})
        assert capsys.readouterr().out == '{\n  "a": 1\n}\n'


class TestReportError:
    def test_located_message(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        report_error(tmp_path / "models.pyrec", UnknownOptionError("colour", 4))
        captured = capsys.readouterr()
        assert captured.err.strip() == "models.pyrec:4: error: Unknown option: colour"
        assert captured.out == ""


class TestGetConfig:
    def test_falls_back_to_defaults(self, tmp_path: Path) -> None:
        cfg = get_config(tmp_path)
        assert cfg.from_file is False
        assert cfg.source_dirs == [tmp_path]

    def test_reads_file(self, tmp_path: Path) -> None:
        (tmp_path / "recordgen.toml").write_text('[generate]\ndecorator = "model"\n')
        cfg = get_config(tmp_path)
        assert cfg.from_file is True
        assert cfg.decorator == "model"

    def test_invalid_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "recordgen.toml").write_text("[generate]\nbogus = 1\n")
        with pytest.raises(ValueError):
            get_config(tmp_path)


class TestRelDisplayPath:
    def test_relative(self, tmp_path: Path) -> None:
        assert rel_display_path(tmp_path / "a" / "m.pyrec", tmp_path) == str(Path("a") / "m.pyrec")

    def test_outside_base(self, tmp_path: Path) -> None:
        other = Path("/elsewhere/m.pyrec")
        assert rel_display_path(other, tmp_path) == str(other)


class TestErrorExitMarkup:
    def test_brackets_printed_literally(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(typer.Exit):
            error_exit("[generate] header must be a bool")
        assert "[generate] header must be a bool" in capsys.readouterr().err
