"""Tests for presentation/cli.py."""

import logging
import os
import sys
from pathlib import Path

import pytest

from funcaudit.presentation.cli import EXIT_FATAL, EXIT_OK, build_parser, main
from tests.factories import write_files


class TestBuildParser:
    """Argument parsing."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])

        assert args.root == Path(".")
        assert args.exclude == []
        assert args.prefer_git is True
        assert args.inline_threshold == 5
        assert args.save is True
        assert args.verbose is False

    def test_all_options(self) -> None:
        args = build_parser().parse_args(
            ["src", "--exclude", "vendor", "--exclude", "coverage", "--no-git", "--inline-threshold", "2", "--no-save", "-v"]
        )

        assert args.root == Path("src")
        assert args.exclude == ["vendor", "coverage"]
        assert args.prefer_git is False
        assert args.inline_threshold == 2
        assert args.save is False
        assert args.verbose is True

    @pytest.mark.parametrize("value", ["-1", "many"])
    def test_bad_threshold(self, value: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--inline-threshold", value])
        assert exc_info.value.code == 2

    def test_bad_exclude(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--exclude", "a/b"])


class TestMain:
    """End-to-end CLI runs."""

    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_success_saves_report(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_files(tmp_path, {"a.js": "function a() {}\nfunction b() { a(); a(); }\n"})

        code = main([str(tmp_path), "--no-git"])

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "FUNCTION ANALYSIS REPORT" in out
        assert "Report saved to:" in out
        (report,) = tmp_path.glob("function-analysis-report-*.txt")
        assert "a (2 calls)" in report.read_text(encoding="utf-8")

    def test_no_save(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_files(tmp_path, {"a.js": "function a() {}\n"})

        assert main([str(tmp_path), "--no-git", "--no-save"]) == EXIT_OK
        assert "Report saved to:" not in capsys.readouterr().out
        assert list(tmp_path.glob("*.txt")) == []

    def test_missing_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([str(tmp_path / "missing")])

        assert code == EXIT_FATAL
        assert "does not exist." in capsys.readouterr().err

    def test_exclude_option(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_files(tmp_path, {"vendor/lib.js": "function vendored() {}\n", "app.js": "function app() {}\n"})

        main([str(tmp_path), "--no-git", "--no-save", "--exclude", "vendor"])

        out = capsys.readouterr().out
        assert "app" in out
        assert "vendored" not in out

    def test_parse_error_is_not_fatal(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_files(tmp_path, {"bad.js": "function (\n"})

        assert main([str(tmp_path), "--no-git", "--no-save"]) == EXIT_OK
        assert "bad.js" in capsys.readouterr().out

    @pytest.mark.skipif(sys.platform != "linux", reason="file system must accept arbitrary name bytes")
    def test_undecodable_file_name(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with open(os.path.join(os.fsencode(tmp_path), b"caf\xe9.js"), "wb") as fh:
            fh.write(b"function a() {}\n")

        assert main([str(tmp_path), "--no-git"]) == EXIT_OK
        assert "caf\\udce9.js" in capsys.readouterr().out
