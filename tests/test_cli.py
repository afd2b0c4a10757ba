"""Tests for the command-line interface.

WHY: The CLI is what pipelines call. Exit codes and the force flag
decide whether a CI job passes and whether old output is wiped.

HOW: main() is called with an explicit argv. Input comes from a file
via --input or from a monkeypatched stdin with a bytes buffer.

RULES:
- Failures are asserted through SystemExit codes and stderr text
"""

import io
import logging
import sys

import pytest

from schelm.cli import build_parser, main
from schelm.config import MAX_RECORD_SIZE


def _stdin(monkeypatch, data: bytes) -> None:
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


class TestParser:
    """build_parser defaults and validation."""

    def test_defaults(self):
        args = build_parser().parse_args(["out"])
        assert args.output_dir == "out"
        assert args.force is False
        assert args.input == "-"
        assert args.max_record_size == MAX_RECORD_SIZE

    def test_force_flag(self):
        assert build_parser().parse_args(["-f", "out"]).force is True

    def test_missing_output_dir(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_empty_output_dir(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([""])
        assert exc_info.value.code == 2

    def test_rejects_non_positive_record_size(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--max-record-size", "0", "out"])

    def test_log_level_is_case_insensitive(self):
        assert build_parser().parse_args(["--log-level", "debug", "out"]).log_level == "DEBUG"


class TestMain:
    """main() end to end."""

    def test_reads_stdin(self, tmp_path, monkeypatch, sample_stream, read_tree):
        _stdin(monkeypatch, sample_stream)
        out = tmp_path / "out"
        main([str(out)])
        assert read_tree(out) == {"a.yaml": "foo: 1\n", "b/c.yaml": "bar: 2\n"}

    def test_reads_input_file(self, tmp_path, sample_stream, read_tree):
        src = tmp_path / "rendered.yaml"
        src.write_bytes(sample_stream)
        out = tmp_path / "out"
        main(["--input", str(src), str(out)])
        assert read_tree(out) == {"a.yaml": "foo: 1\n", "b/c.yaml": "bar: 2\n"}

    def test_existing_output_without_force(self, tmp_path, monkeypatch, sample_stream, capsys):
        _stdin(monkeypatch, sample_stream)
        out = tmp_path / "out"
        out.mkdir()
        with pytest.raises(SystemExit) as exc_info:
            main([str(out)])
        assert exc_info.value.code == 1
        assert "already exists" in capsys.readouterr().err

    def test_force_replaces_output(self, tmp_path, monkeypatch, sample_stream, read_tree):
        _stdin(monkeypatch, sample_stream)
        out = tmp_path / "out"
        out.mkdir()
        (out / "stale.yaml").write_text("old", encoding="utf-8")
        main(["-f", str(out)])
        assert read_tree(out) == {"a.yaml": "foo: 1\n", "b/c.yaml": "bar: 2\n"}

    def test_empty_input_succeeds(self, tmp_path, monkeypatch, read_tree):
        _stdin(monkeypatch, b"")
        out = tmp_path / "out"
        main([str(out)])
        assert out.is_dir()
        assert read_tree(out) == {}

    def test_oversized_record_exits_1(self, tmp_path, monkeypatch, capsys):
        _stdin(monkeypatch, b"---\n# Source: big.yaml\n" + b"x" * 500)
        with pytest.raises(SystemExit) as exc_info:
            main(["--max-record-size", "100", str(tmp_path / "out")])
        assert exc_info.value.code == 1
        assert "maximum record size" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--input", str(tmp_path / "nope.yaml"), str(tmp_path / "out")])
        assert exc_info.value.code == 1
        assert "cannot open input" in capsys.readouterr().err

    def test_missing_input_keeps_existing_output(self, tmp_path, capsys):
        out = tmp_path / "out"
        out.mkdir()
        (out / "keep.yaml").write_text("previous run", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["-f", "--input", str(tmp_path / "typo.yaml"), str(out)])
        assert exc_info.value.code == 1
        assert "cannot open input" in capsys.readouterr().err
        assert (out / "keep.yaml").read_text(encoding="utf-8") == "previous run"

    def test_completion_is_logged(self, tmp_path, monkeypatch, sample_stream, caplog):
        _stdin(monkeypatch, sample_stream)
        with caplog.at_level(logging.INFO, logger="schelm.cli"):
            main([str(tmp_path / "out")])
        assert "Processing complete. 2 spec(s) written" in caplog.text
