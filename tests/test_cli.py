"""Tests for the command-line interface.

WHY: The CLI owns the selection surface: strategy options must become
pipeline stages in the order they were typed, durations must parse to
milliseconds, and bad options or bad input must fail with exit code 1
before anything is written.

HOW: build_parser() for argument handling, main() with explicit argv,
tmp_path files, monkeypatched stdin, and capsys for stdout/stderr. Pipe
and logging setup run the module in a child interpreter.
"""

import argparse
import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from transcript_reducer.cli import build_parser, main, parse_duration

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _module_command(*args):
    return [sys.executable, "-m", "transcript_reducer"] + list(args)


def _clean_env():
    return {k: v for k, v in os.environ.items() if not k.startswith("TRANSCRIPT_REDUCER_")}


class TestParseDuration:

    @pytest.mark.parametrize("value,expected", [
        ("500ms", 500),
        ("2s", 2000),
        ("0ms", 0),
        ("1500ms", 1500),
    ])
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value,message", [
        ("ms", "no digits"),
        ("500", "no unit"),
        ("5m", "invalid duration unit"),
        ("1.5s", "invalid duration unit"),
    ])
    def test_invalid(self, value, message):
        with pytest.raises(argparse.ArgumentTypeError, match=message):
            parse_duration(value)


class TestStrategyOrdering:

    def _strategies(self, *argv):
        return build_parser().parse_args(["transform", "in.csv"] + list(argv)).strategies

    def test_none_selected(self):
        assert self._strategies() == []

    def test_command_line_order(self):
        assert self._strategies("-s", "-c", "2") == [("sentences", None), ("chunk-size", 2)]
        assert self._strategies("-c", "2", "-s") == [("chunk-size", 2), ("sentences", None)]

    def test_all_options(self):
        assert self._strategies(
            "--max-silence", "1s", "-g", "300ms", "-w", "5", "-l", "2s", "--sentences",
        ) == [
            ("max-silence", 1000),
            ("by-gap", 300),
            ("min-word-count", 5),
            ("lasting", 2000),
            ("sentences", None),
        ]

    def test_repeated_option(self):
        assert self._strategies("-c", "2", "-c", "3") == [("chunk-size", 2), ("chunk-size", 3)]

    def test_defaults(self):
        args = build_parser().parse_args(["transform", "-"])
        assert args.input == "-"
        assert args.output == "-"
        assert args.input_format == "csv-fix"
        assert args.format == "pretty"

    def test_bad_duration_is_usage_error(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["transform", "in.csv", "--lasting", "10"])
        assert exc.value.code == 2

    def test_subcommand_required(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args([])
        assert exc.value.code == 2


class TestMain:

    def test_sentences_to_json(self, tmp_path, sample_csv, capsys):
        source = tmp_path / "talk.csv"
        source.write_text(sample_csv, encoding="utf-8")

        main(["transform", str(source), "-s", "-f", "json"])

        data = json.loads(capsys.readouterr().out)
        assert data == [
            {"start": 0, "end": 2000, "text": " Hello world!"},
            {"start": 2500, "end": 5000, "text": " How are you?"},
            {"start": 6300, "end": 7500, "text": " I'm fine, thanks!"},
        ]

    def test_stacked_to_srt(self, tmp_path, sample_csv, capsys):
        source = tmp_path / "talk.csv"
        source.write_text(sample_csv, encoding="utf-8")

        main(["transform", str(source), "--sentences", "--chunk-size", "2", "-f", "srt"])

        assert capsys.readouterr().out == (
            "1\n00:00:00,000 --> 00:00:05,000\nHello world! How are you?\n\n"
            "2\n00:00:06,300 --> 00:00:07,500\nI'm fine, thanks!\n\n"
        )

    def test_default_pretty_from_stdin(self, monkeypatch, sample_csv, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(sample_csv))

        main(["transform", "-"])

        out = capsys.readouterr().out
        assert out.startswith("[00:00:00.000 --> 00:00:01.100] Hello\n\n")
        assert out.count("\n\n") == 8

    def test_json_input(self, monkeypatch, capsys):
        records = [
            {"start": 0, "end": 500, "text": " one"},
            {"start": 500, "end": 900, "text": " two"},
            {"start": 2000, "end": 2500, "text": " three"},
        ]
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(records)))

        main(["transform", "-", "-i", "json", "-f", "csv", "--by-gap", "1s"])

        assert capsys.readouterr().out == "start,end,text\n0,900, one two\n2000,2500, three\n"

    def test_output_file(self, tmp_path, sample_csv, capsys):
        source = tmp_path / "talk.csv"
        source.write_text(sample_csv, encoding="utf-8")
        target = tmp_path / "talk.srt"

        main(["transform", str(source), "-s", "-f", "srt", "-o", str(target)])

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Wrote 3 event(s)" in captured.err
        assert target.read_text(encoding="utf-8").startswith("1\n00:00:00,000 --> 00:00:02,000\n")

    def test_zero_threshold_rejected(self, tmp_path, sample_csv, capsys):
        source = tmp_path / "talk.csv"
        source.write_text(sample_csv, encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            main(["transform", str(source), "-c", "0"])

        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "must be positive" in captured.err

    def test_malformed_record_aborts(self, tmp_path, capsys):
        source = tmp_path / "bad.csv"
        source.write_text('start,end,text\n0,100," a"\n500,200," b"\n', encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            main(["transform", str(source), "-f", "csv"])

        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Record 2" in captured.err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["transform", str(tmp_path / "nope.csv")])

        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_unreadable_input_path(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["transform", str(tmp_path)])

        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Could not read input" in captured.err

    def test_empty_input_gives_empty_output(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("start,end,text\n"))

        main(["transform", "-", "-s", "-f", "srt"])

        assert capsys.readouterr().out == ""

    def test_bad_configured_default_format(self, monkeypatch, sample_csv, capsys):
        # argparse does not check defaults against choices
        monkeypatch.setattr("transcript_reducer.cli.DEFAULT_OUTPUT_FORMAT", "docx")
        monkeypatch.setattr("sys.stdin", io.StringIO(sample_csv))

        with pytest.raises(SystemExit) as exc:
            main(["transform", "-"])

        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Unknown output format 'docx'" in captured.err


class TestProcess:
    """Behaviour that only shows in a separate interpreter (stdout pipe, logging setup)."""

    def test_closed_stdout_pipe_exits_cleanly(self, tmp_path):
        source = tmp_path / "long.csv"
        rows = ["start,end,text"]
        rows.extend('{},{}," word{}"'.format(i * 10, i * 10 + 5, i) for i in range(200_000))
        source.write_text("\n".join(rows) + "\n", encoding="utf-8")

        proc = subprocess.Popen(
            _module_command("transform", str(source)),
            cwd=str(PROJECT_ROOT),
            env=_clean_env(),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        assert proc.stdout.read(10)
        proc.stdout.close()
        err = proc.stderr.read()
        proc.stderr.close()

        assert proc.wait(timeout=60) == 0
        assert err == b""

    def test_verbose_logs_stages(self, sample_csv):
        result = subprocess.run(
            _module_command("transform", "-", "-v"),
            cwd=str(PROJECT_ROOT),
            env=_clean_env(),
            input=sample_csv,
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert result.returncode == 0
        assert "Stage word-join reduced 13 events to 8" in result.stderr
        assert result.stdout.startswith("[00:00:00.000 --> 00:00:01.100] Hello\n\n")

    def test_quiet_by_default(self, sample_csv):
        result = subprocess.run(
            _module_command("transform", "-", "-s"),
            cwd=str(PROJECT_ROOT),
            env=_clean_env(),
            input=sample_csv,
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert result.returncode == 0
        assert result.stderr == ""
