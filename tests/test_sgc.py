"""
Tests for the sgc command-line tool.

Runs the click command in-process with CliRunner against small source
files written to a temporary directory.
"""

import json

import pytest
from click.testing import CliRunner

from stategen.cli.errors import ExitCode
from stategen.cli.sgc import main


CLEAN_SOURCE = '*Idle ( "idle" )\nIdle { go = Busy; }\nBusy { done = Idle; }\n'
BROKEN_SOURCE = "A{ B = C; B = D; }\nE"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def clean_file(tmp_path):
    path = tmp_path / "machine.sg"
    path.write_text(CLEAN_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def broken_file(tmp_path):
    path = tmp_path / "broken.sg"
    path.write_text(BROKEN_SOURCE, encoding="utf-8")
    return path


class TestSgcBasics:

    def test_clean_file(self, runner, clean_file):
        result = runner.invoke(main, [str(clean_file)])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert f"Parsed 2 objects, 1 values from {clean_file}" in result.output

    def test_diagnostics_reported(self, runner, broken_file):
        result = runner.invoke(main, [str(broken_file)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"{broken_file}:001:011 -->\tDuplicate transition: 'B => D" in result.output
        assert f"{broken_file}:002:001 -->\tUnclosed object: 'E'" in result.output
        assert "2 errors" in result.output

    def test_single_error_summary(self, runner, tmp_path):
        path = tmp_path / "one.sg"
        path.write_text("A ( ) $", encoding="utf-8")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "1 error" in result.output
        assert "Unknown token: '$'" in result.output

    def test_ignore_lex_errors(self, runner, tmp_path):
        path = tmp_path / "lex.sg"
        path.write_text("A ( ) $", encoding="utf-8")
        result = runner.invoke(main, ["--ignore-lex-errors", str(path)])
        assert result.exit_code == ExitCode.SUCCESS, result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "nope.sg")])
        assert result.exit_code == 2

    def test_undecodable_input(self, runner, tmp_path):
        path = tmp_path / "bad.sg"
        path.write_bytes(b"A ( \xff\xfe )")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Error:" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestSgcOutput:

    def test_json(self, runner, clean_file):
        result = runner.invoke(main, ["--json", str(clean_file)])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        data = json.loads(result.output)
        assert [o["id"] for o in data["objects"]] == ["Idle", "Busy"]
        assert data["objects"][0]["kind"] == ["ENTRY_POINT"]
        assert data["values"][0]["text"] == "idle"

    def test_output_file(self, runner, clean_file, tmp_path):
        out = tmp_path / "table.json"
        result = runner.invoke(main, [str(clean_file), "-o", str(out)])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert f"Wrote symbol table to {out}" in result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["errors"] == []
        assert data["objects"][1]["transitions"][0]["target"] == "Idle"

    def test_output_file_written_despite_errors(self, runner, broken_file, tmp_path):
        out = tmp_path / "table.json"
        result = runner.invoke(main, [str(broken_file), "-o", str(out)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        data = json.loads(out.read_text(encoding="utf-8"))
        assert [e["kind"] for e in data["errors"]] == [
            "DuplicateTransitionError",
            "UnclosedError",
        ]

    def test_tokens(self, runner, tmp_path):
        path = tmp_path / "t.sg"
        path.write_text('A ( "x" )', encoding="utf-8")
        result = runner.invoke(main, ["--tokens", str(path)])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert f"{path}:001:001 -->\tID['A']" in result.output
        assert f"{path}:001:005 -->\tLITT['x']" in result.output
        assert f"{path}:001:009 -->\t )" in result.output

    def test_verbose(self, runner, clean_file):
        result = runner.invoke(main, ["-v", str(clean_file)])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert f"Processing {clean_file}..." in result.stderr
        assert "Scanned: 19 tokens" in result.stderr
        assert "Processing" not in result.stdout

    def test_json_stays_parseable_when_verbose(self, runner, clean_file):
        result = runner.invoke(main, ["--json", "-v", str(clean_file)])
        assert result.exit_code == ExitCode.SUCCESS, result.output
        data = json.loads(result.stdout)
        assert [o["id"] for o in data["objects"]] == ["Idle", "Busy"]
        assert "Scanned: 19 tokens" in result.stderr
