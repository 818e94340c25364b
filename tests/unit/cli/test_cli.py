"""Tests for the chunkforge command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from chunkforge.cli.commands.benchmark import run_benchmark
from chunkforge.cli.commands.validate import find_issues
from chunkforge.cli.main import cli


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.txt"
    path.write_text("a" * 25, encoding="utf-8")
    return path


class TestSplitCommand:
    """chunkforge split"""

    def test_text_output(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(cli, ["split", str(sample_file), "-s", "character", "-m", "10", "-t", "character"])

        assert result.exit_code == 0, result.output
        assert "Chunk 1 (10 tokens)" in result.output
        assert "Chunk 3 (5 tokens)" in result.output

    def test_jsonl_output(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["split", str(sample_file), "-s", "character", "-m", "10", "-t", "character", "--format", "jsonl"],
        )

        assert result.exit_code == 0, result.output
        records = [json.loads(line) for line in result.output.strip().splitlines()]
        assert [record["token_count"] for record in records] == [10, 10, 5]
        assert records[0]["metadata"]["index"] == 0

    def test_directory_output(self, runner: CliRunner, sample_file: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "chunks"
        result = runner.invoke(
            cli,
            ["split", str(sample_file), "-s", "character", "-m", "10", "-t", "character", "--output", str(out_dir)],
        )

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out_dir.iterdir()) == ["chunk_0000.txt", "chunk_0001.txt", "chunk_0002.txt"]
        assert (out_dir / "chunk_0002.txt").read_text(encoding="utf-8") == "a" * 5

    def test_json_directory_output(self, runner: CliRunner, sample_file: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "chunks"
        result = runner.invoke(
            cli,
            [
                "split", str(sample_file), "-s", "character", "-m", "10", "-t", "character",
                "--output", str(out_dir), "--format", "json",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads((out_dir / "chunk_0000.json").read_text(encoding="utf-8"))
        assert data["text"] == "a" * 10

    def test_invalid_parameters_fail(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(
            cli, ["split", str(sample_file), "-s", "character", "-m", "10", "-o", "10", "-t", "character"]
        )

        assert result.exit_code == 1
        assert "ERROR: Failed to split file" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["split", str(tmp_path / "missing.txt")])
        assert result.exit_code != 0


def test_count_command(runner: CliRunner, sample_file: Path) -> None:
    result = runner.invoke(cli, ["count", str(sample_file), "-t", "character"])

    assert result.exit_code == 0, result.output
    assert "Token count: 25" in result.output
    assert "Character count: 25" in result.output
    assert "Tokenizer: character" in result.output


def test_count_unknown_tokenizer(runner: CliRunner, sample_file: Path) -> None:
    result = runner.invoke(cli, ["count", str(sample_file), "-t", "nope"])

    assert result.exit_code == 1
    assert "Unknown tokenizer: nope" in result.output


def test_version_command(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["version"])

    assert result.exit_code == 0
    assert result.output.startswith("chunkforge version ")


class TestBenchmark:
    """chunkforge benchmark"""

    def test_run_benchmark(self) -> None:
        results = run_benchmark("a" * 50, ("character", "recursive"), 10, "character")

        assert results["character"]["chunks"] == 5
        assert results["character"]["avg_tokens"] == 10.0
        assert results["recursive"]["chunks"] == 5

    def test_run_benchmark_reports_errors(self) -> None:
        """A strategy that cannot be configured is reported, not raised."""
        results = run_benchmark("a" * 50, ("adaptive",), 10, "character")
        assert "error" in results["adaptive"]

    def test_command(self, runner: CliRunner, sample_file: Path) -> None:
        result = runner.invoke(
            cli,
            ["benchmark", str(sample_file), "--strategies", "character", "--strategies", "semantic",
             "-m", "10", "-t", "character"],
        )

        assert result.exit_code == 0, result.output
        assert "RESULTS" in result.output
        assert "character:" in result.output
        assert "semantic:" in result.output
        assert "Chunks: 3" in result.output


class TestValidate:
    """chunkforge validate"""

    def _write(self, directory: Path, texts: list[str]) -> None:
        for i, text in enumerate(texts):
            (directory / f"chunk_{i:04d}.txt").write_text(text, encoding="utf-8")

    def test_valid_chunks(self, runner: CliRunner, tmp_path: Path) -> None:
        self._write(tmp_path, ["First sentence. Shared closing words.", "Shared closing words. Next part."])
        result = runner.invoke(cli, ["validate", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "All chunks validated successfully" in result.output

    def test_reports_issues(self, runner: CliRunner, tmp_path: Path) -> None:
        self._write(tmp_path, ["No overlap here and no period", "Something else entirely."])
        result = runner.invoke(cli, ["validate", str(tmp_path)])

        assert result.exit_code == 1
        assert "Found 2 issues:" in result.output
        assert "chunk_0000.txt: No overlap with next chunk" in result.output
        assert "chunk_0000.txt: May end mid-sentence" in result.output

    def test_checks_can_be_disabled(self, runner: CliRunner, tmp_path: Path) -> None:
        self._write(tmp_path, ["No overlap here", "Something else"])
        result = runner.invoke(cli, ["validate", str(tmp_path), "--no-check-overlap", "--no-check-quality"])

        assert result.exit_code == 0, result.output

    def test_empty_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["validate", str(tmp_path)])

        assert result.exit_code == 1
        assert "No chunk files found" in result.output

    def test_find_issues_flags_empty_chunk(self, tmp_path: Path) -> None:
        self._write(tmp_path, ["   "])
        issues = find_issues(sorted(tmp_path.glob("chunk_*.txt")), check_overlap=False, check_quality=False)
        assert issues == ["chunk_0000.txt: Empty chunk"]
