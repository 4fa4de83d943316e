"""
Tests for the llmsindex CLI.

Covers:
- Bare invocation (generates in the current directory)
- generate (--root, --repository, --dry-run, config errors, filesystem errors)
- validate-config
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from llmsindex import __version__
from llmsindex.cli import EXIT_CONFIG_ERROR, EXIT_FAILED, main
from llmsindex.indexer import generator


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
    monkeypatch.delenv("LLMSINDEX_LOG_LEVEL", raising=False)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    for rel in ("prompts/README.md", "prompts/review.md", "index.md"):
        target = tmp_path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f"# {rel}\n", encoding="utf-8")
    return tmp_path


class TestGenerate:
    def test_bare_invocation_uses_cwd(self, runner: CliRunner, repo: Path, monkeypatch):
        monkeypatch.chdir(repo)
        result = runner.invoke(main, [])
        assert result.exit_code == 0, result.output
        assert "Updated llms.txt and llms-full.txt" in result.output
        assert (repo / "llms.txt").exists()
        assert (repo / "llms-full.txt").exists()

    def test_root_option(self, runner: CliRunner, repo: Path):
        result = runner.invoke(main, ["generate", "--root", str(repo), "--quiet"])
        assert result.exit_code == 0, result.output
        full = (repo / "llms-full.txt").read_text(encoding="utf-8")
        assert "- [prompts/review.md](prompts/review.md)" in full
        assert "## Root\n- [index.md](index.md)" in full

    def test_github_repository_env(self, runner: CliRunner, repo: Path, monkeypatch):
        monkeypatch.setenv("GITHUB_REPOSITORY", "acme/widgets")
        result = runner.invoke(main, ["generate", "--root", str(repo), "--quiet"])
        assert result.exit_code == 0, result.output
        short = (repo / "llms.txt").read_text(encoding="utf-8")
        assert "MCP SSE URL: https://gitmcp.io/acme/widgets\n" in short

    def test_repository_option(self, runner: CliRunner, repo: Path):
        result = runner.invoke(
            main, ["generate", "--root", str(repo), "--repository", "cli/repo", "--quiet"]
        )
        assert result.exit_code == 0, result.output
        full = (repo / "llms-full.txt").read_text(encoding="utf-8")
        assert "- MCP SSE URL: https://gitmcp.io/cli/repo\n" in full

    def test_dry_run(self, runner: CliRunner, repo: Path):
        result = runner.invoke(main, ["generate", "--root", str(repo), "--dry-run", "--quiet"])
        assert result.exit_code == 0, result.output
        assert "Dry run: llms.txt" in result.output
        assert "Dry run: llms-full.txt" in result.output
        assert not (repo / "llms.txt").exists()

    def test_missing_config_file(self, runner: CliRunner, repo: Path):
        result = runner.invoke(
            main, ["generate", "--root", str(repo), "-c", str(repo / "missing.yaml")]
        )
        assert result.exit_code == EXIT_CONFIG_ERROR

    def test_invalid_config_file(self, runner: CliRunner, repo: Path):
        config = repo / "bad.yaml"
        config.write_text("index:\n  unknown: 1\n", encoding="utf-8")
        result = runner.invoke(main, ["generate", "--root", str(repo), "-c", str(config)])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert not (repo / "llms.txt").exists()

    def test_filesystem_error(self, runner: CliRunner, repo: Path, monkeypatch):
        def boom(*args, **kwargs):
            raise PermissionError(13, "Permission denied", str(repo / "prompts"))

        monkeypatch.setattr(generator, "generate_full_index", boom)
        result = runner.invoke(main, ["generate", "--root", str(repo), "--quiet"])
        assert result.exit_code == EXIT_FAILED
        assert "Permission denied" in result.output
        # Short index was already written
        assert (repo / "llms.txt").exists()
        assert not (repo / "llms-full.txt").exists()

    def test_log_file(self, runner: CliRunner, repo: Path):
        log_file = repo / "logs" / "run.jsonl"
        result = runner.invoke(
            main, ["generate", "--root", str(repo), "--log-file", str(log_file), "--quiet"]
        )
        assert result.exit_code == 0, result.output
        assert "indexer.write" in log_file.read_text(encoding="utf-8")

    def test_version(self, runner: CliRunner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestValidateConfig:
    def test_valid(self, runner: CliRunner, tmp_path: Path):
        config = tmp_path / "llmsindex.yaml"
        config.write_text(
            "project:\n  name: Handbook\nindex:\n  top_sections: [docs]\n",
            encoding="utf-8",
        )
        result = runner.invoke(main, ["validate-config", "-c", str(config)])
        assert result.exit_code == 0, result.output
        assert "Valid configuration" in result.output
        assert "Project: Handbook" in result.output
        assert "Top sections: docs" in result.output

    def test_invalid(self, runner: CliRunner, tmp_path: Path):
        config = tmp_path / "bad.yaml"
        config.write_text("output:\n  short_file: [1, 2]\n", encoding="utf-8")
        result = runner.invoke(main, ["validate-config", "-c", str(config)])
        assert result.exit_code == EXIT_CONFIG_ERROR
