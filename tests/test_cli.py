"""Tests for the click entry point."""
from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from markdown_workflow.cli.main import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def write(tmp_path: Path):
    def _write(text: str, name: str = "workflow.md") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


PASSING = "## 1. Greet\n\n```bash\necho hello from the shell\n```\n"
FAILING = "## 1. Break\n\n```bash\nexit 1\n```\n\nFAIL: STOP Fix the build\n"
PROMPTING = "## 1. Confirm\n\n**Prompt:** Ready to ship?\n"


class TestRun:
    def test_success(self, runner: CliRunner, write) -> None:
        path = write(PASSING)
        result = runner.invoke(main, [path])

        assert result.exit_code == 0
        assert f"→ Workflow: {path}" in result.output
        assert "→ Mode: enforcement" in result.output
        assert "→ Steps: 1" in result.output
        assert "hello from the shell" in result.output
        assert "→ Workflow completed successfully" in result.output

    def test_stopped(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, [write(FAILING)])
        assert result.exit_code == 1
        assert "→ Workflow stopped: Fix the build" in result.output

    def test_prompt_declined(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, [write(PROMPTING)], input="n\n")
        assert result.exit_code == 2
        assert "→ Prompt: Ready to ship? [y/N]:" in result.output
        assert "→ Workflow cancelled by user" in result.output

    def test_prompt_confirmed(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, [write(PROMPTING)], input="yes\n")
        assert result.exit_code == 0

    def test_guided_mode(self, runner: CliRunner, write) -> None:
        path = write(
            "## 1. Check\n\n```bash\nexit 1\n```\n\nFAIL: GOTO 3\n\n"
            "## 2. Skipped\n\n```bash\nexit 1\n```\n\n"
            "## 3. Recover\n\n```bash\necho recovered\n```\n"
        )
        assert runner.invoke(main, [path]).exit_code == 1

        result = runner.invoke(main, ["--guided", path])
        assert result.exit_code == 0
        assert "→ Mode: guided" in result.output
        assert "→ Action: GOTO 3" in result.output
        assert "Step 2/3" not in result.output

    def test_dry_run(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, ["--dry-run", write(FAILING + "\n" + PROMPTING.replace("1.", "2."))])
        assert result.exit_code == 0
        assert "→ Mode: enforcement (dry run)" in result.output
        assert "→ Would execute: exit 1" in result.output
        assert "y (auto-confirmed)" in result.output

    def test_iteration_limit_exits_4(self, runner: CliRunner, write) -> None:
        path = write("## 1. Spin\n\n```bash\ntrue\n```\n\nPASS: GOTO 1\n")
        result = runner.invoke(main, ["--guided", "--dry-run", path])
        assert result.exit_code == 4
        assert "→ Workflow execution error: Exceeded maximum iterations" in result.output

    def test_debug(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, ["--debug", write(FAILING)])
        assert "→ [DEBUG] Result: Fail (exit 1)" in result.output
        assert "→ [DEBUG] Action: STOP Fix the build" in result.output


class TestNonExecutingModes:
    def test_validate(self, runner: CliRunner, write) -> None:
        path = write(FAILING)
        result = runner.invoke(main, ["--validate", path])
        assert result.exit_code == 0
        assert f"✓ Workflow is valid: {path}" in result.output
        assert "Commands: 1" in result.output
        assert "→ Executing" not in result.output

    def test_list(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, ["--list", write(FAILING)])
        assert result.exit_code == 0
        assert "Step 1: Break" in result.output
        assert "  FAIL: STOP Fix the build" in result.output
        assert "→ Executing" not in result.output

    def test_warnings_printed(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, ["--validate", write("## 1. Placeholder\n")])
        assert result.exit_code == 0
        assert "⚠ Warning: Step 1 has no command and no prompts" in result.output


class TestErrors:
    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(main, [str(tmp_path / "missing.md")])
        assert result.exit_code == 1
        assert "Error: Workflow file" in result.output
        assert "not found" in result.output

    def test_parse_error(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, [write("## 1. One\n\n## 3. Three\n")])
        assert result.exit_code == 1
        assert "Error: Step numbers must be sequential. Expected Step 2, found Step 3" in result.output

    def test_parse_error_runs_nothing(self, runner: CliRunner, write, tmp_path: Path) -> None:
        marker = tmp_path / "ran"
        path = write(f"## 1. Touch\n\n```bash\ntouch {marker}\n```\n\n## 2. Bad\n\nPASS: GOTO 9\n")
        result = runner.invoke(main, [path])
        assert result.exit_code == 1
        assert not marker.exists()

    def test_empty_workflow(self, runner: CliRunner, write) -> None:
        result = runner.invoke(main, [write("# Just a title\n")])
        assert result.exit_code == 3
        assert "No steps found" in result.output

    def test_usage_error(self, runner: CliRunner) -> None:
        assert runner.invoke(main, []).exit_code == 2
