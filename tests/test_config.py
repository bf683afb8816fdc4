"""Tests for config.py."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from markdown_workflow.config import Settings


@pytest.fixture(autouse=True)
def isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("DEFAULT_MODE", "MAX_ITERATION_MULTIPLIER", "SHELL", "OUTPUT_DISCIPLINE", "LOG_LEVEL"):
        monkeypatch.delenv(f"WORKFLOW_{name}", raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.DEFAULT_MODE == "enforcement"
        assert settings.MAX_ITERATION_MULTIPLIER == 10
        assert settings.SHELL == "sh"
        assert settings.OUTPUT_DISCIPLINE == "capture"
        assert settings.LOG_LEVEL == "WARNING"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKFLOW_DEFAULT_MODE", "guided")
        monkeypatch.setenv("WORKFLOW_MAX_ITERATION_MULTIPLIER", "3")
        monkeypatch.setenv("WORKFLOW_SHELL", "bash")
        settings = Settings()
        assert settings.DEFAULT_MODE == "guided"
        assert settings.MAX_ITERATION_MULTIPLIER == 3
        assert settings.SHELL == "bash"

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("WORKFLOW_OUTPUT_DISCIPLINE=inherit\n", encoding="utf-8")
        assert Settings().OUTPUT_DISCIPLINE == "inherit"

    def test_unknown_mode_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKFLOW_DEFAULT_MODE", "freestyle")
        with pytest.raises(ValidationError):
            Settings()

    def test_multiplier_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKFLOW_MAX_ITERATION_MULTIPLIER", "0")
        with pytest.raises(ValidationError):
            Settings()
