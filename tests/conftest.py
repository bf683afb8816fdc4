"""Shared test fixtures."""
from __future__ import annotations

import io
import re
from collections.abc import Callable, Iterable
from typing import Any

import pytest
from rich.console import Console

from markdown_workflow.domain.models import Command
from markdown_workflow.execution.engine import WorkflowEngine
from markdown_workflow.execution.executor import CommandExecutor
from markdown_workflow.execution.interaction import InputProvider
from markdown_workflow.schemas.results import CommandOutput

_EXIT = re.compile(r"^exit\s+(\d+)$")


class ScriptedExecutor(CommandExecutor):
    """Records commands instead of running them.

    ``exit N`` commands report exit code N; anything else succeeds unless
    an explicit outcome is registered for it.
    """

    def __init__(self, outcomes: dict[str, CommandOutput] | None = None) -> None:
        self.outcomes = outcomes or {}
        self.calls: list[str] = []

    def execute(self, command: Command) -> CommandOutput:
        self.calls.append(command.code)
        if command.code in self.outcomes:
            return self.outcomes[command.code]
        match = _EXIT.match(command.code)
        exit_code = int(match.group(1)) if match else 0
        return CommandOutput(exit_code=exit_code, success=exit_code == 0)


class FailingExecutor(CommandExecutor):
    def execute(self, command: Command) -> CommandOutput:
        raise FileNotFoundError("sh: not found")


class ScriptedInput(InputProvider):
    """Answers prompts from a fixed list and records what was asked."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self.answers = list(answers)
        self.asked: list[str] = []

    def ask(self, prompt: str) -> str:
        self.asked.append(prompt)
        if not self.answers:
            raise EOFError()
        return self.answers.pop(0)


def make_console() -> Console:
    return Console(file=io.StringIO(), soft_wrap=True, width=120)


def console_text(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def executor() -> ScriptedExecutor:
    return ScriptedExecutor()


@pytest.fixture
def answers() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture
def console() -> Console:
    return make_console()


@pytest.fixture
def error_console() -> Console:
    return make_console()


@pytest.fixture
def make_engine(
    executor: ScriptedExecutor,
    answers: ScriptedInput,
    console: Console,
    error_console: Console,
) -> Callable[..., WorkflowEngine]:
    def factory(**overrides: Any) -> WorkflowEngine:
        kwargs: dict[str, Any] = {
            "executor": executor,
            "input_provider": answers,
            "console": console,
            "error_console": error_console,
        }
        kwargs.update(overrides)
        return WorkflowEngine(**kwargs)

    return factory
