"""
Executor - Command Execution Layer

This module defines the CommandExecutor contract and its implementations.
The engine hands over one Command at a time and blocks until it finishes;
executors never decide what happens next, they only report the outcome.

An executor uses a single output discipline for its whole lifetime:
CAPTURE returns stdout/stderr as text so the engine can honor 'quiet',
INHERIT wires the child to the terminal so interactive programs work.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from enum import Enum

from ..domain.models import Command
from ..schemas.results import CommandOutput

logger = logging.getLogger(__name__)


class OutputDiscipline(str, Enum):
    CAPTURE = "capture"
    INHERIT = "inherit"


class CommandExecutor(ABC):
    """
    Defines how the engine runs a step's command.
    """

    # Executors that only pretend to run commands set this so the engine
    # can label its output accordingly.
    simulated = False

    @abstractmethod
    def execute(self, command: Command) -> CommandOutput:
        """
        Runs the command to completion and reports its outcome.
        Raises OSError if the command could not be started at all.
        """
        pass


class ShellCommandExecutor(CommandExecutor):
    """
    Runs commands through '<shell> -c <code>'.
    """

    def __init__(self, shell: str = "sh", discipline: OutputDiscipline = OutputDiscipline.CAPTURE):
        self.shell = shell
        self.discipline = OutputDiscipline(discipline)

    def execute(self, command: Command) -> CommandOutput:
        logger.debug(f"Running '{command.code}' with {self.shell} ({self.discipline.value})")

        if self.discipline == OutputDiscipline.INHERIT:
            completed = subprocess.run([self.shell, "-c", command.code], check=False)
            return CommandOutput(
                exit_code=completed.returncode,
                success=completed.returncode == 0,
            )

        completed = subprocess.run(
            [self.shell, "-c", command.code],
            check=False,
            capture_output=True,
            text=True,
        )
        return CommandOutput(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
            success=completed.returncode == 0,
        )


class DryRunExecutor(CommandExecutor):
    """
    Never spawns anything: every command is assumed to succeed with exit 0.
    """

    simulated = True

    def execute(self, command: Command) -> CommandOutput:
        logger.debug(f"Dry run: skipping '{command.code}'")
        return CommandOutput(exit_code=0, success=True)
