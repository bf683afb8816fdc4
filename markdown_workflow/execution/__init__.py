"""
Execution Layer - Workflow Orchestration and Step Execution

Defines the WorkflowEngine (deterministic state machine), the
ExecutionMode policy, and the collaborators that run commands and
collect operator answers.
"""

from markdown_workflow.execution.engine import WorkflowEngine
from markdown_workflow.execution.executor import (
    CommandExecutor,
    DryRunExecutor,
    OutputDiscipline,
    ShellCommandExecutor,
)
from markdown_workflow.execution.interaction import (
    AutoConfirmInput,
    ConsoleInput,
    InputProvider,
    is_affirmative,
)
from markdown_workflow.execution.mode import ExecutionMode


__all__ = [
    "AutoConfirmInput",
    "CommandExecutor",
    "ConsoleInput",
    "DryRunExecutor",
    "ExecutionMode",
    "InputProvider",
    "OutputDiscipline",
    "ShellCommandExecutor",
    "WorkflowEngine",
    "is_affirmative",
]
