"""
Markdown Workflow

Executable runbooks written in markdown: numbered steps that run shell
commands, ask the operator yes/no questions, and branch on command
success, with enforced discipline (no silent skipping, bounded loops).
"""

from markdown_workflow.domain import (
    Action,
    Command,
    Conditions,
    Continue,
    Goto,
    Prompt,
    Step,
    StepNumber,
    Stop,
    ValidationWarning,
    WarningKind,
    Workflow,
)
from markdown_workflow.state import RunState
from markdown_workflow.schemas.results import (
    CommandOutput,
    ExecutionResult,
    ResultStatus,
    Stopped,
    Success,
    UserCancelled,
)
from markdown_workflow.parsing import parse_workflow
from markdown_workflow.execution import ExecutionMode, WorkflowEngine

__all__ = [
    # Domain Layer
    "Action",
    "Command",
    "Conditions",
    "Continue",
    "Goto",
    "Prompt",
    "Step",
    "StepNumber",
    "Stop",
    "ValidationWarning",
    "WarningKind",
    "Workflow",
    # State Layer
    "RunState",
    # Schemas
    "CommandOutput",
    "ExecutionResult",
    "ResultStatus",
    "Stopped",
    "Success",
    "UserCancelled",
    # Parsing Layer
    "parse_workflow",
    # Execution Layer
    "ExecutionMode",
    "WorkflowEngine",
]
