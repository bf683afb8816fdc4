"""
Domain Layer - Static Data Models

Defines the core domain model representing the static structure of
a runbook: Workflows, Steps, Commands, Prompts and branching Actions.
"""

from markdown_workflow.domain.models import (
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

__all__ = [
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
]
