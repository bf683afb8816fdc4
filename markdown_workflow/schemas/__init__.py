"""
Schemas - Outcome Models

Defines Pydantic models for command outcomes and workflow run results.
"""

from markdown_workflow.schemas.results import (
    CommandOutput,
    ExecutionResult,
    ResultStatus,
    Stopped,
    Success,
    UserCancelled,
)

__all__ = [
    "CommandOutput",
    "ExecutionResult",
    "ResultStatus",
    "Stopped",
    "Success",
    "UserCancelled",
]
