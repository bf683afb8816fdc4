"""
Service Layer - Application Orchestration

Loads, reports on and runs workflows on behalf of the CLI.
"""

from markdown_workflow.services.runner import ExitCode, WorkflowService

__all__ = [
    "ExitCode",
    "WorkflowService",
]
