"""
Repositories - Workflow Sources

Load markdown workflow documents and hand back parsed Workflows.
"""

from markdown_workflow.repositories.workflow import (
    FileWorkflowRepository,
    InMemoryWorkflowRepository,
    WorkflowRepository,
)

__all__ = [
    "FileWorkflowRepository",
    "InMemoryWorkflowRepository",
    "WorkflowRepository",
]
