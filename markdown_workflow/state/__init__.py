"""
State Layer - Runtime Data Models

Defines the runtime state that tracks the engine's progress through a
workflow: cursor, iteration counter and visited steps.
"""

from markdown_workflow.state.models import RunState

__all__ = [
    "RunState",
]
