"""
State Layer - Runtime Data Models

This module defines the runtime state the engine keeps while walking a
workflow: the cursor into the step list, the iteration counter that bounds
jump cycles, and the audit trail of visited steps. The Workflow itself is
never mutated; everything that changes during a run lives here.
"""

from typing import List

from pydantic import BaseModel, Field


class RunState(BaseModel):
    """
    The mutable state of a single run, owned exclusively by the engine.
    """
    step_count: int
    max_iterations: int
    cursor: int = 0
    iterations: int = 0
    visited: List[int] = Field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.cursor >= self.step_count

    @property
    def limit_exceeded(self) -> bool:
        return self.iterations > self.max_iterations
