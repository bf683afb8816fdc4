"""
Parsing Layer - Markdown to Workflow

Turns a markdown runbook into a validated, immutable Workflow.
"""

from markdown_workflow.parsing.parser import parse_workflow, validate_steps
from markdown_workflow.parsing.syntax import parse_action, parse_conditional, parse_step_heading

__all__ = [
    "parse_action",
    "parse_conditional",
    "parse_step_heading",
    "parse_workflow",
    "validate_steps",
]
