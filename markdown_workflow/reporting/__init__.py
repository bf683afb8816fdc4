"""
Reporting Layer - Human-Readable Workflow Reports

Renders step listings and validation summaries from Jinja2 templates.
"""

from markdown_workflow.domain.models import Workflow
from markdown_workflow.reporting.loader import render
from markdown_workflow.reporting.templates import Template


def render_listing(workflow: Workflow, source: str) -> str:
    return render(Template.STEP_LISTING, workflow=workflow, source=source)


def render_validation(workflow: Workflow, source: str) -> str:
    return render(
        Template.VALIDATION_SUMMARY,
        workflow=workflow,
        source=source,
        command_count=sum(1 for step in workflow.steps if step.command is not None),
        prompt_count=sum(len(step.prompts) for step in workflow.steps),
    )


__all__ = [
    "Template",
    "render",
    "render_listing",
    "render_validation",
]
