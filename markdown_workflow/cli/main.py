"""Command-line entry point: run, list or validate a markdown workflow.

Exit codes:
    0  workflow completed (or --list / --validate succeeded)
    1  workflow stopped, or the file could not be read or parsed
    2  operator answered no to a prompt
    3  the document contains no steps
    4  runtime execution error (iteration limit, executor failure)
"""

import logging
import sys
from typing import Optional

import click

from ..config import settings
from ..domain.models import Workflow
from ..exceptions import EmptyWorkflowError, ExecutionError, ParseError, WorkflowNotFoundError
from ..execution.executor import OutputDiscipline
from ..execution.mode import ExecutionMode
from ..schemas.results import Stopped, UserCancelled
from ..services.runner import ExitCode
from .dependencies import get_console, get_error_console, get_workflow_service


@click.command("workflow")
@click.argument("workflow_file", type=click.Path(dir_okay=False))
@click.option(
    "--guided/--enforcement",
    default=None,
    help="Guided mode honors CONTINUE/GOTO conditions; enforcement (default) only honors STOP.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Simulate: skip commands (assume success) and auto-confirm prompts.",
)
@click.option(
    "--list", "list_only",
    is_flag=True,
    help="Print the steps without executing anything.",
)
@click.option(
    "--validate", "validate_only",
    is_flag=True,
    help="Parse and validate the workflow, then exit.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Show how each step's outcome and action were decided.",
)
@click.option(
    "--inherit-output/--capture-output",
    default=None,
    help="Let commands use the terminal directly (interactive tools) or capture their output (default).",
)
@click.pass_context
def main(
    ctx: click.Context,
    workflow_file: str,
    guided: Optional[bool],
    dry_run: bool,
    list_only: bool,
    validate_only: bool,
    debug: bool,
    inherit_output: Optional[bool],
) -> None:
    """Execute the markdown workflow in WORKFLOW_FILE."""
    _configure_logging(debug)
    console = get_console()
    error_console = get_error_console()

    mode = ExecutionMode.from_flag(guided) if guided is not None else ExecutionMode(settings.DEFAULT_MODE)
    if inherit_output is None:
        discipline = OutputDiscipline(settings.OUTPUT_DISCIPLINE)
    else:
        discipline = OutputDiscipline.INHERIT if inherit_output else OutputDiscipline.CAPTURE

    service = get_workflow_service(discipline)

    # 1. Parse (nothing executes unless this succeeds)
    try:
        workflow = service.load(workflow_file)
    except EmptyWorkflowError as e:
        error_console.print(f"Error: {e}", markup=False, style="red")
        ctx.exit(ExitCode.EMPTY_WORKFLOW)
    except (ParseError, WorkflowNotFoundError) as e:
        error_console.print(f"Error: {e}", markup=False, style="red")
        ctx.exit(ExitCode.INVALID_WORKFLOW)

    _print_warnings(workflow)

    # 2. Non-executing modes
    if validate_only:
        console.out(service.validation_report(workflow, workflow_file), end="", highlight=False)
        ctx.exit(ExitCode.SUCCESS)

    if list_only:
        console.out(service.step_listing(workflow, workflow_file), end="", highlight=False)
        ctx.exit(ExitCode.SUCCESS)

    # 3. Run
    suffix = " (dry run)" if dry_run else ""
    console.print(f"→ Workflow: {workflow_file}", markup=False)
    console.print(f"→ Mode: {mode.value}{suffix}", markup=False)
    console.print(f"→ Steps: {len(workflow)}", markup=False)

    try:
        result = service.run_workflow(workflow, mode=mode, dry_run=dry_run, debug=debug)
    except ExecutionError as e:
        error_console.print(f"\n→ Workflow execution error: {e}", markup=False, style="red")
        ctx.exit(ExitCode.EXECUTION_ERROR)

    if isinstance(result, Stopped):
        message = f"\n→ Workflow stopped: {result.message}" if result.message else "\n→ Workflow stopped"
        console.print(message, markup=False)
    elif isinstance(result, UserCancelled):
        console.print("\n→ Workflow cancelled by user", markup=False)

    ctx.exit(service.exit_code_for(result))


def _print_warnings(workflow: Workflow):
    error_console = get_error_console()
    for warning in workflow.warnings:
        error_console.print(f"⚠ Warning: {warning.message}", markup=False, style="yellow")


def _configure_logging(debug: bool):
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
