"""
Dependency Wiring (Composition Root).

This module acts as the central "container" for the CLI's services.
It is responsible for:
1. Instantiating the long-lived singletons (consoles, repository).
2. Wiring the per-run collaborators (executor, input provider) into a
   WorkflowEngine, real or dry-run.
3. Managing the lifecycle of the singletons using @lru_cache so they are
   created only once per process.

By consolidating construction logic here, the command module stays
focused on flags and exit codes, and tests can build their own engines
from the same pieces.
"""


from functools import lru_cache

from rich.console import Console

from ..config import settings
from ..execution.engine import WorkflowEngine
from ..execution.executor import CommandExecutor, DryRunExecutor, OutputDiscipline, ShellCommandExecutor
from ..execution.interaction import AutoConfirmInput, ConsoleInput, InputProvider
from ..repositories.workflow import FileWorkflowRepository, WorkflowRepository
from ..services.runner import EngineFactory, WorkflowService

# Primary output (Singleton)
@lru_cache()
def get_console() -> Console:
    return Console(soft_wrap=True, highlight=False)

# Diagnostics stay visible when stdout is redirected (Singleton)
@lru_cache()
def get_error_console() -> Console:
    return Console(stderr=True, soft_wrap=True, highlight=False)

# Workflow Repository (Singleton)
@lru_cache()
def get_workflow_repository() -> WorkflowRepository:
    return FileWorkflowRepository()

# Command Executor (per run)
def get_command_executor(dry_run: bool, discipline: OutputDiscipline) -> CommandExecutor:
    if dry_run:
        return DryRunExecutor()
    return ShellCommandExecutor(shell=settings.SHELL, discipline=discipline)

# Operator Input (per run)
def get_input_provider(dry_run: bool) -> InputProvider:
    if dry_run:
        return AutoConfirmInput(console=get_console())
    return ConsoleInput(console=get_console())

def get_engine_factory(discipline: OutputDiscipline) -> EngineFactory:
    def build_engine(dry_run: bool, debug: bool) -> WorkflowEngine:
        return WorkflowEngine(
            executor=get_command_executor(dry_run, discipline),
            input_provider=get_input_provider(dry_run),
            console=get_console(),
            error_console=get_error_console(),
            iteration_multiplier=settings.MAX_ITERATION_MULTIPLIER,
            debug=debug,
        )
    return build_engine

# The Workflow Service
def get_workflow_service(discipline: OutputDiscipline) -> WorkflowService:
    """
    Injects all necessary components into the WorkflowService.
    """
    return WorkflowService(
        repository=get_workflow_repository(),
        engine_factory=get_engine_factory(discipline),
    )
