"""
Workflow Service - Application Orchestration Layer

This service is the entry point for every workflow operation the CLI
offers. It orchestrates the Data Layer (Repository), the Logic Layer
(Engine) and the reporting templates, and maps outcomes onto process
exit codes.
"""

import logging
from enum import IntEnum
from typing import Callable

from ..domain.models import Workflow
from ..execution.engine import WorkflowEngine
from ..execution.mode import ExecutionMode
from ..reporting import render_listing, render_validation
from ..repositories.workflow import WorkflowRepository
from ..schemas.results import ExecutionResult, ResultStatus

logger = logging.getLogger(__name__)

# Builds an engine for one run: (dry_run, debug) -> engine
EngineFactory = Callable[[bool, bool], WorkflowEngine]


class ExitCode(IntEnum):
    SUCCESS = 0
    STOPPED = 1
    USER_CANCELLED = 2
    EMPTY_WORKFLOW = 3
    EXECUTION_ERROR = 4
    # Invalid documents and unreadable files share the generic failure code
    INVALID_WORKFLOW = 1


_RESULT_EXIT_CODES = {
    ResultStatus.SUCCESS: ExitCode.SUCCESS,
    ResultStatus.STOPPED: ExitCode.STOPPED,
    ResultStatus.CANCELLED: ExitCode.USER_CANCELLED,
}


class WorkflowService:
    def __init__(self, repository: WorkflowRepository, engine_factory: EngineFactory):
        self.repository = repository
        self.engine_factory = engine_factory

    def load(self, source: str) -> Workflow:
        """Loads and parses a workflow (raises on any parse error)."""
        workflow = self.repository.get_workflow(source)
        logger.info(f"Loaded '{source}' ({len(workflow)} steps, {len(workflow.warnings)} warnings)")
        return workflow

    def validation_report(self, workflow: Workflow, source: str) -> str:
        return render_validation(workflow, source)

    def step_listing(self, workflow: Workflow, source: str) -> str:
        return render_listing(workflow, source)

    def run(
        self,
        source: str,
        mode: ExecutionMode = ExecutionMode.ENFORCEMENT,
        dry_run: bool = False,
        debug: bool = False,
    ) -> ExecutionResult:
        """
        The Core Loop:
        1. Load and validate the workflow (nothing runs if parsing fails)
        2. Build an engine (real or dry-run collaborators)
        3. Execute to a terminal result
        """
        workflow = self.load(source)
        return self.run_workflow(workflow, mode=mode, dry_run=dry_run, debug=debug)

    def run_workflow(
        self,
        workflow: Workflow,
        mode: ExecutionMode = ExecutionMode.ENFORCEMENT,
        dry_run: bool = False,
        debug: bool = False,
    ) -> ExecutionResult:
        engine = self.engine_factory(dry_run, debug)
        result = engine.run(workflow, mode)
        logger.info(f"Workflow finished with {result.status.value}")
        return result

    @staticmethod
    def exit_code_for(result: ExecutionResult) -> ExitCode:
        return _RESULT_EXIT_CODES[result.status]
