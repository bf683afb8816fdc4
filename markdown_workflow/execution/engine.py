"""
Engine - Workflow Orchestration Layer

The WorkflowEngine is the deterministic state machine that walks a parsed
Workflow one step at a time. It delegates command execution to a
CommandExecutor and operator questions to an InputProvider, but owns all
sequencing and branching itself.
-----------------------------------------------

Each iteration of the run loop:
1. Bumps the iteration counter and fails fast past len(steps) * multiplier,
    which bounds GOTO cycles in every mode.
2. Runs the step's command (if any) and resolves an Action from the step's
    Conditions, filtered through the ExecutionMode. Actions the mode forbids
    fall back to the implicit default (pass -> CONTINUE, fail -> STOP).
3. Applies the Action: STOP ends the run, GOTO moves the cursor and restarts
    the loop, CONTINUE falls through to the step's prompts.
4. Asks the prompts in order. Any answer but yes cancels the run.
5. Advances the cursor. Walking off the end is Success.
"""

import logging
from typing import Optional

from rich.console import Console

from ..domain.models import DEFAULT_CONDITIONS, Action, Goto, Step, Stop, Workflow
from ..exceptions import ExecutionError, IterationLimitExceededError
from ..schemas.results import CommandOutput, ExecutionResult, Stopped, Success, UserCancelled
from ..state.models import RunState
from .executor import CommandExecutor
from .interaction import InputProvider, is_affirmative
from .mode import ExecutionMode

logger = logging.getLogger(__name__)

# A workflow with N steps may iterate at most N * MAX_ITERATION_MULTIPLIER
# times, which leaves room for retry loops while catching runaway cycles.
MAX_ITERATION_MULTIPLIER = 10

EVALUATION_CRITERIA = "exit code (0 = Pass, non-zero = Fail)"


class WorkflowEngine:
    def __init__(
        self,
        executor: CommandExecutor,
        input_provider: InputProvider,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        iteration_multiplier: int = MAX_ITERATION_MULTIPLIER,
        debug: bool = False,
    ):
        self.executor = executor
        self.input_provider = input_provider
        self.console = console or Console(soft_wrap=True)
        self.error_console = error_console or Console(stderr=True, soft_wrap=True)
        self.iteration_multiplier = iteration_multiplier
        self.debug = debug
        self.last_run: Optional[RunState] = None

    def run(self, workflow: Workflow, mode: ExecutionMode = ExecutionMode.ENFORCEMENT) -> ExecutionResult:
        """
        Executes the workflow to completion.

        Returns Success, Stopped or UserCancelled. Raises ExecutionError when
        the iteration limit is exceeded or a collaborator fails.
        """
        steps = workflow.steps
        state = RunState(
            step_count=len(steps),
            max_iterations=len(steps) * self.iteration_multiplier,
        )
        self.last_run = state
        logger.info(f"Starting workflow with {len(steps)} steps in {mode.value} mode")

        while not state.finished:
            state.iterations += 1
            step = steps[state.cursor]

            if state.limit_exceeded:
                raise IterationLimitExceededError(state.max_iterations, step.number, step.description)

            state.visited.append(int(step.number))
            self._say(f"\n→ Step {step.number}/{len(steps)}: {step.description}")

            # 1. Command & Branching
            if step.command is not None:
                output = self._execute_command(step)
                action = self._resolve_action(step, output, mode)

                if isinstance(action, Stop):
                    self._say(f"→ Action: {action}")
                    logger.info(f"Step {step.number} stopped the workflow")
                    return Stopped(message=action.message)

                if isinstance(action, Goto):
                    self._say(f"→ Action: {action}")
                    state.cursor = self._find_step_index(workflow, action, step)
                    continue

            # 2. Prompts
            for prompt in step.prompts:
                answer = self._ask(step, prompt.text)
                if not is_affirmative(answer):
                    self._say("→ User answered no")
                    logger.info(f"Prompt declined at Step {step.number}")
                    return UserCancelled()

            # 3. Advance
            state.cursor += 1

        self._say("\n→ Workflow completed successfully")
        return Success()

    # ==========================================================================
    # Logic & Control (Pure Domain)
    # ==========================================================================

    def _resolve_action(self, step: Step, output: CommandOutput, mode: ExecutionMode) -> Action:
        """
        Picks the step's action for this outcome, falling back to the implicit
        default when the step has no conditions or the mode forbids the action.
        """
        default = DEFAULT_CONDITIONS.select(output.success)
        action = step.effective_conditions.select(output.success)

        if action != default and not mode.permits(action):
            logger.debug(
                f"Step {step.number}: {action} not permitted in {mode.value} mode, "
                f"using implicit {default}"
            )
            action = default

        if self.debug:
            self._say(f"→ [DEBUG] Action: {action}")
        return action

    def _find_step_index(self, workflow: Workflow, action: Goto, step: Step) -> int:
        index = workflow.index_of(action.target)
        if index is None:
            available = [int(s.number) for s in workflow.steps]
            raise ExecutionError(
                f"Step {step.number}: GOTO target Step {action.target} does not exist. "
                f"Available steps: {available}",
                step_number=step.number,
                description=step.description,
            )
        return index

    # ==========================================================================
    # Collaborators
    # ==========================================================================

    def _execute_command(self, step: Step) -> CommandOutput:
        command = step.command
        verb = "Would execute" if self.executor.simulated else "Executing"
        self._say(f"→ {verb}: {command.code}")

        try:
            output = self.executor.execute(command)
        except OSError as e:
            raise ExecutionError(
                f"Step {step.number} ('{step.description}'): could not run command: {e}",
                step_number=step.number,
                description=step.description,
            ) from e

        # Stdout is hidden only for successful quiet commands; stderr always shows.
        if output.stdout and not (command.quiet and output.success):
            self.console.out(output.stdout, end="", highlight=False)
        if output.stderr:
            self.error_console.out(output.stderr, end="", highlight=False)

        if output.success:
            self._say(f"✓ Passed (exit {output.exit_code})")
        else:
            self._say(f"✗ Failed (exit {output.exit_code})")

        if self.debug:
            self._say(f"→ [DEBUG] Checking: {EVALUATION_CRITERIA}")
            result = "Pass" if output.success else "Fail"
            self._say(f"→ [DEBUG] Result: {result} (exit {output.exit_code})")

        return output

    def _ask(self, step: Step, text: str) -> str:
        try:
            return self.input_provider.ask(text)
        except (EOFError, OSError) as e:
            raise ExecutionError(
                f"Step {step.number} ('{step.description}'): could not read an answer: {str(e) or 'end of input'}",
                step_number=step.number,
                description=step.description,
            ) from e

    def _say(self, text: str):
        self.console.print(text, markup=False, highlight=False)
