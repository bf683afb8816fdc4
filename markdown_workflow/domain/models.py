"""
Domain Layer - Static Data Models

This module defines the core domain model representing the static structure
of a runbook: Workflows, Steps, their Commands and Prompts, and the
pass/fail Conditions that drive branching. These dataclasses are derived
from source content (markdown documents) and are immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class StepNumber(int):
    """
    Positive step number. Identifies a step's position and jump targets.

    Zero and negative values are rejected at construction.
    """

    def __new__(cls, value):
        number = super().__new__(cls, value)
        if number <= 0:
            raise ValueError(f"Step numbers must be positive, got {value}")
        return number

    def __repr__(self) -> str:
        return f"StepNumber({int(self)})"

    # int.__str__ falls back to __repr__, so restore the plain digits
    def __str__(self) -> str:
        return int.__repr__(self)


@dataclass(frozen=True)
class Command:
    """
    A single shell command line attached to a step.

    Attributes:
        code: The command line handed to the shell.
        quiet: Suppress stdout display when the command succeeds.
            Stderr is never suppressed.
    """
    code: str
    quiet: bool = False


@dataclass(frozen=True)
class Prompt:
    """Yes/no question shown to the operator. Any answer but yes cancels the run."""
    text: str


@dataclass(frozen=True)
class Continue:
    """Advance to the next step."""

    def __str__(self) -> str:
        return "CONTINUE"


@dataclass(frozen=True)
class Stop:
    """Terminate the workflow, reporting the message if present."""
    message: Optional[str] = None

    def __str__(self) -> str:
        return f"STOP {self.message}" if self.message else "STOP"


@dataclass(frozen=True)
class Goto:
    """Jump to the step with the given number."""
    target: StepNumber

    def __post_init__(self):
        if not isinstance(self.target, StepNumber):
            object.__setattr__(self, "target", StepNumber(self.target))

    def __str__(self) -> str:
        return f"GOTO {int(self.target)}"


Action = Union[Continue, Stop, Goto]


@dataclass(frozen=True)
class Conditions:
    """
    The bound pair of actions attached to a step's command outcome.

    Both sides are always populated; a one-sided directive gets the
    implicit default for the other side.

    Attributes:
        on_pass: Applied when the command exits 0.
        on_fail: Applied when the command exits non-zero.
    """
    on_pass: Action = field(default_factory=Continue)
    on_fail: Action = field(default_factory=Stop)

    def select(self, success: bool) -> Action:
        return self.on_pass if success else self.on_fail

    def jump_targets(self) -> Tuple[StepNumber, ...]:
        return tuple(
            action.target
            for action in (self.on_pass, self.on_fail)
            if isinstance(action, Goto)
        )


# Implicit pass-continue / fail-stop semantics for steps without Conditions.
DEFAULT_CONDITIONS = Conditions()


@dataclass(frozen=True)
class Step:
    """
    Fundamental unit of work in a workflow.

    Attributes:
        number: Position of the step (1-based, sequential).
        description: Title taken from the step heading.
        command: Optional shell command, at most one per step.
        prompts: Questions asked in order once the step resolves to advance.
        conditions: Explicit pass/fail branching. None means implicit defaults.
    """
    number: StepNumber
    description: str
    command: Optional[Command] = None
    prompts: Tuple[Prompt, ...] = ()
    conditions: Optional[Conditions] = None

    @property
    def effective_conditions(self) -> Conditions:
        return self.conditions if self.conditions is not None else DEFAULT_CONDITIONS

    @property
    def is_empty(self) -> bool:
        return self.command is None and not self.prompts


class WarningKind(str, Enum):
    EMPTY_STEP = "empty_step"
    SELF_JUMP = "self_jump"
    UNUSED_CONDITIONS = "unused_conditions"


@dataclass(frozen=True)
class ValidationWarning:
    """Non-fatal diagnostic raised while validating a parsed workflow."""
    step_number: StepNumber
    kind: WarningKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Workflow:
    """
    Ordered sequence of steps forming a complete runbook.

    Built once by the parser; the engine only reads it.

    Attributes:
        steps: Steps in document order, numbered 1..N.
        warnings: Diagnostics collected during validation.
    """
    steps: Tuple[Step, ...]
    warnings: Tuple[ValidationWarning, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def index_of(self, number: int) -> Optional[int]:
        for index, step in enumerate(self.steps):
            if step.number == number:
                return index
        return None

    def get(self, number: int) -> Optional[Step]:
        index = self.index_of(number)
        return self.steps[index] if index is not None else None
