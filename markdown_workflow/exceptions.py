"""
Workflow Exceptions

Error taxonomy for parsing and executing workflows. Parse errors are always
fatal to parsing; execution errors are fatal to a run. Normal terminal
outcomes (stopped, cancelled) are results, not exceptions.
"""

from typing import Optional


class WorkflowError(Exception):
    """Base class for every error raised by this package."""
    pass


class WorkflowNotFoundError(WorkflowError):
    """Raised when a workflow source cannot be located or read."""
    pass


# ==============================================================================
# Parse errors
# ==============================================================================


class ParseError(WorkflowError):
    """Structural or syntax violation in a workflow document."""

    def __init__(self, message: str, step_number: Optional[int] = None):
        super().__init__(message)
        self.step_number = step_number


class EmptyWorkflowError(ParseError):
    """Raised when a document contains no steps."""

    def __init__(self):
        super().__init__(
            "No steps found in workflow. Expected level-2 headings like '## 1. Description'"
        )


class StepHeaderError(ParseError):
    """Raised for malformed or missing step numbering in a heading."""
    pass


class DuplicateCommandError(ParseError):
    """Raised when a step contains more than one bash block."""

    def __init__(self, step_number: int):
        super().__init__(
            f"Step {step_number} has more than one bash code block. "
            "A step runs exactly one command: combine them with '&&' or ';', "
            "or split them into separate steps.",
            step_number=step_number,
        )


class StepSequenceError(ParseError):
    """Raised when step numbers are not 1..N in order."""

    def __init__(self, expected: int, found: int):
        super().__init__(
            f"Step numbers must be sequential. Expected Step {expected}, found Step {found}",
            step_number=found,
        )
        self.expected = expected
        self.found = found


class UnknownStepTargetError(ParseError):
    """Raised when a GOTO names a step that does not exist."""

    def __init__(self, source: int, target: int, step_count: int):
        super().__init__(
            f"Step {source}: GOTO target Step {target} does not exist "
            f"(workflow has {step_count} steps)",
            step_number=source,
        )
        self.source = source
        self.target = target
        self.step_count = step_count


class ConditionalSyntaxError(ParseError):
    """Raised for a PASS/FAIL directive whose action cannot be understood."""
    pass


# ==============================================================================
# Execution errors
# ==============================================================================


class ExecutionError(WorkflowError):
    """Fatal failure during a run, tied to the step where it happened."""

    def __init__(self, message: str, step_number: Optional[int] = None, description: Optional[str] = None):
        super().__init__(message)
        self.step_number = step_number
        self.description = description


class IterationLimitExceededError(ExecutionError):
    """Raised when a run exceeds its iteration budget (likely a GOTO cycle)."""

    def __init__(self, max_iterations: int, step_number: int, description: str):
        super().__init__(
            f"Exceeded maximum iterations ({max_iterations}) at Step {step_number}: "
            f"'{description}'. Possible infinite loop in workflow. "
            "Check for GOTO loops or missing STOP conditions.",
            step_number=step_number,
            description=description,
        )
        self.max_iterations = max_iterations
