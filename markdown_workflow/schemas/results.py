"""
Schemas - Outcome Models for Commands and Runs

Pydantic models describing what the outside world hands back to the engine
(CommandOutput) and what the engine hands back to its caller
(ExecutionResult). Stopped and UserCancelled are normal terminal outcomes,
distinct from Success, and never raised as exceptions.
"""
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommandOutput(BaseModel):
    """
    Result of running one shell command.

    stdout/stderr are empty when the executor lets the child process write
    straight to the terminal.
    """
    model_config = ConfigDict(frozen=True)

    stdout: str = Field("", description="Captured standard output.")
    stderr: str = Field("", description="Captured standard error.")
    exit_code: int = Field(..., description="Process exit code (negative if killed by a signal).")
    success: bool = Field(..., description="True when the command exited 0.")


class ResultStatus(str, Enum):
    """
    How a run ended.

    SUCCESS: Every step ran and the cursor moved past the last one.
    STOPPED: A STOP action (explicit or implicit) ended the run.
    CANCELLED: The operator declined a prompt.
    """
    SUCCESS = "SUCCESS"
    STOPPED = "STOPPED"
    CANCELLED = "CANCELLED"


class ExecutionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ResultStatus


class Success(ExecutionResult):
    status: Literal[ResultStatus.SUCCESS] = ResultStatus.SUCCESS


class Stopped(ExecutionResult):
    status: Literal[ResultStatus.STOPPED] = ResultStatus.STOPPED
    message: Optional[str] = Field(None, description="Message from 'STOP <message>', if any.")


class UserCancelled(ExecutionResult):
    status: Literal[ResultStatus.CANCELLED] = ResultStatus.CANCELLED
