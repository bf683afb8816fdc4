"""
Execution Mode - Control-Flow Policy

ENFORCEMENT runs steps strictly in order: a step's conditions may only
STOP the run. GUIDED lets conditions CONTINUE, STOP or GOTO freely.
"""

from enum import Enum

from ..domain.models import Action, Continue, Goto, Stop


class ExecutionMode(str, Enum):
    ENFORCEMENT = "enforcement"  # Sequential, STOP only, no skipping
    GUIDED = "guided"  # Full control flow

    @classmethod
    def from_flag(cls, guided: bool) -> "ExecutionMode":
        return cls.GUIDED if guided else cls.ENFORCEMENT

    def allows_continue(self) -> bool:
        return self is ExecutionMode.GUIDED

    def allows_goto(self) -> bool:
        return self is ExecutionMode.GUIDED

    def allows_stop(self) -> bool:
        return True

    def permits(self, action: Action) -> bool:
        if isinstance(action, Continue):
            return self.allows_continue()
        if isinstance(action, Goto):
            return self.allows_goto()
        if isinstance(action, Stop):
            return self.allows_stop()
        return False
