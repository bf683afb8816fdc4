"""
Workflow Syntax - Line-Level Grammar

Recognizers for the small pieces of domain syntax embedded in markdown:
step headings, code fence tags, PASS/FAIL directives and their action
phrases. Current spellings are tried first, then legacy ones; every form
collapses into the same canonical domain types.
"""

import re
from enum import Enum
from typing import Optional, Tuple

from ..domain.models import Action, Continue, Goto, StepNumber, Stop
from ..exceptions import ConditionalSyntaxError, StepHeaderError

PROMPT_MARKER = "Prompt:"

COMMAND_LANGUAGE = "bash"
QUIET_FLAG = "quiet"

# Characters allowed between the step number and its title.
HEADING_SEPARATORS = ".:-)"

_STEP_HEADING = re.compile(r"^(?P<number>\d+)(?:[.:\-)\s]+(?P<title>.*))?$", re.DOTALL)
_RESERVED_STEP_WORD = re.compile(r"^Step\b")

_DIRECTIVE_SEPARATORS = r"\s:=\-–—>→"
_DIRECTIVE = re.compile(
    rf"^(?P<branch>PASS|FAIL)(?=$|[{_DIRECTIVE_SEPARATORS}])[{_DIRECTIVE_SEPARATORS}]*(?P<phrase>.*)$"
)
_LEGACY_DIRECTIVE = re.compile(r"^(?P<branch>Pass|Fail):\s*(?P<phrase>.*)$")

_CONTINUE = re.compile(r"^(?:CONTINUE|Continue)$")
_STOP = re.compile(r"^STOP(?:(?:\s*[:\-–—]\s*|\s+)(?P<message>.*))?$", re.DOTALL)
_GOTO = re.compile(r"^GOTO\s+(?P<target>\S+)$")
_LEGACY_GOTO = re.compile(r"^Go to Step\s+(?P<target>\S+)$")


class Branch(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


# ==============================================================================
# Step headings
# ==============================================================================


def parse_step_heading(text: str) -> Tuple[StepNumber, str]:
    """
    Parse the text of a level-2 heading into (number, title).

    Accepts '1. Title', '1: Title', '1 - Title', '1) Title' and '1 Title'.
    Raises StepHeaderError for anything else, including the verbose
    'Step 1: Title' form.
    """
    text = text.strip()

    if _RESERVED_STEP_WORD.match(text):
        raise StepHeaderError(
            f"Invalid step heading '## {text}'. Drop the word 'Step' and use "
            "the terse form '## 1. Title'"
        )

    match = _STEP_HEADING.match(text)
    if not match:
        raise StepHeaderError(
            f"Invalid step heading '## {text}'. Level-2 headings start steps and "
            "must look like '## <number>. <title>'"
        )

    try:
        number = StepNumber(int(match.group("number")))
    except ValueError:
        raise StepHeaderError(
            f"Invalid step heading '## {text}'. Step numbers must be positive"
        ) from None

    title = (match.group("title") or "").strip().strip(HEADING_SEPARATORS).strip()
    if not title:
        raise StepHeaderError(
            f"Step {number} has no title. Use '## {number}. <title>'",
            step_number=number,
        )

    return number, title


# ==============================================================================
# Code fences
# ==============================================================================


def parse_fence_info(info: Optional[str]) -> Optional[bool]:
    """
    Inspect a fenced code block's info string.

    Returns None when the block is not a command block, otherwise whether
    the command is quiet. Only an exact first token 'bash' counts, so
    'bashquiet' and 'shell' are ignored.
    """
    tokens = (info or "").split()
    if not tokens or tokens[0] != COMMAND_LANGUAGE:
        return None
    return QUIET_FLAG in tokens[1:]


# ==============================================================================
# Conditional directives
# ==============================================================================


def is_conditional(line: str) -> bool:
    """True if the line starts with a PASS/FAIL token, whether or not its action is valid."""
    line = line.strip()
    return bool(_DIRECTIVE.match(line) or _LEGACY_DIRECTIVE.match(line))


def parse_conditional(line: str) -> Optional[Tuple[Branch, Action]]:
    """
    Parse a PASS/FAIL directive line.

    Returns None if the line is not a directive at all (plain prose).
    Raises ConditionalSyntaxError if it is a directive with a bad action.
    Only the upper-case tokens are recognized, plus the legacy 'Pass:' and
    'Fail:' spellings.
    """
    line = line.strip()

    match = _DIRECTIVE.match(line) or _LEGACY_DIRECTIVE.match(line)
    if not match:
        return None

    branch = Branch(match.group("branch").upper())
    phrase = match.group("phrase").strip()
    if not phrase:
        raise ConditionalSyntaxError(f"'{line}' is missing an action (CONTINUE, STOP or GOTO <n>)")

    action = parse_action(phrase)
    if action is None:
        raise ConditionalSyntaxError(
            f"Unrecognized action '{phrase}' in '{line}'. "
            "Expected CONTINUE, STOP, STOP <message> or GOTO <n>"
        )
    return branch, action


def parse_action(phrase: str) -> Optional[Action]:
    """Parse an action phrase, trying current syntax before legacy forms."""
    phrase = phrase.strip()
    return _parse_current_action(phrase) or _parse_legacy_action(phrase)


def _parse_current_action(phrase: str) -> Optional[Action]:
    if _CONTINUE.match(phrase):
        return Continue()

    match = _STOP.match(phrase)
    if match:
        message = match.group("message")
        if message is None:
            return Stop()
        message = message.strip()
        # Legacy 'STOP (message)' keeps the parentheses out of the message.
        if message.startswith("(") and message.endswith(")"):
            message = message[1:-1].strip()
        return Stop(message or None)

    match = _GOTO.match(phrase)
    if match:
        return Goto(_parse_target(match.group("target"), phrase))

    return None


def _parse_legacy_action(phrase: str) -> Optional[Action]:
    match = _LEGACY_GOTO.match(phrase)
    if match:
        return Goto(_parse_target(match.group("target"), phrase))
    return None


def _parse_target(raw: str, phrase: str) -> StepNumber:
    try:
        return StepNumber(int(raw))
    except ValueError:
        raise ConditionalSyntaxError(
            f"Invalid jump target in '{phrase}'. GOTO needs a positive step number"
        ) from None
