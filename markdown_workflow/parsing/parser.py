"""
Parser - Markdown to Workflow

Folds the mistune token stream of a markdown document into an ordered,
validated Workflow. All in-flight state lives in a single ParserState;
a step draft is finalized into an immutable Step only at a boundary
(the next step heading or the end of the document).

Recognized structure:
1. '## <n>. <title>' starts step n. '#' headings never start a step.
2. A fenced ```bash block is the step's command (```bash quiet suppresses
   stdout on success).
3. '**Prompt:** text' is an explicit yes/no prompt.
4. 'PASS: <action>' / 'FAIL: <action>' lines set the step's branching.
5. Any other prose in a command-less step becomes an implicit prompt.
"""

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import mistune

from ..domain.models import (
    Action,
    Command,
    Conditions,
    Continue,
    Prompt,
    Step,
    StepNumber,
    Stop,
    ValidationWarning,
    WarningKind,
    Workflow,
)
from ..exceptions import (
    ConditionalSyntaxError,
    DuplicateCommandError,
    EmptyWorkflowError,
    StepSequenceError,
    UnknownStepTargetError,
)
from .syntax import (
    PROMPT_MARKER,
    Branch,
    is_conditional,
    parse_conditional,
    parse_fence_info,
    parse_step_heading,
)

logger = logging.getLogger(__name__)

Token = Dict[str, Any]

STEP_HEADING_LEVEL = 2

_markdown = mistune.create_markdown(renderer="ast")


# ==============================================================================
# Parser State
# ==============================================================================


@dataclass
class StepDraft:
    """Mutable accumulator for the step currently being read."""

    number: StepNumber
    description: str
    command: Optional[Command] = None
    prompts: List[Prompt] = field(default_factory=list)
    on_pass: Optional[Action] = None
    on_fail: Optional[Action] = None
    implicit_text: List[str] = field(default_factory=list)

    def set_branch(self, branch: Branch, action: Action):
        if branch == Branch.PASS:
            if self.on_pass is not None:
                raise ConditionalSyntaxError(
                    f"Step {self.number} has more than one PASS directive",
                    step_number=self.number,
                )
            self.on_pass = action
        else:
            if self.on_fail is not None:
                raise ConditionalSyntaxError(
                    f"Step {self.number} has more than one FAIL directive",
                    step_number=self.number,
                )
            self.on_fail = action

    def finalize(self) -> Step:
        conditions = None
        if self.on_pass is not None or self.on_fail is not None:
            conditions = Conditions(
                on_pass=self.on_pass if self.on_pass is not None else Continue(),
                on_fail=self.on_fail if self.on_fail is not None else Stop(),
            )

        prompts = list(self.prompts)
        if self.command is None and not prompts:
            text = "\n\n".join(self.implicit_text).strip()
            if text:
                prompts.append(Prompt(text=text))

        return Step(
            number=self.number,
            description=self.description,
            command=self.command,
            prompts=tuple(prompts),
            conditions=conditions,
        )


@dataclass
class ParserState:
    steps: List[Step] = field(default_factory=list)
    current: Optional[StepDraft] = None


@dataclass
class ParagraphScan:
    """
    Splits one paragraph's inline tokens into plain lines and explicit prompts.

    Text following an emphasized 'Prompt:' marker is captured until the
    paragraph ends, another emphasis starts, or a later line opens with a
    PASS/FAIL token. That line and the rest go back to the plain lines.
    """

    lines: List[str] = field(default_factory=lambda: [""])
    prompts: List[str] = field(default_factory=list)
    capture: Optional[List[str]] = None

    def emphasis(self, text: str):
        self.flush_prompt()
        if text.strip() == PROMPT_MARKER:
            self.capture = [""]
        else:
            self.lines[-1] += text

    def text(self, text: str):
        if self.capture is not None:
            self.capture[-1] += text
        else:
            self.lines[-1] += text

    def line_break(self):
        if self.capture is not None:
            self.capture.append("")
        else:
            self.lines.append("")

    def flush_prompt(self):
        if self.capture is None:
            return
        captured, self.capture = self.capture, None

        prompt_lines = captured
        for index, line in enumerate(captured[1:], start=1):
            if is_conditional(line):
                prompt_lines = captured[:index]
                self.lines.extend(captured[index:])
                break
        else:
            if len(captured) > 1:
                # Whatever follows starts on a fresh line
                self.lines.append("")

        text = "\n".join(prompt_lines).strip()
        if text:
            self.prompts.append(text)


# ==============================================================================
# Public API
# ==============================================================================


def parse_workflow(markdown: str) -> Workflow:
    """
    Parse a markdown document into a validated Workflow.

    Raises a ParseError subclass on any structural problem; no partial
    workflow is ever returned. Non-fatal diagnostics are logged and kept
    on Workflow.warnings.
    """
    state = ParserState()
    for token in _markdown(markdown):
        _on_block(state, token)
    _on_end(state)
    return validate_steps(state.steps)


# ==============================================================================
# Boundary Events
# ==============================================================================


def _on_block(state: ParserState, token: Token):
    kind = token["type"]

    if kind == "heading":
        _on_heading(state, token)
    elif kind == "block_code":
        _on_code_block(state, token)
    elif kind in ("paragraph", "block_text"):
        _on_paragraph(state, token)
    elif kind in ("list", "list_item", "block_quote"):
        for child in token.get("children", []):
            _on_block(state, child)


def _on_heading(state: ParserState, token: Token):
    if token.get("attrs", {}).get("level") != STEP_HEADING_LEVEL:
        return

    number, description = parse_step_heading(_plain_text(token.get("children", [])))
    _finalize_current(state)
    state.current = StepDraft(number=number, description=description)


def _on_code_block(state: ParserState, token: Token):
    draft = state.current
    if draft is None:
        return

    quiet = parse_fence_info(token.get("attrs", {}).get("info"))
    if quiet is None:
        return

    if draft.command is not None:
        raise DuplicateCommandError(draft.number)
    draft.command = Command(code=token.get("raw", "").strip(), quiet=quiet)


def _on_paragraph(state: ParserState, token: Token):
    draft = state.current
    if draft is None:
        return

    scan = ParagraphScan()
    _scan_inline(scan, token.get("children", []))
    scan.flush_prompt()

    draft.prompts.extend(Prompt(text=text) for text in scan.prompts)

    prose = []
    for line in scan.lines:
        line = line.strip()
        if not line:
            continue
        try:
            directive = parse_conditional(line)
        except ConditionalSyntaxError as e:
            raise ConditionalSyntaxError(f"Step {draft.number}: {e}", step_number=draft.number) from e
        if directive is not None:
            draft.set_branch(*directive)
        else:
            prose.append(line)

    if prose:
        draft.implicit_text.append("\n".join(prose))


def _on_end(state: ParserState):
    _finalize_current(state)


def _finalize_current(state: ParserState):
    if state.current is not None:
        state.steps.append(state.current.finalize())
        state.current = None


# ==============================================================================
# Inline Helpers
# ==============================================================================


def _scan_inline(scan: ParagraphScan, tokens: List[Token]):
    for token in tokens:
        kind = token["type"]
        if kind in ("emphasis", "strong"):
            scan.emphasis(_plain_text(token.get("children", [])))
        elif kind == "text":
            scan.text(html.unescape(token.get("raw", "")))
        elif kind == "inline_html":
            scan.text(token.get("raw", ""))
        elif kind == "codespan":
            scan.text(f"`{token.get('raw', '')}`")
        elif kind in ("softbreak", "linebreak"):
            scan.line_break()
        elif "children" in token:
            _scan_inline(scan, token["children"])


def _plain_text(tokens: List[Token]) -> str:
    parts = []
    for token in tokens:
        kind = token["type"]
        if kind == "codespan":
            parts.append(f"`{token.get('raw', '')}`")
        elif kind in ("softbreak", "linebreak"):
            parts.append("\n")
        elif "children" in token:
            parts.append(_plain_text(token["children"]))
        elif kind == "text":
            parts.append(html.unescape(token.get("raw", "")))
        else:
            parts.append(token.get("raw", ""))
    return "".join(parts)


# ==============================================================================
# Validation
# ==============================================================================


def validate_steps(steps: List[Step]) -> Workflow:
    """
    Check workflow-level invariants and collect non-fatal diagnostics.

    Fatal: empty workflow, non-sequential numbering, unknown GOTO targets.
    Warnings: empty steps, self-jumps, conditions on command-less steps.
    """
    if not steps:
        raise EmptyWorkflowError()

    for expected, step in enumerate(steps, start=1):
        if step.number != expected:
            raise StepSequenceError(expected=expected, found=step.number)

    known_numbers = {step.number for step in steps}
    warnings: List[ValidationWarning] = []

    for step in steps:
        if step.conditions is not None:
            targets = step.conditions.jump_targets()
            for target in targets:
                if target not in known_numbers:
                    raise UnknownStepTargetError(
                        source=step.number, target=target, step_count=len(steps)
                    )
            if step.number in targets:
                warnings.append(ValidationWarning(
                    step_number=step.number,
                    kind=WarningKind.SELF_JUMP,
                    message=(
                        f"Step {step.number} jumps to itself; this may loop until "
                        "the iteration limit is reached"
                    ),
                ))
            if step.command is None:
                warnings.append(ValidationWarning(
                    step_number=step.number,
                    kind=WarningKind.UNUSED_CONDITIONS,
                    message=(
                        f"Step {step.number} has PASS/FAIL conditions but no command; "
                        "they will be ignored"
                    ),
                ))

        if step.is_empty:
            warnings.append(ValidationWarning(
                step_number=step.number,
                kind=WarningKind.EMPTY_STEP,
                message=f"Step {step.number} has no command and no prompts",
            ))

    for warning in warnings:
        logger.info(f"Validation warning: {warning.message}")

    return Workflow(steps=tuple(steps), warnings=tuple(warnings))
