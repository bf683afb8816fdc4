"""Tests for domain/models.py: step numbers, actions, conditions, workflows."""
from __future__ import annotations

import dataclasses

import pytest

from markdown_workflow.domain.models import (
    DEFAULT_CONDITIONS,
    Command,
    Conditions,
    Continue,
    Goto,
    Prompt,
    Step,
    StepNumber,
    Stop,
    Workflow,
)


class TestStepNumber:
    def test_positive_number(self) -> None:
        number = StepNumber(3)
        assert number == 3
        assert isinstance(number, int)

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value: int) -> None:
        with pytest.raises(ValueError, match="positive"):
            StepNumber(value)

    def test_renders_as_plain_digits(self) -> None:
        assert str(StepNumber(3)) == "3"
        assert f"Step {StepNumber(3)}" == "Step 3"

    def test_ordering_and_hashing(self) -> None:
        assert StepNumber(1) < StepNumber(2)
        assert {StepNumber(2), 2} == {2}


class TestActions:
    def test_canonical_text(self) -> None:
        assert str(Continue()) == "CONTINUE"
        assert str(Stop()) == "STOP"
        assert str(Stop("fix tests")) == "STOP fix tests"
        assert str(Goto(StepNumber(4))) == "GOTO 4"

    def test_goto_coerces_plain_int(self) -> None:
        action = Goto(2)
        assert isinstance(action.target, StepNumber)
        assert action == Goto(StepNumber(2))

    def test_goto_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            Goto(0)

    def test_actions_are_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Stop("x").message = "y"  # type: ignore[misc]


class TestConditions:
    def test_defaults_are_continue_and_stop(self) -> None:
        conditions = Conditions()
        assert conditions.on_pass == Continue()
        assert conditions.on_fail == Stop(None)

    def test_select_by_outcome(self) -> None:
        conditions = Conditions(on_pass=Goto(3), on_fail=Stop("broken"))
        assert conditions.select(True) == Goto(3)
        assert conditions.select(False) == Stop("broken")

    def test_jump_targets(self) -> None:
        assert Conditions(on_pass=Goto(3), on_fail=Goto(1)).jump_targets() == (3, 1)
        assert Conditions().jump_targets() == ()


class TestDefaultConditions:
    def test_pass_continues_fail_stops(self) -> None:
        assert DEFAULT_CONDITIONS.select(True) == Continue()
        assert DEFAULT_CONDITIONS.select(False) == Stop()


class TestStep:
    def test_effective_conditions_default(self) -> None:
        step = Step(number=StepNumber(1), description="Run")
        assert step.effective_conditions == Conditions()

    def test_is_empty(self) -> None:
        assert Step(number=StepNumber(1), description="Nothing").is_empty
        assert not Step(number=StepNumber(1), description="Ask", prompts=(Prompt("ok?"),)).is_empty
        assert not Step(number=StepNumber(1), description="Run", command=Command("true")).is_empty


class TestWorkflow:
    def test_lookup_by_number(self) -> None:
        steps = (
            Step(number=StepNumber(1), description="One"),
            Step(number=StepNumber(2), description="Two"),
        )
        workflow = Workflow(steps=steps)
        assert len(workflow) == 2
        assert workflow.index_of(2) == 1
        assert workflow.index_of(5) is None
        assert workflow.get(1) is steps[0]
        assert [step.description for step in workflow] == ["One", "Two"]
