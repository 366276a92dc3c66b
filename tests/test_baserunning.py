# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for stolen base / caught stealing resolution.

Validates:
  1. The originating runner defaults to safe and advances one base
  2. Other runners move only with an explicit safe / out
  3. Caught runners add to the cumulative out count
  4. Steals of home score and leave the other runners in place
  5. Invalid attempts raise StealAttemptError
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from baserunning import StealAttemptError, resolve_steal_attempt
from models import Base, Bases, GameState, StealOutcome


def state_with(outs=0, **bases):
    return GameState(outs=outs, bases=Bases(**bases))


class TestSingleRunner:
    def test_steal_second(self):
        attempt = resolve_steal_attempt(state_with(first="r1"), Base.FIRST, {Base.FIRST: StealOutcome.SAFE})
        assert attempt.bases == Bases(second="r1")
        assert attempt.outs == 0
        assert attempt.runs_scored == 0
        assert len(attempt.plays) == 1
        assert attempt.plays[0].to_base == Base.SECOND

    def test_origin_defaults_to_safe(self):
        attempt = resolve_steal_attempt(state_with(second="r2"), "second")
        assert attempt.bases == Bases(third="r2")

    def test_caught_stealing(self):
        attempt = resolve_steal_attempt(state_with(outs=1, first="r1"), Base.FIRST, {Base.FIRST: "out"})
        assert attempt.bases.is_empty()
        assert attempt.outs == 2
        assert attempt.plays[0].outcome == StealOutcome.OUT

    def test_steal_home_keeps_other_runners(self):
        state = state_with(outs=2, first="r1", second="r2", third="r3")
        attempt = resolve_steal_attempt(state, Base.THIRD, {Base.THIRD: StealOutcome.SAFE})
        assert attempt.runs_scored == 1
        assert attempt.outs == 2
        assert attempt.bases == Bases(first="r1", second="r2")
        assert attempt.plays[0].to_base == Base.HOME
        assert attempt.plays[0].scored


class TestMultipleRunners:
    def test_double_steal(self):
        state = state_with(first="r1", second="r2")
        attempt = resolve_steal_attempt(
            state, Base.FIRST, {Base.FIRST: "safe", Base.SECOND: "safe"},
        )
        assert attempt.bases == Bases(second="r1", third="r2")
        assert [p.runner_id for p in attempt.plays] == ["r1", "r2"]

    def test_trail_runner_out_lead_runner_safe(self):
        state = state_with(first="r1", third="r3")
        attempt = resolve_steal_attempt(
            state, Base.FIRST, {Base.FIRST: "out", Base.THIRD: "safe"},
        )
        assert attempt.outs == 1
        assert attempt.runs_scored == 1
        assert attempt.bases.is_empty()

    def test_runner_without_outcome_stays(self):
        state = state_with(first="r1", third="r3")
        attempt = resolve_steal_attempt(state, Base.FIRST, {Base.THIRD: None})
        assert attempt.bases == Bases(second="r1", third="r3")
        assert len(attempt.plays) == 1

    def test_explicit_stays(self):
        state = state_with(first="r1", third="r3")
        attempt = resolve_steal_attempt(state, Base.FIRST, {Base.THIRD: StealOutcome.STAYS})
        assert attempt.bases.third == "r3"

    def test_outcomes_reach_three_outs(self):
        state = state_with(outs=2, first="r1", second="r2")
        attempt = resolve_steal_attempt(state, Base.SECOND, {Base.SECOND: "out", Base.FIRST: "out"})
        assert attempt.outs == 4

    def test_no_run_after_third_out(self):
        state = state_with(outs=2, first="r1", third="r3")
        attempt = resolve_steal_attempt(state, Base.FIRST, {Base.FIRST: "out", Base.THIRD: "safe"})
        assert attempt.outs == 3
        assert attempt.runs_scored == 0
        assert attempt.plays[1].after_third_out
        assert not attempt.plays[1].scored

    def test_run_before_third_out(self):
        state = state_with(outs=2, first="r1", third="r3")
        attempt = resolve_steal_attempt(state, Base.THIRD, {Base.THIRD: "safe", Base.FIRST: "out"})
        assert attempt.outs == 3
        assert attempt.runs_scored == 1
        assert not attempt.plays[0].after_third_out

    def test_input_state_not_mutated(self):
        state = state_with(first="r1", second="r2")
        resolve_steal_attempt(state, Base.FIRST, {Base.SECOND: "safe"})
        assert state.bases == Bases(first="r1", second="r2")


class TestInvalidAttempts:
    def test_empty_origin(self):
        with pytest.raises(StealAttemptError, match="No runner on first"):
            resolve_steal_attempt(state_with(second="r2"), Base.FIRST)

    def test_from_home(self):
        with pytest.raises(StealAttemptError):
            resolve_steal_attempt(state_with(third="r3"), Base.HOME)

    def test_origin_marked_stays(self):
        with pytest.raises(StealAttemptError):
            resolve_steal_attempt(state_with(first="r1"), Base.FIRST, {Base.FIRST: "stays"})

    def test_blocked_by_staying_runner(self):
        with pytest.raises(StealAttemptError, match="second"):
            resolve_steal_attempt(state_with(first="r1", second="r2"), Base.FIRST)

    def test_is_a_value_error(self):
        assert issubclass(StealAttemptError, ValueError)
