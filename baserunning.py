# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Stolen base / caught stealing resolution.

A steal attempt starts from one occupied base (the originating runner) and
may carry outcomes for the other runners as well. Each processed runner is
either safe at the next base (third -> home scores) or out. Runners with no
outcome, or ``stays``, keep their base. Runners are processed originating
runner first, then in first/second/third order; once three outs are on the
board, later runners are still logged but no longer score.

This module only computes the result; the scoring engine writes the log
entries, credits runs and performs the half-inning change on three outs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from count_state import OUTS_PER_HALF_INNING
from models import BASE_ORDER, Base, Bases, GameState, StealOutcome, next_base


class StealAttemptError(ValueError):
    """Raised when a steal attempt does not fit the current base state."""


@dataclass(frozen=True)
class StealPlay:
    runner_id: str
    from_base: Base
    to_base: Base
    outcome: StealOutcome
    after_third_out: bool = False

    @property
    def scored(self) -> bool:
        """Safe at home before the half-inning ended."""
        return (
            self.outcome == StealOutcome.SAFE
            and self.to_base == Base.HOME
            and not self.after_third_out
        )


@dataclass(frozen=True)
class StealResolution:
    bases: Bases
    outs: int  # cumulative for the half-inning, may reach 3
    plays: tuple[StealPlay, ...]

    @property
    def runs_scored(self) -> int:
        return sum(1 for p in self.plays if p.scored)


def _normalize(outcomes: Mapping[Base | str, StealOutcome | str | None] | None) -> dict[Base, StealOutcome]:
    normalized: dict[Base, StealOutcome] = {}
    for base, outcome in (outcomes or {}).items():
        if outcome is None:
            continue
        normalized[Base(base)] = StealOutcome(outcome)
    return normalized


def resolve_steal_attempt(
    state: GameState,
    from_base: Base | str,
    outcomes: Optional[Mapping[Base | str, StealOutcome | str | None]] = None,
) -> StealResolution:
    """Resolve a steal attempt started by the runner on *from_base*.

    Args:
        state: Current game state (not modified).
        from_base: Base of the originating runner.
        outcomes: Outcome per base. The originating runner defaults to
            ``safe``; other runners are processed only when they have an
            explicit ``safe`` or ``out``.

    Returns:
        The resulting bases, the cumulative out count and the processed
        plays, originating runner first.

    Raises:
        StealAttemptError: the origin is empty or home, the originating
            runner was marked ``stays``, or a safe runner would land on a
            base still held by a runner who stays.
    """
    origin = Base(from_base)
    if origin == Base.HOME:
        raise StealAttemptError("Cannot start a steal attempt from home")
    chosen = _normalize(outcomes)

    origin_runner = state.bases.runner_on(origin)
    if not origin_runner:
        raise StealAttemptError(f"No runner on {origin.value}")
    origin_outcome = chosen.get(origin, StealOutcome.SAFE)
    if origin_outcome == StealOutcome.STAYS:
        raise StealAttemptError("The originating runner must be safe or out")

    movers: list[tuple[Base, str, StealOutcome]] = [(origin, origin_runner, origin_outcome)]
    for base, runner in state.bases.occupied():
        if base == origin:
            continue
        outcome = chosen.get(base)
        if outcome is None or outcome == StealOutcome.STAYS:
            continue
        movers.append((base, runner, outcome))

    # Vacate every moving runner's base before placing anyone, so advancing
    # runners never displace each other.
    slots: dict[Base, str | None] = {b: state.bases.runner_on(b) for b in BASE_ORDER}
    for base, _, _ in movers:
        slots[base] = None

    plays: list[StealPlay] = []
    outs = state.outs
    for base, runner, outcome in movers:
        target = next_base(base)
        # a runner crossing home after the third out does not score
        inning_over = outs >= OUTS_PER_HALF_INNING
        if outcome == StealOutcome.SAFE and target != Base.HOME:
            if slots[target] is not None:
                raise StealAttemptError(
                    f"{target.value} is still occupied by a runner who is not advancing"
                )
            slots[target] = runner
        elif outcome == StealOutcome.OUT:
            outs += 1
        plays.append(StealPlay(
            runner_id=runner,
            from_base=base,
            to_base=target,
            outcome=outcome,
            after_third_out=inning_over,
        ))

    return StealResolution(
        bases=Bases(
            first=slots[Base.FIRST],
            second=slots[Base.SECOND],
            third=slots[Base.THIRD],
        ),
        outs=outs,
        plays=tuple(plays),
    )
