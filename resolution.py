# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""At-bat resolution rules.

Maps a plate-appearance result to the runs batted in, the new base
occupancy and the outs recorded. The rules live in a single dispatch table
keyed by ``AtBatResult``; the scoring engine is the only caller.

Runner ids always refer to occupancy *before* the at-bat. A runner who
"scores" is simply absent from the returned bases; the RBI count carries
the runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from models import OUT_RESULTS, AtBatResult, Bases


@dataclass(frozen=True)
class Resolution:
    rbi: int
    bases: Bases
    outs_recorded: int = 0


def _runners_on(bases: Bases) -> int:
    return len(bases.occupied())


def _homerun(bases: Bases, batter_id: str) -> Resolution:
    return Resolution(rbi=_runners_on(bases) + 1, bases=Bases())


def _triple(bases: Bases, batter_id: str) -> Resolution:
    return Resolution(rbi=_runners_on(bases), bases=Bases(third=batter_id))


def _double(bases: Bases, batter_id: str) -> Resolution:
    rbi = (1 if bases.second else 0) + (1 if bases.third else 0)
    return Resolution(rbi=rbi, bases=Bases(second=batter_id, third=bases.first))


def _single(bases: Bases, batter_id: str) -> Resolution:
    # also walks and hit-by-pitch: everyone moves up one, runner on third scores
    return Resolution(
        rbi=1 if bases.third else 0,
        bases=Bases(first=batter_id, second=bases.first, third=bases.second),
    )


def _sacrifice(bases: Bases, batter_id: str) -> Resolution:
    return Resolution(
        rbi=1 if bases.third else 0,
        bases=Bases(second=bases.first, third=bases.second),
        outs_recorded=1,
    )


def _out(bases: Bases, batter_id: str) -> Resolution:
    return Resolution(rbi=0, bases=bases.model_copy(), outs_recorded=1)


def _no_advance(bases: Bases, batter_id: str) -> Resolution:
    return Resolution(rbi=0, bases=bases.model_copy())


Handler = Callable[[Bases, str], Resolution]

RESOLUTION_TABLE: dict[AtBatResult, Handler] = {
    AtBatResult.HOMERUN: _homerun,
    AtBatResult.TRIPLE: _triple,
    AtBatResult.DOUBLE: _double,
    AtBatResult.SINGLE: _single,
    AtBatResult.WALK: _single,
    AtBatResult.HIT_BY_PITCH: _single,
    AtBatResult.SACRIFICE: _sacrifice,
    AtBatResult.FIELDERS_CHOICE: _no_advance,
    AtBatResult.ERROR: _no_advance,
    AtBatResult.FOUL: _no_advance,
    **{result: _out for result in OUT_RESULTS},
}


def resolve(result: AtBatResult, bases: Bases, batter_id: str) -> Resolution:
    """Apply the rule for *result* to the pre-at-bat *bases*.

    Raises:
        ValueError: for results that are not plate appearances
            (``stolenBase``, ``caughtStealing``).
    """
    result = AtBatResult(result)
    handler = RESOLUTION_TABLE.get(result)
    if handler is None:
        raise ValueError(f"{result.value} is not a plate-appearance result")
    return handler(bases, batter_id)
