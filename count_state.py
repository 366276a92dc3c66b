# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Count and out state machine.

Every function takes a ``GameState`` and returns a new one; inputs are never
mutated. Terminal events (ball four, strike three, the third out) are
reported back to the caller instead of being resolved here, so the scoring
engine keeps a single path for at-bat resolution and half-inning changes.
"""

from __future__ import annotations

from models import AtBatResult, Bases, GameState

BALLS_FOR_WALK = 4
STRIKES_FOR_STRIKEOUT = 3
OUTS_PER_HALF_INNING = 3


def record_ball(state: GameState) -> tuple[GameState, AtBatResult | None]:
    """Add a ball. Returns ``walk`` as the terminal result on ball four.

    On ball four the returned state holds 4 balls and is not a resting
    state; the engine resolves the walk from the count before the pitch.
    """
    balls = state.balls + 1
    new_state = state.model_copy(update={"balls": balls})
    if balls >= BALLS_FOR_WALK:
        return new_state, AtBatResult.WALK
    return new_state, None


def record_strike(state: GameState) -> tuple[GameState, AtBatResult | None]:
    """Add a strike. Returns ``strikeout`` as the terminal result on strike three."""
    strikes = state.strikes + 1
    new_state = state.model_copy(update={"strikes": strikes})
    if strikes >= STRIKES_FOR_STRIKEOUT:
        return new_state, AtBatResult.STRIKEOUT
    return new_state, None


def record_foul(state: GameState) -> GameState:
    """Add a foul. Counts as a strike only below two strikes; never terminal."""
    update = {"fouls": state.fouls + 1}
    if state.strikes < STRIKES_FOR_STRIKEOUT - 1:
        update["strikes"] = state.strikes + 1
    return state.model_copy(update=update)


def record_out(state: GameState) -> tuple[GameState, bool]:
    """Add an out. Returns ``(state, True)`` when the half-inning is over.

    Below three outs the count is reset for the next plate appearance. At
    three outs the caller must run :func:`transition_half_inning`; the
    returned state is only meaningful as input to that transition.
    """
    outs = state.outs + 1
    if outs >= OUTS_PER_HALF_INNING:
        return state, True
    return reset_count(state.model_copy(update={"outs": outs})), False


def reset_count(state: GameState) -> GameState:
    return state.model_copy(update={"balls": 0, "strikes": 0, "fouls": 0})


def transition_half_inning(state: GameState) -> GameState:
    """Move to the other half-inning.

    Flips the batting side, advances the inning when going from bottom to
    top, zeroes outs and the count, and clears every base.
    """
    is_top = not state.is_top_inning
    inning = state.current_inning + 1 if is_top else state.current_inning
    return state.model_copy(update={
        "current_inning": inning,
        "is_top_inning": is_top,
        "outs": 0,
        "balls": 0,
        "strikes": 0,
        "fouls": 0,
        "bases": Bases(),
    })
