# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Live game scoring engine.

Tracks an in-progress game from button-level events: balls, strikes, fouls,
manual outs, at-bat results and steal attempts. Every operation turns the
current ``GameScoreDetails`` snapshot into a new one (inputs are never
mutated), appends to the play log and folds the play into player stats.

The engine reads the lineups but never changes them. It does no I/O;
persistence is the caller's job (see ``session.py``).

Invalid requests (no batter selected, a steal from an empty base, a result
that is not a plate appearance) leave the snapshot unchanged and are logged
as warnings.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Mapping, Optional

import baserunning
import count_state
import resolution
import stats
from models import (
    AtBatEntry,
    AtBatResult,
    Base,
    BaseStealDetails,
    GameScoreDetails,
    GameState,
    LineupPlayer,
    Lineups,
    Score,
    StealOutcome,
    utc_now,
)

logger = logging.getLogger(__name__)

UNKNOWN_PLAYER = "Unknown Player"
UNKNOWN_PITCHER = "Unknown Pitcher"


# ---------------------------------------------------------------------------
# Lineup helpers
# ---------------------------------------------------------------------------

def select_next_batter(lineup: list[LineupPlayer], current_id: str | None) -> LineupPlayer | None:
    """The player after *current_id* in batting order, wrapping around.

    Falls back to the first player when *current_id* is unset or not in the
    lineup, and to ``None`` when the lineup is empty.
    """
    if not lineup:
        return None
    if not current_id:
        return lineup[0]
    for i, p in enumerate(lineup):
        if p.player_id == current_id:
            return lineup[(i + 1) % len(lineup)]
    return lineup[0]


def select_pitcher(lineup: list[LineupPlayer]) -> LineupPlayer | None:
    """The fielding lineup's pitcher, or its first player if none is marked."""
    if not lineup:
        return None
    for p in lineup:
        if p.is_pitcher:
            return p
    return lineup[0]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ScoringEngine:
    """Applies scoring events to a game snapshot.

    Args:
        lineups: Batting orders for both sides (read-only).
        details: Snapshot to resume from. A fresh zeroed snapshot is created
            when omitted. Unset batter/pitcher ids are seeded from the
            lineups.
        clock: Returns the timestamp for new log entries.
        id_factory: Returns ids for new log entries; defaults to random ids.
    """

    def __init__(
        self,
        lineups: Lineups | None = None,
        details: GameScoreDetails | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.lineups = lineups or Lineups()
        self._clock = clock or utc_now
        self._id_factory = id_factory
        self.details = self._seed(details or GameScoreDetails.new())

    @property
    def state(self) -> GameState:
        return self.details.game_state

    # -------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------

    def _seed(self, details: GameScoreDetails) -> GameScoreDetails:
        state = details.game_state
        update = {}
        if not state.current_batter_id:
            batter = select_next_batter(self.lineups.batting(state.is_top_inning), None)
            if batter:
                update["current_batter_id"] = batter.player_id
                logger.debug("Seeding batter %s", batter.player_name)
        if not state.current_pitcher_id:
            pitcher = select_pitcher(self.lineups.fielding(state.is_top_inning))
            if pitcher:
                update["current_pitcher_id"] = pitcher.player_id
                logger.debug("Seeding pitcher %s", pitcher.player_name)
        if not update:
            return details
        return details.model_copy(update={"game_state": state.model_copy(update=update)})

    def _commit(self, details: GameScoreDetails) -> GameScoreDetails:
        self.details = details
        return details

    def _with_state(self, state: GameState) -> GameScoreDetails:
        return self._commit(self.details.model_copy(update={"game_state": state}))

    # -------------------------------------------------------------------
    # Count events
    # -------------------------------------------------------------------

    def record_ball(self) -> GameScoreDetails:
        state, terminal = count_state.record_ball(self.state)
        if terminal is not None:
            # logged with the count the batter faced before the final pitch
            return self._resolve(self.state, terminal)
        return self._with_state(state)

    def record_strike(self) -> GameScoreDetails:
        state, terminal = count_state.record_strike(self.state)
        if terminal is not None:
            return self._resolve(self.state, terminal)
        return self._with_state(state)

    def record_foul(self) -> GameScoreDetails:
        return self._with_state(count_state.record_foul(self.state))

    def record_out(self) -> GameScoreDetails:
        state, half_inning_over = count_state.record_out(self.state)
        if half_inning_over:
            return self.transition_half_inning()
        return self._with_state(state)

    def transition_half_inning(self) -> GameScoreDetails:
        new_state = self._enter_half_inning(self.state, self.details.at_bats)
        logger.info("Half-inning over: %s", new_state.situation_display())
        return self._with_state(new_state)

    # -------------------------------------------------------------------
    # Matchup selection
    # -------------------------------------------------------------------

    def select_batter(self, player_id: str) -> GameScoreDetails:
        """Put *player_id* at the plate (pinch hitter or manual correction)."""
        if not player_id:
            logger.warning("Ignoring empty batter selection")
            return self.details
        return self._with_state(self.state.model_copy(update={"current_batter_id": player_id}))

    def select_pitcher(self, player_id: str) -> GameScoreDetails:
        if not player_id:
            logger.warning("Ignoring empty pitcher selection")
            return self.details
        return self._with_state(self.state.model_copy(update={"current_pitcher_id": player_id}))

    # -------------------------------------------------------------------
    # At-bat resolution
    # -------------------------------------------------------------------

    def resolve_at_bat(
        self,
        result: AtBatResult | str,
        batter_id: Optional[str] = None,
        pitcher_id: Optional[str] = None,
    ) -> GameScoreDetails:
        """Resolve the current plate appearance with *result*.

        *batter_id* and *pitcher_id* default to the current matchup.
        """
        return self._resolve(self.state, result, batter_id, pitcher_id)

    def _resolve(
        self,
        state: GameState,
        result: AtBatResult | str,
        batter_id: Optional[str] = None,
        pitcher_id: Optional[str] = None,
    ) -> GameScoreDetails:
        batter_id = batter_id or state.current_batter_id
        if not batter_id:
            logger.warning("No batter selected; ignoring at-bat result %s", result)
            return self.details
        if any(runner == batter_id for _, runner in state.bases.occupied()):
            # a lineup shorter than the runners on base wraps onto a runner
            logger.warning(
                "Batter %s is already on base; ignoring at-bat result %s", batter_id, result,
            )
            return self.details
        pitcher_id = pitcher_id or state.current_pitcher_id

        try:
            result = AtBatResult(result)
            outcome = resolution.resolve(result, state.bases, batter_id)
        except ValueError as exc:
            logger.warning("Cannot resolve at-bat: %s", exc)
            return self.details

        batter = self.lineups.find(batter_id)
        entry = self._new_entry(
            state,
            player_id=batter_id,
            pitcher_id=pitcher_id,
            result=result,
            rbi=outcome.rbi,
        )
        details = stats.fold_at_bat(self.details, entry, batter)

        outs = state.outs + outcome.outs_recorded
        if outs >= count_state.OUTS_PER_HALF_INNING:
            new_state = self._enter_half_inning(state, details.at_bats)
        else:
            next_batter = select_next_batter(self.lineups.batting(state.is_top_inning), batter_id)
            new_state = count_state.reset_count(state.model_copy(update={
                "outs": outs,
                "bases": outcome.bases,
                "current_batter_id": next_batter.player_id if next_batter else None,
            }))

        logger.info(
            "%s: %s (%d RBI) -> %s",
            entry.player_name, result.value, entry.rbi, new_state.situation_display(),
        )
        return self._commit(details.model_copy(update={"game_state": new_state}))

    # -------------------------------------------------------------------
    # Steal attempts
    # -------------------------------------------------------------------

    def record_steal_attempt(
        self,
        from_base: Base | str,
        outcomes: Optional[Mapping[Base | str, StealOutcome | str | None]] = None,
    ) -> GameScoreDetails:
        """Record a steal attempt started by the runner on *from_base*.

        *outcomes* maps bases to ``safe``/``out``/``stays``; see
        :func:`baserunning.resolve_steal_attempt`. Runs scored before a
        third out still count; the bases computed for such an attempt are
        discarded by the half-inning change.
        """
        state = self.state
        try:
            attempt = baserunning.resolve_steal_attempt(state, from_base, outcomes)
        except ValueError as exc:
            logger.warning("Ignoring steal attempt: %s", exc)
            return self.details

        details = self.details
        for play in attempt.plays:
            safe = play.outcome == StealOutcome.SAFE
            entry = self._new_entry(
                state,
                player_id=play.runner_id,
                pitcher_id=state.current_pitcher_id,
                result=AtBatResult.STOLEN_BASE if safe else AtBatResult.CAUGHT_STEALING,
                rbi=0,
                base_steal_details=BaseStealDetails(from_base=play.from_base, to_base=play.to_base),
            )
            details = stats.append_entry(details, entry)
            logger.info(
                "%s %s %s", entry.player_name,
                "stole" if safe else "caught stealing", play.to_base.value,
            )

        details = details.model_copy(update={
            "inning_scores": stats.credit_runs(
                details.inning_scores,
                state.current_inning,
                state.is_top_inning,
                attempt.runs_scored,
            ),
        })

        if attempt.outs >= count_state.OUTS_PER_HALF_INNING:
            new_state = self._enter_half_inning(state, details.at_bats)
        else:
            new_state = state.model_copy(update={"bases": attempt.bases, "outs": attempt.outs})
        return self._commit(details.model_copy(update={"game_state": new_state}))

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------

    def _new_entry(
        self,
        state: GameState,
        player_id: str,
        pitcher_id: Optional[str],
        result: AtBatResult,
        rbi: int,
        base_steal_details: BaseStealDetails | None = None,
    ) -> AtBatEntry:
        pitcher = self.lineups.find(pitcher_id)
        kwargs = {}
        if self._id_factory is not None:
            kwargs["id"] = self._id_factory()
        return AtBatEntry(
            player_id=player_id,
            player_name=self.player_name(player_id),
            pitcher_id=pitcher_id or "",
            pitcher_name=pitcher.player_name if pitcher else UNKNOWN_PITCHER,
            inning=state.current_inning,
            is_top_inning=state.is_top_inning,
            balls=state.balls,
            strikes=state.strikes,
            fouls=state.fouls,
            result=result,
            rbi=rbi,
            timestamp=self._clock(),
            base_steal_details=base_steal_details,
            **kwargs,
        )

    def _enter_half_inning(self, state: GameState, log: list[AtBatEntry]) -> GameState:
        """Transition and pick the matchup for the new half-inning.

        The batting side resumes after its most recent plate appearance; the
        fielding side keeps the pitcher it last used, if still in its lineup.
        """
        new_state = count_state.transition_half_inning(state)
        half = new_state.is_top_inning
        batting = self.lineups.batting(half)
        fielding = self.lineups.fielding(half)

        last_batter = None
        last_pitcher = None
        for entry in reversed(log):
            if entry.is_top_inning != half or entry.is_steal:
                continue
            last_batter = entry.player_id
            last_pitcher = entry.pitcher_id
            break

        batter = select_next_batter(batting, last_batter)
        pitcher = None
        if last_pitcher:
            pitcher = next((p for p in fielding if p.player_id == last_pitcher), None)
        if pitcher is None:
            pitcher = select_pitcher(fielding)

        return new_state.model_copy(update={
            "current_batter_id": batter.player_id if batter else None,
            "current_pitcher_id": pitcher.player_id if pitcher else None,
        })

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------

    def player_name(self, player_id: str | None) -> str:
        player = self.lineups.find(player_id)
        return player.player_name if player else UNKNOWN_PLAYER

    def batting_lineup(self) -> list[LineupPlayer]:
        return self.lineups.batting(self.state.is_top_inning)

    def fielding_lineup(self) -> list[LineupPlayer]:
        return self.lineups.fielding(self.state.is_top_inning)

    def score(self) -> Score:
        return stats.total_score(self.details.inning_scores)

    def log(self) -> list[stats.LogGroup]:
        return stats.log_projection(self.details.at_bats)

    def box_score(self) -> dict:
        return stats.box_score(self.details, self.lineups)


# ---------------------------------------------------------------------------
# CLI entry point: print the box score of a stored game document
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import argparse
    import json
    from pathlib import Path

    from config import configure_logging
    from models import details_from_dict

    parser = argparse.ArgumentParser(
        description="Print the situation and box score of a stored game document."
    )
    parser.add_argument("game_file", type=Path, help="Path to a <game_id>.json document")
    parser.add_argument(
        "--team-name", type=str, default="Team",
        help="Label for the side batting in the top half",
    )
    parser.add_argument(
        "--opponent-name", type=str, default="Opponent",
        help="Label for the side batting in the bottom half",
    )
    args = parser.parse_args()

    configure_logging()
    doc = json.loads(args.game_file.read_text())
    lineups = Lineups.model_validate(doc.get("lineup") or {})
    engine = ScoringEngine(lineups, details_from_dict(doc.get("scoreDetails")))
    print(engine.state.situation_display())
    print()
    print(stats.format_box_score(engine.details, lineups, args.team_name, args.opponent_name))
