# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Scoring session: an engine bound to a stored game.

Every mutating call runs the engine first and then writes the new snapshot.
A failed write is logged and re-raised, but the in-memory snapshot is kept;
the next successful write (or :meth:`ScoringSession.flush`) persists it.

The API creates and resumes games only through :meth:`ScoringSession.open`
and :meth:`ScoringSession.resume`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from models import AtBatResult, Base, GameScoreDetails, Lineups, StealOutcome
from scoring import ScoringEngine
from store import GameStore, StoreError

logger = logging.getLogger(__name__)


class ScoringSession:
    """Engine operations followed by a best-effort save."""

    def __init__(self, game_id: str, engine: ScoringEngine, store: GameStore) -> None:
        self.game_id = game_id
        self.engine = engine
        self.store = store

    @classmethod
    def resume(cls, game_id: str, store: GameStore) -> ScoringSession | None:
        """Resume *game_id* from *store*, or ``None`` if nothing is stored.

        Raises:
            StoreError: if a stored document exists but cannot be read.
        """
        doc = store.load(game_id)
        if doc is None:
            return None
        engine = ScoringEngine(doc.lineup, doc.score_details)
        logger.info("Resuming game %s at %s", game_id, engine.state.situation_display())
        return cls(game_id, engine, store)

    @classmethod
    def open(
        cls,
        game_id: str,
        store: GameStore,
        lineups: Lineups | None = None,
    ) -> ScoringSession:
        """Resume *game_id* from *store*, or start it if nothing is stored.

        Lineups passed here replace the stored ones. Nothing is written until
        the first operation or :meth:`flush`.

        Raises:
            StoreError: if a stored document exists but cannot be read.
        """
        session = cls.resume(game_id, store)
        if session is None:
            logger.info("Starting new game %s", game_id)
            return cls(game_id, ScoringEngine(lineups or Lineups()), store)
        if lineups is not None:
            session.engine = ScoringEngine(lineups, session.engine.details)
        return session

    @property
    def details(self) -> GameScoreDetails:
        return self.engine.details

    def flush(self) -> GameScoreDetails:
        """Write the current snapshot.

        Raises:
            StoreError: if the write fails. The snapshot stays in memory.
        """
        try:
            self.store.save(self.game_id, self.engine.details, self.engine.lineups)
        except StoreError as exc:
            logger.error("Failed to save game %s: %s", self.game_id, exc)
            raise
        return self.engine.details

    def _apply(self, op: Callable[..., GameScoreDetails], *args: Any, **kwargs: Any) -> GameScoreDetails:
        op(*args, **kwargs)
        return self.flush()

    # -- engine operations -------------------------------------------------

    def record_ball(self) -> GameScoreDetails:
        return self._apply(self.engine.record_ball)

    def record_strike(self) -> GameScoreDetails:
        return self._apply(self.engine.record_strike)

    def record_foul(self) -> GameScoreDetails:
        return self._apply(self.engine.record_foul)

    def record_out(self) -> GameScoreDetails:
        return self._apply(self.engine.record_out)

    def resolve_at_bat(
        self,
        result: AtBatResult | str,
        batter_id: Optional[str] = None,
        pitcher_id: Optional[str] = None,
    ) -> GameScoreDetails:
        return self._apply(self.engine.resolve_at_bat, result, batter_id, pitcher_id)

    def record_steal_attempt(
        self,
        from_base: Base | str,
        outcomes: Optional[Mapping[Base | str, StealOutcome | str | None]] = None,
    ) -> GameScoreDetails:
        return self._apply(self.engine.record_steal_attempt, from_base, outcomes)

    def select_batter(self, player_id: str) -> GameScoreDetails:
        return self._apply(self.engine.select_batter, player_id)

    def select_pitcher(self, player_id: str) -> GameScoreDetails:
        return self._apply(self.engine.select_pitcher, player_id)
