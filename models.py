# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the live game scoring engine.

Python attributes are snake_case; the persisted/wire form uses camelCase
aliases (``currentInning``, ``isTopInning``, ``atBats`` ...) so stored game
documents keep the shape the rest of the application reads.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AtBatResult(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    HOMERUN = "homerun"
    WALK = "walk"
    HIT_BY_PITCH = "hitByPitch"
    SACRIFICE = "sacrifice"
    STRIKEOUT = "strikeout"
    GROUND_OUT = "groundOut"
    FLY_OUT = "flyOut"
    OUT_AT_FIRST = "outAtFirst"
    OUT_AT_SECOND = "outAtSecond"
    OUT_AT_THIRD = "outAtThird"
    OUT_AT_HOME = "outAtHome"
    FIELDERS_CHOICE = "fieldersChoice"
    ERROR = "error"
    FOUL = "foul"
    STOLEN_BASE = "stolenBase"
    CAUGHT_STEALING = "caughtStealing"


HIT_RESULTS = frozenset({
    AtBatResult.SINGLE, AtBatResult.DOUBLE, AtBatResult.TRIPLE, AtBatResult.HOMERUN,
})

OUT_RESULTS = frozenset({
    AtBatResult.STRIKEOUT,
    AtBatResult.GROUND_OUT,
    AtBatResult.FLY_OUT,
    AtBatResult.OUT_AT_FIRST,
    AtBatResult.OUT_AT_SECOND,
    AtBatResult.OUT_AT_THIRD,
    AtBatResult.OUT_AT_HOME,
})

STEAL_RESULTS = frozenset({AtBatResult.STOLEN_BASE, AtBatResult.CAUGHT_STEALING})


class Base(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    HOME = "home"


# Base order used for advancement (first -> second -> third -> home).
BASE_ORDER: tuple[Base, ...] = (Base.FIRST, Base.SECOND, Base.THIRD)


def next_base(base: Base) -> Base:
    """Return the base a runner on *base* advances to."""
    if base == Base.FIRST:
        return Base.SECOND
    if base == Base.SECOND:
        return Base.THIRD
    if base == Base.THIRD:
        return Base.HOME
    raise ValueError("A runner at home cannot advance")


class StealOutcome(str, Enum):
    SAFE = "safe"
    OUT = "out"
    STAYS = "stays"


# ---------------------------------------------------------------------------
# Base model with camelCase wire aliases
# ---------------------------------------------------------------------------

class ScoreModel(BaseModel):
    """Common config: camelCase aliases on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON-safe dict using the camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Lineups (read-only engine input)
# ---------------------------------------------------------------------------

class LineupPlayer(ScoreModel):
    player_id: str = Field(min_length=1)
    player_name: str = ""
    position: str = ""

    @property
    def is_pitcher(self) -> bool:
        return self.position.strip().lower() in ("p", "pitcher")


class Lineups(ScoreModel):
    """Batting orders for both sides. ``team`` bats in the top half."""
    team: list[LineupPlayer] = Field(default_factory=list)
    opponent: list[LineupPlayer] = Field(default_factory=list)

    def batting(self, is_top_inning: bool) -> list[LineupPlayer]:
        return self.team if is_top_inning else self.opponent

    def fielding(self, is_top_inning: bool) -> list[LineupPlayer]:
        return self.opponent if is_top_inning else self.team

    def find(self, player_id: str | None) -> LineupPlayer | None:
        if not player_id:
            return None
        for p in self.team:
            if p.player_id == player_id:
                return p
        for p in self.opponent:
            if p.player_id == player_id:
                return p
        return None


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

class Bases(ScoreModel):
    first: Optional[str] = None
    second: Optional[str] = None
    third: Optional[str] = None

    @model_validator(mode="after")
    def _runner_on_one_base(self) -> Bases:
        occupied = [r for r in (self.first, self.second, self.third) if r]
        if len(occupied) != len(set(occupied)):
            raise ValueError("A runner can occupy only one base at a time")
        return self

    def runner_on(self, base: Base) -> str | None:
        if base == Base.HOME:
            return None
        return getattr(self, base.value)

    def occupied(self) -> list[tuple[Base, str]]:
        """Occupied bases in first/second/third order."""
        return [(b, getattr(self, b.value)) for b in BASE_ORDER if getattr(self, b.value)]

    def is_empty(self) -> bool:
        return not (self.first or self.second or self.third)


class GameState(ScoreModel):
    """Count, outs, baserunners and the current matchup."""
    current_inning: int = Field(default=1, ge=1)
    is_top_inning: bool = True
    outs: int = Field(default=0, ge=0, le=2)
    balls: int = Field(default=0, ge=0, le=3)
    strikes: int = Field(default=0, ge=0, le=2)
    fouls: int = Field(default=0, ge=0)
    bases: Bases = Field(default_factory=Bases)
    current_batter_id: Optional[str] = None
    current_pitcher_id: Optional[str] = None

    @field_validator("fouls", mode="before")
    @classmethod
    def _missing_fouls(cls, v: Any) -> Any:
        # older documents were written without a foul counter
        return 0 if v is None else v

    def situation_display(self) -> str:
        half_str = "Top" if self.is_top_inning else "Bot"
        on_bases = [b.value for b, _ in self.bases.occupied()]
        runners_str = "runners on " + ", ".join(on_bases) if on_bases else "bases empty"
        return (
            f"{half_str} {self.current_inning}, {self.outs} out, "
            f"{self.balls}-{self.strikes} count, {runners_str}"
        )


# ---------------------------------------------------------------------------
# Play log
# ---------------------------------------------------------------------------

class BaseStealDetails(ScoreModel):
    from_base: Base = Field(alias="from")
    to_base: Base = Field(alias="to")


def _new_entry_id() -> str:
    return uuid.uuid4().hex[:12]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AtBatEntry(ScoreModel):
    """One append-only play-log record (plate appearance or steal attempt)."""
    id: str = Field(default_factory=_new_entry_id)
    player_id: str
    player_name: str = ""
    pitcher_id: str = ""
    pitcher_name: str = ""
    inning: int = Field(ge=1)
    is_top_inning: bool
    balls: int = Field(default=0, ge=0)
    strikes: int = Field(default=0, ge=0)
    fouls: int = Field(default=0, ge=0)
    result: AtBatResult
    rbi: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)
    timestamp: datetime = Field(default_factory=utc_now)
    base_steal_details: Optional[BaseStealDetails] = None

    @field_validator("timestamp")
    @classmethod
    def _aware_timestamp(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def is_steal(self) -> bool:
        return self.result in STEAL_RESULTS


# ---------------------------------------------------------------------------
# Scores and stats
# ---------------------------------------------------------------------------

class InningScore(ScoreModel):
    team: int = Field(default=0, ge=0)
    opponent: int = Field(default=0, ge=0)


class PlayerGameStats(ScoreModel):
    """Per-player counting stats, created on the player's first at-bat."""
    player_id: str
    player_name: str = ""
    position: str = ""
    at_bats: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    singles: int = Field(default=0, ge=0)
    doubles: int = Field(default=0, ge=0)
    triples: int = Field(default=0, ge=0)
    homeruns: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    rbi: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)


class Score(BaseModel):
    team: int = 0
    opponent: int = 0


# ---------------------------------------------------------------------------
# Aggregate root
# ---------------------------------------------------------------------------

class GameScoreDetails(ScoreModel):
    """Everything the engine reads and writes for one game."""
    game_state: GameState = Field(default_factory=GameState)
    at_bats: list[AtBatEntry] = Field(default_factory=list)
    inning_scores: list[InningScore] = Field(default_factory=list)
    player_stats: list[PlayerGameStats] = Field(default_factory=list)

    @field_validator("at_bats", "inning_scores", "player_stats", mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        # partially written documents may carry null or non-list values here
        return v if isinstance(v, list) else []

    @classmethod
    def new(cls, batter_id: str | None = None, pitcher_id: str | None = None) -> GameScoreDetails:
        """The zeroed shape used when a game is first opened for scoring."""
        return cls(
            game_state=GameState(current_batter_id=batter_id, current_pitcher_id=pitcher_id),
            inning_scores=[InningScore()],
        )

    def stats_for(self, player_id: str) -> PlayerGameStats | None:
        for line in self.player_stats:
            if line.player_id == player_id:
                return line
        return None


# ---------------------------------------------------------------------------
# Serialization support
# ---------------------------------------------------------------------------

def details_to_dict(details: GameScoreDetails) -> dict[str, Any]:
    """Serialize a snapshot to a JSON-safe dict for persistence."""
    return details.to_wire()


def details_from_dict(payload: dict[str, Any] | None) -> GameScoreDetails:
    """Rebuild a snapshot from its persisted dict form."""
    if not payload:
        return GameScoreDetails.new()
    return GameScoreDetails.model_validate(payload)
