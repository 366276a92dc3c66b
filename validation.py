# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Input validation for dispatch requests.

Pydantic input models for each scoring action the API accepts, plus helpers
that turn validation failures into messages naming the parameter that
failed and what was expected. Request bodies use camelCase keys
(``batterId``, ``fromBase``); snake_case is accepted too.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from models import STEAL_RESULTS, AtBatResult, Base, Lineups, ScoreModel, StealOutcome
from store import InvalidGameIdError, validate_game_id


def is_valid_player_id(player_id: str) -> bool:
    return isinstance(player_id, str) and len(player_id.strip()) > 0


def is_valid_game_id(game_id: str) -> bool:
    """Same rule the game store applies to file names."""
    try:
        validate_game_id(game_id)
    except InvalidGameIdError:
        return False
    return True


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------

class CreateGameInput(ScoreModel):
    """Body for creating (or re-opening) a game."""
    game_id: Optional[str] = Field(default=None, description="Game id; generated when omitted.")
    lineup: Lineups = Field(default_factory=Lineups, description="Batting orders for both sides.")

    @field_validator("game_id")
    @classmethod
    def check_game_id(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                validate_game_id(v)
            except InvalidGameIdError as e:
                raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def check_unique_players(self) -> CreateGameInput:
        ids = [p.player_id for p in self.lineup.team + self.lineup.opponent]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Player ids must be unique across both lineups: {', '.join(duplicates)}")
        return self


class AtBatInput(ScoreModel):
    """Body for resolving a plate appearance."""
    result: AtBatResult = Field(description="Plate-appearance result, e.g. 'single' or 'groundOut'.")
    batter_id: Optional[str] = Field(default=None, description="Defaults to the current batter.")
    pitcher_id: Optional[str] = Field(default=None, description="Defaults to the current pitcher.")

    @field_validator("result")
    @classmethod
    def validate_result(cls, v: AtBatResult) -> AtBatResult:
        if v in STEAL_RESULTS:
            raise ValueError("Steal results are recorded through a steal attempt")
        return v

    @field_validator("batter_id", "pitcher_id")
    @classmethod
    def validate_player_ids(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_player_id(v):
            raise ValueError("Player ID must be a non-empty string")
        return v


class StealAttemptInput(ScoreModel):
    """Body for a steal attempt."""
    from_base: Base = Field(description="Base of the runner starting the attempt ('first', 'second', 'third').")
    outcomes: dict[Base, Optional[StealOutcome]] = Field(
        default_factory=dict,
        description="Outcome per base: 'safe', 'out' or 'stays'.",
    )

    @field_validator("from_base")
    @classmethod
    def validate_from_base(cls, v: Base) -> Base:
        if v == Base.HOME:
            raise ValueError("Must be 'first', 'second' or 'third'")
        return v

    @model_validator(mode="after")
    def validate_origin_outcome(self) -> StealAttemptInput:
        if self.outcomes.get(self.from_base) == StealOutcome.STAYS:
            raise ValueError("The runner starting the attempt must be 'safe' or 'out'")
        return self


class MatchupInput(ScoreModel):
    """Body for choosing the batter and/or pitcher by hand."""
    batter_id: Optional[str] = None
    pitcher_id: Optional[str] = None

    @field_validator("batter_id", "pitcher_id")
    @classmethod
    def validate_player_ids(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_valid_player_id(v):
            raise ValueError("Player ID must be a non-empty string")
        return v

    @model_validator(mode="after")
    def validate_any(self) -> MatchupInput:
        if self.batter_id is None and self.pitcher_id is None:
            raise ValueError("Provide batterId and/or pitcherId")
        return self


# ---------------------------------------------------------------------------
# Validation functions
# ---------------------------------------------------------------------------

M = TypeVar("M", bound=BaseModel)


def format_validation_error(exc: Exception) -> str:
    """Format a Pydantic validation error into a human-readable message.

    Includes which parameter failed and what was expected.
    """
    if isinstance(exc, ValidationError):
        parts = []
        for error in exc.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            parts.append(f"Parameter '{loc}': {msg}" if loc else msg)
        return "; ".join(parts)
    return str(exc)


def validate_request(model_cls: type[M], payload: Any) -> tuple[Optional[M], Optional[str]]:
    """Validate a request body against *model_cls*.

    Returns:
        Tuple of (model, error_message). Exactly one of them is None.
    """
    try:
        return model_cls.model_validate(payload if payload is not None else {}), None
    except ValidationError as e:
        return None, format_validation_error(e)
