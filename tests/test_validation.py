# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for request validation and structured responses.

Validates:
  1. Input models accept camelCase and snake_case bodies
  2. Steal results, home as an origin and empty matchups are rejected
  3. Validation errors name the failing parameter
  4. Response helpers produce the shared envelope
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import AtBatResult, Base, StealOutcome
from responses import GAME_NOT_FOUND, error_response, success_response
from store import InvalidGameIdError, validate_game_id
from validation import (
    AtBatInput,
    CreateGameInput,
    MatchupInput,
    StealAttemptInput,
    is_valid_game_id,
    is_valid_player_id,
    validate_request,
)


class TestIdChecks:
    def test_player_ids(self):
        assert is_valid_player_id("p1")
        assert not is_valid_player_id("")
        assert not is_valid_player_id("   ")
        assert not is_valid_player_id(None)

    def test_game_ids(self):
        assert is_valid_game_id("2024-06-01-hawks")
        assert not is_valid_game_id("../etc")
        assert not is_valid_game_id("a/b")

    @pytest.mark.parametrize("game_id", ["g1", "..", "a\\b", "   ", ""])
    def test_game_ids_match_store_rule(self, game_id):
        try:
            validate_game_id(game_id)
            accepted = True
        except InvalidGameIdError:
            accepted = False
        assert is_valid_game_id(game_id) is accepted


class TestCreateGameInput:
    def test_camel_case_lineup(self):
        body, error = validate_request(CreateGameInput, {
            "gameId": "g1",
            "lineup": {"team": [{"playerId": "t1", "playerName": "Ava", "position": "SS"}]},
        })
        assert error is None
        assert body.game_id == "g1"
        assert body.lineup.team[0].player_name == "Ava"

    def test_empty_body(self):
        body, error = validate_request(CreateGameInput, None)
        assert error is None
        assert body.game_id is None
        assert body.lineup.team == []

    def test_bad_game_id(self):
        body, error = validate_request(CreateGameInput, {"gameId": "../x"})
        assert body is None
        assert "Parameter 'gameId'" in error

    def test_duplicate_player_ids(self):
        body, error = validate_request(CreateGameInput, {
            "lineup": {
                "team": [{"playerId": "p1"}, {"playerId": "p2"}],
                "opponent": [{"playerId": "p2"}],
            },
        })
        assert body is None
        assert "unique" in error
        assert "p2" in error


class TestAtBatInput:
    def test_valid(self):
        body, error = validate_request(AtBatInput, {"result": "groundOut", "batterId": "t1"})
        assert error is None
        assert body.result == AtBatResult.GROUND_OUT
        assert body.batter_id == "t1"
        assert body.pitcher_id is None

    def test_steal_result_rejected(self):
        body, error = validate_request(AtBatInput, {"result": "stolenBase"})
        assert body is None
        assert "steal attempt" in error

    def test_unknown_result(self):
        body, error = validate_request(AtBatInput, {"result": "bunt"})
        assert body is None
        assert "result" in error

    def test_missing_result(self):
        _, error = validate_request(AtBatInput, {})
        assert "result" in error


class TestStealAttemptInput:
    def test_valid(self):
        body, error = validate_request(StealAttemptInput, {
            "fromBase": "first",
            "outcomes": {"first": "safe", "third": "stays", "second": None},
        })
        assert error is None
        assert body.from_base == Base.FIRST
        assert body.outcomes[Base.THIRD] == StealOutcome.STAYS
        assert body.outcomes[Base.SECOND] is None

    def test_home_rejected(self):
        body, error = validate_request(StealAttemptInput, {"fromBase": "home"})
        assert body is None

    def test_origin_stays_rejected(self):
        body, error = validate_request(StealAttemptInput, {
            "fromBase": "second", "outcomes": {"second": "stays"},
        })
        assert body is None
        assert "safe" in error

    def test_bad_outcome(self):
        body, _ = validate_request(StealAttemptInput, {
            "fromBase": "first", "outcomes": {"first": "maybe"},
        })
        assert body is None


class TestMatchupInput:
    def test_requires_one_id(self):
        body, error = validate_request(MatchupInput, {})
        assert body is None
        assert "batterId" in error

    def test_pitcher_only(self):
        body, error = validate_request(MatchupInput, {"pitcherId": "o2"})
        assert error is None
        assert body.batter_id is None

    def test_blank_id(self):
        body, error = validate_request(MatchupInput, {"batterId": " "})
        assert body is None
        assert "non-empty" in error


class TestResponses:
    def test_success(self):
        assert success_response("ball", {"x": 1}) == {"status": "ok", "action": "ball", "data": {"x": 1}}

    def test_error_with_extra(self):
        resp = error_response("get_game", GAME_NOT_FOUND, "missing", data={"gameId": "g"})
        assert resp["status"] == "error"
        assert resp["error_code"] == "GAME_NOT_FOUND"
        assert resp["message"] == "missing"
        assert resp["data"] == {"gameId": "g"}
