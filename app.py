# /// script
# requires-python = ">=3.12"
# dependencies = ["flask>=3.0", "pydantic>=2.0"]
# ///
"""JSON dispatch API for live game scoring.

Exposes the scoring engine's operations over HTTP: count events, at-bat
results, steal attempts, manual matchup selection, and the log and box
score views. Each mutating call is saved to the game store; if the save
fails the response is a 503 that still carries the new in-memory snapshot,
which stays authoritative for the following calls.

Usage:
    uv run app.py
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from flask import Flask, jsonify, request

from config import configure_logging, get_port
from responses import (
    GAME_EXISTS,
    GAME_NOT_FOUND,
    INVALID_GAME_ID,
    INVALID_INPUT,
    PERSISTENCE_FAILED,
    error_response,
    success_response,
)
from session import ScoringSession
from store import GameStore, InvalidGameIdError, StoreError
from validation import (
    AtBatInput,
    CreateGameInput,
    MatchupInput,
    StealAttemptInput,
    validate_request,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = Flask(__name__)

# Open sessions for this process, keyed by game id
SESSIONS: dict[str, ScoringSession] = {}

_store: GameStore | None = None


def get_store() -> GameStore:
    global _store
    if _store is None:
        _store = GameStore()
    return _store


def set_store(store: GameStore) -> None:
    """Swap the game store (useful for testing). Drops open sessions."""
    global _store
    _store = store
    SESSIONS.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _snapshot(session: ScoringSession) -> dict:
    engine = session.engine
    score = engine.score()
    return {
        "gameId": session.game_id,
        "scoreDetails": engine.details.to_wire(),
        "score": {"team": score.team, "opponent": score.opponent},
        "situation": engine.state.situation_display(),
    }


def _load_session(game_id: str) -> ScoringSession | None:
    """Return the open session for *game_id*, resuming it from the store."""
    session = SESSIONS.get(game_id)
    if session is None:
        session = ScoringSession.resume(game_id, get_store())
        if session is not None:
            SESSIONS[game_id] = session
    return session


def _log_view(session: ScoringSession) -> dict:
    return {
        "gameId": session.game_id,
        "groups": [group.to_dict() for group in session.engine.log()],
    }


def _box_score_view(session: ScoringSession) -> dict:
    return {"gameId": session.game_id, **session.engine.box_score()}


def _noop(session: ScoringSession) -> None:
    return None


def _with_session(
    action: str,
    game_id: str,
    handler: Callable[[ScoringSession], object],
    view: Callable[[ScoringSession], dict] = _snapshot,
):
    """Run *handler* against the game's session and answer with *view*."""
    try:
        session = _load_session(game_id)
    except InvalidGameIdError as e:
        return jsonify(error_response(action, INVALID_GAME_ID, str(e))), 400
    except StoreError as e:
        logger.error("Failed to load game %s: %s", game_id, e)
        return jsonify(error_response(action, PERSISTENCE_FAILED, str(e))), 503
    if session is None:
        return jsonify(error_response(action, GAME_NOT_FOUND, f"Game {game_id} not found")), 404

    try:
        handler(session)
    except StoreError as e:
        return jsonify(error_response(
            action, PERSISTENCE_FAILED, str(e), data=_snapshot(session),
        )), 503
    return jsonify(success_response(action, view(session)))


def _invalid(action: str, message: str):
    return jsonify(error_response(action, INVALID_INPUT, message)), 400


# ---------------------------------------------------------------------------
# Game routes
# ---------------------------------------------------------------------------

@app.route("/api/games", methods=["POST"])
def api_create_game():
    body, error = validate_request(CreateGameInput, request.get_json(silent=True))
    if error:
        return _invalid("create_game", error)

    game_id = body.game_id or uuid.uuid4().hex[:12]
    store = get_store()
    try:
        if game_id in SESSIONS or ScoringSession.resume(game_id, store) is not None:
            return jsonify(error_response(
                "create_game", GAME_EXISTS, f"Game {game_id} already exists",
            )), 409
    except StoreError as e:
        return jsonify(error_response("create_game", PERSISTENCE_FAILED, str(e))), 503

    session = ScoringSession.open(game_id, store, body.lineup)
    SESSIONS[game_id] = session
    try:
        session.flush()
    except StoreError as e:
        return jsonify(error_response(
            "create_game", PERSISTENCE_FAILED, str(e), data=_snapshot(session),
        )), 503
    return jsonify(success_response("create_game", _snapshot(session))), 201


@app.route("/api/games")
def api_list_games():
    return jsonify(success_response("list_games", {"games": get_store().list_games()}))


@app.route("/api/games/<game_id>")
def api_get_game(game_id: str):
    return _with_session("get_game", game_id, _noop)


# ---------------------------------------------------------------------------
# Count events
# ---------------------------------------------------------------------------

@app.route("/api/games/<game_id>/ball", methods=["POST"])
def api_ball(game_id: str):
    return _with_session("ball", game_id, lambda s: s.record_ball())


@app.route("/api/games/<game_id>/strike", methods=["POST"])
def api_strike(game_id: str):
    return _with_session("strike", game_id, lambda s: s.record_strike())


@app.route("/api/games/<game_id>/foul", methods=["POST"])
def api_foul(game_id: str):
    return _with_session("foul", game_id, lambda s: s.record_foul())


@app.route("/api/games/<game_id>/out", methods=["POST"])
def api_out(game_id: str):
    return _with_session("out", game_id, lambda s: s.record_out())


# ---------------------------------------------------------------------------
# Plays
# ---------------------------------------------------------------------------

@app.route("/api/games/<game_id>/at-bat", methods=["POST"])
def api_at_bat(game_id: str):
    body, error = validate_request(AtBatInput, request.get_json(silent=True))
    if error:
        return _invalid("at_bat", error)
    return _with_session(
        "at_bat", game_id,
        lambda s: s.resolve_at_bat(body.result, body.batter_id, body.pitcher_id),
    )


@app.route("/api/games/<game_id>/steal", methods=["POST"])
def api_steal(game_id: str):
    body, error = validate_request(StealAttemptInput, request.get_json(silent=True))
    if error:
        return _invalid("steal", error)
    return _with_session(
        "steal", game_id,
        lambda s: s.record_steal_attempt(body.from_base, body.outcomes),
    )


@app.route("/api/games/<game_id>/matchup", methods=["POST"])
def api_matchup(game_id: str):
    body, error = validate_request(MatchupInput, request.get_json(silent=True))
    if error:
        return _invalid("matchup", error)

    def apply(session: ScoringSession) -> None:
        if body.batter_id:
            session.engine.select_batter(body.batter_id)
        if body.pitcher_id:
            session.engine.select_pitcher(body.pitcher_id)
        session.flush()

    return _with_session("matchup", game_id, apply)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

@app.route("/api/games/<game_id>/log")
def api_log(game_id: str):
    return _with_session("log", game_id, _noop, view=_log_view)


@app.route("/api/games/<game_id>/box-score")
def api_box_score(game_id: str):
    return _with_session("box_score", game_id, _noop, view=_box_score_view)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    configure_logging()
    app.run(debug=True, host="0.0.0.0", port=get_port(), threaded=True)
