# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""File-based persistence for game documents.

Stands in for the application's document store: one JSON file per game,
keyed by game id, holding the lineups and the full ``GameScoreDetails``
snapshot in its camelCase wire form::

    {"gameId": "...", "lineup": {...}, "scoreDetails": {...}, "updatedAt": "..."}

Writes go to a temporary file that is renamed into place, so a reader never
sees a half-written document. There is no version check: the last writer
wins.

Usage::

    from store import GameStore

    store = GameStore()                    # uses SCORING_DATA_DIR or data/games/
    store = GameStore("/tmp/games")        # custom directory

    store.save("g1", details, lineups)
    doc = store.load("g1")                 # GameDocument or None
    store.delete("g1")
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import Field, ValidationError

from models import GameScoreDetails, Lineups, ScoreModel, utc_now

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class StoreError(Exception):
    """Raised when a game document cannot be read or written."""

    def __init__(self, message: str, game_id: str | None = None):
        self.game_id = game_id
        super().__init__(message)


class InvalidGameIdError(StoreError):
    """Raised for game ids that cannot be used as a file name."""


def validate_game_id(game_id: str) -> str:
    if not isinstance(game_id, str) or not game_id.strip():
        raise InvalidGameIdError("Game id must be a non-empty string", game_id)
    if "/" in game_id or "\\" in game_id or ".." in game_id:
        raise InvalidGameIdError(f"Invalid game id: {game_id!r}", game_id)
    return game_id


# ---------------------------------------------------------------------------
# Document model
# ---------------------------------------------------------------------------

class GameDocument(ScoreModel):
    game_id: str
    lineup: Lineups = Field(default_factory=Lineups)
    score_details: GameScoreDetails = Field(default_factory=GameScoreDetails.new)
    updated_at: datetime = Field(default_factory=utc_now)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class GameStore:
    """JSON game documents under *root_dir*, created on first write.

    Args:
        root_dir: Directory holding ``<game_id>.json`` files. Defaults to
            :func:`config.get_data_dir`.
    """

    def __init__(self, root_dir: str | Path | None = None) -> None:
        if root_dir is None:
            from config import get_data_dir
            root_dir = get_data_dir()
        self._root = Path(root_dir)

    @property
    def root_dir(self) -> Path:
        return self._root

    def save(
        self,
        game_id: str,
        details: GameScoreDetails,
        lineups: Lineups | None = None,
    ) -> Path:
        """Write the snapshot (and lineups) for *game_id*.

        Raises:
            StoreError: if the document cannot be written.
        """
        path = self._path_for(game_id)
        doc = GameDocument(
            game_id=game_id,
            lineup=lineups or Lineups(),
            score_details=details,
        )
        tmp_path = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump(doc.to_wire(), f, separators=(",", ":"))
            tmp_path.replace(path)  # atomic rename
        except OSError as exc:
            raise StoreError(f"Failed to save game {game_id}: {exc}", game_id) from exc
        logger.debug("Saved game %s (%d log entries)", game_id, len(details.at_bats))
        return path

    def load(self, game_id: str) -> GameDocument | None:
        """Return the stored document, or ``None`` if there is none.

        Raises:
            StoreError: if the file exists but cannot be read or parsed.
        """
        path = self._path_for(game_id)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                payload = json.load(f)
            return GameDocument.model_validate(payload)
        except (json.JSONDecodeError, OSError, ValidationError) as exc:
            raise StoreError(f"Failed to load game {game_id}: {exc}", game_id) from exc

    def delete(self, game_id: str) -> bool:
        """Remove a stored game. Returns ``False`` if it did not exist."""
        path = self._path_for(game_id)
        if path.exists():
            path.unlink()
            return True
        return False

    def list_games(self) -> list[str]:
        """Ids of all stored games, sorted."""
        if not self._root.exists():
            return []
        return sorted(p.stem for p in self._root.glob("*.json"))

    def _path_for(self, game_id: str) -> Path:
        return self._root / f"{validate_game_id(game_id)}.json"
