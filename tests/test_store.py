# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest>=7.0"]
# ///
"""Tests for the file-based game store.

Validates:
  1. Documents are JSON files named after the game id, in camelCase wire form
  2. Saved snapshots load back equal, missing games load as None
  3. Corrupt documents and write failures raise StoreError
  4. Path-like game ids are rejected
  5. The default directory comes from SCORING_DATA_DIR
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from models import AtBatEntry, AtBatResult, Bases, GameScoreDetails, GameState, LineupPlayer, Lineups
from store import GameDocument, GameStore, InvalidGameIdError, StoreError


@pytest.fixture
def store(tmp_path):
    return GameStore(root_dir=tmp_path / "games")


@pytest.fixture
def details():
    return GameScoreDetails(
        game_state=GameState(outs=1, bases=Bases(second="t1"), current_batter_id="t2"),
        at_bats=[AtBatEntry(player_id="t1", inning=1, is_top_inning=True, result=AtBatResult.DOUBLE)],
    )


@pytest.fixture
def lineups():
    return Lineups(team=[LineupPlayer(player_id="t1", player_name="Ava")])


class TestSaveAndLoad:
    def test_save_writes_json_file(self, store, details, lineups):
        path = store.save("g1", details, lineups)
        assert path == store.root_dir / "g1.json"
        payload = json.loads(path.read_text())
        assert payload["gameId"] == "g1"
        assert payload["scoreDetails"]["gameState"]["bases"]["second"] == "t1"
        assert payload["lineup"]["team"][0]["playerName"] == "Ava"
        assert "updatedAt" in payload

    def test_load_round_trip(self, store, details, lineups):
        store.save("g1", details, lineups)
        doc = store.load("g1")
        assert isinstance(doc, GameDocument)
        assert doc.score_details == details
        assert doc.lineup == lineups

    def test_load_missing(self, store):
        assert store.load("nope") is None

    def test_last_writer_wins(self, store, details):
        store.save("g1", details)
        later = details.model_copy(update={"at_bats": []})
        store.save("g1", later)
        assert store.load("g1").score_details.at_bats == []

    def test_no_temp_file_left(self, store, details):
        store.save("g1", details)
        assert [p.name for p in store.root_dir.iterdir()] == ["g1.json"]


class TestFailures:
    def test_corrupt_file(self, store):
        store.root_dir.mkdir(parents=True)
        (store.root_dir / "bad.json").write_text("{not json")
        with pytest.raises(StoreError) as exc_info:
            store.load("bad")
        assert exc_info.value.game_id == "bad"

    def test_invalid_document(self, store):
        store.root_dir.mkdir(parents=True)
        (store.root_dir / "bad.json").write_text(json.dumps({"lineup": {}}))
        with pytest.raises(StoreError):
            store.load("bad")

    def test_write_failure(self, tmp_path, details):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        store = GameStore(root_dir=blocker / "games")
        with pytest.raises(StoreError):
            store.save("g1", details)

    @pytest.mark.parametrize("game_id", ["", "  ", "../escape", "a/b", "a\\b"])
    def test_invalid_game_ids(self, store, details, game_id):
        with pytest.raises(InvalidGameIdError):
            store.save(game_id, details)
        with pytest.raises(InvalidGameIdError):
            store.load(game_id)


class TestManagement:
    def test_delete(self, store, details):
        store.save("g1", details)
        assert store.delete("g1") is True
        assert store.delete("g1") is False
        assert store.load("g1") is None

    def test_list_games(self, store, details):
        assert store.list_games() == []
        store.save("b", details)
        store.save("a", details)
        assert store.list_games() == ["a", "b"]

    def test_default_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCORING_DATA_DIR", str(tmp_path / "env_games"))
        assert GameStore().root_dir == tmp_path / "env_games"
