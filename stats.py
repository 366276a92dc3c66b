# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Statistics and play-log aggregation.

Folds resolved at-bats into per-player counting stats and per-inning run
totals, and provides read-only views over a snapshot: the grouped play log,
the line score and the box score.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from models import (
    AtBatEntry,
    AtBatResult,
    GameScoreDetails,
    InningScore,
    LineupPlayer,
    Lineups,
    PlayerGameStats,
    Score,
)

# Plate appearances that do not count as an official at-bat.
NON_AT_BAT_RESULTS = frozenset({
    AtBatResult.WALK, AtBatResult.HIT_BY_PITCH, AtBatResult.ERROR,
})

_HIT_COUNTERS: dict[AtBatResult, str] = {
    AtBatResult.SINGLE: "singles",
    AtBatResult.DOUBLE: "doubles",
    AtBatResult.TRIPLE: "triples",
    AtBatResult.HOMERUN: "homeruns",
}


# ---------------------------------------------------------------------------
# Folding
# ---------------------------------------------------------------------------

def apply_at_bat(line: PlayerGameStats, entry: AtBatEntry) -> PlayerGameStats:
    """Return *line* with *entry* counted. *line* is left untouched."""
    result = entry.result
    update = {
        "at_bats": line.at_bats + (0 if result in NON_AT_BAT_RESULTS else 1),
        "walks": line.walks + (1 if result in (AtBatResult.WALK, AtBatResult.HIT_BY_PITCH) else 0),
        "strikeouts": line.strikeouts + (1 if result == AtBatResult.STRIKEOUT else 0),
        "rbi": line.rbi + entry.rbi,
        "errors": line.errors + entry.errors,
        # Only the batter's own trip around the bases is credited here.
        "runs": line.runs + (1 if result == AtBatResult.HOMERUN else 0),
    }
    counter = _HIT_COUNTERS.get(result)
    if counter:
        update["hits"] = line.hits + 1
        update[counter] = getattr(line, counter) + 1
    return line.model_copy(update=update)


def credit_runs(
    inning_scores: list[InningScore],
    inning: int,
    is_top_inning: bool,
    runs: int,
) -> list[InningScore]:
    """Add *runs* to the batting side of *inning*, padding missing rows."""
    scores = [s.model_copy() for s in inning_scores]
    if runs <= 0:
        return scores
    while len(scores) < inning:
        scores.append(InningScore())
    row = scores[inning - 1]
    if is_top_inning:
        scores[inning - 1] = row.model_copy(update={"team": row.team + runs})
    else:
        scores[inning - 1] = row.model_copy(update={"opponent": row.opponent + runs})
    return scores


def append_entry(details: GameScoreDetails, entry: AtBatEntry) -> GameScoreDetails:
    """Append *entry* to the play log without touching any stats."""
    return details.model_copy(update={"at_bats": [*details.at_bats, entry]})


def fold_at_bat(
    details: GameScoreDetails,
    entry: AtBatEntry,
    player: LineupPlayer | None = None,
) -> GameScoreDetails:
    """Append a plate appearance to the log and count it.

    The batter's stat line is created on first use, named from *player*
    when given. ``entry.rbi`` is credited to the inning row.
    """
    lines = list(details.player_stats)
    for i, line in enumerate(lines):
        if line.player_id == entry.player_id:
            lines[i] = apply_at_bat(line, entry)
            break
    else:
        fresh = PlayerGameStats(
            player_id=entry.player_id,
            player_name=player.player_name if player else entry.player_name,
            position=player.position if player else "",
        )
        lines.append(apply_at_bat(fresh, entry))

    return details.model_copy(update={
        "at_bats": [*details.at_bats, entry],
        "player_stats": lines,
        "inning_scores": credit_runs(
            details.inning_scores, entry.inning, entry.is_top_inning, entry.rbi
        ),
    })


# ---------------------------------------------------------------------------
# Log projection
# ---------------------------------------------------------------------------

@dataclass
class LogGroup:
    inning: int
    is_top_inning: bool
    entries: list[AtBatEntry] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{'Top' if self.is_top_inning else 'Bottom'} {self.inning}"

    def to_dict(self) -> dict:
        return {
            "inning": self.inning,
            "isTopInning": self.is_top_inning,
            "label": self.label,
            "entries": [e.to_wire() for e in self.entries],
        }


def log_projection(entries: Iterable[AtBatEntry]) -> list[LogGroup]:
    """Group the play log by half-inning, newest first.

    Innings are ordered descending with the bottom half ahead of the top
    half; entries inside a group are most-recent-first.
    """
    groups: dict[tuple[int, bool], LogGroup] = {}
    for entry in entries:
        key = (entry.inning, entry.is_top_inning)
        if key not in groups:
            groups[key] = LogGroup(inning=entry.inning, is_top_inning=entry.is_top_inning)
        groups[key].entries.append(entry)

    ordered = sorted(groups.values(), key=lambda g: (g.inning, not g.is_top_inning), reverse=True)
    for g in ordered:
        g.entries.reverse()
    return ordered


# ---------------------------------------------------------------------------
# Scores and box score
# ---------------------------------------------------------------------------

def total_score(inning_scores: Iterable[InningScore]) -> Score:
    team = 0
    opponent = 0
    for row in inning_scores:
        team += row.team
        opponent += row.opponent
    return Score(team=team, opponent=opponent)


def game_result(details: GameScoreDetails) -> str:
    """``"win"``, ``"loss"`` or ``"tie"`` from the team's point of view."""
    score = total_score(details.inning_scores)
    if score.team > score.opponent:
        return "win"
    if score.team < score.opponent:
        return "loss"
    return "tie"


def batting_average(hits: int, at_bats: int) -> str:
    """Format like a box score: ``.333``, ``1.000``, ``.000`` with no at-bats."""
    if at_bats == 0:
        return ".000"
    return f"{hits / at_bats:.3f}".lstrip("0")


_TOTAL_FIELDS = ("at_bats", "hits", "runs", "rbi", "walks", "strikeouts", "errors")


def team_totals(lines: Iterable[PlayerGameStats]) -> dict:
    totals = {name: 0 for name in _TOTAL_FIELDS}
    for line in lines:
        for name in _TOTAL_FIELDS:
            totals[name] += getattr(line, name)
    totals["avg"] = batting_average(totals["hits"], totals["at_bats"])
    return totals


def box_score(details: GameScoreDetails, lineups: Lineups) -> dict:
    """Split stat lines by side and add totals and the line score."""
    def side_box(lineup: list[LineupPlayer]) -> dict:
        ids = {p.player_id for p in lineup}
        lines = [s for s in details.player_stats if s.player_id in ids]
        return {
            "batting": [
                {**line.to_wire(), "avg": batting_average(line.hits, line.at_bats)}
                for line in lines
            ],
            "totals": team_totals(lines),
        }

    score = total_score(details.inning_scores)
    return {
        "team": side_box(lineups.team),
        "opponent": side_box(lineups.opponent),
        "inning_scores": [row.to_wire() for row in details.inning_scores],
        "final_score": {"team": score.team, "opponent": score.opponent},
        "result": game_result(details),
    }


def format_box_score(
    details: GameScoreDetails,
    lineups: Lineups,
    team_name: str = "Team",
    opponent_name: str = "Opponent",
) -> str:
    """Plain-text line score and batting lines."""
    box = box_score(details, lineups)
    lines = []

    innings = max(len(details.inning_scores), details.game_state.current_inning)
    rows = list(details.inning_scores) + [InningScore()] * (innings - len(details.inning_scores))

    header = f"{'Team':<20}"
    for i in range(1, innings + 1):
        header += f" {i:>3}"
    header += "  |   R"
    lines.append(header)
    lines.append("-" * len(header))
    for name, side in ((team_name, "team"), (opponent_name, "opponent")):
        row = f"{name:<20}"
        for inning in rows:
            row += f" {getattr(inning, side):>3}"
        row += f"  | {box['final_score'][side]:>3}"
        lines.append(row)

    for name, side in ((team_name, "team"), (opponent_name, "opponent")):
        lines.append(f"\n{name} Batting:")
        lines.append(f"  {'Name':<20} {'Pos':<4} {'AB':>3} {'R':>3} {'H':>3} {'RBI':>4} {'BB':>3} {'SO':>3} {'AVG':>5}")
        for b in box[side]["batting"]:
            lines.append(
                f"  {b['playerName']:<20} {b['position'] or '-':<4} {b['atBats']:>3} {b['runs']:>3} "
                f"{b['hits']:>3} {b['rbi']:>4} {b['walks']:>3} {b['strikeouts']:>3} {b['avg']:>5}"
            )
        t = box[side]["totals"]
        lines.append(
            f"  {'Totals':<20} {'':<4} {t['at_bats']:>3} {t['runs']:>3} "
            f"{t['hits']:>3} {t['rbi']:>4} {t['walks']:>3} {t['strikeouts']:>3} {t['avg']:>5}"
        )

    return "\n".join(lines)
