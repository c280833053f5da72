"""Top-line digest for the dashboard header."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import MatchRecord
from domain.stats.aggregation import tally
from domain.stats.maps import map_win_loss
from domain.stats.trends import current_streak


@dataclass(frozen=True)
class SummaryStats:
    total_matches: int
    wins: int
    losses: int
    draws: int
    winrate: int
    unique_maps: int
    best_map: str
    best_map_winrate: int
    current_streak: int
    streak_type: str


def summary_stats(matches: Sequence[MatchRecord]) -> SummaryStats:
    counts = tally(matches)
    insight = map_win_loss(matches).insight
    streak, streak_type = current_streak(matches)
    return SummaryStats(
        total_matches=counts.total,
        wins=counts.wins,
        losses=counts.losses,
        draws=counts.draws,
        winrate=counts.winrate(),
        unique_maps=len({match.map for match in matches}),
        best_map=insight.best_map,
        best_map_winrate=insight.best_winrate,
        current_streak=streak,
        streak_type=streak_type,
    )


__all__ = ["SummaryStats", "summary_stats"]
