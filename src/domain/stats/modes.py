"""Game mode (map type) analyzers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import MatchRecord, MapType
from domain.stats.aggregation import percent, tally_by


@dataclass(frozen=True)
class GameModeDistEntry:
    mode: MapType
    count: int


@dataclass(frozen=True)
class GameModeDistInsight:
    dominant_mode: str
    dominant_pct: int


@dataclass(frozen=True)
class GameModeDistResult:
    data: tuple[GameModeDistEntry, ...]
    insight: GameModeDistInsight


def game_mode_distribution(matches: Sequence[MatchRecord]) -> GameModeDistResult:
    buckets = tally_by(matches, lambda match: match.map_type)
    data = sorted(
        (GameModeDistEntry(mode=mode, count=bucket.total) for mode, bucket in buckets.items()),
        key=lambda entry: entry.count,
        reverse=True,
    )
    dominant = data[0] if data else None
    return GameModeDistResult(
        data=tuple(data),
        insight=GameModeDistInsight(
            dominant_mode=dominant.mode.value if dominant else "",
            dominant_pct=percent(dominant.count, len(matches)) if dominant else 0,
        ),
    )


@dataclass(frozen=True)
class GameModeWinrateEntry:
    mode: MapType
    winrate: int
    wins: int
    total: int


@dataclass(frozen=True)
class GameModeWinrateInsight:
    best_mode: str
    best_winrate: int
    worst_mode: str
    worst_winrate: int


@dataclass(frozen=True)
class GameModeWinrateResult:
    data: tuple[GameModeWinrateEntry, ...]
    insight: GameModeWinrateInsight


def game_mode_winrates(matches: Sequence[MatchRecord]) -> GameModeWinrateResult:
    buckets = tally_by(matches, lambda match: match.map_type)
    data = sorted(
        (
            GameModeWinrateEntry(mode=mode, winrate=bucket.winrate(), wins=bucket.wins, total=bucket.total)
            for mode, bucket in buckets.items()
        ),
        key=lambda entry: entry.winrate,
        reverse=True,
    )
    best = data[0] if data else None
    worst = data[-1] if data else None
    return GameModeWinrateResult(
        data=tuple(data),
        insight=GameModeWinrateInsight(
            best_mode=best.mode.value if best else "",
            best_winrate=best.winrate if best else 0,
            worst_mode=worst.mode.value if worst else "",
            worst_winrate=worst.winrate if worst else 0,
        ),
    )


__all__ = [
    "GameModeDistEntry",
    "GameModeDistInsight",
    "GameModeDistResult",
    "GameModeWinrateEntry",
    "GameModeWinrateInsight",
    "GameModeWinrateResult",
    "game_mode_distribution",
    "game_mode_winrates",
]
