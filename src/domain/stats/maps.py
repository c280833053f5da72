"""Map-level analyzers: win/loss, tiers and volatility, familiarity, learning curve,
rotation timeline and the repeat-map effect."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from domain.catalog import Catalog, MapEntry
from domain.common import MatchRecord, MatchResult, MapType
from domain.stats.aggregation import (
    OutcomeTally,
    group_by,
    percent,
    percent_one_decimal,
    round_half_up,
    round_one_decimal,
    tally,
    tally_by,
)
from domain.stats.estimators import variety_score, volatility_score
from domain.stats.temporal import (
    chronological,
    group_by_calendar_day,
    local_date,
    local_datetime,
    median,
)

MAP_DETAILED_MIN_GAMES = 5
MAP_LEARNING_MIN_GAMES = 6
REPEAT_MAP_MIN_INSTANCES = 5
FAMILIARITY_LAST_RESULTS = 5
TIMELINE_HISTORY = 20


def _map_types(matches: Sequence[MatchRecord]) -> dict[str, MapType]:
    types: dict[str, MapType] = {}
    for match in matches:
        types.setdefault(match.map, match.map_type)
    return types


@dataclass(frozen=True)
class MapWinLossEntry:
    name: str
    wins: int
    losses: int


@dataclass(frozen=True)
class MapWinLossInsight:
    best_map: str
    best_winrate: int
    worst_map: str
    worst_winrate: int


@dataclass(frozen=True)
class MapWinLossResult:
    data: tuple[MapWinLossEntry, ...]
    insight: MapWinLossInsight


def map_win_loss(matches: Sequence[MatchRecord]) -> MapWinLossResult:
    """Wins and losses per map; draws are left out of both the counts and the winrate."""
    buckets = tally_by(matches, lambda match: match.map)
    data = sorted(
        (MapWinLossEntry(name=name, wins=bucket.wins, losses=bucket.losses) for name, bucket in buckets.items()),
        key=lambda entry: entry.wins + entry.losses,
        reverse=True,
    )

    best_map, best_winrate = "", -1.0
    worst_map, worst_winrate = "", 101.0
    for entry in data:
        decided = entry.wins + entry.losses
        if decided == 0:
            continue
        winrate = entry.wins / decided * 100
        if winrate > best_winrate:
            best_map, best_winrate = entry.name, winrate
        if winrate < worst_winrate:
            worst_map, worst_winrate = entry.name, winrate

    return MapWinLossResult(
        data=tuple(data),
        insight=MapWinLossInsight(
            best_map=best_map,
            best_winrate=round_half_up(best_winrate) if best_map else 0,
            worst_map=worst_map,
            worst_winrate=round_half_up(worst_winrate) if worst_map else 0,
        ),
    )


def map_tier(winrate: float, total: int) -> str:
    """S..D tier; small samples are capped to A..C."""
    if total < 3:
        return "C"
    if total < MAP_DETAILED_MIN_GAMES:
        if winrate >= 65:
            return "A"
        if winrate >= 45:
            return "B"
        return "C"
    if winrate >= 65:
        return "S"
    if winrate >= 55:
        return "A"
    if winrate >= 45:
        return "B"
    if winrate >= 35:
        return "C"
    return "D"


def confidence_stars(total: int) -> int:
    if total < 3:
        return 1
    if total < 5:
        return 2
    if total < 10:
        return 3
    if total < 20:
        return 4
    return 5


@dataclass(frozen=True)
class MapDetailedEntry:
    name: str
    map_type: MapType
    wins: int
    losses: int
    draws: int
    total: int
    winrate: int
    deviation: int
    confidence_stars: int
    volatility: int
    tier: str
    has_enough_data: bool


@dataclass(frozen=True)
class MapDetailedInsight:
    best_map: str
    best_winrate: int
    worst_map: str
    worst_winrate: int
    most_volatile: str
    most_volatile_score: int


@dataclass(frozen=True)
class MapDetailedResult:
    data: tuple[MapDetailedEntry, ...]
    overall_winrate: int
    insight: MapDetailedInsight


def map_detailed_stats(matches: Sequence[MatchRecord]) -> MapDetailedResult:
    overall_winrate = tally(matches).winrate()
    types = _map_types(matches)
    results_by_map = group_by(chronological(matches), lambda match: match.map)

    entries: list[MapDetailedEntry] = []
    for name, map_matches in results_by_map.items():
        bucket = tally(map_matches)
        winrate = bucket.winrate()
        entries.append(
            MapDetailedEntry(
                name=name,
                map_type=types[name],
                wins=bucket.wins,
                losses=bucket.losses,
                draws=bucket.draws,
                total=bucket.total,
                winrate=winrate,
                deviation=winrate - overall_winrate,
                confidence_stars=confidence_stars(bucket.total),
                volatility=volatility_score([match.result for match in map_matches]),
                tier=map_tier(winrate, bucket.total),
                has_enough_data=bucket.total >= MAP_DETAILED_MIN_GAMES,
            )
        )
    entries.sort(key=lambda entry: (-entry.winrate, -entry.total))

    ranked = [entry for entry in entries if entry.has_enough_data] or entries
    best = ranked[0] if ranked else None
    worst = ranked[-1] if ranked else None

    most_volatile: MapDetailedEntry | None = None
    for entry in entries:
        if not entry.has_enough_data:
            continue
        if most_volatile is None or entry.volatility > most_volatile.volatility:
            most_volatile = entry

    return MapDetailedResult(
        data=tuple(entries),
        overall_winrate=overall_winrate,
        insight=MapDetailedInsight(
            best_map=best.name if best else "",
            best_winrate=best.winrate if best else 0,
            worst_map=worst.name if worst else "",
            worst_winrate=worst.winrate if worst else 0,
            most_volatile=most_volatile.name if most_volatile else "",
            most_volatile_score=most_volatile.volatility if most_volatile else 0,
        ),
    )


@dataclass(frozen=True)
class MapFamiliarityEntry:
    name: str
    map_type: MapType
    games_played: int
    pct_of_total: float
    last_results: tuple[MatchResult, ...]


@dataclass(frozen=True)
class MapFamiliarityResult:
    data: tuple[MapFamiliarityEntry, ...]
    variety_score: int
    avoided_maps: tuple[MapEntry, ...]
    total_maps_played: int
    total_maps_available: int


def map_familiarity(matches: Sequence[MatchRecord], catalog: Catalog) -> MapFamiliarityResult:
    """How play time spreads over the full map catalog."""
    total = len(matches)
    types = _map_types(matches)
    by_map = group_by(chronological(matches), lambda match: match.map)

    data = sorted(
        (
            MapFamiliarityEntry(
                name=name,
                map_type=types[name],
                games_played=len(map_matches),
                pct_of_total=percent_one_decimal(len(map_matches), total),
                last_results=tuple(match.result for match in map_matches[-FAMILIARITY_LAST_RESULTS:]),
            )
            for name, map_matches in by_map.items()
        ),
        key=lambda entry: entry.games_played,
        reverse=True,
    )
    avoided = tuple(entry for entry in catalog.maps if entry.name not in by_map)

    return MapFamiliarityResult(
        data=tuple(data),
        variety_score=variety_score(
            (len(map_matches) for map_matches in by_map.values()),
            len(catalog.maps),
        ),
        avoided_maps=avoided,
        total_maps_played=len(by_map),
        total_maps_available=len(catalog.maps),
    )


@dataclass(frozen=True)
class MapLearningEntry:
    map: str
    map_type: MapType
    total_games: int
    early_games: int
    late_games: int
    early_winrate: int
    late_winrate: int
    improvement: int
    has_enough_data: bool


@dataclass(frozen=True)
class MapLearningInsight:
    most_improved: str
    improvement_delta: int
    most_declined: str
    decline_delta: int


@dataclass(frozen=True)
class MapLearningResult:
    data: tuple[MapLearningEntry, ...]
    insight: MapLearningInsight


def map_learning_curve(matches: Sequence[MatchRecord]) -> MapLearningResult:
    """Compare the first and second half of each map's games."""
    types = _map_types(matches)
    entries: list[MapLearningEntry] = []
    for name, map_matches in group_by(chronological(matches), lambda match: match.map).items():
        midpoint = len(map_matches) // 2
        early = tally(map_matches[:midpoint])
        late = tally(map_matches[midpoint:])
        early_winrate = early.winrate()
        late_winrate = late.winrate()
        entries.append(
            MapLearningEntry(
                map=name,
                map_type=types[name],
                total_games=len(map_matches),
                early_games=early.total,
                late_games=late.total,
                early_winrate=early_winrate,
                late_winrate=late_winrate,
                improvement=late_winrate - early_winrate,
                has_enough_data=len(map_matches) >= MAP_LEARNING_MIN_GAMES,
            )
        )
    entries.sort(key=lambda entry: entry.improvement, reverse=True)

    qualified = [entry for entry in entries if entry.has_enough_data]
    improved = qualified[0] if qualified and qualified[0].improvement > 0 else None
    declined = qualified[-1] if qualified and qualified[-1].improvement < 0 else None

    return MapLearningResult(
        data=tuple(entries),
        insight=MapLearningInsight(
            most_improved=improved.map if improved else "",
            improvement_delta=improved.improvement if improved else 0,
            most_declined=declined.map if declined else "",
            decline_delta=declined.improvement if declined else 0,
        ),
    )


@dataclass(frozen=True)
class MapHistoryEntry:
    result: MatchResult
    played_at: datetime


@dataclass(frozen=True)
class MapTimelineEntry:
    map: str
    map_type: MapType
    history: tuple[MapHistoryEntry, ...]
    total_games: int
    last_played_days_ago: int
    rotation_gap_days: float | None


@dataclass(frozen=True)
class MapTimelineResult:
    maps: tuple[MapTimelineEntry, ...]


def map_timeline(
    matches: Sequence[MatchRecord],
    as_of: datetime | None = None,
) -> MapTimelineResult:
    """Recent results, recency and median rotation gap per map."""
    today = local_date(as_of) if as_of is not None else datetime.now().date()
    types = _map_types(matches)

    entries: list[MapTimelineEntry] = []
    for name, map_matches in group_by(chronological(matches), lambda match: match.map).items():
        gaps = [
            (current.played_at - previous.played_at).total_seconds() / 86_400.0
            for previous, current in zip(map_matches, map_matches[1:])
        ]
        median_gap = median(gaps)
        last_played = map_matches[-1].played_at
        entries.append(
            MapTimelineEntry(
                map=name,
                map_type=types[name],
                history=tuple(
                    MapHistoryEntry(result=match.result, played_at=match.played_at)
                    for match in map_matches[-TIMELINE_HISTORY:]
                ),
                total_games=len(map_matches),
                last_played_days_ago=max(0, (today - local_date(last_played)).days),
                rotation_gap_days=None if median_gap is None else round_one_decimal(median_gap),
            )
        )
    entries.sort(key=lambda entry: local_datetime(entry.history[-1].played_at), reverse=True)
    return MapTimelineResult(maps=tuple(entries))


@dataclass(frozen=True)
class RepeatMapResult:
    first_occurrence_winrate: int
    repeat_winrate: int
    first_occurrence_total: int
    repeat_total: int
    delta: int
    has_enough_data: bool
    insight: str


def repeat_map_effect(matches: Sequence[MatchRecord]) -> RepeatMapResult:
    """Winrate on a map's first appearance in a day versus later appearances that day."""
    first = OutcomeTally()
    repeat = OutcomeTally()
    for day_matches in group_by_calendar_day(matches).values():
        seen: set[str] = set()
        for match in day_matches:
            if match.map in seen:
                repeat.add(match.result)
            else:
                seen.add(match.map)
                first.add(match.result)

    first_winrate = percent(first.wins, first.total)
    repeat_winrate = percent(repeat.wins, repeat.total)
    delta = repeat_winrate - first_winrate
    has_enough_data = repeat.total >= REPEAT_MAP_MIN_INSTANCES

    if not has_enough_data:
        insight = (
            f"Only {repeat.total} repeat map instance{'s' if repeat.total != 1 else ''} "
            f"recorded; need {REPEAT_MAP_MIN_INSTANCES}+"
        )
    elif delta > 5:
        insight = f"You play better on repeat maps: +{delta}% when the map reappears in your session"
    elif delta < -5:
        insight = f"You underperform on repeat maps: {delta}% when the map reappears"
    else:
        insight = "Repeat maps have little impact on your performance"

    return RepeatMapResult(
        first_occurrence_winrate=first_winrate,
        repeat_winrate=repeat_winrate,
        first_occurrence_total=first.total,
        repeat_total=repeat.total,
        delta=delta,
        has_enough_data=has_enough_data,
        insight=insight,
    )


__all__ = [
    "MAP_DETAILED_MIN_GAMES",
    "MAP_LEARNING_MIN_GAMES",
    "REPEAT_MAP_MIN_INSTANCES",
    "MapDetailedEntry",
    "MapDetailedInsight",
    "MapDetailedResult",
    "MapFamiliarityEntry",
    "MapFamiliarityResult",
    "MapHistoryEntry",
    "MapLearningEntry",
    "MapLearningInsight",
    "MapLearningResult",
    "MapTimelineEntry",
    "MapTimelineResult",
    "MapWinLossEntry",
    "MapWinLossInsight",
    "MapWinLossResult",
    "RepeatMapResult",
    "confidence_stars",
    "map_detailed_stats",
    "map_familiarity",
    "map_learning_curve",
    "map_tier",
    "map_timeline",
    "map_win_loss",
]
