"""Catalog-bound facade over the analyzers and JSON payload conversion."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from domain.catalog import Catalog
from domain.common import MatchRecord, MapType
from domain.stats import groups, heroes, maps, modes, roles, summary, trends
from domain.stats.role_filter import RoleFilter, filter_matches_by_role


@dataclass(frozen=True)
class StatsReport:
    """Every analyzer's output for one match list."""

    role_filter: str
    total_matches: int
    summary: summary.SummaryStats
    map_win_loss: maps.MapWinLossResult
    game_mode_distribution: modes.GameModeDistResult
    game_mode_winrates: modes.GameModeWinrateResult
    most_played_heroes: heroes.MostPlayedHeroResult
    hero_winrates: heroes.HeroWinrateResult
    rolling_winrate: trends.RollingWinrateResult
    activity_heatmap: trends.ActivityHeatmapResult
    streaks: trends.StreakData
    recent_form: trends.RecentFormData
    group_sizes: groups.GroupSizeResult
    role_stats: roles.RoleStatsResult
    one_trick: heroes.OneTrickResult
    hero_pool: heroes.HeroPoolDiversityResult
    hero_swap: heroes.HeroSwapResult
    map_detailed: maps.MapDetailedResult
    hero_map_synergy: heroes.HeroMapSynergyResult
    map_learning_curve: maps.MapLearningResult
    map_familiarity: maps.MapFamiliarityResult
    repeat_map: maps.RepeatMapResult
    map_timeline: maps.MapTimelineResult
    sessions: trends.SessionAnalysisResult
    day_of_week: trends.DayOfWeekResult


class MatchStatsEngine:
    """Runs analyzers against an injected catalog.

    Analyzers that do not need the catalog are plain module functions; the
    engine exposes them too so callers can hold a single object.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    filter_by_role = staticmethod(filter_matches_by_role)
    summary = staticmethod(summary.summary_stats)
    map_win_loss = staticmethod(maps.map_win_loss)
    map_detailed = staticmethod(maps.map_detailed_stats)
    map_learning_curve = staticmethod(maps.map_learning_curve)
    map_timeline = staticmethod(maps.map_timeline)
    repeat_map = staticmethod(maps.repeat_map_effect)
    game_mode_distribution = staticmethod(modes.game_mode_distribution)
    game_mode_winrates = staticmethod(modes.game_mode_winrates)
    most_played_heroes = staticmethod(heroes.most_played_heroes)
    hero_winrates = staticmethod(heroes.hero_winrates)
    one_trick = staticmethod(heroes.one_trick_stats)
    hero_pool = staticmethod(heroes.hero_pool_diversity)
    hero_swap = staticmethod(heroes.hero_swap_stats)
    hero_map_synergy = staticmethod(heroes.hero_map_synergy)
    group_sizes = staticmethod(groups.group_size_winrates)
    role_stats = staticmethod(roles.role_stats)
    streaks = staticmethod(trends.streak_data)
    recent_form = staticmethod(trends.recent_form)
    rolling_winrate = staticmethod(trends.rolling_winrate)
    activity_heatmap = staticmethod(trends.activity_heatmap)
    day_of_week = staticmethod(trends.day_of_week_stats)
    sessions = staticmethod(trends.session_analysis)

    def map_familiarity(self, matches: Sequence[MatchRecord]) -> maps.MapFamiliarityResult:
        return maps.map_familiarity(matches, self.catalog)

    def most_played_heroes_for_mode(
        self,
        matches: Sequence[MatchRecord],
        mode: MapType | str,
    ) -> heroes.MostPlayedHeroResult:
        return heroes.most_played_heroes(matches, MapType(mode))

    def build_report(
        self,
        matches: Sequence[MatchRecord],
        role: RoleFilter = "all",
        *,
        as_of: datetime | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> StatsReport:
        """Run every analyzer once.

        Role stats always use the unfiltered list so the role split stays
        meaningful while another role is selected.
        """
        filtered = filter_matches_by_role(matches, role)
        role_label = role.value if isinstance(role, Enum) else str(role)
        if echo is not None:
            echo(
                f"catalog={self.catalog.name} role={role_label} "
                f"matches={len(matches)} filtered_matches={len(filtered)}"
            )

        report = StatsReport(
            role_filter=role_label,
            total_matches=len(filtered),
            summary=summary.summary_stats(filtered),
            map_win_loss=maps.map_win_loss(filtered),
            game_mode_distribution=modes.game_mode_distribution(filtered),
            game_mode_winrates=modes.game_mode_winrates(filtered),
            most_played_heroes=heroes.most_played_heroes(filtered),
            hero_winrates=heroes.hero_winrates(filtered),
            rolling_winrate=trends.rolling_winrate(filtered),
            activity_heatmap=trends.activity_heatmap(filtered, as_of=as_of),
            streaks=trends.streak_data(filtered),
            recent_form=trends.recent_form(filtered),
            group_sizes=groups.group_size_winrates(filtered),
            role_stats=roles.role_stats(matches),
            one_trick=heroes.one_trick_stats(filtered),
            hero_pool=heroes.hero_pool_diversity(filtered),
            hero_swap=heroes.hero_swap_stats(filtered),
            map_detailed=maps.map_detailed_stats(filtered),
            hero_map_synergy=heroes.hero_map_synergy(filtered),
            map_learning_curve=maps.map_learning_curve(filtered),
            map_familiarity=maps.map_familiarity(filtered, self.catalog),
            repeat_map=maps.repeat_map_effect(filtered),
            map_timeline=maps.map_timeline(filtered, as_of=as_of),
            sessions=trends.session_analysis(filtered),
            day_of_week=trends.day_of_week_stats(filtered),
        )
        if echo is not None:
            echo(
                f"report_ready role={role_label} "
                f"winrate={report.summary.winrate} "
                f"maps={report.summary.unique_maps} "
                f"sessions={len(report.sessions.sessions)}"
            )
        return report


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_payload(value: Any) -> Any:
    """Convert a result into JSON-ready data with camelCase keys."""
    if is_dataclass(value) and not isinstance(value, type):
        return {
            _camel_case(field.name): to_payload(getattr(value, field.name))
            for field in fields(value)
            if field.init and not field.name.startswith("_")
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    return value


__all__ = ["MatchStatsEngine", "StatsReport", "to_payload"]
