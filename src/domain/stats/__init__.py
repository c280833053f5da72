"""Match analytics: pure analyzers over in-memory match records."""

from domain.stats.engine import MatchStatsEngine, StatsReport, to_payload
from domain.stats.estimators import WilsonInterval, variety_score, volatility_score, wilson_interval
from domain.stats.groups import group_size_winrates
from domain.stats.heroes import (
    hero_map_synergy,
    hero_pool_diversity,
    hero_swap_stats,
    hero_winrates,
    most_played_heroes,
    one_trick_stats,
)
from domain.stats.maps import (
    map_detailed_stats,
    map_familiarity,
    map_learning_curve,
    map_tier,
    map_timeline,
    map_win_loss,
    repeat_map_effect,
)
from domain.stats.modes import game_mode_distribution, game_mode_winrates
from domain.stats.role_filter import RoleFilter, filter_matches_by_role, parse_role_filter
from domain.stats.roles import role_stats
from domain.stats.summary import summary_stats
from domain.stats.trends import (
    activity_heatmap,
    day_of_week_stats,
    recent_form,
    rolling_winrate,
    session_analysis,
    streak_data,
)

__all__ = [
    "MatchStatsEngine",
    "RoleFilter",
    "StatsReport",
    "WilsonInterval",
    "activity_heatmap",
    "day_of_week_stats",
    "filter_matches_by_role",
    "game_mode_distribution",
    "game_mode_winrates",
    "group_size_winrates",
    "hero_map_synergy",
    "hero_pool_diversity",
    "hero_swap_stats",
    "hero_winrates",
    "map_detailed_stats",
    "map_familiarity",
    "map_learning_curve",
    "map_tier",
    "map_timeline",
    "map_win_loss",
    "most_played_heroes",
    "one_trick_stats",
    "parse_role_filter",
    "recent_form",
    "repeat_map_effect",
    "role_stats",
    "rolling_winrate",
    "session_analysis",
    "streak_data",
    "summary_stats",
    "to_payload",
    "variety_score",
    "volatility_score",
    "wilson_interval",
]
