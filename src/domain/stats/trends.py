"""Sequence and calendar analyzers: streaks, form, rolling winrate, activity,
day of week and play sessions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from domain.common import MatchRecord, MatchResult
from domain.stats.aggregation import (
    OutcomeTally,
    percent,
    round_half_up,
    round_one_decimal,
    tally,
)
from domain.stats.temporal import (
    DAY_NAMES,
    SESSION_GAP,
    chronological,
    day_of_week,
    local_date,
    most_recent_first,
    split_sessions_by_gap,
    trailing_window,
)

ROLLING_WINDOW = 10
RECENT_FORM_WINDOW = 20
TREND_THRESHOLD = 5
RECENT_RESULTS = 20
HEATMAP_WEEKS = 16
MIN_SESSIONS = 2


def _trend(delta: float) -> str:
    if delta >= TREND_THRESHOLD:
        return "improving"
    if delta <= -TREND_THRESHOLD:
        return "declining"
    return "stable"


def current_streak(matches: Sequence[MatchRecord]) -> tuple[int, str]:
    """Length and type of the run of identical results ending at the newest match.

    A newest match that is a draw yields ``(0, "none")``.
    """
    ordered = most_recent_first(matches)
    if not ordered or ordered[0].result == MatchResult.DRAW:
        return 0, "none"

    streak_result = ordered[0].result
    streak = 0
    for match in ordered:
        if match.result != streak_result:
            break
        streak += 1
    return streak, streak_result.value


@dataclass(frozen=True)
class RecentResult:
    match_id: str
    result: MatchResult


@dataclass(frozen=True)
class StreakData:
    current_streak: int
    current_streak_type: str
    longest_win_streak: int
    longest_loss_streak: int
    recent_results: tuple[RecentResult, ...]


def streak_data(matches: Sequence[MatchRecord]) -> StreakData:
    streak, streak_type = current_streak(matches)

    longest_win = longest_loss = 0
    run_win = run_loss = 0
    for match in chronological(matches):
        if match.result == MatchResult.WIN:
            run_win += 1
            run_loss = 0
            longest_win = max(longest_win, run_win)
        elif match.result == MatchResult.LOSS:
            run_loss += 1
            run_win = 0
            longest_loss = max(longest_loss, run_loss)
        else:
            run_win = run_loss = 0

    recent = most_recent_first(matches)[:RECENT_RESULTS]
    return StreakData(
        current_streak=streak,
        current_streak_type=streak_type,
        longest_win_streak=longest_win,
        longest_loss_streak=longest_loss,
        recent_results=tuple(RecentResult(match_id=match.id, result=match.result) for match in recent),
    )


@dataclass(frozen=True)
class FormStats:
    winrate: int
    wins: int
    losses: int
    draws: int
    total: int


@dataclass(frozen=True)
class RecentFormData:
    recent: FormStats
    overall: FormStats
    delta: int
    trend: str


def form_stats(matches: Sequence[MatchRecord]) -> FormStats:
    counts = tally(matches)
    return FormStats(
        winrate=counts.winrate(),
        wins=counts.wins,
        losses=counts.losses,
        draws=counts.draws,
        total=counts.total,
    )


def recent_form(matches: Sequence[MatchRecord], window: int = RECENT_FORM_WINDOW) -> RecentFormData:
    """Winrate over the newest ``window`` matches against the all-time winrate."""
    if window <= 0:
        raise ValueError("window must be greater than 0")

    recent = form_stats(most_recent_first(matches)[:window])
    overall = form_stats(matches)
    delta = recent.winrate - overall.winrate
    return RecentFormData(recent=recent, overall=overall, delta=delta, trend=_trend(delta))


@dataclass(frozen=True)
class RollingWinrateEntry:
    game_index: int
    date: date
    rolling_winrate: int
    result: MatchResult


@dataclass(frozen=True)
class RollingWinrateInsight:
    trend: str
    peak_winrate: int
    current_winrate: int
    window: int


@dataclass(frozen=True)
class RollingWinrateResult:
    data: tuple[RollingWinrateEntry, ...]
    insight: RollingWinrateInsight


def rolling_winrate(matches: Sequence[MatchRecord], window: int = ROLLING_WINDOW) -> RollingWinrateResult:
    """Simple moving average of the win ratio over the trailing ``window`` games.

    The trend compares the mean of the first and second half of the series and
    is only classified once there are ``2 * window`` points.
    """
    if window <= 0:
        raise ValueError("window must be greater than 0")

    ordered = chronological(matches)
    data: list[RollingWinrateEntry] = []
    for index, match in enumerate(ordered):
        games = trailing_window(ordered, index, window)
        wins = sum(1 for game in games if game.result == MatchResult.WIN)
        data.append(
            RollingWinrateEntry(
                game_index=index + 1,
                date=local_date(match.played_at),
                rolling_winrate=percent(wins, len(games)),
                result=match.result,
            )
        )

    trend = "stable"
    if len(data) >= window * 2:
        midpoint = len(data) // 2
        first_half = data[:midpoint]
        second_half = data[midpoint:]
        first_avg = sum(entry.rolling_winrate for entry in first_half) / len(first_half)
        second_avg = sum(entry.rolling_winrate for entry in second_half) / len(second_half)
        trend = _trend(second_avg - first_avg)

    return RollingWinrateResult(
        data=tuple(data),
        insight=RollingWinrateInsight(
            trend=trend,
            peak_winrate=max((entry.rolling_winrate for entry in data), default=0),
            current_winrate=data[-1].rolling_winrate if data else 0,
            window=window,
        ),
    )


@dataclass(frozen=True)
class HeatmapEntry:
    date: date
    count: int
    density: float


@dataclass(frozen=True)
class ActivityHeatmapInsight:
    peak_day_of_week: str
    avg_games_per_active_day: float
    total_active_days: int


@dataclass(frozen=True)
class ActivityHeatmapResult:
    data: tuple[HeatmapEntry, ...]
    max_count: int
    insight: ActivityHeatmapInsight


def activity_heatmap(
    matches: Sequence[MatchRecord],
    weeks: int = HEATMAP_WEEKS,
    as_of: date | datetime | None = None,
) -> ActivityHeatmapResult:
    """One cell per day for ``weeks`` Sunday-to-Saturday columns ending with the current week."""
    if weeks <= 0:
        raise ValueError("weeks must be greater than 0")

    counts_by_date: dict[date, int] = {}
    day_totals = [0] * 7
    for match in matches:
        played_on = local_date(match.played_at)
        counts_by_date[played_on] = counts_by_date.get(played_on, 0) + 1
        day_totals[day_of_week(match.played_at)] += 1

    if isinstance(as_of, datetime):
        today = local_date(as_of)
    else:
        today = as_of if as_of is not None else date.today()
    sunday_index = (today.weekday() + 1) % 7
    end = today + timedelta(days=6 - sunday_index)
    start = end - timedelta(days=weeks * 7 - 1)

    days = [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
    max_count = max((counts_by_date.get(day, 0) for day in days), default=0)
    data = tuple(
        HeatmapEntry(
            date=day,
            count=counts_by_date.get(day, 0),
            density=counts_by_date.get(day, 0) / max_count if max_count > 0 else 0.0,
        )
        for day in days
    )

    active = [entry for entry in data if entry.count > 0]
    peak_day = DAY_NAMES[day_totals.index(max(day_totals))] if matches else ""
    return ActivityHeatmapResult(
        data=data,
        max_count=max_count,
        insight=ActivityHeatmapInsight(
            peak_day_of_week=peak_day,
            avg_games_per_active_day=(
                round_one_decimal(sum(entry.count for entry in active) / len(active)) if active else 0.0
            ),
            total_active_days=len(active),
        ),
    )


@dataclass(frozen=True)
class DayOfWeekEntry:
    day: str
    day_index: int
    wins: int
    losses: int
    draws: int
    total: int
    winrate: int


@dataclass(frozen=True)
class DayOfWeekResult:
    data: tuple[DayOfWeekEntry, ...]
    best_day: str | None
    worst_day: str | None
    weekday_winrate: int
    weekend_winrate: int
    insight: str


def day_of_week_stats(matches: Sequence[MatchRecord]) -> DayOfWeekResult:
    buckets = [OutcomeTally() for _ in DAY_NAMES]
    for match in matches:
        buckets[day_of_week(match.played_at)].add(match.result)

    data = tuple(
        DayOfWeekEntry(
            day=DAY_NAMES[index],
            day_index=index,
            wins=bucket.wins,
            losses=bucket.losses,
            draws=bucket.draws,
            total=bucket.total,
            winrate=bucket.winrate(),
        )
        for index, bucket in enumerate(buckets)
    )

    played = [entry for entry in data if entry.total > 0]
    best: DayOfWeekEntry | None = None
    worst: DayOfWeekEntry | None = None
    for entry in played:
        if best is None or entry.winrate > best.winrate:
            best = entry
        if worst is None or entry.winrate < worst.winrate:
            worst = entry

    weekday = OutcomeTally()
    weekend = OutcomeTally()
    for index, bucket in enumerate(buckets):
        target = weekend if index in (0, 6) else weekday
        target.wins += bucket.wins
        target.losses += bucket.losses
        target.draws += bucket.draws

    if best is None or worst is None:
        insight = "No matches yet"
    elif best.day == worst.day:
        insight = f"All of your games so far were on {best.day}s"
    else:
        insight = (
            f"You play best on {best.day}s ({best.winrate}%) "
            f"and worst on {worst.day}s ({worst.winrate}%)"
        )

    return DayOfWeekResult(
        data=data,
        best_day=best.day if best else None,
        worst_day=worst.day if worst else None,
        weekday_winrate=weekday.winrate(),
        weekend_winrate=weekend.winrate(),
        insight=insight,
    )


@dataclass(frozen=True)
class SessionEntry:
    session_index: int
    date: date
    started_at: datetime
    games_played: int
    wins: int
    losses: int
    draws: int
    winrate: int
    duration_minutes: int | None


@dataclass(frozen=True)
class SessionAnalysisResult:
    sessions: tuple[SessionEntry, ...]
    avg_session_winrate: int
    avg_games_per_session: float
    best_session: SessionEntry | None
    worst_session: SessionEntry | None
    has_enough_data: bool
    insight: str


def session_analysis(
    matches: Sequence[MatchRecord],
    gap: timedelta = SESSION_GAP,
) -> SessionAnalysisResult:
    """Split play into sessions separated by more than ``gap`` and score each one."""
    sessions: list[SessionEntry] = []
    for index, session_matches in enumerate(split_sessions_by_gap(matches, gap), start=1):
        counts = tally(session_matches)
        first, last = session_matches[0], session_matches[-1]
        duration = None
        if len(session_matches) > 1:
            duration = round_half_up((last.played_at - first.played_at).total_seconds() / 60)
        sessions.append(
            SessionEntry(
                session_index=index,
                date=local_date(first.played_at),
                started_at=first.played_at,
                games_played=counts.total,
                wins=counts.wins,
                losses=counts.losses,
                draws=counts.draws,
                winrate=counts.winrate(),
                duration_minutes=duration,
            )
        )

    if len(sessions) < MIN_SESSIONS:
        return SessionAnalysisResult(
            sessions=tuple(sessions),
            avg_session_winrate=0,
            avg_games_per_session=0.0,
            best_session=None,
            worst_session=None,
            has_enough_data=False,
            insight="Not enough sessions yet. Sessions are separated by 3+ hour breaks",
        )

    best = worst = sessions[0]
    for session in sessions:
        if session.winrate > best.winrate:
            best = session
        if session.winrate < worst.winrate:
            worst = session

    avg_winrate = round_half_up(sum(session.winrate for session in sessions) / len(sessions))
    avg_games = round_one_decimal(sum(session.games_played for session in sessions) / len(sessions))
    return SessionAnalysisResult(
        sessions=tuple(sessions),
        avg_session_winrate=avg_winrate,
        avg_games_per_session=avg_games,
        best_session=best,
        worst_session=worst,
        has_enough_data=True,
        insight=(
            f"Across {len(sessions)} sessions you average {avg_games} games "
            f"and a {avg_winrate}% winrate per session"
        ),
    )


__all__ = [
    "HEATMAP_WEEKS",
    "RECENT_FORM_WINDOW",
    "ROLLING_WINDOW",
    "TREND_THRESHOLD",
    "ActivityHeatmapInsight",
    "ActivityHeatmapResult",
    "DayOfWeekEntry",
    "DayOfWeekResult",
    "FormStats",
    "HeatmapEntry",
    "RecentFormData",
    "RecentResult",
    "RollingWinrateEntry",
    "RollingWinrateInsight",
    "RollingWinrateResult",
    "SessionAnalysisResult",
    "SessionEntry",
    "StreakData",
    "activity_heatmap",
    "current_streak",
    "day_of_week_stats",
    "form_stats",
    "recent_form",
    "rolling_winrate",
    "session_analysis",
    "streak_data",
]
