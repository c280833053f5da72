"""Chronological ordering and session segmentation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from domain.common import MatchRecord

SESSION_GAP = timedelta(hours=3)

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def chronological(matches: Iterable[MatchRecord]) -> list[MatchRecord]:
    """Oldest first. Returns a new list; ties keep input order."""
    return sorted(matches, key=lambda match: match.played_at)


def most_recent_first(matches: Iterable[MatchRecord]) -> list[MatchRecord]:
    """Newest first. Returns a new list; ties keep input order."""
    return sorted(matches, key=lambda match: match.played_at, reverse=True)


def local_datetime(value: datetime) -> datetime:
    """Naive values are already local; aware values are converted to local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone()


def local_date(value: datetime) -> date:
    return local_datetime(value).date()


def day_of_week(value: datetime) -> int:
    """Sunday=0 .. Saturday=6."""
    return (local_datetime(value).weekday() + 1) % 7


def split_sessions_by_gap(
    matches: Iterable[MatchRecord],
    gap: timedelta = SESSION_GAP,
) -> list[list[MatchRecord]]:
    """Cluster chronologically sorted matches; a gap longer than ``gap`` starts a new session."""
    sessions: list[list[MatchRecord]] = []
    previous: MatchRecord | None = None
    for match in chronological(matches):
        if previous is None or match.played_at - previous.played_at > gap:
            sessions.append([])
        sessions[-1].append(match)
        previous = match
    return sessions


def group_by_calendar_day(matches: Iterable[MatchRecord]) -> dict[date, list[MatchRecord]]:
    """Bucket matches by local calendar day; each bucket is chronological."""
    days: dict[date, list[MatchRecord]] = {}
    for match in chronological(matches):
        days.setdefault(local_date(match.played_at), []).append(match)
    return days


def trailing_window(items: Sequence[MatchRecord], index: int, window: int) -> Sequence[MatchRecord]:
    """The last ``window`` items ending at ``index`` (inclusive)."""
    return items[max(0, index - window + 1) : index + 1]


def median(values: Sequence[float]) -> float | None:
    if not values:
        return None
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


__all__ = [
    "DAY_NAMES",
    "SESSION_GAP",
    "chronological",
    "day_of_week",
    "group_by_calendar_day",
    "local_date",
    "local_datetime",
    "median",
    "most_recent_first",
    "split_sessions_by_gap",
    "trailing_window",
]
