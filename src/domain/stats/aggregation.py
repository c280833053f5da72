"""Counting and rounding helpers shared by every analyzer."""

from __future__ import annotations

import math
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from domain.common import MatchRecord, MatchResult

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int(math.floor(value + 0.5))


def round_one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


def percent(part: float, whole: float) -> int:
    """Integer percentage, 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def percent_one_decimal(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return round_half_up(part / whole * 1000) / 10


@dataclass
class OutcomeTally:
    """Running win/loss/draw counts for one bucket."""

    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws

    def add(self, result: MatchResult) -> None:
        if result == MatchResult.WIN:
            self.wins += 1
        elif result == MatchResult.LOSS:
            self.losses += 1
        else:
            self.draws += 1

    def winrate(self) -> int:
        return percent(self.wins, self.total)

    def winrate_one_decimal(self) -> float:
        return percent_one_decimal(self.wins, self.total)


def tally(matches: Iterable[MatchRecord]) -> OutcomeTally:
    counts = OutcomeTally()
    for match in matches:
        counts.add(match.result)
    return counts


def tally_by(
    matches: Iterable[MatchRecord],
    key: Callable[[MatchRecord], K],
) -> dict[K, OutcomeTally]:
    """Bucket matches by ``key`` and count outcomes; preserves first-seen key order."""
    buckets: dict[K, OutcomeTally] = {}
    for match in matches:
        bucket_key = key(match)
        bucket = buckets.get(bucket_key)
        if bucket is None:
            bucket = OutcomeTally()
            buckets[bucket_key] = bucket
        bucket.add(match.result)
    return buckets


def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def top_n(
    items: Iterable[T],
    score: Callable[[T], float],
    *,
    limit: int | None = None,
    min_sample: int = 0,
    sample: Callable[[T], int] | None = None,
) -> list[T]:
    """Sort descending by ``score`` after dropping items below ``min_sample``.

    Sorting is stable, so ties keep the incoming order.
    """
    candidates: Sequence[T] = list(items)
    if min_sample > 0 and sample is not None:
        candidates = [item for item in candidates if sample(item) >= min_sample]
    ranked = sorted(candidates, key=score, reverse=True)
    return ranked if limit is None else ranked[:limit]


__all__ = [
    "OutcomeTally",
    "group_by",
    "percent",
    "percent_one_decimal",
    "round_half_up",
    "round_one_decimal",
    "tally",
    "tally_by",
    "top_n",
]
