"""Group size analyzer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import MatchRecord
from domain.stats.aggregation import tally_by

GROUP_SIZE_MIN_MATCHES = 3

GROUP_SIZE_LABELS = {
    1: "Solo",
    2: "Duo",
    3: "Trio",
    4: "4-Stack",
    5: "5-Stack",
    6: "Full Stack",
}


def group_size_label(group_size: int) -> str:
    return GROUP_SIZE_LABELS.get(group_size, f"{group_size}-Stack")


@dataclass(frozen=True)
class GroupSizeEntry:
    group_size: int
    label: str
    wins: int
    losses: int
    draws: int
    total: int
    winrate: float


@dataclass(frozen=True)
class GroupSizeInsight:
    optimal_size: int
    optimal_label: str
    optimal_winrate: float
    solo_winrate: float | None
    has_enough_data: bool


@dataclass(frozen=True)
class GroupSizeResult:
    data: tuple[GroupSizeEntry, ...]
    insight: GroupSizeInsight


def group_size_winrates(matches: Sequence[MatchRecord]) -> GroupSizeResult:
    """Winrate per party size; only sizes with 3+ games compete for "optimal"."""
    data = sorted(
        (
            GroupSizeEntry(
                group_size=size,
                label=group_size_label(size),
                wins=bucket.wins,
                losses=bucket.losses,
                draws=bucket.draws,
                total=bucket.total,
                winrate=bucket.winrate_one_decimal(),
            )
            for size, bucket in tally_by(matches, lambda match: match.group_size).items()
        ),
        key=lambda entry: entry.group_size,
    )

    qualified = [entry for entry in data if entry.total >= GROUP_SIZE_MIN_MATCHES]
    optimal = qualified[0] if qualified else None
    for entry in qualified:
        if optimal is not None and entry.winrate > optimal.winrate:
            optimal = entry

    solo = next((entry for entry in data if entry.group_size == 1), None)
    solo_winrate = solo.winrate if solo and solo.total >= GROUP_SIZE_MIN_MATCHES else None

    return GroupSizeResult(
        data=tuple(data),
        insight=GroupSizeInsight(
            optimal_size=optimal.group_size if optimal else 1,
            optimal_label=optimal.label if optimal else "Solo",
            optimal_winrate=optimal.winrate if optimal else 0.0,
            solo_winrate=solo_winrate,
            has_enough_data=bool(qualified),
        ),
    )


__all__ = [
    "GROUP_SIZE_LABELS",
    "GROUP_SIZE_MIN_MATCHES",
    "GroupSizeEntry",
    "GroupSizeInsight",
    "GroupSizeResult",
    "group_size_label",
    "group_size_winrates",
]
