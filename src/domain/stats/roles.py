"""Role distribution, role winrates and role flexibility."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from domain.common import MatchRecord, Role, ROLES
from domain.stats.aggregation import OutcomeTally, percent_one_decimal, round_half_up
from domain.stats.estimators import normalized_role_weights

ROLE_WINRATE_MIN_MATCHES = 3
ADAPTIVE_THRESHOLD = 80
FLEXIBLE_THRESHOLD = 55

# Largest possible sum(|p_i - 1/3|), reached when one role holds all the time.
_MAX_ROLE_DEVIATION = 4 / 3


@dataclass(frozen=True)
class RoleDistEntry:
    role: Role
    weighted_count: float
    percentage: float


@dataclass(frozen=True)
class RoleWinrateEntry:
    role: Role
    winrate: float
    wins: int
    losses: int
    draws: int
    total: int


@dataclass(frozen=True)
class RoleFlexibility:
    score: int
    label: str
    description: str


@dataclass(frozen=True)
class RoleStatsInsight:
    dominant_role: str
    dominant_pct: float
    best_role: str
    best_winrate: float
    has_enough_data: bool


@dataclass(frozen=True)
class RoleStatsResult:
    distribution: tuple[RoleDistEntry, ...]
    winrates: tuple[RoleWinrateEntry, ...]
    flexibility: RoleFlexibility
    insight: RoleStatsInsight


def flexibility_score(proportions: Mapping[Role, float]) -> int:
    """100 for an even three-way split, 0 when one role has all the time."""
    deviation = sum(abs(proportions.get(role, 0.0) - 1 / 3) for role in ROLES)
    return round_half_up((1 - deviation / _MAX_ROLE_DEVIATION) * 100)


def flexibility_label(score: int) -> str:
    if score >= ADAPTIVE_THRESHOLD:
        return "Adaptive"
    if score >= FLEXIBLE_THRESHOLD:
        return "Flexible"
    return "Specialist"


def role_flexibility(proportions: Mapping[Role, float], dominant_role: str = "") -> RoleFlexibility:
    score = flexibility_score(proportions)
    label = flexibility_label(score)
    focus = dominant_role or "one role"
    if label == "Adaptive":
        description = "You play all three roles nearly equally, a true flex player"
    elif label == "Flexible":
        description = f"You lean toward {focus} but still play others"
    else:
        description = f"You mainly play {focus}, a dedicated specialist"
    return RoleFlexibility(score=score, label=label, description=description)


def role_stats(matches: Sequence[MatchRecord]) -> RoleStatsResult:
    """Time-weighted role split, per-role winrates and the flexibility score.

    Each match counts once toward every role played in it for winrates; the
    distribution uses per-match normalised allocation weights.
    """
    weights = normalized_role_weights(matches)
    buckets: dict[Role, OutcomeTally] = {role: OutcomeTally() for role in ROLES}
    for match in matches:
        for role in {hero.role for hero in match.heroes}:
            if role in buckets:
                buckets[role].add(match.result)

    total_weight = sum(weights.values())
    distribution = sorted(
        (
            RoleDistEntry(
                role=role,
                weighted_count=weights[role],
                percentage=percent_one_decimal(weights[role], total_weight),
            )
            for role in ROLES
        ),
        key=lambda entry: entry.weighted_count,
        reverse=True,
    )
    winrates = tuple(
        RoleWinrateEntry(
            role=role,
            winrate=buckets[role].winrate_one_decimal(),
            wins=buckets[role].wins,
            losses=buckets[role].losses,
            draws=buckets[role].draws,
            total=buckets[role].total,
        )
        for role in ROLES
    )

    dominant = distribution[0]
    dominant_role = dominant.role.value if total_weight > 0 else ""
    proportions = {entry.role: entry.percentage / 100 for entry in distribution}
    flexibility = role_flexibility(proportions, dominant_role)

    best: RoleWinrateEntry | None = None
    qualified = [entry for entry in winrates if entry.total >= ROLE_WINRATE_MIN_MATCHES]
    for entry in qualified:
        if best is None or entry.winrate > best.winrate:
            best = entry

    return RoleStatsResult(
        distribution=tuple(distribution),
        winrates=winrates,
        flexibility=flexibility,
        insight=RoleStatsInsight(
            dominant_role=dominant_role,
            dominant_pct=dominant.percentage,
            best_role=best.role.value if best else "",
            best_winrate=best.winrate if best else 0.0,
            has_enough_data=bool(qualified),
        ),
    )


__all__ = [
    "ROLE_WINRATE_MIN_MATCHES",
    "RoleDistEntry",
    "RoleFlexibility",
    "RoleStatsInsight",
    "RoleStatsResult",
    "RoleWinrateEntry",
    "flexibility_label",
    "flexibility_score",
    "role_flexibility",
    "role_stats",
]
