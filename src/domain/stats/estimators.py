"""Statistical estimators: Wilson interval, volatility, variety and time weighting."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.common import MatchRecord, MatchResult, Role, ROLES
from domain.stats.aggregation import round_half_up

WILSON_Z = 1.96

_OUTCOME_VALUES = {
    MatchResult.WIN: 1.0,
    MatchResult.DRAW: 0.5,
    MatchResult.LOSS: 0.0,
}


@dataclass(frozen=True)
class WilsonInterval:
    """Bounds of a binomial proportion, in integer percent."""

    low: int
    high: int


def wilson_interval(wins: int, total: int, z: float = WILSON_Z) -> WilsonInterval:
    """Wilson score interval for ``wins`` out of ``total``."""
    if total <= 0:
        return WilsonInterval(low=0, high=100)

    p = wins / total
    z_squared = z * z
    center = p + z_squared / (2 * total)
    spread = z * math.sqrt(p * (1 - p) / total + z_squared / (4 * total * total))
    denominator = 1 + z_squared / total

    low = max(0.0, min(1.0, (center - spread) / denominator))
    high = max(0.0, min(1.0, (center + spread) / denominator))
    return WilsonInterval(low=round_half_up(low * 100), high=round_half_up(high * 100))


def volatility_score(results: Sequence[MatchResult]) -> int:
    """Population std-dev of win=1/draw=0.5/loss=0, scaled so a 50/50 split is 100."""
    total = len(results)
    if total < 2:
        return 0

    values = [_OUTCOME_VALUES[result] for result in results]
    mean = sum(values) / total
    variance = sum((value - mean) ** 2 for value in values) / total
    return round_half_up(math.sqrt(variance) * 200)


def variety_score(play_counts: Iterable[int], catalog_size: int) -> int:
    """Shannon entropy of play counts, normalised against an even spread over the catalog."""
    counts = [count for count in play_counts if count > 0]
    total = sum(counts)
    if total == 0 or catalog_size <= 1:
        return 0

    entropy = 0.0
    for count in counts:
        p = count / total
        entropy -= p * math.log2(p)
    max_entropy = math.log2(catalog_size)
    return round_half_up(entropy / max_entropy * 100)


def normalized_role_weights(matches: Iterable[MatchRecord]) -> dict[Role, float]:
    """Time spent per role; each match contributes a total weight of 1.

    Allocations are divided by the match's actual percentage sum, so matches
    whose allocations do not add up to 100 still weigh 1.
    """
    weights: dict[Role, float] = {role: 0.0 for role in ROLES}
    for match in matches:
        total_pct = sum(hero.percentage for hero in match.heroes)
        normalizer = total_pct if total_pct > 0 else 1
        for hero in match.heroes:
            if hero.role not in weights:
                continue
            weights[hero.role] += hero.percentage / normalizer
    return weights


def hero_playtime_weights(matches: Iterable[MatchRecord]) -> dict[str, tuple[float, Role]]:
    """Summed raw allocation percentage per hero, with the first role seen.

    Unlike :func:`normalized_role_weights` nothing is renormalised here: callers
    divide by ``match_count * 100``.
    """
    weights: dict[str, tuple[float, Role]] = {}
    for match in matches:
        for hero in match.heroes:
            weight, role = weights.get(hero.hero, (0.0, hero.role))
            weights[hero.hero] = (weight + hero.percentage, role)
    return weights


__all__ = [
    "WILSON_Z",
    "WilsonInterval",
    "hero_playtime_weights",
    "normalized_role_weights",
    "variety_score",
    "volatility_score",
    "wilson_interval",
]
