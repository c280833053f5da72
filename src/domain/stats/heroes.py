"""Hero-level analyzers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.common import MatchRecord, MapType, Role, ROLES
from domain.stats.aggregation import OutcomeTally, percent, round_half_up, round_one_decimal, top_n
from domain.stats.estimators import hero_playtime_weights, wilson_interval

MOST_PLAYED_LIMIT = 10
HERO_WINRATE_MIN_MATCHES = 3
ONE_TRICK_THRESHOLD = 40
SPECIALIST_THRESHOLD = 25
ONE_TRICK_TOP_HEROES = 5
SWAP_MIN_PERCENTAGE = 20
SWAP_MIN_MATCHES = 3
HERO_MAP_MIN_GAMES = 3
HERO_MAP_TOP_HEROES = 15


@dataclass(frozen=True)
class MostPlayedHeroEntry:
    hero: str
    count: int
    role: Role


@dataclass(frozen=True)
class MostPlayedHeroInsight:
    top_hero: str
    top_count: int
    top_role: str


@dataclass(frozen=True)
class MostPlayedHeroResult:
    data: tuple[MostPlayedHeroEntry, ...]
    insight: MostPlayedHeroInsight


def most_played_heroes(
    matches: Sequence[MatchRecord],
    mode_filter: MapType | None = None,
) -> MostPlayedHeroResult:
    """Top heroes by number of matches they appear in, optionally for one game mode."""
    counts: dict[str, tuple[int, Role]] = {}
    for match in matches:
        if mode_filter is not None and match.map_type != mode_filter:
            continue
        for hero in match.heroes:
            count, role = counts.get(hero.hero, (0, hero.role))
            counts[hero.hero] = (count + 1, role)

    data = top_n(
        (MostPlayedHeroEntry(hero=hero, count=count, role=role) for hero, (count, role) in counts.items()),
        lambda entry: entry.count,
        limit=MOST_PLAYED_LIMIT,
    )
    top = data[0] if data else None

    return MostPlayedHeroResult(
        data=tuple(data),
        insight=MostPlayedHeroInsight(
            top_hero=top.hero if top else "",
            top_count=top.count if top else 0,
            top_role=top.role.value if top else "",
        ),
    )


@dataclass(frozen=True)
class HeroWinrateEntry:
    hero: str
    winrate: int
    wins: int
    total: int


@dataclass(frozen=True)
class HeroWinrateInsight:
    best_hero: str
    best_winrate: int
    best_total: int
    worst_hero: str
    worst_winrate: int


@dataclass(frozen=True)
class HeroWinrateResult:
    data: tuple[HeroWinrateEntry, ...]
    insight: HeroWinrateInsight


def _hero_tallies(matches: Sequence[MatchRecord]) -> dict[str, OutcomeTally]:
    tallies: dict[str, OutcomeTally] = {}
    for match in matches:
        for hero in match.heroes:
            tallies.setdefault(hero.hero, OutcomeTally()).add(match.result)
    return tallies


def hero_winrates(matches: Sequence[MatchRecord]) -> HeroWinrateResult:
    data = top_n(
        (
            HeroWinrateEntry(hero=hero, winrate=bucket.winrate(), wins=bucket.wins, total=bucket.total)
            for hero, bucket in _hero_tallies(matches).items()
        ),
        lambda entry: entry.winrate,
        min_sample=HERO_WINRATE_MIN_MATCHES,
        sample=lambda entry: entry.total,
    )
    best = data[0] if data else None
    worst = data[-1] if data else None

    return HeroWinrateResult(
        data=tuple(data),
        insight=HeroWinrateInsight(
            best_hero=best.hero if best else "",
            best_winrate=best.winrate if best else 0,
            best_total=best.total if best else 0,
            worst_hero=worst.hero if worst else "",
            worst_winrate=worst.winrate if worst else 0,
        ),
    )


@dataclass(frozen=True)
class HeroPlaytimeShare:
    hero: str
    pct: float
    role: Role


@dataclass(frozen=True)
class OneTrickResult:
    top_hero: str
    top_hero_role: str
    top_hero_pct: float
    label: str
    description: str
    top_heroes_data: tuple[HeroPlaytimeShare, ...]


def one_trick_label(top_hero_pct: float) -> str:
    if top_hero_pct >= ONE_TRICK_THRESHOLD:
        return "One-Trick"
    if top_hero_pct >= SPECIALIST_THRESHOLD:
        return "Specialist"
    return "Diverse"


def one_trick_stats(matches: Sequence[MatchRecord]) -> OneTrickResult:
    """Share of total play time on the most played heroes.

    Every match is assumed to carry exactly 100 percentage points, including
    role-filtered matches whose surviving allocations sum to less.
    """
    total_matches = len(matches)
    if total_matches == 0:
        return OneTrickResult(
            top_hero="",
            top_hero_role="",
            top_hero_pct=0.0,
            label="Diverse",
            description="No matches tracked yet",
            top_heroes_data=(),
        )

    shares = top_n(
        (
            HeroPlaytimeShare(
                hero=hero,
                pct=round_half_up(weight / (total_matches * 100) * 1000) / 10,
                role=role,
            )
            for hero, (weight, role) in hero_playtime_weights(matches).items()
        ),
        lambda share: share.pct,
        limit=ONE_TRICK_TOP_HEROES,
    )

    top = shares[0] if shares else None
    top_hero_pct = top.pct if top else 0.0
    label = one_trick_label(top_hero_pct)

    if top is None:
        description = "No matches tracked yet"
    elif label == "One-Trick":
        description = f"You've spent {top_hero_pct}% of your time on {top.hero}, a dedicated one-trick"
    elif label == "Specialist":
        description = f"You lean toward {top.hero} but still have some variety"
    else:
        description = "Your playtime is spread across many heroes"

    return OneTrickResult(
        top_hero=top.hero if top else "",
        top_hero_role=top.role.value if top else "",
        top_hero_pct=top_hero_pct,
        label=label,
        description=description,
        top_heroes_data=tuple(shares),
    )


@dataclass(frozen=True)
class HeroPoolEntry:
    hero: str
    role: Role


@dataclass(frozen=True)
class RoleHeroCount:
    role: Role
    count: int


@dataclass(frozen=True)
class HeroPoolDiversityResult:
    total_unique: int
    by_role: tuple[RoleHeroCount, ...]
    hero_list: tuple[HeroPoolEntry, ...]


def hero_pool_diversity(matches: Sequence[MatchRecord]) -> HeroPoolDiversityResult:
    seen: dict[str, Role] = {}
    for match in matches:
        for hero in match.heroes:
            seen.setdefault(hero.hero, hero.role)

    hero_list = sorted(
        (HeroPoolEntry(hero=hero, role=role) for hero, role in seen.items()),
        key=lambda entry: entry.hero.casefold(),
    )
    by_role = tuple(
        RoleHeroCount(role=role, count=sum(1 for entry in hero_list if entry.role == role))
        for role in ROLES
    )
    return HeroPoolDiversityResult(
        total_unique=len(seen),
        by_role=by_role,
        hero_list=tuple(hero_list),
    )


@dataclass(frozen=True)
class HeroSwapEntry:
    label: str
    winrate: float
    wins: int
    total: int


@dataclass(frozen=True)
class HeroSwapResult:
    data: tuple[HeroSwapEntry, ...]
    swap_winrate: float
    no_swap_winrate: float
    swap_total: int
    no_swap_total: int
    delta: float
    avg_heroes_per_swap_match: float
    has_enough_data: bool
    insight: str


def significant_hero_count(match: MatchRecord) -> int:
    return sum(1 for hero in match.heroes if hero.percentage >= SWAP_MIN_PERCENTAGE)


def hero_swap_stats(matches: Sequence[MatchRecord]) -> HeroSwapResult:
    """Winrate when two or more heroes each got 20%+ of the match versus staying on one."""
    swapped = OutcomeTally()
    stayed = OutcomeTally()
    significant_in_swaps = 0

    for match in matches:
        significant = significant_hero_count(match)
        if significant >= 2:
            swapped.add(match.result)
            significant_in_swaps += significant
        else:
            stayed.add(match.result)

    swap_winrate = swapped.winrate_one_decimal()
    no_swap_winrate = stayed.winrate_one_decimal()
    delta = round_one_decimal(swap_winrate - no_swap_winrate)
    avg_heroes = (
        round_one_decimal(significant_in_swaps / swapped.total) if swapped.total > 0 else 0.0
    )
    has_enough_data = swapped.total >= SWAP_MIN_MATCHES and stayed.total >= SWAP_MIN_MATCHES

    if not has_enough_data:
        insight = "Not enough data yet. Play more matches to see swap correlation"
    elif abs(delta) < 2:
        insight = "Swapping heroes has no meaningful impact on your winrate"
    elif delta > 0:
        insight = f"Swapping heroes gives you a +{delta}% winrate boost"
    else:
        insight = f"Staying on your hero gives you a +{abs(delta)}% winrate advantage"

    return HeroSwapResult(
        data=(
            HeroSwapEntry(label="Swapped", winrate=swap_winrate, wins=swapped.wins, total=swapped.total),
            HeroSwapEntry(label="Stayed", winrate=no_swap_winrate, wins=stayed.wins, total=stayed.total),
        ),
        swap_winrate=swap_winrate,
        no_swap_winrate=no_swap_winrate,
        swap_total=swapped.total,
        no_swap_total=stayed.total,
        delta=delta,
        avg_heroes_per_swap_match=avg_heroes,
        has_enough_data=has_enough_data,
        insight=insight,
    )


@dataclass(frozen=True)
class SynergyCell:
    hero: str
    map: str
    wins: int
    total: int
    winrate: int


@dataclass(frozen=True)
class BestHeroForMap:
    map: str
    map_type: MapType
    hero: str
    role: Role
    winrate: int
    wins: int
    total: int
    confidence_low: int
    confidence_high: int


@dataclass(frozen=True)
class HeroMapSynergyResult:
    heroes: tuple[str, ...]
    maps: tuple[str, ...]
    matrix: tuple[SynergyCell, ...]
    best_hero_per_map: tuple[BestHeroForMap, ...]


def hero_map_synergy(matches: Sequence[MatchRecord]) -> HeroMapSynergyResult:
    """Dense hero x map winrate matrix plus the most reliable hero on each map."""
    hero_counts: dict[str, int] = {}
    hero_roles: dict[str, Role] = {}
    map_counts: dict[str, int] = {}
    map_types: dict[str, MapType] = {}
    pairs: dict[tuple[str, str], OutcomeTally] = {}

    for match in matches:
        map_counts[match.map] = map_counts.get(match.map, 0) + 1
        map_types.setdefault(match.map, match.map_type)
        for hero in match.heroes:
            hero_counts[hero.hero] = hero_counts.get(hero.hero, 0) + 1
            hero_roles.setdefault(hero.hero, hero.role)
            pairs.setdefault((hero.hero, match.map), OutcomeTally()).add(match.result)

    heroes = tuple(
        hero for hero, _ in top_n(hero_counts.items(), lambda item: item[1], limit=HERO_MAP_TOP_HEROES)
    )
    maps = tuple(name for name, _ in top_n(map_counts.items(), lambda item: item[1]))

    matrix: list[SynergyCell] = []
    for hero in heroes:
        for map_name in maps:
            bucket = pairs.get((hero, map_name), OutcomeTally())
            matrix.append(
                SynergyCell(
                    hero=hero,
                    map=map_name,
                    wins=bucket.wins,
                    total=bucket.total,
                    winrate=bucket.winrate(),
                )
            )

    best_per_map: list[BestHeroForMap] = []
    for map_name in maps:
        best: BestHeroForMap | None = None
        best_key: tuple[int, int, int] | None = None
        for (hero, pair_map), bucket in pairs.items():
            if pair_map != map_name or bucket.total < HERO_MAP_MIN_GAMES:
                continue
            interval = wilson_interval(bucket.wins, bucket.total)
            winrate = percent(bucket.wins, bucket.total)
            key = (interval.low, winrate, bucket.total)
            if best_key is None or key > best_key:
                best_key = key
                best = BestHeroForMap(
                    map=map_name,
                    map_type=map_types[map_name],
                    hero=hero,
                    role=hero_roles[hero],
                    winrate=winrate,
                    wins=bucket.wins,
                    total=bucket.total,
                    confidence_low=interval.low,
                    confidence_high=interval.high,
                )
        if best is not None:
            best_per_map.append(best)

    return HeroMapSynergyResult(
        heroes=heroes,
        maps=maps,
        matrix=tuple(matrix),
        best_hero_per_map=tuple(best_per_map),
    )


__all__ = [
    "HERO_MAP_MIN_GAMES",
    "HERO_MAP_TOP_HEROES",
    "HERO_WINRATE_MIN_MATCHES",
    "ONE_TRICK_THRESHOLD",
    "SPECIALIST_THRESHOLD",
    "SWAP_MIN_MATCHES",
    "SWAP_MIN_PERCENTAGE",
    "BestHeroForMap",
    "HeroMapSynergyResult",
    "HeroPlaytimeShare",
    "HeroPoolDiversityResult",
    "HeroPoolEntry",
    "HeroSwapEntry",
    "HeroSwapResult",
    "HeroWinrateEntry",
    "HeroWinrateInsight",
    "HeroWinrateResult",
    "MostPlayedHeroEntry",
    "MostPlayedHeroInsight",
    "MostPlayedHeroResult",
    "OneTrickResult",
    "RoleHeroCount",
    "SynergyCell",
    "hero_map_synergy",
    "hero_pool_diversity",
    "hero_swap_stats",
    "hero_winrates",
    "most_played_heroes",
    "one_trick_label",
    "one_trick_stats",
    "significant_hero_count",
]
