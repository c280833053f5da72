"""Project a match list onto a single role."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Literal

from domain.common import MatchRecord, Role

RoleFilter = Role | Literal["all"]


def parse_role_filter(value: str) -> RoleFilter:
    if value.lower() == "all":
        return "all"
    for role in Role:
        if role.value.lower() == value.lower():
            return role
    raise ValueError(f"Unknown role filter '{value}' (expected all, Tank, Damage or Support)")


def filter_matches_by_role(
    matches: Sequence[MatchRecord],
    role: RoleFilter,
) -> Sequence[MatchRecord]:
    """Keep matches with at least one allocation on ``role``, stripping the other roles.

    Surviving percentages are not renormalised. ``"all"`` returns the input as is.
    """
    if role == "all":
        return matches
    if not isinstance(role, Role):
        role = parse_role_filter(str(role))

    filtered: list[MatchRecord] = []
    for match in matches:
        heroes = tuple(hero for hero in match.heroes if hero.role == role)
        if heroes:
            filtered.append(replace(match, heroes=heroes))
    return filtered


__all__ = ["RoleFilter", "filter_matches_by_role", "parse_role_filter"]
