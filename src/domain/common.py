"""Shared types for match analytics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MatchResult(str, Enum):
    """Outcome of one logged match."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class Role(str, Enum):
    """Hero role."""

    TANK = "Tank"
    DAMAGE = "Damage"
    SUPPORT = "Support"


class MapType(str, Enum):
    """Game mode a map belongs to."""

    CONTROL = "Control"
    ESCORT = "Escort"
    HYBRID = "Hybrid"
    PUSH = "Push"
    FLASHPOINT = "Flashpoint"
    CLASH = "Clash"


ROLES: tuple[Role, ...] = (Role.TANK, Role.DAMAGE, Role.SUPPORT)


@dataclass(frozen=True)
class HeroAllocation:
    """Share of one match's duration spent on a single hero."""

    hero: str
    role: Role
    percentage: int
    id: str | None = None


@dataclass(frozen=True)
class MatchRecord:
    """Canonical match payload consumed by every analyzer.

    ``role`` on each allocation and ``map_type`` are the values stored when the
    match was logged, so results stay stable if the catalog changes later.
    Allocation percentages are expected to sum to 100; readers do not re-check.
    """

    id: str
    map: str
    map_type: MapType
    result: MatchResult
    group_size: int
    played_at: datetime
    heroes: tuple[HeroAllocation, ...]
    created_at: datetime | None = None
