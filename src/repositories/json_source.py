"""Load match records from an exported JSON file."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from domain.common import HeroAllocation, MapType, MatchRecord, MatchResult, Role


def _parse_datetime(value: Any, *, field_name: str, file_path: Path) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"{file_path}: '{field_name}' must be an ISO-8601 string")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"{file_path}: invalid '{field_name}' value '{value}'") from exc


def _parse_hero(raw: Any, *, file_path: Path, match_id: str) -> HeroAllocation:
    if not isinstance(raw, dict):
        raise ValueError(f"{file_path}: match '{match_id}' has a non-object hero entry")
    hero = raw.get("hero")
    if not isinstance(hero, str) or not hero.strip():
        raise ValueError(f"{file_path}: match '{match_id}' has a hero without a name")
    try:
        role = Role(raw.get("role"))
    except ValueError as exc:
        raise ValueError(
            f"{file_path}: match '{match_id}' hero '{hero}' has unknown role '{raw.get('role')}'"
        ) from exc
    percentage = raw.get("percentage")
    if not isinstance(percentage, int) or isinstance(percentage, bool):
        raise ValueError(
            f"{file_path}: match '{match_id}' hero '{hero}' percentage must be an integer"
        )
    hero_id = raw.get("id")
    return HeroAllocation(
        hero=hero.strip(),
        role=role,
        percentage=percentage,
        id=str(hero_id) if hero_id is not None else None,
    )


def parse_match(raw: Any, *, file_path: Path, index: int) -> MatchRecord:
    """Build a ``MatchRecord`` from one camelCase export object."""
    if not isinstance(raw, dict):
        raise ValueError(f"{file_path}: entry {index} is not an object")

    match_id = str(raw.get("id") or f"match-{index}")
    map_name = raw.get("map")
    if not isinstance(map_name, str) or not map_name.strip():
        raise ValueError(f"{file_path}: match '{match_id}' is missing 'map'")
    try:
        map_type = MapType(raw.get("mapType"))
    except ValueError as exc:
        raise ValueError(
            f"{file_path}: match '{match_id}' has unknown mapType '{raw.get('mapType')}'"
        ) from exc
    try:
        result = MatchResult(raw.get("result"))
    except ValueError as exc:
        raise ValueError(
            f"{file_path}: match '{match_id}' has unknown result '{raw.get('result')}'"
        ) from exc

    group_size = raw.get("groupSize", 1)
    if not isinstance(group_size, int) or isinstance(group_size, bool):
        raise ValueError(f"{file_path}: match '{match_id}' groupSize must be an integer")

    heroes_raw = raw.get("heroes", [])
    if not isinstance(heroes_raw, list):
        raise ValueError(f"{file_path}: match '{match_id}' heroes must be a list")

    created_at_raw = raw.get("createdAt")
    return MatchRecord(
        id=match_id,
        map=map_name.strip(),
        map_type=map_type,
        result=result,
        group_size=group_size,
        played_at=_parse_datetime(raw.get("playedAt"), field_name="playedAt", file_path=file_path),
        created_at=(
            _parse_datetime(created_at_raw, field_name="createdAt", file_path=file_path)
            if created_at_raw is not None
            else None
        ),
        heroes=tuple(
            _parse_hero(hero, file_path=file_path, match_id=match_id) for hero in heroes_raw
        ),
    )


def load_matches_json(file_path: Path) -> list[MatchRecord]:
    """Read a JSON list (or ``{"matches": [...]}``) of exported matches."""
    if not file_path.exists():
        raise FileNotFoundError(f"Match export does not exist: {file_path}")

    payload = json.loads(file_path.read_text())
    entries = payload.get("matches") if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise ValueError(f"{file_path}: expected a list of matches or a 'matches' list")
    return [parse_match(entry, file_path=file_path, index=index) for index, entry in enumerate(entries)]


__all__ = ["load_matches_json", "parse_match"]
