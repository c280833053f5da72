"""Load the static map and hero catalog from TOML."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping
import tomllib

from domain.common import MapType, Role, ROLES

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CATALOG_PATH = ROOT_DIR / "configs" / "catalog" / "default.toml"


@dataclass(frozen=True)
class MapEntry:
    name: str
    type: MapType


@dataclass(frozen=True)
class HeroEntry:
    name: str
    role: Role


@dataclass(frozen=True)
class Catalog:
    """Immutable lookup tables for maps and heroes."""

    name: str
    maps: tuple[MapEntry, ...]
    heroes: tuple[HeroEntry, ...]
    file_path: Path | None = None
    _map_types: Mapping[str, MapType] = field(init=False, repr=False, compare=False)
    _hero_roles: Mapping[str, Role] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_map_types",
            MappingProxyType({entry.name: entry.type for entry in self.maps}),
        )
        object.__setattr__(
            self,
            "_hero_roles",
            MappingProxyType({entry.name: entry.role for entry in self.heroes}),
        )

    @property
    def map_names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.maps)

    @property
    def hero_names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.heroes)

    def map_type(self, map_name: str) -> MapType | None:
        return self._map_types.get(map_name)

    def hero_role(self, hero_name: str) -> Role | None:
        return self._hero_roles.get(hero_name)

    def heroes_for_role(self, role: Role) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.heroes if entry.role == role)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "maps": [{"name": entry.name, "type": entry.type.value} for entry in self.maps],
            "heroes": {
                role.value: list(self.heroes_for_role(role))
                for role in ROLES
            },
        }


def load_catalog(file_path: Path = DEFAULT_CATALOG_PATH) -> Catalog:
    """Load and validate one catalog TOML file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Catalog path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return parse_catalog(raw, file_path)


def parse_catalog(raw: dict[str, Any], file_path: Path) -> Catalog:
    catalog_raw = raw.get("catalog", {})
    name = str(catalog_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [catalog].name is required")

    maps = _parse_maps(raw.get("maps", []), file_path)
    heroes = _parse_heroes(raw.get("heroes", {}), file_path)
    return Catalog(name=name, maps=maps, heroes=heroes, file_path=file_path)


def _parse_maps(maps_raw: list[dict[str, Any]], file_path: Path) -> tuple[MapEntry, ...]:
    if not maps_raw:
        raise ValueError(f"{file_path}: at least one [[maps]] entry is required")

    valid_types = {map_type.value for map_type in MapType}
    entries: list[MapEntry] = []
    seen: set[str] = set()
    for index, map_raw in enumerate(maps_raw, start=1):
        map_name = str(map_raw.get("name", "")).strip()
        if not map_name:
            raise ValueError(f"{file_path}: [[maps]] entry {index} is missing a name")
        map_type = str(map_raw.get("type", "")).strip()
        if map_type not in valid_types:
            raise ValueError(
                f"{file_path}: map '{map_name}' has unknown type '{map_type}' "
                f"(expected one of {sorted(valid_types)})"
            )
        if map_name in seen:
            raise ValueError(f"{file_path}: duplicate map name '{map_name}'")
        seen.add(map_name)
        entries.append(MapEntry(name=map_name, type=MapType(map_type)))
    return tuple(entries)


def _parse_heroes(heroes_raw: dict[str, list[str]], file_path: Path) -> tuple[HeroEntry, ...]:
    valid_roles = {role.value for role in ROLES}
    unknown = sorted(set(heroes_raw) - valid_roles)
    if unknown:
        raise ValueError(f"{file_path}: unknown hero roles in [heroes]: {unknown}")

    entries: list[HeroEntry] = []
    seen: set[str] = set()
    for role in ROLES:
        for hero_value in heroes_raw.get(role.value, []):
            hero_name = str(hero_value).strip()
            if not hero_name:
                raise ValueError(f"{file_path}: empty hero name under [heroes].{role.value}")
            if hero_name in seen:
                raise ValueError(f"{file_path}: duplicate hero name '{hero_name}'")
            seen.add(hero_name)
            entries.append(HeroEntry(name=hero_name, role=role))

    if not entries:
        raise ValueError(f"{file_path}: [heroes] must list at least one hero")
    return tuple(entries)


__all__ = [
    "Catalog",
    "DEFAULT_CATALOG_PATH",
    "HeroEntry",
    "MapEntry",
    "load_catalog",
    "parse_catalog",
]
