"""Match-tracking domain modules."""

from domain.catalog import Catalog, load_catalog
from domain.common import HeroAllocation, MapType, MatchRecord, MatchResult, Role, ROLES

__all__ = [
    "Catalog",
    "HeroAllocation",
    "MapType",
    "MatchRecord",
    "MatchResult",
    "ROLES",
    "Role",
    "load_catalog",
]
