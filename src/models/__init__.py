"""ORM models."""

from models.base import Base
from models.match import Match, MatchHero

__all__ = ["Base", "Match", "MatchHero"]
