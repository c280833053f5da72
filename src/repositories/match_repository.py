"""Read-side access to a user's logged matches."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, selectinload

from domain.common import HeroAllocation, MapType, MatchRecord, MatchResult, Role
from models import Match, MatchHero


def match_to_record(match: Match) -> MatchRecord:
    """Map one ORM row (with loaded heroes) onto the domain record."""
    return MatchRecord(
        id=match.id,
        map=match.map,
        map_type=MapType(match.map_type),
        result=MatchResult(match.result),
        group_size=match.group_size,
        played_at=match.played_at,
        created_at=match.created_at,
        heroes=tuple(
            HeroAllocation(
                id=hero.id,
                hero=hero.hero,
                role=Role(hero.role),
                percentage=hero.percentage,
            )
            for hero in match.heroes
        ),
    )


class MatchRepository:
    """Fetch match records with their hero allocations."""

    def ensure_schema(self, engine: Engine) -> None:
        """Create the match tables when missing."""
        with engine.begin() as connection:
            existing_tables = set(inspect(connection).get_table_names())
            for table in (Match.__table__, MatchHero.__table__):
                if table.name not in existing_tables:
                    table.create(bind=connection, checkfirst=True)

    def fetch_for_user(
        self,
        session: Session,
        user_id: str,
        *,
        since: datetime | None = None,
    ) -> list[MatchRecord]:
        """Matches for ``user_id`` ordered by ``played_at``, heroes eager-loaded.

        ``since`` keeps only matches played at or after that instant.
        """
        statement = (
            select(Match)
            .where(Match.user_id == user_id)
            .options(selectinload(Match.heroes))
            .order_by(Match.played_at, Match.id)
        )
        if since is not None:
            statement = statement.where(Match.played_at >= since)
        return [match_to_record(match) for match in session.scalars(statement)]

    def count_for_user(self, session: Session, user_id: str) -> int:
        result = session.scalar(select(func.count(Match.id)).where(Match.user_id == user_id))
        return int(result or 0)


__all__ = ["MatchRepository", "match_to_record"]
