"""matches and match_heroes table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Match(Base):
    """One logged game for one user."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("result IN ('win', 'loss', 'draw')", name="ck_matches_result"),
        CheckConstraint("group_size >= 1 AND group_size <= 5", name="ck_matches_group_size"),
        Index("idx_matches_user_played", "user_id", "played_at"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    map: Mapped[str] = mapped_column(String(64), nullable=False)
    map_type: Mapped[str] = mapped_column(String(32), nullable=False)
    result: Mapped[str] = mapped_column(String(8), nullable=False)
    group_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    played_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )

    heroes: Mapped[list["MatchHero"]] = relationship(
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="MatchHero.position",
    )


class MatchHero(Base):
    """Share of a match spent on one hero."""

    __tablename__ = "match_heroes"
    __table_args__ = (
        CheckConstraint("percentage >= 1 AND percentage <= 100", name="ck_match_heroes_percentage"),
        CheckConstraint("role IN ('Tank', 'Damage', 'Support')", name="ck_match_heroes_role"),
        Index("idx_match_heroes_match", "match_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    match_id: Mapped[str] = mapped_column(ForeignKey("matches.id", ondelete="CASCADE"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hero: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    percentage: Mapped[int] = mapped_column(Integer, nullable=False)

    match: Mapped[Match] = relationship(back_populates="heroes")
