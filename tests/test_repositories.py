"""Tests for loading match records from SQL and JSON sources."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool

from db import create_db_engine, create_session_factory
from domain.common import MapType, MatchResult, Role
from models import Match, MatchHero
from repositories import MatchRepository, load_matches_json


def _match_row(match_id: str, user_id: str, played_at: datetime, result: str = "win") -> Match:
    return Match(
        id=match_id,
        user_id=user_id,
        map="Ilios",
        map_type="Control",
        result=result,
        group_size=2,
        played_at=played_at,
        created_at=played_at,
        heroes=[
            MatchHero(id=f"{match_id}-h1", position=0, hero="Reinhardt", role="Tank", percentage=70),
            MatchHero(id=f"{match_id}-h2", position=1, hero="Sigma", role="Tank", percentage=30),
        ],
    )


def test_repository_round_trip_on_sqlite() -> None:
    engine = create_db_engine("sqlite+pysqlite:///:memory:")
    repository = MatchRepository()
    repository.ensure_schema(engine)
    repository.ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        session.add_all(
            [
                _match_row("b", "user-1", datetime(2026, 1, 6, 20, 0), result="loss"),
                _match_row("a", "user-1", datetime(2026, 1, 5, 20, 0)),
                _match_row("c", "user-2", datetime(2026, 1, 5, 21, 0)),
            ]
        )
        session.commit()

    with session_factory() as session:
        records = repository.fetch_for_user(session, "user-1")
        recent = repository.fetch_for_user(session, "user-1", since=datetime(2026, 1, 6))
        assert [record.id for record in recent] == ["b"]
        assert repository.fetch_for_user(session, "user-2", since=datetime(2026, 1, 6)) == []
        assert repository.count_for_user(session, "user-1") == 2
        assert repository.count_for_user(session, "nobody") == 0

    assert [record.id for record in records] == ["a", "b"]
    first = records[0]
    assert first.map_type is MapType.CONTROL
    assert first.result is MatchResult.WIN
    assert records[1].result is MatchResult.LOSS
    assert first.group_size == 2
    assert [(hero.hero, hero.role, hero.percentage) for hero in first.heroes] == [
        ("Reinhardt", Role.TANK, 70),
        ("Sigma", Role.TANK, 30),
    ]


def test_load_matches_json(tmp_path: Path) -> None:
    export_path = tmp_path / "matches.json"
    export_path.write_text(
        json.dumps(
            {
                "matches": [
                    {
                        "id": "m1",
                        "map": "Dorado",
                        "mapType": "Escort",
                        "result": "draw",
                        "groupSize": 3,
                        "playedAt": "2026-01-05T20:00:00",
                        "heroes": [
                            {"hero": "Ana", "role": "Support", "percentage": 80},
                            {"hero": "Kiriko", "role": "Support", "percentage": 20},
                        ],
                    }
                ]
            }
        )
    )
    records = load_matches_json(export_path)

    assert len(records) == 1
    record = records[0]
    assert record.id == "m1"
    assert record.map_type is MapType.ESCORT
    assert record.result is MatchResult.DRAW
    assert record.played_at == datetime(2026, 1, 5, 20, 0)
    assert record.created_at is None
    assert [hero.percentage for hero in record.heroes] == [80, 20]


def test_load_matches_json_accepts_utc_suffix(tmp_path: Path) -> None:
    export_path = tmp_path / "matches.json"
    export_path.write_text(
        json.dumps(
            [
                {
                    "id": "m1",
                    "map": "Ilios",
                    "mapType": "Control",
                    "result": "win",
                    "playedAt": "2026-01-05T20:00:00.000Z",
                    "heroes": [],
                }
            ]
        )
    )
    record = load_matches_json(export_path)[0]

    assert record.played_at.tzinfo is not None
    assert record.group_size == 1


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ({"map": "Ilios", "mapType": "Control", "result": "victory", "playedAt": "2026-01-05T20:00:00"}, "unknown result"),
        ({"map": "Ilios", "mapType": "Arena", "result": "win", "playedAt": "2026-01-05T20:00:00"}, "unknown mapType"),
        ({"map": "Ilios", "mapType": "Control", "result": "win", "playedAt": "yesterday"}, "invalid 'playedAt'"),
        (
            {
                "map": "Ilios",
                "mapType": "Control",
                "result": "win",
                "playedAt": "2026-01-05T20:00:00",
                "heroes": [{"hero": "Ana", "role": "Healer", "percentage": 100}],
            },
            "unknown role",
        ),
    ],
)
def test_load_matches_json_rejects_malformed_entries(tmp_path: Path, entry: dict, message: str) -> None:
    export_path = tmp_path / "matches.json"
    export_path.write_text(json.dumps([entry]))
    with pytest.raises(ValueError, match=message):
        load_matches_json(export_path)


def test_load_matches_json_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_matches_json(tmp_path / "missing.json")


def test_in_memory_sqlite_engine_shares_one_connection() -> None:
    engine = create_db_engine("sqlite://")
    assert isinstance(engine.pool, StaticPool)
    assert not isinstance(create_db_engine("sqlite:///matches.db").pool, StaticPool)
