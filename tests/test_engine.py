"""Tests for the catalog-bound engine facade and payload conversion."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest

from domain.catalog import load_catalog
from domain.common import MapType, Role
from domain.stats import MatchStatsEngine, to_payload
from factories import BASE_TIME, make_match, match_series

AS_OF = datetime(2026, 1, 12, 12, 0)
FLEX = (("Reinhardt", Role.TANK, 60), ("Ana", Role.SUPPORT, 40))


def _sample_matches() -> list:
    return (
        match_series("WWLW", heroes=FLEX)
        + match_series(
            "LWD",
            map_name="Dorado",
            map_type=MapType.ESCORT,
            heroes=(("Kiriko", Role.SUPPORT, 100),),
            start=BASE_TIME + timedelta(days=1),
            group_size=2,
        )
    )


@pytest.fixture(scope="module")
def engine() -> MatchStatsEngine:
    return MatchStatsEngine(load_catalog())


def test_build_report_runs_every_analyzer(engine: MatchStatsEngine) -> None:
    messages: list[str] = []
    report = engine.build_report(_sample_matches(), as_of=AS_OF, echo=messages.append)

    assert report.role_filter == "all"
    assert report.total_matches == 7
    assert report.summary.total_matches == 7
    assert report.summary.draws == 1
    assert report.map_familiarity.total_maps_played == 2
    assert report.map_timeline.maps[0].map == "Dorado"
    assert report.activity_heatmap.data[-1].date.isoformat() == "2026-01-17"
    assert len(messages) == 2
    assert messages[0] == "catalog=overwatch_2 role=all matches=7 filtered_matches=7"
    assert messages[1].startswith("report_ready role=all winrate=57")


def test_build_report_role_filter_keeps_role_stats_unfiltered(engine: MatchStatsEngine) -> None:
    report = engine.build_report(_sample_matches(), Role.TANK, as_of=AS_OF)

    assert report.role_filter == "Tank"
    assert report.total_matches == 4
    assert report.hero_pool.total_unique == 1
    assert report.one_trick.top_hero == "Reinhardt"
    assert report.one_trick.top_hero_pct == pytest.approx(60.0)
    support_share = next(entry for entry in report.role_stats.distribution if entry.role is Role.SUPPORT)
    assert support_share.percentage > 0


def test_build_report_is_idempotent_and_does_not_mutate_input(engine: MatchStatsEngine) -> None:
    matches = list(reversed(_sample_matches()))
    snapshot = list(matches)

    first = engine.build_report(matches, as_of=AS_OF)
    second = engine.build_report(matches, as_of=AS_OF)

    assert first == second
    assert matches == snapshot


def test_build_report_empty_input_is_serialisable(engine: MatchStatsEngine) -> None:
    report = engine.build_report([], as_of=AS_OF)
    payload = to_payload(report)

    assert payload["totalMatches"] == 0
    assert payload["summary"]["streakType"] == "none"
    assert payload["oneTrick"]["label"] == "Diverse"
    assert payload["sessions"]["bestSession"] is None
    json.dumps(payload)


def test_to_payload_uses_camel_case_and_plain_values(engine: MatchStatsEngine) -> None:
    payload = to_payload(engine.build_report(_sample_matches(), as_of=AS_OF))

    assert payload["mapWinLoss"]["insight"]["bestMap"] == "Ilios"
    assert payload["streaks"]["recentResults"][0]["result"] == "draw"
    assert payload["streaks"]["recentResults"][0]["matchId"]
    assert payload["mapDetailed"]["data"][0]["mapType"] in {"Control", "Escort"}
    assert payload["rollingWinrate"]["data"][0]["date"] == "2026-01-05"
    assert payload["mapTimeline"]["maps"][0]["history"][0]["playedAt"] == "2026-01-06T20:00:00"
    assert payload["heroMapSynergy"]["heroes"] == ["Reinhardt", "Ana", "Kiriko"]
    assert set(payload["mapFamiliarity"]["avoidedMaps"][0]) == {"name", "type"}


def test_engine_exposes_catalog_free_analyzers(engine: MatchStatsEngine) -> None:
    matches = _sample_matches()

    assert engine.summary(matches).total_matches == 7
    assert engine.map_familiarity(matches).total_maps_available == 29
    escort = engine.most_played_heroes_for_mode(matches, "Escort")
    assert [entry.hero for entry in escort.data] == ["Kiriko"]
