"""Unit tests for map-level analyzers."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from domain.catalog import load_catalog
from domain.common import MapType, MatchResult
from domain.stats.maps import (
    confidence_stars,
    map_detailed_stats,
    map_familiarity,
    map_learning_curve,
    map_tier,
    map_timeline,
    map_win_loss,
    repeat_map_effect,
)
from factories import BASE_TIME, make_match, match_series


@pytest.mark.parametrize(
    ("winrate", "total", "expected"),
    [
        (80, 10, "S"),
        (80, 4, "A"),
        (100, 2, "C"),
        (0, 2, "C"),
        (60, 4, "B"),
        (30, 4, "C"),
        (55, 5, "A"),
        (50, 5, "B"),
        (40, 6, "C"),
        (20, 6, "D"),
    ],
)
def test_map_tier_caps_small_samples(winrate: int, total: int, expected: str) -> None:
    assert map_tier(winrate, total) == expected


def test_confidence_stars_thresholds() -> None:
    assert [confidence_stars(total) for total in (0, 2, 3, 4, 5, 9, 10, 19, 20)] == [
        1,
        1,
        2,
        2,
        3,
        3,
        4,
        4,
        5,
    ]


def test_map_win_loss_excludes_draws_from_winrate() -> None:
    matches = match_series("WWL", map_name="Ilios") + [
        make_match("loss", map_name="Busan"),
        make_match("draw", map_name="Oasis"),
    ]
    result = map_win_loss(matches)

    assert [(entry.name, entry.wins, entry.losses) for entry in result.data] == [
        ("Ilios", 2, 1),
        ("Busan", 0, 1),
        ("Oasis", 0, 0),
    ]
    assert (result.insight.best_map, result.insight.best_winrate) == ("Ilios", 67)
    assert (result.insight.worst_map, result.insight.worst_winrate) == ("Busan", 0)


def test_map_win_loss_empty_input() -> None:
    result = map_win_loss([])
    assert result.data == ()
    assert (result.insight.best_map, result.insight.best_winrate) == ("", 0)
    assert (result.insight.worst_map, result.insight.worst_winrate) == ("", 0)


def test_map_detailed_stats_tiers_and_insight() -> None:
    matches = match_series("WWWWLWWWLW", map_name="Ilios") + [
        make_match("win", map_name="Busan", played_at=BASE_TIME + timedelta(days=1)),
    ]
    result = map_detailed_stats(matches)

    assert result.overall_winrate == 82
    assert [entry.name for entry in result.data] == ["Busan", "Ilios"]

    ilios = result.data[1]
    assert (ilios.wins, ilios.losses, ilios.draws, ilios.total) == (8, 2, 0, 10)
    assert ilios.winrate == 80
    assert ilios.tier == "S"
    assert ilios.deviation == -2
    assert ilios.confidence_stars == 4
    assert ilios.volatility == 80
    assert ilios.has_enough_data is True

    busan = result.data[0]
    assert busan.tier == "C"
    assert busan.has_enough_data is False
    assert busan.volatility == 0

    assert result.insight.best_map == "Ilios"
    assert result.insight.worst_map == "Ilios"
    assert result.insight.most_volatile == "Ilios"
    assert result.insight.most_volatile_score == 80


def test_map_detailed_insight_falls_back_to_all_maps() -> None:
    matches = [
        make_match("win", map_name="Busan"),
        make_match("loss", map_name="Ilios"),
    ]
    result = map_detailed_stats(matches)

    assert result.insight.best_map == "Busan"
    assert result.insight.worst_map == "Ilios"
    assert result.insight.most_volatile == ""
    assert result.insight.most_volatile_score == 0


def test_map_detailed_stats_empty_input() -> None:
    result = map_detailed_stats([])
    assert result.data == ()
    assert result.overall_winrate == 0
    assert result.insight.best_map == ""
    assert result.insight.most_volatile == ""


def test_map_familiarity_against_catalog() -> None:
    catalog = load_catalog()
    matches = match_series("WLW", map_name="Ilios") + [
        make_match("loss", map_name="Busan", played_at=BASE_TIME + timedelta(days=1)),
    ]
    result = map_familiarity(matches, catalog)

    assert [(entry.name, entry.games_played) for entry in result.data] == [("Ilios", 3), ("Busan", 1)]
    assert result.data[0].pct_of_total == pytest.approx(75.0)
    assert result.data[0].last_results == (MatchResult.WIN, MatchResult.LOSS, MatchResult.WIN)
    assert result.total_maps_played == 2
    assert result.total_maps_available == len(catalog.maps)
    assert len(result.avoided_maps) == len(catalog.maps) - 2
    assert "Ilios" not in {entry.name for entry in result.avoided_maps}
    assert result.variety_score == 17


def test_map_familiarity_variety_boundaries() -> None:
    catalog = load_catalog()
    one_map = match_series("WWWW", map_name="Ilios")
    assert map_familiarity(one_map, catalog).variety_score == 0

    every_map = [
        make_match("win", map_name=entry.name, map_type=entry.type, played_at=BASE_TIME + timedelta(hours=index))
        for index, entry in enumerate(catalog.maps)
    ]
    result = map_familiarity(every_map, catalog)
    assert result.variety_score == 100
    assert result.avoided_maps == ()


def test_map_familiarity_empty_input() -> None:
    catalog = load_catalog()
    result = map_familiarity([], catalog)
    assert result.data == ()
    assert result.variety_score == 0
    assert result.total_maps_played == 0
    assert len(result.avoided_maps) == len(catalog.maps)


def test_map_learning_curve_compares_halves() -> None:
    matches = match_series("LLLWWW", map_name="Ilios") + match_series(
        "WWWLLL",
        map_name="Busan",
        start=BASE_TIME + timedelta(days=2),
    )
    result = map_learning_curve(matches)

    assert [entry.map for entry in result.data] == ["Ilios", "Busan"]
    ilios = result.data[0]
    assert (ilios.early_games, ilios.late_games) == (3, 3)
    assert (ilios.early_winrate, ilios.late_winrate, ilios.improvement) == (0, 100, 100)
    assert ilios.has_enough_data is True
    assert (result.insight.most_improved, result.insight.improvement_delta) == ("Ilios", 100)
    assert (result.insight.most_declined, result.insight.decline_delta) == ("Busan", -100)


def test_map_learning_curve_odd_split_and_small_samples() -> None:
    result = map_learning_curve(match_series("LLWWW", map_name="Oasis"))
    oasis = result.data[0]

    assert (oasis.early_games, oasis.late_games) == (2, 3)
    assert oasis.has_enough_data is False
    assert result.insight.most_improved == ""
    assert result.insight.improvement_delta == 0


def test_map_timeline_recency_and_rotation_gap() -> None:
    matches = [
        make_match("win", map_name="Ilios", played_at=datetime(2026, 1, 1, 20, 0)),
        make_match("loss", map_name="Ilios", played_at=datetime(2026, 1, 3, 20, 0)),
        make_match("win", map_name="Busan", map_type=MapType.CONTROL, played_at=datetime(2026, 1, 5, 20, 0)),
        make_match("win", map_name="Ilios", played_at=datetime(2026, 1, 7, 20, 0)),
    ]
    result = map_timeline(matches, as_of=datetime(2026, 1, 10, 12, 0))

    assert [entry.map for entry in result.maps] == ["Ilios", "Busan"]
    ilios, busan = result.maps
    assert ilios.total_games == 3
    assert [item.result for item in ilios.history] == [MatchResult.WIN, MatchResult.LOSS, MatchResult.WIN]
    assert ilios.rotation_gap_days == pytest.approx(3.0)
    assert ilios.last_played_days_ago == 3
    assert busan.rotation_gap_days is None
    assert busan.last_played_days_ago == 5


def test_map_timeline_keeps_last_twenty_results() -> None:
    matches = match_series("L" * 5 + "W" * 20, map_name="Ilios", step=timedelta(days=1))
    entry = map_timeline(matches, as_of=BASE_TIME + timedelta(days=30)).maps[0]

    assert entry.total_games == 25
    assert len(entry.history) == 20
    assert all(item.result == MatchResult.WIN for item in entry.history)
    assert entry.rotation_gap_days == pytest.approx(1.0)


def test_repeat_map_same_day_occurrences() -> None:
    matches = [
        make_match("win", map_name="Ilios", played_at=datetime(2026, 1, 5, 18, 0)),
        make_match("loss", map_name="Ilios", played_at=datetime(2026, 1, 5, 18, 30)),
        make_match("win", map_name="Busan", played_at=datetime(2026, 1, 5, 19, 0)),
    ]
    result = repeat_map_effect(matches)

    assert result.first_occurrence_total == 2
    assert result.repeat_total == 1
    assert result.first_occurrence_winrate == 100
    assert result.repeat_winrate == 0
    assert result.has_enough_data is False
    assert result.insight == "Only 1 repeat map instance recorded; need 5+"


def test_repeat_map_resets_each_calendar_day() -> None:
    matches = [
        make_match("win", map_name="Ilios", played_at=datetime(2026, 1, 5, 23, 0)),
        make_match("loss", map_name="Ilios", played_at=datetime(2026, 1, 6, 0, 30)),
    ]
    result = repeat_map_effect(matches)
    assert result.first_occurrence_total == 2
    assert result.repeat_total == 0


def test_repeat_map_insight_with_enough_repeats() -> None:
    matches = [make_match("loss", map_name="Ilios", played_at=BASE_TIME - timedelta(hours=1))]
    matches += match_series("WWWWW", map_name="Ilios")
    result = repeat_map_effect(matches)

    assert result.has_enough_data is True
    assert result.delta == 100
    assert result.insight == "You play better on repeat maps: +100% when the map reappears in your session"
