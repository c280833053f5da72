"""Unit tests for counting and rounding helpers."""

from __future__ import annotations

import pytest

from domain.common import MatchResult
from domain.stats.aggregation import (
    OutcomeTally,
    percent,
    percent_one_decimal,
    round_half_up,
    round_one_decimal,
    tally,
    tally_by,
    top_n,
)
from factories import make_match


def test_round_half_up_rounds_halves_toward_positive_infinity() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.49) == 0


def test_round_one_decimal() -> None:
    assert round_one_decimal(66.66) == pytest.approx(66.7)
    assert round_one_decimal(0.05) == pytest.approx(0.1)


def test_percent_guards_zero_denominator() -> None:
    assert percent(5, 0) == 0
    assert percent_one_decimal(5, 0) == pytest.approx(0.0)


def test_percent_rounds_to_integer_and_one_decimal() -> None:
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent_one_decimal(1, 3) == pytest.approx(33.3)
    assert percent_one_decimal(2, 3) == pytest.approx(66.7)


def test_outcome_tally_counts_draws_in_the_denominator() -> None:
    counts = OutcomeTally()
    for result in (MatchResult.WIN, MatchResult.LOSS, MatchResult.DRAW, MatchResult.WIN):
        counts.add(result)

    assert (counts.wins, counts.losses, counts.draws) == (2, 1, 1)
    assert counts.total == 4
    assert counts.winrate() == 50
    assert OutcomeTally().winrate() == 0


def test_tally_by_preserves_first_seen_key_order() -> None:
    matches = [
        make_match("win", map_name="Busan"),
        make_match("loss", map_name="Ilios"),
        make_match("win", map_name="Busan"),
    ]
    buckets = tally_by(matches, lambda match: match.map)

    assert list(buckets) == ["Busan", "Ilios"]
    assert buckets["Busan"].wins == 2
    assert buckets["Ilios"].losses == 1
    assert tally(matches).total == 3


def test_top_n_filters_small_samples_and_keeps_ties_stable() -> None:
    items = [("a", 1, 5), ("b", 3, 1), ("c", 3, 4), ("d", 3, 9)]
    ranked = top_n(items, lambda item: item[1], min_sample=2, sample=lambda item: item[2])
    assert [item[0] for item in ranked] == ["c", "d", "a"]

    limited = top_n(items, lambda item: item[1], limit=2)
    assert [item[0] for item in limited] == ["b", "c"]
