from __future__ import annotations

import math

import pytest

from lovrank.models import AdoptionMetrics, DesignMetrics
from lovrank.ranking.scoring import (
    adoption_convergence,
    connectivity_score,
    design_convergence,
    parse_count,
)

_DESIGN_FIELDS = ("extends", "has_equivalences_with", "relies_on", "used_by", "specializes", "generalizes")
_ADOPTION_FIELDS = ("reused_by_vocabularies", "reused_by_datasets", "occurrences_in_datasets")


def test_all_zero_metrics_score_exactly_zero() -> None:
    assert connectivity_score(AdoptionMetrics(), DesignMetrics()) == 0.0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        (" 7 ", 7),
        ("12.9", 12),
        ("3abc", 3),
        ("abc", 0),
        ("", 0),
        ("-4", 0),
        (None, 0),
        (-3, 0),
        (5, 5),
        (2.5, 2),
        (float("nan"), 0),
    ],
)
def test_parse_count(raw, expected) -> None:
    assert parse_count(raw) == expected


def test_weighted_formula_matches_hand_computation() -> None:
    adoption = AdoptionMetrics(reused_by_vocabularies="10", reused_by_datasets="4", occurrences_in_datasets="5000")
    design = DesignMetrics(extends=2, has_equivalences_with=1, relies_on=3)

    expected_design = math.log(3) + math.log(2) + math.log(4)
    expected_adoption = math.log(11) + math.log(5) + math.log(6)

    assert design_convergence(design) == pytest.approx(expected_design)
    assert adoption_convergence(adoption) == pytest.approx(expected_adoption)
    assert connectivity_score(adoption, design) == pytest.approx(
        (0.6 * expected_design + 0.4 * expected_adoption) / 15
    )


def test_score_is_capped_at_one() -> None:
    huge = 10**12
    adoption = AdoptionMetrics(str(huge), str(huge), str(huge))
    design = DesignMetrics(huge, huge, huge, huge, huge, huge)

    assert connectivity_score(adoption, design) == 1.0


def test_unparseable_values_count_as_zero() -> None:
    adoption = AdoptionMetrics(reused_by_vocabularies="n/a", reused_by_datasets="", occurrences_in_datasets="-")
    assert connectivity_score(adoption, DesignMetrics()) == 0.0


@pytest.mark.parametrize("value", [0, 1, 3, 17, 250, 10_000, 5_000_000])
def test_score_stays_in_unit_interval(value: int) -> None:
    adoption = AdoptionMetrics(str(value), str(value // 2), str(value * 10))
    design = DesignMetrics(value, value // 3, value, 1, 0, value // 7)

    assert 0.0 <= connectivity_score(adoption, design) <= 1.0


@pytest.mark.parametrize("field_name", _DESIGN_FIELDS)
def test_score_is_monotonic_in_each_design_count(field_name: str) -> None:
    adoption = AdoptionMetrics("3", "1", "2500")
    previous = -1.0
    for count in (0, 1, 2, 5, 40, 900):
        values = {name: 2 for name in _DESIGN_FIELDS}
        values[field_name] = count
        score = connectivity_score(adoption, DesignMetrics(**values))
        assert score >= previous
        previous = score


@pytest.mark.parametrize("field_name", _ADOPTION_FIELDS)
def test_score_is_monotonic_in_each_adoption_count(field_name: str) -> None:
    design = DesignMetrics(1, 0, 2, 0, 0, 1)
    previous = -1.0
    for count in (0, 1, 999, 1000, 25_000, 10**7):
        values = {name: "5" for name in _ADOPTION_FIELDS}
        values[field_name] = str(count)
        score = connectivity_score(AdoptionMetrics(**values), design)
        assert score >= previous
        previous = score


def test_scoring_is_deterministic() -> None:
    adoption = AdoptionMetrics("128", "33", "1234567")
    design = DesignMetrics(4, 9, 12, 31, 1, 2)

    first = connectivity_score(adoption, design)
    second = connectivity_score(adoption, design)

    assert first.hex() == second.hex()


def test_counts_beyond_float_range_clamp_to_one() -> None:
    huge = "9" * 400

    assert connectivity_score(AdoptionMetrics(huge, "0", "0"), DesignMetrics()) == 1.0
    assert connectivity_score(AdoptionMetrics("0", "0", huge), DesignMetrics()) == 1.0
    assert connectivity_score(AdoptionMetrics(), DesignMetrics(extends=10**400)) == 1.0
    assert parse_count("9" * 5000) > 0
