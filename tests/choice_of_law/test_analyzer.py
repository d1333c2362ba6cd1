from __future__ import annotations

import logging

import pytest

from lexcompare.choice_of_law import (
    ApproachKind,
    FactPattern,
    analyze_choice_of_law,
    build_strategy,
    select_approach,
)
from lexcompare.choice_of_law.analyzer import DEFAULT_APPROACH
from lexcompare.errors import InsufficientFacts
from lexcompare.topics import LegalTopic

FP = FactPattern.build(
    LegalTopic.COMPARATIVE_NEGLIGENCE,
    [("place_of_injury", "US-CA"), ("domicile_of_plaintiff", "US-NY")],
)


@pytest.mark.parametrize(
    "forum, expected",
    [
        ("US-VA", ApproachKind.TERRITORIAL),
        ("us-ca", ApproachKind.INTEREST_ANALYSIS),
        ("US-MN", ApproachKind.BETTER_LAW),
        ("US-NY", ApproachKind.COMBINED_MODERN),
        ("US-TX", ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP),
        ("US-OR", DEFAULT_APPROACH),
    ],
)
def test_forum_table(forum, expected) -> None:
    assert select_approach(forum) is expected


def test_override_wins_over_forum_table() -> None:
    assert select_approach("US-VA", "better_law") is ApproachKind.BETTER_LAW


def test_every_approach_has_a_strategy() -> None:
    for approach in ApproachKind:
        assert build_strategy(approach).approach is approach


def test_msr_scenario_selects_place_of_injury() -> None:
    result = analyze_choice_of_law(FP, "US-CA", "most_significant_relationship")
    assert result.selected.code == "US-CA"
    assert result.selected.name == "California"
    assert result.stage.value == "resolved"


def test_unknown_forum_is_reported_softly() -> None:
    result = analyze_choice_of_law(FP, "ATLANTIS")
    assert result.approach is DEFAULT_APPROACH
    assert result.selected.code == "US-CA"
    assert [(error.code, error.factor) for error in result.soft_errors] == [("ATLANTIS", "forum")]


def test_catalog_jurisdictions_extend_the_registry(catalog) -> None:
    result = analyze_choice_of_law(FP, "US-VA", catalog=catalog)
    assert result.approach is ApproachKind.TERRITORIAL
    assert result.selected.code == "US-CA"
    assert result.confidence == 1.0


def test_errors_propagate() -> None:
    fp = FactPattern.build(LegalTopic.COMPARATIVE_NEGLIGENCE, {"domicile_of_plaintiff": "US-NY"})
    with pytest.raises(InsufficientFacts):
        analyze_choice_of_law(fp, "US-VA")


def test_result_serialises() -> None:
    payload = analyze_choice_of_law(FP, "US-TX").to_dict()
    assert payload["selected"]["code"] == "US-CA"
    assert payload["approach"] == "most_significant_relationship"
    assert payload["trace"][0]["factor"] == "place_of_injury"
    assert payload["soft_errors"] == []


def test_every_lifecycle_stage_is_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="lexcompare.choice_of_law.analyzer"):
        result = analyze_choice_of_law(FP, "US-TX")
    messages = " ".join(record.getMessage() for record in caplog.records)
    for stage in ("idle", "approach_selected", "factors_collected", "scored", "resolved"):
        assert f"stage={stage}" in messages
    assert result.stage.value == "resolved"
