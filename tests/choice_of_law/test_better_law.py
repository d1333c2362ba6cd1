from __future__ import annotations

import pytest

from lexcompare.choice_of_law import ApproachKind, BetterLawStrategy, FactPattern
from lexcompare.errors import InvalidWeighting
from lexcompare.jurisdictions import default_registry
from lexcompare.topics import LegalTopic

FP = FactPattern.build(
    LegalTopic.COMPARATIVE_NEGLIGENCE,
    [("place_of_injury", "US-WI"), ("domicile_of_plaintiff", "US-MN")],
)


def test_without_quality_relationship_decides_with_capped_confidence() -> None:
    result = BetterLawStrategy(default_registry()).analyze(FP, "US-MN")
    assert result.approach is ApproachKind.BETTER_LAW
    assert result.selected.code == "US-WI"
    assert result.confidence <= 0.7
    assert "capped" in result.reasoning


def test_single_candidate_confidence_is_capped() -> None:
    fp = FactPattern.build(LegalTopic.COMPARATIVE_NEGLIGENCE, {"place_of_injury": "US-WI"})
    assert BetterLawStrategy(default_registry()).analyze(fp, "US-WI").confidence == pytest.approx(0.7)


def test_law_quality_can_overturn_relationship_winner() -> None:
    strategy = BetterLawStrategy(default_registry(), law_quality={"US-MN": 1.0, "US-WI": 0.0})
    result = strategy.analyze(FP, "US-MN")
    assert result.selected.code == "US-MN"
    assert result.score_for("US-MN") == pytest.approx((1.5 / 4.5 + 1.0) / 2)
    assert any(item.factor == "better_law" for item in result.trace)


def test_law_quality_outside_unit_interval_is_invalid() -> None:
    strategy = BetterLawStrategy(default_registry(), law_quality={"US-MN": 1.5})
    with pytest.raises(InvalidWeighting):
        strategy.analyze(FP, "US-MN")
