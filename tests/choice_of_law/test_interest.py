from __future__ import annotations

import pytest

from lexcompare.choice_of_law import ConflictType, FactPattern, InterestAnalysisStrategy
from lexcompare.jurisdictions import default_registry
from lexcompare.topics import LegalTopic

TORT = LegalTopic.COMPARATIVE_NEGLIGENCE
CONTACTS = [("place_of_injury", "US-CA"), ("domicile_of_plaintiff", "US-TX")]


@pytest.fixture()
def strategy(catalog) -> InterestAnalysisStrategy:
    return InterestAnalysisStrategy(default_registry(), catalog)


def test_single_interest_is_a_false_conflict(strategy) -> None:
    fp = FactPattern.build(TORT, CONTACTS, interests={"US-TX": "protect resident plaintiffs"})
    result = strategy.analyze(fp, "US-CA")
    assert result.conflict is ConflictType.FALSE_CONFLICT
    assert result.selected.code == "US-TX"
    assert result.confidence == pytest.approx(0.9)


def test_divergent_interests_default_to_forum(strategy) -> None:
    fp = FactPattern.build(
        TORT,
        CONTACTS,
        interests={"US-CA": "deter negligent conduct", "US-TX": "limit recovery by negligent plaintiffs"},
    )
    result = strategy.analyze(fp, "US-TX")
    assert result.conflict is ConflictType.TRUE_CONFLICT
    assert result.selected.code == "US-TX"
    assert result.confidence == pytest.approx(0.5)
    assert "policy default" in result.reasoning


def test_identical_rules_make_a_false_conflict(strategy) -> None:
    fp = FactPattern.build(
        TORT,
        [("place_of_injury", "US-CA"), ("domicile_of_plaintiff", "US-NY")],
        interests=["US-CA", "US-NY"],
    )
    result = strategy.analyze(fp, "US-NY")
    assert result.conflict is ConflictType.FALSE_CONFLICT
    assert result.selected.code == "US-NY"
    assert result.confidence == pytest.approx(0.9)


def test_without_catalog_divergence_is_assumed() -> None:
    strategy = InterestAnalysisStrategy(default_registry())
    fp = FactPattern.build(
        TORT,
        [("place_of_injury", "US-CA"), ("domicile_of_plaintiff", "US-NY")],
        interests=["US-CA", "US-NY"],
    )
    assert strategy.analyze(fp, "US-CA").conflict is ConflictType.TRUE_CONFLICT


def test_no_interest_is_unprovided_for(strategy) -> None:
    result = strategy.analyze(FactPattern.build(TORT, CONTACTS), "US-CA")
    assert result.conflict is ConflictType.UNPROVIDED_FOR
    assert result.selected.code == "US-CA"
    assert result.confidence == pytest.approx(0.5)


def test_interest_without_contact_is_ignored(strategy) -> None:
    fp = FactPattern.build(TORT, CONTACTS, interests={"US-FL": "tourism"})
    result = strategy.analyze(fp, "US-CA")
    assert result.conflict is ConflictType.UNPROVIDED_FOR
    assert any(item.jurisdiction == "US-FL" and item.note.startswith("ignored") for item in result.trace)


def test_forum_interest_counts_without_a_contact(strategy) -> None:
    fp = FactPattern.build(TORT, CONTACTS, interests={"US-NY": "forum regulates its courts"})
    result = strategy.analyze(fp, "US-NY")
    assert result.conflict is ConflictType.FALSE_CONFLICT
    assert result.selected.code == "US-NY"


def test_unknown_interested_jurisdiction_is_soft(strategy) -> None:
    fp = FactPattern.build(TORT, CONTACTS, interests={"ATLANTIS": "sovereignty", "US-CA": "deterrence"})
    result = strategy.analyze(fp, "US-TX")
    assert result.selected.code == "US-CA"
    assert [error.code for error in result.soft_errors] == ["ATLANTIS"]
