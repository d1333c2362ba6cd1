from __future__ import annotations

import pytest

from lexcompare.bootstrap import build_engine
from lexcompare.choice_of_law import ApproachKind, FactPattern
from lexcompare.errors import CaseNotFound, DuplicateId
from lexcompare.jurisdictions import us_state
from lexcompare.rules import PURE_COMPARATIVE_NEGLIGENCE, RuleEntry
from lexcompare.topics import LegalTopic


def test_engine_compares_through_its_catalog(engine) -> None:
    result = engine.compare("comparative_negligence", ["US-CA", "US-NY", "US-TX"])
    assert result.majority == PURE_COMPARATIVE_NEGLIGENCE
    assert "Majority" in engine.generate_report(result)


def test_engine_similarity(engine) -> None:
    assert engine.similarity("US-CA", "US-NY", ["comparative_negligence"]) == pytest.approx(1.0)


def test_reload_catalog_swaps_the_snapshot(engine) -> None:
    before = engine.catalog
    entries = [RuleEntry(us_state("OR"), LegalTopic.COMPARATIVE_NEGLIGENCE, PURE_COMPARATIVE_NEGLIGENCE)]
    after = engine.reload_catalog(entries)

    assert engine.catalog is after
    assert after is not before
    assert len(after) == 1
    assert len(before) == 8


def test_rebuild_index_swaps_the_snapshot(engine, decision_factory) -> None:
    old = engine.index
    engine.rebuild_index([decision_factory("only-one")])
    assert len(engine.index) == 1
    assert len(old) == 3
    with pytest.raises(CaseNotFound):
        engine.get_decision("supreme-fraud")


def test_add_decision_rejects_duplicates(engine, decision_factory) -> None:
    engine.add_decision(decision_factory("new-one"))
    assert engine.get_decision("new-one").id == "new-one"
    with pytest.raises(DuplicateId):
        engine.add_decision(decision_factory("new-one"))


def test_engine_choice_of_law_uses_catalog(engine) -> None:
    fp = FactPattern.build(
        "comparative_negligence",
        [("place_of_injury", "US-CA"), ("domicile_of_plaintiff", "US-NY")],
        interests=["US-CA", "US-NY"],
    )
    result = engine.analyze_choice_of_law(fp, "US-CA")
    assert result.approach is ApproachKind.INTEREST_ANALYSIS
    assert result.conflict.value == "false_conflict"
    assert result.selected.code == "US-CA"


def test_seed_data_loads(seed_engine) -> None:
    assert len(seed_engine.catalog) == 39
    assert len(seed_engine.index) == 8
    assert "CA-QC" in seed_engine.registry
    assert [r.decision.id for r in seed_engine.search(["fraud"])] == ["us-tx-2019-0142", "us-tx-2021-d-0387"]


def test_seed_comparison_majority_is_pure(seed_engine) -> None:
    result = seed_engine.compare("comparative_negligence", ["US-CA", "US-NY", "UK", "US-TX"])
    assert result.majority == PURE_COMPARATIVE_NEGLIGENCE
    assert result.majority_count == 3


def test_missing_data_directories_give_empty_engine(tmp_path) -> None:
    engine = build_engine(tmp_path)
    assert len(engine.catalog) == 0
    assert len(engine.index) == 0
