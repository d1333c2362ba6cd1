from __future__ import annotations

import pytest

from lexcompare.caselaw import CaseLawIndex, CourtLevel
from lexcompare.errors import CaseNotFound, DuplicateId
from lexcompare.settings import get_policy


def _ids(results):
    return [result.decision.id for result in results]


def test_keyword_search_ranks_summary_hit_from_higher_court_first(index) -> None:
    results = index.search(["fraud"])

    assert _ids(results) == ["supreme-fraud", "district-fraud"]
    assert results[0].score == pytest.approx(60.0)
    assert results[1].score == pytest.approx(30.0)
    assert results[0].matched_keywords == ("fraud",)
    assert "'fraud' in summary" in results[0].rationale
    assert "'fraud' in holding" in results[1].rationale


def test_summary_keyword_alone_earns_at_least_its_band(index) -> None:
    top = index.search(["fraud"])[0]
    assert top.score >= 30.0


def test_keywords_are_anded(index) -> None:
    assert _ids(index.search(["fraud", "seller"])) == ["supreme-fraud"]
    assert index.search(["fraud", "comparative"]) == []


def test_absent_keyword_returns_empty_list(index) -> None:
    assert index.search(["nonexistent"]) == []


def test_phrase_keyword_needs_every_token(index) -> None:
    assert _ids(index.search(["concealed defects"])) == ["supreme-fraud"]
    assert index.search(["concealed warranty"]) == []


def test_search_is_case_insensitive_and_strips_punctuation(index) -> None:
    assert _ids(index.search(["FRAUD,"])) == ["supreme-fraud", "district-fraud"]


def test_empty_keywords_return_everything_ranked_by_court(index) -> None:
    results = index.search([])
    assert _ids(results) == ["supreme-fraud", "appellate-negligence", "district-fraud"]
    assert [result.score for result in results] == [30.0, 20.0, 10.0]


def test_blank_keywords_are_ignored(index) -> None:
    assert len(index.search(["", "   "])) == 3


def test_court_level_filter(index) -> None:
    assert _ids(index.search(["fraud"], court_level="district")) == ["district-fraud"]
    assert _ids(index.search(["fraud"], court_level=CourtLevel.APPELLATE)) == []


def test_topic_filter_adds_bonus(index) -> None:
    results = index.search(["fraud"], topic="Fraud")
    assert _ids(results) == ["supreme-fraud"]
    assert results[0].score == pytest.approx(80.0)
    assert "topic fraud +20" in results[0].rationale


def test_limit_applies_after_ranking(index) -> None:
    assert _ids(index.search([], limit=1)) == ["supreme-fraud"]
    assert index.search([], limit=0) == []


def test_negative_limit_is_rejected(index) -> None:
    with pytest.raises(ValueError):
        index.search([], limit=-1)


def test_ties_break_by_newest_then_id(decision_factory) -> None:
    index = CaseLawIndex.build(
        [
            decision_factory("b-older", decided="2010-01-01"),
            decision_factory("c-newer", decided="2020-01-01"),
            decision_factory("a-older", decided="2010-01-01"),
        ]
    )
    assert _ids(index.search(["delivery"])) == ["c-newer", "a-older", "b-older"]


def test_relevance_is_clamped(decision_factory) -> None:
    decision = decision_factory(
        "everywhere",
        court_level="supreme",
        summary="Fraud and concealment alleged.",
        holdings=[{"issue": "Fraud by concealment", "conclusion": "Fraud and concealment proven"}],
    )
    index = CaseLawIndex.build([decision])
    result = index.search(["fraud", "concealment"], topic="contract")[0]
    assert result.score == pytest.approx(100.0)


def test_get_and_contains(index) -> None:
    assert index.get("district-fraud").court_level is CourtLevel.DISTRICT
    assert "district-fraud" in index
    assert "missing" not in index
    with pytest.raises(CaseNotFound) as excinfo:
        index.get("missing")
    assert excinfo.value.case_id == "missing"


def test_duplicate_ids_are_rejected(index, decision_factory) -> None:
    with pytest.raises(DuplicateId):
        index.add(decision_factory("supreme-fraud"))
    assert len(index) == 3


def test_added_decision_becomes_searchable(index, decision_factory) -> None:
    index.add(decision_factory("late-fraud", summary="Fraud in the sale of goods.", court_level="regional"))
    assert "late-fraud" in _ids(index.search(["fraud"]))


def test_citing_matches_statute_case_insensitively(index) -> None:
    assert [d.id for d in index.citing("tex. bus. & com. code 27.01")] == ["supreme-fraud"]
    assert index.citing("Unknown Act 1") == []


def test_iteration_preserves_ingestion_order(index) -> None:
    assert [decision.id for decision in index] == ["supreme-fraud", "district-fraud", "appellate-negligence"]


def test_court_points_follow_policy_overrides(monkeypatch, decisions) -> None:
    monkeypatch.setenv("LEXC_DISTRICT_POINTS", "50")
    get_policy.cache_clear()
    index = CaseLawIndex.build(decisions)
    results = index.search(["fraud"])
    assert _ids(results) == ["district-fraud", "supreme-fraud"]
    assert results[0].score == pytest.approx(70.0)


def test_punctuation_only_keyword_is_searchable(decision_factory) -> None:
    index = CaseLawIndex.build([decision_factory("ampersand", summary="Smith & Jones fraud claim")])
    results = index.search(["&"])
    assert _ids(results) == ["ampersand"]
    assert results[0].score >= 30.0
    assert _ids(index.search(["smith &"])) == ["ampersand"]
