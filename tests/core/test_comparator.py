from __future__ import annotations

import numpy as np
import pytest

from lexcompare.catalog import RuleCatalog
from lexcompare.comparator import compare, jurisdiction_similarity, rule_distribution, rule_similarity
from lexcompare.errors import InvalidComparison
from lexcompare.jurisdictions import JurisdictionId
from lexcompare.rules import (
    CONTRIBUTORY_NEGLIGENCE,
    MODIFIED_COMPARATIVE_51,
    PURE_COMPARATIVE_NEGLIGENCE,
    RuleEntry,
)
from lexcompare.topics import LegalTopic

CN = LegalTopic.COMPARATIVE_NEGLIGENCE


def _catalog(rules: dict) -> RuleCatalog:
    return RuleCatalog.from_entries(
        RuleEntry(JurisdictionId(code, code), CN, rule) for code, rule in rules.items()
    )


def test_pure_majority_over_modified_minority() -> None:
    catalog = _catalog(
        {"A": PURE_COMPARATIVE_NEGLIGENCE, "B": MODIFIED_COMPARATIVE_51, "C": PURE_COMPARATIVE_NEGLIGENCE}
    )
    result = compare(catalog, CN, ["A", "B", "C"])

    assert result.majority == PURE_COMPARATIVE_NEGLIGENCE
    assert result.majority_count == 2
    assert result.minority == (MODIFIED_COMPARATIVE_51,)
    assert result.similarity_between("A", "C") == 1.0
    assert result.similarity_between("A", "B") == 0.0
    assert result.adopters(PURE_COMPARATIVE_NEGLIGENCE) == ["A", "C"]


def test_unknown_jurisdictions_are_reported_not_counted(catalog) -> None:
    result = compare(catalog, CN, ["US-CA", "US-WY", "US-TX"])
    assert result.unknown == ("US-WY",)
    assert result.known_count == 2
    assert result.by_jurisdiction["US-WY"] is None
    assert result.similarity_between("US-CA", "US-WY") == 0.5
    assert sum(count for _, count in result.counts) == 2


def test_tie_goes_to_first_seen_rule(catalog) -> None:
    result = compare(catalog, CN, ["US-TX", "US-CA", "US-AL"])
    assert result.majority == MODIFIED_COMPARATIVE_51
    assert result.minority == (PURE_COMPARATIVE_NEGLIGENCE, CONTRIBUTORY_NEGLIGENCE)


def test_majority_count_dominates_every_minority(catalog) -> None:
    result = compare(catalog, CN, ["US-CA", "US-TX", "US-NY", "US-AL", "US-IL"])
    for rule in result.minority:
        assert result.majority_count >= result.count_of(rule)


def test_similarity_matrix_is_symmetric_with_unit_diagonal(catalog) -> None:
    result = compare(catalog, CN, ["US-CA", "US-TX", "US-NY", "US-WY"])
    matrix = result.similarity
    assert isinstance(matrix, np.ndarray)
    assert np.allclose(np.diag(matrix), 1.0)
    assert np.array_equal(matrix, matrix.T)
    assert ((matrix >= 0.0) & (matrix <= 1.0)).all()


def test_no_known_entries_has_no_majority(catalog) -> None:
    result = compare(catalog, CN, ["US-WY", "US-MT"])
    assert result.majority is None
    assert result.majority_count == 0
    assert result.minority == ()


@pytest.mark.parametrize("jurisdictions", [["US-CA"], [], ["US-CA", "us-ca"]])
def test_invalid_jurisdiction_sets(catalog, jurisdictions) -> None:
    with pytest.raises(InvalidComparison):
        compare(catalog, CN, jurisdictions)


def test_rule_similarity_values() -> None:
    assert rule_similarity(PURE_COMPARATIVE_NEGLIGENCE, PURE_COMPARATIVE_NEGLIGENCE) == 1.0
    assert rule_similarity(PURE_COMPARATIVE_NEGLIGENCE, CONTRIBUTORY_NEGLIGENCE) == 0.0
    assert rule_similarity(None, CONTRIBUTORY_NEGLIGENCE) == 0.5


def test_jurisdiction_similarity_averages_topics(catalog) -> None:
    # CA and NY agree on negligence, differ on damages caps
    assert jurisdiction_similarity(catalog, "US-CA", "US-NY") == pytest.approx(0.5)
    assert jurisdiction_similarity(catalog, "US-CA", "US-NY", [CN]) == 1.0
    assert jurisdiction_similarity(catalog, "US-WY", "US-MT") == 0.5


def test_rule_distribution_most_common_first(catalog) -> None:
    distribution = rule_distribution(catalog, CN)
    assert distribution[0] == (PURE_COMPARATIVE_NEGLIGENCE, 2)
    assert distribution[1] == (MODIFIED_COMPARATIVE_51, 2)
    assert distribution[-1] == (CONTRIBUTORY_NEGLIGENCE, 1)


def test_to_dict_is_json_friendly(catalog) -> None:
    payload = compare(catalog, CN, ["US-CA", "US-TX"]).to_dict()
    assert payload["majority_label"] == "Pure Comparative Negligence"
    assert payload["similarity"] == [[1.0, 0.0], [0.0, 1.0]]
