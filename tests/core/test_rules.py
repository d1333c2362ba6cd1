from __future__ import annotations

import pytest

from lexcompare.jurisdictions import LegalTradition, default_registry, us_state
from lexcompare.errors import UnknownJurisdiction
from lexcompare.rules import (
    MODIFIED_COMPARATIVE_50,
    MODIFIED_COMPARATIVE_51,
    PURE_COMPARATIVE_NEGLIGENCE,
    DamagesType,
    RuleEntry,
    RuleKind,
    RuleVariant,
    StatuteReference,
    custom_rule,
    damages_cap,
    describe_rule,
    flag_rule,
    modified_joint_and_several,
    rule_from_payload,
    threshold_rule,
)
from lexcompare.topics import LegalTopic, TopicCategory


def test_rule_equality_is_structural() -> None:
    assert flag_rule("pure_comparative_negligence") == PURE_COMPARATIVE_NEGLIGENCE
    assert threshold_rule("modified_comparative_negligence", 51) == MODIFIED_COMPARATIVE_51
    assert MODIFIED_COMPARATIVE_50 != MODIFIED_COMPARATIVE_51
    assert damages_cap("non_economic", 250000) == damages_cap(DamagesType.NON_ECONOMIC, 250000)


def test_describe_rule_covers_every_kind() -> None:
    assert describe_rule(PURE_COMPARATIVE_NEGLIGENCE) == "Pure Comparative Negligence"
    assert describe_rule(MODIFIED_COMPARATIVE_51) == "Modified Comparative (51% bar)"
    assert str(damages_cap("non_economic", 250000)) == "Non-Economic Damages Cap: $250000"
    assert str(modified_joint_and_several(50)) == "Modified Joint and Several (50% threshold)"
    assert describe_rule(custom_rule("Proposition 51", "split liability")) == "Proposition 51"
    assert {rule.kind for rule in (PURE_COMPARATIVE_NEGLIGENCE, MODIFIED_COMPARATIVE_51)} == {
        RuleKind.FLAG,
        RuleKind.THRESHOLD,
    }


def test_rule_variant_rejects_missing_payload() -> None:
    with pytest.raises(ValueError):
        RuleVariant(kind=RuleKind.THRESHOLD, code="modified_comparative_negligence")
    with pytest.raises(ValueError):
        RuleVariant(kind=RuleKind.DAMAGES_CAP, amount=100)
    with pytest.raises(ValueError):
        RuleVariant(kind=RuleKind.FLAG)


def test_payload_round_trip_for_custom_rule() -> None:
    rule = custom_rule("Proposition 51", "split", {"economic": "joint", "non_economic": "several"})
    assert rule_from_payload(rule.to_payload()) == rule


def test_rule_from_payload_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError, match="Unknown rule kind"):
        rule_from_payload({"kind": "bogus"})


def test_rule_entry_citation_prefers_statute() -> None:
    entry = RuleEntry(
        us_state("NY"),
        LegalTopic.COMPARATIVE_NEGLIGENCE,
        PURE_COMPARATIVE_NEGLIGENCE,
        statute=StatuteReference("N.Y. C.P.L.R. 1411"),
    )
    assert entry.citation == "N.Y. C.P.L.R. 1411"
    assert entry.key == ("US-NY", LegalTopic.COMPARATIVE_NEGLIGENCE)


def test_rule_entry_requires_typed_fields() -> None:
    with pytest.raises(TypeError):
        RuleEntry("US-NY", LegalTopic.COMPARATIVE_NEGLIGENCE, PURE_COMPARATIVE_NEGLIGENCE)


def test_topic_parse_and_category() -> None:
    assert LegalTopic.parse("Comparative Negligence") is LegalTopic.COMPARATIVE_NEGLIGENCE
    assert LegalTopic.parse("damages-caps") is LegalTopic.DAMAGES_CAPS
    assert LegalTopic.STATUTE_OF_FRAUDS.category is TopicCategory.CONTRACT
    with pytest.raises(ValueError):
        LegalTopic.parse("astrology")


def test_default_registry_and_louisiana_tradition() -> None:
    registry = default_registry()
    assert len(registry) == 51 + 6
    assert registry.resolve("us-la").tradition is LegalTradition.CIVIL_LAW
    assert registry.resolve("US-CA").tradition is LegalTradition.COMMON_LAW
    with pytest.raises(UnknownJurisdiction):
        registry.resolve("US-ZZ")
    with pytest.raises(UnknownJurisdiction):
        us_state("ZZ")
