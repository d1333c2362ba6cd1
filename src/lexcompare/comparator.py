"""Majority/minority detection and pairwise rule similarity across jurisdictions.

Jurisdictions without a catalog entry for the topic are *unknown*: they are
reported separately and never counted as agreeing or disagreeing with anyone.
Their similarity to every other jurisdiction is 0.5, an explicit
"insufficient data" value rather than a guess.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from lexcompare.catalog import RuleCatalog
from lexcompare.errors import InvalidComparison
from lexcompare.jurisdictions import JurisdictionRef, jurisdiction_code
from lexcompare.rules import RuleVariant
from lexcompare.topics import LegalTopic

logger = logging.getLogger(__name__)

SAME_RULE = 1.0
DIFFERENT_RULE = 0.0
INSUFFICIENT_DATA = 0.5


@dataclass(frozen=True, eq=False)
class ComparisonResult:
    """Outcome of comparing one topic across a jurisdiction set."""

    topic: LegalTopic
    jurisdictions: Tuple[str, ...]
    majority: Optional[RuleVariant]
    majority_count: int
    minority: Tuple[RuleVariant, ...]
    by_jurisdiction: Dict[str, Optional[RuleVariant]]
    unknown: Tuple[str, ...]
    counts: Tuple[Tuple[RuleVariant, int], ...]  # first-seen order
    similarity: np.ndarray

    def count_of(self, rule: RuleVariant) -> int:
        for variant, count in self.counts:
            if variant == rule:
                return count
        return 0

    def adopters(self, rule: RuleVariant) -> List[str]:
        """Jurisdictions (in comparison order) whose rule equals ``rule``."""

        return [code for code in self.jurisdictions if self.by_jurisdiction.get(code) == rule]

    def similarity_between(self, a: JurisdictionRef, b: JurisdictionRef) -> float:
        i = self.jurisdictions.index(jurisdiction_code(a))
        j = self.jurisdictions.index(jurisdiction_code(b))
        return float(self.similarity[i, j])

    @property
    def known_count(self) -> int:
        return len(self.jurisdictions) - len(self.unknown)

    def to_dict(self) -> dict:
        return {
            "topic": self.topic.value,
            "jurisdictions": list(self.jurisdictions),
            "majority": self.majority.to_payload() if self.majority else None,
            "majority_label": str(self.majority) if self.majority else None,
            "majority_count": self.majority_count,
            "minority": [rule.to_payload() for rule in self.minority],
            "by_jurisdiction": {
                code: (rule.to_payload() if rule else None) for code, rule in self.by_jurisdiction.items()
            },
            "unknown": list(self.unknown),
            "similarity": self.similarity.tolist(),
        }


def rule_similarity(a: Optional[RuleVariant], b: Optional[RuleVariant]) -> float:
    """1.0 for equal rules, 0.0 for known different rules, 0.5 if either is unknown."""

    if a is None or b is None:
        return INSUFFICIENT_DATA
    return SAME_RULE if a == b else DIFFERENT_RULE


def _normalise_jurisdictions(jurisdictions: Iterable[JurisdictionRef]) -> Tuple[str, ...]:
    codes = [jurisdiction_code(ref) for ref in jurisdictions]
    seen: set[str] = set()
    for code in codes:
        if code in seen:
            raise InvalidComparison(f"Jurisdiction {code!r} listed more than once", jurisdiction=code)
        seen.add(code)
    if len(codes) < 2:
        raise InvalidComparison("A comparison needs at least two distinct jurisdictions")
    return tuple(codes)


def tally(rules: Iterable[Optional[RuleVariant]]) -> List[Tuple[RuleVariant, int]]:
    """Count structurally equal rules, preserving first-seen order."""

    order: List[RuleVariant] = []
    counts: Dict[RuleVariant, int] = {}
    for rule in rules:
        if rule is None:
            continue
        if rule not in counts:
            order.append(rule)
            counts[rule] = 0
        counts[rule] += 1
    return [(rule, counts[rule]) for rule in order]


def similarity_matrix(rules: Sequence[Optional[RuleVariant]]) -> np.ndarray:
    size = len(rules)
    matrix = np.ones((size, size), dtype=float)
    for i in range(size):
        for j in range(i + 1, size):
            value = rule_similarity(rules[i], rules[j])
            matrix[i, j] = value
            matrix[j, i] = value
    return matrix


def compare(
    catalog: RuleCatalog,
    topic: LegalTopic | str,
    jurisdictions: Iterable[JurisdictionRef],
) -> ComparisonResult:
    """Compare ``topic`` across ``jurisdictions`` (at least two, all distinct)."""

    topic = LegalTopic.parse(topic)
    codes = _normalise_jurisdictions(jurisdictions)

    by_jurisdiction: Dict[str, Optional[RuleVariant]] = {code: catalog.get(code, topic) for code in codes}
    ordered = [by_jurisdiction[code] for code in codes]
    unknown = tuple(code for code in codes if by_jurisdiction[code] is None)

    counts = tally(ordered)
    majority: Optional[RuleVariant] = None
    majority_count = 0
    for rule, count in counts:
        # strict ">" keeps the first-seen rule on ties
        if count > majority_count:
            majority, majority_count = rule, count
    minority = tuple(rule for rule, _ in counts if rule != majority)

    logger.debug(
        "Compared %s across %d jurisdictions: %d known, %d distinct rules",
        topic.value,
        len(codes),
        len(codes) - len(unknown),
        len(counts),
    )
    return ComparisonResult(
        topic=topic,
        jurisdictions=codes,
        majority=majority,
        majority_count=majority_count,
        minority=minority,
        by_jurisdiction=by_jurisdiction,
        unknown=unknown,
        counts=tuple(counts),
        similarity=similarity_matrix(ordered),
    )


def jurisdiction_similarity(
    catalog: RuleCatalog,
    a: JurisdictionRef,
    b: JurisdictionRef,
    topics: Optional[Iterable[LegalTopic]] = None,
) -> float:
    """Mean rule similarity of two jurisdictions over ``topics``.

    Defaults to every topic for which either jurisdiction has an entry.  With
    no topics at all the result is 0.5 (nothing to compare).
    """

    if topics is None:
        covered = {entry.topic for entry in catalog.all_for_jurisdiction(a)}
        covered |= {entry.topic for entry in catalog.all_for_jurisdiction(b)}
        selected = [topic for topic in LegalTopic if topic in covered]
    else:
        selected = [LegalTopic.parse(topic) for topic in topics]
    if not selected:
        return INSUFFICIENT_DATA
    values = [rule_similarity(catalog.get(a, topic), catalog.get(b, topic)) for topic in selected]
    return float(np.mean(values))


def rule_distribution(catalog: RuleCatalog, topic: LegalTopic | str) -> List[Tuple[RuleVariant, int]]:
    """Counts of each rule for ``topic`` across the whole catalog, most common first."""

    topic = LegalTopic.parse(topic)
    counts = tally(entry.rule for entry in catalog.all_for_topic(topic))
    # sorted() is stable, so ties keep catalog order
    return sorted(counts, key=lambda item: -item[1])


__all__ = [
    "ComparisonResult",
    "compare",
    "rule_similarity",
    "similarity_matrix",
    "tally",
    "jurisdiction_similarity",
    "rule_distribution",
    "SAME_RULE",
    "DIFFERENT_RULE",
    "INSUFFICIENT_DATA",
]
