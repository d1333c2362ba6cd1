"""Facade over the catalog, the analyzer and the case-law index.

The CLI and the HTTP API both talk to a :class:`ComparativeLawEngine`.  The
engine holds one catalog snapshot and one index snapshot; ``reload_catalog``
and ``rebuild_index`` build a complete replacement and publish it with a
single attribute assignment, so readers never see a half-built structure.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional

from lexcompare.caselaw import CaseLawIndex, CourtDecision, CourtLevel, SearchResult
from lexcompare.catalog import RuleCatalog
from lexcompare.choice_of_law import ApproachKind, ChoiceOfLawResult, FactPattern, analyze_choice_of_law
from lexcompare.choice_of_law.facts import ContactingFactorKind
from lexcompare.comparator import ComparisonResult, compare, jurisdiction_similarity
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry, default_registry
from lexcompare.observability import log_event
from lexcompare.report import generate_report
from lexcompare.rules import RuleEntry
from lexcompare.settings import ScoringPolicy, get_policy
from lexcompare.topics import LegalTopic

logger = logging.getLogger(__name__)


class ComparativeLawEngine:
    """Stable entry point shared by CLI and HTTP integrations."""

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        index: Optional[CaseLawIndex] = None,
        registry: Optional[JurisdictionRegistry] = None,
        policy: Optional[ScoringPolicy] = None,
    ) -> None:
        self.policy = policy or get_policy()
        self.catalog = catalog if catalog is not None else RuleCatalog.from_entries((), registry)
        self.index = index if index is not None else CaseLawIndex(self.policy)
        self.registry = (registry or default_registry()).merged(self.catalog.registry)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def reload_catalog(self, entries: Iterable[RuleEntry]) -> RuleCatalog:
        catalog = RuleCatalog.from_entries(entries, self.registry)
        self.registry = self.registry.merged(catalog.registry)
        self.catalog = catalog
        log_event("catalog.reloaded", entries=len(catalog))
        return catalog

    def rebuild_index(self, decisions: Iterable[CourtDecision]) -> CaseLawIndex:
        index = CaseLawIndex.build(decisions, self.policy)
        self.index = index
        log_event("index.rebuilt", decisions=len(index))
        return index

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def compare(self, topic: LegalTopic | str, jurisdictions: Iterable[JurisdictionRef]) -> ComparisonResult:
        result = compare(self.catalog, topic, jurisdictions)
        log_event(
            "compare.completed",
            topic=result.topic.value,
            jurisdictions=len(result.jurisdictions),
            unknown=len(result.unknown),
            majority_count=result.majority_count,
        )
        return result

    def generate_report(self, result: ComparisonResult) -> str:
        return generate_report(result)

    def similarity(
        self,
        a: JurisdictionRef,
        b: JurisdictionRef,
        topics: Optional[Iterable[LegalTopic | str]] = None,
    ) -> float:
        return jurisdiction_similarity(self.catalog, a, b, topics)

    # ------------------------------------------------------------------
    # Choice of law
    # ------------------------------------------------------------------
    def analyze_choice_of_law(
        self,
        fact_pattern: FactPattern,
        forum: JurisdictionRef,
        approach: Optional[ApproachKind | str] = None,
        law_quality: Optional[Mapping[str, float]] = None,
        weight_overrides: Optional[Mapping[ContactingFactorKind | str, float]] = None,
    ) -> ChoiceOfLawResult:
        return analyze_choice_of_law(
            fact_pattern,
            forum,
            approach,
            registry=self.registry,
            catalog=self.catalog,
            law_quality=law_quality,
            weight_overrides=weight_overrides,
        )

    # ------------------------------------------------------------------
    # Case law
    # ------------------------------------------------------------------
    def search(
        self,
        keywords: Iterable[str] = (),
        court_level: Optional[CourtLevel | str] = None,
        topic: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        results = self.index.search(keywords, court_level=court_level, topic=topic, limit=limit)
        log_event("search.completed", results=len(results))
        return results

    def get_decision(self, case_id: str) -> CourtDecision:
        return self.index.get(case_id)

    def add_decision(self, decision: CourtDecision) -> None:
        self.index.add(decision)


__all__ = ["ComparativeLawEngine"]
