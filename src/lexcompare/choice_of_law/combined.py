"""Combined modern approach: interest analysis, then relationship scoring."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from lexcompare.catalog import RuleCatalog
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry
from lexcompare.settings import ScoringPolicy

from .facts import ContactingFactorKind, FactPattern
from .interest import InterestAnalysisStrategy
from .models import ApproachKind, ChoiceOfLawResult, ConflictType
from .relationship import MostSignificantRelationshipStrategy

logger = logging.getLogger(__name__)


class CombinedModernStrategy:
    approach = ApproachKind.COMBINED_MODERN

    def __init__(
        self,
        registry: Optional[JurisdictionRegistry] = None,
        catalog: Optional[RuleCatalog] = None,
        policy: Optional[ScoringPolicy] = None,
        weight_overrides: Optional[Mapping[ContactingFactorKind | str, float]] = None,
    ) -> None:
        self.interest = InterestAnalysisStrategy(registry, catalog, policy)
        self.relationship = MostSignificantRelationshipStrategy(registry, weight_overrides)

    def analyze(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> ChoiceOfLawResult:
        first = self.interest.analyze(fact_pattern, forum)
        if first.conflict is ConflictType.FALSE_CONFLICT:
            logger.debug("Combined approach resolved at the interest stage (false conflict)")
            return ChoiceOfLawResult(
                selected=first.selected,
                approach=self.approach,
                confidence=first.confidence,
                trace=first.trace,
                reasoning=first.reasoning + " No relationship analysis is needed.",
                scores=first.scores,
                soft_errors=first.soft_errors,
                conflict=first.conflict,
            )

        second = self.relationship.analyze(fact_pattern, forum)
        confidence = (first.confidence + second.confidence) / 2.0
        reasoning = (
            f"{first.reasoning} The relationship analysis is therefore applied: {second.reasoning} "
            f"Confidence averages both stages ({first.confidence:.2f} and {second.confidence:.2f})."
        )
        return ChoiceOfLawResult(
            selected=second.selected,
            approach=self.approach,
            confidence=confidence,
            trace=second.trace,
            reasoning=reasoning,
            scores=second.scores,
            soft_errors=second.soft_errors,
            conflict=first.conflict,
        )


__all__ = ["CombinedModernStrategy"]
