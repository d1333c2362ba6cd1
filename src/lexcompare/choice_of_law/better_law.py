"""Better-law doctrine (Leflar's choice-influencing considerations).

The relationship analysis does the heavy lifting.  When the caller supplies a
law-quality judgement per jurisdiction, each candidate is re-scored with the
shared scorer from two factors: its relationship score and its law quality.
Without such a judgement the relationship winner stands, but confidence is
capped because "better law" is an openly subjective consideration.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from lexcompare.errors import InvalidWeighting
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry, jurisdiction_code
from lexcompare.scoring import Factor, score_factors
from lexcompare.settings import ScoringPolicy, get_policy

from .contacts import resolve_jurisdiction
from .facts import ContactingFactorKind, FactPattern
from .models import ApproachKind, ChoiceOfLawResult, FactorContribution
from .relationship import MostSignificantRelationshipStrategy, gap_confidence, pick_winner

logger = logging.getLogger(__name__)


class BetterLawStrategy:
    approach = ApproachKind.BETTER_LAW

    def __init__(
        self,
        registry: Optional[JurisdictionRegistry] = None,
        law_quality: Optional[Mapping[str, float]] = None,
        policy: Optional[ScoringPolicy] = None,
        weight_overrides: Optional[Mapping[ContactingFactorKind | str, float]] = None,
    ) -> None:
        self.registry = registry
        self.policy = policy or get_policy()
        self.law_quality = {jurisdiction_code(code): float(value) for code, value in (law_quality or {}).items()}
        self.relationship = MostSignificantRelationshipStrategy(registry, weight_overrides)

    def analyze(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> ChoiceOfLawResult:
        if not self.law_quality:
            base = self.relationship.analyze(fact_pattern, forum)
            cap = self.policy.better_law_confidence_cap
            reasoning = base.reasoning + (
                f" No law-quality assessment was supplied; the relationship analysis decides "
                f"and confidence is capped at {cap:.2f}."
            )
            return ChoiceOfLawResult(
                selected=base.selected,
                approach=self.approach,
                confidence=min(base.confidence, cap),
                trace=base.trace,
                reasoning=reasoning,
                scores=base.scores,
                soft_errors=base.soft_errors,
            )

        for code, value in self.law_quality.items():
            if not 0.0 <= value <= 1.0:
                raise InvalidWeighting(f"Law quality for {code} must lie in [0, 1], got {value}", factor=code)

        forum_code = jurisdiction_code(forum)
        scored = self.relationship.score(fact_pattern)
        weight = self.policy.better_law_weight
        combined = []
        trace = list(scored.trace)
        for code, relationship_score in scored.scores:
            quality = self.law_quality.get(code, 0.0)
            factors = [
                Factor("relationship", 1.0, relationship_score),
                Factor("better_law", weight, quality),
            ]
            combined.append((code, score_factors(factors)))
            trace.append(
                FactorContribution(
                    factor="better_law",
                    jurisdiction=code,
                    weight=weight,
                    contribution=weight * quality,
                    note="caller-supplied law quality" if code in self.law_quality else "no quality supplied",
                )
            )

        winner, top, second = pick_winner(combined, forum_code)
        confidence = gap_confidence(top, second)
        selected, _ = resolve_jurisdiction(self.registry, winner)
        ranked = sorted(combined, key=lambda item: -item[1])
        reasoning = (
            f"{selected.name} prevails once the relationship score is combined with the supplied "
            f"law-quality assessment (combined score {top:.3f}, runner-up {second:.3f})."
        )
        logger.debug("Better-law analysis selected %s (combined %.3f)", winner, top)
        return ChoiceOfLawResult(
            selected=selected,
            approach=self.approach,
            confidence=confidence,
            trace=tuple(trace),
            reasoning=reasoning,
            scores=tuple(ranked),
            soft_errors=scored.contacts.soft_errors,
        )


__all__ = ["BetterLawStrategy"]
