"""Territorial (First Restatement / lex loci) doctrine.

One contact decides: the place of injury for torts, the place of contracting
for contracts and the situs for property.  When the primary contact is
missing, a documented fallback contact is used with reduced confidence.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from lexcompare.errors import InsufficientFacts
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry
from lexcompare.settings import ScoringPolicy, get_policy
from lexcompare.topics import TopicCategory

from .contacts import collect_contacts, resolve_jurisdiction
from .facts import ContactingFactorKind as K
from .facts import FactPattern
from .models import ApproachKind, ChoiceOfLawResult, FactorContribution

logger = logging.getLogger(__name__)

# category -> (primary contact, fallback contact)
TERRITORIAL_CONTACTS: Dict[TopicCategory, Tuple[K, Optional[K]]] = {
    TopicCategory.TORT: (K.PLACE_OF_INJURY, K.PLACE_OF_CONDUCT),
    TopicCategory.PROCEDURE: (K.PLACE_OF_INJURY, K.PLACE_OF_CONDUCT),
    TopicCategory.CRIMINAL: (K.PLACE_OF_CONDUCT, K.PLACE_OF_INJURY),
    TopicCategory.CONTRACT: (K.PLACE_OF_CONTRACTING, K.PLACE_OF_NEGOTIATION),
    TopicCategory.PROPERTY: (K.LOCATION_OF_SUBJECT_MATTER, None),
    TopicCategory.OTHER: (K.PLACE_OF_INJURY, K.PLACE_OF_CONDUCT),
}


class TerritorialStrategy:
    approach = ApproachKind.TERRITORIAL

    def __init__(
        self,
        registry: Optional[JurisdictionRegistry] = None,
        policy: Optional[ScoringPolicy] = None,
    ) -> None:
        self.registry = registry
        self.policy = policy or get_policy()

    def analyze(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> ChoiceOfLawResult:
        primary, fallback = TERRITORIAL_CONTACTS[fact_pattern.category]
        contacts = collect_contacts(fact_pattern, self.registry)
        usable = {factor.kind: factor for factor in reversed(contacts.usable)}

        chosen = usable.get(primary)
        confidence = self.policy.territorial_primary_confidence
        used_fallback = False
        if chosen is None and fallback is not None:
            chosen = usable.get(fallback)
            confidence = self.policy.territorial_fallback_confidence
            used_fallback = True
        if chosen is None:
            wanted = primary.value if fallback is None else f"{primary.value} or {fallback.value}"
            raise InsufficientFacts(
                f"Territorial rule for {fact_pattern.topic.value} needs {wanted}",
                topic=fact_pattern.topic.value,
                factor=primary.value,
            )

        selected, _ = resolve_jurisdiction(self.registry, chosen.jurisdiction)
        trace = [
            *contacts.excluded,
            FactorContribution(
                factor=chosen.kind.value,
                jurisdiction=chosen.jurisdiction,
                weight=1.0,
                contribution=1.0,
                note="fallback contact" if used_fallback else "primary contact",
            ),
        ]
        if used_fallback:
            reasoning = (
                f"{primary.value} is not established; the territorial rule falls back to "
                f"{chosen.kind.value}, which points to {selected.name}."
            )
        else:
            reasoning = f"Under the territorial rule the {chosen.kind.value} ({selected.name}) governs."
        logger.debug("Territorial analysis selected %s (confidence %.2f)", selected.code, confidence)
        return ChoiceOfLawResult(
            selected=selected,
            approach=self.approach,
            confidence=confidence,
            trace=tuple(trace),
            reasoning=reasoning,
            scores=((selected.code, 1.0),),
            soft_errors=contacts.soft_errors,
        )


__all__ = ["TerritorialStrategy", "TERRITORIAL_CONTACTS"]
