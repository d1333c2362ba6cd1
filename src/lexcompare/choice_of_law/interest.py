"""Governmental interest analysis (Currie).

The analysis asks which of the connected jurisdictions has a legitimate
policy interest in having its law applied:

  false conflict : only one jurisdiction is interested, or every interested
                   jurisdiction has the same rule; apply that law.
  true conflict  : two or more interested jurisdictions with divergent rules;
                   apply forum law as a policy default.
  unprovided-for : nobody is interested; apply forum law.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from lexcompare.catalog import RuleCatalog
from lexcompare.errors import UnknownJurisdiction
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry, jurisdiction_code
from lexcompare.settings import ScoringPolicy, get_policy

from .contacts import CollectedContacts, collect_contacts, resolve_jurisdiction
from .facts import FactPattern
from .models import ApproachKind, ChoiceOfLawResult, ConflictType, FactorContribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterestClassification:
    conflict: ConflictType
    interested: Tuple[str, ...]
    selected: str
    confidence: float
    reasoning: str
    contacts: CollectedContacts
    ignored: Tuple[FactorContribution, ...]
    soft_errors: Tuple[UnknownJurisdiction, ...]


class InterestAnalysisStrategy:
    approach = ApproachKind.INTEREST_ANALYSIS

    def __init__(
        self,
        registry: Optional[JurisdictionRegistry] = None,
        catalog: Optional[RuleCatalog] = None,
        policy: Optional[ScoringPolicy] = None,
    ) -> None:
        self.registry = registry
        self.catalog = catalog
        self.policy = policy or get_policy()

    def _laws_diverge(self, fact_pattern: FactPattern, interested: List[str]) -> Optional[bool]:
        """True/False when the catalog can tell, None when it cannot."""

        if self.catalog is None:
            return None
        rules = [self.catalog.get(code, fact_pattern.topic) for code in interested]
        if any(rule is None for rule in rules):
            return None
        return any(rule != rules[0] for rule in rules[1:])

    def classify(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> InterestClassification:
        forum_code = jurisdiction_code(forum)
        contacts = collect_contacts(fact_pattern, self.registry)
        connected = set(contacts.candidates()) | {forum_code}

        interested: List[str] = []
        ignored: List[FactorContribution] = []
        errors: List[UnknownJurisdiction] = list(contacts.soft_errors)
        for interest in fact_pattern.interests:
            code = interest.jurisdiction
            if self.registry is not None and code not in self.registry and code != forum_code:
                errors.append(UnknownJurisdiction(code, factor="policy_interest"))
                ignored.append(
                    FactorContribution("policy_interest", code, 0.0, 0.0, "excluded: unknown jurisdiction")
                )
                continue
            if code not in connected:
                ignored.append(
                    FactorContribution("policy_interest", code, 0.0, 0.0, "ignored: no contact with the dispute")
                )
                continue
            if code not in interested:
                interested.append(code)

        topic = fact_pattern.topic.value
        if not interested:
            conflict = ConflictType.UNPROVIDED_FOR
            selected = forum_code
            confidence = self.policy.true_conflict_confidence
            reasoning = (
                f"No connected jurisdiction asserts a policy interest in {topic}; "
                f"this is an unprovided-for case and forum law ({forum_code}) applies by default."
            )
        elif len(interested) == 1:
            conflict = ConflictType.FALSE_CONFLICT
            selected = interested[0]
            confidence = self.policy.false_conflict_confidence
            reasoning = (
                f"False conflict: only {selected} has a legitimate policy interest in {topic}, "
                f"so its law applies."
            )
        else:
            diverge = self._laws_diverge(fact_pattern, interested)
            if diverge is False:
                conflict = ConflictType.FALSE_CONFLICT
                selected = forum_code if forum_code in interested else interested[0]
                confidence = self.policy.false_conflict_confidence
                reasoning = (
                    f"False conflict: {', '.join(interested)} are all interested in {topic} "
                    f"but their rules do not diverge; the law of {selected} applies."
                )
            else:
                conflict = ConflictType.TRUE_CONFLICT
                selected = forum_code
                confidence = self.policy.true_conflict_confidence
                basis = "rules diverge" if diverge else "divergence assumed, catalog cannot confirm"
                reasoning = (
                    f"True conflict: {', '.join(interested)} each have legitimate policy interests in "
                    f"{topic} ({basis}). Forum law ({forum_code}) is applied as a policy default, "
                    f"not as a finding that the forum's interest is stronger."
                )

        if fact_pattern.policy_notes:
            reasoning += f" Policy notes: {fact_pattern.policy_notes}"
        logger.debug("Interest analysis classified %s as %s -> %s", topic, conflict.value, selected)
        return InterestClassification(
            conflict=conflict,
            interested=tuple(interested),
            selected=selected,
            confidence=confidence,
            reasoning=reasoning,
            contacts=contacts,
            ignored=tuple(ignored),
            soft_errors=tuple(errors),
        )

    def analyze(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> ChoiceOfLawResult:
        verdict = self.classify(fact_pattern, forum)
        selected, forum_error = resolve_jurisdiction(self.registry, verdict.selected)
        soft_errors = verdict.soft_errors + ((forum_error,) if forum_error else ())

        interest_policies = {i.jurisdiction: i.policy for i in fact_pattern.interests}
        trace = [*verdict.contacts.excluded, *verdict.ignored]
        for code in verdict.interested:
            chosen = code == verdict.selected
            trace.append(
                FactorContribution(
                    factor="policy_interest",
                    jurisdiction=code,
                    weight=1.0,
                    contribution=1.0 if chosen else 0.0,
                    note=interest_policies.get(code, ""),
                )
            )
        scores = tuple((code, 1.0 if code == verdict.selected else 0.0) for code in verdict.interested)
        return ChoiceOfLawResult(
            selected=selected,
            approach=self.approach,
            confidence=verdict.confidence,
            trace=tuple(trace),
            reasoning=verdict.reasoning,
            scores=scores or ((selected.code, 1.0),),
            soft_errors=soft_errors,
            conflict=verdict.conflict,
        )


__all__ = ["InterestAnalysisStrategy", "InterestClassification"]
