"""Most-significant-relationship doctrine (Restatement Second).

Every jurisdiction named by a usable contact is a candidate.  Each candidate
is scored by the shared multi-factor scorer: one factor per contact, the
contact's fixed weight, indicator 1.0 when the contact points at the
candidate.  Scores of all candidates therefore sum to 1.0.

Confidence is the relative gap between the top two scores,
``(top - second) / top``: a close contest yields low confidence and a tie
yields 0.0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from lexcompare.errors import InsufficientFacts
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry, jurisdiction_code
from lexcompare.scoring import Factor, score_factors

from .contacts import CollectedContacts, collect_contacts, resolve_jurisdiction
from .facts import ContactingFactorKind, FactPattern
from .models import ApproachKind, ChoiceOfLawResult, FactorContribution
from .weights import weights_for

logger = logging.getLogger(__name__)


def gap_confidence(top: float, second: float) -> float:
    """Normalised gap between the two best scores, in [0, 1]."""

    if top <= 0:
        return 0.0
    return max(0.0, min(1.0, (top - second) / top))


def pick_winner(
    ranked: Sequence[Tuple[str, float]],
    forum: str,
) -> Tuple[str, float, float]:
    """Return (winner, top score, runner-up score) from first-seen ordered scores.

    Ties on the top score go to the forum when it is among them, otherwise
    to the first-seen candidate.
    """

    top = max(score for _, score in ranked)
    tied = [code for code, score in ranked if score == top]
    winner = forum if forum in tied else tied[0]
    others = [score for code, score in ranked if code != winner]
    second = max(others) if others else 0.0
    return winner, top, second


@dataclass(frozen=True)
class RelationshipScores:
    """Intermediate scoring state, reused by the better-law doctrine."""

    contacts: CollectedContacts
    scores: Tuple[Tuple[str, float], ...]  # first-seen candidate order
    trace: Tuple[FactorContribution, ...]

    def as_dict(self) -> Dict[str, float]:
        return dict(self.scores)


class MostSignificantRelationshipStrategy:
    approach = ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP

    def __init__(
        self,
        registry: Optional[JurisdictionRegistry] = None,
        weight_overrides: Optional[Mapping[ContactingFactorKind | str, float]] = None,
    ) -> None:
        self.registry = registry
        self.weight_overrides = dict(weight_overrides or {})

    def score(self, fact_pattern: FactPattern) -> RelationshipScores:
        """Score every candidate; raises ``InsufficientFacts`` with no usable contact."""

        table = weights_for(fact_pattern.topic, self.weight_overrides)
        contacts = collect_contacts(fact_pattern, self.registry, table)
        if not contacts.usable:
            raise InsufficientFacts(
                f"No usable contacting factor for {fact_pattern.topic.value}",
                topic=fact_pattern.topic.value,
            )
        # Contacts the built-in table ignores cannot tie the dispute to any law;
        # overrides that zero out relevant contacts stay an InvalidWeighting.
        base = weights_for(fact_pattern.topic)
        if all(table[f.kind] <= 0 and base[f.kind] <= 0 for f in contacts.usable):
            raise InsufficientFacts(
                f"No contacting factor relevant to {fact_pattern.topic.value}",
                topic=fact_pattern.topic.value,
            )

        candidates = contacts.candidates()
        scores: List[Tuple[str, float]] = []
        for candidate in candidates:
            factors = [
                Factor(
                    name=factor.kind.value,
                    weight=table[factor.kind],
                    indicator=1.0 if factor.jurisdiction == candidate else 0.0,
                )
                for factor in contacts.usable
            ]
            scores.append((candidate, score_factors(factors)))

        total = sum(table[factor.kind] for factor in contacts.usable)
        trace = [*contacts.excluded]
        for factor in contacts.usable:
            weight = table[factor.kind]
            trace.append(
                FactorContribution(
                    factor=factor.kind.value,
                    jurisdiction=factor.jurisdiction,
                    weight=weight,
                    contribution=weight / total if total > 0 else 0.0,
                )
            )
        return RelationshipScores(contacts=contacts, scores=tuple(scores), trace=tuple(trace))

    def analyze(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> ChoiceOfLawResult:
        forum_code = jurisdiction_code(forum)
        scored = self.score(fact_pattern)
        winner, top, second = pick_winner(scored.scores, forum_code)
        confidence = gap_confidence(top, second)
        selected, _ = resolve_jurisdiction(self.registry, winner)

        ranked = sorted(scored.scores, key=lambda item: -item[1])
        reasoning = _relationship_reasoning(selected.name, top, ranked, winner, confidence)
        logger.debug(
            "Most-significant-relationship selected %s (score %.3f, runner-up %.3f)",
            winner,
            top,
            second,
        )
        return ChoiceOfLawResult(
            selected=selected,
            approach=self.approach,
            confidence=confidence,
            trace=scored.trace,
            reasoning=reasoning,
            scores=tuple(ranked),
            soft_errors=scored.contacts.soft_errors,
        )


def _relationship_reasoning(
    name: str,
    top: float,
    ranked: Sequence[Tuple[str, float]],
    winner: str,
    confidence: float,
) -> str:
    others = [f"{code} {score:.3f}" for code, score in ranked if code != winner]
    text = f"{name} has the most significant relationship (weighted contact score {top:.3f})"
    if others:
        text += f" against {', '.join(others)}"
    text += "."
    if confidence == 0.0 and len(ranked) > 1:
        text += " The contest is tied; the tie was broken in favour of the forum or the first contact."
    elif confidence < 0.25 and len(ranked) > 1:
        text += " The margin is narrow and the selection should be treated as uncertain."
    return text


__all__ = [
    "MostSignificantRelationshipStrategy",
    "RelationshipScores",
    "gap_confidence",
    "pick_winner",
]
