"""Entry point for choice-of-law analysis.

Picks a doctrine (caller override, else the forum's approach from
``FORUM_APPROACHES``), builds the matching strategy and runs it once.  The
lifecycle is Idle -> ApproachSelected -> FactorsCollected -> Scored ->
Resolved; failures surface as typed errors, never as partial results.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Mapping, Optional

from lexcompare.catalog import RuleCatalog
from lexcompare.jurisdictions import JurisdictionRef, JurisdictionRegistry, default_registry, jurisdiction_code
from lexcompare.observability import log_event
from lexcompare.settings import ScoringPolicy, get_policy

from .better_law import BetterLawStrategy
from .combined import CombinedModernStrategy
from .contacts import resolve_jurisdiction
from .facts import ContactingFactorKind, FactPattern
from .interest import InterestAnalysisStrategy
from .models import AnalysisStage, ApproachKind, ChoiceOfLawResult, ChoiceOfLawStrategy
from .relationship import MostSignificantRelationshipStrategy
from .territorial import TerritorialStrategy

logger = logging.getLogger(__name__)

DEFAULT_APPROACH = ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP

# Forum -> approach the forum's courts follow for tort and contract conflicts
FORUM_APPROACHES: Dict[str, ApproachKind] = {
    # Traditional lex loci states
    "US-AL": ApproachKind.TERRITORIAL,
    "US-GA": ApproachKind.TERRITORIAL,
    "US-KS": ApproachKind.TERRITORIAL,
    "US-MD": ApproachKind.TERRITORIAL,
    "US-NM": ApproachKind.TERRITORIAL,
    "US-SC": ApproachKind.TERRITORIAL,
    "US-VA": ApproachKind.TERRITORIAL,
    "US-WY": ApproachKind.TERRITORIAL,
    # Governmental interest analysis
    "US-CA": ApproachKind.INTEREST_ANALYSIS,
    "US-DC": ApproachKind.INTEREST_ANALYSIS,
    # Better law (Leflar)
    "US-MN": ApproachKind.BETTER_LAW,
    "US-NH": ApproachKind.BETTER_LAW,
    "US-WI": ApproachKind.BETTER_LAW,
    "US-AR": ApproachKind.BETTER_LAW,
    "US-RI": ApproachKind.BETTER_LAW,
    # Combined modern approaches
    "US-NY": ApproachKind.COMBINED_MODERN,
    "US-PA": ApproachKind.COMBINED_MODERN,
    "US-NJ": ApproachKind.COMBINED_MODERN,
    "US-MA": ApproachKind.COMBINED_MODERN,
    # Restatement (Second)
    "US-TX": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    "US-IL": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    "US-OH": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    "US-WA": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    "US-AZ": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    "US-CO": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    "US-FL": ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP,
    # National systems: statutory lex loci delicti (Rome II art. 4, EGBGB art. 40, Tsusoku-ho art. 17)
    "EU": ApproachKind.TERRITORIAL,
    "DE": ApproachKind.TERRITORIAL,
    "FR": ApproachKind.TERRITORIAL,
    "JP": ApproachKind.TERRITORIAL,
    "UK": ApproachKind.TERRITORIAL,
}


def select_approach(forum: JurisdictionRef, override: Optional[ApproachKind | str] = None) -> ApproachKind:
    """Return ``override`` when given, else the forum's table entry."""

    if override is not None:
        return ApproachKind(override)
    return FORUM_APPROACHES.get(jurisdiction_code(forum), DEFAULT_APPROACH)


def build_strategy(
    approach: ApproachKind,
    *,
    registry: Optional[JurisdictionRegistry] = None,
    catalog: Optional[RuleCatalog] = None,
    law_quality: Optional[Mapping[str, float]] = None,
    weight_overrides: Optional[Mapping[ContactingFactorKind | str, float]] = None,
    policy: Optional[ScoringPolicy] = None,
) -> ChoiceOfLawStrategy:
    policy = policy or get_policy()
    if approach is ApproachKind.TERRITORIAL:
        return TerritorialStrategy(registry, policy)
    if approach is ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP:
        return MostSignificantRelationshipStrategy(registry, weight_overrides)
    if approach is ApproachKind.INTEREST_ANALYSIS:
        return InterestAnalysisStrategy(registry, catalog, policy)
    if approach is ApproachKind.BETTER_LAW:
        return BetterLawStrategy(registry, law_quality, policy, weight_overrides)
    if approach is ApproachKind.COMBINED_MODERN:
        return CombinedModernStrategy(registry, catalog, policy, weight_overrides)
    raise AssertionError(f"Unhandled approach {approach!r}")  # pragma: no cover


def analyze_choice_of_law(
    fact_pattern: FactPattern,
    forum: JurisdictionRef,
    approach: Optional[ApproachKind | str] = None,
    *,
    registry: Optional[JurisdictionRegistry] = None,
    catalog: Optional[RuleCatalog] = None,
    law_quality: Optional[Mapping[str, float]] = None,
    weight_overrides: Optional[Mapping[ContactingFactorKind | str, float]] = None,
) -> ChoiceOfLawResult:
    """Resolve the governing jurisdiction for ``fact_pattern`` heard in ``forum``.

    Raises ``InsufficientFacts`` or ``InvalidWeighting``.  Unknown
    jurisdictions do not raise; they are reported in ``result.soft_errors``.
    """

    if registry is None:
        registry = default_registry().merged(catalog.registry) if catalog is not None else default_registry()

    logger.debug("choice-of-law stage=%s", AnalysisStage.IDLE.value)
    chosen = select_approach(forum, approach)
    logger.debug("choice-of-law stage=%s approach=%s", AnalysisStage.APPROACH_SELECTED.value, chosen.value)

    strategy = build_strategy(
        chosen,
        registry=registry,
        catalog=catalog,
        law_quality=law_quality,
        weight_overrides=weight_overrides,
    )
    result = strategy.analyze(fact_pattern, forum)
    logger.debug("choice-of-law stage=%s factors=%d", AnalysisStage.FACTORS_COLLECTED.value, len(result.trace))
    logger.debug("choice-of-law stage=%s candidates=%d", AnalysisStage.SCORED.value, len(result.scores))

    _, forum_error = resolve_jurisdiction(registry, forum)
    if forum_error is not None and not any(e.code == forum_error.code for e in result.soft_errors):
        logger.warning("%s; analysis continues", forum_error.message)
        result = replace(result, soft_errors=result.soft_errors + (forum_error,))

    result = replace(result, stage=AnalysisStage.RESOLVED)
    logger.debug("choice-of-law stage=%s selected=%s", AnalysisStage.RESOLVED.value, result.selected.code)

    log_event(
        "choice_of_law.resolved",
        approach=result.approach.value,
        forum=jurisdiction_code(forum),
        selected=result.selected.code,
        confidence=round(result.confidence, 4),
        soft_errors=len(result.soft_errors),
    )
    return result


__all__ = [
    "DEFAULT_APPROACH",
    "FORUM_APPROACHES",
    "select_approach",
    "build_strategy",
    "analyze_choice_of_law",
]
