"""Result types and the strategy interface for choice-of-law analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

from lexcompare.errors import UnknownJurisdiction
from lexcompare.jurisdictions import JurisdictionId, JurisdictionRef

from .facts import FactPattern


class ApproachKind(str, Enum):
    TERRITORIAL = "territorial"
    MOST_SIGNIFICANT_RELATIONSHIP = "most_significant_relationship"
    INTEREST_ANALYSIS = "interest_analysis"
    BETTER_LAW = "better_law"
    COMBINED_MODERN = "combined_modern"

    @property
    def label(self) -> str:
        return {
            ApproachKind.TERRITORIAL: "Territorial (lex loci)",
            ApproachKind.MOST_SIGNIFICANT_RELATIONSHIP: "Most Significant Relationship",
            ApproachKind.INTEREST_ANALYSIS: "Governmental Interest Analysis",
            ApproachKind.BETTER_LAW: "Better Law",
            ApproachKind.COMBINED_MODERN: "Combined Modern",
        }[self]


class AnalysisStage(str, Enum):
    IDLE = "idle"
    APPROACH_SELECTED = "approach_selected"
    FACTORS_COLLECTED = "factors_collected"
    SCORED = "scored"
    RESOLVED = "resolved"


class ConflictType(str, Enum):
    FALSE_CONFLICT = "false_conflict"
    TRUE_CONFLICT = "true_conflict"
    UNPROVIDED_FOR = "unprovided_for"


@dataclass(frozen=True)
class FactorContribution:
    """One line of the scoring trace."""

    factor: str
    jurisdiction: str
    weight: float
    contribution: float
    note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "factor": self.factor,
            "jurisdiction": self.jurisdiction,
            "weight": self.weight,
            "contribution": self.contribution,
            "note": self.note,
        }


@dataclass(frozen=True)
class ChoiceOfLawResult:
    selected: JurisdictionId
    approach: ApproachKind
    confidence: float
    trace: Tuple[FactorContribution, ...]
    reasoning: str
    scores: Tuple[Tuple[str, float], ...] = ()
    stage: AnalysisStage = AnalysisStage.RESOLVED
    soft_errors: Tuple[UnknownJurisdiction, ...] = field(default_factory=tuple)
    conflict: Optional[ConflictType] = None

    def score_for(self, code: str) -> Optional[float]:
        for candidate, score in self.scores:
            if candidate == code:
                return score
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected": {
                "code": self.selected.code,
                "name": self.selected.name,
                "tradition": self.selected.tradition.value,
            },
            "approach": self.approach.value,
            "confidence": round(self.confidence, 6),
            "trace": [item.to_dict() for item in self.trace],
            "reasoning": self.reasoning,
            "scores": [{"jurisdiction": code, "score": round(score, 6)} for code, score in self.scores],
            "stage": self.stage.value,
            "soft_errors": [error.to_dict() for error in self.soft_errors],
            "conflict": self.conflict.value if self.conflict else None,
        }


@runtime_checkable
class ChoiceOfLawStrategy(Protocol):
    """Capability shared by every doctrine: pick the governing jurisdiction."""

    approach: ApproachKind

    def analyze(self, fact_pattern: FactPattern, forum: JurisdictionRef) -> ChoiceOfLawResult:
        ...


__all__ = [
    "ApproachKind",
    "AnalysisStage",
    "ConflictType",
    "FactorContribution",
    "ChoiceOfLawResult",
    "ChoiceOfLawStrategy",
]
