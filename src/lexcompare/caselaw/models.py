"""Court decisions and search results."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from lexcompare.settings import ScoringPolicy, get_policy


class CourtLevel(str, Enum):
    """Court hierarchy, highest first."""

    SUPREME = "supreme"
    APPELLATE = "appellate"
    REGIONAL = "regional"
    DISTRICT = "district"

    @property
    def rank(self) -> int:
        return list(CourtLevel).index(self)

    @property
    def label(self) -> str:
        return {
            CourtLevel.SUPREME: "Supreme Court",
            CourtLevel.APPELLATE: "Court of Appeal",
            CourtLevel.REGIONAL: "Regional Court",
            CourtLevel.DISTRICT: "District Court",
        }[self]

    def points(self, policy: Optional[ScoringPolicy] = None) -> float:
        """Relevance bonus a decision of this level earns in every search."""

        return (policy or get_policy()).court_points()[self.value]


class Outcome(str, Enum):
    AFFIRMED = "affirmed"
    REVERSED = "reversed"
    MODIFIED = "modified"
    REMANDED = "remanded"
    DISMISSED = "dismissed"
    FOR_PLAINTIFF = "for_plaintiff"
    FOR_DEFENDANT = "for_defendant"
    OTHER = "other"


def normalise_topic(topic: str) -> str:
    return topic.strip().lower().replace("-", "_").replace(" ", "_")


@dataclass(frozen=True)
class Holding:
    issue: str
    reasoning: str
    conclusion: str

    def to_dict(self) -> Dict[str, str]:
        return {"issue": self.issue, "reasoning": self.reasoning, "conclusion": self.conclusion}


@dataclass(frozen=True)
class CaseMetadata:
    case_number: str
    decided: dt.date
    court_level: CourtLevel
    topic: str
    outcome: Outcome = Outcome.OTHER
    jurisdiction: Optional[str] = None


@dataclass(frozen=True)
class CourtDecision:
    """An indexed decision.  Construct through :meth:`build`."""

    id: str
    metadata: CaseMetadata
    summary: str
    holdings: Tuple[Holding, ...] = ()
    parties: Tuple[str, ...] = ()
    cited_statutes: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        id: str,
        *,
        case_number: str,
        decided: dt.date | str,
        court_level: CourtLevel | str,
        topic: str,
        summary: str,
        outcome: Outcome | str = Outcome.OTHER,
        jurisdiction: Optional[str] = None,
        holdings: Iterable[Holding | Mapping[str, Any]] = (),
        parties: Sequence[str] = (),
        cited_statutes: Sequence[str] = (),
    ) -> "CourtDecision":
        """Validate every required field and return an immutable decision.

        Raises ``ValueError`` naming the first missing or malformed field.
        """

        missing: List[str] = [
            name
            for name, value in (
                ("id", id),
                ("case_number", case_number),
                ("topic", topic),
                ("summary", summary),
            )
            if not (value or "").strip()
        ]
        if missing:
            raise ValueError(f"Decision {id!r} is missing required field(s): {', '.join(missing)}")

        if isinstance(decided, str):
            try:
                decided = dt.date.fromisoformat(decided)
            except ValueError:
                raise ValueError(f"Decision {id!r} has an invalid decision date {decided!r}") from None
        if not isinstance(decided, dt.date):
            raise ValueError(f"Decision {id!r} requires a decision date")

        try:
            level = CourtLevel(court_level)
        except ValueError:
            raise ValueError(f"Decision {id!r} has an unknown court level {court_level!r}") from None
        try:
            result = Outcome(outcome)
        except ValueError:
            raise ValueError(f"Decision {id!r} has an unknown outcome {outcome!r}") from None

        built_holdings: List[Holding] = []
        for position, raw in enumerate(holdings):
            holding = raw if isinstance(raw, Holding) else Holding(
                issue=str(raw.get("issue") or ""),
                reasoning=str(raw.get("reasoning") or ""),
                conclusion=str(raw.get("conclusion") or ""),
            )
            if not holding.issue.strip() or not holding.conclusion.strip():
                raise ValueError(f"Decision {id!r} holding #{position} requires an issue and a conclusion")
            built_holdings.append(holding)

        return cls(
            id=id.strip(),
            metadata=CaseMetadata(
                case_number=case_number.strip(),
                decided=decided,
                court_level=level,
                topic=normalise_topic(topic),
                outcome=result,
                jurisdiction=jurisdiction.strip().upper() if jurisdiction else None,
            ),
            summary=summary.strip(),
            holdings=tuple(built_holdings),
            parties=tuple(parties),
            cited_statutes=tuple(cited_statutes),
        )

    @property
    def decided(self) -> dt.date:
        return self.metadata.decided

    @property
    def court_level(self) -> CourtLevel:
        return self.metadata.court_level

    @property
    def topic(self) -> str:
        return self.metadata.topic

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "case_number": self.metadata.case_number,
            "decided": self.metadata.decided.isoformat(),
            "court_level": self.metadata.court_level.value,
            "topic": self.metadata.topic,
            "outcome": self.metadata.outcome.value,
            "jurisdiction": self.metadata.jurisdiction,
            "summary": self.summary,
            "holdings": [holding.to_dict() for holding in self.holdings],
            "parties": list(self.parties),
            "cited_statutes": list(self.cited_statutes),
        }


@dataclass(frozen=True)
class SearchQuery:
    """Keyword query plus optional filters.  ``limit=None`` means unbounded."""

    keywords: Tuple[str, ...] = ()
    court_level: Optional[CourtLevel] = None
    topic: Optional[str] = None
    limit: Optional[int] = None

    @classmethod
    def of(
        cls,
        keywords: Iterable[str] = (),
        court_level: Optional[CourtLevel | str] = None,
        topic: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> "SearchQuery":
        if isinstance(keywords, str):
            keywords = [keywords]
        if limit is not None and limit < 0:
            raise ValueError(f"Search limit must be non-negative, got {limit}")
        return cls(
            keywords=tuple(k for k in keywords if k and k.strip()),
            court_level=CourtLevel(court_level) if court_level is not None else None,
            topic=normalise_topic(topic) if topic else None,
            limit=limit,
        )


@dataclass(frozen=True)
class SearchResult:
    decision: CourtDecision
    score: float
    matched_keywords: Tuple[str, ...] = field(default_factory=tuple)
    rationale: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.decision.id,
            "score": round(self.score, 6),
            "matched_keywords": list(self.matched_keywords),
            "rationale": self.rationale,
            "decision": self.decision.to_dict(),
        }


__all__ = [
    "CourtLevel",
    "Outcome",
    "Holding",
    "CaseMetadata",
    "CourtDecision",
    "SearchQuery",
    "SearchResult",
    "normalise_topic",
]
