"""Inverted keyword index over court decisions.

Summary text and each holding's issue and conclusion are tokenized into two
separate postings maps (token -> decision ids) because a summary hit and a
holding hit earn different relevance points.  A query is an AND across its
keywords: a decision is returned only when every keyword appears in its
summary or in one of its holdings.
"""

from __future__ import annotations

import logging
import string
from typing import Dict, Iterable, List, Optional, Set, Tuple

from lexcompare.errors import CaseNotFound, DuplicateId
from lexcompare.scoring import Factor, weighted_sum
from lexcompare.settings import ScoringPolicy, get_policy

from .models import CourtDecision, CourtLevel, SearchQuery, SearchResult

logger = logging.getLogger(__name__)

_PUNCTUATION = string.punctuation + "‘’“”"


def _tokenize(text: str) -> List[str]:
    """Lowercase, split on whitespace, strip surrounding punctuation.

    A word made only of punctuation, such as "&", is kept as-is.
    """
    return [word.strip(_PUNCTUATION) or word for word in text.lower().split()]


def _holding_text(decision: CourtDecision) -> str:
    return " ".join(f"{holding.issue} {holding.conclusion}" for holding in decision.holdings)


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class CaseLawIndex:
    """Decisions in ingestion order plus the postings needed to search them.

    ``add`` is the only mutator and assumes a single writer; readers see a
    consistent index once ingestion has finished.
    """

    def __init__(self, policy: Optional[ScoringPolicy] = None) -> None:
        self.policy = policy or get_policy()
        self._decisions: Dict[str, CourtDecision] = {}
        self._summary_postings: Dict[str, Set[str]] = {}
        self._holding_postings: Dict[str, Set[str]] = {}
        self._statutes: Dict[str, List[str]] = {}

    @classmethod
    def build(cls, decisions: Iterable[CourtDecision], policy: Optional[ScoringPolicy] = None) -> "CaseLawIndex":
        index = cls(policy)
        for decision in decisions:
            index.add(decision)
        logger.info("Case-law index built with %d decisions", len(index))
        return index

    def add(self, decision: CourtDecision) -> None:
        if decision.id in self._decisions:
            raise DuplicateId(decision.id)
        self._decisions[decision.id] = decision
        for token in set(_tokenize(decision.summary)):
            self._summary_postings.setdefault(token, set()).add(decision.id)
        for token in set(_tokenize(_holding_text(decision))):
            self._holding_postings.setdefault(token, set()).add(decision.id)
        for statute in decision.cited_statutes:
            self._statutes.setdefault(statute.strip().lower(), []).append(decision.id)
        logger.debug("Indexed decision %s (%s)", decision.id, decision.court_level.value)

    def get(self, case_id: str) -> CourtDecision:
        try:
            return self._decisions[case_id]
        except KeyError:
            raise CaseNotFound(case_id) from None

    def __contains__(self, case_id: object) -> bool:
        return case_id in self._decisions

    def __len__(self) -> int:
        return len(self._decisions)

    def __iter__(self):
        return iter(self._decisions.values())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _hits(self, postings: Dict[str, Set[str]], keyword: str) -> Set[str]:
        """Ids whose text contains every token of ``keyword``."""
        tokens = _tokenize(keyword)
        if not tokens:
            return set()
        hits = set(postings.get(tokens[0], ()))
        for token in tokens[1:]:
            hits &= postings.get(token, set())
        return hits

    def citing(self, statute: str) -> List[CourtDecision]:
        """Decisions citing ``statute`` (case-insensitive exact match), in ingestion order."""
        return [self._decisions[case_id] for case_id in self._statutes.get(statute.strip().lower(), [])]

    def search(
        self,
        keywords: Iterable[str] = (),
        court_level: Optional[CourtLevel | str] = None,
        topic: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        """Return decisions matching every keyword, best first.

        Args:
            keywords: Terms that must all appear (summary or holdings).  An
                empty list matches every decision that passes the filters.
            court_level: Restrict results to one court level.
            topic: Restrict results to one topic; matching earns a bonus.
            limit: Maximum number of results; ``None`` means unbounded.

        Returns:
            SearchResults sorted by score desc, decision date desc, id asc.
        """
        return self.run(SearchQuery.of(keywords, court_level, topic, limit))

    def run(self, query: SearchQuery) -> List[SearchResult]:
        keywords = [k.strip() for k in query.keywords]
        summary_hits = {k: self._hits(self._summary_postings, k) for k in keywords}
        holding_hits = {k: self._hits(self._holding_postings, k) for k in keywords}

        candidates: Iterable[str] = self._decisions.keys()
        for keyword in keywords:
            candidates = [c for c in candidates if c in summary_hits[keyword] or c in holding_hits[keyword]]

        results: List[SearchResult] = []
        for case_id in candidates:
            decision = self._decisions[case_id]
            if query.court_level is not None and decision.court_level is not query.court_level:
                continue
            if query.topic is not None and decision.topic != query.topic:
                continue
            score, matched, notes = self._score(decision, keywords, summary_hits, holding_hits, query)
            results.append(
                SearchResult(
                    decision=decision,
                    score=score,
                    matched_keywords=tuple(matched),
                    rationale="; ".join(notes),
                )
            )

        results.sort(key=lambda r: (-r.score, -r.decision.decided.toordinal(), r.decision.id))
        if query.limit is not None:
            results = results[: query.limit]
        logger.debug("Search %s returned %d result(s)", list(keywords), len(results))
        return results

    def _score(
        self,
        decision: CourtDecision,
        keywords: List[str],
        summary_hits: Dict[str, Set[str]],
        holding_hits: Dict[str, Set[str]],
        query: SearchQuery,
    ) -> Tuple[float, List[str], List[str]]:
        policy = self.policy
        factors: List[Factor] = []
        matched: List[str] = []
        notes: List[str] = []
        for keyword in keywords:
            in_summary = decision.id in summary_hits[keyword]
            in_holding = decision.id in holding_hits[keyword]
            factors.append(Factor(f"summary:{keyword}", policy.summary_keyword_points, 1.0 if in_summary else 0.0))
            factors.append(Factor(f"holding:{keyword}", policy.holding_keyword_points, 1.0 if in_holding else 0.0))
            where = [label for label, hit in (("summary", in_summary), ("holding", in_holding)) if hit]
            matched.append(keyword)
            notes.append(f"{keyword!r} in {' and '.join(where)}")

        court_points = decision.court_level.points(policy)
        factors.append(Factor("court_level", court_points, 1.0))
        notes.append(f"{decision.court_level.label} +{court_points:g}")
        if query.topic is not None:
            factors.append(Factor("topic", policy.topic_match_points, 1.0))
            notes.append(f"topic {query.topic} +{policy.topic_match_points:g}")

        score = max(0.0, min(policy.max_relevance, weighted_sum(factors)))
        return score, matched, notes


__all__ = ["CaseLawIndex"]
