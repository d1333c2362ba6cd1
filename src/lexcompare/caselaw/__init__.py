"""Case-law storage and keyword search."""

from .index import CaseLawIndex
from .models import CaseMetadata, CourtDecision, CourtLevel, Holding, Outcome, SearchQuery, SearchResult

__all__ = [
    "CaseLawIndex",
    "CaseMetadata",
    "CourtDecision",
    "CourtLevel",
    "Holding",
    "Outcome",
    "SearchQuery",
    "SearchResult",
]
