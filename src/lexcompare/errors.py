"""Typed failures raised by the comparative-law engine.

Every error carries the identifier that caused it (jurisdiction code, factor
name, decision id, ...) so that callers can surface it verbatim.
"""

from __future__ import annotations

from typing import Optional


class LexCompareError(Exception):
    """Base class for all engine errors."""

    kind = "lexcompare_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class InvalidWeighting(LexCompareError):
    """Raised when a factor set cannot be scored (non-positive total weight)."""

    kind = "invalid_weighting"

    def __init__(self, message: str, factor: Optional[str] = None) -> None:
        super().__init__(message)
        self.factor = factor


class InsufficientFacts(LexCompareError):
    """Raised when a fact pattern lacks the contacts a doctrine needs."""

    kind = "insufficient_facts"

    def __init__(self, message: str, topic: Optional[str] = None, factor: Optional[str] = None) -> None:
        super().__init__(message)
        self.topic = topic
        self.factor = factor


class UnknownJurisdiction(LexCompareError):
    """A jurisdiction code that the registry does not know.

    Choice-of-law analysis treats this as a soft error: the offending factor is
    excluded and the instance is recorded on the result instead of raised.
    """

    kind = "unknown_jurisdiction"

    def __init__(self, code: str, factor: Optional[str] = None) -> None:
        detail = f" (factor {factor})" if factor else ""
        super().__init__(f"Unknown jurisdiction {code!r}{detail}")
        self.code = code
        self.factor = factor

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["jurisdiction"] = self.code
        if self.factor:
            payload["factor"] = self.factor
        return payload


class CaseNotFound(LexCompareError, KeyError):
    kind = "case_not_found"

    def __init__(self, case_id: str) -> None:
        LexCompareError.__init__(self, f"Decision {case_id!r} is not indexed")
        self.case_id = case_id

    def __str__(self) -> str:
        return self.message


class DuplicateId(LexCompareError):
    kind = "duplicate_id"

    def __init__(self, case_id: str) -> None:
        super().__init__(f"Decision {case_id!r} is already indexed")
        self.case_id = case_id


class DuplicateRuleEntry(LexCompareError):
    kind = "duplicate_rule_entry"

    def __init__(self, jurisdiction: str, topic: str) -> None:
        super().__init__(f"Duplicate rule entry for jurisdiction {jurisdiction!r} and topic {topic!r}")
        self.jurisdiction = jurisdiction
        self.topic = topic


class InvalidComparison(LexCompareError, ValueError):
    """Raised when a comparison is requested over too few jurisdictions."""

    kind = "invalid_comparison"

    def __init__(self, message: str, jurisdiction: Optional[str] = None) -> None:
        super().__init__(message)
        self.jurisdiction = jurisdiction


class FeedError(LexCompareError, ValueError):
    """Raised when a bulk rule or decision feed cannot be parsed."""

    kind = "feed_error"

    def __init__(self, message: str, source: Optional[str] = None, record: Optional[int] = None) -> None:
        super().__init__(message)
        self.source = source
        self.record = record


__all__ = [
    "LexCompareError",
    "InvalidWeighting",
    "InsufficientFacts",
    "UnknownJurisdiction",
    "CaseNotFound",
    "DuplicateId",
    "DuplicateRuleEntry",
    "InvalidComparison",
    "FeedError",
]
