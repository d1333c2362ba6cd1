"""Bulk rule and decision feeds.

The rule feed is one JSON document::

    {
      "jurisdictions": [{"code": "XX", "name": "...", "tradition": "civil_law"}],
      "rules": [
        {"jurisdiction": "US-CA", "topic": "comparative_negligence",
         "rule": {"kind": "flag", "code": "pure_comparative_negligence"},
         "statute": {"citation": "..."}, "adopted": "1975-03-31"}
      ]
    }

The decision feed is JSON Lines, one decision per line.  Both are validated
with pydantic; any malformed record fails the whole load with ``FeedError``.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lexcompare.caselaw.models import CourtDecision, CourtLevel, Outcome
from lexcompare.errors import FeedError, UnknownJurisdiction
from lexcompare.jurisdictions import JurisdictionId, JurisdictionRegistry, LegalTradition, default_registry
from lexcompare.rules import (
    CaseReference,
    DamagesType,
    RuleEntry,
    RuleVariant,
    StatuteReference,
    custom_rule,
    damages_cap,
    flag_rule,
    threshold_rule,
)
from lexcompare.topics import LegalTopic

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rule payloads (discriminated by ``kind``)
# ---------------------------------------------------------------------------

class FlagRulePayload(BaseModel):
    kind: Literal["flag"]
    code: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")

    def to_rule(self) -> RuleVariant:
        return flag_rule(self.code)


class ThresholdRulePayload(BaseModel):
    kind: Literal["threshold"]
    code: str = Field(min_length=1)
    threshold: float

    model_config = ConfigDict(extra="forbid")

    def to_rule(self) -> RuleVariant:
        return threshold_rule(self.code, self.threshold)


class DamagesCapPayload(BaseModel):
    kind: Literal["damages_cap"]
    damages_type: DamagesType
    amount: int = Field(ge=0)
    conditions: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def to_rule(self) -> RuleVariant:
        return damages_cap(self.damages_type, self.amount, self.conditions)


class CustomRulePayload(BaseModel):
    kind: Literal["custom"]
    name: str = Field(min_length=1)
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    def to_rule(self) -> RuleVariant:
        return custom_rule(self.name, self.description, self.parameters)


RulePayload = Annotated[
    Union[FlagRulePayload, ThresholdRulePayload, DamagesCapPayload, CustomRulePayload],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Rule feed records
# ---------------------------------------------------------------------------

class StatuteRecord(BaseModel):
    citation: str = Field(min_length=1)
    title: Optional[str] = None
    year: Optional[int] = None

    model_config = ConfigDict(extra="forbid")


class CaseRecord(BaseModel):
    citation: str = Field(min_length=1)
    short_name: str = Field(min_length=1)
    year: int
    significance: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class JurisdictionRecord(BaseModel):
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    tradition: LegalTradition = LegalTradition.COMMON_LAW

    model_config = ConfigDict(extra="forbid")

    @field_validator("code", mode="after")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()

    def to_id(self) -> JurisdictionId:
        return JurisdictionId(self.code, self.name, self.tradition)


class RuleRecord(BaseModel):
    jurisdiction: str = Field(min_length=1)
    topic: LegalTopic
    rule: RulePayload
    statute: Optional[StatuteRecord] = None
    cases: List[CaseRecord] = Field(default_factory=list)
    adopted: Optional[dt.date] = None
    notes: str = ""

    model_config = ConfigDict(extra="forbid")

    @field_validator("jurisdiction", mode="after")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("topic", mode="before")
    @classmethod
    def _parse_topic(cls, value: Any) -> Any:
        if isinstance(value, str):
            return LegalTopic.parse(value)
        return value

    def to_entry(self, registry: JurisdictionRegistry) -> RuleEntry:
        return RuleEntry(
            jurisdiction=registry.resolve(self.jurisdiction),
            topic=self.topic,
            rule=self.rule.to_rule(),
            statute=StatuteReference(**self.statute.model_dump()) if self.statute else None,
            cases=tuple(CaseReference(**case.model_dump()) for case in self.cases),
            adopted=self.adopted,
            notes=self.notes,
        )


class RuleFeed(BaseModel):
    jurisdictions: List[JurisdictionRecord] = Field(default_factory=list)
    rules: List[RuleRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Decision feed records
# ---------------------------------------------------------------------------

class HoldingRecord(BaseModel):
    issue: str = Field(min_length=1)
    reasoning: str = ""
    conclusion: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")


class DecisionRecord(BaseModel):
    id: str = Field(min_length=1)
    case_number: str = Field(min_length=1)
    decided: dt.date
    court_level: CourtLevel
    topic: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    outcome: Outcome = Outcome.OTHER
    jurisdiction: Optional[str] = None
    holdings: List[HoldingRecord] = Field(default_factory=list)
    parties: List[str] = Field(default_factory=list)
    cited_statutes: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def to_decision(self) -> CourtDecision:
        return CourtDecision.build(
            self.id,
            case_number=self.case_number,
            decided=self.decided,
            court_level=self.court_level,
            topic=self.topic,
            summary=self.summary,
            outcome=self.outcome,
            jurisdiction=self.jurisdiction,
            holdings=[holding.model_dump() for holding in self.holdings],
            parties=self.parties,
            cited_statutes=self.cited_statutes,
        )


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def parse_rule_feed(
    payload: Any,
    registry: Optional[JurisdictionRegistry] = None,
    source: Optional[str] = None,
) -> Tuple[List[RuleEntry], JurisdictionRegistry]:
    """Validate a decoded rule feed and convert it to catalog entries.

    Jurisdictions declared by the feed extend (and override) ``registry``.
    Returns the entries in feed order plus the registry used to resolve them.
    """
    try:
        feed = RuleFeed.model_validate(payload)
    except ValidationError as exc:
        raise FeedError(f"Invalid rule feed: {exc}", source=source) from exc

    registry = (registry or default_registry()).merged(record.to_id() for record in feed.jurisdictions)
    entries: List[RuleEntry] = []
    for position, record in enumerate(feed.rules):
        try:
            entries.append(record.to_entry(registry))
        except UnknownJurisdiction as exc:
            raise FeedError(
                f"Rule #{position} names an undeclared jurisdiction {exc.code!r}",
                source=source,
                record=position,
            ) from exc
        except (TypeError, ValueError) as exc:
            raise FeedError(f"Rule #{position} is invalid: {exc}", source=source, record=position) from exc
    return entries, registry


def load_rule_feed(
    path: Path,
    registry: Optional[JurisdictionRegistry] = None,
) -> Tuple[List[RuleEntry], JurisdictionRegistry]:
    """Load a rule feed JSON file; raises ``FeedError`` when it is malformed."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FeedError(f"Cannot read rule feed {path}: {exc}", source=str(path)) from exc

    entries, registry = parse_rule_feed(payload, registry, source=str(path))
    logger.info("Loaded %d rule entries from %s", len(entries), path)
    return entries, registry


def parse_decision_records(
    records: Iterable[Any],
    source: Optional[str] = None,
) -> List[CourtDecision]:
    decisions: List[CourtDecision] = []
    for position, raw in enumerate(records):
        try:
            decisions.append(DecisionRecord.model_validate(raw).to_decision())
        except ValueError as exc:  # includes pydantic.ValidationError
            raise FeedError(f"Decision #{position} is invalid: {exc}", source=source, record=position) from exc
    return decisions


def load_decision_feed(path: Path) -> List[CourtDecision]:
    """Load a JSON Lines decision feed; blank lines are skipped."""
    path = Path(path)
    records: List[Any] = []
    try:
        with path.open("r", encoding="utf-8") as handle:
            for line_no, line in enumerate(handle, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError as exc:
                    raise FeedError(
                        f"Line {line_no} of {path} is not valid JSON: {exc.msg}",
                        source=str(path),
                        record=line_no,
                    ) from exc
    except OSError as exc:
        raise FeedError(f"Cannot read decision feed {path}: {exc}", source=str(path)) from exc

    decisions = parse_decision_records(records, source=str(path))
    logger.info("Loaded %d decisions from %s", len(decisions), path)
    return decisions


__all__ = [
    "FlagRulePayload",
    "ThresholdRulePayload",
    "DamagesCapPayload",
    "CustomRulePayload",
    "RuleRecord",
    "RuleFeed",
    "JurisdictionRecord",
    "DecisionRecord",
    "HoldingRecord",
    "parse_rule_feed",
    "load_rule_feed",
    "parse_decision_records",
    "load_decision_feed",
]
