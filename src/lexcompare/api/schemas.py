"""Request models for the HTTP API."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lexcompare.caselaw import CourtLevel
from lexcompare.choice_of_law import ApproachKind, ContactingFactorKind, FactPattern
from lexcompare.topics import LegalTopic


class CompareRequest(BaseModel):
    topic: LegalTopic
    jurisdictions: List[str] = Field(..., min_length=2)

    model_config = ConfigDict(extra="forbid")

    @field_validator("topic", mode="before")
    @classmethod
    def _parse_topic(cls, value):
        if isinstance(value, str):
            return LegalTopic.parse(value)
        return value


class FactorInput(BaseModel):
    kind: ContactingFactorKind
    jurisdiction: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class ChoiceOfLawRequest(BaseModel):
    topic: LegalTopic
    forum: str = Field(..., min_length=1)
    factors: List[FactorInput] = Field(default_factory=list)
    approach: Optional[ApproachKind] = None
    policy_notes: str = ""
    interests: Dict[str, str] = Field(default_factory=dict)
    law_quality: Dict[str, float] = Field(default_factory=dict)
    weights: Dict[ContactingFactorKind, float] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @field_validator("topic", mode="before")
    @classmethod
    def _parse_topic(cls, value):
        if isinstance(value, str):
            return LegalTopic.parse(value)
        return value

    def fact_pattern(self) -> FactPattern:
        return FactPattern.build(
            self.topic,
            [(factor.kind, factor.jurisdiction) for factor in self.factors],
            policy_notes=self.policy_notes,
            interests=self.interests,
        )


class SearchRequest(BaseModel):
    keywords: List[str] = Field(default_factory=list)
    court_level: Optional[CourtLevel] = None
    topic: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


__all__ = ["CompareRequest", "FactorInput", "ChoiceOfLawRequest", "SearchRequest"]
