"""Facts that connect a dispute to the jurisdictions involved."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from lexcompare.jurisdictions import JurisdictionRef, jurisdiction_code
from lexcompare.topics import LegalTopic, TopicCategory


class ContactingFactorKind(str, Enum):
    PLACE_OF_INJURY = "place_of_injury"
    PLACE_OF_CONDUCT = "place_of_conduct"
    DOMICILE_OF_PLAINTIFF = "domicile_of_plaintiff"
    DOMICILE_OF_DEFENDANT = "domicile_of_defendant"
    PLACE_OF_BUSINESS = "place_of_business"
    PLACE_OF_RELATIONSHIP = "place_of_relationship"
    PLACE_OF_CONTRACTING = "place_of_contracting"
    PLACE_OF_NEGOTIATION = "place_of_negotiation"
    PLACE_OF_PERFORMANCE = "place_of_performance"
    LOCATION_OF_SUBJECT_MATTER = "location_of_subject_matter"


@dataclass(frozen=True)
class ContactingFactor:
    kind: ContactingFactorKind
    jurisdiction: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ContactingFactorKind(self.kind))
        code = jurisdiction_code(self.jurisdiction)
        if not code:
            raise ValueError(f"Contacting factor {self.kind.value} has no jurisdiction")
        object.__setattr__(self, "jurisdiction", code)


@dataclass(frozen=True)
class PolicyInterest:
    """A jurisdiction's asserted policy interest in having its law applied."""

    jurisdiction: str
    policy: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "jurisdiction", jurisdiction_code(self.jurisdiction))


@dataclass(frozen=True)
class FactPattern:
    """Ordered contacting factors plus free-text policy notes for one dispute."""

    topic: LegalTopic
    factors: Tuple[ContactingFactor, ...] = ()
    policy_notes: str = ""
    interests: Tuple[PolicyInterest, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "topic", LegalTopic.parse(self.topic))
        object.__setattr__(self, "factors", tuple(self.factors))
        object.__setattr__(self, "interests", tuple(self.interests))

    @classmethod
    def build(
        cls,
        topic: LegalTopic | str,
        factors: Iterable[Tuple[ContactingFactorKind | str, JurisdictionRef]] | Mapping[str, JurisdictionRef] = (),
        policy_notes: str = "",
        interests: Optional[Mapping[str, str] | Iterable[JurisdictionRef]] = None,
    ) -> "FactPattern":
        """Convenience constructor from plain values.

        ``factors`` is either ``[(kind, jurisdiction), ...]`` or a mapping of
        kind to jurisdiction; ``interests`` is a mapping of jurisdiction to
        policy text or a plain list of interested jurisdictions.
        """

        pairs = factors.items() if isinstance(factors, Mapping) else factors
        built = tuple(
            ContactingFactor(ContactingFactorKind(kind), jurisdiction_code(ref)) for kind, ref in pairs
        )
        declared: List[PolicyInterest] = []
        if isinstance(interests, Mapping):
            declared = [PolicyInterest(code, str(text)) for code, text in interests.items()]
        elif interests is not None:
            declared = [PolicyInterest(jurisdiction_code(ref)) for ref in interests]
        return cls(topic=LegalTopic.parse(topic), factors=built, policy_notes=policy_notes, interests=tuple(declared))

    @property
    def category(self) -> TopicCategory:
        return self.topic.category

    def first(self, kind: ContactingFactorKind) -> Optional[ContactingFactor]:
        for factor in self.factors:
            if factor.kind is kind:
                return factor
        return None

    def jurisdictions(self) -> List[str]:
        """Every jurisdiction named by a factor, in first-seen order."""

        ordered: List[str] = []
        for factor in self.factors:
            if factor.jurisdiction not in ordered:
                ordered.append(factor.jurisdiction)
        return ordered

    def interested_jurisdictions(self) -> List[str]:
        ordered: List[str] = []
        for interest in self.interests:
            if interest.jurisdiction not in ordered:
                ordered.append(interest.jurisdiction)
        return ordered

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic.value,
            "factors": [{"kind": f.kind.value, "jurisdiction": f.jurisdiction} for f in self.factors],
            "policy_notes": self.policy_notes,
            "interests": [{"jurisdiction": i.jurisdiction, "policy": i.policy} for i in self.interests],
        }


__all__ = ["ContactingFactorKind", "ContactingFactor", "PolicyInterest", "FactPattern"]
