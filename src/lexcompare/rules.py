"""Rule variants: the specific form a rule takes in one jurisdiction.

A :class:`RuleVariant` is a discriminated record.  ``kind`` selects which of
the payload fields are meaningful:

  FLAG         : ``code`` only (e.g. pure comparative negligence)
  THRESHOLD    : ``code`` + numeric ``threshold`` (modified comparative 51%)
  DAMAGES_CAP  : ``damages_type`` + ``amount`` + ``conditions``
  CUSTOM       : ``code`` (the rule name) + ``description`` + ``parameters``

Equality is structural over the payload, so two jurisdictions that adopted
the same rule compare equal regardless of where or when they adopted it.
Citation and adoption data live on :class:`RuleEntry`, not on the variant.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from lexcompare.jurisdictions import JurisdictionId
from lexcompare.topics import LegalTopic


class RuleKind(str, Enum):
    FLAG = "flag"
    THRESHOLD = "threshold"
    DAMAGES_CAP = "damages_cap"
    CUSTOM = "custom"


class DamagesType(str, Enum):
    ECONOMIC = "economic"
    NON_ECONOMIC = "non_economic"
    PUNITIVE = "punitive"
    TOTAL = "total"

    @property
    def label(self) -> str:
        return {
            DamagesType.ECONOMIC: "Economic Damages",
            DamagesType.NON_ECONOMIC: "Non-Economic Damages",
            DamagesType.PUNITIVE: "Punitive Damages",
            DamagesType.TOTAL: "Total Damages",
        }[self]


_FLAG_LABELS: Dict[str, str] = {
    "pure_comparative_negligence": "Pure Comparative Negligence",
    "contributory_negligence": "Contributory Negligence",
    "no_damages_cap": "No Damages Cap",
    "joint_and_several_liability": "Joint and Several Liability",
    "several_liability_only": "Several Liability Only",
}

_THRESHOLD_LABELS: Dict[str, str] = {
    "modified_comparative_negligence": "Modified Comparative ({cutoff}% bar)",
    "modified_joint_and_several": "Modified Joint and Several ({cutoff}% threshold)",
}


def _format_number(value: float) -> str:
    return f"{value:g}"


def _humanize(code: str) -> str:
    return code.replace("_", " ").strip().title()


@dataclass(frozen=True)
class RuleVariant:
    """A single rule shape; see the module docstring for the kind table."""

    kind: RuleKind
    code: str = ""
    threshold: Optional[float] = None
    damages_type: Optional[DamagesType] = None
    amount: Optional[int] = None
    conditions: Tuple[str, ...] = ()
    description: str = ""
    parameters: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.kind, RuleKind):
            raise TypeError(f"RuleVariant.kind must be a RuleKind, got {self.kind!r}")
        if self.kind is RuleKind.FLAG:
            if not self.code:
                raise ValueError("Flag rule requires a code")
        elif self.kind is RuleKind.THRESHOLD:
            if not self.code:
                raise ValueError("Threshold rule requires a code")
            if self.threshold is None:
                raise ValueError(f"Threshold rule {self.code!r} requires a numeric threshold")
        elif self.kind is RuleKind.DAMAGES_CAP:
            if self.damages_type is None:
                raise ValueError("Damages cap requires a damages type")
            if self.amount is None or self.amount < 0:
                raise ValueError("Damages cap requires a non-negative amount")
        elif self.kind is RuleKind.CUSTOM:
            if not self.code:
                raise ValueError("Custom rule requires a name")
        else:  # pragma: no cover - closed enum
            raise AssertionError(f"Unhandled rule kind {self.kind!r}")

    def __str__(self) -> str:
        return describe_rule(self)

    def to_payload(self) -> Dict[str, Any]:
        """Return a JSON-friendly mapping that ``rule_from_payload`` accepts."""

        if self.kind is RuleKind.FLAG:
            return {"kind": self.kind.value, "code": self.code}
        if self.kind is RuleKind.THRESHOLD:
            return {"kind": self.kind.value, "code": self.code, "threshold": self.threshold}
        if self.kind is RuleKind.DAMAGES_CAP:
            return {
                "kind": self.kind.value,
                "damages_type": self.damages_type.value if self.damages_type else None,
                "amount": self.amount,
                "conditions": list(self.conditions),
            }
        if self.kind is RuleKind.CUSTOM:
            return {
                "kind": self.kind.value,
                "name": self.code,
                "description": self.description,
                "parameters": dict(self.parameters),
            }
        raise AssertionError(f"Unhandled rule kind {self.kind!r}")  # pragma: no cover


def describe_rule(rule: RuleVariant) -> str:
    """Human-readable label for a rule variant."""

    if rule.kind is RuleKind.FLAG:
        return _FLAG_LABELS.get(rule.code, _humanize(rule.code))
    if rule.kind is RuleKind.THRESHOLD:
        cutoff = _format_number(float(rule.threshold or 0.0))
        template = _THRESHOLD_LABELS.get(rule.code)
        if template:
            return template.format(cutoff=cutoff)
        return f"{_humanize(rule.code)} ({cutoff})"
    if rule.kind is RuleKind.DAMAGES_CAP:
        damages = rule.damages_type.label if rule.damages_type else "Damages"
        text = f"{damages} Cap: ${rule.amount}"
        if rule.conditions:
            text += f" [{'; '.join(rule.conditions)}]"
        return text
    if rule.kind is RuleKind.CUSTOM:
        return rule.code
    raise AssertionError(f"Unhandled rule kind {rule.kind!r}")  # pragma: no cover


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def flag_rule(code: str) -> RuleVariant:
    return RuleVariant(kind=RuleKind.FLAG, code=code.strip().lower())


def threshold_rule(code: str, threshold: float) -> RuleVariant:
    return RuleVariant(kind=RuleKind.THRESHOLD, code=code.strip().lower(), threshold=float(threshold))


def damages_cap(
    damages_type: DamagesType | str,
    amount: int,
    conditions: Iterable[str] = (),
) -> RuleVariant:
    return RuleVariant(
        kind=RuleKind.DAMAGES_CAP,
        damages_type=DamagesType(damages_type),
        amount=int(amount),
        conditions=tuple(conditions),
    )


def custom_rule(
    name: str,
    description: str = "",
    parameters: Optional[Mapping[str, Any]] = None,
) -> RuleVariant:
    params = tuple(sorted((str(k), str(v)) for k, v in (parameters or {}).items()))
    return RuleVariant(kind=RuleKind.CUSTOM, code=name.strip(), description=description, parameters=params)


def rule_from_payload(payload: Mapping[str, Any]) -> RuleVariant:
    """Build a RuleVariant from a ``kind``-tagged mapping.

    Raises ``ValueError`` for an unknown kind or a missing required field.
    """

    raw_kind = payload.get("kind")
    try:
        kind = RuleKind(raw_kind)
    except ValueError:
        raise ValueError(f"Unknown rule kind {raw_kind!r}") from None

    if kind is RuleKind.FLAG:
        return flag_rule(str(payload.get("code") or ""))
    if kind is RuleKind.THRESHOLD:
        if payload.get("threshold") is None:
            raise ValueError(f"Threshold rule {payload.get('code')!r} requires a numeric threshold")
        return threshold_rule(str(payload.get("code") or ""), float(payload["threshold"]))
    if kind is RuleKind.DAMAGES_CAP:
        if payload.get("damages_type") is None or payload.get("amount") is None:
            raise ValueError("Damages cap requires damages_type and amount")
        return damages_cap(payload["damages_type"], int(payload["amount"]), payload.get("conditions") or ())
    if kind is RuleKind.CUSTOM:
        return custom_rule(
            str(payload.get("name") or payload.get("code") or ""),
            str(payload.get("description") or ""),
            payload.get("parameters") or {},
        )
    raise AssertionError(f"Unhandled rule kind {kind!r}")  # pragma: no cover


PURE_COMPARATIVE_NEGLIGENCE = flag_rule("pure_comparative_negligence")
MODIFIED_COMPARATIVE_50 = threshold_rule("modified_comparative_negligence", 50)
MODIFIED_COMPARATIVE_51 = threshold_rule("modified_comparative_negligence", 51)
CONTRIBUTORY_NEGLIGENCE = flag_rule("contributory_negligence")
NO_DAMAGES_CAP = flag_rule("no_damages_cap")
JOINT_AND_SEVERAL_LIABILITY = flag_rule("joint_and_several_liability")
SEVERAL_LIABILITY_ONLY = flag_rule("several_liability_only")


def modified_joint_and_several(threshold_percent: float) -> RuleVariant:
    return threshold_rule("modified_joint_and_several", threshold_percent)


# ---------------------------------------------------------------------------
# Citations and catalog entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StatuteReference:
    citation: str
    title: Optional[str] = None
    year: Optional[int] = None

    def __str__(self) -> str:
        if self.title:
            return f"{self.citation} ({self.title})"
        return self.citation


@dataclass(frozen=True)
class CaseReference:
    citation: str
    short_name: str
    year: int
    significance: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.short_name} ({self.year})"


@dataclass(frozen=True)
class RuleEntry:
    """A rule variant attached to one (jurisdiction, topic) with its sources."""

    jurisdiction: JurisdictionId
    topic: LegalTopic
    rule: RuleVariant
    statute: Optional[StatuteReference] = None
    cases: Tuple[CaseReference, ...] = field(default_factory=tuple)
    adopted: Optional[dt.date] = None
    notes: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.jurisdiction, JurisdictionId):
            raise TypeError(f"RuleEntry.jurisdiction must be a JurisdictionId, got {self.jurisdiction!r}")
        if not isinstance(self.topic, LegalTopic):
            raise TypeError(f"RuleEntry.topic must be a LegalTopic, got {self.topic!r}")
        if not isinstance(self.rule, RuleVariant):
            raise TypeError(f"RuleEntry.rule must be a RuleVariant, got {self.rule!r}")

    @property
    def key(self) -> Tuple[str, LegalTopic]:
        return (self.jurisdiction.code, self.topic)

    @property
    def citation(self) -> Optional[str]:
        """Primary citation: the statute if any, otherwise the first case."""

        if self.statute is not None:
            return str(self.statute)
        if self.cases:
            return self.cases[0].citation
        return None


__all__ = [
    "RuleKind",
    "DamagesType",
    "RuleVariant",
    "describe_rule",
    "flag_rule",
    "threshold_rule",
    "damages_cap",
    "custom_rule",
    "rule_from_payload",
    "modified_joint_and_several",
    "PURE_COMPARATIVE_NEGLIGENCE",
    "MODIFIED_COMPARATIVE_50",
    "MODIFIED_COMPARATIVE_51",
    "CONTRIBUTORY_NEGLIGENCE",
    "NO_DAMAGES_CAP",
    "JOINT_AND_SEVERAL_LIABILITY",
    "SEVERAL_LIABILITY_ONLY",
    "StatuteReference",
    "CaseReference",
    "RuleEntry",
]
