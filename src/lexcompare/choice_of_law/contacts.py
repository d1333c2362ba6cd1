"""Factor collection shared by the doctrine strategies.

Factors naming a jurisdiction the registry does not know are excluded here,
once, so every strategy degrades the same way: the factor shows up in the
trace with zero contribution and an ``UnknownJurisdiction`` is kept on the
result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from lexcompare.errors import UnknownJurisdiction
from lexcompare.jurisdictions import JurisdictionId, JurisdictionRef, JurisdictionRegistry, jurisdiction_code

from .facts import ContactingFactor, FactPattern
from .models import FactorContribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectedContacts:
    usable: Tuple[ContactingFactor, ...]
    excluded: Tuple[FactorContribution, ...]
    soft_errors: Tuple[UnknownJurisdiction, ...]

    def candidates(self) -> List[str]:
        ordered: List[str] = []
        for factor in self.usable:
            if factor.jurisdiction not in ordered:
                ordered.append(factor.jurisdiction)
        return ordered


def collect_contacts(
    fact_pattern: FactPattern,
    registry: Optional[JurisdictionRegistry],
    weights: Optional[dict] = None,
) -> CollectedContacts:
    usable: List[ContactingFactor] = []
    excluded: List[FactorContribution] = []
    errors: List[UnknownJurisdiction] = []
    for factor in fact_pattern.factors:
        if registry is not None and factor.jurisdiction not in registry:
            error = UnknownJurisdiction(factor.jurisdiction, factor=factor.kind.value)
            logger.warning("%s; factor excluded from scoring", error.message)
            errors.append(error)
            excluded.append(
                FactorContribution(
                    factor=factor.kind.value,
                    jurisdiction=factor.jurisdiction,
                    weight=float((weights or {}).get(factor.kind, 0.0)),
                    contribution=0.0,
                    note="excluded: unknown jurisdiction",
                )
            )
            continue
        usable.append(factor)
    return CollectedContacts(tuple(usable), tuple(excluded), tuple(errors))


def resolve_jurisdiction(
    registry: Optional[JurisdictionRegistry],
    ref: JurisdictionRef,
) -> Tuple[JurisdictionId, Optional[UnknownJurisdiction]]:
    """Return the registered id for ``ref``.

    An unregistered code yields a bare id (name = code) plus the soft error.
    """

    if isinstance(ref, JurisdictionId):
        return ref, None
    code = jurisdiction_code(ref)
    if registry is None:
        return JurisdictionId(code, code), None
    found = registry.get(code)
    if found is not None:
        return found, None
    return JurisdictionId(code, code), UnknownJurisdiction(code, factor="forum")


__all__ = ["CollectedContacts", "collect_contacts", "resolve_jurisdiction"]
