"""Jurisdiction identifiers and the registry of known legal systems."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union

from lexcompare.errors import UnknownJurisdiction

logger = logging.getLogger(__name__)


class LegalTradition(str, Enum):
    COMMON_LAW = "common_law"
    CIVIL_LAW = "civil_law"
    MIXED = "mixed"

    @property
    def label(self) -> str:
        return {
            LegalTradition.COMMON_LAW: "Common Law",
            LegalTradition.CIVIL_LAW: "Civil Law",
            LegalTradition.MIXED: "Mixed Legal Tradition",
        }[self]


@dataclass(frozen=True)
class JurisdictionId:
    """A legal system unit with its own rule variants."""

    code: str
    name: str
    tradition: LegalTradition = LegalTradition.COMMON_LAW

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


JurisdictionRef = Union[str, JurisdictionId]


def jurisdiction_code(ref: JurisdictionRef) -> str:
    """Return the canonical (upper-case, trimmed) code for ``ref``."""

    if isinstance(ref, JurisdictionId):
        return ref.code
    return str(ref).strip().upper()


# ---------------------------------------------------------------------------
# Default data: US states use the "US-XX" form, national systems their ISO code
# ---------------------------------------------------------------------------

_US_STATES: Dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "DC": "District of Columbia", "FL": "Florida", "GA": "Georgia", "HI": "Hawaii",
    "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine",
    "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota",
    "MS": "Mississippi", "MO": "Missouri", "MT": "Montana", "NE": "Nebraska",
    "NV": "Nevada", "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico",
    "NY": "New York", "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio",
    "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island",
    "SC": "South Carolina", "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas",
    "UT": "Utah", "VT": "Vermont", "VA": "Virginia", "WA": "Washington",
    "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
}

# Louisiana kept the civil code of its French/Spanish period
_CIVIL_LAW_STATES = {"LA"}

_NATIONAL_SYSTEMS: List[JurisdictionId] = [
    JurisdictionId("US", "United States (Federal)", LegalTradition.COMMON_LAW),
    JurisdictionId("UK", "United Kingdom", LegalTradition.COMMON_LAW),
    JurisdictionId("JP", "Japan", LegalTradition.CIVIL_LAW),
    JurisdictionId("DE", "Germany", LegalTradition.CIVIL_LAW),
    JurisdictionId("FR", "France", LegalTradition.CIVIL_LAW),
    JurisdictionId("EU", "European Union", LegalTradition.MIXED),
]


def us_state(code: str) -> JurisdictionId:
    """Return the JurisdictionId for a two-letter US state code."""

    key = code.strip().upper()
    if key.startswith("US-"):
        key = key[3:]
    if key not in _US_STATES:
        raise UnknownJurisdiction(code)
    tradition = LegalTradition.CIVIL_LAW if key in _CIVIL_LAW_STATES else LegalTradition.COMMON_LAW
    return JurisdictionId(f"US-{key}", _US_STATES[key], tradition)


class JurisdictionRegistry:
    """Immutable lookup table of known jurisdictions keyed by code."""

    def __init__(self, jurisdictions: Iterable[JurisdictionId] = ()) -> None:
        entries: Dict[str, JurisdictionId] = {}
        for item in jurisdictions:
            entries[jurisdiction_code(item)] = item
        self._entries = entries

    def get(self, ref: JurisdictionRef) -> Optional[JurisdictionId]:
        return self._entries.get(jurisdiction_code(ref))

    def resolve(self, ref: JurisdictionRef) -> JurisdictionId:
        """Return the registered id for ``ref`` or raise ``UnknownJurisdiction``."""

        found = self.get(ref)
        if found is None:
            raise UnknownJurisdiction(jurisdiction_code(ref))
        return found

    def merged(self, extra: Iterable[JurisdictionId]) -> "JurisdictionRegistry":
        """Return a new registry holding this registry's entries plus ``extra``."""

        return JurisdictionRegistry([*self._entries.values(), *extra])

    def __contains__(self, ref: object) -> bool:
        if not isinstance(ref, (str, JurisdictionId)):
            return False
        return jurisdiction_code(ref) in self._entries

    def __iter__(self) -> Iterator[JurisdictionId]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def codes(self) -> List[str]:
        return sorted(self._entries)


def default_registry() -> JurisdictionRegistry:
    """Registry with the 50 US states, DC and a few national systems."""

    states = [us_state(code) for code in _US_STATES]
    return JurisdictionRegistry([*states, *_NATIONAL_SYSTEMS])


__all__ = [
    "LegalTradition",
    "JurisdictionId",
    "JurisdictionRef",
    "JurisdictionRegistry",
    "jurisdiction_code",
    "us_state",
    "default_registry",
]
