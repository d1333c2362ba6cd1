"""Immutable, queryable store of per-jurisdiction rule variants.

A catalog is built once from a bulk feed and then only read.  Reloading means
building a new catalog and publishing it in place of the old one (see
:meth:`lexcompare.engine.ComparativeLawEngine.reload_catalog`).
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from lexcompare.errors import DuplicateRuleEntry
from lexcompare.jurisdictions import JurisdictionId, JurisdictionRef, JurisdictionRegistry, jurisdiction_code
from lexcompare.rules import RuleEntry, RuleVariant
from lexcompare.topics import LegalTopic

logger = logging.getLogger(__name__)


class RuleCatalog:
    """Snapshot of rule entries keyed by (jurisdiction code, topic)."""

    __slots__ = ("_entries", "_by_topic", "_by_jurisdiction", "_registry")

    def __init__(
        self,
        entries: Mapping[Tuple[str, LegalTopic], RuleEntry],
        by_topic: Mapping[LegalTopic, Tuple[RuleEntry, ...]],
        by_jurisdiction: Mapping[str, Tuple[RuleEntry, ...]],
        registry: JurisdictionRegistry,
    ) -> None:
        self._entries = MappingProxyType(dict(entries))
        self._by_topic = MappingProxyType(dict(by_topic))
        self._by_jurisdiction = MappingProxyType(dict(by_jurisdiction))
        self._registry = registry

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[RuleEntry],
        registry: Optional[JurisdictionRegistry] = None,
    ) -> "RuleCatalog":
        """Validate ``entries`` and build a catalog.

        Raises ``DuplicateRuleEntry`` on a repeated (jurisdiction, topic).
        The registry defaults to the jurisdictions named by the entries.
        """

        keyed: Dict[Tuple[str, LegalTopic], RuleEntry] = {}
        by_topic: Dict[LegalTopic, List[RuleEntry]] = {}
        by_jurisdiction: Dict[str, List[RuleEntry]] = {}
        seen: Dict[str, JurisdictionId] = {}

        for entry in entries:
            key = entry.key
            if key in keyed:
                raise DuplicateRuleEntry(entry.jurisdiction.code, entry.topic.value)
            keyed[key] = entry
            by_topic.setdefault(entry.topic, []).append(entry)
            by_jurisdiction.setdefault(entry.jurisdiction.code, []).append(entry)
            seen.setdefault(entry.jurisdiction.code, entry.jurisdiction)

        if registry is None:
            registry = JurisdictionRegistry(seen.values())
        else:
            missing = [item for code, item in seen.items() if code not in registry]
            if missing:
                registry = registry.merged(missing)

        logger.info(
            "Rule catalog built: %d entries, %d jurisdictions, %d topics",
            len(keyed),
            len(by_jurisdiction),
            len(by_topic),
        )
        return cls(
            keyed,
            {topic: tuple(items) for topic, items in by_topic.items()},
            {code: tuple(items) for code, items in by_jurisdiction.items()},
            registry,
        )

    # -- lookups -----------------------------------------------------------

    def get(self, jurisdiction: JurisdictionRef, topic: LegalTopic) -> Optional[RuleVariant]:
        entry = self.get_entry(jurisdiction, topic)
        return entry.rule if entry is not None else None

    def get_entry(self, jurisdiction: JurisdictionRef, topic: LegalTopic) -> Optional[RuleEntry]:
        return self._entries.get((jurisdiction_code(jurisdiction), LegalTopic.parse(topic)))

    def all_for_topic(self, topic: LegalTopic) -> Tuple[RuleEntry, ...]:
        return self._by_topic.get(LegalTopic.parse(topic), ())

    def all_for_jurisdiction(self, jurisdiction: JurisdictionRef) -> Tuple[RuleEntry, ...]:
        return self._by_jurisdiction.get(jurisdiction_code(jurisdiction), ())

    @property
    def registry(self) -> JurisdictionRegistry:
        return self._registry

    def jurisdictions(self) -> List[str]:
        return sorted(self._by_jurisdiction)

    def topics(self) -> List[LegalTopic]:
        return [topic for topic in LegalTopic if topic in self._by_topic]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        """``(jurisdiction, topic) in catalog``, normalised like :meth:`get_entry`."""
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        try:
            return self.get_entry(*key) is not None
        except ValueError:
            return False

    def __iter__(self):
        return iter(self._entries.values())


__all__ = ["RuleCatalog"]
