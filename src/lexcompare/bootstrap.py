"""Build a ready-to-serve engine from the bundled (or configured) data root.

Layout under the data root::

    rules/*.json     rule feeds, loaded in file-name order
    cases/*.jsonl    decision feeds, loaded in file-name order

Nothing is loaded at import time; the CLI and API call :func:`build_engine`
(or the cached :func:`get_engine`) when they need one.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from lexcompare.caselaw import CaseLawIndex, CourtDecision
from lexcompare.catalog import RuleCatalog
from lexcompare.engine import ComparativeLawEngine
from lexcompare.feeds import load_decision_feed, load_rule_feed
from lexcompare.jurisdictions import default_registry
from lexcompare.rules import RuleEntry
from lexcompare.settings import DATA_ROOT, get_policy

logger = logging.getLogger(__name__)


def build_engine(data_root: Optional[Path] = None) -> ComparativeLawEngine:
    """Load every feed under ``data_root`` and return an engine over them.

    A missing ``rules`` or ``cases`` directory yields an empty catalog or
    index; a malformed feed raises ``FeedError``.
    """

    root = Path(data_root) if data_root is not None else DATA_ROOT
    registry = default_registry()

    entries: List[RuleEntry] = []
    rules_dir = root / "rules"
    if rules_dir.is_dir():
        for path in sorted(rules_dir.glob("*.json")):
            loaded, registry = load_rule_feed(path, registry)
            entries.extend(loaded)
    else:
        logger.warning("No rule feeds found under %s", rules_dir)

    decisions: List[CourtDecision] = []
    cases_dir = root / "cases"
    if cases_dir.is_dir():
        for path in sorted(cases_dir.glob("*.jsonl")):
            decisions.extend(load_decision_feed(path))
    else:
        logger.warning("No decision feeds found under %s", cases_dir)

    policy = get_policy()
    catalog = RuleCatalog.from_entries(entries, registry)
    index = CaseLawIndex.build(decisions, policy)
    logger.info("Engine ready: %d rules, %d decisions from %s", len(catalog), len(index), root)
    return ComparativeLawEngine(catalog=catalog, index=index, registry=registry, policy=policy)


@lru_cache(maxsize=1)
def get_engine() -> ComparativeLawEngine:
    """Process-wide engine over the default data root."""

    return build_engine()


__all__ = ["build_engine", "get_engine"]
