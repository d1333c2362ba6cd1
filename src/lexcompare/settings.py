"""Runtime configuration for lexcompare.

Heuristic point bands and confidence levels are policy choices rather than
correctness requirements, so each one can be overridden through an
environment variable.  ``get_policy`` is cached; tests that change the
environment call ``get_policy.cache_clear()``.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DATA_ROOT = Path(os.getenv("LEXC_DATA_ROOT", str(Path(__file__).resolve().parents[2] / "data")))


def _env_float(name: str, default: float, minimum: float = 0.0, maximum: Optional[float] = None) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default
    if not math.isfinite(value) or value < minimum or (maximum is not None and value > maximum):
        logger.warning("Ignoring out-of-range %s=%r, using %s", name, raw, default)
        return default
    return value


def _env_confidence(name: str, default: float) -> float:
    return _env_float(name, default, maximum=1.0)


@dataclass(frozen=True)
class ScoringPolicy:
    """Named heuristic constants used by the analyzer and the search engine."""

    # Case-law relevance bands
    summary_keyword_points: float = 30.0
    holding_keyword_points: float = 20.0
    topic_match_points: float = 20.0
    supreme_court_points: float = 30.0
    appellate_court_points: float = 20.0
    regional_court_points: float = 15.0
    district_court_points: float = 10.0
    max_relevance: float = 100.0

    # Choice-of-law confidences
    territorial_primary_confidence: float = 1.0
    territorial_fallback_confidence: float = 0.6
    false_conflict_confidence: float = 0.9
    true_conflict_confidence: float = 0.5
    better_law_confidence_cap: float = 0.7
    better_law_weight: float = 1.0

    def court_points(self) -> Dict[str, float]:
        return {
            "supreme": self.supreme_court_points,
            "appellate": self.appellate_court_points,
            "regional": self.regional_court_points,
            "district": self.district_court_points,
        }


@lru_cache(maxsize=1)
def get_policy() -> ScoringPolicy:
    """Return the active scoring policy, applying ``LEXC_*`` overrides."""

    defaults = ScoringPolicy()
    policy = ScoringPolicy(
        summary_keyword_points=_env_float("LEXC_SUMMARY_POINTS", defaults.summary_keyword_points),
        holding_keyword_points=_env_float("LEXC_HOLDING_POINTS", defaults.holding_keyword_points),
        topic_match_points=_env_float("LEXC_TOPIC_POINTS", defaults.topic_match_points),
        supreme_court_points=_env_float("LEXC_SUPREME_POINTS", defaults.supreme_court_points),
        appellate_court_points=_env_float("LEXC_APPELLATE_POINTS", defaults.appellate_court_points),
        regional_court_points=_env_float("LEXC_REGIONAL_POINTS", defaults.regional_court_points),
        district_court_points=_env_float("LEXC_DISTRICT_POINTS", defaults.district_court_points),
        max_relevance=defaults.max_relevance,
        territorial_primary_confidence=defaults.territorial_primary_confidence,
        territorial_fallback_confidence=_env_confidence(
            "LEXC_TERRITORIAL_FALLBACK_CONFIDENCE", defaults.territorial_fallback_confidence
        ),
        false_conflict_confidence=_env_confidence(
            "LEXC_FALSE_CONFLICT_CONFIDENCE", defaults.false_conflict_confidence
        ),
        true_conflict_confidence=_env_confidence(
            "LEXC_TRUE_CONFLICT_CONFIDENCE", defaults.true_conflict_confidence
        ),
        better_law_confidence_cap=_env_confidence("LEXC_BETTER_LAW_CAP", defaults.better_law_confidence_cap),
        better_law_weight=_env_float("LEXC_BETTER_LAW_WEIGHT", defaults.better_law_weight),
    )
    if policy != defaults:
        logger.info("Scoring policy overridden from environment: %s", policy)
    return policy


__all__ = ["DATA_ROOT", "ScoringPolicy", "get_policy"]
