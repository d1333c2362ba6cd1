"""Weighted multi-factor scoring shared by the analyzer and case-law search.

The arithmetic is deliberately tiny: ``weighted_sum`` is the single place
where weights meet indicators, and ``score_factors`` normalises that sum by
the total weight after checking the total is positive.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from lexcompare.errors import InvalidWeighting


@dataclass(frozen=True)
class Factor:
    """One weighted signal: ``indicator`` in [0, 1], ``weight`` >= 0."""

    name: str
    weight: float
    indicator: float

    @property
    def contribution(self) -> float:
        return self.weight * self.indicator


@dataclass(frozen=True)
class ScoreBreakdown:
    score: float
    total_weight: float
    contributions: Tuple[Tuple[str, float, float], ...]  # (name, weight, weight x indicator)


def _validate(factors: Sequence[Factor]) -> None:
    for factor in factors:
        if not math.isfinite(factor.weight) or factor.weight < 0:
            raise InvalidWeighting(
                f"Factor {factor.name!r} has invalid weight {factor.weight!r}",
                factor=factor.name,
            )
        if not math.isfinite(factor.indicator) or not 0.0 <= factor.indicator <= 1.0:
            raise InvalidWeighting(
                f"Factor {factor.name!r} indicator {factor.indicator!r} is outside [0, 1]",
                factor=factor.name,
            )


def weighted_sum(factors: Iterable[Factor]) -> float:
    """Return sum(weight x indicator) over ``factors``."""

    items = list(factors)
    _validate(items)
    return sum(factor.contribution for factor in items)


def total_weight(factors: Iterable[Factor]) -> float:
    return sum(factor.weight for factor in factors)


def score_factors(factors: Iterable[Factor]) -> float:
    """Return sum(weight x indicator) / sum(weight), a value in [0, 1].

    Raises ``InvalidWeighting`` when the total weight is not positive.
    """

    return explain_factors(factors).score


def explain_factors(factors: Iterable[Factor]) -> ScoreBreakdown:
    items: List[Factor] = list(factors)
    numerator = weighted_sum(items)
    denominator = total_weight(items)
    if denominator <= 0:
        names = ", ".join(factor.name for factor in items) or "<none>"
        raise InvalidWeighting(f"Total weight must be positive (factors: {names})")
    score = max(0.0, min(1.0, numerator / denominator))
    return ScoreBreakdown(
        score=score,
        total_weight=denominator,
        contributions=tuple((f.name, f.weight, f.contribution) for f in items),
    )


__all__ = ["Factor", "ScoreBreakdown", "weighted_sum", "total_weight", "score_factors", "explain_factors"]
