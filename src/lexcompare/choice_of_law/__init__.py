"""Choice-of-law doctrines and the analyzer that dispatches between them."""

from .analyzer import FORUM_APPROACHES, analyze_choice_of_law, build_strategy, select_approach
from .better_law import BetterLawStrategy
from .combined import CombinedModernStrategy
from .facts import ContactingFactor, ContactingFactorKind, FactPattern, PolicyInterest
from .interest import InterestAnalysisStrategy
from .models import (
    AnalysisStage,
    ApproachKind,
    ChoiceOfLawResult,
    ChoiceOfLawStrategy,
    ConflictType,
    FactorContribution,
)
from .relationship import MostSignificantRelationshipStrategy
from .territorial import TerritorialStrategy

__all__ = [
    "FORUM_APPROACHES",
    "analyze_choice_of_law",
    "build_strategy",
    "select_approach",
    "BetterLawStrategy",
    "CombinedModernStrategy",
    "ContactingFactor",
    "ContactingFactorKind",
    "FactPattern",
    "PolicyInterest",
    "InterestAnalysisStrategy",
    "AnalysisStage",
    "ApproachKind",
    "ChoiceOfLawResult",
    "ChoiceOfLawStrategy",
    "ConflictType",
    "FactorContribution",
    "MostSignificantRelationshipStrategy",
    "TerritorialStrategy",
]
