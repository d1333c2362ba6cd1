"""lexcompare - comparative-law decision engine."""

from .catalog import RuleCatalog
from .comparator import ComparisonResult, compare
from .engine import ComparativeLawEngine
from .jurisdictions import JurisdictionId, LegalTradition
from .rules import RuleEntry, RuleKind, RuleVariant
from .topics import LegalTopic
from .version import __version__

__all__ = [
    "RuleCatalog",
    "ComparisonResult",
    "compare",
    "ComparativeLawEngine",
    "JurisdictionId",
    "LegalTradition",
    "RuleEntry",
    "RuleKind",
    "RuleVariant",
    "LegalTopic",
    "__version__",
]
