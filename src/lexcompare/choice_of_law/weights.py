"""Fixed contact weights for most-significant-relationship scoring.

Tables follow the contacts listed in Restatement (Second) of Conflict of Laws
§145 (torts), §188 (contracts) and §§222-223 (property).  Procedure and
criminal topics reuse the tort table; anything else uses the general table.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from lexcompare.topics import LegalTopic, TopicCategory

from .facts import ContactingFactorKind as K

TORT_WEIGHTS: Dict[K, float] = {
    K.PLACE_OF_INJURY: 3.0,
    K.PLACE_OF_CONDUCT: 2.0,
    K.DOMICILE_OF_PLAINTIFF: 1.5,
    K.DOMICILE_OF_DEFENDANT: 1.5,
    K.PLACE_OF_BUSINESS: 1.0,
    K.PLACE_OF_RELATIONSHIP: 1.0,
}

CONTRACT_WEIGHTS: Dict[K, float] = {
    K.PLACE_OF_PERFORMANCE: 3.0,
    K.PLACE_OF_CONTRACTING: 2.0,
    K.LOCATION_OF_SUBJECT_MATTER: 2.0,
    K.PLACE_OF_NEGOTIATION: 1.5,
    K.DOMICILE_OF_PLAINTIFF: 1.0,
    K.DOMICILE_OF_DEFENDANT: 1.0,
    K.PLACE_OF_BUSINESS: 1.0,
}

PROPERTY_WEIGHTS: Dict[K, float] = {
    K.LOCATION_OF_SUBJECT_MATTER: 3.0,
    K.DOMICILE_OF_PLAINTIFF: 1.0,
    K.DOMICILE_OF_DEFENDANT: 1.0,
    K.PLACE_OF_CONTRACTING: 1.0,
}

GENERAL_WEIGHTS: Dict[K, float] = {kind: 1.0 for kind in K}

CATEGORY_WEIGHTS: Dict[TopicCategory, Dict[K, float]] = {
    TopicCategory.TORT: TORT_WEIGHTS,
    TopicCategory.PROCEDURE: TORT_WEIGHTS,
    TopicCategory.CRIMINAL: TORT_WEIGHTS,
    TopicCategory.CONTRACT: CONTRACT_WEIGHTS,
    TopicCategory.PROPERTY: PROPERTY_WEIGHTS,
    TopicCategory.OTHER: GENERAL_WEIGHTS,
}


def weights_for(topic: LegalTopic, overrides: Optional[Mapping[K | str, float]] = None) -> Dict[K, float]:
    """Return the weight table for ``topic`` with ``overrides`` applied.

    Factor kinds absent from the table weigh 0.0 (recorded, never decisive).
    """

    table = {kind: CATEGORY_WEIGHTS[topic.category].get(kind, 0.0) for kind in K}
    for kind, weight in (overrides or {}).items():
        table[K(kind)] = float(weight)
    return table


__all__ = [
    "TORT_WEIGHTS",
    "CONTRACT_WEIGHTS",
    "PROPERTY_WEIGHTS",
    "GENERAL_WEIGHTS",
    "CATEGORY_WEIGHTS",
    "weights_for",
]
