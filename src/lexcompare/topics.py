"""The closed set of legal topics that rules are compared on."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class TopicCategory(str, Enum):
    TORT = "tort"
    CONTRACT = "contract"
    PROPERTY = "property"
    PROCEDURE = "procedure"
    CRIMINAL = "criminal"
    OTHER = "other"


class LegalTopic(str, Enum):
    # Tort
    COMPARATIVE_NEGLIGENCE = "comparative_negligence"
    DRAM_SHOP_LIABILITY = "dram_shop_liability"
    GOOD_SAMARITAN_PROTECTION = "good_samaritan_protection"
    PRODUCTS_LIABILITY = "products_liability"
    EMOTIONAL_DISTRESS = "emotional_distress"
    PUNITIVE_DAMAGES = "punitive_damages"
    MEDICAL_MALPRACTICE = "medical_malpractice"
    # Contract
    STATUTE_OF_FRAUDS = "statute_of_frauds"
    PAROL_EVIDENCE_RULE = "parol_evidence_rule"
    NON_COMPETE_AGREEMENTS = "non_compete_agreements"
    # Property
    ADVERSE_POSSESSION = "adverse_possession"
    MARITAL_PROPERTY = "marital_property"
    # Procedure
    LIMITATIONS_PERSONAL_INJURY = "limitations_personal_injury"
    LIMITATIONS_PROPERTY_DAMAGE = "limitations_property_damage"
    LIMITATIONS_WRITTEN_CONTRACT = "limitations_written_contract"
    LIMITATIONS_ORAL_CONTRACT = "limitations_oral_contract"
    LIMITATIONS_FRAUD = "limitations_fraud"
    LIMITATIONS_MEDICAL_MALPRACTICE = "limitations_medical_malpractice"
    LIMITATIONS_PRODUCTS_LIABILITY = "limitations_products_liability"
    DAMAGES_CAPS = "damages_caps"
    JOINT_AND_SEVERAL_LIABILITY = "joint_and_several_liability"
    # Criminal
    SELF_DEFENSE = "self_defense"
    CASTLE_DOCTRINE = "castle_doctrine"
    # Other
    CHOICE_OF_LAW_APPROACH = "choice_of_law_approach"

    @property
    def category(self) -> TopicCategory:
        return _TOPIC_INFO[self][0]

    @property
    def label(self) -> str:
        return _TOPIC_INFO[self][1]

    @classmethod
    def parse(cls, raw: "str | LegalTopic") -> "LegalTopic":
        """Accept either the enum value (``comparative_negligence``) or its name."""

        if isinstance(raw, LegalTopic):
            return raw
        key = str(raw).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown legal topic {raw!r}") from None


_TOPIC_INFO: Dict[LegalTopic, Tuple[TopicCategory, str]] = {
    LegalTopic.COMPARATIVE_NEGLIGENCE: (TopicCategory.TORT, "Comparative/Contributory Negligence"),
    LegalTopic.DRAM_SHOP_LIABILITY: (TopicCategory.TORT, "Dram Shop Liability"),
    LegalTopic.GOOD_SAMARITAN_PROTECTION: (TopicCategory.TORT, "Good Samaritan Protection"),
    LegalTopic.PRODUCTS_LIABILITY: (TopicCategory.TORT, "Products Liability"),
    LegalTopic.EMOTIONAL_DISTRESS: (TopicCategory.TORT, "Emotional Distress"),
    LegalTopic.PUNITIVE_DAMAGES: (TopicCategory.TORT, "Punitive Damages"),
    LegalTopic.MEDICAL_MALPRACTICE: (TopicCategory.TORT, "Medical Malpractice"),
    LegalTopic.STATUTE_OF_FRAUDS: (TopicCategory.CONTRACT, "Statute of Frauds"),
    LegalTopic.PAROL_EVIDENCE_RULE: (TopicCategory.CONTRACT, "Parol Evidence Rule"),
    LegalTopic.NON_COMPETE_AGREEMENTS: (TopicCategory.CONTRACT, "Non-Compete Agreements"),
    LegalTopic.ADVERSE_POSSESSION: (TopicCategory.PROPERTY, "Adverse Possession"),
    LegalTopic.MARITAL_PROPERTY: (TopicCategory.PROPERTY, "Marital Property"),
    LegalTopic.LIMITATIONS_PERSONAL_INJURY: (TopicCategory.PROCEDURE, "Statute of Limitations (Personal Injury)"),
    LegalTopic.LIMITATIONS_PROPERTY_DAMAGE: (TopicCategory.PROCEDURE, "Statute of Limitations (Property Damage)"),
    LegalTopic.LIMITATIONS_WRITTEN_CONTRACT: (TopicCategory.PROCEDURE, "Statute of Limitations (Written Contract)"),
    LegalTopic.LIMITATIONS_ORAL_CONTRACT: (TopicCategory.PROCEDURE, "Statute of Limitations (Oral Contract)"),
    LegalTopic.LIMITATIONS_FRAUD: (TopicCategory.PROCEDURE, "Statute of Limitations (Fraud)"),
    LegalTopic.LIMITATIONS_MEDICAL_MALPRACTICE: (TopicCategory.PROCEDURE, "Statute of Limitations (Medical Malpractice)"),
    LegalTopic.LIMITATIONS_PRODUCTS_LIABILITY: (TopicCategory.PROCEDURE, "Statute of Limitations (Products Liability)"),
    LegalTopic.DAMAGES_CAPS: (TopicCategory.PROCEDURE, "Damages Caps"),
    LegalTopic.JOINT_AND_SEVERAL_LIABILITY: (TopicCategory.PROCEDURE, "Joint and Several Liability"),
    LegalTopic.SELF_DEFENSE: (TopicCategory.CRIMINAL, "Self-Defense"),
    LegalTopic.CASTLE_DOCTRINE: (TopicCategory.CRIMINAL, "Castle Doctrine"),
    LegalTopic.CHOICE_OF_LAW_APPROACH: (TopicCategory.OTHER, "Choice of Law Approach"),
}


__all__ = ["LegalTopic", "TopicCategory"]
