"""Shared fixtures: a small hand-built catalog, a case-law index and engines."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from lexcompare.bootstrap import build_engine
from lexcompare.caselaw import CaseLawIndex, CourtDecision
from lexcompare.catalog import RuleCatalog
from lexcompare.engine import ComparativeLawEngine
from lexcompare.jurisdictions import default_registry, us_state
from lexcompare.rules import (
    CONTRIBUTORY_NEGLIGENCE,
    MODIFIED_COMPARATIVE_51,
    NO_DAMAGES_CAP,
    PURE_COMPARATIVE_NEGLIGENCE,
    RuleEntry,
    damages_cap,
)
from lexcompare.settings import get_policy
from lexcompare.topics import LegalTopic

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_ROOT = REPO_ROOT / "data"


@pytest.fixture(autouse=True)
def _fresh_policy():
    get_policy.cache_clear()
    yield
    get_policy.cache_clear()


@pytest.fixture()
def catalog() -> RuleCatalog:
    cn = LegalTopic.COMPARATIVE_NEGLIGENCE
    caps = LegalTopic.DAMAGES_CAPS
    entries = [
        RuleEntry(us_state("CA"), cn, PURE_COMPARATIVE_NEGLIGENCE, adopted=dt.date(1975, 3, 31)),
        RuleEntry(us_state("TX"), cn, MODIFIED_COMPARATIVE_51),
        RuleEntry(us_state("NY"), cn, PURE_COMPARATIVE_NEGLIGENCE),
        RuleEntry(us_state("AL"), cn, CONTRIBUTORY_NEGLIGENCE),
        RuleEntry(us_state("IL"), cn, MODIFIED_COMPARATIVE_51),
        RuleEntry(us_state("CA"), caps, damages_cap("non_economic", 350000, ["medical malpractice"])),
        RuleEntry(us_state("TX"), caps, damages_cap("non_economic", 250000, ["medical malpractice"])),
        RuleEntry(us_state("NY"), caps, NO_DAMAGES_CAP),
    ]
    return RuleCatalog.from_entries(entries, default_registry())


def make_decision(case_id: str, **overrides) -> CourtDecision:
    fields = {
        "case_number": f"No. {case_id}",
        "decided": "2020-01-15",
        "court_level": "appellate",
        "topic": "contract",
        "summary": "Breach of contract claim for late delivery.",
        "holdings": [{"issue": "Whether delivery was late", "reasoning": "", "conclusion": "Delivery was late"}],
    }
    fields.update(overrides)
    return CourtDecision.build(case_id, **fields)


@pytest.fixture()
def decisions() -> list[CourtDecision]:
    return [
        make_decision(
            "supreme-fraud",
            court_level="supreme",
            topic="fraud",
            decided="2019-06-14",
            summary="Fraud claim upheld where the seller concealed defects.",
            holdings=[{"issue": "As-is clause", "reasoning": "", "conclusion": "Clause does not bar the claim"}],
            cited_statutes=["Tex. Bus. & Com. Code 27.01"],
        ),
        make_decision(
            "district-fraud",
            court_level="district",
            topic="contract",
            decided="2021-11-02",
            summary="Warranty claim dismissed for untimely notice.",
            holdings=[{"issue": "Whether fraud tolled the notice period", "reasoning": "", "conclusion": "No"}],
        ),
        make_decision(
            "appellate-negligence",
            court_level="appellate",
            topic="comparative_negligence",
            decided="2018-03-07",
            summary="Plaintiff's recovery reduced by forty percent comparative fault.",
            cited_statutes=["42 Pa. C.S. 7102"],
        ),
    ]


@pytest.fixture()
def index(decisions) -> CaseLawIndex:
    return CaseLawIndex.build(decisions)


@pytest.fixture()
def engine(catalog, index) -> ComparativeLawEngine:
    return ComparativeLawEngine(catalog=catalog, index=index, registry=default_registry())


@pytest.fixture()
def seed_engine() -> ComparativeLawEngine:
    return build_engine(DATA_ROOT)


@pytest.fixture()
def decision_factory():
    return make_decision
