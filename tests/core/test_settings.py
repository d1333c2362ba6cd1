from __future__ import annotations

from lexcompare.settings import ScoringPolicy, get_policy


def test_defaults() -> None:
    assert get_policy() == ScoringPolicy()


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("LEXC_SUMMARY_POINTS", "40")
    monkeypatch.setenv("LEXC_BETTER_LAW_CAP", "0.6")
    get_policy.cache_clear()
    policy = get_policy()
    assert policy.summary_keyword_points == 40.0
    assert policy.better_law_confidence_cap == 0.6


def test_non_numeric_override_is_ignored(monkeypatch) -> None:
    monkeypatch.setenv("LEXC_TOPIC_POINTS", "lots")
    get_policy.cache_clear()
    assert get_policy().topic_match_points == 20.0


def test_negative_points_fall_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("LEXC_DISTRICT_POINTS", "-50")
    monkeypatch.setenv("LEXC_SUMMARY_POINTS", "nan")
    get_policy.cache_clear()
    policy = get_policy()
    assert policy.district_court_points == 10.0
    assert policy.summary_keyword_points == 30.0


def test_confidence_above_one_falls_back_to_default(monkeypatch, caplog) -> None:
    monkeypatch.setenv("LEXC_FALSE_CONFLICT_CONFIDENCE", "1.5")
    monkeypatch.setenv("LEXC_TRUE_CONFLICT_CONFIDENCE", "1")
    get_policy.cache_clear()
    policy = get_policy()
    assert policy.false_conflict_confidence == 0.9
    assert policy.true_conflict_confidence == 1.0
    assert "out-of-range LEXC_FALSE_CONFLICT_CONFIDENCE" in caplog.text
