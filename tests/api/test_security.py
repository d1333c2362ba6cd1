from __future__ import annotations

import pytest
from fastapi import HTTPException

from lexcompare.api.security import DEV_API_KEY, RateLimiter, allowed_api_keys, resource_of


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_keys_come_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("LEXC_API_KEYS", " alpha, beta ,,")
    assert allowed_api_keys() == {"alpha", "beta"}


def test_dev_key_when_unconfigured(monkeypatch) -> None:
    monkeypatch.delenv("LEXC_API_KEYS", raising=False)
    assert allowed_api_keys() == {DEV_API_KEY}


@pytest.mark.parametrize(
    "path, resource",
    [
        ("/v1/cases/search", "/v1/cases"),
        ("/v1/cases/us-ca-1975-li", "/v1/cases"),
        ("/v1/compare/report", "/v1/compare"),
        ("/health", "/health"),
    ],
)
def test_resource_of(path, resource) -> None:
    assert resource_of(path) == resource


def test_limiter_counts_per_key_and_resource() -> None:
    limiter = RateLimiter(limit=2, window_seconds=60, clock=_Clock())
    assert limiter.hit("k", "/v1/cases/search") == 1
    assert limiter.hit("k", "/v1/cases/abc") == 0
    with pytest.raises(HTTPException) as excinfo:
        limiter.hit("k", "/v1/cases/search")
    assert excinfo.value.status_code == 429
    assert excinfo.value.detail["resource"] == "/v1/cases"
    assert limiter.hit("other", "/v1/cases/search") == 1
    assert limiter.hit("k", "/v1/compare") == 1


def test_limiter_window_rolls_over() -> None:
    clock = _Clock()
    limiter = RateLimiter(limit=1, window_seconds=10, clock=clock)
    limiter.hit("k", "/v1/compare")
    with pytest.raises(HTTPException) as excinfo:
        limiter.hit("k", "/v1/compare")
    assert excinfo.value.detail["retry_after"] == 10
    clock.now += 10
    assert limiter.hit("k", "/v1/compare") == 0


def test_reset_clears_counters() -> None:
    limiter = RateLimiter(limit=1, window_seconds=60, clock=_Clock())
    limiter.hit("k", "/v1/compare")
    limiter.reset()
    assert limiter.hit("k", "/v1/compare") == 0
