"""API-key authentication and per-key rate limiting for the HTTP API.

Keys come from ``LEXC_API_KEYS`` (comma separated); when none are configured
the development key ``dev-key`` is accepted.  Requests are counted per
(key, resource) in fixed windows of ``LEXC_RATE_WINDOW_SEC`` seconds, where
the resource is the first two path segments, so ``/v1/cases/search`` and
``/v1/cases/<id>`` share one budget.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from fastapi import Header, HTTPException, Request

from lexcompare.observability import redact_api_key

logger = logging.getLogger(__name__)

DEV_API_KEY = "dev-key"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


def allowed_api_keys() -> FrozenSet[str]:
    raw = os.getenv("LEXC_API_KEYS", "")
    keys = frozenset(key.strip() for key in raw.split(",") if key.strip())
    return keys or frozenset({DEV_API_KEY})


def resource_of(path: str) -> str:
    parts = [part for part in path.split("/") if part]
    return "/" + "/".join(parts[:2])


@dataclass
class _Window:
    index: int
    count: int = 0


class RateLimiter:
    """Fixed-window counter keyed by (api key, resource)."""

    def __init__(
        self,
        limit: int = 60,
        window_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = max(1, int(limit))
        self.window_seconds = max(1, int(window_seconds or _env_int("LEXC_RATE_WINDOW_SEC", 60)))
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[Tuple[str, str], _Window] = {}

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def hit(self, api_key: str, path: str) -> int:
        """Count one request and return how many remain in the window.

        Raises a 429 ``HTTPException`` once the window's budget is spent.
        """

        resource = resource_of(path)
        now = self._clock()
        index = int(now // self.window_seconds)
        with self._lock:
            window = self._windows.get((api_key, resource))
            if window is None or window.index != index:
                window = _Window(index)
                self._windows[(api_key, resource)] = window
            if window.count >= self.limit:
                retry_after = self.window_seconds - int(now % self.window_seconds)
                logger.info("Rate limit reached for %s on %s", redact_api_key(api_key), resource)
                raise HTTPException(
                    status_code=429,
                    detail={
                        "kind": "rate_limited",
                        "message": f"Rate limit of {self.limit} requests per {self.window_seconds}s exceeded",
                        "resource": resource,
                        "retry_after": retry_after,
                    },
                )
            window.count += 1
            return self.limit - window.count


rate_limiter = RateLimiter(limit=_env_int("LEXC_RATE_LIMIT_PER_MINUTE", 60))


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> str:
    """FastAPI dependency: reject unknown keys, then charge the rate limiter."""

    if not x_api_key:
        raise HTTPException(status_code=401, detail={"kind": "unauthorized", "message": "Missing API key"})
    if x_api_key not in allowed_api_keys():
        raise HTTPException(status_code=401, detail={"kind": "unauthorized", "message": "Invalid API key"})
    rate_limiter.hit(x_api_key, request.url.path)
    return x_api_key


def set_rate_limit(limit: int) -> None:
    """Swap in a fresh limiter with ``limit`` requests per window."""

    global rate_limiter
    rate_limiter = RateLimiter(limit=limit)


__all__ = [
    "DEV_API_KEY",
    "RateLimiter",
    "allowed_api_keys",
    "require_api_key",
    "resource_of",
    "set_rate_limit",
]
