"""Run-scoped logging helpers.

A run id ties together the log lines emitted while one comparison, analysis
or search is served, whether it was started from the CLI or the HTTP API.
Structured events go through :func:`log_event`; the fields travel on the
record as ``record.payload`` so a JSON formatter can pick them up.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_run_id_ctx: ContextVar[Optional[str]] = ContextVar("lexc_run_id", default=None)


def new_run_id() -> str:
    return uuid.uuid4().hex


def current_run_id() -> Optional[str]:
    return _run_id_ctx.get()


@contextmanager
def run_scope(run_id: Optional[str] = None) -> Iterator[str]:
    """Bind ``run_id`` (or a fresh one) for the duration of the block."""

    value = run_id or new_run_id()
    token = _run_id_ctx.set(value)
    try:
        yield value
    finally:
        _run_id_ctx.reset(token)


def redact_api_key(raw: Optional[str]) -> str:
    if not raw:
        return "<missing>"
    if len(raw) <= 4:
        return "***"
    return f"{raw[:4]}***"


def log_event(event: str, **fields: object) -> None:
    """Emit ``event`` at INFO with the active run id and ``fields`` attached."""

    logger.info(event, extra={"payload": {"run_id": current_run_id(), **fields}})


__all__ = [
    "new_run_id",
    "current_run_id",
    "run_scope",
    "redact_api_key",
    "log_event",
]
