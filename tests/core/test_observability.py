from __future__ import annotations

import logging

from lexcompare.observability import current_run_id, log_event, redact_api_key, run_scope


def test_redact_api_key() -> None:
    assert redact_api_key(None) == "<missing>"
    assert redact_api_key("abcd") == "***"
    assert redact_api_key("secret-key") == "secr***"


def test_run_scope_binds_and_restores() -> None:
    before = current_run_id()
    with run_scope("run-1") as run_id:
        assert run_id == "run-1"
        assert current_run_id() == "run-1"
        with run_scope() as inner:
            assert inner != "run-1"
            assert current_run_id() == inner
        assert current_run_id() == "run-1"
    assert current_run_id() == before


def test_log_event_attaches_run_id(caplog) -> None:
    with run_scope("run-2"):
        with caplog.at_level(logging.INFO, logger="lexcompare.observability"):
            log_event("compare.completed", topic="damages_caps")
    record = caplog.records[-1]
    assert record.getMessage() == "compare.completed"
    assert record.payload == {"run_id": "run-2", "topic": "damages_caps"}
