from __future__ import annotations

import json
import logging

import pytest
from fastapi.testclient import TestClient

from app.core.logging import JsonFormatter
from app.main import create_app


def _app_with_failing_route():
    app = create_app()

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("database password is hunter2")

    return app


def test_uncaught_error_returns_generic_500(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="app.errors")

    with TestClient(_app_with_failing_route(), raise_server_exceptions=False) as client:
        res = client.get("/boom")

    assert res.status_code == 500
    assert res.json() == {
        "error": "Internal server error",
        "message": "Something went wrong on our end",
    }
    records = [r for r in caplog.records if r.name == "app.errors"]
    assert records and records[0].exc_info


def test_uncaught_error_details_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODE_ENV", "development")
    from app.core.settings import get_settings

    get_settings.cache_clear()

    with TestClient(_app_with_failing_route(), raise_server_exceptions=False) as client:
        res = client.get("/boom")

    assert res.status_code == 500
    assert res.json()["details"] == "database password is hunter2"


def test_json_formatter_tolerates_missing_extras() -> None:
    record = logging.LogRecord("third.party", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello x"
    assert payload["request_id"] is None
    assert "outcome" not in payload


def test_json_formatter_includes_summary_fields() -> None:
    record = logging.LogRecord("app.summarize", logging.INFO, __file__, 1, "done", None, None)
    record.tone = "casual"
    record.outcome = "success"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["tone"] == "casual"
    assert payload["outcome"] == "success"
