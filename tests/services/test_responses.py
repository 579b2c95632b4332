from __future__ import annotations

import pytest
from fastapi import FastAPI, Request
from starlette.testclient import TestClient

from searchguard.classifier import ClassificationResult, Reason
from searchguard.services.responses import select_response


def _render(result: ClassificationResult, raw) -> str:
    app = FastAPI()

    @app.get("/r")
    async def r(request: Request):
        return select_response(request, result, raw)

    resp = TestClient(app).get("/r")
    assert resp.status_code == 200
    return resp.text


def test_safe_result_escapes_markup() -> None:
    body = _render(ClassificationResult.ok(), "a<b & c>d")
    assert "a&lt;b &amp; c&gt;d" in body
    assert "a<b" not in body


def test_safe_result_is_escaped_once() -> None:
    body = _render(ClassificationResult.ok(), "x&y")
    assert "x&amp;y" in body
    assert "&amp;amp;" not in body


@pytest.mark.parametrize(
    "reason,raw",
    [
        (Reason.XSS, '"><svg onload=alert(1)>'),
        (Reason.SQL_INJECTION, "1' OR '1'='1"),
        (Reason.TOO_LONG, "z" * 1500),
        (Reason.DISALLOWED_CHARSET, "ünïcödé"),
    ],
)
def test_rejected_result_never_echoes_input(reason: Reason, raw: str) -> None:
    body = _render(ClassificationResult.reject(reason), raw)
    assert raw not in body
    assert 'value=""' in body
    assert "Invalid input detected" in body


def test_safe_verdict_with_non_string_renders_rejection() -> None:
    body = _render(ClassificationResult.ok(), None)
    assert "Security Alert" in body
