from __future__ import annotations

import re

from starlette.testclient import TestClient

from searchguard.config import DEFAULT_CSP

UUID4_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def test_request_id_is_echoed(client: TestClient) -> None:
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"


def test_request_id_is_generated(client: TestClient) -> None:
    r = client.get("/health")
    assert UUID4_RE.match(r.headers["X-Request-ID"])


def test_blank_request_id_is_replaced(client: TestClient) -> None:
    r = client.get("/health", headers={"X-Request-ID": ""})
    assert UUID4_RE.match(r.headers["X-Request-ID"])


def test_default_security_headers(client: TestClient) -> None:
    for path in ("/", "/health"):
        r = client.get(path)
        assert r.headers["Content-Security-Policy"] == DEFAULT_CSP
        assert r.headers["X-Content-Type-Options"] == "nosniff"
        assert r.headers["X-Frame-Options"] == "DENY"
        assert r.headers["Referrer-Policy"] == "no-referrer"
        assert "Permissions-Policy" not in r.headers


def test_security_headers_on_rejection_page(client: TestClient) -> None:
    r = client.post("/search", data={"searchTerm": "<script>"})
    assert r.headers["Content-Security-Policy"] == DEFAULT_CSP


def test_security_headers_follow_settings(make_app) -> None:
    client = TestClient(
        make_app(
            CSP_VALUE="default-src 'none'",
            SEC_HEADERS_REFERRER_POLICY="same-origin",
            SEC_HEADERS_PERMISSIONS_POLICY="camera=()",
        )
    )
    r = client.get("/")
    assert r.headers["Content-Security-Policy"] == "default-src 'none'"
    assert r.headers["Referrer-Policy"] == "same-origin"
    assert r.headers["Permissions-Policy"] == "camera=()"


def test_security_headers_can_be_disabled(make_app) -> None:
    client = TestClient(make_app(SEC_HEADERS_ENABLED=False))
    r = client.get("/")
    assert "Content-Security-Policy" not in r.headers
    assert "X-Frame-Options" not in r.headers
    assert "X-Request-ID" in r.headers
