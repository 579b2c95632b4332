from __future__ import annotations

import re

from starlette.testclient import TestClient

UUID4_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def _access_records(caplog):
    return [r for r in caplog.records if r.name == "access"]


def test_access_log_matches_client_supplied_request_id(client: TestClient, caplog) -> None:
    rid = "r-abc"
    with caplog.at_level("INFO", logger="access"):
        response = client.get("/health", headers={"X-Request-ID": rid})
    assert response.headers["X-Request-ID"] == rid

    recs = _access_records(caplog)
    assert any(getattr(r, "request_id", None) == rid for r in recs), (
        "access log did not emit the same request_id as the header"
    )


def test_access_log_matches_generated_uuid4_request_id(client: TestClient, caplog) -> None:
    with caplog.at_level("INFO", logger="access"):
        response = client.get("/health")
    rid = response.headers.get("X-Request-ID", "")
    assert UUID4_RE.match(rid), f"not a UUID4: {rid}"
    assert any(getattr(r, "request_id", None) == rid for r in _access_records(caplog))


def test_access_log_fields(client: TestClient, caplog) -> None:
    with caplog.at_level("INFO", logger="access"):
        client.post("/search", data={"searchTerm": "hello"})
    rec = _access_records(caplog)[-1]
    assert rec.method == "POST"
    assert rec.path == "/search"
    assert rec.status == 200
    assert rec.duration_ms >= 0
