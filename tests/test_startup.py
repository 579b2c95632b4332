from __future__ import annotations

from starlette.testclient import TestClient

from searchguard.main import build_app, create_app, protections_summary


def test_build_app_alias() -> None:
    assert build_app is create_app


def test_startup_logs_enabled_protections(app, caplog) -> None:
    with caplog.at_level("INFO", logger="searchguard.main"):
        with TestClient(app):
            pass
    recs = [r for r in caplog.records if r.getMessage() == "protections enabled"]
    assert recs
    rec = recs[-1]
    assert rec.xss_rules > 0 and rec.sql_rules > 0
    assert rec.max_length == 1000
    assert rec.security_headers is True


def test_summary_reflects_settings(make_app) -> None:
    app = make_app(SEARCH_SANITIZER="none", SEC_HEADERS_ENABLED=False, SEARCH_MAX_LENGTH=10)
    summary = protections_summary(app)
    assert summary["sanitizer"] == "none"
    assert summary["security_headers"] is False
    assert summary["max_length"] == 10
