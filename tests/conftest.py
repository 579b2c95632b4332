# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from starlette.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from searchguard.config import Settings  # noqa: E402
from searchguard.main import create_app  # noqa: E402
from searchguard.observability import metrics as metrics_mod  # noqa: E402


@pytest.fixture(autouse=True)
def _metrics_enabled():
    # create_app() flips a process-wide flag; put it back after each test.
    yield
    metrics_mod.set_metrics_enabled(True)


@pytest.fixture()
def make_app():
    """Build an app from explicit settings overrides."""

    def _make(**overrides):
        return create_app(Settings(**overrides))

    return _make


@pytest.fixture()
def app():
    # Function scope: new app for each test to pick up monkeypatched env.
    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
