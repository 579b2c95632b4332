# searchguard/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI

from searchguard.classifier import PATTERN_TABLE_VERSION
from searchguard.config import Settings, get_settings
from searchguard.middleware.access_log import AccessLogMiddleware
from searchguard.middleware.request_id import RequestIDMiddleware
from searchguard.middleware.security_headers import install_security_headers
from searchguard.observability.metrics import set_metrics_enabled
from searchguard.routes import health, metrics, search
from searchguard.telemetry.errors import register_error_handlers
from searchguard.telemetry.logging import configure_root_logging

log = logging.getLogger(__name__)


def protections_summary(app: FastAPI) -> Dict[str, Any]:
    """What is switched on for this app instance (logged once at startup)."""
    settings: Settings = app.state.settings
    cfg = app.state.classifier_config
    return {
        "xss_rules": len(cfg.xss_patterns),
        "sql_rules": len(cfg.sql_patterns),
        "sanitizer": repr(cfg.sanitizer) if cfg.sanitizer is not None else "none",
        "max_length": cfg.max_length,
        "patterns_version": PATTERN_TABLE_VERSION,
        "security_headers": bool(getattr(app.state, "security_headers_installed", False)),
        "metrics": settings.METRICS_ENABLED,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("protections enabled", extra=protections_summary(app))
    yield


OPENAPI_TAGS = [
    {"name": "search", "description": "Search form and input classification"},
    {"name": "ops", "description": "Liveness and build info"},
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    configure_root_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    set_metrics_enabled(settings.METRICS_ENABLED)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Search form that rejects script and SQL injection input.",
        version=settings.VERSION,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings
    app.state.classifier_config = settings.classifier_config()

    app.include_router(search.router)
    app.include_router(health.router)
    app.include_router(metrics.router)

    register_error_handlers(app)

    # Middleware order: the last one added runs first.
    # RequestID must be outermost so every inner layer sees the id.
    app.add_middleware(AccessLogMiddleware)
    app.state.security_headers_installed = install_security_headers(app, settings)
    app.add_middleware(RequestIDMiddleware)

    return app


build_app = create_app
app = create_app()
