from __future__ import annotations

import os
import platform
import sys
import time
from typing import Any, Dict

from fastapi import APIRouter, Request

from searchguard import config
from searchguard.classifier import DEFAULT_MAX_LENGTH, PATTERN_TABLE_VERSION

router = APIRouter(tags=["ops"])


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok", "patterns_version": PATTERN_TABLE_VERSION}


@router.get("/version")
def version(request: Request) -> Dict[str, object]:
    settings = getattr(request.app.state, "settings", None)
    cfg = getattr(request.app.state, "classifier_config", None)
    return {
        "name": getattr(settings, "APP_NAME", "searchguard"),
        "version": getattr(settings, "VERSION", config.APP_VERSION),
        "git_sha": os.getenv("GIT_SHA", config.GIT_SHA),
        "build_ts": os.getenv("BUILD_TS", config.BUILD_TS),
        "runtime": {
            "python": sys.version.split(" ")[0],
            "platform": platform.platform(),
            "tz": time.tzname,
        },
        "features": {
            "patterns_version": PATTERN_TABLE_VERSION,
            "sanitizer": getattr(settings, "SEARCH_SANITIZER", "bleach"),
            "max_length": cfg.max_length if cfg is not None else DEFAULT_MAX_LENGTH,
            "security_headers": bool(getattr(settings, "SEC_HEADERS_ENABLED", True)),
        },
    }
