# searchguard/routes/metrics.py
# Prometheus /metrics exposition.
# - Hidden (404) when METRICS_ROUTE_ENABLED is off.
# - Optional API key via METRICS_API_KEY (X-API-Key or Bearer).
# - Forces Prometheus text exposition v0.0.4 content type regardless of library defaults.

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from prometheus_client import REGISTRY, generate_latest

router = APIRouter(tags=["metrics"])

TEXT_EXPO_V004 = "text/plain; version=0.0.4; charset=utf-8"


def _auth_ok(request: Request, required: str) -> bool:
    # Accept either X-API-Key: <key> or Authorization: Bearer <key>
    hdr_key = request.headers.get("x-api-key")
    if hdr_key and hdr_key == required:
        return True
    auth = request.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        token = auth[7:].strip()
        if token == required:
            return True
    return False


@router.get("/metrics", include_in_schema=False)
async def metrics(request: Request) -> Response:
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and not settings.METRICS_ROUTE_ENABLED:
        raise HTTPException(status_code=404, detail="Not Found")

    required: Optional[str] = getattr(settings, "METRICS_API_KEY", None) or None
    if required is not None and not _auth_ok(request, required):
        raise HTTPException(status_code=401, detail="Unauthorized")

    resp = Response(content=generate_latest(REGISTRY))
    resp.headers["Content-Type"] = TEXT_EXPO_V004
    return resp
