from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from searchguard.classifier import (
    ABSENT,
    DEFAULT_CONFIG,
    PATTERN_TABLE_VERSION,
    ClassifierConfig,
    classify_with_rule,
)
from searchguard.observability.metrics import record_classification
from searchguard.services.responses import render_home, select_response
from searchguard.telemetry.logging import bind

router = APIRouter(tags=["search"])

SEARCH_FIELD = "searchTerm"

log = bind(logging.getLogger("searchguard.search"), component="search")

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def extract_search_term(request: Request) -> Any:
    """
    Pull the raw ``searchTerm`` value out of a form or JSON body.

    Nothing is validated here: absent fields come back as ``ABSENT`` and
    repeated form fields as a list, so the classifier decides on them.
    """
    ctype = (request.headers.get("content-type") or "").lower()

    if "application/json" in ctype:
        try:
            body = await request.json()
        except (ValueError, UnicodeDecodeError):
            return ABSENT
        if not isinstance(body, dict):
            return ABSENT
        return body.get(SEARCH_FIELD, ABSENT)

    if ctype.startswith(_FORM_TYPES):
        form = await request.form()
        try:
            values = form.getlist(SEARCH_FIELD)
        finally:
            await form.close()
        if not values:
            return ABSENT
        if len(values) > 1:
            return list(values)
        return values[0]

    return ABSENT


def _classifier_config(request: Request) -> ClassifierConfig:
    cfg = getattr(request.app.state, "classifier_config", None)
    return cfg if isinstance(cfg, ClassifierConfig) else DEFAULT_CONFIG


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(request: Request) -> HTMLResponse:
    return render_home(request)


@router.post("/search", response_class=HTMLResponse)
async def search(request: Request) -> HTMLResponse:
    raw = await extract_search_term(request)

    start = time.perf_counter()
    result, rule_id = classify_with_rule(raw, _classifier_config(request))
    elapsed = time.perf_counter() - start

    record_classification(result.verdict.value, result.reason.value, elapsed)
    # The raw value is never logged; only its shape.
    log.info(
        "search classified",
        extra={
            "verdict": result.verdict.value,
            "reason": result.reason.value,
            "rule_id": rule_id,
            "input_type": "absent" if raw is ABSENT else type(raw).__name__,
            "input_length": len(raw) if isinstance(raw, str) else None,
            "patterns_version": PATTERN_TABLE_VERSION,
        },
    )
    return select_response(request, result, raw)
