# searchguard/services/responses.py
"""Response selection: classification result -> rendered page.

SAFE results render the term HTML-escaped; REJECTED results re-render the
form with an empty value and never pass the raw input to a template.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from markupsafe import escape
from starlette.responses import HTMLResponse

from searchguard.classifier import DEFAULT_MAX_LENGTH, ClassificationResult

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

DEFAULT_APP_NAME = "Secure Search Application"
REJECTION_NOTICE = "Invalid input detected"


def _page_context(request: Request) -> Dict[str, Any]:
    settings = getattr(request.app.state, "settings", None)
    return {
        "app_name": getattr(settings, "APP_NAME", DEFAULT_APP_NAME),
        "max_length": getattr(settings, "SEARCH_MAX_LENGTH", DEFAULT_MAX_LENGTH),
    }


def render_home(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "home.html", _page_context(request))


def render_results(request: Request, search_term: str) -> HTMLResponse:
    ctx = _page_context(request)
    # Escaped explicitly; Markup is not escaped a second time by autoescape.
    ctx["search_term"] = escape(search_term)
    return templates.TemplateResponse(request, "results.html", ctx)


def render_rejected(request: Request) -> HTMLResponse:
    ctx = _page_context(request)
    ctx["notice"] = REJECTION_NOTICE
    return templates.TemplateResponse(request, "rejected.html", ctx)


def select_response(
    request: Request, result: ClassificationResult, raw: Optional[Any]
) -> HTMLResponse:
    """Pick the page for ``result``. ``raw`` is only rendered when SAFE."""
    if result.safe and isinstance(raw, str):
        return render_results(request, raw)
    return render_rejected(request)


def render_error(
    request: Request,
    *,
    status_code: int,
    title: str,
    message: str,
    code: str,
    request_id: str,
) -> HTMLResponse:
    ctx = _page_context(request)
    ctx.update(
        {
            "title": title,
            "message": message,
            "code": code,
            "request_id": request_id,
        }
    )
    return templates.TemplateResponse(request, "error.html", ctx, status_code=status_code)


__all__ = [
    "REJECTION_NOTICE",
    "TEMPLATES_DIR",
    "render_error",
    "render_home",
    "render_rejected",
    "render_results",
    "select_response",
    "templates",
]
