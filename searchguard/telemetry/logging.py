# searchguard/telemetry/logging.py
"""Structured stdout logging.

One JSON object per line with ``ts``, ``level``, ``logger``, ``message``,
the current ``request_id`` (when inside a request) and any ``extra`` fields.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Mapping, MutableMapping, Tuple, Union

from searchguard.middleware.request_id import get_request_id

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS: FrozenSet[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _utc_iso(ts: float) -> str:
    stamp = datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
    return stamp.replace("+00:00", "Z")


def _jsonable(value: Any) -> Any:
    """Coerce log field values into something ``json.dumps`` accepts."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, datetime):
        return _utc_iso(value.timestamp())
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(v) for v in value]
    return str(value)


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: v
        for k, v in vars(record).items()
        if k not in _RECORD_ATTRS and not k.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = record_extras(record)
        payload: Dict[str, Any] = {
            "ts": _utc_iso(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = extras.pop("request_id", None) or get_request_id()
        if rid:
            payload["request_id"] = rid
        for key, value in extras.items():
            payload.setdefault(key, _jsonable(value))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


_configured = False


def configure_root_logging(level: Union[int, str] = "INFO", *, json_logs: bool = True) -> None:
    """
    Install a single stdout handler on the root logger. Only the first call
    has an effect, so building several apps in one process (tests) is safe.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter() if json_logs else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
    _configured = True


class ContextAdapter(logging.LoggerAdapter):
    """Adds bound fields to every call; fields passed per call take priority."""

    def __init__(self, logger: logging.Logger, extra: Mapping[str, Any] | None = None):
        super().__init__(logger, dict(extra or {}))

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        call_extra = kwargs.get("extra")
        merged = dict(self.extra or {})
        if isinstance(call_extra, Mapping):
            merged.update(call_extra)
        kwargs["extra"] = merged
        return msg, kwargs


def bind(logger: logging.Logger | None = None, **context: Any) -> ContextAdapter:
    """
    Return a LoggerAdapter with bound context.

        log = bind(logging.getLogger("searchguard.search"), component="search")
        log.info("search classified", extra={"reason": "xss"})

    If logger is None, the root logger is used.
    """
    return ContextAdapter(logger or logging.getLogger(), context)


__all__ = [
    "ContextAdapter",
    "JsonFormatter",
    "bind",
    "configure_root_logging",
    "record_extras",
]
