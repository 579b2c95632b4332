# searchguard/classifier/engine.py
"""Ordered input classification: deny-lists, sanitizer divergence, allow-list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Pattern, Tuple

from searchguard.sanitizers.markup import BleachSanitizer, MarkupSanitizer

from .patterns import (
    ALLOWED_CHARSET,
    SQL_INJECTION_PATTERNS,
    XSS_PATTERNS,
    PatternRule,
    first_match,
)
from .types import ClassificationResult, Reason

log = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 1000

# Rule ids reported for checks that are not regex rules.
RULE_SANITIZER_DIVERGENCE = "sanitizer_divergence"
RULE_SANITIZER_ERROR = "sanitizer_error"


class _Absent:
    """Marker for a field that was not supplied at all (classified WRONG_TYPE)."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


@dataclass(frozen=True)
class ClassifierConfig:
    """Explicit parameters for one classification.

    ``sanitizer=None`` skips the divergence check entirely.
    """

    xss_patterns: Tuple[PatternRule, ...] = XSS_PATTERNS
    sql_patterns: Tuple[PatternRule, ...] = SQL_INJECTION_PATTERNS
    sanitizer: Optional[MarkupSanitizer] = field(default_factory=BleachSanitizer)
    max_length: int = DEFAULT_MAX_LENGTH
    allowed_charset: Pattern[str] = ALLOWED_CHARSET

    def __post_init__(self) -> None:
        if self.max_length < 1:
            raise ValueError("max_length must be >= 1")

    def with_overrides(self, **changes: Any) -> "ClassifierConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = ClassifierConfig()


def _sanitizer_diverges(sanitizer: MarkupSanitizer, text: str) -> Tuple[bool, str]:
    try:
        cleaned = sanitizer.sanitize(text)
    except Exception as exc:
        # Fail closed: an input the sanitizer cannot process is not echoed back.
        log.warning(
            "reference sanitizer failed; rejecting input",
            extra={"sanitizer": repr(sanitizer), "error": type(exc).__name__},
        )
        return True, RULE_SANITIZER_ERROR
    return cleaned != text, RULE_SANITIZER_DIVERGENCE


def classify_with_rule(
    raw: Any = ABSENT, config: ClassifierConfig = DEFAULT_CONFIG
) -> Tuple[ClassificationResult, Optional[str]]:
    """
    Classify ``raw`` and also report which rule decided a pattern rejection.

    The rule id is ``None`` for SAFE results and for rejections that are not
    pattern based (missing, empty, too long, ...).
    """
    if raw is None:
        return ClassificationResult.reject(Reason.MISSING), None
    if not isinstance(raw, str):
        return ClassificationResult.reject(Reason.WRONG_TYPE), None
    if not raw.strip():
        return ClassificationResult.reject(Reason.EMPTY), None

    hit = first_match(config.xss_patterns, raw)
    if hit is not None:
        return ClassificationResult.reject(Reason.XSS), hit.rule_id

    hit = first_match(config.sql_patterns, raw)
    if hit is not None:
        return ClassificationResult.reject(Reason.SQL_INJECTION), hit.rule_id

    if config.sanitizer is not None:
        diverged, rule_id = _sanitizer_diverges(config.sanitizer, raw)
        if diverged:
            return ClassificationResult.reject(Reason.XSS), rule_id

    if len(raw) > config.max_length:
        return ClassificationResult.reject(Reason.TOO_LONG), None
    if "\x00" in raw:
        return ClassificationResult.reject(Reason.NULL_BYTE), None
    if config.allowed_charset.fullmatch(raw) is None:
        return ClassificationResult.reject(Reason.DISALLOWED_CHARSET), None

    return ClassificationResult.ok(), None


def classify(raw: Any = ABSENT, config: ClassifierConfig = DEFAULT_CONFIG) -> ClassificationResult:
    """Return the verdict for ``raw``. Never raises."""
    result, _ = classify_with_rule(raw, config)
    return result


__all__ = [
    "ABSENT",
    "DEFAULT_CONFIG",
    "DEFAULT_MAX_LENGTH",
    "ClassifierConfig",
    "classify",
    "classify_with_rule",
]
