"""Heuristic XSS / SQL injection input classifier."""

from .engine import (
    ABSENT,
    DEFAULT_CONFIG,
    DEFAULT_MAX_LENGTH,
    ClassifierConfig,
    classify,
    classify_with_rule,
)
from .patterns import PATTERN_TABLE_VERSION
from .types import REASON_MESSAGES, ClassificationResult, Reason, Verdict

__all__ = [
    "ABSENT",
    "ClassificationResult",
    "ClassifierConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_MAX_LENGTH",
    "PATTERN_TABLE_VERSION",
    "REASON_MESSAGES",
    "Reason",
    "Verdict",
    "classify",
    "classify_with_rule",
]
