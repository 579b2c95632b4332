"""Value types produced by the input classifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Verdict(str, Enum):
    SAFE = "safe"
    REJECTED = "rejected"


class Reason(str, Enum):
    NONE = "none"
    MISSING = "missing"
    EMPTY = "empty"
    WRONG_TYPE = "wrong_type"
    XSS = "xss"
    SQL_INJECTION = "sql_injection"
    TOO_LONG = "too_long"
    NULL_BYTE = "null_byte"
    DISALLOWED_CHARSET = "disallowed_charset"


# Operator-facing messages; the rendered page always shows a generic notice.
REASON_MESSAGES: Dict[Reason, str] = {
    Reason.NONE: "Input is safe",
    Reason.MISSING: "Input is missing",
    Reason.EMPTY: "Input is empty",
    Reason.WRONG_TYPE: "Invalid input type",
    Reason.XSS: "XSS attack detected",
    Reason.SQL_INJECTION: "SQL injection attack detected",
    Reason.TOO_LONG: "Input too long",
    Reason.NULL_BYTE: "Null byte detected",
    Reason.DISALLOWED_CHARSET: "Invalid characters detected",
}


@dataclass(frozen=True)
class ClassificationResult:
    """Verdict plus the reason it was reached.

    ``verdict`` is SAFE exactly when ``reason`` is NONE.
    """

    verdict: Verdict
    reason: Reason

    def __post_init__(self) -> None:
        if (self.verdict is Verdict.SAFE) != (self.reason is Reason.NONE):
            raise ValueError(
                f"inconsistent classification: verdict={self.verdict.value} "
                f"reason={self.reason.value}"
            )

    @classmethod
    def ok(cls) -> "ClassificationResult":
        return cls(Verdict.SAFE, Reason.NONE)

    @classmethod
    def reject(cls, reason: Reason) -> "ClassificationResult":
        return cls(Verdict.REJECTED, reason)

    @property
    def safe(self) -> bool:
        return self.verdict is Verdict.SAFE

    @property
    def message(self) -> str:
        return REASON_MESSAGES[self.reason]

    def to_dict(self) -> Dict[str, str]:
        return {"verdict": self.verdict.value, "reason": self.reason.value}


__all__ = ["ClassificationResult", "REASON_MESSAGES", "Reason", "Verdict"]
