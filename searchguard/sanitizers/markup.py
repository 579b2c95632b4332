"""Reference HTML sanitizers used by the classifier's divergence check.

The classifier only needs ``sanitize(text) -> str``. Any object with that
method can be plugged into ``ClassifierConfig``; the default is backed by
``bleach``.
"""

from __future__ import annotations

from typing import AbstractSet, Dict, List, Optional, Protocol

import bleach
from bleach.sanitizer import ALLOWED_ATTRIBUTES, ALLOWED_TAGS

SANITIZER_BLEACH = "bleach"
SANITIZER_NONE = "none"
SANITIZER_CHOICES = (SANITIZER_BLEACH, SANITIZER_NONE)


class MarkupSanitizer(Protocol):
    """Strips or escapes unsafe markup; returns the input unchanged when clean."""

    def sanitize(self, text: str) -> str: ...


class BleachSanitizer:
    """
    Sanitize with ``bleach.clean``.

    A fresh cleaner is built per call: bleach's ``Cleaner`` keeps parser state
    and must not be shared between threads.
    """

    def __init__(
        self,
        *,
        tags: Optional[AbstractSet[str]] = None,
        attributes: Optional[Dict[str, List[str]]] = None,
        strip: bool = False,
    ) -> None:
        self._tags = frozenset(tags) if tags is not None else frozenset(ALLOWED_TAGS)
        self._attributes = (
            dict(attributes) if attributes is not None else dict(ALLOWED_ATTRIBUTES)
        )
        self._strip = strip

    def sanitize(self, text: str) -> str:
        # No tag opener means no markup; plain text comes back unchanged.
        if "<" not in text:
            return text
        return bleach.clean(
            text,
            tags=self._tags,
            attributes=self._attributes,
            strip=self._strip,
        )

    def __repr__(self) -> str:
        return f"BleachSanitizer(tags={len(self._tags)}, strip={self._strip})"


def get_sanitizer(name: str) -> Optional[MarkupSanitizer]:
    """Resolve a configured sanitizer name; ``"none"`` disables the check."""
    key = (name or "").strip().lower()
    if key == SANITIZER_BLEACH:
        return BleachSanitizer()
    if key == SANITIZER_NONE:
        return None
    raise ValueError(f"unknown sanitizer: {name!r} (expected one of {SANITIZER_CHOICES})")


__all__ = [
    "BleachSanitizer",
    "MarkupSanitizer",
    "SANITIZER_BLEACH",
    "SANITIZER_CHOICES",
    "SANITIZER_NONE",
    "get_sanitizer",
]
