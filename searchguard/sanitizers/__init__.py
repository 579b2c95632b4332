"""Reference sanitizers used for the markup divergence check."""

from .markup import BleachSanitizer, MarkupSanitizer, get_sanitizer

__all__ = ["BleachSanitizer", "MarkupSanitizer", "get_sanitizer"]
