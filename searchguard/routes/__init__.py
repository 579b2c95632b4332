"""HTTP routes: the search pages plus health, version and metrics."""

from . import health, metrics, search

__all__ = ["health", "metrics", "search"]
