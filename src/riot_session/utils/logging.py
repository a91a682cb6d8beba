"""Logging helpers that keep credentials out of log records."""

from __future__ import annotations


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Return *value* with everything but the first *keep_chars* replaced by ``*``.

    >>> mask_sensitive("player@example.com", 3)
    'pla****'
    """
    if not value:
        return "<empty>"
    if len(value) <= keep_chars:
        return "*" * len(value)
    return f"{value[:keep_chars]}****"
