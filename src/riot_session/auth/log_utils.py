"""Structured logging helpers for the session engine.

This module purposefully restricts **which** contextual attributes are attached
to log records in order to avoid accidentally leaking secrets.  All helpers
ONLY inject the following *non-sensitive* fields:

- ``operation``      – Engine entry point (``authenticate``, ``refresh``…)
- ``username``       – Riot account name, masked to its first 3 characters
- ``region``         – Shard the caller intends to play on, if known
- ``correlation_id`` – Caller-supplied request identifier

Tokens, cookies, passwords and multifactor codes are never attached.

Usage
-----
>>> from riot_session.auth.log_utils import get_auth_logger
>>> log = get_auth_logger(operation="authenticate", username="player123")
>>> log.info("Starting credential login")
INFO riot-session.auth operation=authenticate username=pla**** ...

The adapter is a thin wrapper around :class:`logging.LoggerAdapter`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

from riot_session.utils.logging import mask_sensitive


class _AuthLoggerAdapter(logging.LoggerAdapter):
    """Inject whitelisted auth context into log records."""

    extra_keys = ("operation", "username", "region", "correlation_id")

    def __init__(self, logger: logging.Logger, extra: Mapping[str, Any] | None = None):
        extra_clean: MutableMapping[str, Any] = {}
        for k in self.extra_keys:
            if not extra or extra.get(k) is None:
                continue
            if k == "username":
                extra_clean[k] = mask_sensitive(str(extra[k]), 3)
            else:
                extra_clean[k] = extra[k]
        super().__init__(logger, extra_clean)

    def process(self, msg: str, kwargs: MutableMapping[str, Any]):
        if "extra" not in kwargs or kwargs["extra"] is None:
            kwargs["extra"] = {}
        # merge but do not overwrite call-site provided extras
        for k, v in self.extra.items():
            kwargs["extra"].setdefault(k, v)
        return msg, kwargs


def get_auth_logger(
    *,
    base_logger_name: str = "riot-session.auth",
    operation: str | None = None,
    username: str | None = None,
    region: str | None = None,
    correlation_id: str | None = None,
) -> logging.LoggerAdapter:
    """Return a LoggerAdapter pre-filled with auth context."""
    logger = logging.getLogger(base_logger_name)
    return _AuthLoggerAdapter(
        logger,
        {
            "operation": operation,
            "username": username,
            "region": region,
            "correlation_id": correlation_id,
        },
    )
