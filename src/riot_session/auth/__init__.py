"""Session lifecycle core.

This namespace hosts the building blocks that turn Riot credentials or a
browser cookie jar into usable API tokens, and keep them usable.

Sub-modules
-----------
clock
    Test-friendly time abstraction.
cookies
    ``Cookie`` header encoding / decoding.
token_parser
    Token extraction from implicit-grant redirect fragments.
entitlements
    Access-token to entitlements-token exchange.
models
    Immutable dataclasses for sessions, cookies and credentials.
errors
    Typed exceptions raised by the engine.
log_utils
    Structured logging helpers (thin wrapper around :pymod:`logging`).
service
    :class:`RiotAuthService`, the lifecycle engine.

All public objects are re-exported here for convenience.
"""

from __future__ import annotations

from .clock import Clock, default_clock, fixed_clock, remaining_seconds  # noqa: F401
from .cookies import build_cookie_string, cookies_from_set_cookie, parse_cookies  # noqa: F401
from .token_parser import parse_redirect_tokens  # noqa: F401
from .models import (  # noqa: F401
    AuthConfig,
    CookiePair,
    RedirectTokens,
    Session,
    UserInfo,
    is_session_valid,
)
from .errors import AuthError, AuthErrorKind, MultifactorRequiredError  # noqa: F401
from .log_utils import get_auth_logger  # noqa: F401
from .entitlements import EntitlementExchanger  # noqa: F401
from .service import RiotAuthService  # noqa: F401

__all__ = [
    # clock
    "Clock",
    "default_clock",
    "fixed_clock",
    "remaining_seconds",
    # cookies
    "build_cookie_string",
    "cookies_from_set_cookie",
    "parse_cookies",
    # token parsing
    "parse_redirect_tokens",
    # models
    "AuthConfig",
    "CookiePair",
    "RedirectTokens",
    "Session",
    "UserInfo",
    "is_session_valid",
    # errors
    "AuthError",
    "AuthErrorKind",
    "MultifactorRequiredError",
    # logging helpers
    "get_auth_logger",
    # engine
    "EntitlementExchanger",
    "RiotAuthService",
]
