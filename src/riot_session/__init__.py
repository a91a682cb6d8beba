"""Client-side session manager for Riot Games' cookie-based OAuth flow."""

from __future__ import annotations

from riot_session.auth import (  # noqa: F401
    AuthConfig,
    AuthError,
    AuthErrorKind,
    CookiePair,
    MultifactorRequiredError,
    RiotAuthService,
    Session,
    is_session_valid,
)
from riot_session.utils.environment import RiotAuthSettings  # noqa: F401
from riot_session.utils.http import HttpTransport, Transport, TransportError  # noqa: F401

__version__ = "0.1.0"
