"""Wire constants for the Riot identity and entitlements services."""

from __future__ import annotations

from typing import Final

RIOT_AUTH_URL: Final[str] = "https://auth.riotgames.com"
RIOT_ENTITLEMENTS_URL: Final[str] = "https://entitlements.auth.riotgames.com"

# Paths relative to the base URLs above
AUTHORIZE_PATH: Final[str] = "/authorize"
MULTIFACTOR_PATH: Final[str] = "/api/v1/authorization"
ENTITLEMENTS_PATH: Final[str] = "/api/token/v1"
USERINFO_PATH: Final[str] = "/userinfo"

CLIENT_ID: Final[str] = "play-valorant-web-prod"
REDIRECT_URI: Final[str] = "https://playvalorant.com/opt_in"
AUTHORIZE_NONCE: Final[str] = "1"
AUTHORIZE_RESPONSE_TYPE: Final[str] = "token id_token"
AUTHORIZE_SCOPE: Final[str] = "account openid"
ENTITLEMENTS_CLIENT_SECRET: Final[str] = "RiotClientSecret"  # noqa: S105

USER_AGENT: Final[str] = (
    "RiotClient/58.0.0.6400294126 (Windows; 10; Professional (Build 19041))"
)

DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "User-Agent": USER_AGENT,
}

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
DEFAULT_RETRIES: Final[int] = 0

# Human-readable messages shared by the engine and its callers
MSG_MULTIFACTOR_REQUIRED: Final[str] = "Multifactor authentication required"
MSG_NO_ACTIVE_SESSION: Final[str] = "No active session found. Please authenticate first."
MSG_UNKNOWN_ERROR: Final[str] = "Unknown error"
