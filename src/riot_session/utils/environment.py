"""Environment-driven configuration for the session engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final, Tuple

from riot_session import constants

logger = logging.getLogger("riot-session.utils.environment")

_TRUTHY: Final[Tuple[str, ...]] = ("true", "1", "yes", "y", "on")
_FALSY: Final[Tuple[str, ...]] = ("false", "0", "no", "n", "off")


def _truthy(value: str | None, default: bool = False) -> bool:
    raw = (value or "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def _env_url(key: str, default: str) -> str:
    return (os.getenv(key) or default).rstrip("/")


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %s", key, raw, default)
        return default
    return value


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", key, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must not be negative, using %s", key, raw, default)
        return default
    return value


@dataclass(frozen=True, slots=True)
class RiotAuthSettings:
    """Endpoints, client identity and HTTP tuning used by the engine.

    Defaults target the public Riot services; every field can be overridden
    through ``RIOT_*`` environment variables (see :meth:`from_env`).
    """

    auth_url: str = constants.RIOT_AUTH_URL
    entitlements_url: str = constants.RIOT_ENTITLEMENTS_URL
    client_id: str = constants.CLIENT_ID
    redirect_uri: str = constants.REDIRECT_URI
    entitlements_client_secret: str = constants.ENTITLEMENTS_CLIENT_SECRET
    user_agent: str = constants.USER_AGENT
    timeout: float = constants.DEFAULT_TIMEOUT_SECONDS
    retries: int = constants.DEFAULT_RETRIES
    remember_device: bool = True

    @classmethod
    def from_env(cls) -> "RiotAuthSettings":
        """Build settings from the process environment.

        Malformed numeric values are logged and replaced by their defaults so a
        typo never prevents the client from starting.
        """
        return cls(
            auth_url=_env_url("RIOT_AUTH_URL", constants.RIOT_AUTH_URL),
            entitlements_url=_env_url(
                "RIOT_ENTITLEMENTS_URL", constants.RIOT_ENTITLEMENTS_URL
            ),
            client_id=os.getenv("RIOT_CLIENT_ID") or constants.CLIENT_ID,
            redirect_uri=os.getenv("RIOT_REDIRECT_URI") or constants.REDIRECT_URI,
            entitlements_client_secret=(
                os.getenv("RIOT_ENTITLEMENTS_CLIENT_SECRET")
                or constants.ENTITLEMENTS_CLIENT_SECRET
            ),
            user_agent=os.getenv("RIOT_USER_AGENT") or constants.USER_AGENT,
            timeout=_env_float("RIOT_HTTP_TIMEOUT", constants.DEFAULT_TIMEOUT_SECONDS),
            retries=_env_int("RIOT_HTTP_RETRIES", constants.DEFAULT_RETRIES),
            remember_device=_truthy(os.getenv("RIOT_REMEMBER_DEVICE"), default=True),
        )

    def auth_endpoint(self, path: str) -> str:
        return f"{self.auth_url}{path}"

    def entitlements_endpoint(self, path: str) -> str:
        return f"{self.entitlements_url}{path}"
