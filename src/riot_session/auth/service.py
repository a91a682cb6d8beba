"""RiotAuthService – session lifecycle engine.

The service turns credentials or a browser cookie jar into a
:class:`~riot_session.auth.models.Session` and keeps that session usable:

* :meth:`RiotAuthService.authenticate` – username/password login
* :meth:`RiotAuthService.reauthenticate` – implicit grant driven by cookies
* :meth:`RiotAuthService.handle_multifactor` – resolves a 2FA challenge
* :meth:`RiotAuthService.refresh` – cheap entitlement refresh or full
  re-authentication, depending on the session's expiry

The service holds collaborators only (transport, settings, clock).  All
session state travels in the immutable ``Session`` values passed in and
returned, so one instance can serve any number of concurrent callers.

Every public coroutine reports failures as :class:`AuthError`, whose ``kind``
tells callers *why* it failed.  Secrets (tokens, cookies, passwords, codes)
are never logged.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Iterator, Sequence

from riot_session.auth.clock import Clock, default_clock, remaining_seconds
from riot_session.auth.cookies import (
    build_cookie_string,
    cookies_from_set_cookie,
    parse_cookies,
)
from riot_session.auth.entitlements import EntitlementExchanger
from riot_session.auth.errors import AuthError, AuthErrorKind, MultifactorRequiredError
from riot_session.auth.log_utils import get_auth_logger
from riot_session.auth.models import (
    AuthConfig,
    CookiePair,
    Session,
    UserInfo,
    is_session_valid,
)
from riot_session.auth.token_parser import parse_redirect_tokens
from riot_session.constants import (
    AUTHORIZE_NONCE,
    AUTHORIZE_PATH,
    AUTHORIZE_RESPONSE_TYPE,
    AUTHORIZE_SCOPE,
    MSG_NO_ACTIVE_SESSION,
    MULTIFACTOR_PATH,
    USERINFO_PATH,
)
from riot_session.utils.environment import RiotAuthSettings
from riot_session.utils.http import HttpTransport, Transport, TransportError, TransportResponse

_LOG = logging.getLogger("riot-session.auth.service")


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #
@contextmanager
def _reported(prefix: str | None = None) -> Iterator[None]:
    """Translate any failure raised inside the block into :class:`AuthError`."""
    try:
        yield
    except AuthError as exc:
        if prefix:
            raise exc.with_prefix(prefix) from exc
        raise
    except TransportError as exc:
        err = AuthError(AuthErrorKind.TRANSPORT, str(exc), status_code=exc.status_code)
        raise (err.with_prefix(prefix) if prefix else err) from exc
    except Exception as exc:
        err = AuthError(AuthErrorKind.UNKNOWN, str(exc))
        raise (err.with_prefix(prefix) if prefix else err) from exc


def _json_object(resp: TransportResponse) -> dict[str, Any]:
    data = resp.json()
    if not isinstance(data, dict):
        raise TransportError(
            f"Unexpected response body (HTTP {resp.status_code})",
            status_code=resp.status_code,
        )
    return data


def _raise_for_provider_error(data: dict[str, Any]) -> None:
    error = data.get("error")
    if error:
        raise AuthError(AuthErrorKind.PROVIDER_REJECTED, str(error))


def _session_cookie(data: dict[str, Any]) -> str:
    token = data.get("session-cookie")
    if not token:
        raise AuthError(
            AuthErrorKind.TOKEN_EXTRACTION,
            "Failed to extract session cookie from authorization response",
        )
    return str(token)


# --------------------------------------------------------------------------- #
# Public service                                                              #
# --------------------------------------------------------------------------- #
class RiotAuthService:
    """Application service orchestrating the Riot session lifecycle."""

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        settings: RiotAuthSettings | None = None,
        clock: Clock = default_clock,
    ) -> None:
        self.settings = settings or RiotAuthSettings.from_env()
        self.transport = transport or HttpTransport(self.settings)
        self.clock = clock
        self.entitlements = EntitlementExchanger(self.transport, self.settings)

    # ------------------------------------------------------------------ #
    # Credential login                                                   #
    # ------------------------------------------------------------------ #
    async def authenticate(self, config: AuthConfig) -> Session:
        """Log in with username and password.

        The resulting session has no ``id_token``, no known expiry and an empty
        cookie jar, so :meth:`refresh` cannot renew it; callers re-run the
        login (or switch to cookies) once it stops working.

        Raises
        ------
        MultifactorRequiredError
            The account has 2FA enabled; finish with :meth:`handle_multifactor`.
        AuthError
            Any other failure, message prefixed with ``"Authentication failed"``.
        """
        log = get_auth_logger(
            operation="authenticate", username=config.username, region=config.region
        )
        with _reported("Authentication failed"):
            if not config.username or not config.password:
                raise AuthError(
                    AuthErrorKind.INVALID_INPUT, "Username and password are required"
                )

            log.info("Authenticating with credentials")
            resp = await self.transport.send(
                "POST",
                self.settings.auth_endpoint(AUTHORIZE_PATH),
                headers={"Content-Type": "application/json"},
                json={
                    "type": "auth",
                    "username": config.username,
                    "password": config.password,
                    "remember": config.remember,
                },
            )
            data = _json_object(resp)
            _raise_for_provider_error(data)

            if data.get("type") == "multifactor":
                challenge = data.get("multifactor") or {}
                log.info(
                    "Multifactor challenge issued (method=%s)", challenge.get("method")
                )
                raise MultifactorRequiredError(
                    method=challenge.get("method"),
                    email=challenge.get("email"),
                    code_length=challenge.get("multiFactorCodeLength"),
                    cookies=cookies_from_set_cookie(resp.headers.get_list("set-cookie")),
                )

            access_token = _session_cookie(data)
            entitlements_token = await self.entitlements.exchange(access_token)

        log.info("Authentication successful")
        return Session(
            access_token=access_token,
            id_token="",
            entitlements_token=entitlements_token,
            cookies=(),
        )

    # ------------------------------------------------------------------ #
    # Cookie re-authentication                                           #
    # ------------------------------------------------------------------ #
    async def reauthenticate(self, cookie_string: str) -> Session:
        """Mint a new session from a ``Cookie`` header value (``ssid=...; ...``).

        The ``/authorize`` call is sent with redirects disabled; the tokens are
        read from the ``Location`` header of the redirect response.
        """
        log = get_auth_logger(operation="reauthenticate")
        with _reported():
            if not cookie_string or not cookie_string.strip():
                raise AuthError(AuthErrorKind.INVALID_INPUT, "Cookie string is empty")

            resp = await self.transport.send(
                "GET",
                self.settings.auth_endpoint(AUTHORIZE_PATH),
                headers={"Cookie": cookie_string},
                params={
                    "client_id": self.settings.client_id,
                    "nonce": AUTHORIZE_NONCE,
                    "redirect_uri": self.settings.redirect_uri,
                    "response_type": AUTHORIZE_RESPONSE_TYPE,
                    "scope": AUTHORIZE_SCOPE,
                },
                follow_redirects=False,
            )

            tokens = parse_redirect_tokens(resp.headers.get("location"), clock=self.clock)
            if not tokens.access_token:
                raise AuthError(
                    AuthErrorKind.TOKEN_EXTRACTION,
                    "Failed to extract access token from cookies",
                    status_code=resp.status_code,
                )
            if not tokens.id_token:
                raise AuthError(
                    AuthErrorKind.TOKEN_EXTRACTION,
                    "Failed to extract id token from cookies",
                    status_code=resp.status_code,
                )
            if not tokens.expire_at:
                raise AuthError(
                    AuthErrorKind.TOKEN_EXTRACTION,
                    "Failed to extract expire at from cookies",
                    status_code=resp.status_code,
                )

            entitlements_token = await self.entitlements.exchange(tokens.access_token)

        log.info(
            "Re-authenticated with cookies (expires in %ds)",
            remaining_seconds(tokens.expire_at, clock=self.clock),
        )
        return Session(
            access_token=tokens.access_token,
            id_token=tokens.id_token,
            entitlements_token=entitlements_token,
            expire_at=tokens.expire_at,
            cookies=tuple(parse_cookies(cookie_string)),
        )

    # ------------------------------------------------------------------ #
    # Multifactor                                                        #
    # ------------------------------------------------------------------ #
    async def handle_multifactor(
        self, cookies: Sequence[CookiePair] | None, code: str
    ) -> Session:
        """Submit the 2FA *code* for the login that produced *cookies*.

        The provider's ``session-cookie`` becomes the access token; the cookie
        jar is carried over unchanged.
        """
        log = get_auth_logger(operation="handle_multifactor")
        with _reported():
            if not cookies:
                raise AuthError(AuthErrorKind.INVALID_INPUT, MSG_NO_ACTIVE_SESSION)

            resp = await self.transport.send(
                "PUT",
                self.settings.auth_endpoint(MULTIFACTOR_PATH),
                headers={
                    "Cookie": build_cookie_string(cookies),
                    "Content-Type": "application/json",
                },
                json={
                    "type": "multifactor",
                    "code": code,
                    "rememberDevice": self.settings.remember_device,
                },
            )
            data = _json_object(resp)
            _raise_for_provider_error(data)

            access_token = _session_cookie(data)
            entitlements_token = await self.entitlements.exchange(access_token)

        log.info("Multifactor challenge resolved")
        return Session(
            access_token=access_token,
            id_token="",
            entitlements_token=entitlements_token,
            cookies=tuple(cookies),
        )

    # ------------------------------------------------------------------ #
    # Refresh                                                            #
    # ------------------------------------------------------------------ #
    async def refresh(self, session: Session) -> Session:
        """Return a session whose tokens are usable again.

        1. Access token still valid: only the entitlements token is renewed.
           ``id_token`` is kept as is.
        2. Expired (or unknown expiry) with a cookie jar: full
           :meth:`reauthenticate`.
        3. Neither: *session* is returned unchanged.  The caller must treat
           this as "cannot refresh" and log in again out-of-band.
        """
        log = get_auth_logger(operation="refresh")
        with _reported():
            if session.expire_at and session.expire_at > self.clock():
                log.debug("Token is still valid, only refreshing entitlements token")
                entitlements_token = await self.entitlements.exchange(session.access_token)
                return replace(session, entitlements_token=entitlements_token)

            if session.cookies:
                log.info("Token is expired, re-authenticating with cookies")
                return await self.reauthenticate(build_cookie_string(session.cookies))

        log.warning("Session has neither a future expiry nor cookies; not refreshed")
        return session

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #
    def is_authenticated(self, session: Session) -> bool:
        """Return *True* if *session* can be used for API calls right now."""
        return is_session_valid(session, clock=self.clock)

    async def get_user_info(self, session: Session) -> UserInfo:
        """Fetch the account behind *session* from ``/userinfo``."""
        with _reported("Failed to get user info"):
            if not session.access_token:
                raise AuthError(AuthErrorKind.INVALID_INPUT, "Session has no access token")

            resp = await self.transport.send(
                "GET",
                self.settings.auth_endpoint(USERINFO_PATH),
                headers={"Authorization": f"Bearer {session.access_token}"},
            )
            data = _json_object(resp)

            acct = data.get("acct")
            if not isinstance(acct, dict):
                acct = {}
            game_name = acct.get("game_name")
            tag_name = f"{game_name}#{acct.get('tag_line') or ''}" if game_name else ""
            return UserInfo(
                country=data.get("country") or "",
                puuid=data.get("sub") or "",
                username=data.get("preferred_username"),
                tag_name=tag_name,
            )
