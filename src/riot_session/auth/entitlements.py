"""Entitlement token exchange.

Game API calls need an *entitlements* token next to the access token.  It is
obtained through a client-credentials request to the entitlements service in
which the access token is presented as the bearer credential of the call
itself, not as the grant.

No retry happens here; transport failures propagate to the caller unchanged.
"""

from __future__ import annotations

import logging

from riot_session.auth.errors import AuthError, AuthErrorKind
from riot_session.constants import ENTITLEMENTS_PATH
from riot_session.utils.environment import RiotAuthSettings
from riot_session.utils.http import Transport

_LOG = logging.getLogger("riot-session.auth.entitlements")


class EntitlementExchanger:
    """Swap a valid access token for a short-lived entitlements token."""

    def __init__(self, transport: Transport, settings: RiotAuthSettings) -> None:
        self.transport = transport
        self.settings = settings

    async def exchange(self, access_token: str) -> str:
        """Return a fresh entitlements token for *access_token*.

        Raises
        ------
        AuthError
            ``INVALID_INPUT`` for an empty access token, ``TOKEN_EXTRACTION``
            when the response lacks ``entitlements_token``.
        TransportError
            On non-2xx responses, network failures or a malformed body.
        """
        if not access_token:
            raise AuthError(
                AuthErrorKind.INVALID_INPUT,
                "Cannot fetch entitlements without an access token",
            )

        resp = await self.transport.send(
            "POST",
            self.settings.entitlements_endpoint(ENTITLEMENTS_PATH),
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
            },
            json={
                "client_id": self.settings.client_id,
                "client_secret": self.settings.entitlements_client_secret,
                "grant_type": "client_credentials",
            },
        )
        data = resp.json()
        token = data.get("entitlements_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthError(
                AuthErrorKind.TOKEN_EXTRACTION,
                "Entitlements response missing entitlements_token",
                status_code=resp.status_code,
            )

        _LOG.debug("Fetched entitlements token (HTTP %s)", resp.status_code)
        return token
