"""Unit tests for RiotAuthService.reauthenticate (cookie-driven implicit grant).

Coverage:
* End-to-end: 302/303 redirect + entitlements -> complete Session
* Outbound wire contract (query, Cookie header, redirects not followed)
* Field-specific extraction failures and transport failures as AuthError
"""

from __future__ import annotations

import httpx
import pytest

from riot_session.auth.errors import AuthError, AuthErrorKind
from riot_session.auth.models import CookiePair, Session
from riot_session.auth.service import RiotAuthService

from riot_fakes import NOW, FakeRiot


@pytest.mark.anyio
async def test_reauthenticate_builds_complete_session(
    service: RiotAuthService, riot: FakeRiot
) -> None:
    riot.on(
        "GET",
        "/authorize",
        302,
        headers={"Location": "https://x/cb#access_token=AT1&id_token=ID1&expires_in=3600"},
    )
    riot.entitlements_returns("ET1")

    session = await service.reauthenticate("ssid=abc")

    assert session == Session(
        access_token="AT1",
        id_token="ID1",
        entitlements_token="ET1",
        expire_at=NOW + 3600,
        cookies=(CookiePair("ssid", "abc"),),
    )
    assert service.is_authenticated(session)


@pytest.mark.anyio
async def test_authorize_request_wire_contract(service: RiotAuthService, riot: FakeRiot) -> None:
    riot.authorize_redirects_to()
    riot.entitlements_returns()

    await service.reauthenticate("ssid=abc; tdid=t1")

    (authorize,) = riot.calls("GET", "/authorize")
    assert authorize.url.host == "auth.riotgames.com"
    assert authorize.headers["Cookie"] == "ssid=abc; tdid=t1"
    assert dict(authorize.url.params) == {
        "client_id": "play-valorant-web-prod",
        "nonce": "1",
        "redirect_uri": "https://playvalorant.com/opt_in",
        "response_type": "token id_token",
        "scope": "account openid",
    }
    # redirect was not followed to playvalorant.com
    assert [r.url.host for r in riot.requests] == [
        "auth.riotgames.com",
        "entitlements.auth.riotgames.com",
    ]
    # entitlements are fetched after, and with, the extracted token
    assert riot.requests[1].headers["Authorization"] == "Bearer AT1"


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("location", "message"),
    [
        ("https://x/cb#id_token=I&expires_in=60", "Failed to extract access token from cookies"),
        ("https://x/cb#access_token=A&expires_in=60", "Failed to extract id token from cookies"),
        ("https://x/cb#access_token=A&id_token=I", "Failed to extract expire at from cookies"),
        ("https://auth.riotgames.com/login", "Failed to extract access token from cookies"),
        (
            "https://x/cb#access_token=A&id_token=I&expires_in=" + "9" * 400,
            "Failed to extract access token from cookies",
        ),
    ],
)
async def test_missing_fields_fail_with_specific_message(
    service: RiotAuthService, riot: FakeRiot, location: str, message: str
) -> None:
    riot.authorize_redirects_to(location)
    riot.entitlements_returns()

    with pytest.raises(AuthError) as excinfo:
        await service.reauthenticate("ssid=expired")

    assert excinfo.value.kind is AuthErrorKind.TOKEN_EXTRACTION
    assert str(excinfo.value) == message
    assert riot.calls("POST", "/api/token/v1") == []


@pytest.mark.anyio
async def test_response_without_location(service: RiotAuthService, riot: FakeRiot) -> None:
    riot.on("GET", "/authorize", 200, content=b"<html>login</html>")

    with pytest.raises(AuthError) as excinfo:
        await service.reauthenticate("ssid=abc")

    assert excinfo.value.kind is AuthErrorKind.TOKEN_EXTRACTION


@pytest.mark.anyio
async def test_empty_cookie_string_is_invalid_input(
    service: RiotAuthService, riot: FakeRiot
) -> None:
    with pytest.raises(AuthError) as excinfo:
        await service.reauthenticate("")

    assert excinfo.value.kind is AuthErrorKind.INVALID_INPUT
    assert riot.requests == []


@pytest.mark.anyio
async def test_http_failure_becomes_transport_error(
    service: RiotAuthService, riot: FakeRiot
) -> None:
    riot.on("GET", "/authorize", 403, json={"error": "forbidden"})

    with pytest.raises(AuthError) as excinfo:
        await service.reauthenticate("ssid=abc")

    err = excinfo.value
    assert err.kind is AuthErrorKind.TRANSPORT
    assert err.status_code == 403
    assert "403" in str(err)
    assert err.to_payload()["error"] == "transport"


@pytest.mark.anyio
async def test_network_failure_keeps_underlying_message(
    service: RiotAuthService, riot: FakeRiot
) -> None:
    riot.fail("GET", "/authorize", httpx.ConnectTimeout("timed out"))

    with pytest.raises(AuthError) as excinfo:
        await service.reauthenticate("ssid=abc")

    assert excinfo.value.kind is AuthErrorKind.TRANSPORT
    assert excinfo.value.status_code is None
    assert "timed out" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, Exception)


@pytest.mark.anyio
async def test_entitlement_failure_fails_whole_call(
    service: RiotAuthService, riot: FakeRiot
) -> None:
    riot.authorize_redirects_to()
    riot.on("POST", "/api/token/v1", 500, content=b"oops")

    with pytest.raises(AuthError) as excinfo:
        await service.reauthenticate("ssid=abc")

    assert excinfo.value.kind is AuthErrorKind.TRANSPORT
    assert excinfo.value.status_code == 500
