"""Unit tests for the entitlements token exchange."""

from __future__ import annotations

import json

import httpx
import pytest

from riot_session.auth.entitlements import EntitlementExchanger
from riot_session.auth.errors import AuthError, AuthErrorKind
from riot_session.utils.environment import RiotAuthSettings
from riot_session.utils.http import HttpTransport, TransportError

from riot_fakes import FakeRiot


@pytest.fixture()
async def exchanger(riot: FakeRiot, settings: RiotAuthSettings):
    client = httpx.AsyncClient(transport=httpx.MockTransport(riot))
    async with HttpTransport(settings, client=client) as transport:
        yield EntitlementExchanger(transport, settings)


@pytest.mark.anyio
async def test_exchange_presents_access_token_as_bearer(
    exchanger: EntitlementExchanger, riot: FakeRiot
) -> None:
    riot.entitlements_returns("ET-42")

    token = await exchanger.exchange("AT1")

    assert token == "ET-42"
    (request,) = riot.calls("POST", "/api/token/v1")
    assert request.url.host == "entitlements.auth.riotgames.com"
    assert request.headers["Authorization"] == "Bearer AT1"
    assert json.loads(request.content) == {
        "client_id": "play-valorant-web-prod",
        "client_secret": "RiotClientSecret",
        "grant_type": "client_credentials",
    }


@pytest.mark.anyio
async def test_http_error_propagates_without_retry(
    exchanger: EntitlementExchanger, riot: FakeRiot
) -> None:
    riot.on("POST", "/api/token/v1", 401, json={"error": "invalid_token"})

    with pytest.raises(TransportError) as excinfo:
        await exchanger.exchange("AT1")

    assert excinfo.value.status_code == 401
    assert len(riot.calls("POST", "/api/token/v1")) == 1


@pytest.mark.anyio
async def test_network_failure_propagates(exchanger: EntitlementExchanger, riot: FakeRiot) -> None:
    riot.fail("POST", "/api/token/v1", httpx.ConnectError("connection refused"))

    with pytest.raises(TransportError) as excinfo:
        await exchanger.exchange("AT1")

    assert excinfo.value.is_network_error


@pytest.mark.anyio
async def test_malformed_body_is_an_error(exchanger: EntitlementExchanger, riot: FakeRiot) -> None:
    riot.on("POST", "/api/token/v1", content=b"<html>maintenance</html>")

    with pytest.raises(TransportError):
        await exchanger.exchange("AT1")


@pytest.mark.anyio
async def test_missing_token_field(exchanger: EntitlementExchanger, riot: FakeRiot) -> None:
    riot.on("POST", "/api/token/v1", json={"token_type": "Bearer"})

    with pytest.raises(AuthError) as excinfo:
        await exchanger.exchange("AT1")

    assert excinfo.value.kind is AuthErrorKind.TOKEN_EXTRACTION


@pytest.mark.anyio
async def test_non_string_token_field(exchanger: EntitlementExchanger, riot: FakeRiot) -> None:
    riot.on("POST", "/api/token/v1", json={"entitlements_token": 123})

    with pytest.raises(AuthError) as excinfo:
        await exchanger.exchange("AT1")

    assert excinfo.value.kind is AuthErrorKind.TOKEN_EXTRACTION
    assert excinfo.value.status_code == 200


@pytest.mark.anyio
async def test_empty_access_token_is_rejected_locally(
    exchanger: EntitlementExchanger, riot: FakeRiot
) -> None:
    with pytest.raises(AuthError) as excinfo:
        await exchanger.exchange("")

    assert excinfo.value.kind is AuthErrorKind.INVALID_INPUT
    assert riot.requests == []
