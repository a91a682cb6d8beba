"""Shared fixtures for session engine tests."""

from __future__ import annotations

import httpx
import pytest
from riot_fakes import NOW, FakeRiot

from riot_session.auth.clock import fixed_clock
from riot_session.auth.service import RiotAuthService
from riot_session.utils.environment import RiotAuthSettings
from riot_session.utils.http import HttpTransport


@pytest.fixture()
def riot() -> FakeRiot:
    return FakeRiot()


@pytest.fixture()
def settings() -> RiotAuthSettings:
    return RiotAuthSettings()


@pytest.fixture()
async def service(riot: FakeRiot, settings: RiotAuthSettings):
    """RiotAuthService wired to *riot* with the clock frozen at ``NOW``."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(riot))
    async with HttpTransport(settings, client=client) as transport:
        yield RiotAuthService(transport, settings=settings, clock=fixed_clock(NOW))
