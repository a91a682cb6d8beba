"""HTTP transport used by the session engine.

The engine only depends on the :class:`Transport` protocol, so tests (and
callers with their own connection pooling) can plug in anything that honours
the contract:

* status codes outside ``200-399`` raise :class:`TransportError` carrying the
  ``status_code``;
* network-level failures raise :class:`TransportError` with
  ``status_code=None``;
* ``follow_redirects=False`` returns the redirect response itself so the
  caller can read its ``Location`` header.

:class:`HttpTransport` is the default implementation on top of ``httpx``.
Timeouts and connection retries are configured here and nowhere else.
"""

from __future__ import annotations

import json as _json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable
from urllib.parse import urlsplit

import httpx

from riot_session.constants import DEFAULT_HEADERS
from riot_session.utils.environment import RiotAuthSettings

_LOG = logging.getLogger("riot-session.utils.http")


class TransportError(RuntimeError):
    """Raised for non-2xx/3xx responses and network failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code: int | None = status_code

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status, headers and raw body of a completed request."""

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes = b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON, raising :class:`TransportError` if malformed."""
        try:
            return _json.loads(self.content)
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON response (HTTP {self.status_code})",
                status_code=self.status_code,
            ) from exc


@runtime_checkable
class Transport(Protocol):
    """Minimal request contract consumed by the session engine."""

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        follow_redirects: bool = True,
    ) -> TransportResponse: ...


def _describe(method: str, url: str) -> str:
    # never echo query strings, they may carry tokens
    parts = urlsplit(url)
    return f"{method} {parts.netloc}{parts.path}"


class HttpTransport(Transport):
    """``httpx`` implementation of :class:`Transport`.

    Without an injected ``client`` every request opens and closes its own
    :class:`httpx.AsyncClient`, which keeps the transport free of shared
    state.  Pass a long-lived client to reuse connections; it is closed by
    :meth:`aclose` (or ``async with``).
    """

    def __init__(
        self,
        settings: RiotAuthSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or RiotAuthSettings()
        self._client = client

    # ------------------------------------------------------------------ #
    # Lifecycle                                                          #
    # ------------------------------------------------------------------ #
    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.timeout,
            transport=httpx.AsyncHTTPTransport(retries=self.settings.retries),
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpTransport":
        if self._client is None:
            self._client = self._new_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Requests                                                           #
    # ------------------------------------------------------------------ #
    def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        merged = dict(DEFAULT_HEADERS)
        merged["User-Agent"] = self.settings.user_agent
        if extra:
            merged.update(extra)
        return merged

    async def _dispatch(
        self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        return await client.request(method, url, timeout=self.settings.timeout, **kwargs)

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        follow_redirects: bool = True,
    ) -> TransportResponse:
        target = _describe(method, url)
        kwargs: dict[str, Any] = {
            "headers": self._headers(headers),
            "params": params,
            "follow_redirects": follow_redirects,
        }
        if json is not None:
            kwargs["json"] = json

        try:
            if self._client is not None:
                resp = await self._dispatch(self._client, method, url, **kwargs)
            else:
                async with self._new_client() as client:
                    resp = await self._dispatch(client, method, url, **kwargs)
        except httpx.HTTPError as exc:
            _LOG.warning("%s failed: %s", target, type(exc).__name__)
            raise TransportError(
                f"Request {target} failed: {str(exc) or type(exc).__name__}"
            ) from exc

        _LOG.debug("%s -> %s", target, resp.status_code)
        if not 200 <= resp.status_code < 400:
            raise TransportError(
                f"{target} returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        return TransportResponse(
            status_code=resp.status_code, headers=resp.headers, content=resp.content
        )
