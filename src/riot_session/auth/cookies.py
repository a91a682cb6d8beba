"""Conversion between cookie jars and ``Cookie`` header strings.

The wire format is the one browsers send::

    name=value; name=value

Values frequently carry base64 padding, so only the first ``=`` of a segment
separates the name from its value.  Names are not deduplicated and order is
kept as given.
"""

from __future__ import annotations

from typing import Iterable

from riot_session.auth.models import CookiePair

_SEPARATOR = "; "


def build_cookie_string(cookies: Iterable[CookiePair]) -> str:
    """Return the ``Cookie`` header value for *cookies* (``""`` when empty)."""
    return _SEPARATOR.join(f"{cookie.name}={cookie.value}" for cookie in cookies)


def _parse_cookie(segment: str) -> CookiePair | None:
    name, _, value = segment.partition("=")
    if not name:
        return None
    return CookiePair(name=name, value=value)


def parse_cookies(raw: str) -> list[CookiePair]:
    """Split a ``Cookie`` header value into ordered :class:`CookiePair` items.

    Segments without a name (``"=orphan"`` or an empty string) are dropped.
    """
    pairs = (_parse_cookie(segment) for segment in raw.split(_SEPARATOR))
    return [pair for pair in pairs if pair is not None]


def cookies_from_set_cookie(header_values: Iterable[str]) -> list[CookiePair]:
    """Collect ``name=value`` pairs from raw ``Set-Cookie`` header values.

    Attributes such as ``Path`` or ``Expires`` follow the first ``;`` and are
    ignored.
    """
    jar: list[CookiePair] = []
    for header in header_values:
        pair = _parse_cookie(header.split(";", 1)[0].strip())
        if pair is not None:
            jar.append(pair)
    return jar
