"""Token extraction from implicit-grant redirect URLs.

The identity provider answers the cookie-authenticated ``/authorize`` call
with a redirect whose *fragment* carries the tokens::

    https://playvalorant.com/opt_in#access_token=...&scope=openid
        &iss=...&id_token=...&token_type=Bearer&session_state=...
        &expires_in=3600

Only ``access_token``, ``id_token`` and ``expires_in`` are consumed.  The
fragment is a URL-encoded query string; field order does not matter and
values are percent-decoded.

Parsing never raises.  A missing fragment or a malformed value yields an
empty (or partially empty) :class:`~riot_session.auth.models.RedirectTokens`
and callers decide which missing field is fatal.  The redirect URL itself is
never logged because it embeds live credentials.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from riot_session.auth.clock import Clock, default_clock
from riot_session.auth.models import RedirectTokens

_LOG = logging.getLogger("riot-session.auth.token_parser")


def _first(params: dict[str, list[str]], key: str) -> str | None:
    values = params.get(key)
    return values[0] if values and values[0] else None


def parse_redirect_tokens(
    redirect_url: str | None, *, clock: Clock = default_clock
) -> RedirectTokens:
    """Return the tokens embedded in *redirect_url*'s fragment.

    Parameters
    ----------
    redirect_url:
        Value of the ``Location`` header returned by ``/authorize``.
    clock:
        Time source used to turn ``expires_in`` into an absolute timestamp.

    Returns
    -------
    RedirectTokens
        ``expire_at`` is ``clock() + expires_in`` measured at parse time, so
        it is slightly conservative relative to the provider's own clock.
    """
    if not redirect_url:
        return RedirectTokens()
    try:
        _, sep, fragment = redirect_url.partition("#")
        if not sep or not fragment:
            return RedirectTokens()

        params = parse_qs(fragment)
        expires_in = _first(params, "expires_in")
        expire_at = clock() + int(expires_in) if expires_in is not None else None

        return RedirectTokens(
            access_token=_first(params, "access_token"),
            id_token=_first(params, "id_token"),
            expire_at=expire_at,
        )
    except (ValueError, TypeError, ArithmeticError) as exc:
        _LOG.debug("Discarding unparseable redirect fragment: %s", type(exc).__name__)
        return RedirectTokens()
