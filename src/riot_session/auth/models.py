"""Typed, immutable records used by the session lifecycle engine."""

from __future__ import annotations

from dataclasses import dataclass

from riot_session.auth.clock import Clock, default_clock


@dataclass(frozen=True, slots=True)
class CookiePair:
    """One ``name=value`` entry of a ``Cookie`` header."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Credentials for the username/password login."""

    username: str
    password: str
    remember: bool = True
    region: str | None = None

    def __repr__(self) -> str:  # keep the password out of tracebacks
        return (
            f"AuthConfig(username={self.username!r}, "
            f"remember={self.remember!r}, region={self.region!r})"
        )


@dataclass(frozen=True, slots=True)
class RedirectTokens:
    """Tokens recovered from an implicit-grant redirect fragment."""

    access_token: str | None = None
    id_token: str | None = None
    expire_at: float | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.access_token or self.id_token or self.expire_at)


@dataclass(frozen=True, slots=True)
class Session:
    """Snapshot of the tokens needed to call the game APIs.

    ``expire_at`` is the absolute UNIX timestamp at which ``access_token`` and
    ``id_token`` stop being accepted, or ``None`` when unknown.  ``cookies`` is
    the jar that can mint a fresh session without credentials, or ``None`` when
    the session was not derived from cookies.
    """

    access_token: str
    id_token: str
    entitlements_token: str
    expire_at: float | None = None
    cookies: tuple[CookiePair, ...] | None = None

    def is_valid(self, *, clock: Clock = default_clock) -> bool:
        """Return *True* if the session can be used right now."""
        return is_session_valid(self, clock=clock)

    def __repr__(self) -> str:
        return (
            f"Session(expire_at={self.expire_at!r}, "
            f"cookies={len(self.cookies) if self.cookies is not None else None})"
        )


@dataclass(frozen=True, slots=True)
class UserInfo:
    """Account details returned by the ``/userinfo`` endpoint."""

    country: str
    puuid: str
    username: str | None
    tag_name: str


def is_session_valid(session: Session, *, clock: Clock = default_clock) -> bool:
    """Return *True* iff every token is present and ``expire_at`` lies in the future."""
    return bool(
        session.access_token
        and session.entitlements_token
        and session.expire_at
        and session.expire_at > clock()
    )
