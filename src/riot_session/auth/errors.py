"""Exception types raised by the session lifecycle engine.

Only lightweight, **data-carrying** exceptions live here so that callers can
branch on :class:`AuthErrorKind` instead of parsing message text, and can turn
errors into user-facing messages without leaking secrets.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from riot_session.auth.models import CookiePair
from riot_session.constants import MSG_MULTIFACTOR_REQUIRED, MSG_UNKNOWN_ERROR


class AuthErrorKind(str, Enum):
    """Failure taxonomy shared by every public entry point."""

    MULTIFACTOR_REQUIRED = "multifactor_required"
    TOKEN_EXTRACTION = "token_extraction"
    TRANSPORT = "transport"
    INVALID_INPUT = "invalid_input"
    PROVIDER_REJECTED = "provider_rejected"
    UNKNOWN = "unknown"


class AuthError(RuntimeError):
    """Raised when a session cannot be built or refreshed."""

    def __init__(
        self,
        kind: AuthErrorKind,
        message: str | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message or MSG_UNKNOWN_ERROR)
        self.kind: AuthErrorKind = kind
        self.status_code: int | None = status_code

    @property
    def message(self) -> str:
        return str(self)

    def with_prefix(self, prefix: str) -> "AuthError":
        """Return a copy of this error whose message starts with *prefix*."""
        return AuthError(self.kind, f"{prefix}: {self}", status_code=self.status_code)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serialisable payload **without secrets**."""
        payload: dict[str, Any] = {"error": self.kind.value, "message": str(self)}
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload


class MultifactorRequiredError(AuthError):
    """Credential login stopped at a multifactor challenge.

    ``cookies`` holds the jar set by the login response; pass it, together
    with the code the user received, to ``RiotAuthService.handle_multifactor``.
    """

    def __init__(
        self,
        *,
        method: str | None = None,
        email: str | None = None,
        code_length: int | None = None,
        cookies: Sequence[CookiePair] = (),
        message: str | None = None,
    ) -> None:
        super().__init__(
            AuthErrorKind.MULTIFACTOR_REQUIRED, message or MSG_MULTIFACTOR_REQUIRED
        )
        self.method = method
        self.email = email
        self.code_length = code_length
        self.cookies: tuple[CookiePair, ...] = tuple(cookies)

    def with_prefix(self, prefix: str) -> "MultifactorRequiredError":
        return MultifactorRequiredError(
            method=self.method,
            email=self.email,
            code_length=self.code_length,
            cookies=self.cookies,
            message=f"{prefix}: {self}",
        )

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        # the e-mail is already masked by the provider (e.g. "j***@e***.com")
        payload.update(
            {"method": self.method, "email": self.email, "code_length": self.code_length}
        )
        return payload
