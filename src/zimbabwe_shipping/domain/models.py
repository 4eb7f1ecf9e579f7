"""Domain models for authenticated users and their sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Identity attached to an auth session."""

    id: UUID
    email: str | None


@dataclass(frozen=True)
class AuthSession:
    """Cached copy of a session issued by the auth service."""

    access_token: str
    refresh_token: str | None
    expires_at: datetime | None
    user: UserRecord


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a password sign-in, passed through as returned."""

    session: AuthSession | None
    user: UserRecord | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
