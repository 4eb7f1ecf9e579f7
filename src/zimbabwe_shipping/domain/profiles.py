"""Profile fields relevant to multi-factor authentication."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class MfaProfile:
    """MFA state stored against a user profile."""

    user_id: UUID
    mfa_enabled: bool
    mfa_secret: str | None
