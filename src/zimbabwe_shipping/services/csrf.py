"""Single-use CSRF tokens kept in client storage."""

import hmac
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from zimbabwe_shipping.services.storage import KeyValueStorage

CSRF_TOKEN_KEY = "csrf_token"
CSRF_EXPIRY_KEY = "csrf_token_expiry"
CSRF_TOKEN_TTL = timedelta(minutes=15)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CsrfTokenService:
    """Issues a token that validates exactly once before expiring."""

    storage: KeyValueStorage
    ttl: timedelta = CSRF_TOKEN_TTL
    clock: Callable[[], datetime] = field(default=_utcnow)

    def generate(self) -> str:
        """Create, store and return a fresh token."""
        token = secrets.token_urlsafe(32)
        expires_at = self.clock() + self.ttl
        self.storage.set_item(CSRF_TOKEN_KEY, token)
        self.storage.set_item(CSRF_EXPIRY_KEY, expires_at.isoformat())
        return token

    def validate(self, token: str) -> bool:
        """Return True once for the stored token, then clear it."""
        stored = self.storage.get_item(CSRF_TOKEN_KEY)
        raw_expiry = self.storage.get_item(CSRF_EXPIRY_KEY)
        if not stored or not raw_expiry:
            return False
        try:
            expires_at = datetime.fromisoformat(raw_expiry)
        except ValueError:
            self.clear()
            return False
        if self.clock() > expires_at:
            self.clear()
            return False
        if not hmac.compare_digest(stored.encode(), token.encode()):
            return False
        self.clear()
        return True

    def clear(self) -> None:
        self.storage.remove_item(CSRF_TOKEN_KEY)
        self.storage.remove_item(CSRF_EXPIRY_KEY)
