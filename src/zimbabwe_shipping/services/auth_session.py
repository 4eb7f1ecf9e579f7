"""Session provider mirroring the external auth service."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from zimbabwe_shipping.domain.models import AuthSession, SignInResult, UserRecord

logger = logging.getLogger(__name__)

AuthChangeCallback = Callable[[str, AuthSession | None], Awaitable[None]]
SessionListener = Callable[["SessionProvider"], None]


class Subscription(Protocol):
    """Handle returned by an auth change subscription."""

    def unsubscribe(self) -> None:
        """Stop receiving auth change notifications."""


class AuthGateway(Protocol):
    """Interface to the external authentication service."""

    async def get_session(self) -> AuthSession | None:
        """Return the current session, if any."""

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        """Forward credentials and return the service's result."""

    async def sign_out(self) -> None:
        """Invalidate the current session."""

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        """Register a callback for session changes."""

    async def is_admin(self, user_id: UUID) -> bool:
        """Run the remote admin role check for a user."""

    async def get_user(self, access_token: str) -> UserRecord | None:
        """Resolve the user that owns an access token."""


@dataclass
class SessionProvider:
    """Holds the cached session, user and advisory admin flag.

    The cache is written only by the subscription callback and by the
    explicit sign-in/sign-out calls. The most recent notification wins.
    """

    gateway: AuthGateway
    session: AuthSession | None = None
    user: UserRecord | None = None
    is_admin: bool = False
    is_loading: bool = True
    _subscription: Subscription | None = None
    _generation: int = 0
    _listeners: list[SessionListener] = field(default_factory=list)

    async def start(self) -> None:
        """Subscribe to auth changes and load the initial session once."""
        if self._subscription is not None:
            return
        self._subscription = self.gateway.on_auth_state_change(
            self.handle_auth_change
        )
        await self.load()

    async def load(self) -> None:
        """Fetch the current session in a single best-effort attempt.

        An auth change delivered while the fetch is in flight is newer than
        the fetched session, so the fetched value is dropped.
        """
        started_at = self._generation
        try:
            current = await self.gateway.get_session()
        except Exception:
            logger.exception("Initial session check failed")
            current = None
        try:
            if self._generation != started_at:
                logger.info("Initial session superseded by an auth change")
                return
            generation = self._apply_session(current)
            if current is not None:
                await self._refresh_admin(current.user, generation)
        finally:
            self.is_loading = False
            self._notify()

    async def handle_auth_change(
        self, event: str, session: AuthSession | None
    ) -> None:
        """Update the cache for an auth change and recompute the admin flag."""
        logger.info("Auth state changed", extra={"event": event})
        generation = self._apply_session(session)
        if session is None:
            self.is_admin = False
        self._notify()
        if session is not None:
            await self._refresh_admin(session.user, generation)
            self._notify()

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Forward credentials to the auth service; failures are returned as-is."""
        return await self.gateway.sign_in_with_password(email, password)

    async def sign_out(self) -> None:
        """Invalidate the session remotely and clear the admin flag."""
        try:
            await self.gateway.sign_out()
        except Exception:
            logger.exception("Sign out failed")
            raise
        finally:
            self.is_admin = False
            self._notify()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called after each state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Tear down the auth change subscription."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    def _apply_session(self, session: AuthSession | None) -> int:
        self._generation += 1
        self.session = session
        self.user = session.user if session else None
        return self._generation

    async def _refresh_admin(self, user: UserRecord, generation: int) -> None:
        try:
            result = await self.gateway.is_admin(user.id)
        except Exception:
            logger.exception("Admin check failed", extra={"user_id": str(user.id)})
            result = False
        # A newer session change owns the flag now.
        if generation != self._generation:
            return
        self.is_admin = bool(result)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
