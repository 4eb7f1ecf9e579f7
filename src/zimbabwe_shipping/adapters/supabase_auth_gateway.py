"""Supabase implementation of the auth gateway."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.domain.models import AuthSession, SignInResult, UserRecord
from zimbabwe_shipping.services.auth_session import (
    AuthChangeCallback,
    AuthGateway,
    Subscription,
)

if TYPE_CHECKING:
    from supabase_auth.types import AuthChangeEvent, Session, User

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Wraps Supabase auth and the ``is_admin`` RPC."""

    client: Client
    _pending: set[Future] = field(default_factory=set)

    async def get_session(self) -> AuthSession | None:
        return _to_session(self.client.auth.get_session())

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            logger.warning("Sign in rejected", extra={"error": str(exc)})
            return SignInResult(session=None, user=None, error=str(exc))
        return SignInResult(
            session=_to_session(response.session),
            user=_to_user(response.user),
        )

    async def sign_out(self) -> None:
        self.client.auth.sign_out()

    def on_auth_state_change(self, callback: AuthChangeCallback) -> Subscription:
        """Bridge Supabase's synchronous listener onto the running event loop."""
        loop = asyncio.get_running_loop()

        def listener(event: AuthChangeEvent, session: Session | None) -> None:
            future = asyncio.run_coroutine_threadsafe(
                callback(str(event), _to_session(session)), loop
            )
            self._pending.add(future)
            future.add_done_callback(self._pending.discard)

        return self.client.auth.on_auth_state_change(listener)

    async def is_admin(self, user_id: UUID) -> bool:
        response = self.client.rpc("is_admin", {"user_id": str(user_id)}).execute()
        return bool(response.data)

    async def get_user(self, access_token: str) -> UserRecord | None:
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as exc:
            logger.warning("Access token rejected", extra={"error": str(exc)})
            return None
        if response is None:
            return None
        return _to_user(response.user)


def _to_user(user: User | None) -> UserRecord | None:
    if user is None:
        return None
    return UserRecord(id=UUID(str(user.id)), email=getattr(user, "email", None))


def _to_session(session: Session | None) -> AuthSession | None:
    if session is None:
        return None
    user = _to_user(session.user)
    if user is None:
        return None
    expires_at = (
        datetime.fromtimestamp(session.expires_at, tz=UTC)
        if session.expires_at
        else None
    )
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=expires_at,
        user=user,
    )
