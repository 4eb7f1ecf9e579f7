"""Supabase client created on first use."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from supabase import Client, create_client

from zimbabwe_shipping.config import require_setting

if TYPE_CHECKING:
    from postgrest import SyncRequestBuilder, SyncRPCFilterRequestBuilder
    from supabase_auth import SyncGoTrueClient


@dataclass
class LazySupabaseClient:
    """Defers client creation so missing credentials fail the calling handler.

    Exposes the subset of :class:`supabase.Client` the repositories use.
    """

    url: str | None
    key: str | None
    key_env_name: str = "SUPABASE_SERVICE_KEY"
    _client: Client | None = field(default=None, repr=False)

    def get(self) -> Client:
        if self._client is None:
            self._client = create_client(
                require_setting(self.url, "SUPABASE_URL"),
                require_setting(self.key, self.key_env_name),
            )
        return self._client

    def table(self, name: str) -> SyncRequestBuilder:
        return self.get().table(name)

    def rpc(
        self, fn: str, params: dict[str, object] | None = None
    ) -> SyncRPCFilterRequestBuilder:
        return self.get().rpc(fn, params or {})

    @property
    def auth(self) -> SyncGoTrueClient:
        return self.get().auth
