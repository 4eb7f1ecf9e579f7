"""Supabase repository for profile MFA fields."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.domain.profiles import MfaProfile
from zimbabwe_shipping.services.mfa import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for MFA profile state."""

    client: Client

    def get_mfa_profile(self, user_id: UUID) -> MfaProfile | None:
        """Return MFA settings for a profile, if present."""
        response = (
            self.client.table("profiles")
            .select("id, mfa_enabled, mfa_secret")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return MfaProfile(
            user_id=UUID(row["id"]),
            mfa_enabled=bool(row.get("mfa_enabled")),
            mfa_secret=row.get("mfa_secret"),
        )

    def enable_mfa(self, user_id: UUID, secret: str) -> None:
        """Turn MFA on for a profile and store its secret."""
        self.client.table("profiles").update(
            {
                "mfa_enabled": True,
                "mfa_secret": secret,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()
