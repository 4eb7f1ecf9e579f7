"""Supabase repository for audit log entries."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client

    def create_entry(
        self,
        user_id: UUID,
        action: str,
        entity_type: str,
        entity_id: UUID,
        details: dict[str, object] | None,
    ) -> None:
        """Create an audit_logs row."""
        self.client.table("audit_logs").insert(
            {
                "user_id": str(user_id),
                "action": action,
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "details": details,
            }
        ).execute()
