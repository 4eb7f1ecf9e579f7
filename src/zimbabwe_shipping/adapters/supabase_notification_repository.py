"""Supabase repository for announcements, tickets and notifications."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.domain.notifications import (
    Announcement,
    NotificationDraft,
    Recipient,
)
from zimbabwe_shipping.services.notifications import NotificationRepository


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase implementation for notification fan-out."""

    client: Client

    def get_announcement(self, announcement_id: UUID) -> Announcement | None:
        response = (
            self.client.table("announcements")
            .select("id, title, content, is_critical, target_roles")
            .eq("id", str(announcement_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Announcement(
            id=UUID(row["id"]),
            title=row["title"],
            content=row["content"],
            is_critical=bool(row.get("is_critical")),
            target_roles=list(row.get("target_roles") or []),
        )

    def list_recipients(self, roles: list[str] | None) -> list[Recipient]:
        """Return profiles, filtered by role when roles are given."""
        query = self.client.table("profiles").select("id, email, role")
        if roles:
            query = query.in_("role", roles)
        response = query.execute()
        return [
            Recipient(
                user_id=UUID(row["id"]),
                email=row.get("email"),
                role=row.get("role"),
            )
            for row in response.data or []
        ]

    def insert_notifications(self, drafts: list[NotificationDraft]) -> None:
        self.client.table("notifications").insert(
            [draft.to_row() for draft in drafts]
        ).execute()

    def get_ticket_subject(self, ticket_id: UUID) -> str | None:
        response = (
            self.client.table("support_tickets")
            .select("subject")
            .eq("id", str(ticket_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]["subject"]

    def create_notification(self, draft: NotificationDraft) -> dict[str, object]:
        """Insert one notification and return the stored row."""
        response = self.client.table("notifications").insert(draft.to_row()).execute()
        if not response.data:
            raise RuntimeError("Failed to create notification")
        return response.data[0]

    def mark_ticket_responses_notified(self, ticket_id: UUID) -> None:
        """Flag the newest response on a ticket as notified."""
        latest = (
            self.client.table("ticket_responses")
            .select("id")
            .eq("ticket_id", str(ticket_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not latest.data:
            return
        self.client.table("ticket_responses").update({"notification_sent": True}).eq(
            "id", latest.data[0]["id"]
        ).execute()
