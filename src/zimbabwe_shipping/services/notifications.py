"""Notification fan-out for announcements and support tickets."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from zimbabwe_shipping.domain.notifications import (
    Announcement,
    NotificationDraft,
    Recipient,
)

logger = logging.getLogger(__name__)


class NotificationRepository(Protocol):
    """Persistence interface for notifications and their sources."""

    def get_announcement(self, announcement_id: UUID) -> Announcement | None:
        """Return an announcement by id."""

    def list_recipients(self, roles: list[str] | None) -> list[Recipient]:
        """Return profiles, restricted to the given roles when provided."""

    def insert_notifications(self, drafts: list[NotificationDraft]) -> None:
        """Insert notification rows."""

    def get_ticket_subject(self, ticket_id: UUID) -> str | None:
        """Return a support ticket's subject, if the ticket exists."""

    def create_notification(self, draft: NotificationDraft) -> dict[str, object]:
        """Insert a single notification row and return it."""

    def mark_ticket_responses_notified(self, ticket_id: UUID) -> None:
        """Flag a ticket's responses as notified."""


class NotFoundError(LookupError):
    """Raised when the record a notification refers to does not exist."""


@dataclass(frozen=True)
class FanOutResult:
    count: int

    @property
    def message(self) -> str:
        if self.count == 0:
            return "No users match the targeting criteria"
        return f"Sent notifications to {self.count} users"


@dataclass
class NotificationService:
    """Creates notification rows; emails are sent separately."""

    repository: NotificationRepository

    def notify_announcement(self, announcement_id: UUID) -> FanOutResult:
        """Notify every targeted profile about an announcement."""
        announcement = self.repository.get_announcement(announcement_id)
        if announcement is None:
            raise NotFoundError("Announcement not found")
        recipients = self.repository.list_recipients(
            announcement.target_roles or None
        )
        message = announcement.content
        if announcement.is_critical:
            message = f"CRITICAL: {message}"
        drafts = [
            NotificationDraft(
                user_id=recipient.user_id,
                title=f"New Announcement: {announcement.title}",
                message=message,
                type="announcement",
                related_id=announcement.id,
            )
            for recipient in recipients
        ]
        if drafts:
            self.repository.insert_notifications(drafts)
        logger.info(
            "Announcement notifications created",
            extra={"announcement_id": str(announcement_id), "count": len(drafts)},
        )
        return FanOutResult(count=len(drafts))

    def notify_ticket_response(
        self, ticket_id: UUID, user_id: UUID, message_preview: str
    ) -> dict[str, object]:
        """Tell a customer that their support ticket has a new response."""
        subject = self.repository.get_ticket_subject(ticket_id)
        if subject is None:
            raise NotFoundError("Support ticket not found")
        notification = self.repository.create_notification(
            NotificationDraft(
                user_id=user_id,
                title="Support Ticket Update",
                message=f'New response on ticket: "{subject}" - {message_preview}',
                type="support",
                related_id=ticket_id,
            )
        )
        self.repository.mark_ticket_responses_notified(ticket_id)
        return notification
