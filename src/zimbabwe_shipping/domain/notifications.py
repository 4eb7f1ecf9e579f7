"""Announcement and notification models."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class Announcement:
    """Announcement published by staff."""

    id: UUID
    title: str
    content: str
    is_critical: bool = False
    target_roles: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Recipient:
    """Profile targeted by a notification."""

    user_id: UUID
    email: str | None
    role: str | None


@dataclass(frozen=True)
class NotificationDraft:
    """Notification row about to be inserted."""

    user_id: UUID
    title: str
    message: str
    type: str
    related_id: UUID

    def to_row(self) -> dict[str, object]:
        return {
            "user_id": str(self.user_id),
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "related_id": str(self.related_id),
            "is_read": False,
        }
