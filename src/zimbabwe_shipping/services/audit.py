"""Audit logging service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


class AuditRepository(Protocol):
    """Persistence interface for audit log entries."""

    def create_entry(
        self,
        user_id: UUID,
        action: str,
        entity_type: str,
        entity_id: UUID,
        details: dict[str, object] | None,
    ) -> None:
        """Create an audit log row."""


@dataclass
class AuditService:
    """Service for recording security-relevant events."""

    repository: AuditRepository

    def record(
        self,
        user_id: UUID,
        action: str,
        details: dict[str, object] | None = None,
        entity_type: str = "USER",
        entity_id: UUID | None = None,
    ) -> None:
        """Persist an audit entry; the entity defaults to the acting user."""
        self.repository.create_entry(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id or user_id,
            details=details,
        )
