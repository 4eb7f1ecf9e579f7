"""Customer review models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ReviewRecord:
    """A published customer review."""

    id: UUID
    user_id: UUID
    shipment_id: UUID | None
    rating: int
    comment: str
    created_at: datetime | None
