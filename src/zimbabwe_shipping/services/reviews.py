"""Customer reviews."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from zimbabwe_shipping.domain.reviews import ReviewRecord
from zimbabwe_shipping.services.validation import ReviewForm, sanitize_input


class ReviewRepository(Protocol):
    """Persistence interface for reviews."""

    def list_reviews(self, limit: int) -> list[ReviewRecord]:
        """Return the newest reviews."""

    def create_review(
        self, user_id: UUID, shipment_id: UUID | None, rating: int, comment: str
    ) -> ReviewRecord:
        """Insert a review and return it."""


@dataclass
class ReviewService:
    repository: ReviewRepository

    def list_reviews(self, limit: int = 20) -> list[ReviewRecord]:
        return self.repository.list_reviews(limit)

    def submit_review(self, user_id: UUID, form: ReviewForm) -> ReviewRecord:
        """Store a validated review with its comment escaped."""
        return self.repository.create_review(
            user_id=user_id,
            shipment_id=form.shipment_id,
            rating=form.rating,
            comment=sanitize_input(form.comment),
        )
