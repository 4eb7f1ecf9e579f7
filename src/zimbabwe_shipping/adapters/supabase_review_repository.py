"""Supabase repository for reviews."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.domain.reviews import ReviewRecord
from zimbabwe_shipping.services.reviews import ReviewRepository


@dataclass
class SupabaseReviewRepository(ReviewRepository):
    client: Client

    def list_reviews(self, limit: int) -> list[ReviewRecord]:
        """Return the newest reviews first."""
        response = (
            self.client.table("reviews")
            .select("id, user_id, shipment_id, rating, comment, created_at")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]

    def create_review(
        self, user_id: UUID, shipment_id: UUID | None, rating: int, comment: str
    ) -> ReviewRecord:
        response = (
            self.client.table("reviews")
            .insert(
                {
                    "user_id": str(user_id),
                    "shipment_id": str(shipment_id) if shipment_id else None,
                    "rating": rating,
                    "comment": comment,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create review")
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> ReviewRecord:
    created_at = row.get("created_at")
    shipment_id = row.get("shipment_id")
    return ReviewRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        shipment_id=UUID(str(shipment_id)) if shipment_id else None,
        rating=int(row["rating"]),
        comment=row.get("comment") or "",
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
