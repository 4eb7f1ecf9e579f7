"""Supabase repository for collection schedules."""

from dataclasses import dataclass

from supabase import Client

from zimbabwe_shipping.services.collection_routes import (
    CollectionSchedule,
    CollectionScheduleRepository,
)


@dataclass
class SupabaseCollectionScheduleRepository(CollectionScheduleRepository):
    client: Client

    def list_schedules(self) -> list[CollectionSchedule]:
        response = (
            self.client.table("collection_schedules")
            .select("*")
            .order("updated_at", desc=True)
            .execute()
        )
        return [
            CollectionSchedule(
                id=str(row["id"]),
                route=row["route"],
                pickup_date=row["pickup_date"],
                areas=tuple(row.get("areas") or ()),
                updated_at=row.get("updated_at"),
            )
            for row in response.data or []
        ]
