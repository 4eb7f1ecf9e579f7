"""Supabase repository for shipments."""

from dataclasses import dataclass

from supabase import Client

from zimbabwe_shipping.services.shipments import ShipmentRepository


@dataclass
class SupabaseShipmentRepository(ShipmentRepository):
    client: Client

    def insert_shipment(self, row: dict[str, object]) -> dict[str, object]:
        """Insert a shipment row and return it as stored."""
        response = self.client.table("shipments").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create shipment")
        return response.data[0]
