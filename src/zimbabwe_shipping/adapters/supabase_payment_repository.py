"""Supabase repository for payments and receipts."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.services.payment_verification import PaymentRecordRepository


@dataclass
class SupabasePaymentRecordRepository(PaymentRecordRepository):
    """Writes confirmed payments, their receipts and the shipment status."""

    client: Client

    def get_receipt_id(self, payment_id: UUID) -> str | None:
        response = (
            self.client.table("receipts")
            .select("id")
            .eq("payment_id", str(payment_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return str(response.data[0]["id"])

    def get_shipment(self, shipment_id: str) -> dict[str, object] | None:
        response = (
            self.client.table("shipments")
            .select("*")
            .eq("id", shipment_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def insert_payment(self, row: dict[str, object]) -> str:
        response = self.client.table("payments").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to record payment")
        return str(response.data[0]["id"])

    def insert_receipt(self, row: dict[str, object]) -> str:
        response = self.client.table("receipts").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create receipt")
        return str(response.data[0]["id"])

    def update_shipment_status(self, shipment_id: str, status: str) -> None:
        self.client.table("shipments").update({"status": status}).eq(
            "id", shipment_id
        ).execute()
