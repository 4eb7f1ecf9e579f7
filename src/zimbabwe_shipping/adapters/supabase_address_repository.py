"""Supabase repository for saved addresses."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from zimbabwe_shipping.domain.addresses import AddressRecord
from zimbabwe_shipping.services.addresses import AddressRepository

_COLUMNS = (
    "id, user_id, address_name, recipient_name, street_address, city, state, "
    "postal_code, country, phone_number, is_default"
)


@dataclass
class SupabaseAddressRepository(AddressRepository):
    """Supabase implementation for the address book."""

    client: Client

    def list_addresses(self, user_id: UUID) -> list[AddressRecord]:
        response = (
            self.client.table("addresses")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("is_default", desc=True)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]

    def get_address(self, user_id: UUID, address_id: UUID) -> AddressRecord | None:
        response = (
            self.client.table("addresses")
            .select(_COLUMNS)
            .eq("id", str(address_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def create_address(
        self, user_id: UUID, payload: dict[str, object]
    ) -> AddressRecord:
        response = (
            self.client.table("addresses")
            .insert({**payload, "user_id": str(user_id)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create address")
        return _to_record(response.data[0])

    def update_address(
        self, user_id: UUID, address_id: UUID, payload: dict[str, object]
    ) -> AddressRecord | None:
        response = (
            self.client.table("addresses")
            .update(payload)
            .eq("id", str(address_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def delete_address(self, user_id: UUID, address_id: UUID) -> bool:
        response = (
            self.client.table("addresses")
            .delete()
            .eq("id", str(address_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def clear_default(self, user_id: UUID) -> None:
        self.client.table("addresses").update({"is_default": False}).eq(
            "user_id", str(user_id)
        ).eq("is_default", True).execute()


def _to_record(row: dict[str, object]) -> AddressRecord:
    return AddressRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        address_name=row.get("address_name") or "",
        recipient_name=row.get("recipient_name") or "",
        street_address=row.get("street_address") or "",
        city=row.get("city") or "",
        state=row.get("state"),
        postal_code=row.get("postal_code"),
        country=row.get("country") or "",
        phone_number=row.get("phone_number"),
        is_default=bool(row.get("is_default")),
    )
