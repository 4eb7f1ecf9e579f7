"""Address book service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from zimbabwe_shipping.domain.addresses import AddressRecord
from zimbabwe_shipping.services.validation import AddressForm, sanitize_input

ADDRESS_FIELDS = (
    "address_name",
    "recipient_name",
    "street_address",
    "city",
    "state",
    "postal_code",
    "country",
    "phone_number",
)


class AddressRepository(Protocol):
    """Persistence interface for saved addresses."""

    def list_addresses(self, user_id: UUID) -> list[AddressRecord]:
        """Return a user's addresses, default first."""

    def get_address(self, user_id: UUID, address_id: UUID) -> AddressRecord | None:
        """Return one of the user's addresses."""

    def create_address(
        self, user_id: UUID, payload: dict[str, object]
    ) -> AddressRecord:
        """Insert an address and return it."""

    def update_address(
        self, user_id: UUID, address_id: UUID, payload: dict[str, object]
    ) -> AddressRecord | None:
        """Update an address and return it, or None when it is not the user's."""

    def delete_address(self, user_id: UUID, address_id: UUID) -> bool:
        """Delete an address; return False when nothing matched."""

    def clear_default(self, user_id: UUID) -> None:
        """Unset the default flag on all of a user's addresses."""


@dataclass
class AddressService:
    """Writes validated address forms; the default flag stays unique."""

    repository: AddressRepository

    def list_addresses(self, user_id: UUID) -> list[AddressRecord]:
        return self.repository.list_addresses(user_id)

    def create_address(self, user_id: UUID, form: AddressForm) -> AddressRecord:
        """Store a new address, clearing the old default when it replaces it."""
        payload = _clean(form)
        if not payload["is_default"]:
            return self.repository.create_address(user_id, payload)
        created = self.repository.create_address(
            user_id, {**payload, "is_default": False}
        )
        return self._make_default(user_id, created.id) or created

    def update_address(
        self, user_id: UUID, address_id: UUID, form: AddressForm
    ) -> AddressRecord | None:
        """Update one of the user's addresses; None when it is not theirs."""
        if self.repository.get_address(user_id, address_id) is None:
            return None
        payload = _clean(form)
        if payload["is_default"]:
            self.repository.clear_default(user_id)
        return self.repository.update_address(user_id, address_id, payload)

    def delete_address(self, user_id: UUID, address_id: UUID) -> bool:
        return self.repository.delete_address(user_id, address_id)

    def set_default(self, user_id: UUID, address_id: UUID) -> AddressRecord | None:
        """Make one address the default, clearing any previous default."""
        if self.repository.get_address(user_id, address_id) is None:
            return None
        return self._make_default(user_id, address_id)

    def _make_default(self, user_id: UUID, address_id: UUID) -> AddressRecord | None:
        self.repository.clear_default(user_id)
        return self.repository.update_address(
            user_id, address_id, {"is_default": True}
        )


def _clean(form: AddressForm) -> dict[str, object]:
    payload: dict[str, object] = {}
    for name in ADDRESS_FIELDS:
        value = getattr(form, name)
        if isinstance(value, str):
            value = sanitize_input(value) or None
        payload[name] = value
    payload["is_default"] = form.is_default
    return payload
