"""Address book domain models."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AddressRecord:
    """Saved delivery or collection address."""

    id: UUID
    user_id: UUID
    address_name: str
    recipient_name: str
    street_address: str
    city: str
    state: str | None
    postal_code: str | None
    country: str
    phone_number: str | None
    is_default: bool
