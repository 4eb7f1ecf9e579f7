"""Shipment booking service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from zimbabwe_shipping.services.identifiers import generate_tracking_number

logger = logging.getLogger(__name__)

INITIAL_STATUS = "Booking Confirmed"


class ShipmentRepository(Protocol):
    """Persistence interface for shipments."""

    def insert_shipment(self, row: dict[str, object]) -> dict[str, object]:
        """Insert a shipment row and return the stored row."""


class ShipmentOwnerError(ValueError):
    """Raised when a booking names a different owner than the caller."""


@dataclass(frozen=True)
class CreatedShipment:
    shipment: dict[str, object]
    shipment_id: str
    tracking_number: str


@dataclass
class ShipmentService:
    """Creates shipment rows with a fresh id and tracking number."""

    repository: ShipmentRepository

    def create_shipment(
        self, shipment_data: dict[str, object], user_id: UUID
    ) -> CreatedShipment:
        """Build and store one shipment row owned by ``user_id``.

        A ``userId`` in the payload must name the same user.
        """
        claimed = shipment_data.get("userId")
        if claimed and str(claimed) != str(user_id):
            logger.warning(
                "Shipment owner mismatch",
                extra={"user_id": str(user_id), "claimed_user_id": str(claimed)},
            )
            raise ShipmentOwnerError("Shipment owner does not match the signed-in user")
        metadata = _as_dict(shipment_data.get("metadata"))
        row = {
            "id": str(uuid4()),
            "tracking_number": generate_tracking_number(),
            "status": INITIAL_STATUS,
            "origin": shipment_data.get("origin"),
            "destination": shipment_data.get("destination"),
            "user_id": str(user_id),
            "metadata": {
                **metadata,
                "sender": _sender_details(shipment_data, metadata),
                "recipient": _recipient_details(shipment_data, metadata),
            },
        }
        stored = self.repository.insert_shipment(row)
        logger.info(
            "Shipment created",
            extra={"shipment_id": stored.get("id"), "user_id": row["user_id"]},
        )
        return CreatedShipment(
            shipment=stored,
            shipment_id=str(stored.get("id", row["id"])),
            tracking_number=str(stored.get("tracking_number", row["tracking_number"])),
        )


def _sender_details(
    shipment_data: dict[str, object], metadata: dict[str, object]
) -> dict[str, object]:
    if isinstance(shipment_data.get("sender"), dict):
        return shipment_data["sender"]
    details = _as_dict(metadata.get("senderDetails"))
    parts = (details.get("firstName"), details.get("lastName"))
    name = details.get("name") or " ".join(str(part) for part in parts if part)
    return {
        "name": name,
        "email": details.get("email"),
        "phone": details.get("phone"),
        "address": details.get("address"),
    }


def _recipient_details(
    shipment_data: dict[str, object], metadata: dict[str, object]
) -> dict[str, object]:
    if isinstance(shipment_data.get("recipient"), dict):
        return shipment_data["recipient"]
    details = _as_dict(metadata.get("recipientDetails"))
    return {
        "name": details.get("name"),
        "phone": details.get("phone"),
        "address": details.get("address"),
    }


def _as_dict(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}
