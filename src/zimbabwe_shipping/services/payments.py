"""Checkout session creation for shipment bookings."""

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

PRODUCT_NAME = "UK to Zimbabwe Shipping"
CHECKOUT_CURRENCY = "gbp"


class CheckoutGateway(Protocol):
    """Interface to the payment provider's hosted checkout."""

    async def create_checkout_session(
        self, params: dict[str, object]
    ) -> dict[str, object]:
        """Create a checkout session and return the provider's payload."""

    async def retrieve_checkout_session(self, session_id: str) -> dict[str, object]:
        """Return a checkout session by id."""


@dataclass(frozen=True)
class CheckoutSession:
    url: str
    session_id: str


@dataclass
class PaymentService:
    """Creates one-off card checkout sessions; nothing is retried."""

    gateway: CheckoutGateway

    async def create_checkout_session(
        self,
        amount: int,
        booking_data: dict[str, object],
        payment_method: str,
        origin: str,
    ) -> CheckoutSession:
        """Create a checkout session for ``amount`` pence."""
        shipment_details = _as_dict(booking_data.get("shipmentDetails"))
        sender_details = _as_dict(booking_data.get("senderDetails"))
        shipment_id = booking_data.get("shipment_id")
        logger.info(
            "Creating payment session",
            extra={"amount": amount, "shipment_id": shipment_id},
        )
        params: dict[str, object] = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": CHECKOUT_CURRENCY,
                        "product_data": {
                            "name": PRODUCT_NAME,
                            "description": describe_shipment(shipment_details),
                        },
                        "unit_amount": amount,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": (
                f"{origin}/payment-success?session_id={{CHECKOUT_SESSION_ID}}"
            ),
            "cancel_url": f"{origin}/book-shipment",
            "metadata": {
                "shipment_id": shipment_id,
                "tracking_number": shipment_details.get("tracking_number"),
                "payment_method": payment_method,
            },
        }
        if sender_details.get("email"):
            params["customer_email"] = sender_details["email"]
        if shipment_id:
            params["client_reference_id"] = shipment_id
        session = await self.gateway.create_checkout_session(params)
        logger.info("Created checkout session", extra={"session_id": session.get("id")})
        return CheckoutSession(url=str(session["url"]), session_id=str(session["id"]))


def describe_shipment(shipment_details: dict[str, object]) -> str:
    """Describe a booking as a drum count or a parcel weight."""
    if shipment_details.get("type") == "drum":
        return f"Shipment ({shipment_details.get('quantity')} Drums)"
    return f"Shipment ({shipment_details.get('weight')}kg Parcel)"


def _as_dict(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}
