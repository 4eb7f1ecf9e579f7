"""Confirms paid checkout sessions and records the payment and receipt."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from zimbabwe_shipping.services.identifiers import generate_receipt_number
from zimbabwe_shipping.services.payments import CheckoutGateway

logger = logging.getLogger(__name__)

PAID_STATUS = "Paid"
PAYMENT_METHOD = "stripe"
ANONYMOUS_USER_ID = "00000000-0000-0000-0000-000000000000"


class PaymentRecordRepository(Protocol):
    """Persistence interface for payments, receipts and shipment status."""

    def get_receipt_id(self, payment_id: UUID) -> str | None:
        """Return the receipt id recorded for a payment."""

    def get_shipment(self, shipment_id: str) -> dict[str, object] | None:
        """Return a shipment row."""

    def insert_payment(self, row: dict[str, object]) -> str:
        """Insert a payment row and return its id."""

    def insert_receipt(self, row: dict[str, object]) -> str:
        """Insert a receipt row and return its id."""

    def update_shipment_status(self, shipment_id: str, status: str) -> None:
        """Set a shipment's status."""


class PaymentVerificationError(RuntimeError):
    """Raised when a request cannot be matched to a completed payment."""


class PaymentRecordError(RuntimeError):
    """Raised when a confirmed payment could not be written to the database."""


@dataclass(frozen=True)
class VerifiedPayment:
    payment_id: str
    receipt_id: str


@dataclass
class PaymentVerificationService:
    """Turns a paid checkout session into payment and receipt rows."""

    gateway: CheckoutGateway
    records: PaymentRecordRepository

    async def verify(
        self, session_id: str | None = None, payment_id: UUID | None = None
    ) -> VerifiedPayment:
        """Confirm a payment by checkout session, or look up a recorded one."""
        if payment_id is not None:
            receipt_id = self.records.get_receipt_id(payment_id)
            if receipt_id is None:
                raise PaymentVerificationError(f"No receipt for payment {payment_id}")
            return VerifiedPayment(payment_id=str(payment_id), receipt_id=receipt_id)
        if not session_id:
            raise PaymentVerificationError("No payment identifier provided")
        session = await self.gateway.retrieve_checkout_session(session_id)
        if session.get("payment_status") != "paid":
            logger.warning(
                "Payment not completed",
                extra={
                    "session_id": session_id,
                    "payment_status": session.get("payment_status"),
                },
            )
            raise PaymentVerificationError("Payment not completed")
        metadata = _as_dict(session.get("metadata"))
        shipment_id = session.get("client_reference_id") or metadata.get("shipment_id")
        if not shipment_id:
            raise PaymentVerificationError("Checkout session has no shipment")
        try:
            return self._record(str(shipment_id), session)
        except Exception as exc:
            logger.exception(
                "Database operation failed", extra={"shipment_id": shipment_id}
            )
            raise PaymentRecordError(str(exc)) from exc

    def _record(self, shipment_id: str, session: dict[str, object]) -> VerifiedPayment:
        shipment = self.records.get_shipment(shipment_id)
        if shipment is None:
            raise LookupError(f"Shipment not found: {shipment_id}")
        amount = int(session.get("amount_total") or 0) / 100
        currency = session.get("currency") or "gbp"
        payment_id = self.records.insert_payment(
            {
                "amount": amount,
                "currency": currency,
                "shipment_id": shipment_id,
                "payment_method": PAYMENT_METHOD,
                "payment_status": "completed",
                "transaction_id": session.get("payment_intent"),
                "user_id": shipment.get("user_id") or ANONYMOUS_USER_ID,
            }
        )
        receipt_id = self.records.insert_receipt(
            build_receipt(shipment, payment_id, amount, str(currency))
        )
        self.records.update_shipment_status(shipment_id, PAID_STATUS)
        logger.info(
            "Payment recorded",
            extra={"shipment_id": shipment_id, "payment_id": payment_id},
        )
        return VerifiedPayment(payment_id=payment_id, receipt_id=receipt_id)


def build_receipt(
    shipment: dict[str, object], payment_id: str, amount: float, currency: str
) -> dict[str, object]:
    """Build a receipt row from the stored shipment."""
    metadata = _as_dict(shipment.get("metadata"))
    sender = _as_dict(metadata.get("sender"))
    recipient = _as_dict(metadata.get("recipient"))
    details = _as_dict(metadata.get("shipmentDetails"))
    return {
        "shipment_id": shipment.get("id"),
        "payment_id": payment_id,
        "receipt_number": generate_receipt_number(),
        "payment_method": PAYMENT_METHOD,
        "amount": amount,
        "currency": currency,
        "sender_details": {
            "name": sender.get("name"),
            "email": sender.get("email"),
            "phone": sender.get("phone"),
            "address": shipment.get("origin"),
        },
        "recipient_details": {
            "name": recipient.get("name"),
            "phone": recipient.get("phone"),
            "address": shipment.get("destination"),
        },
        "shipment_details": {
            "tracking_number": shipment.get("tracking_number"),
            "type": details.get("type"),
            "quantity": details.get("quantity"),
            "weight": details.get("weight"),
            "services": [],
        },
    }


def _as_dict(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}
