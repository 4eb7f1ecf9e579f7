"""Tests for payment verification and receipt numbers."""

import asyncio
import re
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from zimbabwe_shipping.services.identifiers import generate_receipt_number
from zimbabwe_shipping.services.payment_verification import (
    ANONYMOUS_USER_ID,
    PaymentRecordError,
    PaymentVerificationError,
    PaymentVerificationService,
)
from tests.conftest import FakeCheckoutGateway, InMemoryPaymentRecordRepository

SHIPMENT = {
    "id": "s-1",
    "tracking_number": "ZIMSHIP-12345",
    "status": "Booking Confirmed",
    "origin": "1 High Street, London",
    "destination": "12 Samora Machel Avenue, Harare",
    "user_id": "3f1c9a52-0000-4000-8000-000000000001",
    "metadata": {
        "sender": {"name": "Rudo", "email": "rudo@example.com", "phone": "+4477"},
        "recipient": {"name": "Farai", "phone": "+26377"},
        "shipmentDetails": {"type": "drum", "quantity": 2},
    },
}


def _service(
    session: dict[str, object], records: InMemoryPaymentRecordRepository
) -> PaymentVerificationService:
    gateway = FakeCheckoutGateway(sessions={"cs_1": session})
    return PaymentVerificationService(gateway=gateway, records=records)


def test_paid_session_records_payment_and_receipt() -> None:
    records = InMemoryPaymentRecordRepository(shipments={"s-1": dict(SHIPMENT)})
    service = _service(
        {
            "payment_status": "paid",
            "amount_total": 52000,
            "currency": "gbp",
            "client_reference_id": "s-1",
            "payment_intent": "pi_123",
        },
        records,
    )

    verified = asyncio.run(service.verify(session_id="cs_1"))

    assert verified.payment_id == "payment-1"
    assert verified.receipt_id == "receipt-1"
    payment = records.payments[0]
    assert payment["amount"] == 520.0
    assert payment["transaction_id"] == "pi_123"
    assert payment["payment_status"] == "completed"
    assert payment["user_id"] == SHIPMENT["user_id"]
    receipt = records.receipts[0]
    assert re.fullmatch(r"R-\d{6}", receipt["receipt_number"])
    assert receipt["payment_id"] == "payment-1"
    assert receipt["sender_details"]["email"] == "rudo@example.com"
    assert receipt["recipient_details"]["address"] == SHIPMENT["destination"]
    assert receipt["shipment_details"]["tracking_number"] == "ZIMSHIP-12345"
    assert records.shipments["s-1"]["status"] == "Paid"


def test_shipment_id_falls_back_to_metadata() -> None:
    shipment = {**SHIPMENT, "user_id": None}
    records = InMemoryPaymentRecordRepository(shipments={"s-1": shipment})
    service = _service(
        {"payment_status": "paid", "metadata": {"shipment_id": "s-1"}}, records
    )

    asyncio.run(service.verify(session_id="cs_1"))

    assert records.payments[0]["user_id"] == ANONYMOUS_USER_ID
    assert records.payments[0]["amount"] == 0.0


def test_unpaid_session_is_rejected() -> None:
    records = InMemoryPaymentRecordRepository(shipments={"s-1": dict(SHIPMENT)})
    service = _service(
        {"payment_status": "unpaid", "client_reference_id": "s-1"}, records
    )

    with pytest.raises(PaymentVerificationError, match="Payment not completed"):
        asyncio.run(service.verify(session_id="cs_1"))

    assert records.payments == []
    assert records.shipments["s-1"]["status"] == "Booking Confirmed"


def test_missing_identifier_is_rejected() -> None:
    service = _service({}, InMemoryPaymentRecordRepository())

    with pytest.raises(PaymentVerificationError, match="No payment identifier"):
        asyncio.run(service.verify())


def test_database_failures_are_wrapped() -> None:
    records = InMemoryPaymentRecordRepository(
        shipments={"s-1": dict(SHIPMENT)}, fail_on_receipt=True
    )
    paid = {"payment_status": "paid", "client_reference_id": "s-1"}
    service = _service(paid, records)

    with pytest.raises(PaymentRecordError, match="receipts insert failed"):
        asyncio.run(service.verify(session_id="cs_1"))

    assert records.shipments["s-1"]["status"] == "Booking Confirmed"


def test_unknown_shipment_is_a_database_failure() -> None:
    service = _service(
        {"payment_status": "paid", "client_reference_id": "missing"},
        InMemoryPaymentRecordRepository(),
    )

    with pytest.raises(PaymentRecordError, match="Shipment not found"):
        asyncio.run(service.verify(session_id="cs_1"))


def test_lookup_by_payment_id() -> None:
    payment_id = uuid4()
    records = InMemoryPaymentRecordRepository(receipt_ids={payment_id: "receipt-9"})
    service = _service({}, records)

    verified = asyncio.run(service.verify(payment_id=payment_id))

    assert verified.payment_id == str(payment_id)
    assert verified.receipt_id == "receipt-9"
    with pytest.raises(PaymentVerificationError):
        asyncio.run(service.verify(payment_id=uuid4()))


def test_receipt_number_uses_low_millisecond_digits() -> None:
    moment = datetime(2025, 1, 1, 12, 0, 0, 123000, tzinfo=UTC)

    assert generate_receipt_number(moment) == "R-800123"
