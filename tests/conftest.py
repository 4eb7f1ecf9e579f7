"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from zimbabwe_shipping.config import Settings
from zimbabwe_shipping.containers import AppContainer
from zimbabwe_shipping.domain.addresses import AddressRecord
from zimbabwe_shipping.domain.models import AuthSession, SignInResult, UserRecord
from zimbabwe_shipping.domain.notifications import (
    Announcement,
    NotificationDraft,
    Recipient,
)
from zimbabwe_shipping.domain.profiles import MfaProfile
from zimbabwe_shipping.domain.reviews import ReviewRecord
from zimbabwe_shipping.services.addresses import AddressRepository, AddressService
from zimbabwe_shipping.services.audit import AuditRepository, AuditService
from zimbabwe_shipping.services.auth_session import AuthChangeCallback, AuthGateway
from zimbabwe_shipping.services.collection_routes import (
    CollectionSchedule,
    CollectionScheduleRepository,
    CollectionScheduleService,
)
from zimbabwe_shipping.services.email import EmailClient, EmailService
from zimbabwe_shipping.services.mfa import MfaService, ProfileRepository
from zimbabwe_shipping.services.notifications import (
    NotificationRepository,
    NotificationService,
)
from zimbabwe_shipping.services.payment_verification import (
    PaymentRecordRepository,
    PaymentVerificationService,
)
from zimbabwe_shipping.services.payments import CheckoutGateway, PaymentService
from zimbabwe_shipping.services.reviews import ReviewRepository, ReviewService
from zimbabwe_shipping.services.shipments import ShipmentRepository, ShipmentService

ACCESS_TOKEN = "access-token"


def make_session(user: UserRecord | None = None, token: str = ACCESS_TOKEN):
    return AuthSession(
        access_token=token,
        refresh_token="refresh-token",
        expires_at=None,
        user=user or UserRecord(id=uuid4(), email="customer@example.com"),
    )


@dataclass
class FakeSubscription:
    unsubscribed: bool = False

    def unsubscribe(self) -> None:
        self.unsubscribed = True


@dataclass
class FakeAuthGateway(AuthGateway):
    """Scriptable auth gateway that records calls."""

    session: AuthSession | None = None
    sign_in_result: SignInResult | None = None
    admins: set[UUID] = field(default_factory=set)
    tokens: dict[str, UserRecord] = field(default_factory=dict)
    session_error: Exception | None = None
    admin_error: Exception | None = None
    sign_out_error: Exception | None = None
    callback: AuthChangeCallback | None = None
    subscription: FakeSubscription = field(default_factory=FakeSubscription)
    sign_outs: int = 0
    admin_checks: list[UUID] = field(default_factory=list)

    async def get_session(self) -> AuthSession | None:
        if self.session_error:
            raise self.session_error
        return self.session

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        if self.sign_in_result is not None:
            return self.sign_in_result
        return SignInResult(session=None, user=None, error="Invalid login credentials")

    async def sign_out(self) -> None:
        self.sign_outs += 1
        if self.sign_out_error:
            raise self.sign_out_error

    def on_auth_state_change(self, callback: AuthChangeCallback) -> FakeSubscription:
        self.callback = callback
        return self.subscription

    async def is_admin(self, user_id: UUID) -> bool:
        self.admin_checks.append(user_id)
        if self.admin_error:
            raise self.admin_error
        return user_id in self.admins

    async def get_user(self, access_token: str) -> UserRecord | None:
        return self.tokens.get(access_token)


@dataclass
class InMemoryShipmentRepository(ShipmentRepository):
    rows: list[dict[str, object]] = field(default_factory=list)

    def insert_shipment(self, row: dict[str, object]) -> dict[str, object]:
        stored = {**row, "created_at": datetime.now(tz=UTC).isoformat()}
        self.rows.append(stored)
        return stored


@dataclass
class FakeCheckoutGateway(CheckoutGateway):
    """Fake payment provider returning a fixed checkout session."""

    calls: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None
    sessions: dict[str, dict[str, object]] = field(default_factory=dict)

    async def create_checkout_session(
        self, params: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append(params)
        if self.error:
            raise self.error
        return {"id": "cs_test_123", "url": "https://checkout.example/cs_test_123"}

    async def retrieve_checkout_session(self, session_id: str) -> dict[str, object]:
        if session_id not in self.sessions:
            raise RuntimeError(f"No such checkout.session: {session_id}")
        return self.sessions[session_id]


@dataclass
class InMemoryPaymentRecordRepository(PaymentRecordRepository):
    """In-memory payments, receipts and shipment statuses for tests."""

    shipments: dict[str, dict[str, object]] = field(default_factory=dict)
    payments: list[dict[str, object]] = field(default_factory=list)
    receipts: list[dict[str, object]] = field(default_factory=list)
    receipt_ids: dict[UUID, str] = field(default_factory=dict)
    fail_on_receipt: bool = False

    def get_receipt_id(self, payment_id: UUID) -> str | None:
        return self.receipt_ids.get(payment_id)

    def get_shipment(self, shipment_id: str) -> dict[str, object] | None:
        return self.shipments.get(shipment_id)

    def insert_payment(self, row: dict[str, object]) -> str:
        self.payments.append(row)
        return f"payment-{len(self.payments)}"

    def insert_receipt(self, row: dict[str, object]) -> str:
        if self.fail_on_receipt:
            raise RuntimeError("receipts insert failed")
        self.receipts.append(row)
        return f"receipt-{len(self.receipts)}"

    def update_shipment_status(self, shipment_id: str, status: str) -> None:
        self.shipments[shipment_id] = {**self.shipments[shipment_id], "status": status}


@dataclass
class InMemoryCollectionScheduleRepository(CollectionScheduleRepository):
    schedules: list[CollectionSchedule] = field(default_factory=list)
    error: Exception | None = None

    def list_schedules(self) -> list[CollectionSchedule]:
        if self.error:
            raise self.error
        return list(self.schedules)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    profiles: dict[UUID, MfaProfile] = field(default_factory=dict)

    def get_mfa_profile(self, user_id: UUID) -> MfaProfile | None:
        return self.profiles.get(user_id)

    def enable_mfa(self, user_id: UUID, secret: str) -> None:
        self.profiles[user_id] = MfaProfile(
            user_id=user_id, mfa_enabled=True, mfa_secret=secret
        )


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    entries: list[dict[str, object]] = field(default_factory=list)

    def create_entry(
        self,
        user_id: UUID,
        action: str,
        entity_type: str,
        entity_id: UUID,
        details: dict[str, object] | None,
    ) -> None:
        self.entries.append(
            {
                "user_id": user_id,
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "details": details,
            }
        )


@dataclass
class FakeEmailClient(EmailClient):
    """Fake email provider that records messages."""

    sent: list[dict[str, object]] = field(default_factory=list)

    async def send_email(
        self, sender: str, to: list[str], subject: str, html_body: str
    ) -> str | None:
        self.sent.append(
            {"from": sender, "to": to, "subject": subject, "html": html_body}
        )
        return f"email-{len(self.sent)}"


@dataclass
class InMemoryNotificationRepository(NotificationRepository):
    """In-memory notification store for tests."""

    announcements: dict[UUID, Announcement] = field(default_factory=dict)
    recipients: list[Recipient] = field(default_factory=list)
    tickets: dict[UUID, str] = field(default_factory=dict)
    notifications: list[dict[str, object]] = field(default_factory=list)
    notified_tickets: list[UUID] = field(default_factory=list)
    role_filters: list[list[str] | None] = field(default_factory=list)

    def get_announcement(self, announcement_id: UUID) -> Announcement | None:
        return self.announcements.get(announcement_id)

    def list_recipients(self, roles: list[str] | None) -> list[Recipient]:
        self.role_filters.append(roles)
        if not roles:
            return list(self.recipients)
        return [recipient for recipient in self.recipients if recipient.role in roles]

    def insert_notifications(self, drafts: list[NotificationDraft]) -> None:
        self.notifications.extend(draft.to_row() for draft in drafts)

    def get_ticket_subject(self, ticket_id: UUID) -> str | None:
        return self.tickets.get(ticket_id)

    def create_notification(self, draft: NotificationDraft) -> dict[str, object]:
        row = {"id": str(uuid4()), **draft.to_row()}
        self.notifications.append(row)
        return row

    def mark_ticket_responses_notified(self, ticket_id: UUID) -> None:
        self.notified_tickets.append(ticket_id)


@dataclass
class InMemoryAddressRepository(AddressRepository):
    """In-memory address book for tests."""

    addresses: dict[UUID, AddressRecord] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def list_addresses(self, user_id: UUID) -> list[AddressRecord]:
        self.calls.append("list")
        owned = [item for item in self.addresses.values() if item.user_id == user_id]
        return sorted(owned, key=lambda item: not item.is_default)

    def get_address(self, user_id: UUID, address_id: UUID) -> AddressRecord | None:
        address = self.addresses.get(address_id)
        if address is None or address.user_id != user_id:
            return None
        return address

    def create_address(
        self, user_id: UUID, payload: dict[str, object]
    ) -> AddressRecord:
        self.calls.append("create")
        address = AddressRecord(id=uuid4(), user_id=user_id, **payload)
        self.addresses[address.id] = address
        return address

    def update_address(
        self, user_id: UUID, address_id: UUID, payload: dict[str, object]
    ) -> AddressRecord | None:
        self.calls.append("update")
        current = self.get_address(user_id, address_id)
        if current is None:
            return None
        updated = replace(current, **payload)
        self.addresses[address_id] = updated
        return updated

    def delete_address(self, user_id: UUID, address_id: UUID) -> bool:
        self.calls.append("delete")
        if self.get_address(user_id, address_id) is None:
            return False
        del self.addresses[address_id]
        return True

    def clear_default(self, user_id: UUID) -> None:
        self.calls.append("clear_default")
        for address_id, address in list(self.addresses.items()):
            if address.user_id == user_id and address.is_default:
                self.addresses[address_id] = replace(address, is_default=False)


@dataclass
class InMemoryReviewRepository(ReviewRepository):
    reviews: list[ReviewRecord] = field(default_factory=list)

    def list_reviews(self, limit: int) -> list[ReviewRecord]:
        ordered = sorted(
            self.reviews,
            key=lambda review: review.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        return ordered[:limit]

    def create_review(
        self, user_id: UUID, shipment_id: UUID | None, rating: int, comment: str
    ) -> ReviewRecord:
        review = ReviewRecord(
            id=uuid4(),
            user_id=user_id,
            shipment_id=shipment_id,
            rating=rating,
            comment=comment,
            created_at=datetime.now(tz=UTC),
        )
        self.reviews.append(review)
        return review


def address_form(**overrides: object) -> dict[str, object]:
    form: dict[str, object] = {
        "address_name": "Home",
        "recipient_name": "Tendai Moyo",
        "street_address": "12 Samora Machel Avenue",
        "city": "Harare",
        "state": None,
        "postal_code": "SW1A 1AA",
        "country": "Zimbabwe",
        "phone_number": "+263771234567",
        "is_default": False,
    }
    form.update(overrides)
    return form


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        stripe_secret_key="sk_test_key",
        resend_api_key="re_test_key",
    )


@pytest.fixture
def auth_gateway() -> FakeAuthGateway:
    return FakeAuthGateway()


@pytest.fixture
def customer(auth_gateway: FakeAuthGateway) -> UserRecord:
    user = UserRecord(id=uuid4(), email="customer@example.com")
    auth_gateway.tokens[ACCESS_TOKEN] = user
    return user


@pytest.fixture
def auth_headers(customer: UserRecord) -> dict[str, str]:
    return {"Authorization": f"Bearer {ACCESS_TOKEN}"}


@pytest.fixture
def container(settings: Settings, auth_gateway: FakeAuthGateway) -> AppContainer:
    audit_service = AuditService(InMemoryAuditRepository())
    checkout_gateway = FakeCheckoutGateway()

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_gateway=auth_gateway,
        shipment_service=ShipmentService(InMemoryShipmentRepository()),
        payment_service=PaymentService(checkout_gateway),
        payment_verifier=PaymentVerificationService(
            gateway=checkout_gateway, records=InMemoryPaymentRecordRepository()
        ),
        mfa_service=MfaService(
            profiles=InMemoryProfileRepository(),
            audit=audit_service,
            issuer=settings.mfa_issuer,
        ),
        email_service=EmailService(
            client=FakeEmailClient(),
            sender=settings.email_sender,
            site_url=settings.site_url,
        ),
        notification_service=NotificationService(InMemoryNotificationRepository()),
        address_service=AddressService(InMemoryAddressRepository()),
        review_service=ReviewService(InMemoryReviewRepository()),
        collection_schedule_service=CollectionScheduleService(
            InMemoryCollectionScheduleRepository()
        ),
        close_resources=close_resources,
    )
