"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from zimbabwe_shipping.adapters.file_storage import JsonFileStorage
from zimbabwe_shipping.adapters.resend_client import HttpxResendClient
from zimbabwe_shipping.adapters.stripe_client import HttpxStripeClient
from zimbabwe_shipping.adapters.supabase_address_repository import (
    SupabaseAddressRepository,
)
from zimbabwe_shipping.adapters.supabase_audit_repository import (
    SupabaseAuditRepository,
)
from zimbabwe_shipping.adapters.supabase_auth_gateway import SupabaseAuthGateway
from zimbabwe_shipping.adapters.supabase_client import LazySupabaseClient
from zimbabwe_shipping.adapters.supabase_collection_schedule_repository import (
    SupabaseCollectionScheduleRepository,
)
from zimbabwe_shipping.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from zimbabwe_shipping.adapters.supabase_payment_repository import (
    SupabasePaymentRecordRepository,
)
from zimbabwe_shipping.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from zimbabwe_shipping.adapters.supabase_review_repository import (
    SupabaseReviewRepository,
)
from zimbabwe_shipping.adapters.supabase_shipment_repository import (
    SupabaseShipmentRepository,
)
from zimbabwe_shipping.config import Settings
from zimbabwe_shipping.services.addresses import AddressService
from zimbabwe_shipping.services.audit import AuditService
from zimbabwe_shipping.services.auth_session import AuthGateway, SessionProvider
from zimbabwe_shipping.services.collection_routes import CollectionScheduleService
from zimbabwe_shipping.services.csrf import CsrfTokenService
from zimbabwe_shipping.services.email import EmailService
from zimbabwe_shipping.services.mfa import MfaService
from zimbabwe_shipping.services.notifications import NotificationService
from zimbabwe_shipping.services.payment_verification import PaymentVerificationService
from zimbabwe_shipping.services.payments import PaymentService
from zimbabwe_shipping.services.preferences import (
    ColorSchemeSource,
    CurrencyPreference,
    DocumentRoot,
    ThemePreference,
)
from zimbabwe_shipping.services.reviews import ReviewService
from zimbabwe_shipping.services.route_guard import (
    Placeholder,
    Redirect,
    guard_admin_for,
    guard_for,
)
from zimbabwe_shipping.services.shipments import ShipmentService
from zimbabwe_shipping.services.storage import KeyValueStorage

T = TypeVar("T")


@dataclass
class AppContainer:
    """Holds server-side dependencies for the HTTP handlers."""

    settings: Settings
    auth_gateway: AuthGateway
    shipment_service: ShipmentService
    payment_service: PaymentService
    payment_verifier: PaymentVerificationService
    mfa_service: MfaService
    email_service: EmailService
    notification_service: NotificationService
    address_service: AddressService
    review_service: ReviewService
    collection_schedule_service: CollectionScheduleService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    No credentials are checked here; each adapter resolves its keys on first use.
    """
    resolved_settings = settings or Settings()
    supabase_client = LazySupabaseClient(
        url=resolved_settings.supabase_url,
        key=resolved_settings.supabase_service_key,
    )
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    stripe_client = HttpxStripeClient.create(
        api_key=resolved_settings.stripe_secret_key,
        base_url=resolved_settings.stripe_base_url,
    )
    resend_client = HttpxResendClient.create(
        api_key=resolved_settings.resend_api_key,
        base_url=resolved_settings.resend_base_url,
    )
    mfa_service = MfaService(
        profiles=SupabaseProfileRepository(supabase_client),
        audit=audit_service,
        issuer=resolved_settings.mfa_issuer,
        encryption_key=resolved_settings.mfa_encryption_key,
    )
    email_service = EmailService(
        client=resend_client,
        sender=resolved_settings.email_sender,
        site_url=resolved_settings.site_url,
    )

    async def close_resources() -> None:
        await stripe_client.close()
        await resend_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_gateway=SupabaseAuthGateway(supabase_client),
        shipment_service=ShipmentService(SupabaseShipmentRepository(supabase_client)),
        payment_service=PaymentService(stripe_client),
        payment_verifier=PaymentVerificationService(
            gateway=stripe_client,
            records=SupabasePaymentRecordRepository(supabase_client),
        ),
        mfa_service=mfa_service,
        email_service=email_service,
        notification_service=NotificationService(
            SupabaseNotificationRepository(supabase_client)
        ),
        address_service=AddressService(SupabaseAddressRepository(supabase_client)),
        review_service=ReviewService(SupabaseReviewRepository(supabase_client)),
        collection_schedule_service=CollectionScheduleService(
            SupabaseCollectionScheduleRepository(supabase_client)
        ),
        close_resources=close_resources,
    )


@dataclass
class ClientContainer:
    """Holds the per-visitor state objects: session, preferences and CSRF."""

    session_provider: SessionProvider
    currency: CurrencyPreference
    theme: ThemePreference
    csrf: CsrfTokenService

    def guard(self, content: T) -> T | Placeholder | Redirect:
        """Gate a signed-in page on the current session."""
        return guard_for(self.session_provider, content)

    def guard_admin(self, content: T) -> T | Placeholder | Redirect:
        return guard_admin_for(self.session_provider, content)

    async def close(self) -> None:
        """Release subscriptions held by the state objects."""
        self.session_provider.close()
        self.currency.close()
        self.theme.close()


def build_client_gateway(settings: Settings | None = None) -> AuthGateway:
    """Create an auth gateway using the public anon key."""
    resolved_settings = settings or Settings()
    return SupabaseAuthGateway(
        LazySupabaseClient(
            url=resolved_settings.supabase_url,
            key=resolved_settings.supabase_anon_key,
            key_env_name="SUPABASE_ANON_KEY",
        )
    )


async def start_client_container(
    gateway: AuthGateway,
    storage: KeyValueStorage,
    color_scheme: ColorSchemeSource,
    document: DocumentRoot | None = None,
) -> ClientContainer:
    """Build the client state objects and load the initial session."""
    session_provider = SessionProvider(gateway)
    container = ClientContainer(
        session_provider=session_provider,
        currency=CurrencyPreference(storage),
        theme=ThemePreference(storage, color_scheme, document),
        csrf=CsrfTokenService(storage),
    )
    await session_provider.start()
    return container


def build_client_storage(settings: Settings | None = None) -> KeyValueStorage:
    """Create the file-backed store for preferences and the CSRF token."""
    resolved_settings = settings or Settings()
    return JsonFileStorage(Path(resolved_settings.client_state_path))


async def start_client(
    color_scheme: ColorSchemeSource,
    settings: Settings | None = None,
    document: DocumentRoot | None = None,
) -> ClientContainer:
    """Start the client state objects against Supabase and local file storage."""
    resolved_settings = settings or Settings()
    return await start_client_container(
        build_client_gateway(resolved_settings),
        build_client_storage(resolved_settings),
        color_scheme,
        document,
    )
