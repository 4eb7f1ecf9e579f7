"""Pydantic models for handler request bodies."""

from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from zimbabwe_shipping.services.pricing import PackageType


class RequestModel(BaseModel):
    """Base for camelCase JSON bodies that also accept field names."""

    model_config = ConfigDict(populate_by_name=True)


class CreatePaymentRequest(RequestModel):
    """Checkout request; ``amount`` is in pence."""

    amount: int
    booking_data: dict[str, object] = Field(alias="bookingData")
    payment_method: str = Field(default="card", alias="paymentMethod")


class CreateShipmentRequest(RequestModel):
    shipment_data: dict[str, object] = Field(alias="shipmentData")


class GenerateMfaSecretRequest(RequestModel):
    user_id: UUID | None = Field(default=None, alias="userId")


class EnableMfaRequest(RequestModel):
    user_id: UUID | None = Field(default=None, alias="userId")
    secret: str | None = None


class VerifyMfaCodeRequest(RequestModel):
    user_id: UUID | None = Field(default=None, alias="userId")
    secret: str | None = None
    token: str | None = None


class VerifyMfaLoginRequest(RequestModel):
    user_id: UUID | None = Field(default=None, alias="userId")
    token: str | None = None


class SendEmailRequest(RequestModel):
    type: str
    email: EmailStr
    token: str | None = None
    redirect_to: str | None = None

    @field_validator("email", mode="wrap")
    @classmethod
    def check_email(cls, value: object, handler: ValidatorFunctionWrapHandler) -> str:
        try:
            return handler(value)
        except ValidationError as exc:
            raise ValueError("Invalid email format") from exc


class AnnouncementNotificationRequest(RequestModel):
    announcement_id: UUID | None = None


class SupportNotificationRequest(RequestModel):
    ticket_id: UUID | None = Field(default=None, alias="ticketId")
    user_id: UUID | None = Field(default=None, alias="userId")
    message_preview: str = Field(default="", alias="messagePreview")



class VerifyPaymentRequest(RequestModel):
    session_id: str | None = None
    payment_id: UUID | None = None


class QuoteRequest(RequestModel):
    """Price enquiry; ``weight`` is only required for parcels."""

    package_type: PackageType = Field(default=PackageType.PARCEL, alias="packageType")
    weight: float | None = None
    origin: str = "uk"
    destination: str = "zw"
    express: bool = False
    insurance: bool = False
    fragile: bool = False
