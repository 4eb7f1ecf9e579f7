"""Form models validated before any request leaves the client."""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")
POSTAL_CODE_PATTERN = r"^[a-zA-Z0-9\s-]{3,10}$"
DIMENSIONS_PATTERN = r"^\d+x\d+x\d+$"
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")

MIN_PASSWORD_LENGTH = 8

FormT = TypeVar("FormT", bound=BaseModel)

_EMAIL = TypeAdapter(EmailStr)
_LOCATION_SECTIONS = {"body", "query", "path", "header"}
_CUSTOM_MESSAGES = {
    ("postal_code", "string_pattern_mismatch"): "Please enter a valid postal code",
    ("dimensions", "string_pattern_mismatch"): (
        "Dimensions should be in format LxWxH (e.g., 10x5x3)"
    ),
}


class ValidationError(ValueError):
    """Raised with field-level messages when form input is malformed."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(
            "; ".join(f"{key}: {value}" for key, value in errors.items())
        )
        self.errors = errors


@dataclass(frozen=True)
class PasswordCheck:
    is_valid: bool
    message: str


def field_errors(errors: list[dict[str, object]]) -> dict[str, str]:
    """Flatten pydantic error details into ``{field: message}``.

    The first message per field is kept. Request section prefixes such as
    ``body`` are dropped from the location.
    """
    flattened: dict[str, str] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_SECTIONS:
            location = location[1:]
        name = ".".join(location) or "body"
        message = str(error.get("msg", "Invalid value"))
        message = message.removeprefix("Value error, ")
        message = _CUSTOM_MESSAGES.get((name, str(error.get("type"))), message)
        flattened.setdefault(name, message)
    return flattened


def parse_form(model: type[FormT], data: Mapping[str, object]) -> FormT:
    """Validate ``data`` against ``model`` or raise :class:`ValidationError`."""
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc.errors())) from exc


def is_valid_email(email: str) -> bool:
    try:
        _EMAIL.validate_python(email)
    except PydanticValidationError:
        return False
    return True


def is_valid_phone_number(phone: str) -> bool:
    """Accept 10-15 digits with an optional leading plus."""
    cleaned = re.sub(r"[\s\-()]", "", phone)
    return bool(PHONE_PATTERN.match(cleaned))


def validate_password_strength(password: str) -> PasswordCheck:
    """Require length plus upper, lower, digit and special characters."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return PasswordCheck(
            False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    requirements = [
        (re.search(r"[A-Z]", password), "uppercase letter"),
        (re.search(r"[a-z]", password), "lowercase letter"),
        (re.search(r"[0-9]", password), "number"),
        (SPECIAL_CHARACTERS.search(password), "special character"),
    ]
    missing = [label for matched, label in requirements if not matched]
    if missing:
        return PasswordCheck(
            False, f"Password must include at least one {', '.join(missing)}"
        )
    return PasswordCheck(True, "Password meets strength requirements")


def sanitize_input(value: str) -> str:
    """Escape characters that could inject markup."""
    return (
        value.replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


class AddressForm(BaseModel):
    """Address book form."""

    model_config = ConfigDict(str_strip_whitespace=True, validate_default=True)

    address_name: str | None = None
    recipient_name: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = Field(default=None, pattern=POSTAL_CODE_PATTERN)
    country: str | None = None
    phone_number: str | None = None
    is_default: bool = False

    @field_validator("street_address")
    @classmethod
    def check_street(cls, value: str | None) -> str:
        if not value or len(value) < 3:
            raise ValueError(
                "Street address is required and must be at least 3 characters"
            )
        return value

    @field_validator("city")
    @classmethod
    def check_city(cls, value: str | None) -> str:
        if not value or len(value) < 2:
            raise ValueError("City is required and must be at least 2 characters")
        return value

    @field_validator("country")
    @classmethod
    def check_country(cls, value: str | None) -> str:
        if not value or len(value) < 2:
            raise ValueError("Country is required")
        return value

    @field_validator("recipient_name")
    @classmethod
    def check_recipient(cls, value: str | None) -> str:
        if not value:
            raise ValueError("Recipient name is required")
        return value

    @field_validator("postal_code", mode="before")
    @classmethod
    def blank_postal_code(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, value: str | None) -> str | None:
        if value and not is_valid_phone_number(value):
            raise ValueError("Please enter a valid phone number")
        return value


class ReviewForm(BaseModel):
    rating: int
    comment: str = ""
    shipment_id: UUID | None = None

    @field_validator("rating")
    @classmethod
    def check_rating(cls, value: int) -> int:
        if not 1 <= value <= 5:
            raise ValueError("Rating must be between 1 and 5")
        return value

    @field_validator("comment")
    @classmethod
    def check_comment(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please write a short comment")
        return value.strip()


class ShippingDetails(BaseModel):
    """Parcel weight in kilograms and optional ``LxWxH`` dimensions."""

    model_config = ConfigDict(validate_default=True)

    weight: float | None = None
    dimensions: str | None = Field(default=None, pattern=DIMENSIONS_PATTERN)

    @field_validator("weight")
    @classmethod
    def check_weight(cls, value: float | None) -> float:
        if value is None or math.isnan(value) or value <= 0:
            raise ValueError("Please enter a valid weight")
        return value


def validate_address(data: Mapping[str, object]) -> AddressForm:
    return parse_form(AddressForm, data)


def validate_review(data: Mapping[str, object]) -> ReviewForm:
    return parse_form(ReviewForm, data)


def validate_shipping_details(
    weight: float | None, dimensions: str | None = None
) -> ShippingDetails:
    """Validate parcel weight and optional dimensions."""
    return parse_form(ShippingDetails, {"weight": weight, "dimensions": dimensions})
