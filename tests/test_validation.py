"""Tests for form validation helpers."""

import pytest

from zimbabwe_shipping.services.validation import (
    AddressForm,
    ValidationError,
    field_errors,
    is_valid_email,
    parse_form,
    is_valid_phone_number,
    sanitize_input,
    validate_address,
    validate_password_strength,
    validate_review,
    validate_shipping_details,
)
from tests.conftest import address_form


def test_email_format() -> None:
    assert is_valid_email("customer@example.co.uk")
    assert not is_valid_email("customer@example")
    assert not is_valid_email("not an email")


def test_phone_numbers_allow_spacing_and_plus() -> None:
    assert is_valid_phone_number("+263 77 123 4567")
    assert is_valid_phone_number("(020) 7946-0958")
    assert not is_valid_phone_number("12345")


@pytest.mark.parametrize(
    ("password", "fragment"),
    [
        ("Sh0rt!", "at least 8 characters"),
        ("lowercase1!", "uppercase letter"),
        ("NoDigits!!", "number"),
        ("NoSpecial123", "special character"),
    ],
)
def test_weak_passwords_are_explained(password: str, fragment: str) -> None:
    check = validate_password_strength(password)

    assert check.is_valid is False
    assert fragment in check.message


def test_strong_password_passes() -> None:
    assert validate_password_strength("Str0ng!Pass").is_valid is True


def test_sanitize_input_escapes_markup() -> None:
    assert (
        sanitize_input("<script>alert('x')</script>")
        == "&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;"
    )


def test_valid_address_is_stripped() -> None:
    form = validate_address(address_form(city="  Harare ", postal_code=" "))

    assert form.city == "Harare"
    assert form.postal_code is None


def test_empty_address_reports_required_fields() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_address({})

    assert excinfo.value.errors == {
        "street_address": (
            "Street address is required and must be at least 3 characters"
        ),
        "city": "City is required and must be at least 2 characters",
        "country": "Country is required",
        "recipient_name": "Recipient name is required",
    }


def test_address_rejects_bad_postcode_and_phone() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_address(address_form(postal_code="!!", phone_number="call me"))

    assert excinfo.value.errors == {
        "postal_code": "Please enter a valid postal code",
        "phone_number": "Please enter a valid phone number",
    }


def test_parse_form_returns_model() -> None:
    form = parse_form(AddressForm, address_form(is_default=True))

    assert isinstance(form, AddressForm)
    assert form.is_default is True


def test_field_errors_drop_request_section() -> None:
    errors = field_errors(
        [
            {"loc": ("body", "rating"), "msg": "Value error, Too high", "type": "x"},
            {"loc": ("body", "rating"), "msg": "Second message", "type": "x"},
            {"loc": (), "msg": "Field required", "type": "missing"},
        ]
    )

    assert errors == {"rating": "Too high", "body": "Field required"}


@pytest.mark.parametrize("weight", [None, 0, -2.0, float("nan")])
def test_shipping_details_require_positive_weight(weight: float | None) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_shipping_details(weight)

    assert excinfo.value.errors == {"weight": "Please enter a valid weight"}


def test_shipping_details_dimensions() -> None:
    assert validate_shipping_details(2.5, "10x5x3").dimensions == "10x5x3"
    with pytest.raises(ValidationError) as excinfo:
        validate_shipping_details(2.5, "10 by 5")

    assert excinfo.value.errors == {
        "dimensions": "Dimensions should be in format LxWxH (e.g., 10x5x3)"
    }


def test_review_rules() -> None:
    review = validate_review({"rating": 5, "comment": " Great service "})

    assert review.comment == "Great service"
    assert review.shipment_id is None
    with pytest.raises(ValidationError) as excinfo:
        validate_review({"rating": 0, "comment": "  "})
    assert excinfo.value.errors == {
        "rating": "Rating must be between 1 and 5",
        "comment": "Please write a short comment",
    }
