"""Tests for address book and review endpoints."""

from dataclasses import dataclass
from uuid import uuid4

from fastapi.testclient import TestClient

from zimbabwe_shipping.api.app import create_app
from zimbabwe_shipping.config import ConfigurationError
from zimbabwe_shipping.services.addresses import AddressService
from tests.conftest import FakeAuthGateway, InMemoryAddressRepository, address_form


@dataclass
class UnconfiguredAuthGateway(FakeAuthGateway):
    async def get_user(self, access_token: str):  # type: ignore[no-untyped-def]
        raise ConfigurationError("SUPABASE_URL is not configured")


def test_addresses_require_bearer_token(container) -> None:
    client = TestClient(create_app(container))

    missing = client.get("/addresses")
    unknown = client.get("/addresses", headers={"Authorization": "Bearer nope"})
    wrong_scheme = client.get("/addresses", headers={"Authorization": "Basic abc"})

    assert missing.status_code == 401
    assert unknown.status_code == 401
    assert wrong_scheme.status_code == 401


def test_invalid_address_returns_field_errors(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/addresses",
        json=address_form(street_address="", phone_number="123"),
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert set(response.json()["errors"]) == {"street_address", "phone_number"}
    repository = container.address_service.repository
    assert isinstance(repository, InMemoryAddressRepository)
    assert repository.calls == []


def test_address_lifecycle(container, customer, auth_headers) -> None:
    client = TestClient(create_app(container))

    created = client.post("/addresses", json=address_form(), headers=auth_headers)
    address_id = created.json()["id"]
    updated = client.put(
        f"/addresses/{address_id}",
        json=address_form(city="Mutare"),
        headers=auth_headers,
    )
    default = client.post(f"/addresses/{address_id}/default", headers=auth_headers)
    listed = client.get("/addresses", headers=auth_headers)
    deleted = client.delete(f"/addresses/{address_id}", headers=auth_headers)
    deleted_again = client.delete(f"/addresses/{address_id}", headers=auth_headers)

    assert created.status_code == 201
    assert created.json()["user_id"] == str(customer.id)
    assert updated.json()["city"] == "Mutare"
    assert default.json()["is_default"] is True
    assert [item["id"] for item in listed.json()["addresses"]] == [address_id]
    assert deleted.json() == {"success": True}
    assert deleted_again.status_code == 404


def test_unknown_address_returns_not_found(container, auth_headers) -> None:
    client = TestClient(create_app(container))
    missing_id = uuid4()

    updated = client.put(
        f"/addresses/{missing_id}", json=address_form(), headers=auth_headers
    )
    default = client.post(f"/addresses/{missing_id}/default", headers=auth_headers)

    assert updated.status_code == 404
    assert default.status_code == 404


def test_reviews_are_public_to_read(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    anonymous_post = client.post("/reviews", json={"rating": 5, "comment": "Great"})
    invalid = client.post(
        "/reviews", json={"rating": 9, "comment": "Great"}, headers=auth_headers
    )
    created = client.post(
        "/reviews", json={"rating": 5, "comment": "Great"}, headers=auth_headers
    )
    listed = client.get("/reviews")

    assert anonymous_post.status_code == 401
    assert invalid.status_code == 422
    assert invalid.json() == {"errors": {"rating": "Rating must be between 1 and 5"}}
    assert created.status_code == 201
    assert listed.json()["reviews"][0]["comment"] == "Great"


def test_missing_backend_configuration_returns_500(container) -> None:
    container.auth_gateway = UnconfiguredAuthGateway()
    client = TestClient(create_app(container))

    response = client.get("/addresses", headers={"Authorization": "Bearer token"})

    assert response.status_code == 500
    assert response.json() == {"error": "SUPABASE_URL is not configured"}
    assert response.headers["access-control-allow-origin"] == "*"


@dataclass
class BrokenAddressRepository(InMemoryAddressRepository):
    def list_addresses(self, user_id):  # type: ignore[no-untyped-def]
        raise RuntimeError("connection reset")


def test_unhandled_error_keeps_cors_headers(container, auth_headers) -> None:
    container.address_service = AddressService(BrokenAddressRepository())
    client = TestClient(create_app(container))

    response = client.get("/addresses", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers["access-control-allow-origin"] == "*"
