"""Stripe Checkout API client."""

from dataclasses import dataclass
from urllib.parse import quote

import httpx

from zimbabwe_shipping.config import require_setting
from zimbabwe_shipping.services.payments import CheckoutGateway


class StripeError(RuntimeError):
    """Raised when Stripe rejects a request."""


@dataclass
class HttpxStripeClient(CheckoutGateway):
    """HTTPX-backed Stripe client using form-encoded requests."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str | None, base_url: str) -> "HttpxStripeClient":
        """Create a Stripe client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def create_checkout_session(
        self, params: dict[str, object]
    ) -> dict[str, object]:
        """Create a hosted checkout session."""
        api_key = require_setting(self.api_key, "STRIPE_SECRET_KEY")
        response = await self.http_client.post(
            f"{self.base_url}/checkout/sessions",
            data=encode_form(params),
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=20,
        )
        if response.is_error:
            raise StripeError(_error_message(response))
        return response.json()

    async def retrieve_checkout_session(self, session_id: str) -> dict[str, object]:
        """Fetch a checkout session to read its payment status."""
        api_key = require_setting(self.api_key, "STRIPE_SECRET_KEY")
        response = await self.http_client.get(
            f"{self.base_url}/checkout/sessions/{quote(session_id, safe='')}",
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=20,
        )
        if response.is_error:
            raise StripeError(_error_message(response))
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def encode_form(params: dict[str, object]) -> dict[str, str]:
    """Flatten nested params into Stripe's ``a[b][0]`` form keys."""
    encoded: dict[str, str] = {}
    _flatten(params, "", encoded)
    return encoded


def _flatten(value: object, prefix: str, out: dict[str, str]) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(item, f"{prefix}[{key}]" if prefix else str(key), out)
    elif isinstance(value, list | tuple):
        for index, item in enumerate(value):
            _flatten(item, f"{prefix}[{index}]", out)
    elif isinstance(value, bool):
        out[prefix] = "true" if value else "false"
    else:
        out[prefix] = str(value)


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"Stripe request failed with status {response.status_code}"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"Stripe request failed with status {response.status_code}"
