"""Resend email API client."""

from dataclasses import dataclass

import httpx

from zimbabwe_shipping.config import require_setting
from zimbabwe_shipping.services.email import EmailClient


@dataclass
class HttpxResendClient(EmailClient):
    """HTTPX-backed Resend client."""

    api_key: str | None
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str | None, base_url: str) -> "HttpxResendClient":
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def send_email(
        self, sender: str, to: list[str], subject: str, html_body: str
    ) -> str | None:
        """Send an HTML email and return Resend's message id."""
        api_key = require_setting(self.api_key, "RESEND_API_KEY")
        response = await self.http_client.post(
            f"{self.base_url}/emails",
            json={"from": sender, "to": to, "subject": subject, "html": html_body},
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=15,
        )
        response.raise_for_status()
        return response.json().get("id")

    async def close(self) -> None:
        await self.http_client.aclose()
