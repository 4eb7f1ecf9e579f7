"""Transactional auth emails."""

import html
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from zimbabwe_shipping.services.validation import is_valid_email

logger = logging.getLogger(__name__)


class EmailClient(Protocol):
    """Interface to the transactional email provider."""

    async def send_email(
        self, sender: str, to: list[str], subject: str, html_body: str
    ) -> str | None:
        """Send an email and return the provider's message id."""


class AuthEmailType(StrEnum):
    SIGNUP = "signup"
    MAGIC_LINK = "magic_link"
    PASSWORD_RESET = "password_reset"


class EmailRequestError(ValueError):
    """Raised for an invalid address or email type."""


@dataclass(frozen=True)
class _Template:
    subject: str
    heading: str
    intro: str
    button: str
    note: str


_TEMPLATES: dict[AuthEmailType, _Template] = {
    AuthEmailType.SIGNUP: _Template(
        subject="Welcome! Confirm Your Account",
        heading="Welcome to Zimbabwe Shipping!",
        intro="Click the link below to confirm your account:",
        button="Confirm Account",
        note="If you didn't create this account, you can safely ignore this email.",
    ),
    AuthEmailType.MAGIC_LINK: _Template(
        subject="Your Magic Login Link",
        heading="Login to Zimbabwe Shipping",
        intro="Click the link below to log in:",
        button="Login Now",
        note=(
            "This link will expire in 24 hours. If you didn't request this "
            "login link, you can safely ignore this email."
        ),
    ),
    AuthEmailType.PASSWORD_RESET: _Template(
        subject="Password Reset Request",
        heading="Reset Your Password",
        intro="Click the link below to reset your password:",
        button="Reset Password",
        note=(
            "This link will expire in 24 hours. If you didn't request a "
            "password reset, you can safely ignore this email."
        ),
    ),
}

_BUTTON_STYLE = (
    "background-color: #4CAF50; color: white; padding: 14px 20px; "
    "text-align: center; text-decoration: none; display: inline-block; "
    "border-radius: 4px; margin: 10px 0;"
)


@dataclass
class EmailService:
    """Renders and sends sign-up, magic link and password reset emails."""

    client: EmailClient
    sender: str
    site_url: str

    async def send_auth_email(
        self,
        email_type: str,
        email: str,
        token: str | None = None,
        redirect_to: str | None = None,
    ) -> str | None:
        """Validate the request, render the template and send it."""
        if not is_valid_email(email):
            raise EmailRequestError("Invalid email format")
        try:
            kind = AuthEmailType(email_type)
        except ValueError as exc:
            raise EmailRequestError("Invalid email type") from exc
        link = redirect_to or self.site_url
        if token:
            link = with_query_param(link, "token", token)
        subject, body = render_auth_email(kind, link)
        message_id = await self.client.send_email(
            sender=self.sender, to=[email], subject=subject, html_body=body
        )
        logger.info(
            "Auth email sent",
            extra={"email_type": kind.value, "message_id": message_id},
        )
        return message_id


def with_query_param(url: str, name: str, value: str) -> str:
    """Set one query parameter on ``url``, keeping the others."""
    parts = urlsplit(url)
    query = [(key, item) for key, item in parse_qsl(parts.query) if key != name]
    query.append((name, value))
    return urlunsplit(parts._replace(query=urlencode(query)))


def render_auth_email(kind: AuthEmailType, link: str) -> tuple[str, str]:
    """Return the subject and HTML body for an auth email."""
    template = _TEMPLATES[kind]
    body = (
        f"<h1>{template.heading}</h1>"
        f"<p>{template.intro}</p>"
        f'<a href="{html.escape(link, quote=True)}" style="{_BUTTON_STYLE}">'
        f"{template.button}</a>"
        f"<p>{template.note}</p>"
        "<hr>"
        '<p style="font-size: 12px; color: #666;">Zimbabwe Shipping Ltd, UK</p>'
    )
    return template.subject, body
