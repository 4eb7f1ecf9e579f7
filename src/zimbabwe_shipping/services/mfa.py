"""Time-based one-time password enrollment and verification."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote
from uuid import UUID

import pyotp

from zimbabwe_shipping.domain.profiles import MfaProfile
from zimbabwe_shipping.services.audit import AuditService
from zimbabwe_shipping.services.encryption import decrypt_value, encrypt_value

logger = logging.getLogger(__name__)

QR_CODE_ENDPOINT = "https://api.qrserver.com/v1/create-qr-code/"
QR_CODE_SIZE = "200x200"
SECRET_BYTES = 20
VALID_WINDOW = 1


class ProfileRepository(Protocol):
    """Persistence interface for MFA fields on user profiles."""

    def get_mfa_profile(self, user_id: UUID) -> MfaProfile | None:
        """Return MFA state for a profile, if the profile exists."""

    def enable_mfa(self, user_id: UUID, secret: str) -> None:
        """Mark MFA enabled and store the (possibly encrypted) secret."""


class ProfileNotFoundError(LookupError):
    """Raised when no profile exists for a user id."""


@dataclass(frozen=True)
class MfaEnrollment:
    secret: str
    qr_code: str


@dataclass(frozen=True)
class MfaVerification:
    verified: bool
    message: str | None = None


@dataclass
class MfaService:
    """Issues TOTP secrets and verifies codes against them."""

    profiles: ProfileRepository
    audit: AuditService
    issuer: str
    encryption_key: str | None = None

    def generate_secret(self, user_id: UUID) -> MfaEnrollment:
        """Create a secret and a QR image URL for the authenticator app."""
        secret = pyotp.random_base32(length=SECRET_BYTES * 8 // 5)
        return MfaEnrollment(secret=secret, qr_code=self.qr_code_url(secret, user_id))

    def qr_code_url(self, secret: str, user_id: UUID) -> str:
        provisioning_uri = pyotp.TOTP(secret).provisioning_uri(
            name=str(user_id), issuer_name=self.issuer
        )
        data = quote(provisioning_uri, safe="")
        return f"{QR_CODE_ENDPOINT}?size={QR_CODE_SIZE}&data={data}"

    def enable(self, user_id: UUID, secret: str) -> None:
        """Persist the secret against the profile and audit the change."""
        stored = secret
        if self.encryption_key:
            stored = encrypt_value(secret, self.encryption_key)
        self.profiles.enable_mfa(user_id, stored)
        self.audit.record(
            user_id,
            "MFA_ENABLED",
            details={"event": "MFA enabled for user account"},
        )
        logger.info("MFA enabled", extra={"user_id": str(user_id)})

    def verify_code(self, secret: str, token: str) -> bool:
        """Check a code against the current and adjacent time steps."""
        return pyotp.TOTP(secret).verify(token.strip(), valid_window=VALID_WINDOW)

    def verify_login(self, user_id: UUID, token: str) -> MfaVerification:
        """Verify a login code using the secret stored on the profile."""
        profile = self.profiles.get_mfa_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile not found: {user_id}")
        if not profile.mfa_enabled or not profile.mfa_secret:
            return MfaVerification(
                verified=True, message="MFA not enabled for this user"
            )
        secret = profile.mfa_secret
        if self.encryption_key:
            secret = decrypt_value(secret, self.encryption_key)
        verified = self.verify_code(secret, token)
        self.audit.record(user_id, "MFA_VERIFICATION", details={"success": verified})
        return MfaVerification(verified=verified)
