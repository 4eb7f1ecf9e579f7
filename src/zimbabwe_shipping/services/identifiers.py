"""Identifier helpers."""

import secrets
from datetime import UTC, datetime
from uuid import uuid4

TRACKING_PREFIX = "ZIMSHIP-"
RECEIPT_PREFIX = "R-"


def generate_unique_id(prefix: str | None = None) -> str:
    """Return a UUID4 string, optionally prefixed."""
    value = str(uuid4())
    return f"{prefix}{value}" if prefix else value


def generate_tracking_number() -> str:
    """Return a tracking number of the form ZIMSHIP-XXXXX."""
    return f"{TRACKING_PREFIX}{10000 + secrets.randbelow(90000)}"


def generate_receipt_number(now: datetime | None = None) -> str:
    """Return ``R-`` followed by the low six digits of the epoch milliseconds."""
    moment = now or datetime.now(tz=UTC)
    millis = round(moment.timestamp() * 1000)
    return f"{RECEIPT_PREFIX}{millis % 1_000_000:06d}"
