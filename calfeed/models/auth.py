"""Authentication models: magic links, users and session claims."""

from datetime import datetime, timezone

from pydantic import BaseModel, field_validator

from calfeed.exceptions import ValidationError


def normalize_email(email: str | None) -> str:
    """Lowercase and strip an email address.

    Returns an empty string for missing input so callers can decide how
    to report it. Anything other than a string is rejected.
    """
    if not email:
        return ""
    if not isinstance(email, str):
        raise ValidationError("A valid email is required")
    return email.strip().lower()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class MagicLink(BaseModel):
    """Single-use, time-limited login token."""

    token: str
    email: str
    created_at: datetime
    expires_at: datetime
    used: bool = False
    used_at: datetime | None = None

    @field_validator("created_at", "expires_at", "used_at")
    @classmethod
    def ensure_utc(cls, v):
        if v is None:
            return None
        return as_utc(v)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < as_utc(now)


class User(BaseModel):
    """Email identity, created implicitly on the first magic-link request."""

    email: str
    created_at: datetime
    last_login_at: datetime | None = None


class SessionClaims(BaseModel):
    """Decoded session token payload."""

    email: str
    issued_at: datetime
    expires_at: datetime
