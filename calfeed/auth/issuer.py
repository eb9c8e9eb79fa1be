"""Credential issuance: magic links and session tokens."""

import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Callable

import jwt

from calfeed.exceptions import DeliveryError, ValidationError
from calfeed.mailer import MailMessage, Mailer
from calfeed.models.auth import MagicLink, normalize_email, utcnow
from calfeed.storage.auth_repository import AuthRepository

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"
SIGNING_ALGORITHM = "HS256"
TOKEN_BYTES = 32  # 256 bits of entropy


def build_magic_link_message(email: str, verification_url: str, ttl_minutes: int) -> MailMessage:
    """Compose the login email."""
    html_body = (
        "<p>Click the link below to sign in to your calendars.</p>"
        f'<p><a href="{verification_url}">Sign in</a></p>'
        f"<p>This link expires in {ttl_minutes} minutes and can be used once.</p>"
    )
    return MailMessage(to=email, subject="Your sign-in link", html_body=html_body)


class CredentialIssuer:
    """Issues single-use magic links and signed session tokens."""

    def __init__(
        self,
        repository: AuthRepository,
        mailer: Mailer,
        secret: str,
        backend_base_url: str,
        token_issuer: str = "calfeed",
        magic_link_ttl: timedelta = timedelta(minutes=15),
        session_ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize issuer.

        Args:
            repository: Store for magic links and users
            mailer: Mail dispatcher used to deliver links
            secret: Symmetric session signing key
            backend_base_url: Base URL the verification link points at
            token_issuer: "iss" claim of session tokens
            magic_link_ttl: Lifetime of a magic link
            session_ttl: Lifetime of a session token
            clock: Returns the current aware UTC time
        """
        self.repository = repository
        self.mailer = mailer
        self.secret = secret
        self.backend_base_url = backend_base_url.rstrip("/")
        self.token_issuer = token_issuer
        self.magic_link_ttl = magic_link_ttl
        self.session_ttl = session_ttl
        self.clock = clock

    def verification_url(self, token: str) -> str:
        return f"{self.backend_base_url}/auth/verify/{token}"

    def request_magic_link(self, email: str | None) -> MagicLink:
        """
        Create, persist and email a magic link.

        Issuance and delivery are separate steps: when delivery fails the
        link stays stored and usable until it expires, and DeliveryError is
        raised. Store failures surface as StorageError.

        Raises:
            ValidationError: If the email is missing or malformed
            StorageError: If the link or user could not be stored
            DeliveryError: If the mail dispatcher rejected the message
        """
        email = normalize_email(email)
        if not email or "@" not in email:
            raise ValidationError("A valid email is required")

        now = self.clock()
        link = MagicLink(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            email=email,
            created_at=now,
            expires_at=now + self.magic_link_ttl,
        )
        self.repository.save_magic_link(link)
        self.repository.ensure_user(email, now)
        logger.info(f"Issued magic link for {email}, expires {link.expires_at.isoformat()}")

        message = build_magic_link_message(
            email,
            self.verification_url(link.token),
            int(self.magic_link_ttl.total_seconds() // 60),
        )
        try:
            self.mailer.send(message)
        except DeliveryError as e:
            logger.error(f"Failed to deliver magic link to {email}: {e}")
            raise

        return link

    def issue_session(self, email: str) -> str:
        """Mint a signed session token for an authenticated email."""
        email = normalize_email(email)
        now = self.clock()
        expires = now + self.session_ttl
        payload = {
            "iss": self.token_issuer,
            "sub": email,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
            "jti": str(uuid.uuid4()),
            "type": SESSION_TOKEN_TYPE,
        }
        token = jwt.encode(payload, self.secret, algorithm=SIGNING_ALGORITHM)
        logger.debug(f"Created session token for {email}, expires: {expires}")
        return token
