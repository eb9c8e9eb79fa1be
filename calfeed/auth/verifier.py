"""Credential verification: magic-link exchange and session checks."""

import logging
from datetime import datetime, timezone
from typing import Callable

import jwt

from calfeed.auth.issuer import SESSION_TOKEN_TYPE, SIGNING_ALGORITHM
from calfeed.exceptions import (
    InvalidTokenError,
    MagicLinkNotFoundError,
    StorageError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    UnauthenticatedError,
)
from calfeed.models.auth import SessionClaims, utcnow
from calfeed.storage.auth_repository import AuthRepository

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Consumes magic links and validates session tokens."""

    def __init__(
        self,
        repository: AuthRepository,
        secret: str,
        token_issuer: str = "calfeed",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.secret = secret
        self.token_issuer = token_issuer
        self.clock = clock

    def consume_magic_link(self, token: str | None) -> str:
        """
        Exchange a magic-link token for the email it was issued to.

        At most one call succeeds per token, also under concurrency.

        Raises:
            MagicLinkNotFoundError: No unused link matches the token
            TokenExpiredError: The link is past its expiry
            TokenAlreadyUsedError: A concurrent request consumed it first
        """
        if not token:
            raise MagicLinkNotFoundError("Invalid or already used link")

        link = self.repository.find_unused_magic_link(token)
        if link is None:
            raise MagicLinkNotFoundError("Invalid or already used link")

        now = self.clock()
        if link.is_expired(now):
            raise TokenExpiredError("Link has expired")

        if not self.repository.mark_magic_link_used(token, now):
            raise TokenAlreadyUsedError("Invalid or already used link")

        try:
            self.repository.record_login(link.email, now)
        except StorageError as e:
            # Login bookkeeping is best effort once the link is spent
            logger.warning(f"Could not record login for {link.email}: {e}")

        logger.info(f"Magic link verified for {link.email}")
        return link.email

    def decode_session(self, token: str | None) -> SessionClaims:
        """Validate a session token and return its claims. No storage access."""
        if not token:
            raise UnauthenticatedError("Not authenticated")

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[SIGNING_ALGORITHM],
                issuer=self.token_issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat", "sub"],
                },
            )
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if payload.get("type") != SESSION_TOKEN_TYPE or not payload.get("email"):
            raise InvalidTokenError("Invalid token type")

        try:
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidTokenError(f"Invalid token timestamps: {e}") from e

        if self.clock() >= expires_at:
            raise TokenExpiredError("Token has expired")

        return SessionClaims(
            email=payload["email"], issued_at=issued_at, expires_at=expires_at
        )

    def verify_session(self, token: str | None) -> str:
        """Validate a session token and return the embedded email."""
        return self.decode_session(token).email

    def session_from_header(self, authorization: str | None) -> str:
        """Validate an ``Authorization: Bearer <token>`` header value."""
        if not authorization or not authorization.strip():
            raise UnauthenticatedError("Not authenticated")
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise InvalidTokenError("Expected a Bearer token")
        return self.verify_session(token.strip())
