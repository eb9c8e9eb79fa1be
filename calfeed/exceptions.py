"""Exception hierarchy for calendar feed operations."""


class CalfeedError(Exception):
    """Base exception for calendar feed operations."""

    pass


class ValidationError(CalfeedError):
    """Missing or malformed input."""

    pass


class NotFoundError(CalfeedError):
    """Requested record does not exist."""

    pass


class CalendarNotFoundError(NotFoundError):
    """Calendar not found (or not owned by the caller)."""

    pass


class EventNotFoundError(NotFoundError):
    """Event not found in the calendar."""

    pass


class MagicLinkNotFoundError(NotFoundError):
    """No unused magic link matches the token."""

    pass


class TokenAlreadyUsedError(MagicLinkNotFoundError):
    """Magic link was consumed by a concurrent request."""

    pass


class AuthenticationError(CalfeedError):
    """Base exception for credential failures."""

    pass


class UnauthenticatedError(AuthenticationError):
    """No credential was supplied."""

    pass


class InvalidTokenError(AuthenticationError):
    """Credential is malformed or its signature does not match."""

    pass


class TokenExpiredError(AuthenticationError):
    """Credential is past its expiry."""

    pass


class DeliveryError(CalfeedError):
    """Mail dispatcher rejected the message."""

    pass


class StorageError(CalfeedError):
    """Store collaborator failure."""

    pass


class RemoteFetchError(CalfeedError):
    """Upstream calendar feed could not be fetched or parsed."""

    pass
