"""Tests for exception classes."""

import pytest

from calfeed.exceptions import (
    AuthenticationError,
    CalendarNotFoundError,
    CalfeedError,
    DeliveryError,
    EventNotFoundError,
    InvalidTokenError,
    MagicLinkNotFoundError,
    NotFoundError,
    RemoteFetchError,
    StorageError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    UnauthenticatedError,
    ValidationError,
)
from calfeed.web.errors import status_for


def test_calfeed_error():
    """Test CalfeedError base exception."""
    error = CalfeedError("Test error")
    assert str(error) == "Test error"
    assert isinstance(error, Exception)


@pytest.mark.parametrize(
    "error_class,parent",
    [
        (CalendarNotFoundError, NotFoundError),
        (EventNotFoundError, NotFoundError),
        (MagicLinkNotFoundError, NotFoundError),
        (TokenAlreadyUsedError, MagicLinkNotFoundError),
        (UnauthenticatedError, AuthenticationError),
        (InvalidTokenError, AuthenticationError),
        (TokenExpiredError, AuthenticationError),
        (ValidationError, CalfeedError),
        (DeliveryError, CalfeedError),
        (StorageError, CalfeedError),
        (RemoteFetchError, CalfeedError),
    ],
)
def test_exception_hierarchy(error_class, parent):
    error = error_class("message")
    assert isinstance(error, parent)
    assert isinstance(error, CalfeedError)


@pytest.mark.parametrize(
    "error,status",
    [
        (ValidationError("bad"), 400),
        (UnauthenticatedError("none"), 401),
        (InvalidTokenError("bad"), 401),
        (TokenExpiredError("old"), 401),
        (CalendarNotFoundError("gone"), 404),
        (TokenAlreadyUsedError("used"), 404),
        (RemoteFetchError("down"), 502),
        (DeliveryError("rejected"), 500),
        (StorageError("broken"), 500),
        (CalfeedError("unknown"), 500),
    ],
)
def test_status_for(error, status):
    assert status_for(error) == status
