from datetime import datetime, timedelta, timezone

import pytest

from calfeed import create_app
from calfeed.auth.issuer import CredentialIssuer
from calfeed.auth.verifier import CredentialVerifier
from calfeed.config import FeedConfig
from calfeed.context import ServiceContext
from calfeed.exceptions import DeliveryError
from calfeed.storage.auth_repository import AuthRepository
from calfeed.storage.calendar_repository import CalendarRepository
from calfeed.storage.database import Database

SECRET = "test-secret-key-with-enough-length-for-hs256"


class FakeClock:
    """Controllable replacement for the UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class RecordingMailer:
    """Mailer that keeps sent messages in memory."""

    def __init__(self):
        self.messages = []

    def send(self, message) -> None:
        self.messages.append(message)


class FailingMailer:
    """Mailer whose dispatcher always rejects the message."""

    def send(self, message) -> None:
        raise DeliveryError("Email API error: 503 - unavailable")


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def failing_mailer():
    return FailingMailer()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def config(tmp_path):
    return FeedConfig(
        database_url=f"sqlite:///{tmp_path / 'calfeed.db'}",
        session_secret=SECRET,
        backend_base_url="https://api.example.com",
        frontend_url="https://app.example.com",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def database(config):
    db = Database(config.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def calendars(database):
    return CalendarRepository(database)


@pytest.fixture
def auth_repository(database):
    return AuthRepository(database)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def issuer(auth_repository, mailer, clock):
    return CredentialIssuer(
        auth_repository,
        mailer,
        secret=SECRET,
        backend_base_url="https://api.example.com",
        clock=clock,
    )


@pytest.fixture
def verifier(auth_repository, clock):
    return CredentialVerifier(auth_repository, secret=SECRET, clock=clock)


@pytest.fixture
def context(config, database, mailer):
    return ServiceContext(config=config, database=database, mailer=mailer)


@pytest.fixture
def app(context):
    """Create and configure a Flask app for testing."""
    app = create_app(context)
    app.config.update({"TESTING": True})
    return app


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()
