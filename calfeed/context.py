"""Shared service context with lazy-initialized dependencies."""

from datetime import timedelta

from calfeed.auth.issuer import CredentialIssuer
from calfeed.auth.verifier import CredentialVerifier
from calfeed.config import FeedConfig
from calfeed.ingestion.ics_reader import ICSFeedSource, RemoteEventSource
from calfeed.ingestion.service import MirrorService
from calfeed.mailer import LogMailer, Mailer, ResendMailer
from calfeed.output.base import FeedWriter
from calfeed.output.ics_writer import ICSWriter
from calfeed.storage.auth_repository import AuthRepository
from calfeed.storage.calendar_repository import CalendarRepository
from calfeed.storage.database import Database


class ServiceContext:
    """Wires configuration, storage and the credential components together.

    Both the Flask app and the CLI build one of these. Collaborators can be
    injected for tests; anything not injected is created on first use.

    Usage:
        ctx = ServiceContext(FeedConfig.from_env())
        calendars = ctx.calendars.list_calendars()
    """

    def __init__(
        self,
        config: FeedConfig | None = None,
        database: Database | None = None,
        mailer: Mailer | None = None,
        remote_source: RemoteEventSource | None = None,
        clock=None,
    ):
        self._config = config
        self._database = database
        self._mailer = mailer
        self._remote_source = remote_source
        self._clock = clock

        self._calendars: CalendarRepository | None = None
        self._auth_repository: AuthRepository | None = None
        self._issuer: CredentialIssuer | None = None
        self._verifier: CredentialVerifier | None = None
        self._writer: FeedWriter | None = None
        self._mirror: MirrorService | None = None

    def _clock_kwargs(self) -> dict:
        return {"clock": self._clock} if self._clock is not None else {}

    @property
    def config(self) -> FeedConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = FeedConfig.from_env()
        return self._config

    @property
    def database(self) -> Database:
        if self._database is None:
            self._database = Database(self.config.database_url, timeout=self.config.db_timeout)
        return self._database

    @property
    def mailer(self) -> Mailer:
        if self._mailer is None:
            if self.config.resend_api_key:
                self._mailer = ResendMailer(
                    self.config.resend_api_key,
                    self.config.mail_from,
                    timeout=self.config.http_timeout,
                )
            else:
                self._mailer = LogMailer()
        return self._mailer

    @property
    def remote_source(self) -> RemoteEventSource:
        if self._remote_source is None:
            self._remote_source = ICSFeedSource(timeout=self.config.http_timeout)
        return self._remote_source

    @property
    def calendars(self) -> CalendarRepository:
        if self._calendars is None:
            self._calendars = CalendarRepository(self.database, **self._clock_kwargs())
        return self._calendars

    @property
    def auth_repository(self) -> AuthRepository:
        if self._auth_repository is None:
            self._auth_repository = AuthRepository(self.database)
        return self._auth_repository

    @property
    def issuer(self) -> CredentialIssuer:
        if self._issuer is None:
            self._issuer = CredentialIssuer(
                self.auth_repository,
                self.mailer,
                secret=self.config.signing_secret(),
                backend_base_url=self.config.backend_base_url,
                token_issuer=self.config.token_issuer,
                magic_link_ttl=timedelta(minutes=self.config.magic_link_ttl_minutes),
                session_ttl=timedelta(days=self.config.session_ttl_days),
                **self._clock_kwargs(),
            )
        return self._issuer

    @property
    def verifier(self) -> CredentialVerifier:
        if self._verifier is None:
            self._verifier = CredentialVerifier(
                self.auth_repository,
                secret=self.config.signing_secret(),
                token_issuer=self.config.token_issuer,
                **self._clock_kwargs(),
            )
        return self._verifier

    @property
    def writer(self) -> FeedWriter:
        if self._writer is None:
            self._writer = ICSWriter(
                product_id=self.config.product_id, uid_domain=self.config.uid_domain
            )
        return self._writer

    @property
    def mirror(self) -> MirrorService:
        if self._mirror is None:
            self._mirror = MirrorService(self.calendars, self.remote_source)
        return self._mirror
