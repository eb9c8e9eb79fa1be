"""Configuration for the calendar feed service."""

import logging
import os
import secrets
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

try:
    from dotenv import load_dotenv
except ImportError:
    load_dotenv = None

logger = logging.getLogger(__name__)


class FeedConfig(BaseModel):
    """Service configuration with Pydantic validation."""

    # Storage
    database_url: str = Field(default="sqlite:///data/calfeed.db")
    db_timeout: float = Field(default=5.0, gt=0)

    # Auth
    session_secret: str | None = None
    session_ttl_days: int = Field(default=7, ge=1)
    magic_link_ttl_minutes: int = Field(default=15, ge=1)
    token_issuer: str = Field(default="calfeed")

    # URLs
    backend_base_url: str = Field(default="http://localhost:3000")
    frontend_url: str = Field(default="http://localhost:5173")
    cors_origin: str | None = None

    # Mail
    resend_api_key: str | None = None
    mail_from: str = Field(default="noreply@calendar-app.com")
    http_timeout: float = Field(default=10.0, gt=0)

    # Feed
    product_id: str = Field(default="-//Calendar App//Calfeed//EN")
    uid_domain: str = Field(default="calendar-app.com")

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="calfeed.log")

    @model_validator(mode="after")
    def resolve_session_secret(self) -> "FeedConfig":
        """Generate a signing secret when none is configured.

        Runs once at construction so every component built from this
        config signs and verifies with the same key.
        """
        if not self.session_secret:
            logger.warning(
                "No SESSION_SECRET provided - using generated secret. "
                "Sessions will not survive a restart."
            )
            self.session_secret = secrets.token_urlsafe(64)
        return self

    def signing_secret(self) -> str:
        """Return the session signing secret."""
        return self.session_secret

    @classmethod
    def from_env(cls) -> "FeedConfig":
        """Load configuration from environment variables and .env file."""
        if load_dotenv is not None:
            load_dotenv()

        config_dict = {}

        # Plain string settings
        for env_name, field_name in (
            ("DATABASE_URL", "database_url"),
            ("SESSION_SECRET", "session_secret"),
            ("TOKEN_ISSUER", "token_issuer"),
            ("BACKEND_BASE_URL", "backend_base_url"),
            ("FRONTEND_URL", "frontend_url"),
            ("CORS_ORIGIN", "cors_origin"),
            ("RESEND_API_KEY", "resend_api_key"),
            ("MAIL_FROM", "mail_from"),
            ("PRODUCT_ID", "product_id"),
            ("UID_DOMAIN", "uid_domain"),
            ("LOG_FILENAME", "log_filename"),
        ):
            if env_name in os.environ:
                config_dict[field_name] = os.environ[env_name]

        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])

        # Numeric settings
        for env_name, field_name, cast in (
            ("SESSION_TTL_DAYS", "session_ttl_days", int),
            ("MAGIC_LINK_TTL_MINUTES", "magic_link_ttl_minutes", int),
            ("HTTP_TIMEOUT", "http_timeout", float),
            ("DB_TIMEOUT", "db_timeout", float),
        ):
            if env_name in os.environ:
                try:
                    config_dict[field_name] = cast(os.environ[env_name])
                except ValueError:
                    logger.warning(f"Ignoring invalid {env_name}: {os.environ[env_name]!r}")

        return cls(**config_dict)
