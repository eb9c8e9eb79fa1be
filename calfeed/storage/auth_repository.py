"""Repository for magic links and users."""

import logging
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite

from calfeed.models.auth import MagicLink, User, as_utc
from calfeed.storage.database import Database
from calfeed.storage.schema import MagicLinkRecord, UserRecord

logger = logging.getLogger(__name__)


def _to_magic_link(record: MagicLinkRecord) -> MagicLink:
    return MagicLink(
        token=record.token,
        email=record.email,
        created_at=record.created_at,
        expires_at=record.expires_at,
        used=record.used,
        used_at=record.used_at,
    )


class AuthRepository:
    """Persistence for the magic-link login flow."""

    def __init__(self, database: Database):
        self.database = database

    def _insert(self):
        # Both dialects expose INSERT ... ON CONFLICT
        if self.database.dialect == "postgresql":
            return postgresql.insert(UserRecord)
        return sqlite.insert(UserRecord)

    def save_magic_link(self, link: MagicLink) -> None:
        with self.database.session() as session:
            session.add(
                MagicLinkRecord(
                    token=link.token,
                    email=link.email,
                    created_at=link.created_at,
                    expires_at=link.expires_at,
                    used=link.used,
                    used_at=link.used_at,
                )
            )

    def find_unused_magic_link(self, token: str) -> MagicLink | None:
        """Find the magic link with this token that has not been used."""
        with self.database.session() as session:
            record = session.scalars(
                select(MagicLinkRecord).where(
                    MagicLinkRecord.token == token,
                    MagicLinkRecord.used.is_(False),
                )
            ).one_or_none()
            return _to_magic_link(record) if record else None

    def mark_magic_link_used(self, token: str, now: datetime) -> bool:
        """
        Mark the link used if it is currently unused.

        Returns:
            True for exactly one caller per token
        """
        with self.database.session() as session:
            result = session.execute(
                update(MagicLinkRecord)
                .where(
                    MagicLinkRecord.token == token,
                    MagicLinkRecord.used.is_(False),
                )
                .values(used=True, used_at=now)
            )
            return result.rowcount == 1

    def purge_expired_magic_links(self, before: datetime) -> int:
        """Delete links that expired before the cutoff. Returns the count."""
        with self.database.session() as session:
            result = session.execute(
                delete(MagicLinkRecord).where(MagicLinkRecord.expires_at < before)
            )
            count = result.rowcount
        logger.info(f"Purged {count} expired magic links")
        return count

    def ensure_user(self, email: str, now: datetime) -> None:
        """Create the user if absent; no-op otherwise."""
        stmt = (
            self._insert()
            .values(email=email, created_at=now)
            .on_conflict_do_nothing(index_elements=["email"])
        )
        with self.database.session() as session:
            session.execute(stmt)

    def record_login(self, email: str, now: datetime) -> None:
        """Upsert the user and set the last-login timestamp."""
        insert = self._insert().values(email=email, created_at=now, last_login_at=now)
        stmt = insert.on_conflict_do_update(
            index_elements=["email"], set_={"last_login_at": now}
        )
        with self.database.session() as session:
            session.execute(stmt)

    def get_user(self, email: str) -> User | None:
        with self.database.session() as session:
            record = session.scalars(
                select(UserRecord).where(UserRecord.email == email)
            ).one_or_none()
            if record is None:
                return None
            return User(
                email=record.email,
                created_at=as_utc(record.created_at),
                last_login_at=as_utc(record.last_login_at) if record.last_login_at else None,
            )
