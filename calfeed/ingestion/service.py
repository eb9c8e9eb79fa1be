"""Mirroring of upstream calendar events into local storage."""

import logging

from calfeed.exceptions import RemoteFetchError, StorageError
from calfeed.ingestion.ics_reader import RemoteEventSource
from calfeed.storage.calendar_repository import CalendarRepository

logger = logging.getLogger(__name__)


class MirrorService:
    """Copies events from a remote provider into a calendar.

    Events already mirrored (matched by upstream UID) are skipped; local
    edits are never reconciled against the provider.
    """

    def __init__(self, repository: CalendarRepository, source: RemoteEventSource):
        self.repository = repository
        self.source = source

    def mirror(self, calendar_id: str, source_url: str) -> int:
        """
        Import new upstream events into the calendar.

        Returns:
            Number of events added

        Raises:
            CalendarNotFoundError: If the calendar does not exist
            RemoteFetchError: If the upstream feed cannot be read
            StorageError: If events cannot be stored
        """
        remote_events = self.source.fetch_remote_events(source_url)
        known = self.repository.external_uids(calendar_id)

        added = 0
        for event in remote_events:
            if event.external_uid and event.external_uid in known:
                continue
            self.repository.add_event(calendar_id, event)
            if event.external_uid:
                known.add(event.external_uid)
            added += 1

        logger.info(
            f"Mirrored {added} of {len(remote_events)} events from {source_url} "
            f"into {calendar_id}"
        )
        return added

    def mirror_best_effort(self, calendar_id: str, source_url: str) -> int | None:
        """Mirror, logging failures instead of raising.

        Used after a calendar was created, where a mirroring failure must
        not undo the creation. Returns None when mirroring failed.
        """
        try:
            return self.mirror(calendar_id, source_url)
        except (RemoteFetchError, StorageError) as e:
            logger.warning(
                f"Calendar {calendar_id} created but mirroring {source_url} failed: {e}"
            )
            return None
