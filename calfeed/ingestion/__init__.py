"""Ingestion of events from external calendar providers."""

from calfeed.ingestion.ics_reader import ICSFeedSource, RemoteEventSource, parse_ics_events
from calfeed.ingestion.service import MirrorService

__all__ = [
    "ICSFeedSource",
    "MirrorService",
    "RemoteEventSource",
    "parse_ics_events",
]
