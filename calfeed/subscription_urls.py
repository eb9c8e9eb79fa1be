"""Subscription URL generator for published feeds."""

from urllib.parse import urlsplit, urlunsplit

FEED_PATH = "/api/subscriptions/{calendar_id}/feed.ics"


class SubscriptionUrlGenerator:
    """Generates the http(s) and webcal URLs of a calendar feed."""

    def __init__(self, base_url: str):
        """
        Initialize SubscriptionUrlGenerator.

        Args:
            base_url: Public base URL of this service (e.g. https://api.example.com)
        """
        self.base_url = base_url.rstrip("/")

    def feed_url(self, calendar_id: str) -> str:
        return self.base_url + FEED_PATH.format(calendar_id=calendar_id)

    def webcal_url(self, calendar_id: str) -> str:
        """Same URL with the webcal scheme, which calendar apps open as a subscription."""
        parts = urlsplit(self.feed_url(calendar_id))
        return urlunsplit(("webcal",) + tuple(parts[1:]))

    def generate(self, calendar_id: str) -> dict[str, str]:
        return {
            "subscriptionUrl": self.feed_url(calendar_id),
            "webcalUrl": self.webcal_url(calendar_id),
        }
