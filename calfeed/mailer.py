"""Outbound mail for magic-link delivery."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from calfeed.exceptions import DeliveryError

logger = logging.getLogger(__name__)

RESEND_BASE_URL = "https://api.resend.com"


@dataclass
class MailMessage:
    """A single outbound message."""

    to: str
    subject: str
    html_body: str


class Mailer(Protocol):
    """Protocol for mail dispatchers."""

    def send(self, message: MailMessage) -> None:
        """Deliver the message or raise DeliveryError."""
        ...


class ResendMailer:
    """Mailer backed by the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.from_email = from_email
        self.client = client or httpx.Client(
            base_url=RESEND_BASE_URL,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    def send(self, message: MailMessage) -> None:
        payload = {
            "from": self.from_email,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html_body,
        }
        try:
            response = self.client.post("/emails", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryError(
                f"Email API error: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise DeliveryError(f"Email API unreachable: {e}") from e
        logger.info(f"Email sent to {message.to} (status {response.status_code})")


class LogMailer:
    """Mailer that only logs messages. For local development."""

    def send(self, message: MailMessage) -> None:
        logger.warning(
            f"Email delivery disabled; message for {message.to}: {message.subject}\n"
            f"{message.html_body}"
        )
