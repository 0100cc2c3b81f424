"""
Fitlead - WhatsApp Delivery.

Sends text over WhatsApp via Twilio. Messages longer than Twilio's body
limit are split into consecutive chunks and sent in order.

When Twilio isn't configured, SimulatedNotifier stands in and reports a
simulated send without contacting anything.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Protocol

from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client as TwilioClient

from fitlead.errors import DeliveryError, DeliveryPermissionError, InvalidDestinationError

logger = logging.getLogger(__name__)

# Twilio rejects message bodies longer than this
MAX_MESSAGE_LENGTH = 1600

WHATSAPP_PREFIX = "whatsapp:"

# Twilio REST error codes
ERROR_INVALID_NUMBER = 21211
ERROR_PERMISSION_DENIED = 21408

_WHITESPACE = re.compile(r"\s")


@dataclass
class DeliveryResult:
    """Outcome of a successful (or simulated) send."""
    simulated: bool = False
    sids: list[str] = field(default_factory=list)
    chunks: int = 0

    @property
    def sid(self) -> str | None:
        return self.sids[0] if self.sids else None


class Notifier(Protocol):
    def send(self, to: str, message: str) -> DeliveryResult: ...


def chunk_message(message: str, size: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Split a message into consecutive, non-overlapping chunks of at most `size` chars."""
    if size < 1:
        raise ValueError("chunk size must be positive")
    return [message[i:i + size] for i in range(0, len(message), size)]


def to_whatsapp_address(number: str) -> str:
    """Normalize a phone number into Twilio's whatsapp:+<digits> form."""
    address = _WHITESPACE.sub("", number)
    if address.startswith(WHATSAPP_PREFIX):
        return address
    return f"{WHATSAPP_PREFIX}{address}"


class SimulatedNotifier:
    """Stand-in used when Twilio credentials are missing."""

    def send(self, to: str, message: str) -> DeliveryResult:
        logger.info("Twilio not configured, simulating WhatsApp send")
        return DeliveryResult(
            simulated=True,
            sids=[f"simulated-{int(time.time() * 1000)}"],
            chunks=len(chunk_message(message)),
        )


class WhatsAppNotifier:
    """Sends WhatsApp messages through a Twilio client."""

    def __init__(self, client: TwilioClient, from_number: str):
        self.client = client
        self.from_number = to_whatsapp_address(from_number)

    @classmethod
    def from_credentials(cls, account_sid: str, auth_token: str, from_number: str) -> "WhatsAppNotifier":
        return cls(TwilioClient(account_sid, auth_token), from_number)

    def send(self, to: str, message: str) -> DeliveryResult:
        """
        Send a message, chunked to Twilio's length limit.

        Raises:
            InvalidDestinationError: Twilio rejected the number (21211)
            DeliveryPermissionError: account can't message this number (21408)
            DeliveryError: any other failure
        """
        formatted_to = to_whatsapp_address(to)
        chunks = chunk_message(message)
        sids = []

        try:
            for chunk in chunks:
                sent = self.client.messages.create(
                    body=chunk,
                    from_=self.from_number,
                    to=formatted_to,
                )
                sids.append(sent.sid)
        except TwilioRestException as e:
            logger.error(f"Error sending WhatsApp message (code {e.code}): {e.msg}")
            if e.code == ERROR_INVALID_NUMBER:
                raise InvalidDestinationError("Invalid phone number format") from e
            if e.code == ERROR_PERMISSION_DENIED:
                raise DeliveryPermissionError("Permission to send SMS has not been enabled") from e
            raise DeliveryError("Failed to send WhatsApp message") from e
        except Exception as e:
            logger.error(f"Error sending WhatsApp message: {e}")
            raise DeliveryError("Failed to send WhatsApp message") from e

        logger.info(f"Sent WhatsApp message to {formatted_to} in {len(sids)} chunk(s)")
        return DeliveryResult(simulated=False, sids=sids, chunks=len(chunks))
