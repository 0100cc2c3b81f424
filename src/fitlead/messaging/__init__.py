"""
Fitlead - Messaging.

WhatsApp delivery with a simulated fallback when Twilio isn't configured.
"""

from functools import lru_cache

from fitlead.messaging.whatsapp import (
    MAX_MESSAGE_LENGTH,
    DeliveryResult,
    Notifier,
    SimulatedNotifier,
    WhatsAppNotifier,
    chunk_message,
    to_whatsapp_address,
)


def build_notifier(settings) -> Notifier:
    """Real Twilio notifier when fully configured, simulated otherwise."""
    if not settings.messaging_configured:
        return SimulatedNotifier()
    return WhatsAppNotifier.from_credentials(
        settings.twilio_account_sid,
        settings.twilio_auth_token,
        settings.twilio_whatsapp_number,
    )


@lru_cache
def get_notifier() -> Notifier:
    """Get the process-wide notifier built from settings."""
    from fitlead.config import get_settings

    return build_notifier(get_settings())


__all__ = [
    "MAX_MESSAGE_LENGTH",
    "DeliveryResult",
    "Notifier",
    "SimulatedNotifier",
    "WhatsAppNotifier",
    "build_notifier",
    "chunk_message",
    "get_notifier",
    "to_whatsapp_address",
]
