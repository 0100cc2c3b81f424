"""
Fitlead - Error taxonomy.

Every error carries the HTTP status the web layer answers with, so routes
translate them without re-deciding severity.
"""


class FitleadError(Exception):
    """Base class for all fitlead errors."""

    status_code: int = 500

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> dict:
        """Error body returned to API callers."""
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class MissingFieldError(FitleadError):
    """A required profile field is absent or empty."""

    status_code = 400

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class InvalidFieldError(FitleadError):
    """A required profile field is present but can't be parsed."""

    status_code = 400

    def __init__(self, field: str):
        super().__init__(f"Invalid value for field: {field}")
        self.field = field


class ConfigurationError(FitleadError):
    """A required external credential is absent or a known placeholder."""


class StorageError(FitleadError):
    """A Supabase read or write failed."""


class GenerationError(FitleadError):
    """The diet plan completion call failed for a non-configuration reason."""


class DeliveryError(FitleadError):
    """Sending the WhatsApp message failed."""


class InvalidDestinationError(DeliveryError):
    """The destination number was rejected by the provider."""

    status_code = 400


class DeliveryPermissionError(DeliveryError):
    """The sender account isn't allowed to message this destination."""

    status_code = 403
