"""
Error taxonomy for caption generation.

Each error carries the HTTP status it maps to and the message that is safe
to show the caller. Server-side details for 5xx errors go to the logs only.
"""

from __future__ import annotations

from typing import Any


class CaptionGeniusError(Exception):
    """Base class for errors rendered by the API exception handler."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.public_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.public_message}


class ClientError(CaptionGeniusError):
    """4xx errors echo their message back to the caller."""

    status_code = 400

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(ClientError):
    """Raised when a generation request is malformed."""

    status_code = 400


class Unauthenticated(ClientError):
    """Raised when no valid session accompanies the request."""

    status_code = 401
    public_message = "Unauthorized - Please sign in first"


class ProviderUnauthorized(CaptionGeniusError):
    """Raised when the completion provider rejects our credentials."""

    status_code = 401
    public_message = "Invalid OpenAI API key"


class InsufficientCredits(ClientError):
    """Raised when a metered user has no credits left."""

    status_code = 402
    public_message = "Insufficient credits"

    def __init__(self, balance: int) -> None:
        self.balance = balance
        super().__init__(f"Insufficient credits. Balance: {balance}")

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.public_message, "credits_remaining": self.balance}


class QuotaExceeded(ClientError):
    """Raised when the rolling-window generation quota is used up."""

    status_code = 429

    def __init__(self, *, used: int, quota: int, window_hours: int) -> None:
        self.used = used
        self.quota = quota
        self.window_hours = window_hours
        super().__init__(
            f"Daily caption limit reached ({used}/{quota} in the last {window_hours}h)"
        )

    @property
    def remaining(self) -> int:
        return max(self.quota - self.used, 0)

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "quota": self.quota,
            "used": self.used,
            "remaining": self.remaining,
            "window_hours": self.window_hours,
        }


class InvalidNiche(ClientError):
    """Raised when the niche name does not match any active niche."""

    status_code = 400

    def __init__(self, niche: str) -> None:
        self.niche = niche
        super().__init__(f"Unknown niche: {niche}")


class GenerationFailed(CaptionGeniusError):
    """Raised when the provider answered without usable caption text."""

    public_message = "Failed to generate caption"


class ProviderNotConfigured(CaptionGeniusError):
    """Raised when no provider credential is configured."""

    public_message = "OpenAI API key is not configured"


class ProviderError(CaptionGeniusError):
    """Raised for any unclassified completion provider fault."""

    public_message = "Failed to generate caption"


class UsageLookupFailed(CaptionGeniusError):
    """Raised when usage counts or the credit balance cannot be read."""

    public_message = "Unable to verify usage limits"


class ConfigurationLookupFailed(CaptionGeniusError):
    """Raised when the caller's active AI configuration cannot be read."""

    public_message = "Unable to load AI configuration"


class CaptionPersistFailed(CaptionGeniusError):
    """Raised when the generated caption cannot be stored."""

    public_message = "Failed to save caption"
