from __future__ import annotations


class VaxbotError(Exception):
    """Base class for all bot errors."""


class ConfigError(VaxbotError):
    """Required configuration is missing; the bot must not start."""


class NetworkError(VaxbotError):
    """A stats API could not be reached."""


class ExtractionError(VaxbotError):
    """A stats API response is missing a field or has the wrong shape."""


class SendError(VaxbotError):
    """A reply or edit could not be delivered to the chat."""
