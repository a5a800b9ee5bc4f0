"""
Errors raised by the Moodle REST client
"""

from __future__ import annotations


class MoodleRestError(ValueError):
    """Base class for every error raised by this package"""


class ConfigurationError(MoodleRestError):
    """Server address, token or output format is missing or invalid"""


class ArgumentError(MoodleRestError):
    """A call argument or configuration value was rejected"""


class TransportError(MoodleRestError):
    """The server could not be reached or did not answer"""

    def __init__(self, message: str, method: str | None = None) -> None:
        super().__init__(message)
        self.method = method
