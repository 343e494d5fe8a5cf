"""Error kinds raised across the counselor stack.

Only ``ConfigurationError`` is fatal; the other two are recovered by the
conversation controller and turned into an apologetic bot message.
"""

from __future__ import annotations


class CareerCompassError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(CareerCompassError):
    """The provider credential is missing or a setting is invalid."""


class InitializationError(CareerCompassError):
    """A chat session could not be created for a non-credential reason."""


class TransportError(CareerCompassError):
    """Sending a turn or reading its streamed reply failed."""
