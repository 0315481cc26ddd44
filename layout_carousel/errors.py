"""Exceptions raised by the layout carousel.

Every error the command line reports to the user derives from
``CarouselError``; ``StateLoadError`` is the only one recovered from
internally (by falling back to a fresh default state).
"""

from __future__ import annotations


class CarouselError(Exception):
    """Base class for all layout carousel errors."""


class InvalidRunError(CarouselError):
    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "You're running this application either as root or as another "
               "user that don't have home directory."
        )


class IpcError(CarouselError):
    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "There's something wrong with niri IPC. Check your application and niri version."
        )


class IncorrectMaxDurationError(CarouselError, ValueError):
    def __init__(self, max_duration: float):
        self.max_duration = max_duration
        super().__init__(
            "Invalid passed max duration to set. Required to be in range "
            f"[0.2; 1.0), but given {max_duration}"
        )


class StateLoadError(CarouselError):
    """Persisted state is missing, unreadable or malformed."""


class StateLockError(CarouselError):
    """Another invocation holds the state lock for too long."""
