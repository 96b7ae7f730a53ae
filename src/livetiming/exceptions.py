"""Custom exceptions for the live timing engine."""

from __future__ import annotations


class LiveTimingError(Exception):
    """Base exception for all live timing errors."""


class TrackLengthUnavailableError(LiveTimingError):
    """Raised when the engine is started without a positive track length."""


class ClockRewindError(LiveTimingError):
    """Raised when a tick arrives with a race time lower than the previous one."""

    def __init__(self, previous: float, received: float) -> None:
        self.previous = previous
        self.received = received
        super().__init__(f"Race time went backwards: {received} < {previous}")


class RaceDataValidationError(LiveTimingError):
    """Raised when race or track-status data fails model validation."""


class ReplayConnectionError(LiveTimingError):
    """Raised when the client cannot connect to the replay data API."""


class ReplayTimeoutError(LiveTimingError):
    """Raised when a request to the replay data API times out."""


class ReplayAPIError(LiveTimingError):
    """Raised when the replay data API returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")
