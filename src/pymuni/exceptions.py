"""Custom exception hierarchy for pymuni."""

from __future__ import annotations


class MuniError(Exception):
    """Base exception for all pymuni errors."""


class MuniConfigError(MuniError):
    """Invalid or missing configuration."""


class FeedError(MuniError):
    """The vehicle feed could not produce a batch for this cycle.

    Callers treat any ``FeedError`` as "nothing new this tick": the
    previously rendered markers and summary stay as they are.
    """

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FeedUnavailableError(FeedError):
    """Transport-level failure (network error, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, endpoint=endpoint)


class FeedMalformedError(FeedError):
    """Response body is not JSON or is not a JSON array of vehicles."""
