"""Shared model plumbing for feed payloads.

State enums inherit from :class:`MuniEnum` which expects an ``UNKNOWN``
member at ``-1`` and adds a ``_missing_`` hook that returns ``UNKNOWN``
for any value without a mapped member.

:data:`FeedTimestamp` accepts the timestamp shapes observed on vehicle
feeds (ISO-8601 strings, epoch seconds, epoch milliseconds) and always
yields a timezone-aware datetime or ``None``.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BeforeValidator

from pymuni.ingestion.normalize import normalize_timestamp_seconds, safe_float


def parse_feed_timestamp(value: Any) -> datetime | None:
    """Convert a feed timestamp to a UTC-aware datetime.

    Naive ISO strings are taken as UTC. Unparseable values give ``None``
    rather than failing the whole record.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if safe_float(value) is not None:
        seconds = normalize_timestamp_seconds(value)
        if seconds is None:
            return None
        try:
            return datetime.fromtimestamp(seconds, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)
    return None


FeedTimestamp = Annotated[datetime | None, BeforeValidator(parse_feed_timestamp)]
"""Annotated type that coerces feed timestamps to UTC datetimes."""


class MuniEnum(enum.IntEnum):
    """Base for feed state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    """

    @classmethod
    def _missing_(cls, value: object) -> MuniEnum:
        # pylint: disable=no-member
        unknown: MuniEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown
