"""Current vehicle positions endpoint.

Endpoint:
  - /vehicles/current
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pymuni._constants import VEHICLES_ENDPOINT
from pymuni._transport import Transport
from pymuni.exceptions import FeedMalformedError
from pymuni.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)


def parse_vehicle_list(data: Any, *, endpoint: str = VEHICLES_ENDPOINT) -> list[VehicleRecord]:
    """Parse a decoded feed body into vehicle records, preserving feed order.

    The body must be a JSON array. Entries that are not objects or that
    lack usable coordinates are skipped so that one bad vehicle does not
    cost the whole batch.
    """
    if not isinstance(data, list):
        raise FeedMalformedError(
            f"Expected a JSON array from {endpoint}, got {type(data).__name__}",
            endpoint=endpoint,
        )

    records: list[VehicleRecord] = []
    skipped = 0
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            skipped += 1
            _logger.debug("Skipping non-object vehicle entry #%d: %r", index, item)
            continue
        try:
            records.append(VehicleRecord.model_validate(item))
        except ValidationError as exc:
            skipped += 1
            _logger.debug("Skipping invalid vehicle entry #%d: %s", index, exc)

    if skipped:
        _logger.warning("Skipped %d of %d vehicle entries from %s", skipped, len(data), endpoint)
    return records


async def fetch_vehicles(transport: Transport) -> list[VehicleRecord]:
    """Fetch the current vehicle batch."""
    body = await transport.get_json(VEHICLES_ENDPOINT)
    return parse_vehicle_list(body)
