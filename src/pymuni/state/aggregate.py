"""Aggregation engine: fold a filtered batch into per-route rollups."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable

from pymuni.models.route import RouteAggregate
from pymuni.models.vehicle import VehicleRecord


@dataclasses.dataclass(slots=True)
class _Accumulator:
    count: int
    name: str
    color: str
    route_type: int
    position: int

    def freeze(self) -> RouteAggregate:
        return RouteAggregate(count=self.count, name=self.name, color=self.color, route_type=self.route_type)


def _numeric_route_id(route_id: str) -> int | None:
    # int() also takes "1_0", "+3" and non-ASCII digits; those sort as text.
    candidate = route_id.strip()
    digits = candidate[1:] if candidate.startswith("-") else candidate
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(candidate)


def route_sort_key(route_id: str, position: int) -> tuple[int, float, int]:
    """Numeric ids first in ascending order, then the rest by first appearance."""
    number = _numeric_route_id(route_id)
    if number is None:
        return (1, math.inf, position)
    return (0, number, position)


def aggregate(records: Iterable[VehicleRecord]) -> list[tuple[str, RouteAggregate]]:
    """Build the display-ordered route summary in a single pass.

    The first record seen for a route supplies its name, color and mode.
    Records without a route id are ignored.
    """
    accumulators: dict[str, _Accumulator] = {}
    for record in records:
        if not record.is_displayable:
            continue
        route_id = str(record.route_id)
        acc = accumulators.get(route_id)
        if acc is not None:
            acc.count += 1
            continue
        accumulators[route_id] = _Accumulator(
            count=1,
            name=record.display_name,
            color=record.display_color,
            route_type=record.display_route_type,
            position=len(accumulators),
        )

    ordered = sorted(accumulators.items(), key=lambda item: route_sort_key(item[0], item[1].position))
    return [(route_id, acc.freeze()) for route_id, acc in ordered]
