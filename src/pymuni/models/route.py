"""Per-route rollups and the cycle summary handed to presentation."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RouteAggregate(BaseModel):
    """Vehicle count and display metadata for one route in one cycle.

    ``name``, ``color`` and ``route_type`` come from the first record
    seen for the route in feed order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    count: int = Field(ge=1)
    name: str
    color: str
    route_type: int


class FeedSummary(BaseModel):
    """Everything the presentation layer needs for one cycle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    last_updated: datetime | None = None
    vehicle_count: int = 0
    route_count: int = 0
    routes: tuple[tuple[str, RouteAggregate], ...] = ()

    @classmethod
    def build(
        cls,
        routes: Sequence[tuple[str, RouteAggregate]],
        *,
        last_updated: datetime | None,
    ) -> FeedSummary:
        return cls(
            last_updated=last_updated,
            vehicle_count=sum(aggregate.count for _, aggregate in routes),
            route_count=len(routes),
            routes=tuple(routes),
        )
