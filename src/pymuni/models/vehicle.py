"""Vehicle position record as reported by the feed."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pymuni._constants import DEFAULT_ROUTE_COLOR, DEFAULT_ROUTE_TYPE
from pymuni.ingestion.normalize import exact_int, safe_float, safe_int, safe_str
from pymuni.models._base import FeedTimestamp, MuniEnum


class OccupancyLevel(MuniEnum):
    """Passenger load reported for a vehicle."""

    UNKNOWN = -1
    EMPTY = 0
    FEW = 1
    SEVERAL = 2
    MANY = 3


class VehicleRecord(BaseModel):
    """One reporting vehicle in a feed batch.

    Records are received fresh every cycle and never persisted. A record
    with no ``route_id`` is kept by the parser but is not displayable:
    the filter, the aggregation engine and the marker reconciler all
    ignore it.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    route_id: str | None = Field(default=None, validation_alias=AliasChoices("route_id", "routeId"))
    route_long_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("route_long_name", "routeLongName"),
    )
    route_short_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("route_short_name", "routeShortName"),
    )
    route_color: str | None = Field(default=None, validation_alias=AliasChoices("route_color", "routeColor"))
    """Hex color without the leading ``#``."""
    route_type: int | None = Field(default=None, validation_alias=AliasChoices("route_type", "routeType"))
    """GTFS route type code."""
    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lon: float = Field(validation_alias=AliasChoices("lon", "lng", "longitude"))
    occupancy: OccupancyLevel = Field(default=OccupancyLevel.UNKNOWN)
    timestamp: FeedTimestamp = None

    @field_validator("route_id", "route_long_name", "route_short_name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("route_color", mode="before")
    @classmethod
    def _coerce_color(cls, value: Any) -> str | None:
        text = safe_str(value)
        if text is None:
            return None
        return text.lstrip("#") or None

    @field_validator("route_type", mode="before")
    @classmethod
    def _coerce_route_type(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: Any) -> float | None:
        # None fails validation: a vehicle without a position cannot be drawn.
        return safe_float(value)

    @field_validator("occupancy", mode="before")
    @classmethod
    def _coerce_occupancy(cls, value: Any) -> OccupancyLevel:
        parsed = exact_int(value)
        if parsed is None:
            return OccupancyLevel.UNKNOWN
        return OccupancyLevel(parsed)

    @property
    def is_displayable(self) -> bool:
        return self.route_id is not None

    @property
    def display_name(self) -> str:
        """Long name, then short name, then the route id."""
        return self.route_long_name or self.route_short_name or self.route_id or ""

    @property
    def display_color(self) -> str:
        return self.route_color or DEFAULT_ROUTE_COLOR

    @property
    def display_route_type(self) -> int:
        return self.route_type if self.route_type is not None else DEFAULT_ROUTE_TYPE
