"""Marker reconciler: owns the vehicle markers currently on the map.

Every cycle is a full redraw. The previous marker set is torn down and
a new one is built from the filtered batch, so no marker outlives the
cycle that created it.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from pymuni._constants import UNKNOWN_OCCUPANCY_COLOR, UNKNOWN_OCCUPANCY_LABEL
from pymuni.models.vehicle import OccupancyLevel, VehicleRecord

if TYPE_CHECKING:
    from pymuni.surface import MapSurface

_logger = logging.getLogger(__name__)

OCCUPANCY_COLORS: dict[OccupancyLevel, str] = {
    OccupancyLevel.EMPTY: "lightblue",
    OccupancyLevel.FEW: "lightgreen",
    OccupancyLevel.SEVERAL: "yellow",
    OccupancyLevel.MANY: "lightcoral",
}

OCCUPANCY_LABELS: dict[OccupancyLevel, str] = {
    OccupancyLevel.EMPTY: "Empty",
    OccupancyLevel.FEW: "Few Riders",
    OccupancyLevel.SEVERAL: "Several Riders",
    OccupancyLevel.MANY: "Many Riders",
}


def occupancy_color(level: OccupancyLevel) -> str:
    return OCCUPANCY_COLORS.get(level, UNKNOWN_OCCUPANCY_COLOR)


def occupancy_label(level: OccupancyLevel) -> str:
    return OCCUPANCY_LABELS.get(level, UNKNOWN_OCCUPANCY_LABEL)


class VehicleMarker(BaseModel):
    """Everything a map needs to draw one vehicle."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    route_id: str
    lat: float
    lon: float
    label: str
    """Text shown on the marker itself (the route id)."""
    color: str
    """Background color keyed by occupancy."""
    occupancy: OccupancyLevel
    tooltip: str
    """Hover content: route, display name and occupancy."""


def build_marker(record: VehicleRecord) -> VehicleMarker:
    if record.route_id is None:
        raise ValueError("cannot build a marker for a vehicle without route_id")
    label = occupancy_label(record.occupancy)
    return VehicleMarker(
        route_id=record.route_id,
        lat=record.lat,
        lon=record.lon,
        label=record.route_id,
        color=occupancy_color(record.occupancy),
        occupancy=record.occupancy,
        tooltip=f"{record.route_id} - {record.display_name}\nOccupancy: {label}",
    )


def build_markers(records: Iterable[VehicleRecord]) -> list[VehicleMarker]:
    """Markers for every displayable record, in feed order."""
    return [build_marker(record) for record in records if record.is_displayable]


@dataclasses.dataclass(frozen=True, slots=True)
class PlacedMarker:
    marker: VehicleMarker
    handle: Hashable


MarkerSet = tuple[PlacedMarker, ...]


class MarkerReconciler:
    """Holds the current :data:`MarkerSet` and replaces it wholesale."""

    def __init__(self) -> None:
        self._markers: MarkerSet = ()

    @property
    def markers(self) -> MarkerSet:
        return self._markers

    def clear(self, surface: MapSurface) -> None:
        """Remove every retained marker from *surface*."""
        previous = self._markers
        self._markers = ()
        for placed in previous:
            surface.remove_layer(placed.handle)

    def reconcile(self, records: Iterable[VehicleRecord], surface: MapSurface) -> MarkerSet:
        """Tear down the previous set and draw one marker per record.

        Runs without suspension points, so callers on the event loop
        never observe old and new markers together. If the surface fails
        part way, whatever was already drawn this call is removed again
        before the error propagates.
        """
        markers = build_markers(records)
        self.clear(surface)

        placed: list[PlacedMarker] = []
        try:
            for marker in markers:
                placed.append(PlacedMarker(marker=marker, handle=surface.add_layer(marker)))
        except Exception:
            _logger.warning("Map surface rejected a marker; rolling back %d markers", len(placed))
            for item in placed:
                surface.remove_layer(item.handle)
            raise

        self._markers = tuple(placed)
        return self._markers
