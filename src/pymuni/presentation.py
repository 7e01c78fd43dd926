"""Plain-text rendering of a feed summary.

The real UI is outside this package; these helpers produce the same
information (legend, header counts, one card per route) as text for
logs and the ``watch_feed`` script.
"""

from __future__ import annotations

import sys
from datetime import tzinfo
from typing import TextIO

from pymuni.models.route import FeedSummary, RouteAggregate
from pymuni.models.vehicle import OccupancyLevel
from pymuni.state.markers import occupancy_color

# Legend wording differs slightly from the marker tooltips ("Several").
LEGEND: tuple[tuple[str, str], ...] = (
    (occupancy_color(OccupancyLevel.EMPTY), "Empty"),
    (occupancy_color(OccupancyLevel.FEW), "Few Riders"),
    (occupancy_color(OccupancyLevel.SEVERAL), "Several"),
    (occupancy_color(OccupancyLevel.MANY), "Many Riders"),
)


def format_legend() -> str:
    lines = ["OCCUPANCY"]
    lines.extend(f"  {color:<11} {text}" for color, text in LEGEND)
    return "\n".join(lines)


def format_vehicle_count(count: int) -> str:
    return f"{count} vehicle{'s' if count > 1 else ''}"


def format_route_card(route_id: str, route: RouteAggregate) -> str:
    return f"[{route_id:>4}] #{route.color}  {route.name} - {format_vehicle_count(route.count)}"


def format_summary(summary: FeedSummary, *, tz: tzinfo | None = None) -> str:
    """Header line plus one card per route, in summary order.

    *tz* defaults to the local time zone for the "Updated" time.
    """
    if summary.last_updated is None:
        updated = "Not updated yet"
    else:
        updated = f"Updated {summary.last_updated.astimezone(tz).strftime('%H:%M:%S')}"
    lines = [f"{updated} | {summary.vehicle_count} vehicles | {summary.route_count} routes"]
    lines.extend(format_route_card(route_id, route) for route_id, route in summary.routes)
    return "\n".join(lines)


class TextPresenter:
    """Presenter that writes :func:`format_summary` output to a stream."""

    def __init__(self, stream: TextIO | None = None, *, tz: tzinfo | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._tz = tz

    def render(self, summary: FeedSummary) -> None:
        self._stream.write(format_summary(summary, tz=self._tz) + "\n\n")
        self._stream.flush()
