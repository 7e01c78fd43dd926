"""Feed view: one independent fetch-filter-aggregate-render pipeline.

A :class:`FeedView` owns the filter, the drawn markers and the last
summary as instance state. Several views can run side by side against
different surfaces.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from pymuni.exceptions import FeedError
from pymuni.models.route import FeedSummary
from pymuni.models.vehicle import VehicleRecord
from pymuni.state.aggregate import aggregate
from pymuni.state.filter import (
    ApplyFilterText,
    ClearFilter,
    FilterAction,
    FilterState,
    SelectRoute,
    filter_records,
    reduce_filter,
)
from pymuni.state.markers import MarkerReconciler, MarkerSet
from pymuni.surface import MapSurface

_logger = logging.getLogger(__name__)


class VehicleSource(Protocol):
    """Anything that can produce one vehicle batch; :class:`~pymuni.client.MuniClient` does."""

    async def fetch_vehicles(self) -> list[VehicleRecord]:
        ...


class Presenter(Protocol):
    def render(self, summary: FeedSummary) -> None:
        ...


class StopOverlay(Protocol):
    """Stop-marker layer; its drawing is handled elsewhere."""

    @property
    def showing(self) -> bool:
        ...

    def show_stops(self) -> None:
        ...

    def hide_stops(self) -> None:
        ...


class FeedView:
    """Synchronizes one map surface and one summary with the vehicle feed.

    ``tick()`` is the whole cycle. The only suspension point is the
    fetch; filtering, aggregation and the marker redraw run back to back
    on the event loop afterwards, so overlapping ticks cannot interleave
    their redraws. Results are applied in tick order: a fetch that
    completes after a more recent tick has already been applied is
    dropped.
    """

    def __init__(
        self,
        source: VehicleSource,
        surface: MapSurface,
        *,
        presenter: Presenter | None = None,
        stops: StopOverlay | None = None,
        filter_state: FilterState | None = None,
    ) -> None:
        self._source = source
        self._surface = surface
        self._presenter = presenter
        self._stops = stops
        self._filter = filter_state if filter_state is not None else FilterState()
        self._reconciler = MarkerReconciler()
        self._summary = FeedSummary()
        self._started_seq = 0
        self._applied_seq = 0

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    @property
    def summary(self) -> FeedSummary:
        return self._summary

    @property
    def markers(self) -> MarkerSet:
        return self._reconciler.markers

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    async def tick(self) -> bool:
        """Fetch one batch and, if it is still the newest, render it.

        Returns ``True`` when the batch was applied. Feed errors are
        logged and swallowed; the previous markers and summary stay.
        """
        self._started_seq += 1
        seq = self._started_seq

        try:
            records = await self._source.fetch_vehicles()
        except FeedError as exc:
            _logger.warning("Tick #%d: vehicle feed unavailable, keeping previous state: %s", seq, exc)
            return False

        if seq < self._applied_seq:
            _logger.debug("Tick #%d: discarding stale batch, tick #%d already applied", seq, self._applied_seq)
            return False

        self._apply(records)
        self._applied_seq = seq
        return True

    def _apply(self, records: Sequence[VehicleRecord]) -> None:
        filtered = filter_records(records, self._filter)
        routes = aggregate(filtered)
        try:
            self._reconciler.reconcile(filtered, self._surface)
        except Exception:
            # The reconciler rolled the map back to empty.
            self._summary = FeedSummary(last_updated=self._summary.last_updated)
            if self._presenter is not None:
                self._presenter.render(self._summary)
            raise

        last_updated = self._summary.last_updated
        if records and records[0].timestamp is not None:
            last_updated = records[0].timestamp

        self._summary = FeedSummary.build(routes, last_updated=last_updated)
        _logger.debug(
            "Applied batch: %d records, %d displayed, %d routes",
            len(records),
            self._summary.vehicle_count,
            self._summary.route_count,
        )
        if self._presenter is not None:
            self._presenter.render(self._summary)

    def close(self) -> None:
        """Remove every vehicle marker this view drew."""
        self._reconciler.clear(self._surface)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def dispatch(self, action: FilterAction) -> FilterState:
        """Apply a filter action, update the stop overlay, then refresh now."""
        self._filter = reduce_filter(self._filter, action)
        _logger.info("Route filter now %s", sorted(self._filter.allow_list) if self._filter.active else "off")

        if self._stops is not None:
            if isinstance(action, ClearFilter):
                self._stops.hide_stops()
            elif isinstance(action, SelectRoute) or self._stops.showing:
                self._stops.show_stops()

        await self.tick()
        return self._filter

    async def apply_filter(self, text: str) -> FilterState:
        return await self.dispatch(ApplyFilterText(text))

    async def filter_by_route(self, route_id: str) -> FilterState:
        return await self.dispatch(SelectRoute(route_id))

    async def clear_filters(self) -> FilterState:
        return await self.dispatch(ClearFilter())

    def toggle_stops(self) -> None:
        if self._stops is None:
            return
        if self._stops.showing:
            self._stops.hide_stops()
        else:
            self._stops.show_stops()
