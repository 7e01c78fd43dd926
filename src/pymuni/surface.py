"""Map drawing surface collaborator.

The real map widget lives outside this package; all the core needs is
an add/remove-layer pair. :class:`InMemorySurface` keeps layers in a
dict and stands in for a map in scripts and tests.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Hashable
from typing import Protocol

from pymuni.state.markers import VehicleMarker

_logger = logging.getLogger(__name__)


class MapSurface(Protocol):
    """Opaque drawing surface with add/remove-layer primitives."""

    def add_layer(self, marker: VehicleMarker) -> Hashable:
        """Draw *marker* and return a handle that identifies the layer."""
        ...

    def remove_layer(self, handle: Hashable) -> None:
        ...


class InMemorySurface:
    """Map surface that only records which layers are currently drawn."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.layers: dict[int, VehicleMarker] = {}
        self.added = 0
        self.removed = 0

    def add_layer(self, marker: VehicleMarker) -> int:
        handle = next(self._ids)
        self.layers[handle] = marker
        self.added += 1
        return handle

    def remove_layer(self, handle: Hashable) -> None:
        if self.layers.pop(handle, None) is None:  # type: ignore[call-overload]
            _logger.debug("remove_layer for unknown handle %r", handle)
            return
        self.removed += 1
