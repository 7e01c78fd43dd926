"""pymuni - Async client that keeps a map and route summary in sync with a live transit vehicle feed."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymuni")
except PackageNotFoundError:
    __version__ = "0+local"
from pymuni.client import MuniClient
from pymuni.config import MuniConfig
from pymuni.exceptions import (
    FeedError,
    FeedMalformedError,
    FeedUnavailableError,
    MuniConfigError,
    MuniError,
)
from pymuni.models import FeedSummary, OccupancyLevel, RouteAggregate, VehicleRecord
from pymuni.presentation import TextPresenter, format_summary
from pymuni.scheduler import PollScheduler, SchedulerState
from pymuni.state.aggregate import aggregate
from pymuni.state.filter import FilterState, filter_records, parse_allow_list, passes
from pymuni.state.markers import MarkerReconciler, VehicleMarker
from pymuni.surface import InMemorySurface, MapSurface
from pymuni.view import FeedView

__all__ = [
    "__version__",
    "FeedError",
    "FeedMalformedError",
    "FeedSummary",
    "FeedUnavailableError",
    "FeedView",
    "FilterState",
    "InMemorySurface",
    "MapSurface",
    "MarkerReconciler",
    "MuniClient",
    "MuniConfig",
    "MuniConfigError",
    "MuniError",
    "OccupancyLevel",
    "PollScheduler",
    "RouteAggregate",
    "SchedulerState",
    "TextPresenter",
    "VehicleMarker",
    "VehicleRecord",
    "aggregate",
    "filter_records",
    "format_summary",
    "parse_allow_list",
    "passes",
]
