"""Data models for vehicle feed payloads and derived state."""

from pymuni.models._base import FeedTimestamp, MuniEnum, parse_feed_timestamp
from pymuni.models.route import FeedSummary, RouteAggregate
from pymuni.models.vehicle import OccupancyLevel, VehicleRecord

__all__ = [
    "FeedSummary",
    "FeedTimestamp",
    "MuniEnum",
    "OccupancyLevel",
    "RouteAggregate",
    "VehicleRecord",
    "parse_feed_timestamp",
]
