"""Internal constants shared across the library."""

from __future__ import annotations

VEHICLES_ENDPOINT = "/vehicles/current"

#: Header that tells tunnelling proxies to skip their browser interstitial.
SKIP_BROWSER_WARNING_HEADER = "ngrok-skip-browser-warning"

DEFAULT_POLL_INTERVAL: float = 30.0
DEFAULT_REQUEST_TIMEOUT: float = 10.0

# ------------------------------------------------------------------
# Route display fallbacks
# ------------------------------------------------------------------

DEFAULT_ROUTE_COLOR = "cccccc"
#: GTFS ``route_type`` for bus service.
DEFAULT_ROUTE_TYPE = 3

# ------------------------------------------------------------------
# Occupancy presentation
# ------------------------------------------------------------------

UNKNOWN_OCCUPANCY_COLOR = "lightgray"
UNKNOWN_OCCUPANCY_LABEL = "Unknown"
