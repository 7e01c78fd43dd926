"""High-level async client for the vehicle positions feed."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pymuni._api.vehicles import fetch_vehicles
from pymuni._transport import HttpTransport, Transport
from pymuni.config import MuniConfig
from pymuni.exceptions import MuniError
from pymuni.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)


class MuniClient:
    """Async client for the vehicle positions feed.

    Usage::

        async with MuniClient(config) as client:
            vehicles = await client.fetch_vehicles()

    A caller-supplied ``aiohttp.ClientSession`` is used as is and left
    open on exit. A ``transport`` may be injected to bypass HTTP
    entirely (tests, replay).
    """

    def __init__(
        self,
        config: MuniConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._injected_transport = transport
        self._transport: Transport | None = transport

    @property
    def config(self) -> MuniConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MuniClient:
        if self._injected_transport is not None:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = self._injected_transport

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise MuniError("Client not initialized. Use 'async with MuniClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def fetch_vehicles(self) -> list[VehicleRecord]:
        """Fetch the current vehicle batch in feed order.

        Makes exactly one request. Raises a :class:`~pymuni.exceptions.FeedError`
        subclass on failure; retrying is left to the caller's schedule.
        """
        transport = self._require_transport()
        records = await fetch_vehicles(transport)
        _logger.debug("Fetched %d vehicles", len(records))
        return records
