"""HTTP transport for the vehicle feed."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pymuni._constants import SKIP_BROWSER_WARNING_HEADER
from pymuni.config import MuniConfig
from pymuni.exceptions import FeedMalformedError, FeedUnavailableError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...


class HttpTransport:
    """Plain JSON-over-HTTP transport, one request per call."""

    def __init__(self, config: MuniConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers = {"accept": "application/json"}
        if self._config.skip_browser_warning:
            headers[SKIP_BROWSER_WARNING_HEADER] = "true"
        return headers

    async def get_json(self, endpoint: str) -> Any:
        """GET ``base_url + endpoint`` and return the decoded JSON body.

        Raises
        ------
        FeedUnavailableError
            Network failure, timeout or non-200 status.
        FeedMalformedError
            The body is not valid UTF-8 JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=self._headers(), timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    snippet = body[:200].decode("utf-8", errors="replace")
                    raise FeedUnavailableError(
                        f"HTTP {resp.status} from {endpoint}: {snippet}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except FeedUnavailableError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise FeedUnavailableError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FeedMalformedError(
                f"Invalid JSON from {endpoint}: {body[:200]!r}",
                endpoint=endpoint,
            ) from exc
