"""Client configuration for pymuni."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pymuni._constants import DEFAULT_POLL_INTERVAL, DEFAULT_REQUEST_TIMEOUT
from pymuni.exceptions import MuniConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise MuniConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class MuniConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Feed base URL; ``/vehicles/current`` is appended to it.
    poll_interval : float
        Seconds between scheduled ticks.
    request_timeout : float
        Total timeout in seconds for one feed request.
    skip_browser_warning : bool
        Send the ``ngrok-skip-browser-warning`` header so tunnelled
        endpoints return JSON instead of an interstitial page.
    """

    base_url: str
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    skip_browser_warning: bool = True

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise MuniConfigError("base_url must be non-empty")
        if self.poll_interval <= 0:
            raise MuniConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise MuniConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        # Endpoint paths start with "/", keep a single separator.
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> MuniConfig:
        """Create configuration from environment variables.

        Reads ``MUNI_BASE_URL`` and optional ``MUNI_*`` variables.
        Explicit keyword arguments override environment values.

        Raises
        ------
        MuniConfigError
            If the base URL is missing or a numeric variable is invalid.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("MUNI_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        for env_key, field_name in (
            ("MUNI_POLL_INTERVAL", "poll_interval"),
            ("MUNI_REQUEST_TIMEOUT", "request_timeout"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "skip_browser_warning" not in overrides:
            config_kwargs["skip_browser_warning"] = _env_bool(env.get("MUNI_SKIP_BROWSER_WARNING"), True)

        config_kwargs.update(overrides)

        if "base_url" not in config_kwargs:
            raise MuniConfigError("MUNI_BASE_URL is not set")

        return cls(**config_kwargs)
