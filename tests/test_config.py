from __future__ import annotations

import pytest

from pymuni.config import MuniConfig
from pymuni.exceptions import MuniConfigError


def test_defaults() -> None:
    config = MuniConfig(base_url="https://feed.example.com/")

    assert config.base_url == "https://feed.example.com"
    assert config.poll_interval == 30.0
    assert config.request_timeout == 10.0
    assert config.skip_browser_warning is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": ""},
        {"base_url": "https://x", "poll_interval": 0},
        {"base_url": "https://x", "request_timeout": -1},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(MuniConfigError):
        MuniConfig(**kwargs)  # type: ignore[arg-type]


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MUNI_BASE_URL", "https://feed.example.com")
    monkeypatch.setenv("MUNI_POLL_INTERVAL", "15")
    monkeypatch.setenv("MUNI_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("MUNI_SKIP_BROWSER_WARNING", "off")

    config = MuniConfig.from_env()

    assert config.base_url == "https://feed.example.com"
    assert config.poll_interval == 15.0
    assert config.request_timeout == 2.5
    assert config.skip_browser_warning is False


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MUNI_BASE_URL", "https://env.example.com")
    monkeypatch.setenv("MUNI_POLL_INTERVAL", "not-a-number")

    config = MuniConfig.from_env(base_url="https://cli.example.com", poll_interval=5.0)

    assert config.base_url == "https://cli.example.com"
    assert config.poll_interval == 5.0


def test_missing_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MUNI_BASE_URL", raising=False)
    with pytest.raises(MuniConfigError):
        MuniConfig.from_env()


def test_bad_number_in_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MUNI_BASE_URL", "https://feed.example.com")
    monkeypatch.setenv("MUNI_REQUEST_TIMEOUT", "ten")
    with pytest.raises(MuniConfigError):
        MuniConfig.from_env()
