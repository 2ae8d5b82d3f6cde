from __future__ import annotations

import dataclasses

import pytest

from holowiki.config import DEFAULT_API_URL, ClientConfig


def test_defaults() -> None:
    config = ClientConfig()
    assert config.request_timeout == 10000
    assert config.request_interval == 1000
    assert config.api_url == DEFAULT_API_URL
    assert config.timeout_seconds == 10.0
    assert config.interval_seconds == 1.0


@pytest.mark.parametrize("value", [500, 30000, 12345.5])
def test_timeout_boundaries_accepted(value: float) -> None:
    assert ClientConfig(request_timeout=value).request_timeout == value


@pytest.mark.parametrize("value", [499, 30001, 0, -1])
def test_timeout_out_of_range(value: float) -> None:
    with pytest.raises(ValueError):
        ClientConfig(request_timeout=value)


@pytest.mark.parametrize("value", [500, 5000])
def test_interval_boundaries_accepted(value: float) -> None:
    assert ClientConfig(request_interval=value).request_interval == value


@pytest.mark.parametrize("value", [499, 5001])
def test_interval_out_of_range(value: float) -> None:
    with pytest.raises(ValueError):
        ClientConfig(request_interval=value)


@pytest.mark.parametrize("field", ["request_timeout", "request_interval"])
@pytest.mark.parametrize("value", ["1000", None, True])
def test_non_numeric_durations_raise_type_error(field: str, value: object) -> None:
    with pytest.raises(TypeError):
        ClientConfig(**{field: value})


def test_api_url_validation() -> None:
    with pytest.raises(TypeError):
        ClientConfig(api_url=None)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        ClientConfig(api_url="ftp://hololive.wiki/w/api.php")


def test_config_is_frozen() -> None:
    config = ClientConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.request_interval = 2000  # type: ignore[misc]


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOLOWIKI_REQUEST_TIMEOUT_MS", "2500")
    monkeypatch.setenv("HOLOWIKI_REQUEST_INTERVAL_MS", "750")
    monkeypatch.setenv("HOLOWIKI_API_URL", "https://wiki.example.org/api.php")
    config = ClientConfig.from_env()
    assert config.request_timeout == 2500
    assert config.request_interval == 750
    assert config.api_url == "https://wiki.example.org/api.php"


def test_from_env_rejects_out_of_range(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOLOWIKI_API_URL", raising=False)
    monkeypatch.setenv("HOLOWIKI_REQUEST_INTERVAL_MS", "100")
    with pytest.raises(ValueError):
        ClientConfig.from_env()
