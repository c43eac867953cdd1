"""Shared pytest fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import pytest

from gateway_core.application.ports import HttpClient
from gateway_core.domain.entities import Invoice
from gateway_core.infrastructure.drivers.vandar import VandarDriver, VandarSettings
from gateway_core.infrastructure.time_provider import FixedTimeProvider


class FakeHttpClient(HttpClient):
    """Records every request and answers from a queue of canned bodies.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self, *responses: dict[str, Any] | Exception) -> None:
        self.responses: list[dict[str, Any] | Exception] = list(responses)
        self.requests: list[tuple[str, dict[str, Any]]] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def queue(self, response: dict[str, Any] | Exception) -> None:
        self.responses.append(response)

    def post_json(self, url: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        self.requests.append((url, dict(payload)))
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A time provider with a fixed timestamp."""
    return FixedTimeProvider(fixed_time)


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def vandar_settings() -> VandarSettings:
    return VandarSettings(
        merchant_id="test-api-key",
        callback_url="https://shop.example.com/payments/callback",
    )


@pytest.fixture
def invoice() -> Invoice:
    return Invoice(amount=100000, details={"mobile": "09120000000", "description": "Order #42"})


@pytest.fixture
def vandar_driver(
    vandar_settings: VandarSettings,
    http_client: FakeHttpClient,
    time_provider: FixedTimeProvider,
) -> VandarDriver:
    return VandarDriver(
        settings=vandar_settings,
        http_client=http_client,
        time_provider=time_provider,
    )
