"""Built-in drivers and startup wiring of the DriverRegistry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from gateway_core.application.driver_registry import DriverRegistry
from gateway_core.domain.exceptions import InvalidSettingsError, UnknownDriverError
from gateway_core.infrastructure.drivers.vandar import VandarDriver, VandarSettings
from gateway_core.infrastructure.http_client import RequestsHttpClient
from gateway_core.infrastructure.time_provider import SystemTimeProvider

if TYPE_CHECKING:
    from gateway_core.application.driver import Driver
    from gateway_core.application.ports import HttpClient, TimeProvider

logger = logging.getLogger(__name__)

# name -> (driver class, settings parser)
DRIVERS: dict[str, tuple[type[Driver], Callable[[Mapping[str, Any]], Any]]] = {
    VandarDriver.name: (VandarDriver, VandarSettings.from_mapping),
}


def build_registry(
    config: Mapping[str, Mapping[str, Any]],
    http_client: HttpClient | None = None,
    time_provider: TimeProvider | None = None,
) -> DriverRegistry:
    """Validate every configured driver's settings and register a factory for it.

    Args:
        config: Driver name -> raw settings mapping, e.g.
            {"vandar": {"merchantId": "...", "callbackUrl": "..."}}.
        http_client: Shared HTTP client; a RequestsHttpClient by default.
        time_provider: Shared clock; the system clock by default.

    Returns:
        A registry whose create(name) returns a fresh, unbound driver.

    Raises:
        UnknownDriverError: A configured name has no built-in driver.
        InvalidSettingsError: A driver's settings are missing required fields.
    """
    if http_client is None:
        http_client = RequestsHttpClient()
    if time_provider is None:
        time_provider = SystemTimeProvider()
    registry = DriverRegistry()

    for name, raw_settings in config.items():
        key = name.strip().lower()
        if key not in DRIVERS:
            supported = ", ".join(sorted(DRIVERS))
            raise UnknownDriverError(
                f"Unsupported payment driver: {key}. Supported drivers: {supported}"
            )
        if not isinstance(raw_settings, Mapping):
            raise InvalidSettingsError(f"Settings for driver '{key}' must be a mapping")

        driver_class, parse_settings = DRIVERS[key]
        settings = parse_settings(raw_settings)
        registry.register(
            key,
            partial(
                driver_class,
                settings=settings,
                http_client=http_client,
                time_provider=time_provider,
            ),
        )

    logger.info("Payment drivers configured", extra={"drivers": registry.names()})
    return registry
