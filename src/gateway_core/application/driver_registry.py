from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from gateway_core.domain.exceptions import UnknownDriverError

if TYPE_CHECKING:
    from gateway_core.application.driver import Driver
    from gateway_core.domain.entities import Invoice

DriverFactory = Callable[[], "Driver"]


def _normalize(name: str) -> str:
    return name.strip().lower()


class DriverRegistry:
    """Maps configured gateway names to driver factories.

    Built once at startup, after every driver's settings were validated.
    Each create() call returns a fresh driver so cycles never share state.
    Names are case-insensitive and surrounding whitespace is ignored.
    """

    def __init__(self) -> None:
        self._factories: dict[str, DriverFactory] = {}

    def register(self, name: str, factory: DriverFactory) -> None:
        """Register a factory under name, replacing any previous one."""
        key = _normalize(name)
        if not key:
            raise UnknownDriverError("Driver name cannot be empty")
        self._factories[key] = factory

    def create(self, name: str, invoice: Invoice | None = None) -> Driver:
        """Build a new driver for name, optionally bound to invoice.

        Raises:
            UnknownDriverError: If no driver is registered under name.
        """
        key = _normalize(name)
        factory = self._factories.get(key)
        if factory is None:
            supported = ", ".join(self.names()) or "none"
            raise UnknownDriverError(
                f"Unsupported payment driver: {key}. Registered drivers: {supported}"
            )

        driver = factory()
        if invoice is not None:
            driver.bind(invoice)
        return driver

    def for_invoice(self, invoice: Invoice, default: str | None = None) -> Driver:
        """Build the driver named on the invoice (or default) and bind it.

        Raises:
            UnknownDriverError: If neither the invoice nor default names a driver,
                or the name is not registered.
        """
        name = invoice.driver or default
        if name is None:
            raise UnknownDriverError(f"Invoice {invoice.id} names no driver")
        return self.create(name, invoice)

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalize(name) in self._factories
