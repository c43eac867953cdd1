"""Gateway integrations - concrete implementations of the Driver contract."""

from gateway_core.infrastructure.drivers.catalog import DRIVERS, build_registry
from gateway_core.infrastructure.drivers.vandar import VandarDriver, VandarSettings

__all__ = [
    "DRIVERS",
    "VandarDriver",
    "VandarSettings",
    "build_registry",
]
