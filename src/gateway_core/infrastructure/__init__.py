"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- HTTP Client: requests-backed adapter for provider APIs
- Time Provider: Clock abstraction for testability
- Drivers: Gateway integrations and the startup registry wiring

Infrastructure adapters implement the ports defined in the application layer.
"""

from gateway_core.infrastructure.http_client import RequestsHttpClient
from gateway_core.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider

__all__ = [
    "FixedTimeProvider",
    "RequestsHttpClient",
    "SystemTimeProvider",
]
