"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
Drivers talk to providers and read the clock only through these.
"""

from gateway_core.application.ports.http_client import HttpClient
from gateway_core.application.ports.time_provider import TimeProvider

__all__ = [
    "HttpClient",
    "TimeProvider",
]
