"""Application layer - The driver contract, its registry and port definitions.

This layer contains:
- Driver: the purchase -> pay -> verify protocol every gateway implements
- DriverRegistry: configured gateway names mapped to driver factories
- Ports: Abstract interfaces for the HTTP client and the clock

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""
