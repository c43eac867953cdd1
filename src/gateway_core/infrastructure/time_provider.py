"""Clocks for Receipt.date.

A receipt is stamped when the driver builds it, after the provider has
confirmed the payment, never from a provider-supplied timestamp.
"""

from datetime import UTC, datetime

from gateway_core.application.ports import TimeProvider


class SystemTimeProvider(TimeProvider):
    """Default clock for drivers: the system time in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedTimeProvider(TimeProvider):
    """Clock frozen at a given UTC instant, so receipt dates are predictable.

    Not thread-safe; intended for single-threaded tests.
    """

    def __init__(self, fixed_time: datetime) -> None:
        self._fixed_time = _require_utc(fixed_time)

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        """Move the clock, e.g. between the purchase and callback requests."""
        self._fixed_time = _require_utc(new_time)


def _require_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not UTC:
        raise ValueError(f"Receipt dates must have tzinfo=UTC, got tzinfo={dt.tzinfo}")
    return dt
