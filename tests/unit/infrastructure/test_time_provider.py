"""Tests for the clocks that stamp receipts.

Tests cover:
- SystemTimeProvider returns the current UTC time
- FixedTimeProvider returns a controllable fixed time
- Only tzinfo=UTC is accepted
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from gateway_core.application.ports import TimeProvider
from gateway_core.infrastructure.time_provider import (
    FixedTimeProvider,
    SystemTimeProvider,
)

PLUS_0330 = timezone(timedelta(hours=3, minutes=30))


class TestSystemTimeProvider:
    def test_implements_time_provider_interface(self) -> None:
        assert isinstance(SystemTimeProvider(), TimeProvider)

    def test_now_is_current_utc_time(self) -> None:
        before = datetime.now(UTC)

        result = SystemTimeProvider().now()

        assert result.tzinfo is UTC
        assert before <= result <= datetime.now(UTC)


class TestFixedTimeProvider:
    def test_implements_time_provider_interface(self, time_provider: FixedTimeProvider) -> None:
        assert isinstance(time_provider, TimeProvider)

    def test_now_returns_fixed_time(self, time_provider: FixedTimeProvider, fixed_time: datetime) -> None:
        assert time_provider.now() == fixed_time
        assert time_provider.now() == time_provider.now()

    def test_set_time_moves_clock(self, time_provider: FixedTimeProvider, fixed_time: datetime) -> None:
        later = fixed_time + timedelta(minutes=15)

        time_provider.set_time(later)

        assert time_provider.now() == later

    @pytest.mark.parametrize(
        "bad_time",
        [datetime(2024, 1, 15, 12, 0, 0), datetime(2024, 1, 15, 12, 0, 0, tzinfo=PLUS_0330)],
    )
    def test_rejects_non_utc_on_creation(self, bad_time: datetime) -> None:
        with pytest.raises(ValueError, match="tzinfo=UTC"):
            FixedTimeProvider(bad_time)

    @pytest.mark.parametrize(
        "bad_time",
        [datetime(2024, 1, 15, 12, 0, 0), datetime(2024, 1, 15, 12, 0, 0, tzinfo=PLUS_0330)],
    )
    def test_rejects_non_utc_on_set_time(
        self, time_provider: FixedTimeProvider, bad_time: datetime
    ) -> None:
        with pytest.raises(ValueError, match="tzinfo=UTC"):
            time_provider.set_time(bad_time)
