"""Shared pytest fixtures for mediabuy packages."""

from datetime import datetime, timedelta

import pytest
from mediabuy.attribution.schema import (
    ChannelType,
    ConversionPath,
    Touchpoint,
)
from mediabuy.incrementality.schema import GroupMetrics, IncrementalityTest

CONVERSION_DATE = datetime(2025, 1, 15, 12, 0, 0)


@pytest.fixture
def conversion_date():
    """Conversion timestamp shared by sample paths."""
    return CONVERSION_DATE


@pytest.fixture
def make_path():
    """Factory building a path from (channel, channel_type, days_before, cost) tuples."""

    def _make_path(
        touches: list[tuple[str, ChannelType, float, float]],
        conversion_value: float = 100.0,
        conversion_date: datetime = CONVERSION_DATE,
    ) -> ConversionPath:
        touchpoints = [
            Touchpoint(
                channel=channel,
                channel_type=channel_type,
                timestamp=conversion_date - timedelta(days=days_before),
                cost=cost,
            )
            for channel, channel_type, days_before, cost in touches
        ]
        hours = (
            (conversion_date - touchpoints[0].timestamp).total_seconds() / 3600
            if touchpoints
            else 0.0
        )
        return ConversionPath(
            touchpoints=touchpoints,
            conversion_value=conversion_value,
            conversion_date=conversion_date,
            time_to_conversion=hours,
        )

    return _make_path


@pytest.fixture
def four_channel_path(make_path):
    """Four distinct channels over ten days, worth $200."""
    return make_path(
        [
            ("YouTube", ChannelType.VIDEO, 10, 5.0),
            ("Meta Prospecting", ChannelType.SOCIAL, 6, 3.0),
            ("Programmatic Display", ChannelType.DISPLAY, 3, 1.0),
            ("Google Search", ChannelType.SEARCH, 1, 2.0),
        ],
        conversion_value=200.0,
    )


@pytest.fixture
def sample_paths(make_path):
    """A small mixed set of conversion paths."""
    return [
        make_path(
            [
                ("Google Search", ChannelType.SEARCH, 5, 2.0),
                ("Meta Prospecting", ChannelType.SOCIAL, 2, 1.5),
                ("Google Search", ChannelType.SEARCH, 0.5, 2.5),
            ],
            conversion_value=120.0,
        ),
        make_path(
            [("Email Newsletter", ChannelType.EMAIL, 1, 0.1)],
            conversion_value=40.0,
        ),
        make_path(
            [
                ("YouTube", ChannelType.VIDEO, 9, 4.0),
                ("Google Search", ChannelType.SEARCH, 1, 3.0),
            ],
            conversion_value=80.0,
        ),
    ]


@pytest.fixture
def holdout_test():
    """Holdout test: no control spend, 100 vs 150 conversions."""
    return IncrementalityTest(
        control_group=GroupMetrics(conversions=100, spend=0, revenue=10_000),
        test_group=GroupMetrics(conversions=150, spend=5_000, revenue=15_000),
        test_id="test-001",
        channel="Meta Prospecting",
        channel_type="SOCIAL",
    )
