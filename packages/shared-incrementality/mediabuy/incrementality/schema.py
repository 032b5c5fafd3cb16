"""
Incrementality schema - test inputs and lift results.

A test compares two aggregate groups over a shared period:
- Control group: unexposed (holdout) or exposed to less media
- Test group: exposed to the media under evaluation
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any


class Recommendation(str, Enum):
    """Action suggested by an incrementality result."""

    SCALE_UP = "SCALE_UP"
    SCALE_DOWN = "SCALE_DOWN"
    MAINTAIN = "MAINTAIN"
    MORE_DATA_NEEDED = "MORE_DATA_NEEDED"


@dataclass(frozen=True)
class GroupMetrics:
    """Aggregate outcome of one test group."""

    conversions: float
    spend: float = 0.0
    revenue: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupMetrics:
        """Create GroupMetrics from a dictionary.

        Raises:
            ValueError: If conversions is missing or any value is not numeric.
        """
        if "conversions" not in data:
            raise ValueError("Missing required field: conversions")

        values = {}
        for key in ("conversions", "spend", "revenue"):
            try:
                values[key] = float(data.get(key, 0))
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid {key}: {data.get(key)}") from e
        return cls(**values)


@dataclass(frozen=True)
class IncrementalityTest:
    """
    One incrementality test record.

    Only ``control_group`` and ``test_group`` drive the calculation; the
    remaining fields identify the test for reporting.

    Example:
        test = IncrementalityTest(
            control_group=GroupMetrics(conversions=100, spend=0),
            test_group=GroupMetrics(conversions=150, spend=5_000),
            channel="Meta Prospecting",
        )
    """

    control_group: GroupMetrics
    test_group: GroupMetrics
    test_id: str | None = None
    channel: str | None = None
    channel_type: str | None = None
    test_start: date | None = None
    test_end: date | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IncrementalityTest:
        """Create an IncrementalityTest from a dictionary.

        Accepts ``control_group`` / ``test_group`` mappings and an optional
        ``test_period`` mapping with ISO ``start`` / ``end`` dates.

        Raises:
            ValueError: If either group is missing or malformed, or a date is
                not ISO formatted.
        """
        for key in ("control_group", "test_group"):
            if not isinstance(data.get(key), dict):
                raise ValueError(f"Missing required field: {key}")

        period = data.get("test_period") or {}
        return cls(
            control_group=GroupMetrics.from_dict(data["control_group"]),
            test_group=GroupMetrics.from_dict(data["test_group"]),
            test_id=data.get("id"),
            channel=data.get("channel"),
            channel_type=data.get("channel_type"),
            test_start=_parse_date(period.get("start")),
            test_end=_parse_date(period.get("end")),
        )


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise ValueError(f"Invalid date format: {value}") from e


@dataclass(frozen=True)
class IncrementalityResult:
    """Lift and significance of one incrementality test."""

    lift: float  # Percent change in conversions
    lift_absolute: float  # Test minus control conversions
    confidence: float  # 1 - p_value
    is_significant: bool  # p < 0.05
    p_value: float
    recommendation: Recommendation

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for downstream rendering."""
        return {
            "lift": self.lift,
            "lift_absolute": self.lift_absolute,
            "confidence": self.confidence,
            "is_significant": self.is_significant,
            "p_value": self.p_value,
            "recommendation": self.recommendation.value,
        }
