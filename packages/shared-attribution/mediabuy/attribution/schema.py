"""
Attribution schema - the value types crossing the attribution boundary.

Covers:
- Touchpoints: a single ad exposure or click with its cost
- Conversion paths: one user's chronological touchpoints ending in a conversion
- Attribution results: per-channel credit, revenue, cost and ROAS for one model

All types are immutable snapshots. The engine never mutates its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ChannelType(str, Enum):
    """Media channel category."""

    SEARCH = "SEARCH"
    SOCIAL = "SOCIAL"
    DISPLAY = "DISPLAY"
    VIDEO = "VIDEO"
    EMAIL = "EMAIL"
    TV = "TV"
    AUDIO = "AUDIO"
    OOH = "OOH"  # Out of home


class TouchpointType(str, Enum):
    """Kind of interaction recorded for a touchpoint."""

    CLICK = "CLICK"
    VIEW = "VIEW"


class AttributionModel(str, Enum):
    """Attribution model used to split a conversion across channels."""

    FIRST_TOUCH = "FIRST_TOUCH"
    LAST_TOUCH = "LAST_TOUCH"
    LINEAR = "LINEAR"  # Equal credit to all touchpoints
    TIME_DECAY = "TIME_DECAY"  # More credit to recent touchpoints
    POSITION_BASED = "POSITION_BASED"  # 40% first, 40% last, 20% middle
    BLENDED = "BLENDED"  # Declared, not implemented
    LAST_CLICK = "LAST_CLICK"  # Declared, not implemented


IMPLEMENTED_MODELS: tuple[AttributionModel, ...] = (
    AttributionModel.FIRST_TOUCH,
    AttributionModel.LAST_TOUCH,
    AttributionModel.LINEAR,
    AttributionModel.TIME_DECAY,
    AttributionModel.POSITION_BASED,
)

UNSUPPORTED_MODELS: frozenset[AttributionModel] = frozenset(
    {AttributionModel.BLENDED, AttributionModel.LAST_CLICK}
)


def _parse_timestamp(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"Invalid {field_name} format: {value}") from e
    raise ValueError(f"Missing or invalid {field_name}: {value!r}")


def _parse_float(data: dict[str, Any], key: str, default: float | None = None) -> float:
    if key not in data and default is None:
        raise ValueError(f"Missing required field: {key}")
    raw = data.get(key, default)
    try:
        return float(raw)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid {key}: {raw}") from e


@dataclass(frozen=True)
class Touchpoint:
    """
    One recorded ad interaction.

    Attribution groups touchpoints by ``channel`` (the free-text channel name).
    ``channel_type`` is carried along for display only.

    Example:
        touch = Touchpoint(
            channel="Google Search",
            channel_type=ChannelType.SEARCH,
            timestamp=datetime(2025, 1, 10, 9, 30),
            cost=1.25,
        )
    """

    channel: str
    channel_type: ChannelType
    timestamp: datetime
    cost: float = 0.0
    touchpoint_type: TouchpointType = TouchpointType.CLICK
    touchpoint_id: str | None = None
    campaign_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "touchpoint_id": self.touchpoint_id,
            "channel": self.channel,
            "channel_type": self.channel_type.value,
            "touchpoint_type": self.touchpoint_type.value,
            "timestamp": self.timestamp.isoformat(),
            "cost": self.cost,
            "campaign_id": self.campaign_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Touchpoint:
        """Create a Touchpoint from a dictionary.

        Raises:
            ValueError: If channel, channel type or timestamp is missing, or if the channel
                type, touchpoint type or cost is invalid.
        """
        for key in ("channel", "channel_type"):
            if not data.get(key):
                raise ValueError(f"Missing required field: {key}")

        try:
            channel_type = ChannelType(data["channel_type"])
            touchpoint_type = TouchpointType(data.get("touchpoint_type", TouchpointType.CLICK.value))
        except ValueError as e:
            raise ValueError(f"Invalid touchpoint enum value: {e}") from e

        return cls(
            channel=data["channel"],
            channel_type=channel_type,
            timestamp=_parse_timestamp(data.get("timestamp"), "timestamp"),
            cost=_parse_float(data, "cost", default=0.0),
            touchpoint_type=touchpoint_type,
            touchpoint_id=data.get("touchpoint_id"),
            campaign_id=data.get("campaign_id"),
        )


@dataclass(frozen=True)
class ConversionPath:
    """
    Ordered touchpoint history of one user, ending in a conversion.

    Touchpoints are expected in chronological order; the engine does not
    re-sort them. ``time_to_conversion`` is in hours and is computed upstream.
    """

    touchpoints: tuple[Touchpoint, ...]
    conversion_value: float
    conversion_date: datetime
    time_to_conversion: float = 0.0
    path_id: str | None = None
    user_id: str | None = None

    def __post_init__(self):
        # Accept lists from callers but store an immutable tuple
        if not isinstance(self.touchpoints, tuple):
            object.__setattr__(self, "touchpoints", tuple(self.touchpoints))

    def channel_cost(self, channel: str) -> float:
        """Total cost of every touchpoint on ``channel`` within this path."""
        return sum(t.cost for t in self.touchpoints if t.channel == channel)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "path_id": self.path_id,
            "user_id": self.user_id,
            "touchpoints": [t.to_dict() for t in self.touchpoints],
            "conversion_value": self.conversion_value,
            "conversion_date": self.conversion_date.isoformat(),
            "time_to_conversion": self.time_to_conversion,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConversionPath:
        """Create a ConversionPath from a dictionary.

        Args:
            data: Dictionary with ``touchpoints``, ``conversion_value`` and
                ``conversion_date`` keys.

        Returns:
            ConversionPath instance.

        Raises:
            ValueError: If a required field is missing or malformed.
        """
        return cls(
            touchpoints=tuple(Touchpoint.from_dict(t) for t in data.get("touchpoints", [])),
            conversion_value=_parse_float(data, "conversion_value"),
            conversion_date=_parse_timestamp(data.get("conversion_date"), "conversion_date"),
            time_to_conversion=_parse_float(data, "time_to_conversion", default=0.0),
            path_id=data.get("path_id"),
            user_id=data.get("user_id"),
        )


@dataclass(frozen=True)
class AttributionResult:
    """Accumulated attribution for one channel under one model.

    ``credit`` and ``conversions`` are identical sums of per-path credit.
    ``cost`` is not weighted by credit.
    """

    channel: str
    channel_type: ChannelType
    model: AttributionModel
    credit: float = 0.0
    revenue: float = 0.0
    cost: float = 0.0
    roas: float = 0.0
    conversions: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for downstream rendering."""
        return {
            "channel": self.channel,
            "channel_type": self.channel_type.value,
            "model": self.model.value,
            "credit": self.credit,
            "revenue": self.revenue,
            "cost": self.cost,
            "roas": self.roas,
            "conversions": self.conversions,
        }
