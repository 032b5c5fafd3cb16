"""
Credit allocation - split one conversion path's credit across its channels.

Supports five deterministic models:
- First-touch: 100% to the first touchpoint
- Last-touch: 100% to the last touchpoint
- Linear: Equal credit to all touchpoints
- Time-decay: Exponential recency weighting (7-day constant by default)
- Position-based: 40% first, 40% last, 20% divided among the middle

Every strategy returns a mapping of channel name to credit. Repeated channels
within a path are summed into one entry. A path with no touchpoints yields an
empty mapping.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from mediabuy.attribution.config import DEFAULT_HALF_LIFE_DAYS
from mediabuy.attribution.exceptions import UnsupportedModelError
from mediabuy.attribution.schema import (
    UNSUPPORTED_MODELS,
    AttributionModel,
    ConversionPath,
)

logger = logging.getLogger(__name__)

DEFAULT_HALF_LIFE_SECONDS = DEFAULT_HALF_LIFE_DAYS * 24 * 60 * 60

POSITION_ENDPOINT_SHARE = 0.4
POSITION_MIDDLE_SHARE = 0.2

Credits = dict[str, float]


def _add(credits: Credits, channel: str, amount: float) -> None:
    credits[channel] = credits.get(channel, 0.0) + amount


def first_touch(path: ConversionPath) -> Credits:
    """Attribute 100% to the first touchpoint in the path."""
    if not path.touchpoints:
        return {}
    return {path.touchpoints[0].channel: 1.0}


def last_touch(path: ConversionPath) -> Credits:
    """Attribute 100% to the last touchpoint in the path."""
    if not path.touchpoints:
        return {}
    return {path.touchpoints[-1].channel: 1.0}


def linear(path: ConversionPath) -> Credits:
    """Distribute credit equally across all touchpoints."""
    if not path.touchpoints:
        return {}

    credits: Credits = {}
    per_touch = 1.0 / len(path.touchpoints)
    for touch in path.touchpoints:
        _add(credits, touch.channel, per_touch)
    return credits


def time_decay(
    path: ConversionPath,
    half_life_seconds: float = DEFAULT_HALF_LIFE_SECONDS,
) -> Credits:
    """
    More credit to touchpoints closer to the conversion.

    Each touchpoint is weighted ``exp(-gap / half_life)`` where ``gap`` is the
    time between the touchpoint and the conversion. Weights are normalized to
    sum to 1.0. Touchpoints after the conversion get a weight above 1.0 and are
    not rejected.

    Args:
        path: Conversion path to attribute
        half_life_seconds: Decay constant in seconds

    Returns:
        Mapping of channel to credit
    """
    if not path.touchpoints:
        return {}

    exponents = [
        -(path.conversion_date - touch.timestamp).total_seconds() / half_life_seconds
        for touch in path.touchpoints
    ]

    try:
        weights = [math.exp(x) for x in exponents]
        total_weight = sum(weights)
    except OverflowError:
        total_weight = math.inf

    if total_weight == 0.0 or not math.isfinite(total_weight):
        # Extreme gaps: weigh relative to the most recent touchpoint instead
        peak = max(exponents)
        weights = [math.exp(x - peak) for x in exponents]
        total_weight = sum(weights)

    credits: Credits = {}
    for touch, weight in zip(path.touchpoints, weights):
        _add(credits, touch.channel, weight / total_weight)
    return credits


def position_based(path: ConversionPath) -> Credits:
    """
    40% to first, 40% to last, 20% split evenly across the middle.

    A single touchpoint gets 100%. Two touchpoints get 40% each and the
    remaining 20% is not redistributed.
    """
    touchpoints = path.touchpoints

    if not touchpoints:
        return {}

    if len(touchpoints) == 1:
        return {touchpoints[0].channel: 1.0}

    if len(touchpoints) == 2:
        # Assigned, not summed: a repeated channel keeps a single 40% share
        credits = {touchpoints[0].channel: POSITION_ENDPOINT_SHARE}
        credits[touchpoints[1].channel] = POSITION_ENDPOINT_SHARE
        return credits

    credits = {}
    _add(credits, touchpoints[0].channel, POSITION_ENDPOINT_SHARE)
    _add(credits, touchpoints[-1].channel, POSITION_ENDPOINT_SHARE)

    middle = touchpoints[1:-1]
    per_middle = POSITION_MIDDLE_SHARE / len(middle)
    for touch in middle:
        _add(credits, touch.channel, per_middle)
    return credits


_STRATEGIES: dict[AttributionModel, Callable[[ConversionPath], Credits]] = {
    AttributionModel.FIRST_TOUCH: first_touch,
    AttributionModel.LAST_TOUCH: last_touch,
    AttributionModel.LINEAR: linear,
    AttributionModel.POSITION_BASED: position_based,
}


def resolve_model(model: AttributionModel | str) -> AttributionModel:
    """
    Resolve a model identifier to an implemented AttributionModel.

    Unrecognized identifiers fall back to LINEAR.

    Raises:
        UnsupportedModelError: If the model is declared but not implemented
            (BLENDED, LAST_CLICK).
    """
    resolved: AttributionModel | None
    if isinstance(model, AttributionModel):
        resolved = model
    else:
        try:
            resolved = AttributionModel(model)
        except ValueError:
            resolved = None

    if resolved is None:
        logger.warning(f"Unknown attribution model {model!r}, falling back to LINEAR")
        return AttributionModel.LINEAR

    if resolved in UNSUPPORTED_MODELS:
        raise UnsupportedModelError(resolved.value)

    return resolved


def allocate_credit(
    path: ConversionPath,
    model: AttributionModel | str,
    half_life_seconds: float = DEFAULT_HALF_LIFE_SECONDS,
) -> Credits:
    """
    Compute per-channel credit for a single conversion path.

    Args:
        path: Conversion path to attribute
        model: Attribution model (enum member or its string value)
        half_life_seconds: Decay constant used by the time-decay model

    Returns:
        Mapping of channel name to credit. Sums to 1.0 for non-empty paths,
        except two-touchpoint position-based paths.
    """
    resolved = resolve_model(model)
    if resolved == AttributionModel.TIME_DECAY:
        return time_decay(path, half_life_seconds)
    return _STRATEGIES[resolved](path)
