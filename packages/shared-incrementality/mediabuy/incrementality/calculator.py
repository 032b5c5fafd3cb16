"""
Incrementality calculator - lift, significance and a recommendation.

Lift is measured on conversion volume: (test - control) / control.
"""

from __future__ import annotations

import logging

from mediabuy.incrementality.schema import (
    IncrementalityResult,
    IncrementalityTest,
    Recommendation,
)
from mediabuy.incrementality.significance import calculate_significance

logger = logging.getLogger(__name__)

SCALE_UP_LIFT = 20.0  # percent
SCALE_DOWN_LIFT = -10.0  # percent

RECOMMENDATION_MESSAGES: dict[Recommendation, str] = {
    Recommendation.SCALE_UP: "Strong positive lift detected. Consider increasing investment.",
    Recommendation.SCALE_DOWN: "Negative lift detected. Consider reducing or pausing investment.",
    Recommendation.MAINTAIN: "Modest positive lift. Continue monitoring performance.",
    Recommendation.MORE_DATA_NEEDED: (
        "Results not statistically significant. Collect more data before making changes."
    ),
}


def recommend(lift: float, is_significant: bool) -> Recommendation:
    """Map lift and significance to a recommendation, in priority order."""
    if not is_significant:
        return Recommendation.MORE_DATA_NEEDED
    if lift > SCALE_UP_LIFT:
        return Recommendation.SCALE_UP
    if lift < SCALE_DOWN_LIFT:
        return Recommendation.SCALE_DOWN
    return Recommendation.MAINTAIN


def calculate_incrementality(test: IncrementalityTest) -> IncrementalityResult:
    """
    Calculate incrementality metrics for one test.

    Args:
        test: Control and test group aggregates

    Returns:
        IncrementalityResult. Lift is 0 when the control group had no
        conversions.
    """
    control = test.control_group
    exposed = test.test_group

    lift_absolute = exposed.conversions - control.conversions
    lift = lift_absolute / control.conversions * 100 if control.conversions > 0 else 0.0

    significance = calculate_significance(
        control.conversions,
        exposed.conversions,
        control.spend,
        exposed.spend,
    )
    recommendation = recommend(lift, significance.is_significant)

    logger.debug(
        f"Incrementality for {test.channel or test.test_id or 'test'}: "
        f"lift={lift:.2f}%, p={significance.p_value:.4f}, {recommendation.value}"
    )

    return IncrementalityResult(
        lift=lift,
        lift_absolute=lift_absolute,
        confidence=1 - significance.p_value,
        is_significant=significance.is_significant,
        p_value=significance.p_value,
        recommendation=recommendation,
    )


# Public name used by reporting views
evaluate_incrementality = calculate_incrementality


def format_lift(lift: float) -> str:
    """Format a lift percentage with an explicit sign, e.g. ``+12.5%``."""
    sign = "+" if lift >= 0 else ""
    return f"{sign}{lift:.1f}%"


def recommendation_message(recommendation: Recommendation) -> str:
    """Human-readable advice for a recommendation."""
    return RECOMMENDATION_MESSAGES[recommendation]
