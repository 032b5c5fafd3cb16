"""
Significance estimation for incrementality tests.

Two z-tests, chosen by whether the control group had spend:
- Holdout (control spend is 0): Poisson difference of conversion counts
- Efficiency comparison (both groups spent): two-proportion test on
  conversions per dollar

The two-tailed p-value uses the Abramowitz-Stegun approximation of the
standard normal CDF (absolute error below 7.5e-8).
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

logger = logging.getLogger(__name__)

SIGNIFICANCE_LEVEL = 0.05
P_VALUE_FLOOR = 0.001
P_VALUE_CEILING = 1.0

# Abramowitz and Stegun 26.2.17
_P = 0.2316419
_PDF_SCALE = 0.3989423
_B1 = 0.3193815
_B2 = -0.3565638
_B3 = 1.781478
_B4 = -1.821256
_B5 = 1.330274


class SignificanceResult(NamedTuple):
    """Outcome of a significance test."""

    p_value: float
    is_significant: bool
    z_score: float


def normal_cdf(x: float) -> float:
    """Standard normal cumulative distribution function (approximation)."""
    t = 1 / (1 + _P * abs(x))
    d = _PDF_SCALE * math.exp(-x * x / 2)
    p = d * t * (_B1 + t * (_B2 + t * (_B3 + t * (_B4 + t * _B5))))
    return 1 - p if x > 0 else p


def holdout_z_score(control_conversions: float, test_conversions: float) -> float:
    """Z-score for a holdout test, treating conversions as Poisson counts."""
    variance = control_conversions + test_conversions
    if variance <= 0:
        return 0.0
    return abs(test_conversions - control_conversions) / math.sqrt(variance)


def efficiency_z_score(
    control_conversions: float,
    test_conversions: float,
    control_spend: float,
    test_spend: float,
) -> float:
    """
    Z-score comparing conversions per dollar between two spending groups.

    Returns 0 when the standard error is zero or undefined (no test spend,
    spends that cancel out, or a pooled rate outside [0, 1]).
    """
    if test_spend == 0:
        # 1 / test_spend makes the standard error infinite
        return 0.0

    p1 = control_conversions / control_spend
    p2 = test_conversions / test_spend

    total_spend = control_spend + test_spend
    if total_spend == 0:
        return 0.0

    pooled = (control_conversions + test_conversions) / total_spend
    variance = pooled * (1 - pooled) * (1 / control_spend + 1 / test_spend)
    if variance <= 0:
        return 0.0

    standard_error = math.sqrt(variance)
    return abs(p1 - p2) / standard_error


def two_tailed_p_value(z: float) -> float:
    """Two-tailed p-value for a non-negative z-score, unclamped."""
    if z > 0:
        return 2 * (1 - normal_cdf(z))
    return 1.0


def calculate_significance(
    control_conversions: float,
    test_conversions: float,
    control_spend: float,
    test_spend: float,
) -> SignificanceResult:
    """
    Test whether the difference between control and test is significant.

    Args:
        control_conversions: Conversions in the control group
        test_conversions: Conversions in the test group
        control_spend: Media spend in the control group (0 for a holdout)
        test_spend: Media spend in the test group

    Returns:
        SignificanceResult with the p-value clamped to [0.001, 1.0] and
        ``is_significant`` set when p < 0.05.
    """
    if control_spend == 0:
        z = holdout_z_score(control_conversions, test_conversions)
    else:
        z = efficiency_z_score(control_conversions, test_conversions, control_spend, test_spend)

    raw_p_value = two_tailed_p_value(z)
    p_value = max(P_VALUE_FLOOR, min(P_VALUE_CEILING, raw_p_value))
    is_significant = raw_p_value < SIGNIFICANCE_LEVEL

    logger.debug(f"Significance test: z={z:.4f}, p={p_value:.4f}, significant={is_significant}")

    return SignificanceResult(p_value=p_value, is_significant=is_significant, z_score=z)
