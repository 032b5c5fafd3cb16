"""
Mediabuy Incrementality - lift and statistical significance of media tests.

Provides:
- Test and result schema
- Holdout and efficiency-comparison z-tests
- Lift calculation with SCALE_UP / SCALE_DOWN / MAINTAIN / MORE_DATA_NEEDED
  recommendations

Usage:
    from mediabuy.incrementality import (
        GroupMetrics,
        IncrementalityTest,
        evaluate_incrementality,
    )

    result = evaluate_incrementality(
        IncrementalityTest(
            control_group=GroupMetrics(conversions=100),
            test_group=GroupMetrics(conversions=150, spend=5_000),
        )
    )
"""

from mediabuy.incrementality.calculator import (
    calculate_incrementality,
    evaluate_incrementality,
    format_lift,
    recommend,
    recommendation_message,
)
from mediabuy.incrementality.schema import (
    GroupMetrics,
    IncrementalityResult,
    IncrementalityTest,
    Recommendation,
)
from mediabuy.incrementality.significance import (
    SignificanceResult,
    calculate_significance,
    normal_cdf,
)

__all__ = [
    # Schema
    "GroupMetrics",
    "IncrementalityTest",
    "IncrementalityResult",
    "Recommendation",
    # Calculation
    "calculate_incrementality",
    "evaluate_incrementality",
    "recommend",
    "calculate_significance",
    "SignificanceResult",
    "normal_cdf",
    # Formatting
    "format_lift",
    "recommendation_message",
]
