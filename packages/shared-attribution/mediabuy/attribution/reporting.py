"""
Attribution reporting helpers - shape engine output for dashboards.

Each helper takes engine inputs or outputs and returns plain values or
pandas DataFrames. None of them feed back into the engine.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import pandas as pd
from mediabuy.attribution.schema import (
    AttributionModel,
    AttributionResult,
    ConversionPath,
)

RESULT_COLUMNS = [
    "channel",
    "channel_type",
    "model",
    "credit",
    "revenue",
    "cost",
    "roas",
    "conversions",
]


@dataclass(frozen=True)
class PathSummary:
    """Headline numbers for a set of conversion paths."""

    total_conversions: int
    total_revenue: float
    avg_touchpoints: float
    avg_days_to_conversion: float


def summarize_paths(paths: Sequence[ConversionPath]) -> PathSummary:
    """
    Summarize a set of conversion paths.

    Averages divide by ``max(1, len(paths))`` so an empty input yields zeros.
    """
    count = len(paths)
    denominator = max(1, count)
    avg_hours = sum(p.time_to_conversion for p in paths) / denominator

    return PathSummary(
        total_conversions=count,
        total_revenue=sum((p.conversion_value for p in paths), 0.0),
        avg_touchpoints=sum(len(p.touchpoints) for p in paths) / denominator,
        avg_days_to_conversion=avg_hours / 24,
    )


def sort_by_revenue(results: Sequence[AttributionResult]) -> list[AttributionResult]:
    """Return results ordered by attributed revenue, highest first."""
    return sorted(results, key=lambda r: r.revenue, reverse=True)


def results_to_frame(results: Sequence[AttributionResult]) -> pd.DataFrame:
    """Convert attribution results to a DataFrame, one row per result."""
    if not results:
        return pd.DataFrame(columns=RESULT_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in results], columns=RESULT_COLUMNS)


def comparison_frame(
    comparison: Mapping[AttributionModel, Sequence[AttributionResult]],
    metric: str = "roas",
) -> pd.DataFrame:
    """
    Pivot a model comparison into a channel-by-model table.

    Args:
        comparison: Output of ``AttributionEngine.compare_models``
        metric: Result column to tabulate (credit, revenue, cost, roas, conversions)

    Returns:
        DataFrame indexed by channel with one column per model. Channels a
        model never credited are filled with 0.

    Raises:
        ValueError: If metric is not a numeric result column.
    """
    numeric = RESULT_COLUMNS[3:]
    if metric not in numeric:
        raise ValueError(f"Unknown metric: {metric}. Expected one of {', '.join(numeric)}")

    frames = [results_to_frame(results) for results in comparison.values()]
    combined = pd.concat(frames, ignore_index=True) if frames else results_to_frame([])
    if combined.empty:
        return pd.DataFrame()

    table = combined.pivot_table(
        index="channel",
        columns="model",
        values=metric,
        aggfunc="sum",
        fill_value=0.0,
    )
    # Keep model columns in comparison order
    ordered = [model.value for model in comparison if model.value in table.columns]
    return table[ordered]
