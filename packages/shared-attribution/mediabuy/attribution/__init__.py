"""
Mediabuy Attribution - multi-touch credit allocation across media channels.

Provides:
- Conversion path and touchpoint schema
- Five deterministic attribution models (first-touch, last-touch, linear,
  time-decay, position-based)
- Per-channel aggregation of credit, revenue, cost and ROAS
- Side-by-side model comparison and DataFrame helpers for reporting

Usage:
    from mediabuy.attribution import (
        AttributionEngine,
        AttributionModel,
        ConversionPath,
    )

    engine = AttributionEngine()
    results = engine.calculate_attribution(paths, AttributionModel.TIME_DECAY)
    comparison = engine.compare_models(paths)
"""

from mediabuy.attribution.config import AttributionConfig
from mediabuy.attribution.credit import allocate_credit
from mediabuy.attribution.engine import (
    AttributionEngine,
    compare_all_models,
    compute_attribution,
)
from mediabuy.attribution.exceptions import (
    AttributionError,
    UnsupportedModelError,
)
from mediabuy.attribution.reporting import (
    PathSummary,
    comparison_frame,
    results_to_frame,
    sort_by_revenue,
    summarize_paths,
)
from mediabuy.attribution.schema import (
    IMPLEMENTED_MODELS,
    AttributionModel,
    AttributionResult,
    ChannelType,
    ConversionPath,
    Touchpoint,
    TouchpointType,
)

__all__ = [
    # Schema
    "Touchpoint",
    "TouchpointType",
    "ChannelType",
    "ConversionPath",
    "AttributionModel",
    "AttributionResult",
    "IMPLEMENTED_MODELS",
    # Engine
    "AttributionEngine",
    "AttributionConfig",
    "allocate_credit",
    "compute_attribution",
    "compare_all_models",
    # Errors
    "AttributionError",
    "UnsupportedModelError",
    # Reporting
    "PathSummary",
    "summarize_paths",
    "sort_by_revenue",
    "results_to_frame",
    "comparison_frame",
]
