"""
AttributionEngine - aggregate per-path credit into per-channel results.

Provides:
- Per-channel credit, revenue, cost, ROAS and conversions for one model
- Side-by-side comparison across all implemented models
- Optional thread fan-out of per-path credit computation
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from mediabuy.attribution.config import AttributionConfig
from mediabuy.attribution.credit import Credits, allocate_credit, resolve_model
from mediabuy.attribution.schema import (
    IMPLEMENTED_MODELS,
    AttributionModel,
    AttributionResult,
    ChannelType,
    ConversionPath,
)

logger = logging.getLogger(__name__)


@dataclass
class _ChannelTotals:
    """Running totals for one channel during aggregation."""

    channel_type: ChannelType
    credit: float = 0.0
    revenue: float = 0.0
    cost: float = 0.0
    conversions: float = 0.0


class AttributionEngine:
    """
    Multi-touch attribution across conversion paths.

    Example:
        engine = AttributionEngine()
        results = engine.calculate_attribution(paths, AttributionModel.LINEAR)
        by_model = engine.compare_models(paths)
    """

    def __init__(self, config: AttributionConfig | None = None):
        self.config = config or AttributionConfig()

    def calculate_attribution(
        self,
        paths: Sequence[ConversionPath],
        model: AttributionModel | str,
    ) -> list[AttributionResult]:
        """
        Calculate attribution for all paths using one model.

        Args:
            paths: Conversion paths to attribute
            model: Attribution model; unknown identifiers fall back to LINEAR

        Returns:
            One AttributionResult per channel, in order of first appearance.
            An empty input produces an empty list.

        Raises:
            UnsupportedModelError: If model is BLENDED or LAST_CLICK.
        """
        resolved = resolve_model(model)
        path_credits = self._path_credits(paths, resolved)

        totals: dict[str, _ChannelTotals] = {}
        for path, credits in zip(paths, path_credits):
            for channel, credit in credits.items():
                entry = totals.get(channel)
                if entry is None:
                    entry = _ChannelTotals(channel_type=self._channel_type(path, channel))
                    totals[channel] = entry

                entry.credit += credit
                entry.revenue += path.conversion_value * credit
                # Cost is the channel's full spend in this path, not credit-weighted
                entry.cost += path.channel_cost(channel)
                entry.conversions += credit

        logger.debug(
            f"Attributed {len(paths)} paths across {len(totals)} channels using {resolved.value}"
        )

        return [
            AttributionResult(
                channel=channel,
                channel_type=entry.channel_type,
                model=resolved,
                credit=entry.credit,
                revenue=entry.revenue,
                cost=entry.cost,
                roas=entry.revenue / entry.cost if entry.cost > 0 else 0.0,
                conversions=entry.conversions,
            )
            for channel, entry in totals.items()
        ]

    def compare_models(
        self,
        paths: Sequence[ConversionPath],
    ) -> dict[AttributionModel, list[AttributionResult]]:
        """Run every implemented model over the same paths."""
        return {
            model: self.calculate_attribution(paths, model)
            for model in IMPLEMENTED_MODELS
        }

    def _path_credits(
        self,
        paths: Sequence[ConversionPath],
        model: AttributionModel,
    ) -> list[Credits]:
        """Per-path credits, in input order."""
        half_life = self.config.half_life_seconds

        def allocate(path: ConversionPath) -> Credits:
            return allocate_credit(path, model, half_life)

        if self.config.max_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                return list(executor.map(allocate, paths))
        return [allocate(path) for path in paths]

    @staticmethod
    def _channel_type(path: ConversionPath, channel: str) -> ChannelType:
        return next(t.channel_type for t in path.touchpoints if t.channel == channel)


def compute_attribution(
    paths: Sequence[ConversionPath],
    model: AttributionModel | str,
    config: AttributionConfig | None = None,
) -> list[AttributionResult]:
    """Attribute paths with a single model using a one-off engine."""
    return AttributionEngine(config).calculate_attribution(paths, model)


def compare_all_models(
    paths: Sequence[ConversionPath],
    config: AttributionConfig | None = None,
) -> dict[AttributionModel, list[AttributionResult]]:
    """Attribute paths with every implemented model."""
    return AttributionEngine(config).compare_models(paths)
