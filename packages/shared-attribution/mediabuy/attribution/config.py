"""Configuration for the attribution engine."""

from __future__ import annotations

import os

from pydantic import BaseModel, field_validator

DEFAULT_HALF_LIFE_DAYS = 7.0


class AttributionConfig(BaseModel):
    """Configuration for AttributionEngine."""

    half_life_days: float = DEFAULT_HALF_LIFE_DAYS  # Time-decay constant
    max_workers: int = 1  # 1 = serial per-path credit computation

    @field_validator("half_life_days")
    @classmethod
    def _positive_half_life(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("half_life_days must be positive")
        return value

    @field_validator("max_workers")
    @classmethod
    def _at_least_one_worker(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_workers must be at least 1")
        return value

    @property
    def half_life_seconds(self) -> float:
        """Half-life expressed in seconds."""
        return self.half_life_days * 24 * 60 * 60

    @classmethod
    def from_env(cls) -> AttributionConfig:
        """Load configuration from environment variables."""
        return cls(
            half_life_days=float(os.getenv("MEDIABUY_HALF_LIFE_DAYS", DEFAULT_HALF_LIFE_DAYS)),
            max_workers=int(os.getenv("MEDIABUY_ATTRIBUTION_WORKERS", "1")),
        )
