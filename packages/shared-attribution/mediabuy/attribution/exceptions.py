"""Custom exceptions for attribution."""

from __future__ import annotations


class AttributionError(Exception):
    """Base exception for attribution errors."""

    pass


class UnsupportedModelError(AttributionError, ValueError):
    """Raised when a declared but unimplemented attribution model is requested."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(
            f"Attribution model {model!r} is declared but not implemented; "
            "choose one of FIRST_TOUCH, LAST_TOUCH, LINEAR, TIME_DECAY, POSITION_BASED"
        )
