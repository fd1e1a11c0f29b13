"""Countdown configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CountdownConfig:
    """Immutable configuration for a CountdownTimer.

    Attributes:
        period_ms: Interval handed to the scheduler for each tick. Every
            delivered tick counts as one second regardless of this value.
    """

    period_ms: int = 1000

    def __post_init__(self) -> None:
        if isinstance(self.period_ms, bool) or not isinstance(self.period_ms, int):
            raise ValueError("period_ms must be an integer")
        if self.period_ms <= 0:
            raise ValueError("period_ms must be positive")
