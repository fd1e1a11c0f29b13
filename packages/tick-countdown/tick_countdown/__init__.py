"""tick-countdown - Whole-second countdown timer with an injectable scheduler."""
from __future__ import annotations

from tick_countdown.config import CountdownConfig
from tick_countdown.scheduler import ManualScheduler, PeriodicScheduler, ThreadingScheduler
from tick_countdown.timer import CountdownTimer
from tick_countdown.types import InvalidDurationError, RunState, TickHandle

__all__ = [
    "CountdownTimer",
    "CountdownConfig",
    "RunState",
    "InvalidDurationError",
    "TickHandle",
    "PeriodicScheduler",
    "ManualScheduler",
    "ThreadingScheduler",
]
