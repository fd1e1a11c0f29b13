"""Shared types for the countdown timer."""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable

TickHandle = Any
TickCallback = Callable[[], None]


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class InvalidDurationError(ValueError):
    """Raised by start() when the duration is not a positive whole number of seconds."""

    def __init__(self, duration: object) -> None:
        self.duration = duration
        super().__init__(f"Duration must be a positive integer, got {duration!r}")
