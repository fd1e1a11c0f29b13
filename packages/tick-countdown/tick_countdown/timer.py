"""CountdownTimer - whole-second countdown driven by a periodic scheduler."""
from __future__ import annotations

import logging
import operator

from tick_countdown.config import CountdownConfig
from tick_countdown.scheduler import PeriodicScheduler
from tick_countdown.types import InvalidDurationError, RunState, TickHandle

logger = logging.getLogger(__name__)


class CountdownTimer:
    """Counts down from a whole number of seconds to zero.

    The timer owns at most one scheduler registration, present exactly
    while it is RUNNING. Reaching zero stops it like an explicit stop();
    completion is observable as remaining_time == 0.

    Call stop() before discarding a running timer so the registration is
    released.
    """

    def __init__(
        self,
        scheduler: PeriodicScheduler,
        config: CountdownConfig | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._config = config if config is not None else CountdownConfig()
        self._duration = 0
        self._remaining = 0
        self._state = RunState.IDLE
        self._handle: TickHandle | None = None
        # Published once a registration is in place, bumped on cancel; ticks carrying
        # any other value are stale.
        self._generation = 0

    @property
    def config(self) -> CountdownConfig:
        return self._config

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def remaining_time(self) -> int:
        return self._remaining

    @property
    def state(self) -> RunState:
        return self._state

    def is_running(self) -> bool:
        return self._state is RunState.RUNNING

    def is_paused(self) -> bool:
        return self._state is RunState.PAUSED

    def is_finished(self) -> bool:
        """True once a started countdown has run down to zero and stopped."""
        return self._state is RunState.IDLE and self._duration > 0 and self._remaining == 0

    def start(self, duration: int) -> None:
        """Start (or restart) the countdown from duration seconds.

        Any previous countdown is discarded, whatever its state. Raises
        InvalidDurationError, without touching the timer, unless duration
        is a positive whole number (any type supporting __index__, bools
        excluded).
        """
        if isinstance(duration, bool):
            raise InvalidDurationError(duration)
        try:
            seconds = operator.index(duration)
        except TypeError:
            raise InvalidDurationError(duration) from None
        if seconds <= 0:
            raise InvalidDurationError(duration)
        duration = seconds
        self._cancel()
        self._duration = duration
        self._remaining = duration
        self._register()
        logger.debug("Countdown started at %ds", duration)

    def stop(self) -> None:
        """Stop counting. Remaining time is kept."""
        self._cancel()
        if self._state is not RunState.IDLE:
            logger.debug("Countdown stopped at %ds", self._remaining)
        self._state = RunState.IDLE

    def reset(self) -> None:
        """Stop and rewind remaining time to the last started duration."""
        self.stop()
        self._remaining = self._duration

    def pause(self) -> None:
        """Freeze a running countdown. No-op unless RUNNING."""
        if self._state is not RunState.RUNNING:
            return
        self._cancel()
        self._state = RunState.PAUSED
        logger.debug("Countdown paused at %ds", self._remaining)

    def resume(self) -> None:
        """Continue a paused countdown. No-op unless PAUSED."""
        if self._state is not RunState.PAUSED:
            return
        self._register()
        logger.debug("Countdown resumed at %ds", self._remaining)

    def _register(self) -> None:
        # Ticks for the new registration are ignored until the generation is
        # published, which happens only once handle and state are in place.
        generation = self._generation + 1
        handle = self._scheduler.register_periodic(
            lambda: self._tick(generation), self._config.period_ms,
        )
        self._handle = handle
        self._state = RunState.RUNNING
        self._generation = generation

    def _cancel(self) -> None:
        handle, self._handle = self._handle, None
        self._generation += 1
        self._scheduler.cancel_periodic(handle)

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self._state is not RunState.RUNNING:
            return
        if self._remaining > 0:
            self._remaining -= 1
        if self._remaining == 0:
            self.stop()
            logger.info("Countdown of %ds finished", self._duration)

    def __repr__(self) -> str:
        return (
            f"CountdownTimer(state={self._state.name}, "
            f"remaining={self._remaining}, duration={self._duration})"
        )
