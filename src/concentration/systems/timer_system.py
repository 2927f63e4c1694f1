from __future__ import annotations

import logging

from esper import World

from concentration.components.timer import Timer
from concentration.config import GameSettings
from concentration.events.bus import (
    EVENT_TIMER_SAMPLE_TICK,
    EVENT_TIMER_SAMPLED,
    EVENT_TIMER_START,
    EVENT_TIMER_STOP,
    EventBus,
)

logger = logging.getLogger(__name__)


class TimerSystem:
    """Measures play time for the current session on the scheduler clock.

    The clock runs between the first flip and completion. Samples are whole
    seconds taken on a repeating scheduled event and never decrease; once
    stopped the value is frozen until a new session replaces the ``Timer``.
    """

    def __init__(self, world: World, event_bus: EventBus, *, settings: GameSettings | None = None):
        self.world = world
        self.event_bus = event_bus
        self._settings = settings or getattr(world, "settings", None) or GameSettings()
        self.event_bus.subscribe(EVENT_TIMER_START, self.on_timer_start)
        self.event_bus.subscribe(EVENT_TIMER_STOP, self.on_timer_stop)
        self.event_bus.subscribe(EVENT_TIMER_SAMPLE_TICK, self.on_sample_tick)

    def on_timer_start(self, sender, **payload) -> None:
        timer = self._timer_for(payload.get("session_id"))
        if timer is None or timer.running or timer.started_at is not None:
            return
        scheduler = self._scheduler()
        timer.running = True
        timer.started_at = scheduler.now
        interval = self._settings.timer_sample_interval
        timer.sample_handle = scheduler.schedule(
            EVENT_TIMER_SAMPLE_TICK,
            interval,
            session_id=timer.session_id,
            interval=interval,
        )
        logger.debug("Timer started for session %s", timer.session_id)

    def on_timer_stop(self, sender, **payload) -> None:
        timer = self._timer_for(payload.get("session_id"))
        if timer is None or not timer.running:
            return
        self._sample(timer)
        timer.running = False
        self._scheduler().cancel(timer.sample_handle)
        timer.sample_handle = None
        logger.debug("Timer stopped for session %s at %ss", timer.session_id, timer.elapsed_seconds)

    def on_sample_tick(self, sender, **payload) -> None:
        timer = self._timer_for(payload.get("session_id"))
        if timer is None or not timer.running:
            return
        self._sample(timer)

    def elapsed(self, timer: Timer) -> float:
        """Unrounded play time; frozen at the last sample once stopped."""
        if timer.started_at is None:
            return 0.0
        if not timer.running:
            return float(timer.elapsed_seconds)
        return max(0.0, self._scheduler().now - timer.started_at)

    def _sample(self, timer: Timer) -> None:
        value = int(self.elapsed(timer))
        if value <= timer.elapsed_seconds:
            return
        timer.elapsed_seconds = value
        self.event_bus.emit(
            EVENT_TIMER_SAMPLED,
            session_id=timer.session_id,
            elapsed_seconds=timer.elapsed_seconds,
        )

    def _timer_for(self, session_id: int | None) -> Timer | None:
        if session_id is None:
            return None
        for _, timer in self.world.get_component(Timer):
            if timer.session_id == session_id:
                return timer
        logger.debug("Ignoring timer request for stale session %s", session_id)
        return None

    def _scheduler(self):
        scheduler = getattr(self.world, "scheduler", None)
        if scheduler is None:
            raise RuntimeError("SchedulerSystem must be created before TimerSystem is used")
        return scheduler
