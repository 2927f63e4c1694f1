"""Tick-driven, cancellable delayed bus events."""
from __future__ import annotations

import logging
from typing import Any

from esper import World

from concentration.components.scheduled_event import ScheduledEvent
from concentration.events.bus import EVENT_TICK, EventBus

logger = logging.getLogger(__name__)


class SchedulerSystem:
    """Emits bus events once enough tick time has passed.

    Each pending event is its own entity carrying a ``ScheduledEvent``; the
    entity id doubles as the cancellation handle. Every fired event receives
    the ``session_id`` it was scheduled for so handlers can drop stale work.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        # Total tick time seen so far; the clock every timed system reads.
        self.now = 0.0
        setattr(self.world, "scheduler", self)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def schedule(
        self,
        event_name: str,
        delay: float,
        *,
        session_id: int,
        interval: float | None = None,
        **payload: Any,
    ) -> int | None:
        """Queue ``event_name`` to fire after ``delay`` seconds of tick time.

        A non-positive delay fires immediately and returns ``None``.
        """
        if interval is not None and interval <= 0.0:
            raise ValueError("interval must be positive")
        if delay <= 0.0 and interval is None:
            self.event_bus.emit(event_name, session_id=session_id, **payload)
            return None
        task = ScheduledEvent(
            event_name=event_name,
            remaining=float(delay),
            session_id=session_id,
            interval=interval,
            payload=dict(payload),
        )
        return self.world.create_entity(task)

    def cancel(self, handle: int | None) -> bool:
        if handle is None or not self.world.entity_exists(handle):
            return False
        if not self.world.has_component(handle, ScheduledEvent):
            return False
        self.world.delete_entity(handle, immediate=True)
        return True

    def cancel_session(self, session_id: int) -> int:
        """Drop every pending event scheduled for ``session_id``."""
        ents = [ent for ent, task in self.world.get_component(ScheduledEvent) if task.session_id == session_id]
        for ent in ents:
            self.world.delete_entity(ent, immediate=True)
        if ents:
            logger.debug("Cancelled %d scheduled event(s) for session %s", len(ents), session_id)
        return len(ents)

    def cancel_all(self) -> int:
        ents = [ent for ent, _ in self.world.get_component(ScheduledEvent)]
        for ent in ents:
            self.world.delete_entity(ent, immediate=True)
        return len(ents)

    def pending(self, event_name: str | None = None) -> list[ScheduledEvent]:
        return [
            task for _, task in self.world.get_component(ScheduledEvent)
            if event_name is None or task.event_name == event_name
        ]

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        if dt <= 0.0:
            return
        self.now += dt
        tasks = list(self.world.get_component(ScheduledEvent))
        for _, task in tasks:
            task.remaining -= dt
        # Earliest-due first so a single long tick keeps scheduling order.
        due = sorted((item for item in tasks if item[1].remaining <= 0.0), key=lambda item: item[1].remaining)
        for ent, task in due:
            self._fire(ent, task)

    def _fire(self, ent: int, task: ScheduledEvent) -> None:
        while self._alive(ent, task) and task.remaining <= 0.0:
            if task.interval is None:
                self.world.delete_entity(ent, immediate=True)
            else:
                task.remaining += task.interval
            self.event_bus.emit(task.event_name, session_id=task.session_id, **task.payload)
            if task.interval is None:
                return

    def _alive(self, ent: int, task: ScheduledEvent) -> bool:
        # Handlers may cancel tasks (including this one) while we are firing.
        if not self.world.entity_exists(ent):
            return False
        try:
            return self.world.component_for_entity(ent, ScheduledEvent) is task
        except KeyError:
            return False
