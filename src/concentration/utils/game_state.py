from __future__ import annotations

import logging

from esper import World

from concentration.components.game_state import GamePhase, GameSession
from concentration.events.bus import EVENT_PHASE_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_session_entity(world: World) -> int | None:
    for entity, _ in world.get_component(GameSession):
        return entity
    return None


def get_session(world: World) -> GameSession | None:
    for _, session in world.get_component(GameSession):
        return session
    return None


def is_current_session(world: World, session_id: int | None) -> bool:
    """True when ``session_id`` names the session the world currently owns."""
    session = get_session(world)
    return session is not None and session_id is not None and session.session_id == session_id


def set_phase(world: World, event_bus: EventBus, phase: GamePhase) -> None:
    """Update the session phase and emit a change event when it differs."""

    session = get_session(world)
    if session is None:
        return
    previous_phase = session.phase
    if previous_phase == phase:
        return
    session.phase = phase
    logger.debug("Session %s phase %s -> %s", session.session_id, previous_phase.name, phase.name)
    event_bus.emit(
        EVENT_PHASE_CHANGED,
        session_id=session.session_id,
        previous_phase=previous_phase,
        new_phase=phase,
    )
