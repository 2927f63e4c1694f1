from dataclasses import dataclass, field
from typing import Any, Dict, Optional

@dataclass(slots=True)
class ScheduledEvent:
    """Bus event waiting for enough tick time to elapse.

    ``interval`` re-arms the event after it fires; ``None`` means one-shot.
    """
    event_name: str
    remaining: float
    session_id: int
    interval: Optional[float] = None
    payload: Dict[str, Any] = field(default_factory=dict)
