from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class Timer:
    """Play clock for one session.

    ``started_at`` is scheduler time at the first flip; ``elapsed_seconds`` is
    the whole-second value last sampled and is what players and the scorer see.
    """
    session_id: int = 0
    running: bool = False
    started_at: Optional[float] = None
    elapsed_seconds: int = 0
    sample_handle: Optional[int] = None
