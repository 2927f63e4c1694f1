from dataclasses import dataclass
from enum import Enum, auto


class TileStatus(Enum):
    HIDDEN = auto()
    FLIPPED = auto()
    MATCHED = auto()


@dataclass(slots=True)
class Tile:
    """One board cell.

    ``index`` is the tile's position in the dealt sequence; ``session_id`` ties
    the entity to the session that dealt it so stale tiles can be purged.
    """
    index: int
    symbol: str
    session_id: int
    status: TileStatus = TileStatus.HIDDEN
