from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class Board:
    pair_count: int = 0
    cols: int = 0
    rows: int = 0
    # Indices flipped and awaiting resolution; never more than two.
    flipped: List[int] = field(default_factory=list)
    matched_pairs: int = 0
    attempts: int = 0

    @property
    def tile_count(self) -> int:
        return self.pair_count * 2

    @property
    def pair_pending(self) -> bool:
        return len(self.flipped) >= 2

    @property
    def complete(self) -> bool:
        return self.pair_count > 0 and self.matched_pairs == self.pair_count
