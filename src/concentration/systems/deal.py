from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

from concentration.constants import SYMBOLS
from concentration.errors import InvalidConfiguration

T = TypeVar("T")


def shuffle_symbols(values: Sequence[T], rng: random.Random | None = None) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``values``; the input is left untouched."""
    rng = rng or random.Random()
    shuffled = list(values)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal_symbols(
    pair_count: int,
    rng: random.Random | None = None,
    alphabet: Sequence[str] = SYMBOLS,
) -> List[str]:
    """Deal ``2 * pair_count`` symbols, each of the first ``pair_count`` alphabet entries twice."""
    if pair_count <= 0:
        raise InvalidConfiguration(f"pair count must be positive, got {pair_count}")
    if pair_count > len(alphabet):
        raise InvalidConfiguration(
            f"pair count {pair_count} exceeds the {len(alphabet)} available symbols"
        )
    values: List[str] = []
    for symbol in alphabet[:pair_count]:
        values.extend((symbol, symbol))
    return shuffle_symbols(values, rng)
