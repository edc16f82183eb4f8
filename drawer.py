# drawer.py
"""Random single-card draws with replacement."""
from __future__ import annotations

import random
from typing import List, Optional

from deck import Card, Rank, Suit

_SUITS: List[Suit] = list(Suit)
_RANKS: List[Rank] = list(Rank)


def draw(rng: random.Random) -> Card:
    """Pair a uniformly random suit with a uniformly random rank.

    The suit index is drawn before the rank index.
    """

    suit = _SUITS[rng.randrange(len(_SUITS))]
    rank = _RANKS[rng.randrange(len(_RANKS))]
    return Card(suit, rank)


def draw_many(rng: random.Random, count: int) -> List[Card]:
    if count <= 0:
        return []
    return [draw(rng) for _ in range(count)]


class RandomCardGenerator:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def create(self) -> Card:
        return draw(self.rng)

    def create_many(self, count: int) -> List[Card]:
        return draw_many(self.rng, count)
