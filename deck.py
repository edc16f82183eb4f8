# deck.py
"""Card value types, ordered deck generation and the weak pairwise shuffle."""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Dict, List, Optional, Union


class Suit(Enum):
    CLUBS = "c"
    DIAMONDS = "d"
    HEARTS = "h"
    SPADES = "s"

    @property
    def code(self) -> str:
        return self.value

    @property
    def ordinal(self) -> int:
        return _SUIT_POSITIONS[self]

    def __str__(self) -> str:
        return self.name


class Rank(Enum):
    TWO = ("2", 2)
    THREE = ("3", 3)
    FOUR = ("4", 4)
    FIVE = ("5", 5)
    SIX = ("6", 6)
    SEVEN = ("7", 7)
    EIGHT = ("8", 8)
    NINE = ("9", 9)
    TEN = ("T", 10)
    JACK = ("J", 11)
    QUEEN = ("Q", 12)
    KING = ("K", 13)
    ACE = ("A", 14)

    def __init__(self, code: str, weight: int) -> None:
        self.code = code
        self.weight = weight

    @property
    def ordinal(self) -> int:
        return _RANK_POSITIONS[self]

    def __str__(self) -> str:
        return self.name


_SUIT_ORDER: List[Suit] = list(Suit)
_RANK_ORDER: List[Rank] = list(Rank)
_SUIT_POSITIONS: Dict[Suit, int] = {suit: i for i, suit in enumerate(_SUIT_ORDER)}
_RANK_POSITIONS: Dict[Rank, int] = {rank: i for i, rank in enumerate(_RANK_ORDER)}

DECK_SIZE = len(_SUIT_ORDER) * len(_RANK_ORDER)
DEFAULT_SWAP_COUNT = 100


@total_ordering
@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise TypeError(f"suit must be a Suit, got {self.suit!r}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"rank must be a Rank, got {self.rank!r}")

    @property
    def index(self) -> int:
        """Row-major position of this card in a freshly generated deck."""
        return self.suit.ordinal * len(_RANK_ORDER) + self.rank.ordinal

    @property
    def code(self) -> str:
        return f"{self.rank.code}{self.suit.code}"

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.index < other.index

    def __str__(self) -> str:
        return f"{self.suit}-{self.rank}"

    def __repr__(self) -> str:
        return str(self)


def card_from_index(index: int) -> Card:
    if not 0 <= index < DECK_SIZE:
        raise ValueError(f"Card index must be in [0, {DECK_SIZE}), got {index}")
    suit_index, rank_index = divmod(index, len(_RANK_ORDER))
    return Card(_SUIT_ORDER[suit_index], _RANK_ORDER[rank_index])


def generate_deck() -> List[Card]:
    """Return all cards, suits as the outer loop and ranks as the inner one."""
    return [Card(suit, rank) for suit in _SUIT_ORDER for rank in _RANK_ORDER]


def _swap(cards: List[Card], i: int, k: int) -> None:
    if i == k:
        return
    cards[i], cards[k] = cards[k], cards[i]


def shuffle(
    deck: List[Card],
    rng: random.Random,
    swap_count: int = DEFAULT_SWAP_COUNT,
) -> List[Card]:
    """Shuffle ``deck`` in place with ``swap_count`` random pairwise swaps.

    Every iteration draws two indices from ``rng`` even when they coincide.
    This is not a uniform shuffle; sequences for a given seed are stable and
    callers may rely on them. Returns the same list object.
    """

    if not deck:
        return deck

    size = len(deck)
    for _ in range(swap_count):
        i = rng.randrange(size)
        k = rng.randrange(size)
        _swap(deck, i, k)
    return deck


def new_shuffled_deck(
    rng: random.Random,
    swap_count: int = DEFAULT_SWAP_COUNT,
) -> List[Card]:
    return shuffle(generate_deck(), rng, swap_count)


class Deck:
    """Depleting deck: cards dealt from it are gone until ``reset``."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        swap_count: int = DEFAULT_SWAP_COUNT,
        shuffled: bool = True,
    ) -> None:
        self.rng = rng or random.Random()
        self.swap_count = swap_count
        self.shuffled = shuffled
        self.cards: List[Card] = []
        self.reset()

    def reset(self) -> None:
        self.cards = generate_deck()
        if self.shuffled:
            shuffle(self.cards, self.rng, self.swap_count)

    def deal(self, n: int = 1) -> Union[Card, List[Card]]:
        """Return a Card if n=1, otherwise return a list of Cards."""
        if n > len(self.cards):
            raise ValueError("Not enough cards left in the deck")

        if n == 1:
            return self.cards.pop()

        if n <= 0:
            return []

        dealt = self.cards[-n:]
        del self.cards[-n:]
        return dealt

    def __len__(self) -> int:
        return len(self.cards)
