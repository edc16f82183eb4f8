"""Frequency and uniformity statistics over random card draws."""
from __future__ import annotations

from typing import Dict, Iterable

import numpy as np

from deck import Card, Rank, Suit

NUM_SUITS = len(Suit)
NUM_RANKS = len(Rank)


class DrawFrequencyAccumulator:
    """Count draws per (suit, rank) cell and compare against a uniform draw."""

    def __init__(self) -> None:
        self.counts = np.zeros((NUM_SUITS, NUM_RANKS), dtype=np.int64)

    def record(self, card: Card) -> None:
        self.counts[card.suit.ordinal, card.rank.ordinal] += 1

    def record_many(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.record(card)

    def merge_counts(self, counts) -> None:
        """Add a suits x ranks count matrix (nested lists or ndarray)."""
        other = np.asarray(counts, dtype=np.int64)
        if other.shape != self.counts.shape:
            raise ValueError(
                f"Expected counts of shape {self.counts.shape}, got {other.shape}"
            )
        self.counts += other

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    @property
    def expected_per_card(self) -> float:
        return self.total / self.counts.size

    def chi_square(self) -> float:
        """Pearson chi-square statistic against equal frequency for every card."""
        expected = self.expected_per_card
        if not expected:
            return 0.0
        deviations = self.counts.astype(np.float64) - expected
        return float(np.sum(deviations ** 2) / expected)

    def max_relative_deviation(self) -> float:
        expected = self.expected_per_card
        if not expected:
            return 0.0
        return float(np.max(np.abs(self.counts - expected)) / expected)

    def is_roughly_uniform(self, tolerance: float = 0.35) -> bool:
        if not self.total:
            return False
        return self.max_relative_deviation() <= tolerance

    def as_dict(self) -> Dict:
        suit_totals = self.counts.sum(axis=1)
        rank_totals = self.counts.sum(axis=0)
        return {
            "draws": self.total,
            "expected_per_card": self.expected_per_card,
            "chi_square": self.chi_square(),
            "max_relative_deviation": self.max_relative_deviation(),
            "suit_totals": {suit.name: int(suit_totals[suit.ordinal]) for suit in Suit},
            "rank_totals": {rank.name: int(rank_totals[rank.ordinal]) for rank in Rank},
            "counts": self.counts.tolist(),
        }
