import random
from collections import Counter

from deck import DECK_SIZE, Card, Rank, Suit
from drawer import RandomCardGenerator, draw, draw_many


class ScriptedRandom:
    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


def test_draw_picks_suit_then_rank():
    rng = ScriptedRandom([3, 12, 0, 0])

    assert draw(rng) == Card(Suit.SPADES, Rank.ACE)
    assert draw(rng) == Card(Suit.CLUBS, Rank.TWO)
    assert rng.values == []


def test_draw_many_with_non_positive_count_is_noop():
    rng = ScriptedRandom([])

    assert draw_many(rng, 0) == []
    assert draw_many(rng, -4) == []


def test_draws_are_with_replacement():
    cards = draw_many(random.Random(1), 100)

    assert len(cards) == 100
    # more draws than distinct cards, so repeats are guaranteed
    assert len(set(cards)) < len(cards)


def test_draws_are_roughly_uniform():
    counts = Counter(draw_many(random.Random(12345), 10_000))

    assert len(counts) == DECK_SIZE
    expected = 10_000 / DECK_SIZE
    for card, count in counts.items():
        assert 0.6 * expected < count < 1.4 * expected, card


def test_generator_matches_functional_drawer():
    generator = RandomCardGenerator(random.Random(77))

    cards = [generator.create()] + generator.create_many(4)

    assert cards == draw_many(random.Random(77), 5)
