# render.py
"""Text renderings of cards for the demo and for treys interop."""
from __future__ import annotations

from treys import Card as TreysCard

from deck import Card

STYLES = ("name", "code", "pretty")
SEPARATOR = "--------------------------"


def to_treys(card: Card) -> int:
    """Convert a Card to the Treys integer representation."""
    # treys uses the same rank characters and lowercase s/h/d/c suits
    return TreysCard.new(card.code)


def format_card(card: Card, style: str = "name") -> str:
    if style == "name":
        return str(card)
    if style == "code":
        return card.code
    if style == "pretty":
        return TreysCard.int_to_pretty_str(to_treys(card))
    raise ValueError(f"Unknown card style: {style}")


def describe_draw(card: Card, style: str = "name") -> str:
    lines = [
        f"card is: {format_card(card, style)}",
        f"{card.suit.ordinal} is card type's ordinal",
        f"{card.rank.ordinal} is card value's ordinal",
        SEPARATOR,
    ]
    return "\n".join(lines)
