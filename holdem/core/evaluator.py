"""
Hand evaluation oracle for the showdown and the decision policy.

The betting engine only relies on the ``HandEvaluator`` protocol: ``evaluate``
turns 5..7 cards into a totally ordered ``HandRank`` and ``best_of`` picks every
rank tied for the maximum. ``TreysEvaluator`` is the default implementation,
backed by the ``treys`` lookup-table evaluator.
"""

import functools
from dataclasses import dataclass
from typing import List, Protocol, Sequence, runtime_checkable

from treys import Card as TreysCard
from treys import Evaluator

from .cards import Card
from .enums import HandCategory


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class HandRank:
    """Opaque, totally ordered strength of a best five-card hand.

    Attributes:
        score: Evaluator score, lower is stronger (1 is a royal flush).
        category: Descriptive hand category, e.g. ``HandCategory.PAIR``.
        description: Human-readable summary such as ``"Pair (Ah Kd 7s 7c 2h)"``.
    """

    score: int
    category: HandCategory
    description: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandRank):
            return NotImplemented
        return self.score == other.score

    def __lt__(self, other: 'HandRank') -> bool:
        if not isinstance(other, HandRank):
            return NotImplemented
        return self.score > other.score

    def __hash__(self) -> int:
        return hash(self.score)

    def __str__(self) -> str:
        return self.description or self.category.name


@runtime_checkable
class HandEvaluator(Protocol):
    """Interface of the external hand-ranking oracle."""

    def evaluate(self, cards: Sequence[Card]) -> HandRank:
        """Rank the best five-card hand out of 5..7 cards.

        Raises:
            ValueError: If fewer than 5, more than 7 or duplicate cards are given.
        """
        ...

    def best_of(self, ranks: Sequence[HandRank]) -> List[HandRank]:
        """Return every rank tied for the maximum, in input order."""
        ...


# treys rank classes (Royal Flush exists only in newer treys releases)
_CATEGORY_BY_NAME = {
    "Royal Flush": HandCategory.STRAIGHT_FLUSH,
    "Straight Flush": HandCategory.STRAIGHT_FLUSH,
    "Four of a Kind": HandCategory.FOUR_OF_A_KIND,
    "Full House": HandCategory.FULL_HOUSE,
    "Flush": HandCategory.FLUSH,
    "Straight": HandCategory.STRAIGHT,
    "Three of a Kind": HandCategory.THREE_OF_A_KIND,
    "Two Pair": HandCategory.TWO_PAIR,
    "Pair": HandCategory.PAIR,
    "High Card": HandCategory.HIGH_CARD,
}


def to_treys(card: Card) -> int:
    """Convert a card to the treys integer encoding."""
    return TreysCard.new(f"{card.rank.symbol}{card.suit.letter}")


def validate_hand_cards(cards: Sequence[Card]) -> None:
    """Check that ``cards`` holds 5..7 distinct cards."""
    if not 5 <= len(cards) <= 7:
        raise ValueError(f"Hand evaluation needs 5 to 7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError(f"Duplicate cards in hand: {' '.join(str(c) for c in cards)}")


class TreysEvaluator:
    """``HandEvaluator`` backed by the treys library."""

    def __init__(self):
        self._evaluator = Evaluator()
        self.evaluation_count = 0

    def evaluate(self, cards: Sequence[Card]) -> HandRank:
        validate_hand_cards(cards)
        self.evaluation_count += 1

        encoded = [to_treys(card) for card in cards]
        score = self._evaluator.evaluate(encoded[:2], encoded[2:])
        class_name = self._evaluator.class_to_string(self._evaluator.get_rank_class(score))
        category = _CATEGORY_BY_NAME[class_name]
        description = f"{class_name} ({' '.join(str(c) for c in cards)})"
        return HandRank(score=score, category=category, description=description)

    def best_of(self, ranks: Sequence[HandRank]) -> List[HandRank]:
        return best_ranks(ranks)


def best_ranks(ranks: Sequence[HandRank]) -> List[HandRank]:
    """Tie-aware maximum shared by evaluator implementations."""
    if not ranks:
        return []
    best = max(ranks)
    return [rank for rank in ranks if rank == best]
