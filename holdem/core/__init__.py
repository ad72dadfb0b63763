"""
Core data model for one hand of Texas Hold'em.

This package contains cards, participants, the hand session, the hand
evaluator interface, the showdown resolver, events and invariant checks.
"""

from .enums import (
    Suit, Rank, RoundState, SeatKind, ActionType, HandCategory, Action
)
from .exceptions import PokerGameError, InvalidActionError, DeckExhaustedError, ConfigurationError
from .cards import Card, Deck, full_deck, parse_cards
from .config import SeatConfig, HandConfig, DECK_SEAT_LIMIT
from .participant import Participant
from .evaluator import HandRank, HandEvaluator, TreysEvaluator, best_ranks
from .session import HandSession, HandSnapshot
from .showdown import ShowdownResolver, ShowdownResult
from .events import EventBus, EventType, GameEvent, LoggingEventSink
from .health_checker import (
    HandHealthChecker,
    HealthIssue,
    HealthCheckResult,
    HealthIssueType,
    HealthIssueSeverity
)


def new_deck(shuffle: bool = True, seed=None) -> Deck:
    """Create a new deck of cards.

    Args:
        shuffle: Whether to shuffle the deck after creation.
        seed: Optional seed for a reproducible shuffle.
    """
    import random

    deck = Deck(random.Random(seed))
    if shuffle:
        deck.shuffle()
    return deck


__all__ = [
    # Enums
    'Suit', 'Rank', 'RoundState', 'SeatKind', 'ActionType', 'HandCategory', 'Action',

    # Errors
    'PokerGameError', 'InvalidActionError', 'DeckExhaustedError', 'ConfigurationError',

    # Core classes
    'Card', 'Deck', 'Participant', 'HandSession', 'HandSnapshot',
    'SeatConfig', 'HandConfig', 'DECK_SEAT_LIMIT',

    # Evaluation and showdown
    'HandRank', 'HandEvaluator', 'TreysEvaluator', 'best_ranks',
    'ShowdownResolver', 'ShowdownResult',

    # Events
    'EventBus', 'EventType', 'GameEvent', 'LoggingEventSink',

    # Health checking
    'HandHealthChecker', 'HealthIssue', 'HealthCheckResult', 'HealthIssueType', 'HealthIssueSeverity',

    # Convenience functions
    'new_deck', 'full_deck', 'parse_cards'
]
