"""
Texas Hold'em single-hand betting engine.

Deals one hand, runs the four betting rounds among one human seat and
automated seats, and resolves the showdown. Card shuffling is seedable and
hand ranking is delegated to a pluggable evaluator.
"""

__version__ = "0.1.0"

from .core import (
    Action, ActionType, Card, ConfigurationError, DeckExhaustedError, EventBus, EventType,
    HandConfig, HandSession, InvalidActionError, RoundState, SeatConfig, SeatKind
)
from .ai import DecisionPolicy, ThresholdPolicy
from .controller import RoundStateMachine, deal_new_hand

__all__ = [
    'Action', 'ActionType', 'Card', 'ConfigurationError', 'DeckExhaustedError', 'EventBus', 'EventType',
    'HandConfig', 'HandSession', 'InvalidActionError', 'RoundState', 'SeatConfig', 'SeatKind',
    'DecisionPolicy', 'ThresholdPolicy', 'RoundStateMachine', 'deal_new_hand',
]
