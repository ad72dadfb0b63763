"""
Controller layer for one hand.

Contains the round state machine that drives betting, card reveals and the
showdown hand-off, plus the data transfer objects handed to the UI layer.
"""

from .round_machine import RoundStateMachine, deal_new_hand
from .decorators import atomic, logged_action
from .dto import (
    ParticipantView, HandView, ActionInput, HandOutcome, build_hand_view, build_hand_outcome
)

__all__ = [
    'RoundStateMachine', 'deal_new_hand', 'atomic', 'logged_action',
    'ParticipantView', 'HandView', 'ActionInput', 'HandOutcome', 'build_hand_view', 'build_hand_outcome',
]
