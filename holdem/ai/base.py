"""
Decision policy interface for automated seats.

This module defines the protocol that every bot strategy must implement.
"""

from typing import Protocol, Sequence, runtime_checkable

from ..core import Action, Card, Participant


@runtime_checkable
class DecisionPolicy(Protocol):
    """Decision policy interface protocol.

    The round state machine calls ``decide`` whenever an automated seat is on
    action and applies the returned action immediately.
    """

    def decide(self, participant: Participant, board: Sequence[Card], highest_commitment: int) -> Action:
        """Choose an action for the seat on action.

        Args:
            participant: Copy of the participant on action
            board: Community cards revealed so far
            highest_commitment: Amount every active seat must match this round

        Returns:
            A CALL, RAISE or FOLD action for ``participant.seat_id``
        """
        ...
