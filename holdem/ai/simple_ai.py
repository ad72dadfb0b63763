"""
Threshold bot strategy for automated seats.

Maps the evaluator's hand category to a fixed strength score and applies two
simple rules: raise a strong hand when nothing is owed, otherwise call only
with a decent hand and a cheap price. It is a heuristic stand-in, not a
game-theoretic strategy, and can be replaced by any ``DecisionPolicy``.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ..core import Action, ActionType, Card, HandCategory, HandEvaluator, Participant, TreysEvaluator


DEFAULT_STRENGTHS: Dict[HandCategory, float] = {
    HandCategory.HIGH_CARD: 0.5,
    HandCategory.PAIR: 0.7,
    HandCategory.TWO_PAIR: 0.7,
    HandCategory.THREE_OF_A_KIND: 0.85,
    HandCategory.STRAIGHT: 0.85,
    HandCategory.FLUSH: 0.85,
    HandCategory.FULL_HOUSE: 0.95,
    HandCategory.FOUR_OF_A_KIND: 0.95,
    HandCategory.STRAIGHT_FLUSH: 0.95,
}


@dataclass
class ThresholdPolicyConfig:
    """Configuration for the threshold strategy.

    Attributes:
        raise_unit: Chips added on top of the call when raising
        min_raise_unit: The stack must exceed this to raise
        raise_threshold: Strength above which an unbet pot is raised
        call_threshold: Strength above which a bet is called
        max_call_fraction: A bet is called only if it costs less than this share of the stack
        strengths: Strength score per hand category
    """
    raise_unit: int = 10
    min_raise_unit: int = 5
    raise_threshold: float = 0.7
    call_threshold: float = 0.5
    max_call_fraction: float = 0.5
    strengths: Dict[HandCategory, float] = field(default_factory=lambda: dict(DEFAULT_STRENGTHS))


class ThresholdPolicy:
    """Fixed-threshold decision policy.

    The decision depends only on (participant, board, highest commitment),
    so the same inputs always give the same action.
    """

    def __init__(self, evaluator: Optional[HandEvaluator] = None,
                 config: Optional[ThresholdPolicyConfig] = None,
                 logger: Optional[logging.Logger] = None):
        self.evaluator = evaluator or TreysEvaluator()
        self.config = config or ThresholdPolicyConfig()
        self._logger = logger or logging.getLogger(__name__)

    def decide(self, participant: Participant, board: Sequence[Card], highest_commitment: int) -> Action:
        to_call = participant.amount_to_call(highest_commitment)
        strength = self.hand_strength(participant, board)

        if to_call == 0:
            if strength > self.config.raise_threshold and participant.stack > self.config.min_raise_unit:
                action = Action(ActionType.RAISE, seat_id=participant.seat_id, amount=self.config.raise_unit)
            else:
                action = Action(ActionType.CALL, seat_id=participant.seat_id)
        elif strength > self.config.call_threshold and to_call < participant.stack * self.config.max_call_fraction:
            action = Action(ActionType.CALL, seat_id=participant.seat_id)
        else:
            action = Action(ActionType.FOLD, seat_id=participant.seat_id)

        self._logger.debug(
            f"{participant.name} strength={strength:.2f} to_call={to_call} -> {action.action_type.value}"
        )
        return action

    def hand_strength(self, participant: Participant, board: Sequence[Card]) -> float:
        """Strength score in [0, 1] for the participant's current cards."""
        return self.config.strengths[self.hand_category(participant, board)]

    def hand_category(self, participant: Participant, board: Sequence[Card]) -> HandCategory:
        cards = list(participant.hole_cards) + list(board)
        if len(cards) < 5:
            # 翻牌前只看是否为口袋对
            ranks = [card.rank for card in cards]
            return HandCategory.PAIR if len(set(ranks)) < len(ranks) else HandCategory.HIGH_CARD
        return self.evaluator.evaluate(cards).category
