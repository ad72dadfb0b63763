"""
阈值决策策略单元测试.
"""

from unittest.mock import Mock

import pytest

from holdem.ai import DecisionPolicy, ThresholdPolicy, ThresholdPolicyConfig
from holdem.core import ActionType, HandCategory, Participant, TreysEvaluator, parse_cards


def bot(hole, stack=100, committed=0):
    participant = Participant(seat_id=1, name="Bot 1", stack=stack, hole_cards=parse_cards(hole))
    participant.committed_this_round = committed
    return participant


@pytest.mark.unit
@pytest.mark.fast
class TestThresholdPolicy:
    """阈值策略测试类."""

    def setup_method(self):
        self.policy = ThresholdPolicy(TreysEvaluator())

    def test_is_decision_policy(self):
        assert isinstance(self.policy, DecisionPolicy)

    def test_preflop_category(self):
        """测试翻牌前只识别口袋对."""
        assert self.policy.hand_category(bot("7h 7d"), []) == HandCategory.PAIR
        assert self.policy.hand_category(bot("Ah Kd"), []) == HandCategory.HIGH_CARD

    def test_raise_with_strong_hand_when_unbet(self):
        """测试无需跟注且牌力强时加注固定单位."""
        action = self.policy.decide(bot("7h 7d"), parse_cards("7c 2s 9d"), 0)
        assert action.action_type == ActionType.RAISE
        assert action.amount == 10
        assert action.seat_id == 1

    def test_pair_checks_when_unbet(self):
        """测试一对的牌力不超过加注阈值，过牌."""
        action = self.policy.decide(bot("7h 7d"), [], 0)
        assert action.action_type == ActionType.CALL

    def test_short_stack_checks_instead_of_raising(self):
        action = self.policy.decide(bot("7h 7d", stack=5), parse_cards("7c 2s 9d"), 0)
        assert action.action_type == ActionType.CALL

    def test_call_cheap_bet_with_pair(self):
        action = self.policy.decide(bot("7h 7d"), [], 10)
        assert action.action_type == ActionType.CALL

    def test_fold_expensive_bet_with_pair(self):
        """测试跟注额不小于筹码一半时弃牌."""
        action = self.policy.decide(bot("7h 7d", stack=20), [], 10)
        assert action.action_type == ActionType.FOLD

    def test_fold_high_card_facing_bet(self):
        action = self.policy.decide(bot("Ah Kd"), [], 10)
        assert action.action_type == ActionType.FOLD

    def test_already_matched_counts_as_unbet(self):
        action = self.policy.decide(bot("Ah Kd", committed=10), [], 10)
        assert action.action_type == ActionType.CALL

    def test_same_inputs_same_decision(self):
        board = parse_cards("7c 2s 9d Kh")
        first = self.policy.decide(bot("Ah Kd"), board, 20)
        second = self.policy.decide(bot("Ah Kd"), board, 20)
        assert first == second

    def test_custom_config(self):
        config = ThresholdPolicyConfig(raise_unit=25, raise_threshold=0.6)
        policy = ThresholdPolicy(TreysEvaluator(), config)
        action = policy.decide(bot("7h 7d"), [], 0)
        assert action.action_type == ActionType.RAISE
        assert action.amount == 25

    def test_evaluator_not_used_preflop(self):
        evaluator = Mock()
        ThresholdPolicy(evaluator).decide(bot("Ah Kd"), [], 0)
        evaluator.evaluate.assert_not_called()
