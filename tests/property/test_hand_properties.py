"""
Property-based Tests for the betting state machine - 下注状态机属性测试

使用hypothesis生成随机筹码和随机行动序列，验证任意打法下：
- 筹码守恒（摊牌前 底池+筹码，摊牌后 筹码+未分配余数）
- 轮次单调递增，底池不减少
- 行动位只停留在可以行动的座位
- 弃牌/全押标记不会撤销
- 平局分配 share * 赢家数 + 余数 == 底池
"""

import random

import pytest
from hypothesis import given, settings, strategies as st

from holdem.core import (
    Deck, HandHealthChecker, HandSession, InvalidActionError, Participant, RoundState,
    SeatKind, ShowdownResolver, TreysEvaluator, parse_cards
)
from holdem.controller import RoundStateMachine

EVALUATOR = TreysEvaluator()
CHECKER = HandHealthChecker()

# Hypothesis策略定义
stacks_strategy = st.lists(st.integers(min_value=1, max_value=200), min_size=2, max_size=6)
action_strategy = st.tuples(st.sampled_from(["call", "raise", "fold"]), st.integers(min_value=1, max_value=60))
actions_strategy = st.lists(action_strategy, max_size=40)


def build_machine(stacks, seed):
    participants = [
        Participant(seat_id=i, name=f"P{i}", stack=stack, kind=SeatKind.HUMAN)
        for i, stack in enumerate(stacks)
    ]
    deck = Deck(random.Random(seed))
    deck.shuffle()
    machine = RoundStateMachine(HandSession(participants=participants, deck=deck), evaluator=EVALUATOR)
    machine.start()
    return machine


def apply(machine, name, raise_by):
    seat = machine.current_seat
    if name == "call":
        machine.apply_call(seat)
    elif name == "raise":
        machine.apply_raise(seat, raise_by)
    else:
        machine.apply_fold(seat)


def check_invariants(machine, previous):
    """每次行动后检查不变量，返回新的比较基准."""
    health = CHECKER.check_health(machine.snapshot())
    assert health.is_healthy, [issue.message for issue in health.issues]

    session = machine.session
    total = sum(p.starting_stack for p in session.participants)
    if machine.is_hand_over:
        assert session.total_stacks + machine.result.unallocated == total
        assert machine.current_seat is None
    else:
        assert session.total_stacks + session.pot == total
        assert session.get_current_participant().can_act

    flags = [(p.folded, p.all_in) for p in session.participants]
    if previous is not None:
        prev_round, prev_pot, prev_flags = previous
        assert machine.round_state >= prev_round
        assert machine.pot >= prev_pot
        for (was_folded, was_all_in), (folded, all_in) in zip(prev_flags, flags):
            assert folded or not was_folded
            assert all_in or not was_all_in
    return machine.round_state, machine.pot, flags


def play_out(machine, actions):
    previous = check_invariants(machine, None)
    for name, raise_by in actions:
        if machine.is_hand_over:
            break
        apply(machine, name, raise_by)
        previous = check_invariants(machine, previous)

    # 剩余部分全部跟注/过牌，直到摊牌
    for _ in range(200):
        if machine.is_hand_over:
            break
        machine.apply_call(machine.current_seat)
        previous = check_invariants(machine, previous)
    return machine


@pytest.mark.property_test
@settings(max_examples=60, deadline=None)
@given(stacks_strategy, st.integers(min_value=0, max_value=10_000), actions_strategy)
def test_random_hands_keep_invariants(stacks, seed, actions):
    """Property test: 任意行动序列下所有不变量成立，手牌最终结束"""
    machine = play_out(build_machine(stacks, seed), actions)

    assert machine.is_hand_over
    assert machine.round_state == RoundState.SHOWDOWN
    result = machine.result
    assert result.winner_ids
    assert all(machine.session.participants[w].in_hand for w in result.winner_ids)
    assert sum(result.payouts.values()) + result.unallocated == machine.pot


@pytest.mark.property_test
@settings(max_examples=40, deadline=None)
@given(stacks_strategy, st.integers(min_value=0, max_value=10_000), actions_strategy, st.data())
def test_out_of_turn_actions_never_mutate(stacks, seed, actions, data):
    """Property test: 不在行动位的座位行动总是被拒绝且状态不变"""
    machine = build_machine(stacks, seed)
    for name, raise_by in actions:
        if machine.is_hand_over:
            break
        others = [p.seat_id for p in machine.session.participants if p.seat_id != machine.current_seat]
        intruder = data.draw(st.sampled_from(others))
        before = machine.snapshot().to_dict()

        with pytest.raises(InvalidActionError):
            machine.apply_raise(intruder, raise_by)

        assert machine.snapshot().to_dict() == before
        apply(machine, name, raise_by)


@pytest.mark.property_test
@settings(max_examples=100, deadline=None)
@given(st.integers(min_value=0, max_value=5000), st.integers(min_value=2, max_value=4))
def test_tie_split_accounts_for_whole_pot(pot, winners):
    """Property test: 平局时每人得到 pot // 赢家数，余数小于赢家数"""
    holes = ["2c 3d", "4c 5d", "6c 7d", "8c 9d"][:winners]
    participants = [
        Participant(seat_id=i, name=f"P{i}", stack=0, hole_cards=parse_cards(hole))
        for i, hole in enumerate(holes)
    ]

    result = ShowdownResolver(EVALUATOR).resolve(participants, parse_cards("Ah Kd Qc Js Th"), pot)

    assert result.winner_ids == list(range(winners))
    assert result.share == pot // winners
    assert 0 <= result.unallocated < winners
    assert result.share * winners + result.unallocated == pot
    assert sum(p.stack for p in participants) == pot - result.unallocated
