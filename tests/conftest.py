"""
测试配置 - pytest配置文件

提供手牌测试的通用fixture：
- 排好顺序的牌组
- 直接构造的手牌状态（全部为人类座位，便于逐步驱动）
- 记录所有事件的事件总线
- 每次行动后的健康检查
"""

from typing import Dict, List, Optional, Sequence

import pytest

from holdem.core import (
    Action, ActionType, Card, Deck, EventBus, HandHealthChecker, HandSession, Participant, SeatKind,
    TreysEvaluator, full_deck, parse_cards
)
from holdem.controller import RoundStateMachine


def build_stacked_deck(holes: Sequence[str], board: str = "") -> Deck:
    """按 座位0底牌、座位1底牌、...、公共牌 的顺序排好牌组，其余牌随后."""
    ordered: List[Card] = []
    for hole in holes:
        ordered.extend(parse_cards(hole))
    ordered.extend(parse_cards(board))
    rest = [card for card in full_deck() if card not in set(ordered)]
    return Deck.stacked(ordered + rest)


@pytest.fixture
def stacked_deck():
    """牌组工厂fixture"""
    return build_stacked_deck


@pytest.fixture
def make_session():
    """手牌状态工厂fixture，默认三个100筹码的人类座位"""
    def _make(stacks: Sequence[int] = (100, 100, 100),
              kinds: Optional[Sequence[SeatKind]] = None,
              deck: Optional[Deck] = None,
              raise_unit: int = 10) -> HandSession:
        kinds = kinds or [SeatKind.HUMAN] * len(stacks)
        participants = [
            Participant(seat_id=i, name=f"P{i}", stack=stack, kind=kind)
            for i, (stack, kind) in enumerate(zip(stacks, kinds))
        ]
        return HandSession(participants=participants, deck=deck or Deck(), raise_unit=raise_unit)
    return _make


@pytest.fixture
def recording_bus():
    """记录事件的事件总线"""
    return EventBus()


@pytest.fixture
def evaluator():
    return TreysEvaluator()


@pytest.fixture
def make_machine(make_session, recording_bus, evaluator):
    """状态机工厂fixture，创建后立即开始手牌"""
    def _make(stacks: Sequence[int] = (100, 100, 100),
              kinds: Optional[Sequence[SeatKind]] = None,
              deck: Optional[Deck] = None,
              policy=None,
              raise_unit: int = 10,
              start: bool = True) -> RoundStateMachine:
        session = make_session(stacks=stacks, kinds=kinds, deck=deck, raise_unit=raise_unit)
        machine = RoundStateMachine(session, policy=policy, evaluator=evaluator, event_bus=recording_bus)
        if start:
            machine.start()
        return machine
    return _make


@pytest.fixture
def assert_healthy():
    """断言快照满足所有不变量"""
    checker = HandHealthChecker()

    def _check(machine: RoundStateMachine) -> None:
        result = checker.check_health(machine.snapshot())
        assert result.is_healthy, [issue.message for issue in result.issues]
    return _check


class ScriptedPolicy:
    """按预设顺序返回行动的决策策略，用于驱动自动座位"""

    def __init__(self, script: Dict[int, List[str]]):
        self._script = {seat: list(actions) for seat, actions in script.items()}
        self.calls: List[int] = []

    def decide(self, participant, board, highest_commitment):
        self.calls.append(participant.seat_id)
        name = self._script[participant.seat_id].pop(0)
        if name == "raise":
            return Action(ActionType.RAISE, seat_id=participant.seat_id, amount=10)
        return Action(ActionType(name), seat_id=participant.seat_id)


@pytest.fixture
def scripted_policy():
    return ScriptedPolicy
