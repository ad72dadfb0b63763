"""
一手牌的下注轮次状态机.

状态机按 翻牌前 → 翻牌 → 转牌 → 河牌 → 摊牌 推进，负责：
- 校验并执行跟注/过牌、加注、弃牌
- 维护行动位，只停留在未弃牌且未全押的座位
- 判断下注轮是否结束并翻开公共牌
- 自动座位在同一次调用中通过决策策略连续行动
- 在终止状态交给摊牌结算器分配底池
"""

import copy
import logging
from typing import List, Optional

from ..ai import DecisionPolicy, ThresholdPolicy, ThresholdPolicyConfig
from ..core import (
    Action, ActionType, Card, ConfigurationError, Deck, EventBus, EventType,
    HandConfig, HandEvaluator, HandSession, HandSnapshot, InvalidActionError,
    Participant, RoundState, ShowdownResolver, ShowdownResult, TreysEvaluator
)
from .decorators import atomic, logged_action
from .dto import HandOutcome, HandView, build_hand_outcome, build_hand_view


class RoundStateMachine:
    """一手牌的下注状态机.

    每手牌一个实例，独占该手牌的 HandSession。人类座位行动时返回控制权，
    等待下一次 apply_* 调用；自动座位在调用返回前依次由决策策略行动。

    所有公开的修改操作都是原子的：被拒绝或执行失败时状态回滚到调用前。
    """

    def __init__(
        self,
        session: HandSession,
        policy: Optional[DecisionPolicy] = None,
        evaluator: Optional[HandEvaluator] = None,
        event_bus: Optional[EventBus] = None,
        logger: Optional[logging.Logger] = None
    ):
        """初始化状态机.

        Args:
            session: 本手牌的状态对象
            policy: 自动座位的决策策略，为None时使用阈值策略
            evaluator: 牌型评估器，为None时使用treys评估器
            event_bus: 事件总线，为None时创建本手牌专用的事件总线
            logger: 日志记录器，为None时使用模块日志记录器

        Raises:
            ConfigurationError: 参与者少于2人时
        """
        if len(session.participants) < 2:
            raise ConfigurationError(f"至少需要2名参与者，当前为{len(session.participants)}")

        self._session = session
        self._logger = logger or logging.getLogger(__name__)
        self._evaluator = evaluator or TreysEvaluator()
        self._policy = policy or ThresholdPolicy(
            self._evaluator,
            ThresholdPolicyConfig(raise_unit=session.raise_unit, min_raise_unit=session.min_raise_unit)
        )
        self._event_bus = event_bus or EventBus()
        self._resolver = ShowdownResolver(self._evaluator, self._logger)

    # === 只读视图 ===

    @property
    def session(self) -> HandSession:
        return self._session

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def round_state(self) -> RoundState:
        return self._session.round_state

    @property
    def current_seat(self) -> Optional[int]:
        """当前行动位，手牌结束后为None."""
        return self._session.current_seat

    @property
    def board(self) -> List[Card]:
        return list(self._session.board)

    @property
    def pot(self) -> int:
        return self._session.pot

    @property
    def highest_commitment(self) -> int:
        return self._session.highest_commitment

    @property
    def is_hand_over(self) -> bool:
        return self._session.resolved

    @property
    def result(self) -> Optional[ShowdownResult]:
        return self._session.result

    def snapshot(self) -> HandSnapshot:
        """获取当前手牌状态的快照，可以安全地传递给UI层."""
        return self._session.create_snapshot()

    def view(self, viewer_seat: Optional[int] = None) -> HandView:
        """获取给UI显示的手牌视图，其他座位的底牌在摊牌前隐藏."""
        return build_hand_view(self._session.create_snapshot(), viewer_seat)

    def outcome(self) -> Optional[HandOutcome]:
        """手牌结束后的结算结果，未结束时为None."""
        return build_hand_outcome(self._session.create_snapshot())

    def amount_to_call(self, seat_id: int) -> int:
        participant = self._session.get_participant(seat_id)
        if participant is None:
            raise InvalidActionError(f"找不到座位 {seat_id}")
        return participant.amount_to_call(self._session.highest_commitment)

    def legal_actions(self, seat_id: int) -> List[ActionType]:
        """座位当前可执行的行动，不在行动位时为空列表."""
        session = self._session
        if not session.started or session.resolved or session.current_seat != seat_id:
            return []
        return [ActionType.CALL, ActionType.RAISE, ActionType.FOLD]

    # === 公开操作 ===

    @atomic
    @logged_action("start")
    def start(self) -> None:
        """发底牌、开始翻牌前下注轮，并让排在前面的自动座位行动.

        Raises:
            InvalidActionError: 手牌已经开始时
            DeckExhaustedError: 牌堆不足以发牌时
        """
        session = self._session
        if session.started:
            raise InvalidActionError("本手牌已经开始")

        session.started = True
        self._event_bus.emit_simple(
            EventType.HAND_STARTED,
            num_players=len(session.participants),
            stacks={p.seat_id: p.stack for p in session.participants}
        )

        for participant in session.participants:
            participant.set_hole_cards([session.deck.deal_one(), session.deck.deal_one()])
            self._event_bus.emit_simple(
                EventType.CARDS_DEALT,
                seat_id=participant.seat_id,
                name=participant.name,
                round=RoundState.PRE_FLOP.label,
                cards=[str(card) for card in participant.hole_cards]
            )

        self._open_round(RoundState.PRE_FLOP)
        self._logger.info(f"开始新手牌，参与者数: {len(session.participants)}")
        self._run_automated_seats()

    @atomic
    @logged_action("call")
    def apply_call(self, seat_id: int) -> None:
        """跟注（无需补齐时即为过牌）.

        Raises:
            InvalidActionError: 座位不在行动位、已弃牌/全押或手牌已结束
        """
        self._apply_call(seat_id)
        self._run_automated_seats()

    @atomic
    @logged_action("raise")
    def apply_raise(self, seat_id: int, raise_by: Optional[int] = None) -> None:
        """在补齐当前最高投入额的基础上加注.

        Args:
            seat_id: 行动座位
            raise_by: 加注增量，为None时使用配置的加注单位

        Raises:
            InvalidActionError: 加注增量不大于0，或与跟注相同的行动位错误
        """
        self._apply_raise(seat_id, raise_by)
        self._run_automated_seats()

    @atomic
    @logged_action("fold")
    def apply_fold(self, seat_id: int) -> None:
        """弃牌；只剩不超过一名未弃牌参与者时直接进入摊牌.

        Raises:
            InvalidActionError: 座位不在行动位、已弃牌/全押或手牌已结束
        """
        self._apply_fold(seat_id)
        self._run_automated_seats()

    @atomic
    def apply_action(self, action: Action) -> None:
        """执行一个行动数据对象."""
        self._dispatch(action)
        self._run_automated_seats()

    # === 行动执行 ===

    def _dispatch(self, action: Action) -> None:
        if action.action_type == ActionType.CALL:
            self._apply_call(action.seat_id)
        elif action.action_type == ActionType.RAISE:
            self._apply_raise(action.seat_id, action.amount)
        elif action.action_type == ActionType.FOLD:
            self._apply_fold(action.seat_id)
        else:
            raise InvalidActionError(f"未知的行动类型: {action.action_type}")

    def _validate_turn(self, seat_id: int) -> Participant:
        """校验座位可以行动，失败时不修改任何状态."""
        session = self._session

        if not session.started:
            self._reject("手牌尚未开始")
        if session.resolved or session.round_state == RoundState.SHOWDOWN:
            self._reject("手牌已经结束")

        participant = session.get_participant(seat_id)
        if participant is None:
            self._reject(f"找不到座位 {seat_id}")
        if participant.folded:
            self._reject(f"座位{seat_id}已经弃牌")
        if participant.all_in:
            self._reject(f"座位{seat_id}已经全押")
        if session.current_seat != seat_id:
            self._reject(f"不是座位{seat_id}的行动回合，当前行动位: {session.current_seat}")

        return participant

    def _reject(self, message: str) -> None:
        self._logger.warning(f"行动验证失败: {message}")
        raise InvalidActionError(message)

    def _apply_call(self, seat_id: int) -> None:
        participant = self._validate_turn(seat_id)
        session = self._session

        to_call = participant.amount_to_call(session.highest_commitment)
        amount = participant.commit(to_call)
        session.pot += amount

        self._emit_action(participant, "check" if to_call == 0 else "call", amount, 0, session.highest_commitment)
        self._finish_action()

    def _apply_raise(self, seat_id: int, raise_by: Optional[int]) -> None:
        participant = self._validate_turn(seat_id)
        session = self._session

        if raise_by is None:
            raise_by = session.raise_unit
        if raise_by <= 0:
            self._reject(f"加注增量必须大于0: {raise_by}")

        # 筹码不足时按全部筹码投入，视为全押
        previous_highest = session.highest_commitment
        total = participant.amount_to_call(previous_highest) + raise_by
        amount = participant.commit(total)
        session.pot += amount
        session.highest_commitment = max(previous_highest, participant.committed_this_round)

        self._emit_action(participant, "raise", amount, raise_by, previous_highest)
        self._finish_action()

    def _apply_fold(self, seat_id: int) -> None:
        participant = self._validate_turn(seat_id)
        session = self._session

        participant.fold()
        self._event_bus.emit_simple(
            EventType.PLAYER_FOLDED,
            seat_id=participant.seat_id,
            name=participant.name,
            round=session.round_state.label
        )

        if len(session.get_participants_in_hand()) <= 1:
            # 其他人都已弃牌，不再翻公共牌
            session.actions_this_round += 1
            self._enter_showdown()
            return

        self._finish_action()

    def _emit_action(
        self, participant: Participant, action_type: str, amount: int, raise_by: int, previous_highest: int
    ) -> None:
        session = self._session
        self._event_bus.emit_simple(
            EventType.PLAYER_ACTION,
            seat_id=participant.seat_id,
            name=participant.name,
            round=session.round_state.label,
            action_type=action_type,
            amount=amount,
            raise_by=raise_by,
            previous_highest=previous_highest,
            committed_this_round=participant.committed_this_round,
            stack=participant.stack
        )
        if participant.all_in:
            self._event_bus.emit_simple(
                EventType.PLAYER_ALL_IN,
                seat_id=participant.seat_id,
                name=participant.name,
                committed_this_hand=participant.committed_this_hand
            )
        self._event_bus.emit_simple(
            EventType.POT_UPDATED,
            pot=session.pot,
            highest_commitment=session.highest_commitment
        )
        self._logger.debug(
            f"{participant.name} {action_type} {amount}，底池 {session.pot}，最高投入 {session.highest_commitment}"
        )

    def _finish_action(self) -> None:
        """行动成功后：下注轮结束则进入下一轮，否则移动行动位."""
        session = self._session
        session.actions_this_round += 1

        if self._is_round_closed():
            self._advance_round()
        else:
            session.current_seat = session.next_active_seat(session.current_seat)

    def _is_round_closed(self) -> bool:
        """所有参与者都已弃牌、全押或补齐最高投入额，且本轮至少有一次行动."""
        session = self._session
        if session.actions_this_round < 1:
            return False
        return all(
            p.folded or p.all_in or p.committed_this_round == session.highest_commitment
            for p in session.participants
        )

    # === 轮次推进 ===

    def _advance_round(self) -> None:
        session = self._session
        while True:
            next_state = RoundState(session.round_state + 1)
            if next_state == RoundState.SHOWDOWN:
                self._enter_showdown()
                return

            self._open_round(next_state)
            if session.current_seat is not None:
                return
            # 剩余参与者均已全押，无人可以行动，继续发牌
            self._logger.debug(f"{next_state.label} 无人可以行动，继续发牌")

    def _open_round(self, round_state: RoundState) -> None:
        session = self._session
        session.round_state = round_state

        cards = session.deck.deal_cards(round_state.board_cards_to_deal)
        session.board.extend(cards)

        for participant in session.participants:
            participant.reset_round_commitment()
        session.highest_commitment = 0
        session.actions_this_round = 0
        session.current_seat = session.next_active_seat(None)

        if cards:
            self._event_bus.emit_simple(
                EventType.CARDS_DEALT,
                seat_id=None,
                round=round_state.label,
                cards=[str(card) for card in cards],
                board=[str(card) for card in session.board]
            )
        self._event_bus.emit_simple(
            EventType.ROUND_CHANGED,
            round=round_state.label,
            round_state=round_state,
            current_seat=session.current_seat
        )
        self._logger.info(f"进入{round_state.label}，公共牌: {' '.join(str(c) for c in session.board)}")

    def _enter_showdown(self) -> None:
        session = self._session
        session.round_state = RoundState.SHOWDOWN
        session.current_seat = None
        self._event_bus.emit_simple(
            EventType.ROUND_CHANGED,
            round=RoundState.SHOWDOWN.label,
            round_state=RoundState.SHOWDOWN,
            current_seat=None
        )

        result = self._resolver.resolve(session.participants, session.board, session.pot)
        session.result = result
        session.resolved = True

        for seat_id, rank in result.hand_ranks.items():
            participant = session.participants[seat_id]
            self._event_bus.emit_simple(
                EventType.HAND_EVALUATED,
                seat_id=seat_id,
                name=participant.name,
                category=rank.category.name,
                description=rank.description or rank.category.name
            )
        for seat_id, amount in result.payouts.items():
            participant = session.participants[seat_id]
            self._event_bus.emit_simple(
                EventType.POT_AWARDED,
                seat_id=seat_id,
                name=participant.name,
                amount=amount,
                stack=participant.stack
            )
        self._event_bus.emit_simple(
            EventType.HAND_ENDED,
            winner_ids=list(result.winner_ids),
            pot=result.pot,
            share=result.share,
            unallocated=result.unallocated,
            default_win=result.default_win
        )
        self._logger.info(
            f"手牌结束: 赢家 {result.winner_ids}，底池 {result.pot}，未分配 {result.unallocated}"
        )

    # === 自动座位 ===

    def _run_automated_seats(self) -> None:
        """行动位是自动座位时，依次取得策略决策并执行，直到轮到人类座位或手牌结束."""
        session = self._session
        while not session.resolved:
            participant = session.get_current_participant()
            if participant is None or not participant.is_automated:
                return

            action = self._policy.decide(
                copy.deepcopy(participant), list(session.board), session.highest_commitment
            )
            self._logger.debug(f"{participant.name} 自动决策: {action.action_type.value} {action.amount}")
            self._dispatch(action)


def deal_new_hand(
    config: HandConfig,
    policy: Optional[DecisionPolicy] = None,
    evaluator: Optional[HandEvaluator] = None,
    event_bus: Optional[EventBus] = None,
    deck: Optional[Deck] = None,
    logger: Optional[logging.Logger] = None
) -> RoundStateMachine:
    """根据配置创建新手牌并开始翻牌前下注轮.

    Args:
        config: 手牌配置
        policy: 自动座位的决策策略
        evaluator: 牌型评估器
        event_bus: 事件总线
        deck: 预先排好顺序的牌组，为None时按配置的随机种子洗牌
        logger: 日志记录器

    Returns:
        已经开始的状态机，行动位为人类座位或手牌已经结束
    """
    session = HandSession.from_config(config, deck=deck)
    machine = RoundStateMachine(session, policy=policy, evaluator=evaluator, event_bus=event_bus, logger=logger)
    machine.start()
    return machine
