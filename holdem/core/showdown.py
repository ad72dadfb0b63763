"""
摊牌结算模块.

在终止轮次对未弃牌的参与者比较牌型，确定（可能并列的）赢家并分配底池.
只剩一名参与者时直接获胜，不调用牌型评估器.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .cards import Card
from .evaluator import HandEvaluator, HandRank
from .participant import Participant


@dataclass(frozen=True)
class ShowdownResult:
    """
    摊牌结算结果.

    Attributes:
        winner_ids: 获胜座位号列表
        pot: 结算时的底池总额
        payouts: 每个获胜座位获得的筹码
        share: 每位赢家分得的筹码（pot // 赢家数）
        unallocated: 整除后未分配的余数筹码
        default_win: 是否因其他人全部弃牌而直接获胜
        hand_ranks: 参与比牌的座位及其牌型
    """

    winner_ids: List[int]
    pot: int
    payouts: Dict[int, int]
    share: int
    unallocated: int
    default_win: bool
    hand_ranks: Dict[int, HandRank] = field(default_factory=dict)

    @property
    def is_tie(self) -> bool:
        return len(self.winner_ids) > 1

    @property
    def winning_rank(self) -> Optional[HandRank]:
        if not self.winner_ids or self.default_win:
            return None
        return self.hand_ranks.get(self.winner_ids[0])


class ShowdownResolver:
    """
    摊牌结算器.

    平局时按赢家人数整除分配底池，余数不再分配.
    """

    def __init__(self, evaluator: HandEvaluator, logger: Optional[logging.Logger] = None):
        """
        Args:
            evaluator: 牌型评估器
            logger: 日志记录器，为None时使用模块日志记录器
        """
        self._evaluator = evaluator
        self._logger = logger or logging.getLogger(__name__)

    def resolve(self, participants: Sequence[Participant], board: Sequence[Card], pot: int) -> ShowdownResult:
        """
        结算底池并把筹码加到赢家的筹码上.

        Args:
            participants: 本手牌的全部参与者
            board: 公共牌
            pot: 底池总额

        Returns:
            ShowdownResult: 结算结果
        """
        contenders = [p for p in participants if p.in_hand]

        if not contenders:
            self._logger.warning(f"摊牌时没有未弃牌的参与者，底池{pot}无人获得")
            return ShowdownResult(
                winner_ids=[], pot=pot, payouts={}, share=0, unallocated=pot, default_win=False
            )

        if len(contenders) == 1:
            # 其他人全部弃牌，无需比牌
            winner = contenders[0]
            winner.receive(pot)
            self._logger.info(f"{winner.name} 获胜（其他玩家弃牌），获得底池 {pot}")
            return ShowdownResult(
                winner_ids=[winner.seat_id],
                pot=pot,
                payouts={winner.seat_id: pot},
                share=pot,
                unallocated=0,
                default_win=True,
            )

        hand_ranks: Dict[int, HandRank] = {}
        for participant in contenders:
            rank = self._evaluator.evaluate(list(participant.hole_cards) + list(board))
            hand_ranks[participant.seat_id] = rank
            self._logger.info(f"{participant.name} 的牌型: {rank}")

        ranks = list(hand_ranks.values())
        best = self._evaluator.best_of(ranks)
        winners = [p for p in contenders if hand_ranks[p.seat_id] in best]

        share = pot // len(winners)
        payouts = {}
        for winner in winners:
            winner.receive(share)
            payouts[winner.seat_id] = share
        unallocated = pot - share * len(winners)

        if len(winners) == 1:
            self._logger.info(f"{winners[0].name} 获得底池 {pot}")
        else:
            names = ", ".join(w.name for w in winners)
            self._logger.info(f"平局: {names}，每人获得 {share}，未分配 {unallocated}")

        return ShowdownResult(
            winner_ids=[w.seat_id for w in winners],
            pot=pot,
            payouts=payouts,
            share=share,
            unallocated=unallocated,
            default_win=False,
            hand_ranks=hand_ranks,
        )
