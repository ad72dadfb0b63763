"""
一手牌中的座位参与者状态管理.

包含参与者的筹码、底牌、弃牌/全押标记和本轮/本手投入额.
"""

from dataclasses import dataclass, field
from typing import List

from .cards import Card
from .enums import SeatKind


@dataclass
class Participant:
    """
    座位参与者类.

    folded 和 all_in 在一手牌内只会从False变为True；
    committed_this_round 在每个下注轮开始时清零.
    """

    seat_id: int
    name: str
    stack: int
    kind: SeatKind = SeatKind.AUTOMATED
    hole_cards: List[Card] = field(default_factory=list)
    folded: bool = False
    all_in: bool = False
    committed_this_round: int = 0
    committed_this_hand: int = 0
    starting_stack: int = -1

    def __post_init__(self) -> None:
        """
        验证参与者数据的有效性.

        Raises:
            ValueError: 当参与者数据无效时
        """
        if self.seat_id < 0:
            raise ValueError(f"座位号不能为负数: {self.seat_id}")

        if self.stack < 0:
            raise ValueError(f"筹码数量不能为负数: {self.stack}")

        if len(self.hole_cards) not in (0, 2):
            raise ValueError(f"底牌必须为0张或2张: {len(self.hole_cards)}")

        if self.starting_stack < 0:
            self.starting_stack = self.stack + self.committed_this_hand

    def __hash__(self) -> int:
        return hash(self.seat_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Participant):
            return False
        return self.seat_id == other.seat_id

    @property
    def is_human(self) -> bool:
        return self.kind == SeatKind.HUMAN

    @property
    def is_automated(self) -> bool:
        return self.kind == SeatKind.AUTOMATED

    @property
    def can_act(self) -> bool:
        """
        检查参与者是否可以行动.

        Returns:
            bool: 未弃牌且未全押时返回True
        """
        return not self.folded and not self.all_in

    @property
    def in_hand(self) -> bool:
        """未弃牌的参与者（包括全押）仍有资格赢得底池."""
        return not self.folded

    def amount_to_call(self, highest_commitment: int) -> int:
        """本轮需要补齐到最高投入额的筹码数."""
        return max(0, highest_commitment - self.committed_this_round)

    def commit(self, amount: int) -> int:
        """
        向底池投入筹码.

        Args:
            amount: 期望投入的金额，超过筹码时按全部筹码投入

        Returns:
            int: 实际投入的金额

        Raises:
            ValueError: 当金额为负数或参与者无法行动时
        """
        if not self.can_act:
            raise ValueError(f"座位{self.seat_id}无法行动")

        if amount < 0:
            raise ValueError(f"投入金额不能为负数: {amount}")

        actual_amount = min(amount, self.stack)

        self.stack -= actual_amount
        self.committed_this_round += actual_amount
        self.committed_this_hand += actual_amount

        # 筹码用完即为全押
        if self.stack == 0:
            self.all_in = True

        return actual_amount

    def fold(self) -> None:
        """
        执行弃牌操作.

        弃牌后筹码和本轮投入额在本手牌内冻结.
        """
        if self.folded:
            raise ValueError(f"座位{self.seat_id}已经弃牌")

        self.folded = True

    def receive(self, amount: int) -> None:
        """
        从底池获得筹码.

        Raises:
            ValueError: 当金额为负数时
        """
        if amount < 0:
            raise ValueError(f"增加的筹码数量不能为负数: {amount}")

        self.stack += amount

    def set_hole_cards(self, cards: List[Card]) -> None:
        """
        设置参与者的底牌，每手牌只设置一次.

        Raises:
            ValueError: 当底牌数量不是2张或已发过底牌时
        """
        if len(cards) != 2:
            raise ValueError(f"底牌必须为2张: {len(cards)}")

        if self.hole_cards:
            raise ValueError(f"座位{self.seat_id}本手牌已发过底牌")

        self.hole_cards = list(cards)

    def reset_round_commitment(self) -> None:
        """新下注轮开始时清零本轮投入额."""
        self.committed_this_round = 0

    def get_hole_cards_str(self, hidden: bool = False) -> str:
        """
        获取底牌的字符串表示.

        Returns:
            str: 如"Ah Ks"，隐藏时为"XX XX"
        """
        if hidden:
            return " ".join("XX" for _ in self.hole_cards)

        return " ".join(str(card) for card in self.hole_cards)

    def __str__(self) -> str:
        flags = []
        if self.folded:
            flags.append("folded")
        if self.all_in:
            flags.append("all-in")
        flag_str = f" ({', '.join(flags)})" if flags else ""
        return f"{self.name}: {self.stack} chips, committed {self.committed_this_round}{flag_str}"

    def __repr__(self) -> str:
        return f"Participant(seat={self.seat_id}, name='{self.name}', stack={self.stack}, kind={self.kind.name})"
