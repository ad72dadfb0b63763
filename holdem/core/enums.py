"""
一手牌相关枚举定义模块.

包含花色、点数、下注轮次、座位类型、行动类型和牌型类别等枚举，
以及在状态机与决策策略之间传递的行动数据类.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class Suit(Enum):
    """
    扑克牌花色枚举.

    使用Unicode符号作为值，短格式字母见 ``letter``.
    """

    SPADES = "♠"      # 黑桃
    HEARTS = "♥"      # 红桃
    DIAMONDS = "♦"    # 方块
    CLUBS = "♣"       # 梅花

    @property
    def letter(self) -> str:
        """返回花色的小写字母表示，如 ``s``."""
        return _SUIT_LETTERS[self]


_SUIT_LETTERS = {
    Suit.SPADES: "s",
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
}


class Rank(IntEnum):
    """
    扑克牌点数枚举.

    数值越大点数越大，A为14.
    """

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        """返回点数的单字符表示，如 ``T``、``A``."""
        return "23456789TJQKA"[self.value - 2]


class RoundState(IntEnum):
    """
    下注轮次枚举.

    一手牌内严格单调递增，SHOWDOWN为终止状态.
    """

    PRE_FLOP = 0   # 翻牌前
    FLOP = 1       # 翻牌
    TURN = 2       # 转牌
    RIVER = 3      # 河牌
    SHOWDOWN = 4   # 摊牌

    @property
    def label(self) -> str:
        """返回轮次的显示名称."""
        return _ROUND_LABELS[self]

    @property
    def board_cards_to_deal(self) -> int:
        """进入该轮次时需要翻开的公共牌数量."""
        return _BOARD_CARDS_ON_ENTRY[self]

    @property
    def expected_board_size(self) -> int:
        """该轮次中公共牌的总张数."""
        return sum(_BOARD_CARDS_ON_ENTRY[r] for r in RoundState if r <= self and r != RoundState.SHOWDOWN)


_ROUND_LABELS = {
    RoundState.PRE_FLOP: "Pre-flop",
    RoundState.FLOP: "Flop",
    RoundState.TURN: "Turn",
    RoundState.RIVER: "River",
    RoundState.SHOWDOWN: "Showdown",
}

_BOARD_CARDS_ON_ENTRY = {
    RoundState.PRE_FLOP: 0,
    RoundState.FLOP: 3,
    RoundState.TURN: 1,
    RoundState.RIVER: 1,
    RoundState.SHOWDOWN: 0,
}


class SeatKind(Enum):
    """
    座位类型枚举.

    人类座位等待外部行动，自动座位由决策策略驱动.
    """

    HUMAN = "human"
    AUTOMATED = "automated"


class ActionType(Enum):
    """
    玩家行动类型枚举.

    跟注金额为0时即为过牌，加注为固定单位加注.
    """

    CALL = "call"      # 跟注/过牌
    RAISE = "raise"    # 加注
    FOLD = "fold"      # 弃牌


class HandCategory(IntEnum):
    """
    牌型类别枚举.

    数值越大牌型越强，皇家同花顺归入同花顺.
    """

    HIGH_CARD = 1          # 高牌
    PAIR = 2               # 一对
    TWO_PAIR = 3           # 两对
    THREE_OF_A_KIND = 4    # 三条
    STRAIGHT = 5           # 顺子
    FLUSH = 6              # 同花
    FULL_HOUSE = 7         # 葫芦
    FOUR_OF_A_KIND = 8     # 四条
    STRAIGHT_FLUSH = 9     # 同花顺


@dataclass(frozen=True)
class Action:
    """
    玩家行动数据类.

    Attributes:
        action_type: 行动类型
        seat_id: 执行行动的座位号
        amount: 加注增量，仅RAISE使用

    Examples:
        >>> Action(ActionType.RAISE, seat_id=1, amount=10)  # 座位1加注10
        >>> Action(ActionType.FOLD, seat_id=2)               # 座位2弃牌
    """

    action_type: ActionType
    seat_id: int = 0
    amount: int = 0

    def __post_init__(self):
        """验证行动数据的有效性."""
        if self.amount < 0:
            raise ValueError(f"行动金额不能为负数: {self.amount}")

        if self.action_type != ActionType.RAISE and self.amount != 0:
            raise ValueError(f"{self.action_type.value}行动不应该有金额")
