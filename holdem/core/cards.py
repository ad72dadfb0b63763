"""
扑克牌相关的核心数据结构.

包含Card和Deck类；Deck即一手牌的发牌源，洗牌后逐张发出，耗尽时抛出DeckExhaustedError.
"""

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .enums import Suit, Rank
from .exceptions import DeckExhaustedError


_RANK_MAP = {
    "2": Rank.TWO, "3": Rank.THREE, "4": Rank.FOUR, "5": Rank.FIVE,
    "6": Rank.SIX, "7": Rank.SEVEN, "8": Rank.EIGHT, "9": Rank.NINE,
    "10": Rank.TEN, "T": Rank.TEN, "J": Rank.JACK, "Q": Rank.QUEEN,
    "K": Rank.KING, "A": Rank.ACE
}

_SUIT_MAP = {
    "s": Suit.SPADES, "♠": Suit.SPADES,
    "h": Suit.HEARTS, "♥": Suit.HEARTS,
    "d": Suit.DIAMONDS, "♦": Suit.DIAMONDS,
    "c": Suit.CLUBS, "♣": Suit.CLUBS
}


@dataclass(frozen=True)
class Card:
    """
    表示一张扑克牌.

    不可变值对象，同一副牌中不会出现重复.
    """

    suit: Suit
    rank: Rank

    def __str__(self) -> str:
        """
        返回扑克牌的短格式表示.

        Returns:
            str: 格式为"点数花色"的字符串，如"Ah"表示红桃A
        """
        return f"{self.rank.symbol}{self.suit.letter}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def pretty(self) -> str:
        """带花色符号的表示，如"A♥"."""
        return f"{self.rank.symbol}{self.suit.value}"

    @classmethod
    def from_str(cls, card_str: str) -> 'Card':
        """
        从字符串创建扑克牌对象.

        Args:
            card_str: 扑克牌字符串，如"Ah"、"10d"、"T♠"

        Returns:
            Card: 对应的扑克牌对象

        Raises:
            ValueError: 当字符串格式无效时
        """
        card_str = card_str.strip()
        if len(card_str) < 2:
            raise ValueError(f"卡牌字符串格式错误: {card_str}")

        # 处理10的特殊情况
        if card_str.startswith("10"):
            rank_str, suit_str = "10", card_str[2:]
        else:
            rank_str, suit_str = card_str[0].upper(), card_str[1:]

        if rank_str not in _RANK_MAP:
            raise ValueError(f"无效的点数: {rank_str}")
        suit = _SUIT_MAP.get(suit_str) or _SUIT_MAP.get(suit_str.lower())
        if suit is None:
            raise ValueError(f"无效的花色: {suit_str}")

        return cls(suit, _RANK_MAP[rank_str])

    def __lt__(self, other: 'Card') -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank.value < other.rank.value


def parse_cards(text: str) -> List[Card]:
    """将空格分隔的牌字符串解析为牌列表，如"Ah Kd 7s"."""
    return [Card.from_str(token) for token in text.split()]


def full_deck() -> List[Card]:
    """按花色、点数顺序返回完整的52张牌."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


class Deck:
    """
    表示一副扑克牌.

    包含52张标准扑克牌，支持洗牌和逐张发牌.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        初始化牌组.

        Args:
            rng: 随机数生成器，用于洗牌操作
        """
        self._rng = rng or random.Random()
        self._cards: List[Card] = []
        self._reset_deck()

    @classmethod
    def stacked(cls, cards: Iterable[Card]) -> 'Deck':
        """
        创建按给定顺序发牌的牌组.

        Args:
            cards: 发牌顺序，第一张最先发出

        Raises:
            ValueError: 当存在重复牌时
        """
        ordered = list(cards)
        if len(set(ordered)) != len(ordered):
            raise ValueError("牌组中存在重复的牌")
        deck = cls()
        deck._cards = list(reversed(ordered))
        return deck

    def _reset_deck(self) -> None:
        """重置牌组为完整的52张牌."""
        self._cards = full_deck()

    def shuffle(self) -> None:
        """洗牌."""
        self._rng.shuffle(self._cards)

    def shuffled_deck(self) -> List[Card]:
        """
        重置并洗牌.

        Returns:
            List[Card]: 洗好的52张牌，按发牌顺序排列
        """
        self._reset_deck()
        self.shuffle()
        return list(reversed(self._cards))

    def deal_one(self) -> Card:
        """
        发一张牌.

        Returns:
            Card: 发出的牌

        Raises:
            DeckExhaustedError: 当牌组为空时
        """
        if not self._cards:
            raise DeckExhaustedError("Cannot deal from empty deck")
        return self._cards.pop()

    def deal_cards(self, count: int) -> List[Card]:
        """
        发多张牌.

        Args:
            count: 要发的牌数

        Raises:
            ValueError: 当数量为负数时
            DeckExhaustedError: 当牌组中的牌不足时
        """
        if count < 0:
            raise ValueError("Count must be non-negative")
        if count > len(self._cards):
            raise DeckExhaustedError(f"Cannot deal {count} cards, only {len(self._cards)} remaining")

        return [self.deal_one() for _ in range(count)]

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck(cards_remaining={len(self._cards)})"
