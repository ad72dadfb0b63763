"""
扑克牌和牌组单元测试.

测试牌的解析与显示、洗牌、发牌顺序以及牌组耗尽时的异常。
"""

import random

import pytest

from holdem.core import Card, Deck, DeckExhaustedError, Rank, Suit, full_deck, new_deck, parse_cards


@pytest.mark.unit
@pytest.mark.fast
class TestCard:
    """扑克牌测试类."""

    def test_from_str_short_form(self):
        """测试短格式解析."""
        card = Card.from_str("Ah")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.HEARTS
        assert str(card) == "Ah"

    def test_from_str_ten_variants(self):
        """测试10的三种写法."""
        assert Card.from_str("10d") == Card.from_str("Td") == Card.from_str("T♦")

    def test_pretty_uses_suit_symbol(self):
        assert Card(Suit.SPADES, Rank.KING).pretty == "K♠"

    @pytest.mark.parametrize("text", ["", "A", "1h", "Ax", "Zs"])
    def test_from_str_invalid(self, text):
        """测试无效字符串."""
        with pytest.raises(ValueError):
            Card.from_str(text)

    def test_cards_are_hashable_values(self):
        assert len({Card.from_str("Ah"), Card.from_str("Ah"), Card.from_str("Ad")}) == 2

    def test_parse_cards(self):
        assert [str(c) for c in parse_cards("Ah Kd 7s")] == ["Ah", "Kd", "7s"]


@pytest.mark.unit
@pytest.mark.fast
class TestDeck:
    """牌组测试类."""

    def test_full_deck_has_52_unique_cards(self):
        cards = full_deck()
        assert len(cards) == 52
        assert len(set(cards)) == 52

    def test_shuffled_deck_returns_all_cards(self):
        """测试洗牌后仍为52张不重复的牌."""
        deck = Deck(random.Random(7))
        cards = deck.shuffled_deck()
        assert len(cards) == 52
        assert set(cards) == set(full_deck())
        assert len(deck) == 52

    def test_shuffled_deck_matches_deal_order(self):
        deck = Deck(random.Random(3))
        order = deck.shuffled_deck()
        assert [deck.deal_one() for _ in range(5)] == order[:5]

    def test_same_seed_same_order(self):
        first = [new_deck(seed=42).deal_one() for _ in range(1)]
        second = [new_deck(seed=42).deal_one() for _ in range(1)]
        assert first == second

    def test_deal_one_until_exhausted(self):
        """测试发完52张后抛出DeckExhaustedError."""
        deck = Deck()
        dealt = [deck.deal_one() for _ in range(52)]
        assert len(set(dealt)) == 52
        with pytest.raises(DeckExhaustedError):
            deck.deal_one()

    def test_deal_cards_more_than_remaining(self):
        deck = Deck.stacked(parse_cards("Ah Kh"))
        with pytest.raises(DeckExhaustedError):
            deck.deal_cards(3)
        # 失败时不发出任何牌
        assert deck.cards_remaining == 2

    def test_deal_cards_negative_count(self):
        with pytest.raises(ValueError):
            Deck().deal_cards(-1)

    def test_stacked_deck_deals_in_given_order(self):
        deck = Deck.stacked(parse_cards("2c 3d 4h"))
        assert [str(deck.deal_one()) for _ in range(3)] == ["2c", "3d", "4h"]

    def test_stacked_deck_rejects_duplicates(self):
        with pytest.raises(ValueError):
            Deck.stacked(parse_cards("2c 2c"))
