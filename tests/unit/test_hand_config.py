"""
手牌配置单元测试.
"""

import pytest

from holdem.core import ConfigurationError, DECK_SEAT_LIMIT, HandConfig, HandSession, SeatConfig, SeatKind


@pytest.mark.unit
@pytest.mark.fast
class TestSeatConfig:
    """座位配置测试类."""

    def test_default_names(self):
        """测试默认名称."""
        assert SeatConfig(seat=0, kind=SeatKind.HUMAN).name == "You"
        assert SeatConfig(seat=2).name == "Bot 2"

    def test_custom_name_kept(self):
        assert SeatConfig(seat=1, name="Alice").name == "Alice"

    def test_negative_seat_rejected(self):
        with pytest.raises(ConfigurationError):
            SeatConfig(seat=-1)

    def test_invalid_kind_rejected(self):
        with pytest.raises(ConfigurationError):
            SeatConfig(seat=0, kind="human")


@pytest.mark.unit
@pytest.mark.fast
class TestHandConfig:
    """手牌配置测试类."""

    def test_default_table(self):
        """测试默认配置：3个座位，座位0为人类."""
        config = HandConfig.default()
        assert config.num_players == 3
        assert config.starting_stack == 100
        assert config.raise_unit == 10
        assert config.get_human_seat().seat == 0
        assert [s.name for s in config.get_automated_seats()] == ["Bot 1", "Bot 2"]

    def test_table_without_human(self):
        config = HandConfig(seats=[SeatConfig(seat=0), SeatConfig(seat=1)])
        assert config.get_human_seat() is None

    def test_single_seat_rejected(self):
        """测试少于2个座位."""
        with pytest.raises(ConfigurationError):
            HandConfig.default(num_players=1)

    def test_too_many_seats_rejected(self):
        with pytest.raises(ConfigurationError):
            HandConfig.default(num_players=10)

    def test_max_players_limited_by_deck(self):
        with pytest.raises(ConfigurationError):
            HandConfig.default(num_players=3, max_players=DECK_SEAT_LIMIT + 1)

    def test_two_humans_rejected(self):
        seats = [SeatConfig(seat=0, kind=SeatKind.HUMAN), SeatConfig(seat=1, kind=SeatKind.HUMAN)]
        with pytest.raises(ConfigurationError):
            HandConfig(seats=seats)

    def test_seats_must_be_contiguous(self):
        with pytest.raises(ConfigurationError):
            HandConfig(seats=[SeatConfig(seat=0), SeatConfig(seat=2)])

    def test_duplicate_seats_rejected(self):
        with pytest.raises(ConfigurationError):
            HandConfig(seats=[SeatConfig(seat=0), SeatConfig(seat=0)])

    @pytest.mark.parametrize("kwargs", [
        {"starting_stack": 0},
        {"raise_unit": 0},
        {"min_raise_unit": -1},
        {"min_players": 1},
        {"min_players": 4, "max_players": 3},
    ])
    def test_invalid_basic_settings(self, kwargs):
        """测试无效的筹码和人数设置."""
        with pytest.raises(ConfigurationError):
            HandConfig.default(**kwargs)

    def test_session_from_config(self):
        """测试由配置创建手牌状态."""
        config = HandConfig.default(num_players=4, starting_stack=50, raise_unit=5, random_seed=1)
        session = HandSession.from_config(config)

        assert [p.seat_id for p in session.participants] == [0, 1, 2, 3]
        assert all(p.stack == 50 for p in session.participants)
        assert session.participants[0].is_human
        assert all(p.is_automated for p in session.participants[1:])
        assert session.raise_unit == 5
        assert len(session.deck) == 52

    def test_seeded_sessions_share_deck_order(self):
        config = HandConfig.default(random_seed=99)
        first = HandSession.from_config(config).deck.deal_cards(5)
        second = HandSession.from_config(config).deck.deal_cards(5)
        assert first == second
