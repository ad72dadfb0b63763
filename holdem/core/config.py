"""
一手牌配置相关类的实现
包含座位配置和手牌设置
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .enums import SeatKind
from .exceptions import ConfigurationError

# 52张牌减去5张公共牌后，每人2张底牌
DECK_SEAT_LIMIT = (52 - 5) // 2


@dataclass
class SeatConfig:
    """
    单个座位的配置信息
    """
    seat: int                                  # 座位号 (0-based)
    kind: SeatKind = SeatKind.AUTOMATED        # 座位类型
    name: Optional[str] = None                 # 玩家名称

    def __post_init__(self):
        """验证配置的有效性"""
        if self.seat < 0:
            raise ConfigurationError(f"座位号不能为负数: {self.seat}")

        if not isinstance(self.kind, SeatKind):
            raise ConfigurationError(f"无效的座位类型: {self.kind}")

        # 设置默认名称
        if self.name is None:
            self.name = "You" if self.is_human else f"Bot {self.seat}"

    @property
    def is_human(self) -> bool:
        """检查是否为人类座位"""
        return self.kind == SeatKind.HUMAN


@dataclass
class HandConfig:
    """
    手牌配置类
    包含一手牌开始前需要确定的所有参数
    """
    # 座位配置
    seats: List[SeatConfig] = field(default_factory=list)

    # 筹码和加注设置
    starting_stack: int = 100          # 初始筹码
    raise_unit: int = 10               # 固定加注单位
    min_raise_unit: int = 5            # 自动座位加注所需的最少筹码

    # 座位数量限制
    min_players: int = 2
    max_players: int = 9

    # 调试和测试设置
    random_seed: Optional[int] = None   # 随机种子，用于可重现的洗牌

    def __post_init__(self):
        """验证配置的有效性"""
        self._validate_basic_settings()
        self._validate_seats()

    @classmethod
    def default(cls, num_players: int = 3, **kwargs) -> 'HandConfig':
        """创建座位0为人类、其余为自动座位的配置"""
        seats = [
            SeatConfig(seat=i, kind=SeatKind.HUMAN if i == 0 else SeatKind.AUTOMATED)
            for i in range(num_players)
        ]
        return cls(seats=seats, **kwargs)

    def _validate_basic_settings(self):
        """验证基础设置"""
        if self.starting_stack <= 0:
            raise ConfigurationError(f"初始筹码必须大于0: {self.starting_stack}")

        if self.raise_unit <= 0:
            raise ConfigurationError(f"加注单位必须大于0: {self.raise_unit}")

        if self.min_raise_unit < 0:
            raise ConfigurationError(f"最小加注筹码不能为负数: {self.min_raise_unit}")

        if self.min_players < 2:
            raise ConfigurationError(f"最小玩家数不能少于2: {self.min_players}")

        if self.max_players < self.min_players:
            raise ConfigurationError(f"最大玩家数({self.max_players})不能小于最小玩家数({self.min_players})")

        if self.max_players > DECK_SEAT_LIMIT:
            raise ConfigurationError(f"最大玩家数({self.max_players})超过一副牌可支持的{DECK_SEAT_LIMIT}人")

    def _validate_seats(self):
        """验证座位配置"""
        if len(self.seats) < self.min_players:
            raise ConfigurationError(f"玩家数量({len(self.seats)})少于最小要求({self.min_players})")

        if len(self.seats) > self.max_players:
            raise ConfigurationError(f"玩家数量({len(self.seats)})超过最大限制({self.max_players})")

        # 座位号必须为 0..n-1 且不重复
        seats = sorted(s.seat for s in self.seats)
        if seats != list(range(len(self.seats))):
            raise ConfigurationError(f"座位号必须从0开始连续且不重复: {seats}")

        human_seats = [s for s in self.seats if s.is_human]
        if len(human_seats) > 1:
            raise ConfigurationError("只能有一个人类座位")

    @property
    def num_players(self) -> int:
        return len(self.seats)

    def get_human_seat(self) -> Optional[SeatConfig]:
        """获取人类座位配置"""
        human_seats = [s for s in self.seats if s.is_human]
        return human_seats[0] if human_seats else None

    def get_automated_seats(self) -> List[SeatConfig]:
        """获取所有自动座位配置"""
        return [s for s in self.seats if not s.is_human]
