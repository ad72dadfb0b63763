"""数据传输对象定义.

这个模块定义了状态机与UI层之间传输数据的标准格式。
使用Pydantic dataclass确保数据验证和序列化的一致性。
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from ..core import Action, ActionType, HandSnapshot, RoundState, SeatKind


@pydantic_dataclass
class ParticipantView:
    """参与者状态视图.

    其他座位的底牌在摊牌前以"XX"显示。
    """
    seat_id: int = Field(..., ge=0, description="座位号")
    name: str = Field(..., min_length=1, description="玩家名称")
    kind: SeatKind = Field(..., description="座位类型")
    stack: int = Field(..., ge=0, description="剩余筹码")
    committed_this_round: int = Field(..., ge=0, description="本轮投入")
    committed_this_hand: int = Field(..., ge=0, description="本手牌投入")
    folded: bool = Field(False, description="是否已弃牌")
    all_in: bool = Field(False, description="是否已全押")
    hole_cards: List[str] = Field(default_factory=list, description="底牌")


@pydantic_dataclass
class HandView:
    """手牌状态视图.

    包含一手牌在某个时刻的完整状态信息，用于UI显示。
    """
    round_state: RoundState = Field(..., description="当前下注轮次")
    board: List[str] = Field(default_factory=list, description="公共牌")
    pot: int = Field(..., ge=0, description="底池金额")
    highest_commitment: int = Field(..., ge=0, description="本轮最高投入")
    participants: List[ParticipantView] = Field(..., description="参与者列表")
    current_seat: Optional[int] = Field(None, description="当前行动座位")
    viewer_seat: Optional[int] = Field(None, description="观看者座位")
    timestamp: datetime = Field(default_factory=datetime.now, description="快照时间戳")

    @field_validator('board')
    @classmethod
    def validate_board_size(cls, v):
        """验证公共牌数量."""
        if len(v) not in (0, 3, 4, 5):
            raise ValueError(f"公共牌数量无效: {len(v)}")
        return v

    @field_validator('current_seat')
    @classmethod
    def validate_current_seat(cls, v, info):
        """验证当前行动座位在参与者列表中."""
        participants = info.data.get('participants')
        if v is not None and participants is not None:
            if v not in [p.seat_id for p in participants]:
                raise ValueError(f"当前行动座位 {v} 不在参与者列表中")
        return v

    def get_participant(self, seat_id: int) -> Optional[ParticipantView]:
        for participant in self.participants:
            if participant.seat_id == seat_id:
                return participant
        return None


@pydantic_dataclass
class ActionInput:
    """玩家行动输入.

    表示玩家要执行的行动，用于从UI传递到状态机。
    """
    seat_id: int = Field(..., ge=0, description="座位号")
    action_type: ActionType = Field(..., description="行动类型")
    amount: int = Field(0, ge=0, description="加注增量，为0时使用配置的加注单位")
    timestamp: datetime = Field(default_factory=datetime.now, description="行动时间戳")

    @field_validator('amount')
    @classmethod
    def validate_amount_for_action(cls, v, info):
        """验证金额与行动类型的匹配性."""
        action_type = info.data.get('action_type')
        if action_type is not None and action_type != ActionType.RAISE and v != 0:
            raise ValueError(f"{action_type.value}行动不应包含金额")
        return v

    def to_action(self, raise_unit: int) -> Action:
        """转换为状态机使用的行动对象."""
        amount = 0
        if self.action_type == ActionType.RAISE:
            amount = self.amount or raise_unit
        return Action(self.action_type, seat_id=self.seat_id, amount=amount)


@pydantic_dataclass
class HandOutcome:
    """手牌结束结果.

    包含一手牌结束后的完整结果信息。
    """
    winner_ids: List[int] = Field(..., description="获胜座位列表")
    pot: int = Field(..., ge=0, description="底池总金额")
    payouts: Dict[int, int] = Field(default_factory=dict, description="各赢家获得的筹码")
    share: int = Field(..., ge=0, description="每位赢家分得的筹码")
    unallocated: int = Field(..., ge=0, description="未分配的余数筹码")
    default_win: bool = Field(..., description="是否因其他人弃牌直接获胜")
    final_stacks: Dict[int, int] = Field(default_factory=dict, description="结算后各座位筹码")
    hand_descriptions: Dict[int, str] = Field(default_factory=dict, description="摊牌时各座位的牌型")
    board: List[str] = Field(default_factory=list, description="最终公共牌")
    timestamp: datetime = Field(default_factory=datetime.now, description="结束时间戳")

    @property
    def is_tie(self) -> bool:
        return len(self.winner_ids) > 1


def build_hand_view(snapshot: HandSnapshot, viewer_seat: Optional[int] = None) -> HandView:
    """从手牌快照构建视图，viewer_seat以外座位的底牌在摊牌前隐藏."""
    data = snapshot.to_dict(viewer_seat)
    participants = [
        ParticipantView(
            seat_id=p['seat_id'],
            name=p['name'],
            kind=SeatKind(p['kind']),
            stack=p['stack'],
            committed_this_round=p['committed_this_round'],
            committed_this_hand=p['committed_this_hand'],
            folded=p['folded'],
            all_in=p['all_in'],
            hole_cards=p['hole_cards'].split(),
        )
        for p in data['participants']
    ]
    return HandView(
        round_state=snapshot.round_state,
        board=data['board'],
        pot=data['pot'],
        highest_commitment=data['highest_commitment'],
        participants=participants,
        current_seat=data['current_seat'],
        viewer_seat=viewer_seat,
    )


def build_hand_outcome(snapshot: HandSnapshot) -> Optional[HandOutcome]:
    """从已结算的手牌快照构建结果，手牌未结束时返回None."""
    result = snapshot.result
    if not snapshot.resolved or result is None:
        return None

    return HandOutcome(
        winner_ids=list(result.winner_ids),
        pot=result.pot,
        payouts=dict(result.payouts),
        share=result.share,
        unallocated=result.unallocated,
        default_win=result.default_win,
        final_stacks={p.seat_id: p.stack for p in snapshot.participants},
        hand_descriptions={seat: str(rank) for seat, rank in result.hand_ranks.items()},
        board=[str(card) for card in snapshot.board],
    )
