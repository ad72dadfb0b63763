"""
Hand session state for the single-hand betting engine.

All state of one hand (deck, board, pot, seats, turn cursor, round) lives on
one ``HandSession`` object created per hand. The session only stores data and
answers questions about it; the betting rules live in the round state machine.
"""

import copy
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .cards import Card, Deck
from .config import HandConfig
from .enums import RoundState
from .participant import Participant


def _shuffled_deck() -> Deck:
    deck = Deck()
    deck.shuffle()
    return deck


@dataclass
class HandSnapshot:
    """
    Immutable copy of a hand session for external consumption and rollback.

    Players and the deck are deep copies, not references.
    """

    round_state: RoundState
    board: List[Card]
    pot: int
    highest_commitment: int
    current_seat: Optional[int]
    actions_this_round: int
    participants: List[Participant]
    deck: Deck
    started: bool
    resolved: bool
    result: Any

    def get_participant(self, seat_id: int) -> Optional[Participant]:
        for participant in self.participants:
            if participant.seat_id == seat_id:
                return participant
        return None

    def to_dict(self, viewer_seat: Optional[int] = None) -> Dict[str, Any]:
        """Convert snapshot to dictionary format.

        Args:
            viewer_seat: Seat of the viewer; other seats' hole cards are hidden
                until the hand is resolved.
        """
        participants_data = []
        for participant in self.participants:
            hide_cards = (viewer_seat is not None and participant.seat_id != viewer_seat
                          and not self.resolved)
            participants_data.append({
                'seat_id': participant.seat_id,
                'name': participant.name,
                'kind': participant.kind.value,
                'stack': participant.stack,
                'committed_this_round': participant.committed_this_round,
                'committed_this_hand': participant.committed_this_hand,
                'folded': participant.folded,
                'all_in': participant.all_in,
                'hole_cards': participant.get_hole_cards_str(hidden=hide_cards),
            })

        return {
            'round': self.round_state.label,
            'board': [str(card) for card in self.board],
            'pot': self.pot,
            'highest_commitment': self.highest_commitment,
            'current_seat': self.current_seat,
            'participants': participants_data,
        }


@dataclass
class HandSession:
    """
    Mutable state of exactly one hand.

    The session is owned by one round state machine; callers that share it
    across threads must serialize access themselves.
    """

    participants: List[Participant] = field(default_factory=list)
    deck: Deck = field(default_factory=_shuffled_deck)
    board: List[Card] = field(default_factory=list)
    pot: int = 0
    round_state: RoundState = RoundState.PRE_FLOP
    highest_commitment: int = 0
    current_seat: Optional[int] = None
    actions_this_round: int = 0
    raise_unit: int = 10
    min_raise_unit: int = 5
    started: bool = False
    resolved: bool = False
    result: Any = None

    def __post_init__(self):
        """Validate state after initialization."""
        if self.pot < 0:
            raise ValueError(f"Pot amount cannot be negative: {self.pot}")

        if self.highest_commitment < 0:
            raise ValueError(f"Highest commitment cannot be negative: {self.highest_commitment}")

        seat_ids = [p.seat_id for p in self.participants]
        if seat_ids != list(range(len(seat_ids))):
            raise ValueError(f"Participants must sit at seats 0..n-1 in order: {seat_ids}")

    @classmethod
    def from_config(cls, config: HandConfig, deck: Optional[Deck] = None) -> 'HandSession':
        """Create a fresh session for one hand.

        Args:
            config: Validated hand configuration.
            deck: Pre-arranged deck; when omitted a new deck is shuffled
                with ``config.random_seed``.
        """
        if deck is None:
            deck = Deck(random.Random(config.random_seed))
            deck.shuffle()

        participants = [
            Participant(seat_id=seat.seat, name=seat.name, stack=config.starting_stack, kind=seat.kind)
            for seat in sorted(config.seats, key=lambda s: s.seat)
        ]
        return cls(
            participants=participants,
            deck=deck,
            raise_unit=config.raise_unit,
            min_raise_unit=config.min_raise_unit,
        )

    # === Queries ===

    def get_participant(self, seat_id: int) -> Optional[Participant]:
        if 0 <= seat_id < len(self.participants):
            return self.participants[seat_id]
        return None

    def get_current_participant(self) -> Optional[Participant]:
        if self.current_seat is None:
            return None
        return self.get_participant(self.current_seat)

    def get_participants_in_hand(self) -> List[Participant]:
        """Participants still eligible for the pot (not folded)."""
        return [p for p in self.participants if p.in_hand]

    def next_active_seat(self, after: Optional[int]) -> Optional[int]:
        """First seat after ``after`` (wrapping) that can act, or None.

        ``after=None`` searches from seat 0 inclusive.
        """
        count = len(self.participants)
        if count == 0:
            return None

        start = 0 if after is None else after + 1
        for offset in range(count):
            seat = (start + offset) % count
            if self.participants[seat].can_act:
                return seat
        return None

    @property
    def total_stacks(self) -> int:
        return sum(p.stack for p in self.participants)

    # === Snapshots ===

    def create_snapshot(self) -> HandSnapshot:
        """Create an immutable snapshot of the current hand state."""
        return HandSnapshot(
            round_state=self.round_state,
            board=list(self.board),
            pot=self.pot,
            highest_commitment=self.highest_commitment,
            current_seat=self.current_seat,
            actions_this_round=self.actions_this_round,
            participants=[copy.deepcopy(p) for p in self.participants],
            deck=copy.deepcopy(self.deck),
            started=self.started,
            resolved=self.resolved,
            result=self.result,
        )

    def restore_from_snapshot(self, snapshot: HandSnapshot) -> None:
        """Restore hand state from a snapshot.

        Participant objects and the board list are updated in place, so
        references held by callers stay valid.
        """
        self.round_state = snapshot.round_state
        self.board[:] = snapshot.board
        self.pot = snapshot.pot
        self.highest_commitment = snapshot.highest_commitment
        self.current_seat = snapshot.current_seat
        self.actions_this_round = snapshot.actions_this_round
        if len(self.participants) == len(snapshot.participants):
            for target, saved in zip(self.participants, snapshot.participants):
                target.__dict__.update(copy.deepcopy(saved.__dict__))
        else:
            self.participants = [copy.deepcopy(p) for p in snapshot.participants]
        self.deck = copy.deepcopy(snapshot.deck)
        self.started = snapshot.started
        self.resolved = snapshot.resolved
        self.result = snapshot.result

    def to_dict(self, viewer_seat: Optional[int] = None) -> Dict[str, Any]:
        return self.create_snapshot().to_dict(viewer_seat)

    def __str__(self) -> str:
        board_str = " ".join(str(card) for card in self.board)
        return (f"Round: {self.round_state.label}, "
                f"Board: [{board_str}], "
                f"Pot: {self.pot}, "
                f"Highest commitment: {self.highest_commitment}, "
                f"On action: {self.current_seat}")

    def __repr__(self) -> str:
        return f"HandSession(round={self.round_state.name}, pot={self.pot}, participants={len(self.participants)})"
