"""
Event system for the single-hand betting engine.

The round state machine emits structured events (cards dealt, actions,
round changes, payouts) instead of formatted strings; rendering and
narration are left to subscribers such as ``LoggingEventSink``.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class EventType(Enum):
    """Types of events that can be emitted during a hand."""

    # Hand lifecycle events
    HAND_STARTED = "hand_started"
    HAND_ENDED = "hand_ended"

    # Round events
    ROUND_CHANGED = "round_changed"
    CARDS_DEALT = "cards_dealt"

    # Player action events
    PLAYER_ACTION = "player_action"
    PLAYER_FOLDED = "player_folded"
    PLAYER_ALL_IN = "player_all_in"

    # Pot events
    POT_UPDATED = "pot_updated"
    HAND_EVALUATED = "hand_evaluated"
    POT_AWARDED = "pot_awarded"

    # Transaction events
    ACTION_ROLLED_BACK = "action_rolled_back"


@dataclass
class GameEvent:
    """Represents a game event with associated data.

    Attributes:
        event_type: The type of event
        data: Event-specific data
        timestamp: When the event occurred (optional)
        source: Source of the event (optional)
    """

    event_type: EventType
    data: Dict[str, Any]
    timestamp: Optional[float] = None
    source: Optional[str] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = time.time()


# Type alias for event listeners
EventListener = Callable[[GameEvent], None]


class EventBus:
    """Event bus for managing hand events and listeners.

    One bus belongs to one hand; there is no process-wide instance.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_history: int = 1000):
        """Initialize the event bus.

        Args:
            logger: Optional logger for debugging events
            max_history: Number of events kept in the history buffer
        """
        self._listeners: Dict[EventType, List[EventListener]] = {}
        self._wildcard_listeners: List[EventListener] = []
        self._logger = logger or logging.getLogger(__name__)
        self._event_history: List[GameEvent] = []
        self._max_history = max_history
        self._pending: List[GameEvent] = []
        self._transaction_marks: List[int] = []

    def subscribe(self, event_type: EventType, listener: EventListener) -> None:
        """Subscribe a listener to an event type."""
        self._listeners.setdefault(event_type, []).append(listener)
        self._logger.debug(f"Subscribed listener to {event_type.value}")

    def subscribe_all(self, listener: EventListener) -> None:
        """Subscribe a listener to every event type."""
        self._wildcard_listeners.append(listener)
        self._logger.debug("Subscribed listener to all events")

    def unsubscribe(self, event_type: EventType, listener: EventListener) -> bool:
        """Unsubscribe a listener from an event type.

        Returns:
            True if the listener was found and removed, False otherwise
        """
        if event_type not in self._listeners:
            return False

        try:
            self._listeners[event_type].remove(listener)
            self._logger.debug(f"Unsubscribed listener from {event_type.value}")
            return True
        except ValueError:
            return False

    # === Transactions ===

    @property
    def in_transaction(self) -> bool:
        return bool(self._transaction_marks)

    def begin_transaction(self) -> None:
        """Hold back emitted events until the outermost transaction commits."""
        self._transaction_marks.append(len(self._pending))

    def commit_transaction(self) -> None:
        """Deliver held events once the outermost transaction ends."""
        if not self._transaction_marks:
            raise RuntimeError("No transaction to commit")

        self._transaction_marks.pop()
        if not self._transaction_marks:
            pending, self._pending = self._pending, []
            for event in pending:
                self._deliver(event)

    def rollback_transaction(self) -> int:
        """Drop the events held since the innermost transaction began.

        Returns:
            Number of events that were discarded
        """
        if not self._transaction_marks:
            raise RuntimeError("No transaction to roll back")

        mark = self._transaction_marks.pop()
        discarded = len(self._pending) - mark
        del self._pending[mark:]
        self._logger.debug(f"Discarded {discarded} events on rollback")
        return discarded

    # === Emission ===

    def emit(self, event: GameEvent) -> None:
        """Emit an event to all subscribed listeners.

        Inside a transaction the event is held until commit. A failing
        listener is logged and does not stop the hand.
        """
        if self.in_transaction:
            self._pending.append(event)
            return
        self._deliver(event)

    def _deliver(self, event: GameEvent) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history.pop(0)

        listeners = self._listeners.get(event.event_type, []) + self._wildcard_listeners
        self._logger.debug(f"Emitting {event.event_type.value} to {len(listeners)} listeners")

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                self._logger.exception(f"Error in event listener for {event.event_type.value}")

    def emit_simple(self, event_type: EventType, **data) -> None:
        """Emit a simple event with data as keyword arguments."""
        self.emit(GameEvent(event_type=event_type, data=data))

    def get_listeners_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, [])) + len(self._wildcard_listeners)

    def get_event_history(self, event_type: Optional[EventType] = None,
                          limit: Optional[int] = None) -> List[GameEvent]:
        """Get event history, optionally filtered by type and limited."""
        events = self._event_history

        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]

        if limit is not None:
            events = events[-limit:]

        return list(events)

    def clear_history(self) -> None:
        self._event_history.clear()


class LoggingEventSink:
    """Narrates hand events through ``logging``.

    Subscribe it with ``bus.subscribe_all(sink)``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("holdem.narration")
        self._level = level

    def __call__(self, event: GameEvent) -> None:
        message = self.describe(event)
        if message:
            self._logger.log(self._level, message)

    @staticmethod
    def describe(event: GameEvent) -> str:
        """Render one event as a single line of narration."""
        data = event.data
        event_type = event.event_type

        if event_type == EventType.HAND_STARTED:
            return f"New hand with {data['num_players']} players"
        if event_type == EventType.CARDS_DEALT:
            cards = ", ".join(data["cards"])
            if data.get("seat_id") is not None:
                return f"{data['name']} is dealt {cards}"
            return f"{data['round']}: {cards}"
        if event_type == EventType.ROUND_CHANGED:
            return f"Round: {data['round']}"
        if event_type == EventType.PLAYER_ACTION:
            if data["action_type"] == "check":
                return f"{data['name']} checks."
            if data["action_type"] == "call":
                return f"{data['name']} calls ${data['amount']}."
            if data["committed_this_round"] <= data.get("previous_highest", 0):
                return f"{data['name']} calls all-in for ${data['amount']}, total bet ${data['committed_this_round']}."
            return f"{data['name']} raises by ${data['raise_by']}, total bet ${data['committed_this_round']}."
        if event_type == EventType.PLAYER_FOLDED:
            return f"{data['name']} folds."
        if event_type == EventType.PLAYER_ALL_IN:
            return f"{data['name']} is all-in!"
        if event_type == EventType.HAND_EVALUATED:
            return f"{data['name']}: {data['description']}"
        if event_type == EventType.POT_AWARDED:
            return f"{data['name']} wins ${data['amount']}"
        if event_type == EventType.ACTION_ROLLED_BACK:
            return f"{data['operation']} rolled back: {data['error']}"
        if event_type == EventType.HAND_ENDED:
            if len(data["winner_ids"]) > 1:
                return f"Tie between seats {data['winner_ids']}. Pot of ${data['pot']} is split."
            return f"Hand over, pot ${data['pot']}"
        return ""
