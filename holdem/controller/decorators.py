"""
Decorators for controller layer functionality.

This module provides decorators for transaction management and action
logging around the round state machine.
"""

import functools
from typing import Any, Callable, Optional, TypeVar

from ..core import EventType

F = TypeVar('F', bound=Callable[..., Any])


def atomic(func: F) -> F:
    """
    Run a state machine operation as one transaction.

    The session is snapshotted and the event bus starts holding emissions
    before the method runs. On success the held events are delivered in
    order. If any exception escapes, the session is restored, the held
    events are dropped and a single ACTION_ROLLED_BACK event is emitted in
    their place.

    The decorated object must provide ``_session`` (HandSession) and
    ``_event_bus`` (EventBus).

    Example:
        @atomic
        def apply_call(self, seat_id: int) -> None:
            ...
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        session = self._session
        event_bus = self._event_bus
        saved_snapshot = session.create_snapshot()
        event_bus.begin_transaction()

        try:
            result = func(self, *args, **kwargs)
        except Exception as e:
            session.restore_from_snapshot(saved_snapshot)
            discarded = event_bus.rollback_transaction()
            if not event_bus.in_transaction:
                event_bus.emit_simple(
                    EventType.ACTION_ROLLED_BACK,
                    operation=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                    discarded_events=discarded
                )
            raise

        event_bus.commit_transaction()
        return result

    return wrapper


def logged_action(action_name: Optional[str] = None):
    """
    Log a state machine operation at debug level, and its failure as a warning.

    Args:
        action_name: Name used in the log lines; defaults to the method name.
    """
    def decorator(func: F) -> F:
        name = action_name or func.__name__

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            self._logger.debug(f"{name} {args} 开始，行动位: {self._session.current_seat}")
            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                self._logger.warning(f"{name} {args} 失败: {e}")
                raise
            self._logger.debug(f"{name} 完成，底池: {self._session.pot}")
            return result

        return wrapper
    return decorator
