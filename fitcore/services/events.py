# fitcore/services/events.py
from collections import defaultdict
from typing import Callable, Dict, List

from flask import current_app

EVENTS = (
    "session_started",
    "session_completed",
    "tracker_completed",
    "session_repaired",
)


class SessionEvents:
    """
    Explicit subscriber registry for workout lifecycle notifications.

    Subscribers run after the transaction that produced the event has
    committed, so a failing subscriber cannot undo the state change. Its
    error is logged and the remaining subscribers still run.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = defaultdict(list)

    def subscribe(self, event: str, callback: Callable) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event: {event}")
        self._subscribers[event].append(callback)

    def unsubscribe(self, event: str, callback: Callable) -> None:
        if callback in self._subscribers.get(event, []):
            self._subscribers[event].remove(callback)

    def publish(self, event: str, **payload) -> None:
        for callback in list(self._subscribers.get(event, [])):
            try:
                callback(**payload)
            except Exception:
                current_app.logger.exception(
                    f"[events] subscriber {getattr(callback, '__name__', callback)!r} "
                    f"failed for {event}"
                )


def publish(event: str, **payload) -> None:
    events = current_app.extensions.get("fitcore.events")
    if events is not None:
        events.publish(event, **payload)


def log_completed_session(workout, **_):
    current_app.logger.info(
        f"[events] workout completed id={workout.id} name='{workout.name}' "
        f"user_id={workout.user_id} duration_minutes={workout.duration_minutes}"
    )
