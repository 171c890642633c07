"""Lifecycle notifications published by the workout services."""
import pytest

from fitcore.errors import InvalidState
from fitcore.services import sessions, sets, trackers
from fitcore.services.events import SessionEvents


@pytest.fixture
def events(app):
    return app.extensions["fitcore.events"]


@pytest.fixture
def received(events):
    calls = []

    def record(name):
        def _cb(**payload):
            calls.append((name, payload))
        return _cb

    for name in ("session_started", "session_completed", "tracker_completed"):
        events.subscribe(name, record(name))
    return calls


def test_unknown_event_rejected():
    with pytest.raises(ValueError):
        SessionEvents().subscribe("workout_exploded", lambda **_: None)


def test_explicit_and_implicit_start_events(alice, exercise, received):
    explicit = sessions.create_session(alice.id, {"name": "A"})
    sessions.start_session(alice.id, explicit.id)

    implicit = sessions.create_session(alice.id, {"name": "B"})
    tracker = trackers.add_tracker(alice.id, implicit.id, exercise.id, {"order_index": 0})
    trackers.start_tracker(alice.id, implicit.id, tracker.id)

    starts = [p["implicit"] for name, p in received if name == "session_started"]
    assert starts == [False, True]


def test_auto_completion_publishes_tracker_completed(alice, exercise, received):
    workout = sessions.create_session(alice.id, {"name": "A"})
    tracker = trackers.add_tracker(
        alice.id, workout.id, exercise.id, {"order_index": 0, "planned_sets": 1}
    )
    trackers.start_tracker(alice.id, workout.id, tracker.id)
    s = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    sets.complete_set(alice.id, s.id)

    completed = [p for name, p in received if name == "tracker_completed"]
    assert len(completed) == 1
    assert completed[0]["auto"] is True
    assert completed[0]["tracker"].id == tracker.id


def test_failing_subscriber_does_not_undo_completion(alice, events):
    def boom(**_):
        raise RuntimeError("notification service down")

    events.subscribe("session_completed", boom)
    workout = sessions.create_session(alice.id, {"name": "A"})
    sessions.start_session(alice.id, workout.id)

    done = sessions.complete_session(alice.id, workout.id)

    assert sessions.get_session(alice.id, done.id).status == "completed"


def test_no_event_when_guard_fails(alice, received):
    workout = sessions.create_session(alice.id, {"name": "A"})
    with pytest.raises(InvalidState):
        sessions.complete_session(alice.id, workout.id)
    assert not [n for n, _ in received if n == "session_completed"]
