"""Set ledger and the auto-completion of exercises."""
import pytest

from fitcore import db
from fitcore.errors import InvalidState, NotFound, ValidationError
from fitcore.models import ExerciseSet, Workout, WorkoutExercise
from fitcore.services import sessions, sets, trackers


@pytest.fixture
def workout(alice):
    return sessions.create_session(alice.id, {"name": "Upper body"})


def _running_tracker(alice, workout, exercise, planned_sets=3):
    tracker = trackers.add_tracker(
        alice.id, workout.id, exercise.id, {"order_index": 0, "planned_sets": planned_sets}
    )
    trackers.start_tracker(alice.id, workout.id, tracker.id)
    return tracker


def test_log_set_is_pending(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    logged = sets.log_set(
        alice.id, tracker.id, {"set_number": 1, "actual_reps": 10, "actual_weight": 60.0, "rpe_score": 7}
    )
    assert logged.status == ExerciseSet.PENDING
    assert logged.created_at is not None
    assert logged.completed_at is None


def test_log_set_on_foreign_tracker(alice, bob, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    with pytest.raises(NotFound):
        sets.log_set(bob.id, tracker.id, {"set_number": 1})
    with pytest.raises(NotFound):
        sets.list_sets(bob.id, tracker.id)


def test_complete_set_on_foreign_set(alice, bob, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    logged = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    with pytest.raises(NotFound):
        sets.complete_set(bob.id, logged.id)
    assert db.session.get(ExerciseSet, logged.id).status == ExerciseSet.PENDING


def test_auto_completes_when_planned_sets_reached(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise, planned_sets=3)
    logged = [sets.log_set(alice.id, tracker.id, {"set_number": n}) for n in (1, 2, 3)]

    for s in logged[:2]:
        sets.complete_set(alice.id, s.id)
    assert db.session.get(WorkoutExercise, tracker.id).status == WorkoutExercise.IN_PROGRESS

    sets.complete_set(alice.id, logged[2].id)
    done = db.session.get(WorkoutExercise, tracker.id)
    assert done.status == WorkoutExercise.COMPLETED
    assert done.completed_at is not None


def test_no_auto_completion_without_planned_sets(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise, planned_sets=None)
    for n in (1, 2, 3, 4):
        s = sets.log_set(alice.id, tracker.id, {"set_number": n})
        sets.complete_set(alice.id, s.id)
    assert db.session.get(WorkoutExercise, tracker.id).status == WorkoutExercise.IN_PROGRESS


def test_no_auto_completion_when_tracker_not_started(alice, workout, exercise):
    tracker = trackers.add_tracker(
        alice.id, workout.id, exercise.id, {"order_index": 0, "planned_sets": 1}
    )
    s = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    sets.complete_set(alice.id, s.id)
    assert db.session.get(WorkoutExercise, tracker.id).status == WorkoutExercise.PENDING


def test_pending_sets_do_not_count(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise, planned_sets=2)
    first = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    sets.log_set(alice.id, tracker.id, {"set_number": 2})
    sets.complete_set(alice.id, first.id)
    assert db.session.get(WorkoutExercise, tracker.id).status == WorkoutExercise.IN_PROGRESS


def test_completing_completed_set_is_noop(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise, planned_sets=5)
    s = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    first = sets.complete_set(alice.id, s.id)
    completed_at = first.completed_at

    again = sets.complete_set(alice.id, s.id)

    assert again.status == ExerciseSet.COMPLETED
    assert again.completed_at == completed_at


def test_failed_set_cannot_be_completed(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    s = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    s.status = ExerciseSet.FAILED
    db.session.commit()

    with pytest.raises(InvalidState):
        sets.complete_set(alice.id, s.id)


def test_duplicate_set_numbers_are_accepted(alice, workout, exercise):
    # set_number is not unique per exercise; both sets are kept
    tracker = _running_tracker(alice, workout, exercise, planned_sets=2)
    a = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    b = sets.log_set(alice.id, tracker.id, {"set_number": 1})
    sets.complete_set(alice.id, a.id)
    sets.complete_set(alice.id, b.id)

    assert [s.id for s in sets.list_sets(alice.id, tracker.id)] == [a.id, b.id]
    # two completed sets reach planned_sets=2
    assert db.session.get(WorkoutExercise, tracker.id).status == WorkoutExercise.COMPLETED


def test_list_sets_ordered_by_set_number(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    for n in (3, 1, 2):
        sets.log_set(alice.id, tracker.id, {"set_number": n})
    assert [s.set_number for s in sets.list_sets(alice.id, tracker.id)] == [1, 2, 3]


def test_log_set_rejects_status(alice, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    with pytest.raises(ValidationError) as exc:
        sets.log_set(alice.id, tracker.id, {"set_number": 1, "status": "completed"})
    assert "unknown field status" in exc.value.details
    with pytest.raises(ValidationError):
        sets.log_set(alice.id, tracker.id, {"actual_reps": 5})
    assert sets.list_sets(alice.id, tracker.id) == []


def test_list_sets_is_owner_scoped_read(alice, bob, workout, exercise):
    tracker = _running_tracker(alice, workout, exercise)
    sets.log_set(alice.id, tracker.id, {"set_number": 1})
    version = db.session.get(Workout, workout.id).version

    assert len(sets.list_sets(alice.id, tracker.id)) == 1
    with pytest.raises(NotFound):
        sets.list_sets(bob.id, tracker.id)
    with pytest.raises(NotFound):
        sets.list_sets(alice.id, 987654)
    assert db.session.get(Workout, workout.id).version == version
