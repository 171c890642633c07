# fitcore/services/sets.py
from typing import Any, Dict, List

from flask import current_app

from .. import db
from ..errors import InvalidState
from ..models import ExerciseSet
from .common import (
    check_fields,
    find_tracker,
    lock_set_by_id,
    lock_tracker_by_id,
    unit_of_work,
    utcnow,
)
from .events import publish
from .trackers import complete_if_planned_sets_met


def log_set(user_id: int, tracker_id: int, set_data: Dict[str, Any]) -> ExerciseSet:
    check_fields(set_data, ExerciseSet.SET_FIELDS, required=("set_number",), what="set")
    # set_number is not checked for duplicates
    with unit_of_work():
        workout, tracker = lock_tracker_by_id(user_id, tracker_id)
        now = utcnow()
        exercise_set = ExerciseSet(
            workout_exercise=tracker,
            status=ExerciseSet.PENDING,
            created_at=now,
            **set_data,
        )
        workout.touch(now)
        db.session.add(exercise_set)

    current_app.logger.info(
        f"[sets] logged id={exercise_set.id} workout_exercise_id={tracker_id} "
        f"set_number={exercise_set.set_number} user_id={user_id}"
    )
    return exercise_set


def complete_set(user_id: int, set_id: int) -> ExerciseSet:
    """
    Mark a set completed, then let its exercise auto-complete once the
    planned set count is reached.

    Completing an already completed set is a no-op so duplicate taps are
    harmless; a failed set cannot be completed.
    """
    with unit_of_work():
        workout, tracker, exercise_set = lock_set_by_id(user_id, set_id)
        if exercise_set.status == ExerciseSet.COMPLETED:
            return exercise_set
        if exercise_set.status != ExerciseSet.PENDING:
            raise InvalidState(f"Set is already {exercise_set.status}")

        now = utcnow()
        exercise_set.mark_completed(now)
        auto_completed = complete_if_planned_sets_met(tracker, now)
        workout.touch(now)

    current_app.logger.info(
        f"[sets] completed id={set_id} workout_exercise_id={tracker.id} "
        f"user_id={user_id} exercise_auto_completed={auto_completed}"
    )
    if auto_completed:
        publish("tracker_completed", workout=workout, tracker=tracker, auto=True)
    return exercise_set


def list_sets(user_id: int, tracker_id: int) -> List[ExerciseSet]:
    tracker = find_tracker(user_id, tracker_id)
    return (
        ExerciseSet.query.filter_by(workout_exercise_id=tracker.id)
        .order_by(ExerciseSet.set_number.asc(), ExerciseSet.id.asc())
        .all()
    )
