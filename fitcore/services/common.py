# fitcore/services/common.py
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable

from sqlalchemy.orm.exc import StaleDataError

from .. import db
from ..errors import InvalidState, NotFound, OwnerNotFound, ValidationError
from ..models import ExerciseSet, User, Workout, WorkoutExercise


def utcnow() -> datetime:
    return datetime.utcnow()


@contextmanager
def unit_of_work():
    """
    Commit on success, roll back and re-raise on any failure.

    A workout whose version moved since it was read was changed by a
    concurrent call; that surfaces as InvalidState and the caller may retry.
    """
    try:
        yield db.session
        db.session.commit()
    except StaleDataError:
        db.session.rollback()
        raise InvalidState("Workout was modified concurrently; reload and retry")
    except Exception:
        db.session.rollback()
        raise


def check_fields(
    fields: Dict[str, Any], allowed: Iterable[str], required: Iterable[str] = (), what="fields"
) -> None:
    """Services take parser output; reject anything else before touching the DB."""
    errors = [f"unknown field {k}" for k in sorted(set(fields) - set(allowed))]
    errors += [f"{k} is required" for k in required if fields.get(k) is None]
    if errors:
        raise ValidationError(f"Invalid {what}", errors)


def resolve_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise OwnerNotFound(f"User not found: {user_id}")
    return user


def find_workout(user_id: int, workout_id: int) -> Workout:
    workout = Workout.query.filter_by(id=workout_id, user_id=user_id).first()
    if not workout:
        raise NotFound(f"Workout not found: {workout_id}")
    return workout


def lock_workout(user_id: int, workout_id: int) -> Workout:
    # another user's workout is indistinguishable from a missing one
    workout = (
        Workout.query.filter_by(id=workout_id, user_id=user_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not workout:
        raise NotFound(f"Workout not found: {workout_id}")
    return workout


def lock_tracker(user_id: int, workout_id: int, tracker_id: int):
    workout = lock_workout(user_id, workout_id)
    tracker = (
        WorkoutExercise.query.filter_by(id=tracker_id, workout_id=workout.id)
        .populate_existing()
        .first()
    )
    if not tracker:
        raise NotFound(f"Workout exercise not found: {tracker_id}")
    return workout, tracker


def lock_tracker_by_id(user_id: int, tracker_id: int):
    """Tracker -> workout -> owner traversal used by the set ledger."""
    workout = (
        Workout.query.join(WorkoutExercise, WorkoutExercise.workout_id == Workout.id)
        .filter(WorkoutExercise.id == tracker_id, Workout.user_id == user_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not workout:
        raise NotFound(f"Workout exercise not found: {tracker_id}")
    tracker = db.session.get(WorkoutExercise, tracker_id, populate_existing=True)
    return workout, tracker


def lock_set_by_id(user_id: int, set_id: int):
    workout = (
        Workout.query.join(WorkoutExercise, WorkoutExercise.workout_id == Workout.id)
        .join(ExerciseSet, ExerciseSet.workout_exercise_id == WorkoutExercise.id)
        .filter(ExerciseSet.id == set_id, Workout.user_id == user_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not workout:
        raise NotFound(f"Exercise set not found: {set_id}")
    exercise_set = db.session.get(ExerciseSet, set_id, populate_existing=True)
    tracker = db.session.get(
        WorkoutExercise, exercise_set.workout_exercise_id, populate_existing=True
    )
    return workout, tracker, exercise_set


def find_tracker(user_id: int, tracker_id: int) -> WorkoutExercise:
    """Owner-scoped read without locking."""
    tracker = (
        WorkoutExercise.query.join(Workout, WorkoutExercise.workout_id == Workout.id)
        .filter(WorkoutExercise.id == tracker_id, Workout.user_id == user_id)
        .first()
    )
    if not tracker:
        raise NotFound(f"Workout exercise not found: {tracker_id}")
    return tracker
