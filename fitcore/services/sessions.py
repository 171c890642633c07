# fitcore/services/sessions.py
from typing import Any, Dict

from flask import current_app

from .. import db
from ..errors import InvalidState, NotFound
from ..models import User, Workout, WorkoutExercise
from .common import (
    check_fields,
    find_workout,
    lock_workout,
    resolve_user,
    unit_of_work,
    utcnow,
)
from .events import publish


def _resolve_trainer(trainer_id):
    if trainer_id is None:
        return None
    if not db.session.get(User, trainer_id):
        raise NotFound(f"Trainer not found: {trainer_id}")
    return trainer_id


def create_session(user_id: int, fields: Dict[str, Any]) -> Workout:
    check_fields(fields, Workout.EDITABLE_FIELDS, required=("name",), what="workout")
    with unit_of_work():
        user = resolve_user(user_id)
        now = utcnow()
        workout = Workout(
            user_id=user.id,
            trainer_id=_resolve_trainer(fields.get("trainer_id")),
            name=fields["name"],
            description=fields.get("description"),
            notes=fields.get("notes"),
            scheduled_at=fields.get("scheduled_at"),
            calories_burned=fields.get("calories_burned"),
            status=Workout.PLANNED,
            created_at=now,
            updated_at=now,
        )
        db.session.add(workout)

    current_app.logger.info(f"[workouts] created id={workout.id} user_id={user_id}")
    return workout


def get_session(user_id: int, workout_id: int) -> Workout:
    return find_workout(user_id, workout_id)


def list_sessions(user_id: int, page: int, size: int):
    return (
        Workout.query.filter_by(user_id=user_id)
        .order_by(Workout.created_at.desc(), Workout.id.desc())
        .paginate(page=page, per_page=size, error_out=False)
    )


def update_session(user_id: int, workout_id: int, patch: Dict[str, Any]) -> Workout:
    """Descriptive fields only; status and timing move through transitions."""
    check_fields(patch, Workout.EDITABLE_FIELDS, what="workout")
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        if "trainer_id" in patch:
            patch["trainer_id"] = _resolve_trainer(patch["trainer_id"])
        for field, value in patch.items():
            setattr(workout, field, value)
        workout.updated_at = utcnow()
    return workout


def start_session(user_id: int, workout_id: int) -> Workout:
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        if workout.status != Workout.PLANNED:
            raise InvalidState("Workout is not in planned state")
        workout.mark_started(utcnow())

    current_app.logger.info(f"[workouts] started id={workout.id} user_id={user_id}")
    publish("session_started", workout=workout, implicit=False)
    return workout


def complete_session(user_id: int, workout_id: int) -> Workout:
    """
    Finish a running workout.

    Exercises still in progress are completed along with it, so a completed
    workout never owns an in-progress exercise.
    """
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        if workout.status != Workout.IN_PROGRESS:
            raise InvalidState("Workout is not in progress")

        now = utcnow()
        closed = []
        for tracker in workout.exercises:
            if tracker.status == WorkoutExercise.IN_PROGRESS:
                tracker.mark_completed(now)
                closed.append(tracker.id)
        workout.mark_completed(now)

    current_app.logger.info(
        f"[workouts] completed id={workout.id} user_id={user_id} "
        f"duration_minutes={workout.duration_minutes} closed_exercises={closed}"
    )
    publish("session_completed", workout=workout)
    return workout


def cancel_session(user_id: int, workout_id: int) -> Workout:
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        if workout.status != Workout.PLANNED:
            raise InvalidState("Only planned workouts can be cancelled")
        workout.mark_cancelled(utcnow())

    current_app.logger.info(f"[workouts] cancelled id={workout.id} user_id={user_id}")
    return workout


def delete_session(user_id: int, workout_id: int) -> None:
    # allowed in every status; exercises and sets go with it
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        status = workout.status
        db.session.delete(workout)

    current_app.logger.info(
        f"[workouts] deleted id={workout_id} user_id={user_id} status={status}"
    )
