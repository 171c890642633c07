# fitcore/services/trackers.py
from datetime import datetime
from typing import Any, Dict, List

from flask import current_app

from .. import db
from ..errors import InvalidState, NotFound
from ..models import Exercise, ExerciseSet, Workout, WorkoutExercise
from .common import (
    check_fields,
    find_workout,
    lock_tracker,
    lock_workout,
    unit_of_work,
    utcnow,
)
from .events import publish


def add_tracker(
    user_id: int, workout_id: int, exercise_id: int, plan: Dict[str, Any]
) -> WorkoutExercise:
    check_fields(
        plan, WorkoutExercise.PLAN_FIELDS, required=("order_index",), what="exercise plan"
    )
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        exercise = db.session.get(Exercise, exercise_id)
        if not exercise:
            raise NotFound(f"Exercise not found: {exercise_id}")

        now = utcnow()
        # order_index is taken as given; collisions are the caller's concern
        tracker = WorkoutExercise(
            workout=workout,
            exercise=exercise,
            status=WorkoutExercise.PENDING,
            created_at=now,
            updated_at=now,
            **plan,
        )
        workout.touch(now)
        db.session.add(tracker)

    current_app.logger.info(
        f"[workout_exercises] added id={tracker.id} workout_id={workout_id} "
        f"exercise_id={exercise_id}"
    )
    return tracker


def list_trackers(user_id: int, workout_id: int) -> List[WorkoutExercise]:
    workout = find_workout(user_id, workout_id)
    return (
        WorkoutExercise.query.filter_by(workout_id=workout.id)
        .order_by(WorkoutExercise.order_index.asc(), WorkoutExercise.id.asc())
        .all()
    )


def update_tracker(
    user_id: int, workout_id: int, tracker_id: int, patch: Dict[str, Any]
) -> WorkoutExercise:
    """Plan edits are accepted in any status."""
    check_fields(patch, WorkoutExercise.PLAN_FIELDS, what="exercise plan")
    with unit_of_work():
        workout, tracker = lock_tracker(user_id, workout_id, tracker_id)
        for field, value in patch.items():
            setattr(tracker, field, value)
        now = utcnow()
        tracker.updated_at = now
        workout.touch(now)
    return tracker


def start_tracker(user_id: int, workout_id: int, tracker_id: int) -> WorkoutExercise:
    """
    Start one exercise.

    Starting an exercise of a planned workout starts the workout too, with
    the same effect as an explicit start_session; a later start_session
    then fails like any second start.
    """
    with unit_of_work():
        workout, tracker = lock_tracker(user_id, workout_id, tracker_id)
        now = utcnow()
        tracker.mark_started(now)
        implicit_start = workout.status == Workout.PLANNED
        if implicit_start:
            workout.mark_started(now)
        else:
            workout.touch(now)

    current_app.logger.info(
        f"[workout_exercises] started id={tracker.id} workout_id={workout.id} "
        f"user_id={user_id} implicit_workout_start={implicit_start}"
    )
    if implicit_start:
        publish("session_started", workout=workout, implicit=True)
    return tracker


def complete_tracker(user_id: int, workout_id: int, tracker_id: int) -> WorkoutExercise:
    with unit_of_work():
        workout, tracker = lock_tracker(user_id, workout_id, tracker_id)
        if tracker.status != WorkoutExercise.IN_PROGRESS:
            raise InvalidState("Can only complete exercises that are in progress")
        now = utcnow()
        tracker.mark_completed(now)
        workout.touch(now)

    current_app.logger.info(
        f"[workout_exercises] completed id={tracker.id} workout_id={workout.id} "
        f"user_id={user_id}"
    )
    publish("tracker_completed", workout=workout, tracker=tracker, auto=False)
    return tracker


def skip_tracker(user_id: int, workout_id: int, tracker_id: int) -> WorkoutExercise:
    with unit_of_work():
        workout, tracker = lock_tracker(user_id, workout_id, tracker_id)
        now = utcnow()
        tracker.mark_skipped(now)
        workout.touch(now)

    current_app.logger.info(
        f"[workout_exercises] skipped id={tracker.id} workout_id={workout_id} "
        f"user_id={user_id}"
    )
    return tracker


def complete_if_planned_sets_met(tracker: WorkoutExercise, now: datetime) -> bool:
    """
    Auto-completion: an in-progress exercise whose completed set count has
    reached planned_sets is completed exactly as complete_tracker would.

    Must run inside the caller's transaction so the count sees the set that
    was just completed and nothing committed after it.
    """
    if tracker.status != WorkoutExercise.IN_PROGRESS or tracker.planned_sets is None:
        return False

    completed = ExerciseSet.query.filter_by(
        workout_exercise_id=tracker.id, status=ExerciseSet.COMPLETED
    ).count()
    if completed < tracker.planned_sets:
        return False

    tracker.mark_completed(now)
    return True
