# fitcore/services/repair.py
"""
Reconcile a workout's status with its exercises' statuses.

Two kinds of drift are corrected:

- planned workout with an in-progress exercise: the workout is started
  (started_at is kept if already set)
- completed workout with in-progress exercises: those exercises are
  completed

Anything else (e.g. a cancelled workout with pending exercises) is left
alone. Running it on a consistent workout changes nothing.
"""
from typing import Any, Dict

from flask import current_app

from ..models import Workout, WorkoutExercise
from .common import lock_workout, unit_of_work, utcnow
from .events import publish


def repair_session(user_id: int, workout_id: int) -> Dict[str, Any]:
    with unit_of_work():
        workout = lock_workout(user_id, workout_id)
        in_progress = [
            t for t in workout.exercises if t.status == WorkoutExercise.IN_PROGRESS
        ]
        now = utcnow()
        workout_started = False
        completed_ids = []

        if workout.status == Workout.PLANNED and in_progress:
            workout.status = Workout.IN_PROGRESS
            if workout.started_at is None:
                workout.started_at = now
            workout.updated_at = now
            workout_started = True

        elif workout.status == Workout.COMPLETED and in_progress:
            for tracker in in_progress:
                tracker.mark_completed(now)
                completed_ids.append(tracker.id)
            workout.touch(now)

    changes = {
        "workout_id": workout_id,
        "workout_started": workout_started,
        "completed_exercise_ids": completed_ids,
    }
    if workout_started or completed_ids:
        current_app.logger.warning(f"[repair] fixed drift user_id={user_id} {changes}")
        publish("session_repaired", workout=workout, changes=changes)
    else:
        current_app.logger.debug(f"[repair] no drift workout_id={workout_id}")
    return changes
