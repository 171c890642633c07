# fitcore/models/__init__.py
from .. import db

# SQLite only auto-increments INTEGER primary keys.
BigId = db.BigInteger().with_variant(db.Integer(), "sqlite")


def dt_iso(dt):
    return dt.isoformat() if dt else None


from .user import User  # noqa: E402
from .exercise import Exercise  # noqa: E402
from .workout import Workout  # noqa: E402
from .workout_exercise import WorkoutExercise  # noqa: E402
from .exercise_set import ExerciseSet  # noqa: E402

__all__ = ["User", "Exercise", "Workout", "WorkoutExercise", "ExerciseSet"]
