# fitcore/models/workout_exercise.py
from datetime import datetime
from .. import db
from . import BigId, dt_iso


class WorkoutExercise(db.Model):
    """Planned targets vs. logged sets for one exercise inside a workout."""

    __tablename__ = "workout_exercises"

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    STATUSES = (PENDING, IN_PROGRESS, COMPLETED, SKIPPED)

    # fields a client may patch
    PLAN_FIELDS = (
        "order_index",
        "planned_sets",
        "planned_reps",
        "planned_weight",
        "planned_duration_seconds",
        "planned_distance_meters",
        "rest_time_seconds",
        "notes",
    )

    id = db.Column(BigId, primary_key=True)
    workout_id = db.Column(
        BigId, db.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id = db.Column(BigId, db.ForeignKey("exercises.id"), nullable=False)

    # caller-assigned, duplicates allowed
    order_index = db.Column(db.Integer, nullable=False)

    planned_sets = db.Column(db.Integer)
    planned_reps = db.Column(db.Integer)
    planned_weight = db.Column(db.Float)
    planned_duration_seconds = db.Column(db.Integer)
    planned_distance_meters = db.Column(db.Float)
    rest_time_seconds = db.Column(db.Integer)
    notes = db.Column(db.Text)

    status = db.Column(
        db.Enum(*STATUSES, name="workout_exercise_status_enum"),
        nullable=False,
        default=PENDING,
    )
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    workout = db.relationship("Workout", back_populates="exercises")
    exercise = db.relationship("Exercise")
    sets = db.relationship(
        "ExerciseSet",
        back_populates="workout_exercise",
        order_by="ExerciseSet.set_number",
        cascade="all, delete-orphan",
    )

    def mark_started(self, now: datetime) -> None:
        self.status = self.IN_PROGRESS
        self.started_at = now
        self.updated_at = now

    def mark_completed(self, now: datetime) -> None:
        self.status = self.COMPLETED
        self.completed_at = now
        self.updated_at = now

    def mark_skipped(self, now: datetime) -> None:
        self.status = self.SKIPPED
        self.updated_at = now

    def to_dict(self):
        exercise = self.exercise
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "exercise_id": self.exercise_id,
            "exercise_name": exercise.name if exercise else None,
            "order_index": self.order_index,
            "planned_sets": self.planned_sets,
            "planned_reps": self.planned_reps,
            "planned_weight": self.planned_weight,
            "planned_duration_seconds": self.planned_duration_seconds,
            "planned_distance_meters": self.planned_distance_meters,
            "rest_time_seconds": self.rest_time_seconds,
            "notes": self.notes,
            "status": self.status,
            "started_at": dt_iso(self.started_at),
            "completed_at": dt_iso(self.completed_at),
            "created_at": dt_iso(self.created_at),
            "updated_at": dt_iso(self.updated_at),
        }
