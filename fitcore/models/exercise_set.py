# fitcore/models/exercise_set.py
from datetime import datetime
from .. import db
from . import BigId, dt_iso


class ExerciseSet(db.Model):
    __tablename__ = "exercise_sets"

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    STATUSES = (PENDING, COMPLETED, FAILED)

    # fields a client may supply when logging a set
    SET_FIELDS = (
        "set_number",
        "actual_reps",
        "actual_weight",
        "actual_duration_seconds",
        "actual_distance_meters",
        "rpe_score",
        "rest_time_seconds",
        "notes",
        "started_at",
    )

    id = db.Column(BigId, primary_key=True)
    workout_exercise_id = db.Column(
        BigId,
        db.ForeignKey("workout_exercises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    set_number = db.Column(db.Integer, nullable=False)

    actual_reps = db.Column(db.Integer)
    actual_weight = db.Column(db.Float)
    actual_duration_seconds = db.Column(db.Integer)
    actual_distance_meters = db.Column(db.Float)
    rpe_score = db.Column(db.Integer)  # 1-10
    rest_time_seconds = db.Column(db.Integer)

    status = db.Column(
        db.Enum(*STATUSES, name="exercise_set_status_enum"),
        nullable=False,
        default=PENDING,
    )
    notes = db.Column(db.Text)
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    workout_exercise = db.relationship("WorkoutExercise", back_populates="sets")

    def mark_completed(self, now: datetime) -> None:
        self.status = self.COMPLETED
        self.completed_at = now

    def to_dict(self):
        return {
            "id": self.id,
            "workout_exercise_id": self.workout_exercise_id,
            "set_number": self.set_number,
            "actual_reps": self.actual_reps,
            "actual_weight": self.actual_weight,
            "actual_duration_seconds": self.actual_duration_seconds,
            "actual_distance_meters": self.actual_distance_meters,
            "rpe_score": self.rpe_score,
            "rest_time_seconds": self.rest_time_seconds,
            "status": self.status,
            "notes": self.notes,
            "started_at": dt_iso(self.started_at),
            "completed_at": dt_iso(self.completed_at),
            "created_at": dt_iso(self.created_at),
        }
