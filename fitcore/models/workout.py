# fitcore/models/workout.py
from datetime import datetime
from .. import db
from . import BigId, dt_iso


class Workout(db.Model):
    """
    One workout session: planned, run through its exercises, then finished.

    status: planned -> in_progress -> completed
            planned -> cancelled
    """

    __tablename__ = "workouts"

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"
    STATUSES = (PLANNED, IN_PROGRESS, COMPLETED, CANCELLED, SKIPPED)

    # fields a client may set on create or patch
    EDITABLE_FIELDS = (
        "name",
        "description",
        "notes",
        "scheduled_at",
        "calories_burned",
        "trainer_id",
    )

    id = db.Column(BigId, primary_key=True)
    user_id = db.Column(
        BigId, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    trainer_id = db.Column(BigId, db.ForeignKey("users.id", ondelete="SET NULL"))

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(
        db.Enum(*STATUSES, name="workout_status_enum"), nullable=False, default=PLANNED
    )

    scheduled_at = db.Column(db.DateTime)
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)
    duration_minutes = db.Column(db.Integer)
    calories_burned = db.Column(db.Integer)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # bumped on every write to the workout or anything under it
    version = db.Column(db.Integer, nullable=False)
    __mapper_args__ = {"version_id_col": version}

    user = db.relationship("User", foreign_keys=[user_id], backref="workouts")
    trainer = db.relationship("User", foreign_keys=[trainer_id])
    exercises = db.relationship(
        "WorkoutExercise",
        back_populates="workout",
        order_by="WorkoutExercise.order_index",
        cascade="all, delete-orphan",
    )

    def touch(self, now: datetime) -> None:
        self.updated_at = now

    def mark_started(self, now: datetime) -> None:
        self.status = self.IN_PROGRESS
        self.started_at = now
        self.updated_at = now

    def mark_completed(self, now: datetime) -> None:
        self.status = self.COMPLETED
        self.completed_at = now
        self.updated_at = now
        if self.started_at is not None:
            elapsed = (now - self.started_at).total_seconds()
            self.duration_minutes = int(elapsed // 60)

    def mark_cancelled(self, now: datetime) -> None:
        self.status = self.CANCELLED
        self.updated_at = now

    def to_dict(self, include_exercises: bool = False):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "trainer_id": self.trainer_id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "scheduled_at": dt_iso(self.scheduled_at),
            "started_at": dt_iso(self.started_at),
            "completed_at": dt_iso(self.completed_at),
            "duration_minutes": self.duration_minutes,
            "calories_burned": self.calories_burned,
            "notes": self.notes,
            "created_at": dt_iso(self.created_at),
            "updated_at": dt_iso(self.updated_at),
        }
        if include_exercises:
            data["exercises"] = [we.to_dict() for we in self.exercises]
        return data
