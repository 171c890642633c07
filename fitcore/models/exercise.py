# fitcore/models/exercise.py
from datetime import datetime
from .. import db
from . import BigId


class Exercise(db.Model):
    """Shared catalog entry. Read-only from the workout services."""

    __tablename__ = "exercises"

    id = db.Column(BigId, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(
        db.Enum(
            "strength",
            "cardio",
            "flexibility",
            "balance",
            "sports",
            name="exercise_category_enum",
        ),
        nullable=False,
        default="strength",
    )
    equipment = db.Column(db.String(50))
    difficulty = db.Column(
        db.Enum("beginner", "intermediate", "advanced", name="exercise_difficulty_enum")
    )
    instructions = db.Column(db.Text)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_by_id = db.Column(BigId, db.ForeignKey("users.id"))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    created_by = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "equipment": self.equipment,
            "difficulty": self.difficulty,
            "instructions": self.instructions,
            "is_active": self.is_active,
        }
