# fitcore/routes/exercise_routes.py
from flask import Blueprint, jsonify

from .. import db
from ..errors import NotFound
from ..models.exercise import Exercise
from ..validation import parse_id

exercises_bp = Blueprint("exercises", __name__)


@exercises_bp.route("/", methods=["GET"])
def list_exercises():
    """
    Public: list active catalog exercises.

    GET /api/exercises
    """
    rows = (
        Exercise.query.filter(Exercise.is_active.is_(True))
        .order_by(Exercise.name.asc())
        .all()
    )
    return jsonify({"exercises": [e.to_dict() for e in rows]}), 200


@exercises_bp.route("/<exercise_id>", methods=["GET"])
def get_exercise(exercise_id):
    """
    Public: get a single catalog exercise.

    GET /api/exercises/<exercise_id>
    """
    exercise = db.session.get(Exercise, parse_id(exercise_id, "exercise id"))
    if not exercise:
        raise NotFound("Exercise not found")
    return jsonify({"exercise": exercise.to_dict()}), 200
