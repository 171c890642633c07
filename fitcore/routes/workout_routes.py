# fitcore/routes/workout_routes.py

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required, get_jwt_identity

from ..errors import ValidationError
from ..services import repair, sessions, sets, trackers
from ..validation import (
    parse_id,
    parse_page,
    parse_plan,
    parse_workout,
    parse_workout_patch,
    parse_set_data,
)

workouts_bp = Blueprint("workouts", __name__)


# ------------------------------
# Helpers
# ------------------------------
def _current_user_id() -> int:
    return int(get_jwt_identity())


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


# ------------------------------
# Workouts
# ------------------------------
@workouts_bp.route("", methods=["POST"])
@jwt_required()
def create_workout():
    fields = parse_workout(_body())
    workout = sessions.create_session(_current_user_id(), fields)
    return jsonify({"workout": workout.to_dict()}), 201


@workouts_bp.route("", methods=["GET"])
@jwt_required()
def list_workouts():
    """
    GET /api/workouts?page=1&size=20  (newest first)
    """
    page, size = parse_page(
        request.args,
        current_app.config["WORKOUTS_PAGE_SIZE"],
        current_app.config["WORKOUTS_MAX_PAGE_SIZE"],
    )
    result = sessions.list_sessions(_current_user_id(), page, size)
    return jsonify(
        {
            "workouts": [w.to_dict() for w in result.items],
            "page": page,
            "size": size,
            "total": result.total,
        }
    ), 200


@workouts_bp.route("/<workout_id>", methods=["GET"])
@jwt_required()
def get_workout(workout_id):
    workout = sessions.get_session(_current_user_id(), parse_id(workout_id, "workout id"))
    return jsonify({"workout": workout.to_dict(include_exercises=True)}), 200


@workouts_bp.route("/<workout_id>", methods=["PATCH"])
@jwt_required()
def update_workout(workout_id):
    wid = parse_id(workout_id, "workout id")
    patch = parse_workout_patch(_body())
    workout = sessions.update_session(_current_user_id(), wid, patch)
    return jsonify({"workout": workout.to_dict()}), 200


@workouts_bp.route("/<workout_id>", methods=["DELETE"])
@jwt_required()
def delete_workout(workout_id):
    sessions.delete_session(_current_user_id(), parse_id(workout_id, "workout id"))
    return "", 204


@workouts_bp.route("/<workout_id>/start", methods=["POST"])
@jwt_required()
def start_workout(workout_id):
    workout = sessions.start_session(_current_user_id(), parse_id(workout_id, "workout id"))
    return jsonify({"workout": workout.to_dict()}), 200


@workouts_bp.route("/<workout_id>/complete", methods=["POST"])
@jwt_required()
def complete_workout(workout_id):
    workout = sessions.complete_session(
        _current_user_id(), parse_id(workout_id, "workout id")
    )
    return jsonify({"workout": workout.to_dict(include_exercises=True)}), 200


@workouts_bp.route("/<workout_id>/cancel", methods=["POST"])
@jwt_required()
def cancel_workout(workout_id):
    workout = sessions.cancel_session(_current_user_id(), parse_id(workout_id, "workout id"))
    return jsonify({"workout": workout.to_dict()}), 200


@workouts_bp.route("/<workout_id>/repair", methods=["POST"])
@jwt_required()
def repair_workout(workout_id):
    changes = repair.repair_session(_current_user_id(), parse_id(workout_id, "workout id"))
    return jsonify({"repair": changes}), 200


# ------------------------------
# Workout exercises
# ------------------------------
@workouts_bp.route("/<workout_id>/exercises", methods=["GET"])
@jwt_required()
def list_workout_exercises(workout_id):
    rows = trackers.list_trackers(_current_user_id(), parse_id(workout_id, "workout id"))
    return jsonify({"exercises": [t.to_dict() for t in rows]}), 200


@workouts_bp.route("/<workout_id>/exercises", methods=["POST"])
@jwt_required()
def add_workout_exercise(workout_id):
    """
    Body: { "exercise_id": 5, "order_index": 0, "planned_sets": 3, ... }
    """
    wid = parse_id(workout_id, "workout id")
    data = _body()
    exercise_id = parse_id(data.get("exercise_id"), "exercise_id")
    plan = parse_plan({k: v for k, v in data.items() if k != "exercise_id"})
    tracker = trackers.add_tracker(_current_user_id(), wid, exercise_id, plan)
    return jsonify({"exercise": tracker.to_dict()}), 201


@workouts_bp.route("/<workout_id>/exercises/<tracker_id>", methods=["PATCH"])
@jwt_required()
def update_workout_exercise(workout_id, tracker_id):
    wid = parse_id(workout_id, "workout id")
    tid = parse_id(tracker_id, "workout exercise id")
    patch = parse_plan(_body(), partial=True)
    tracker = trackers.update_tracker(_current_user_id(), wid, tid, patch)
    return jsonify({"exercise": tracker.to_dict()}), 200


@workouts_bp.route("/<workout_id>/exercises/<tracker_id>/start", methods=["POST"])
@jwt_required()
def start_workout_exercise(workout_id, tracker_id):
    tracker = trackers.start_tracker(
        _current_user_id(),
        parse_id(workout_id, "workout id"),
        parse_id(tracker_id, "workout exercise id"),
    )
    return jsonify({"exercise": tracker.to_dict()}), 200


@workouts_bp.route("/<workout_id>/exercises/<tracker_id>/complete", methods=["POST"])
@jwt_required()
def complete_workout_exercise(workout_id, tracker_id):
    tracker = trackers.complete_tracker(
        _current_user_id(),
        parse_id(workout_id, "workout id"),
        parse_id(tracker_id, "workout exercise id"),
    )
    return jsonify({"exercise": tracker.to_dict()}), 200


@workouts_bp.route("/<workout_id>/exercises/<tracker_id>/skip", methods=["POST"])
@jwt_required()
def skip_workout_exercise(workout_id, tracker_id):
    tracker = trackers.skip_tracker(
        _current_user_id(),
        parse_id(workout_id, "workout id"),
        parse_id(tracker_id, "workout exercise id"),
    )
    return jsonify({"exercise": tracker.to_dict()}), 200


# ------------------------------
# Sets
# ------------------------------
@workouts_bp.route("/exercises/<tracker_id>/sets", methods=["POST"])
@jwt_required()
def log_set(tracker_id):
    tid = parse_id(tracker_id, "workout exercise id")
    set_data = parse_set_data(_body())
    exercise_set = sets.log_set(_current_user_id(), tid, set_data)
    return jsonify({"set": exercise_set.to_dict()}), 201


@workouts_bp.route("/exercises/<tracker_id>/sets", methods=["GET"])
@jwt_required()
def list_sets(tracker_id):
    rows = sets.list_sets(_current_user_id(), parse_id(tracker_id, "workout exercise id"))
    return jsonify({"sets": [s.to_dict() for s in rows]}), 200


@workouts_bp.route("/sets/<set_id>/complete", methods=["POST"])
@jwt_required()
def complete_set(set_id):
    exercise_set = sets.complete_set(_current_user_id(), parse_id(set_id, "set id"))
    return jsonify({"set": exercise_set.to_dict()}), 200
