# fitcore/routes/auth_routes.py

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from sqlalchemy import or_

from .. import db
from ..errors import OwnerNotFound, ValidationError
from ..models.user import User

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""  # do NOT strip passwords

    if not email or not username or not password:
        raise ValidationError("email, username and password are required")

    if User.query.filter_by(email=email).first():
        raise ValidationError("email already in use")

    if User.query.filter_by(username=username).first():
        raise ValidationError("username already in use")

    user = User(email=email, username=username, display_name=username)
    user.set_password(password)

    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[auth/register] user_id={user.id}")

    access_token = create_access_token(identity=str(user.id))
    return jsonify({"token": access_token, "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts { "identifier": "...", "password": "..." } where identifier is
    an email or a username. "email" / "username" keys work too.
    """
    data = request.get_json(silent=True) or {}

    identifier = (data.get("identifier") or data.get("email") or data.get("username") or "").strip()
    password = data.get("password") or ""

    if not identifier or not password:
        raise ValidationError("identifier and password are required")

    user = User.query.filter(
        or_(
            User.email == identifier.lower(),
            User.username == identifier,
        )
    ).first()

    if not user or not user.check_password(password):
        current_app.logger.info(f"[auth/login] rejected identifier='{identifier}'")
        return jsonify({"error": "INVALID_CREDENTIALS", "message": "invalid credentials"}), 401

    access_token = create_access_token(identity=str(user.id))
    return jsonify({"token": access_token, "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user_id = int(get_jwt_identity())
    user = db.session.get(User, user_id)
    if not user:
        raise OwnerNotFound("user not found")
    return jsonify({"user": user.to_dict()}), 200
