# fitcore/__init__.py

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager

from config import Config

db = SQLAlchemy()
jwt = JWTManager()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)

    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # -----------------------------
    # JWT error handlers
    # -----------------------------
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        return jsonify({"error": "UNAUTHORIZED", "message": reason}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        return jsonify({"error": "INVALID_TOKEN", "message": reason}), 422

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"error": "TOKEN_EXPIRED", "message": "Token has expired"}), 401

    from .errors import register_error_handlers
    register_error_handlers(app)

    # -----------------------------
    # Session event subscribers
    # -----------------------------
    from .services.events import SessionEvents, log_completed_session

    app.extensions["fitcore.events"] = SessionEvents()
    app.extensions["fitcore.events"].subscribe("session_completed", log_completed_session)

    # -----------------------------
    # Blueprints
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.exercise_routes import exercises_bp
    from .routes.workout_routes import workouts_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(exercises_bp, url_prefix="/api/exercises")
    app.register_blueprint(workouts_bp, url_prefix="/api/workouts")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    from . import models  # noqa: F401  register tables

    with app.app_context():
        db.create_all()

    return app
