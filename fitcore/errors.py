# fitcore/errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

Ownership mismatches are reported as NotFound so a caller cannot tell
another user's workout apart from one that does not exist.
"""
from typing import List, Optional

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError


class FitcoreError(Exception):
    code = "ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.code, "message": self.message}


class NotFound(FitcoreError):
    code = "NOT_FOUND"
    status_code = 404


class OwnerNotFound(NotFound):
    code = "USER_NOT_FOUND"


class InvalidState(FitcoreError):
    code = "INVALID_STATE"
    status_code = 409


class ValidationError(FitcoreError):
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self):
        data = super().to_dict()
        data["details"] = self.details
        return data


def register_error_handlers(app):
    from . import db

    @app.errorhandler(FitcoreError)
    def handle_fitcore_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(err):
        db.session.rollback()
        current_app.logger.exception(f"Storage error: {err}")
        return (
            jsonify(
                {
                    "error": "INTERNAL_SERVER_ERROR",
                    "message": "An unexpected error occurred",
                }
            ),
            500,
        )
