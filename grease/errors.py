"""
Error types raised by the event and gig request code.

Every failure an operation can report is a GreaseError. The HTTP layer
turns them into JSON responses of the form
{'success': False, 'error': message} with the matching status code.
"""

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError


class GreaseError(Exception):
    """Base class for errors reported back to the caller."""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_json(self):
        return {'success': False, 'error': self.message}


class ValidationError(GreaseError):
    """The request was malformed or contradictory."""
    status_code = 400


class Unauthorized(GreaseError):
    """No logged-in member."""
    status_code = 401


class NotFoundError(GreaseError):
    """A requested row does not exist."""
    status_code = 404


class ServerError(GreaseError):
    """Something broke on our side, not the caller's."""
    status_code = 500


def register_error_handlers(app):
    """Map GreaseError subclasses and database failures to JSON responses."""
    from grease import db

    @app.errorhandler(GreaseError)
    def handle_grease_error(error):
        if error.status_code >= 500:
            app.logger.error(f"Server error: {error.message}")
        return jsonify(error.to_json()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.error(f"Database error: {error}")
        return jsonify(ServerError('Database error.').to_json()), ServerError.status_code
