import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class AuthError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AuthError):
    """Missing or malformed input."""


class InvalidBirthday(ValidationError):
    pass


class Underage(ValidationError):
    pass


class Conflict(AuthError):
    """Email or username already taken."""


class InvalidCredentials(AuthError):
    pass


class StoreError(AuthError):
    """File I/O failure in the record store."""

    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(AuthError)
    def _handle_auth_error(err: AuthError):
        if err.status_code >= 500:
            logger.error("%s: %s", type(err).__name__, err.message)
        else:
            logger.warning("%s: %s", type(err).__name__, err.message)
        return jsonify(error=err.message), err.status_code
