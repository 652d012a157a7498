"""Error kinds raised by the memory operations.

Every error carries a stable ``code`` tag that clients branch on, a short
human-readable message and the HTTP status the API answers with.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException


class MemoryTrainerError(Exception):
    """Base exception for all memory trainer failures."""

    code = 'INTERNAL'
    http_status = 500
    default_message = 'Internal error.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'code': self.code, 'message': self.message}


class UnauthorizedError(MemoryTrainerError):
    code = 'UNAUTHORIZED'
    http_status = 401
    default_message = 'You must be signed in to perform this action.'


class NotFoundError(MemoryTrainerError):
    code = 'NOT_FOUND'
    http_status = 404
    default_message = 'Not found.'


class ConflictError(MemoryTrainerError):
    code = 'CONFLICT'
    http_status = 409
    default_message = 'Conflict.'


class InputInvalidError(MemoryTrainerError):
    """Request body failed field validation."""

    code = 'INPUT_INVALID'
    http_status = 400
    default_message = 'Invalid input.'

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.field is not None:
            payload['field'] = self.field
        return payload


def register_error_handlers(flask_app):
    from app import db

    @flask_app.errorhandler(MemoryTrainerError)
    def handle_memory_error(exc: MemoryTrainerError):
        db.session.rollback()
        flask_app.logger.info(f"[error] code={exc.code} message={exc.message!r}")
        return jsonify({'error': exc.to_dict()}), exc.http_status

    @flask_app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        code = (exc.name or 'error').upper().replace(' ', '_')
        return jsonify({'error': {'code': code, 'message': exc.description}}), exc.code
