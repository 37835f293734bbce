"""
On The Docket - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class OnDocketException(Exception):
    """Base exception for On The Docket"""
    status_code = 400

    def __init__(self, message: str, code: str = "ONDOCKET_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'success': False,
            'code': self.code,
            'error': self.message
        }


class StorageException(OnDocketException):
    """Contents file missing, unreadable, corrupt or not writable"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")
        logger.error(f"Storage error: {message}")


class ValidationException(OnDocketException):
    """Malformed request shape"""
    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)
        logger.warning(f"Validation error: {message}")


class OutOfRangeException(ValidationException):
    """Record index outside the current collection bounds"""
    def __init__(self, index, length):
        self.index = index
        self.length = length
        super().__init__("Index out of range", code="OUT_OF_RANGE")


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'success': False,
            'code': e.name.upper().replace(' ', '_'),
            'error': e.description
        }), e.code

    @app.errorhandler(OnDocketException)
    def handle_ondocket_exception(e):
        """Handle On The Docket custom exceptions"""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'code': 'INTERNAL_ERROR',
            'error': 'An unexpected error occurred'
        }), 500
