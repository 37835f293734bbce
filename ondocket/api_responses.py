"""
API Response Utilities - Standardized error handling and responses
"""

from flask import jsonify
from functools import wraps
import logging

from ondocket.exceptions import StorageException, ValidationException

logger = logging.getLogger(__name__)


# API Error Codes
class ErrorCode:
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    STORAGE_ERROR = "STORAGE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def success_response(data=None, message=None, status_code=200, **extra):
    """
    Standard success response format for API endpoints
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    response.update(extra)

    return jsonify(response), status_code


def error_response(error_code=ErrorCode.INTERNAL_ERROR, message=None, status_code=400, log_error=True):
    """
    Standard error response format for API endpoints
    """
    response = {"code": error_code, "success": False}

    if message:
        response["error"] = message
    elif error_code in (ErrorCode.VALIDATION_ERROR, ErrorCode.OUT_OF_RANGE):
        response["error"] = "Invalid request parameters"
    else:
        response["error"] = "An unexpected error occurred"

    if log_error and error_code in [ErrorCode.INTERNAL_ERROR, ErrorCode.STORAGE_ERROR]:
        logger.error(f"{error_code}: {response['error']}")

    return jsonify(response), status_code


def handle_api_errors(failure_message):
    """
    Decorator to standardize error handling for API endpoints.

    Client errors keep their own message; storage and unexpected failures
    are reported with the endpoint's generic failure message.
    """

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ValidationException as e:
                return error_response(e.code, message=e.message, status_code=400)
            except StorageException:
                return error_response(ErrorCode.STORAGE_ERROR, message=failure_message, status_code=500)
            except Exception as e:
                logger.error(f"Unhandled exception in {f.__name__}: {e}", exc_info=True)
                return error_response(ErrorCode.INTERNAL_ERROR, message=failure_message, status_code=500)

        return wrapper

    return decorator
