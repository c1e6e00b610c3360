"""Centralized error handling and responses - DRY principle"""
import logging
from typing import Tuple

from portal.exceptions.exceptions import (
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(message: str, code: str, status: int) -> Tuple[dict, int]:
    return {"success": False, "message": message, "error": code}, status


# ============= ERROR HANDLERS =============

def handle_service_error(e: Exception) -> Tuple[dict, int]:
    """Centralized error handling for services"""

    if isinstance(e, InvalidCredentialsError):
        return error_response(str(e), "INVALID_CREDENTIALS", 401)

    elif isinstance(e, UnauthenticatedError):
        return error_response(str(e), "UNAUTHENTICATED", 401)

    elif isinstance(e, NotFoundError):
        return error_response(str(e), "NOT_FOUND", 404)

    elif isinstance(e, ValidationError):
        return error_response(str(e), "BAD_USER_INPUT", 400)

    else:
        sanitized_error = str(e).replace('\n', ' ').replace('\r', ' ')[:500]
        logger.error(f"Unexpected error ({type(e).__name__}): {sanitized_error}")
        return error_response("Server error", "INTERNAL", 500)
