"""Unit tests for the service error mapping."""
import pytest

from portal.exceptions.error_handler import handle_service_error
from portal.exceptions.exceptions import (
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)


class TestHandleServiceError:
    """Tests for exception to response mapping."""

    @pytest.mark.parametrize("error,code,status", [
        (InvalidCredentialsError("Invalid email or password."), "INVALID_CREDENTIALS", 401),
        (UnauthenticatedError("Please log in."), "UNAUTHENTICATED", 401),
        (NotFoundError("User not found in this institution."), "NOT_FOUND", 404),
        (ValidationError("limit must be an integer"), "BAD_USER_INPUT", 400),
    ])
    def test_known_errors(self, error, code, status) -> None:
        """Test that portal errors keep their message and map to their status."""
        body, returned_status = handle_service_error(error)

        assert returned_status == status
        assert body == {"success": False, "message": str(error), "error": code}

    def test_unexpected_errors_are_not_leaked(self) -> None:
        """Test that internal failures return a generic message."""
        body, status = handle_service_error(RuntimeError("mongodb://user:secret@db failed"))

        assert status == 500
        assert body == {"success": False, "message": "Server error", "error": "INTERNAL"}
