"""Unit tests for user report rows and format validation."""
from datetime import datetime, timezone

import pytest
from bson import ObjectId

from portal.exceptions.exceptions import UnauthenticatedError, ValidationError
from portal.services.report.report_service import (
    UserReportService,
    build_report_rows,
    validate_report_format,
)


class TestReportRows:
    """Tests for flattening membership rows into report columns."""

    def test_rows_use_report_columns(self) -> None:
        """Test column names, capitalised status and the rounded average."""
        members = [
            {"status": "pending", "createdAt": datetime(2024, 1, 10, tzinfo=timezone.utc),
             "userDoc": {"_id": ObjectId(), "name": "Lee", "email": "lee@north.edu"}, "averagePerformance": 72.5},
            {"status": "active", "createdAt": None, "userDoc": None},
        ]

        rows = build_report_rows(members)

        assert rows == [{
            "Name": "Lee",
            "Email": "lee@north.edu",
            "Status": "Pending",
            "Registration Date": "2024-01-10",
            "Avg Performance (%)": 73,
        }]


class TestReportFormat:
    """Tests for the format parameter."""

    def test_accepts_known_formats(self) -> None:
        """Test that xlsx and pdf are accepted case-insensitively."""
        assert validate_report_format("XLSX") == "xlsx"
        assert validate_report_format("pdf") == "pdf"

    @pytest.mark.parametrize("value", [None, "", "csv"])
    def test_rejects_other_formats(self, value) -> None:
        """Test that missing and unsupported formats are rejected."""
        with pytest.raises(ValidationError):
            validate_report_format(value)


class TestUserReportService:
    """Tests for the export entry point."""

    def test_missing_institution_checked_before_format(self, scope_without_institution, repo_factory,
                                                       member_repo) -> None:
        """Test that a session without an institution is unauthenticated even with a bad format."""
        with pytest.raises(UnauthenticatedError):
            UserReportService(repo_factory).export_user_report(scope_without_institution, "csv")
        member_repo.list_with_performance.assert_not_called()
