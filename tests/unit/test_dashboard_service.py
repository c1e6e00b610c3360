"""Unit tests for DashboardService."""
from datetime import datetime, timezone

import pytest
from bson import ObjectId

from portal.exceptions.exceptions import UnauthenticatedError, ValidationError
from portal.repositories.performance.performance_repo import EMPTY_SUMMARY
from portal.services.dashboard.dashboard_service import DashboardService


class TestDashboardStats:
    """Tests for headline dashboard statistics."""

    def test_stats_with_deltas(self, scope, repo_factory, member_repo, content_repo, performance_repo) -> None:
        """Test that counts, deltas and the rounded average are reported."""
        member_repo.count.side_effect = lambda inst, status=None, since=None: {
            ("active", False): 40, ("active", True): 6, ("pending", False): 3, ("pending", True): 2,
        }[(status, since is not None)]
        content_repo.count.side_effect = lambda inst, published_only=False, created_since=None: (
            12 if created_since is None else 1
        )
        performance_repo.get_score_summary.return_value = {"averageScore": 72.5, "recordCount": 4}

        result = DashboardService(repo_factory).get_dashboard_stats(scope)

        assert result == {
            "totalEnrolledUsers": {"value": "40", "change": 6},
            "pendingRegistrations": {"value": "3", "change": 2},
            "publishedContentModules": {"value": "12", "change": 1},
            "averageUserProgress": {"value": "73%", "change": None},
        }
        performance_repo.get_score_summary.assert_called_once_with(scope.institution_id, members_only=True)

    def test_zero_performance_rows_is_zero_percent(self, scope, repo_factory, member_repo, content_repo,
                                                    performance_repo) -> None:
        """Test that an institution without rows reports 0% rather than failing."""
        member_repo.count.return_value = 0
        content_repo.count.return_value = 0
        performance_repo.get_score_summary.return_value = dict(EMPTY_SUMMARY)

        result = DashboardService(repo_factory).get_dashboard_stats(scope)

        assert result["averageUserProgress"] == {"value": "0%", "change": None}

    def test_requires_institution(self, scope_without_institution, repo_factory) -> None:
        """Test that a session without an institution is rejected before any query."""
        with pytest.raises(UnauthenticatedError):
            DashboardService(repo_factory).get_dashboard_stats(scope_without_institution)

        repo_factory.get_member_repo.return_value.count.assert_not_called()


class TestRecentActivity:
    """Tests for the recent activity feed."""

    def test_no_members_skips_interaction_query(self, scope, repo_factory, member_repo, interaction_repo) -> None:
        """Test that an institution with no members returns [] without querying interactions."""
        member_repo.find_member_user_ids.return_value = []

        result = DashboardService(repo_factory).get_recent_activity(scope)

        assert result == []
        interaction_repo.find_recent_for_users.assert_not_called()

    def test_drops_rows_with_unresolved_joins(self, scope, repo_factory, member_repo, interaction_repo) -> None:
        """Test that interactions missing their user or content are excluded."""
        member_id, content_id = ObjectId(), ObjectId()
        member_repo.find_member_user_ids.return_value = [member_id]
        user = {"_id": member_id, "name": "Lee", "email": "lee@school.edu"}
        content = {"_id": content_id, "title": "Fractions"}
        timestamp = datetime(2024, 4, 2, 8, 0, tzinfo=timezone.utc)
        kept_id = ObjectId()
        interaction_repo.find_recent_for_users.return_value = [
            {"_id": kept_id, "eventType": "start", "timestamp": timestamp, "userDoc": [user], "contentDoc": [content]},
            {"_id": ObjectId(), "eventType": "end", "timestamp": timestamp, "userDoc": [user], "contentDoc": []},
            {"_id": ObjectId(), "eventType": "update", "timestamp": timestamp, "userDoc": [], "contentDoc": [content]},
        ]

        result = DashboardService(repo_factory).get_recent_activity(scope, 10)

        assert result == [{
            "id": str(kept_id),
            "eventType": "start",
            "timestamp": "2024-04-02T08:00:00+00:00",
            "user": {"id": str(member_id), "name": "Lee", "email": "lee@school.edu", "profileImage": None},
            "content": {"id": str(content_id), "title": "Fractions"},
        }]
        interaction_repo.find_recent_for_users.assert_called_once_with([member_id], scope.institution_id, 10)

    def test_default_limit_is_five(self, scope, repo_factory, member_repo, interaction_repo) -> None:
        """Test that omitting the limit asks for five interactions."""
        member_repo.find_member_user_ids.return_value = [ObjectId()]
        interaction_repo.find_recent_for_users.return_value = []

        DashboardService(repo_factory).get_recent_activity(scope)

        assert interaction_repo.find_recent_for_users.call_args.args[2] == 5

    def test_invalid_limit(self, scope, repo_factory, member_repo) -> None:
        """Test that an out-of-range limit fails before any query."""
        with pytest.raises(ValidationError):
            DashboardService(repo_factory).get_recent_activity(scope, 500)

        member_repo.find_member_user_ids.assert_not_called()
