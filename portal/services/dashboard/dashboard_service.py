"""Dashboard Service - Business Logic Layer (SoC)"""
import logging
from typing import Dict, List, Optional

from portal.auth.tenant_scope import TenantScope
from portal.config.settings import (
    DASHBOARD_CHANGE_WINDOW_DAYS,
    MEMBER_STATUS_ACTIVE,
    MEMBER_STATUS_PENDING,
)
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.analysis.score_utils import round_half_up
from portal.utils.formatting.formatters import format_activity_item
from portal.utils.processing.parallel_fetcher import ParallelFetcher
from portal.utils.time.timeutils import days_ago
from portal.utils.validation.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)


def stat_value(value, change: Optional[int]) -> Dict:
    return {"value": str(value), "change": change}


class DashboardService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def get_dashboard_stats(self, scope: TenantScope) -> Dict:
        """
        Headline counts for the admin dashboard.

        ``change`` is the number of matching rows created within the trailing
        window. Performance rows carry no timestamp, so average progress has no
        change value.
        """
        institution_id = scope.require_institution()
        member_repo = self.repo_factory.get_member_repo()
        content_repo = self.repo_factory.get_content_repo()
        performance_repo = self.repo_factory.get_performance_repo()
        window_start = days_ago(DASHBOARD_CHANGE_WINDOW_DAYS)

        results = ParallelFetcher.fetch_all({
            "enrolled": lambda: member_repo.count(institution_id, MEMBER_STATUS_ACTIVE),
            "enrolled_recent": lambda: member_repo.count(institution_id, MEMBER_STATUS_ACTIVE, window_start),
            "pending": lambda: member_repo.count(institution_id, MEMBER_STATUS_PENDING),
            "pending_recent": lambda: member_repo.count(institution_id, MEMBER_STATUS_PENDING, window_start),
            "published": lambda: content_repo.count(institution_id, published_only=True),
            "published_recent": lambda: content_repo.count(institution_id, True, window_start),
            "scores": lambda: performance_repo.get_score_summary(institution_id, members_only=True),
        })

        average_progress = round_half_up(results["scores"].get("averageScore"))
        return {
            "totalEnrolledUsers": stat_value(results["enrolled"], results["enrolled_recent"]),
            "pendingRegistrations": stat_value(results["pending"], results["pending_recent"]),
            "publishedContentModules": stat_value(results["published"], results["published_recent"]),
            "averageUserProgress": stat_value(f"{average_progress}%", None),
        }

    def get_recent_activity(self, scope: TenantScope, limit=None) -> List[Dict]:
        """Most recent interactions by the institution's members, newest first"""
        institution_id = scope.require_institution()
        limit = ValidationUtils.validate_limit(limit)

        member_user_ids = self.repo_factory.get_member_repo().find_member_user_ids(institution_id)
        if not member_user_ids:
            return []

        interactions = self.repo_factory.get_interaction_repo().find_recent_for_users(
            member_user_ids, institution_id, limit
        )

        activity = []
        for interaction in interactions:
            users = interaction.get("userDoc") or []
            contents = interaction.get("contentDoc") or []
            if not users or not contents:
                logger.debug(f"Skipping interaction {interaction.get('_id')} with unresolved user or content")
                continue
            activity.append(format_activity_item(interaction, users[0], contents[0]))
        return activity
