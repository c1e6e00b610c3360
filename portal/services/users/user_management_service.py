"""User Management Service - Business Logic Layer (SoC)"""
import logging
from typing import Dict

from portal.auth.tenant_scope import TenantScope
from portal.config.settings import (
    ALLOWED_STATUS_UPDATES,
    DELETED_CONTENT_TITLE,
    MEMBER_STATUS_ACTIVE,
    MEMBER_STATUS_PENDING,
    UNDERSTANDING_LEVEL_MASTERED,
    USER_TIMELINE_LIMIT,
)
from portal.exceptions.exceptions import NotFoundError, ValidationError
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.analysis.score_utils import round2, round_half_up, safe_average
from portal.utils.formatting.formatters import (
    format_activity_item,
    format_institution_user,
    or_not_available,
)
from portal.utils.processing.parallel_fetcher import ParallelFetcher
from portal.utils.time.timeutils import now_utc
from portal.utils.validation.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found in this institution."


def format_module_performance(record: Dict) -> Dict:
    content = record.get("content")
    return {
        "contentId": str(content["_id"]) if content else None,
        "title": (content or {}).get("title") or DELETED_CONTENT_TITLE,
        "performanceScore": record.get("understandingScore", 0),
        "status": record.get("understandingLevel"),
        "timeSpentSeconds": record.get("totalTimeSeconds") or 0,
    }


class UserManagementService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def get_user_management_data(self, scope: TenantScope) -> Dict:
        institution_id = scope.require_institution()
        member_repo = self.repo_factory.get_member_repo()

        results = ParallelFetcher.fetch_all({
            "total": lambda: member_repo.count(institution_id),
            "active": lambda: member_repo.count(institution_id, MEMBER_STATUS_ACTIVE),
            "pending": lambda: member_repo.count(institution_id, MEMBER_STATUS_PENDING),
            "average": lambda: member_repo.get_active_members_average(institution_id),
            "members": lambda: member_repo.list_with_performance(institution_id),
        })

        users = [
            format_institution_user(member, member["userDoc"], member.get("averagePerformance"))
            for member in results["members"]
            if member.get("userDoc")
        ]

        return {
            "stats": {
                "totalUsers": results["total"],
                "activeUsers": results["active"],
                "pendingUsers": results["pending"],
                "averagePerformance": round2(results["average"]),
            },
            "users": users,
        }

    def get_user_detail(self, scope: TenantScope, user_id) -> Dict:
        """
        Full profile for one member of the caller's institution.

        Users without a membership row in this institution are reported as not
        found, whether or not they exist elsewhere.
        """
        institution_id = scope.require_institution()
        user_oid = ValidationUtils.validate_object_id(user_id, "userId")

        member = self.repo_factory.get_member_repo().find_membership(user_oid, institution_id)
        if not member:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        user = self.repo_factory.get_user_repo().find_profile(user_oid)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        performance_repo = self.repo_factory.get_performance_repo()
        content_repo = self.repo_factory.get_content_repo()
        interaction_repo = self.repo_factory.get_interaction_repo()

        results = ParallelFetcher.fetch_all({
            "performance": lambda: performance_repo.find_for_user(user_oid, institution_id),
            "content_count": lambda: content_repo.count(institution_id),
            "interactions": lambda: interaction_repo.find_recent_for_user(
                user_oid, institution_id, USER_TIMELINE_LIMIT
            ),
        })

        records = results["performance"]
        total_time = sum(r.get("totalTimeSeconds") or 0 for r in records)
        completed = sum(1 for r in records if r.get("understandingLevel") == UNDERSTANDING_LEVEL_MASTERED)
        overall_average = safe_average(r.get("understandingScore") for r in records)

        timeline = []
        for interaction in results["interactions"]:
            contents = interaction.get("contentDoc") or []
            if not contents:
                continue
            timeline.append(format_activity_item(interaction, user, contents[0]))

        detail = format_institution_user(member, user, None)
        detail.pop("averagePerformance")
        detail.update({
            "phone": or_not_available(user.get("phone")),
            "address": or_not_available(user.get("address")),
            "overallAveragePerformance": round_half_up(overall_average),
            "totalModulesCount": results["content_count"],
            "completedModulesCount": completed,
            "totalTimeSpentSeconds": total_time,
            "modulePerformance": [format_module_performance(r) for r in records],
            "activityTimeline": timeline,
        })
        return detail

    def update_user_status(self, scope: TenantScope, user_id, status) -> Dict:
        institution_id = scope.require_institution()
        user_oid = ValidationUtils.validate_object_id(user_id, "userId")
        if status not in ALLOWED_STATUS_UPDATES:
            raise ValidationError(f"status must be one of: {', '.join(sorted(ALLOWED_STATUS_UPDATES))}")

        member = self.repo_factory.get_member_repo().update_status(user_oid, institution_id, status, now_utc())
        if not member:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        logger.info(f"User {scope.user_id} set membership of {user_oid} to {status} in institution {institution_id}")

        user = self.repo_factory.get_user_repo().find_profile(user_oid) or {"_id": user_oid}
        average = self.repo_factory.get_performance_repo().get_user_average(user_oid, institution_id)
        return format_institution_user(member, user, average)
