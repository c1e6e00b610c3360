"""Analytics Service - Business Logic Layer (SoC)"""
import logging
from typing import Dict, List

from portal.auth.tenant_scope import TenantScope
from portal.config.settings import ACTIVE_LEARNER_WINDOW_DAYS
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.analysis.score_utils import percentage, round2, safe_average, segment_members
from portal.utils.processing.parallel_fetcher import ParallelFetcher
from portal.utils.time.timeutils import days_ago, seconds_to_hours

logger = logging.getLogger(__name__)


def format_content_analytics(row: Dict) -> Dict:
    enrolled = row.get("enrolledUsers") or 0
    return {
        "id": str(row["_id"]),
        "title": row.get("title", ""),
        "enrolledUsers": enrolled,
        "completionRate": percentage(row.get("masteredUsers") or 0, enrolled),
        "avgScore": round2(row.get("avgScore")),
        "avgTimeSpentHours": seconds_to_hours(row.get("avgTimeSeconds")),
    }


def build_overview(summary: Dict, content_rows: List[Dict], active_learners: int) -> Dict:
    """Institution-wide headline figures for the analytics page"""
    rated = [row["completionRate"] for row in content_rows if row["enrolledUsers"] > 0]
    learners = summary.get("learnerCount") or 0
    study_seconds = (summary.get("totalTimeSeconds") or 0) / learners if learners else 0
    return {
        "averageEngagement": round2(summary.get("averageScore")),
        "averageCompletionRate": round2(safe_average(rated)),
        "activeLearners": active_learners,
        "averageStudyTimeHours": seconds_to_hours(study_seconds),
    }


class AnalyticsService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def get_analytics_data(self, scope: TenantScope) -> Dict:
        institution_id = scope.require_institution()
        member_repo = self.repo_factory.get_member_repo()
        content_repo = self.repo_factory.get_content_repo()
        performance_repo = self.repo_factory.get_performance_repo()
        window_start = days_ago(ACTIVE_LEARNER_WINDOW_DAYS)

        results = ParallelFetcher.fetch_all({
            "members": lambda: member_repo.get_member_performance_summaries(institution_id),
            "content": lambda: content_repo.get_breakdown(institution_id),
            "active_learners": lambda: member_repo.count_active_learners(institution_id, window_start),
            "summary": lambda: performance_repo.get_score_summary(institution_id),
        })

        content_rows = [format_content_analytics(row) for row in results["content"]]
        logger.debug(f"Analytics for institution {institution_id}: {len(results['members'])} active members, "
                     f"{len(content_rows)} content items")

        return {
            "overview": build_overview(results["summary"], content_rows, results["active_learners"]),
            "contentAnalytics": content_rows,
            "userAnalytics": segment_members(results["members"]),
        }
