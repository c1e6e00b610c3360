"""Content Service - Business Logic Layer (SoC)"""
import logging
from typing import Dict, List

from portal.auth.tenant_scope import TenantScope
from portal.config.settings import (
    DEFAULT_CONTENT_DATA,
    MAX_CONTENT_TITLE_LENGTH,
    MEMBER_STATUS_ACTIVE,
)
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.analysis.score_utils import round2
from portal.utils.formatting.formatters import format_content_module
from portal.utils.processing.parallel_fetcher import ParallelFetcher
from portal.utils.time.timeutils import now_utc
from portal.utils.validation.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)


class ContentService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def get_content_stats(self, scope: TenantScope) -> Dict:
        institution_id = scope.require_institution()
        content_repo = self.repo_factory.get_content_repo()
        performance_repo = self.repo_factory.get_performance_repo()

        results = ParallelFetcher.fetch_all({
            "total": lambda: content_repo.count(institution_id),
            "published": lambda: content_repo.count(institution_id, published_only=True),
            "scores": lambda: performance_repo.get_score_summary(institution_id),
        })

        return {
            "totalContent": results["total"],
            "publishedCount": results["published"],
            "averageEngagement": round2(results["scores"].get("averageScore")),
        }

    def get_content_modules(self, scope: TenantScope) -> List[Dict]:
        """Non-trashed modules in display order with engagement rate against active members"""
        institution_id = scope.require_institution()
        member_repo = self.repo_factory.get_member_repo()
        content_repo = self.repo_factory.get_content_repo()

        results = ParallelFetcher.fetch_all({
            "active_members": lambda: member_repo.count(institution_id, MEMBER_STATUS_ACTIVE),
            "modules": lambda: content_repo.list_modules(institution_id),
        })

        return [
            format_content_module(module, module.get("author"), results["active_members"])
            for module in results["modules"]
        ]

    def create_content_module(self, scope: TenantScope, title) -> Dict:
        """Create a draft placed after the institution's last item"""
        institution_id = scope.require_institution()
        title = ValidationUtils.validate_non_empty_string(title, "title", MAX_CONTENT_TITLE_LENGTH)
        content_repo = self.repo_factory.get_content_repo()

        highest_order = content_repo.find_highest_order(institution_id)
        new_order = 0 if highest_order is None else highest_order + 1
        created_at = now_utc()

        content = {
            "title": title,
            "views": 0,
            "contentType": "dynamic",
            "data": DEFAULT_CONTENT_DATA,
            "createdAt": created_at,
            "lastModifiedAt": created_at,
            "createdBy": scope.user_id,
            "parentId": None,
            "tags": [],
            "difficulty": "easy",
            "estimatedTime": 0,
            "userEngagement": {"rating": 0, "views": 0, "saves": 0, "shares": 0, "completions": 0},
            "isDraft": True,
            "isTrash": False,
            "version": 1,
            "institutionId": institution_id,
            "order": new_order,
        }
        content["_id"] = content_repo.insert(content)
        logger.info(f"Created content module {content['_id']} at order {new_order} for institution {institution_id}")

        author = self.repo_factory.get_user_repo().find_profile(scope.user_id)
        if author is None:
            author = {"_id": scope.user_id, "name": scope.user_name}
        return format_content_module(content, author, active_members=0)

    def delete_content_modules(self, scope: TenantScope, ids) -> bool:
        """Soft-delete in-tenant items; True when at least one row changed"""
        institution_id = scope.require_institution()
        content_ids = ValidationUtils.validate_object_id_list(ids, "ids")
        if not content_ids:
            return False

        modified = self.repo_factory.get_content_repo().soft_delete_many(content_ids, institution_id, now_utc())
        logger.info(f"Trashed {modified} of {len(content_ids)} requested content modules for institution {institution_id}")
        return modified > 0

    def update_content_order(self, scope: TenantScope, ordered_ids) -> bool:
        """Write each id's 0-based position as its order; ids outside the institution are ignored"""
        institution_id = scope.require_institution()
        content_ids = ValidationUtils.validate_object_id_list(ordered_ids, "orderedIds", unique=True)
        if not content_ids:
            return True

        matched = self.repo_factory.get_content_repo().update_order(content_ids, institution_id)
        if matched < len(content_ids):
            logger.warning(f"Reorder matched {matched} of {len(content_ids)} ids for institution {institution_id}")
        return True
