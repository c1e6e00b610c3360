"""Repository Factory - DRY Implementation"""
from portal.db.portal_db import PortalDatabase
from portal.repositories.content.content_repo import ContentRepo
from portal.repositories.institution.institution_repo import InstitutionRepo
from portal.repositories.interaction.interaction_repo import InteractionRepo
from portal.repositories.member.member_repo import MemberRepo
from portal.repositories.performance.performance_repo import PerformanceRepo
from portal.repositories.user.user_repo import UserRepo


class RepositoryFactory:
    """Creates and caches repositories over one injected PortalDatabase"""

    def __init__(self, database: PortalDatabase):
        self.database = database
        self._repos = {}

    def _get(self, key, builder):
        if key not in self._repos:
            self._repos[key] = builder()
        return self._repos[key]

    def get_user_repo(self) -> UserRepo:
        return self._get("users", lambda: UserRepo(self.database.users))

    def get_institution_repo(self) -> InstitutionRepo:
        return self._get("institutions", lambda: InstitutionRepo(self.database.institutions))

    def get_member_repo(self) -> MemberRepo:
        return self._get("members", lambda: MemberRepo(self.database.members))

    def get_content_repo(self) -> ContentRepo:
        return self._get("contents", lambda: ContentRepo(self.database.contents))

    def get_performance_repo(self) -> PerformanceRepo:
        return self._get("performances", lambda: PerformanceRepo(self.database.performances))

    def get_interaction_repo(self) -> InteractionRepo:
        return self._get("interactions", lambda: InteractionRepo(self.database.interactions))
