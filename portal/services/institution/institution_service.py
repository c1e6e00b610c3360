"""Institution Service - Business Logic Layer (SoC)"""
from typing import Dict

from portal.auth.tenant_scope import TenantScope
from portal.exceptions.exceptions import NotFoundError
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.formatting.formatters import format_user_summary


class InstitutionService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def my_institution(self, scope: TenantScope) -> Dict:
        """Session institution with owner, admins and members populated; caller must own or administer it"""
        institution_id = scope.require_institution()
        institution = self.repo_factory.get_institution_repo().find_admin_institution(
            institution_id, scope.user_id
        )
        if not institution:
            raise NotFoundError("Institution not found or you do not have access.")

        return {
            "id": str(institution["_id"]),
            "name": institution.get("name", ""),
            "portalKey": institution.get("portalKey"),
            "owner": format_user_summary(institution.get("owner")),
            "admins": [format_user_summary(u) for u in institution.get("admins") or []],
            "members": [format_user_summary(u) for u in institution.get("members") or []],
        }
