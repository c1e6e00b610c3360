"""Account Service - identity, login and credential changes"""
import logging
from typing import Dict

from portal.auth.password_utils import hash_password, verify_password
from portal.auth.tenant_scope import TenantScope
from portal.config.settings import SecurityConfig
from portal.exceptions.exceptions import InvalidCredentialsError, NotFoundError, ValidationError
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.formatting.formatters import format_user_summary
from portal.utils.time.timeutils import now_utc
from portal.utils.validation.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid email or password."
NOT_ADMIN_MESSAGE = "Access Denied: You are not an administrator of an institution."


class AccountService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def me(self, scope: TenantScope) -> Dict:
        user = self.repo_factory.get_user_repo().find_profile(scope.user_id)
        if not user:
            raise NotFoundError("User not found.")
        return format_user_summary(user)

    def login(self, email, password) -> Dict:
        """
        Resolve the session data for an institution administrator.

        Only owners or admins of an institution may sign in to the portal. The
        returned dict is the claim set the session token is minted from.
        """
        email = ValidationUtils.validate_non_empty_string(email, "email").lower()
        if not isinstance(password, str) or not password:
            raise ValidationError("password must be a non-empty string")

        user = self.repo_factory.get_user_repo().find_by_email(email)
        if not user or not verify_password(password, user.get("password_hash")):
            logger.info(f"Failed login attempt for {email}")
            raise InvalidCredentialsError(INVALID_LOGIN_MESSAGE)

        institution = self.repo_factory.get_institution_repo().find_for_admin(user["_id"])
        if not institution:
            logger.info(f"Login refused for non-administrator {email}")
            raise InvalidCredentialsError(NOT_ADMIN_MESSAGE)

        logger.info(f"User {user['_id']} logged in to institution {institution['_id']}")
        return {
            "id": str(user["_id"]),
            "email": user.get("email"),
            "name": user.get("name", ""),
            "institutionId": str(institution["_id"]),
            "institutionName": institution.get("name", ""),
            "portalKey": institution.get("portalKey"),
        }

    def change_password(self, scope: TenantScope, current_password, new_password) -> bool:
        if not isinstance(current_password, str) or not current_password:
            raise ValidationError("currentPassword is required")
        if not isinstance(new_password, str) or not new_password:
            raise ValidationError("newPassword is required")
        if len(new_password) < SecurityConfig.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"newPassword must be at least {SecurityConfig.MIN_PASSWORD_LENGTH} characters"
            )

        user_repo = self.repo_factory.get_user_repo()
        user = user_repo.find_with_credentials(scope.user_id)
        if not user:
            raise NotFoundError("User not found.")
        if not user.get("password_hash"):
            raise InvalidCredentialsError("Password login is not enabled for this account.")
        if not verify_password(current_password, user["password_hash"]):
            raise InvalidCredentialsError("Incorrect current password.")

        user_repo.update_password_hash(scope.user_id, hash_password(new_password), now_utc())
        logger.info(f"User {scope.user_id} changed their password")
        return True
