"""Institution Settings Service - Business Logic Layer (SoC)"""
import logging
from typing import Dict, List, Tuple

from portal.auth.tenant_scope import TenantScope
from portal.config.settings import (
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    MIN_INSTITUTION_NAME_LENGTH,
)
from portal.exceptions.exceptions import NotFoundError, ValidationError
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.utils.time.timeutils import now_utc
from portal.utils.validation.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

# Flat input key -> stored field path
SETTINGS_FIELDS = {
    "name": "name",
    "description": "description",
    "website": "website",
    "contactEmail": "contactEmail",
    "contactPhone": "contactPhone",
    "address": "address",
    "primaryColor": "branding.primaryColor",
    "secondaryColor": "branding.secondaryColor",
    "logoUrl": "branding.logoUrl",
}

FIELD_CHECKS = {
    "website": (ValidationUtils.is_url, "website must be an http(s) URL"),
    "contactEmail": (ValidationUtils.is_email, "contactEmail must be a valid email address"),
    "primaryColor": (ValidationUtils.is_hex_color, "primaryColor must be a hex colour like #2563eb"),
    "secondaryColor": (ValidationUtils.is_hex_color, "secondaryColor must be a hex colour like #1e40af"),
}

INSTITUTION_NOT_FOUND_MESSAGE = "Institution not found."


def format_settings(institution: Dict) -> Dict:
    branding = institution.get("branding") or {}
    return {
        "name": institution.get("name", ""),
        "description": institution.get("description"),
        "website": institution.get("website"),
        "contactEmail": institution.get("contactEmail"),
        "contactPhone": institution.get("contactPhone"),
        "address": institution.get("address"),
        "branding": {
            "primaryColor": branding.get("primaryColor") or DEFAULT_PRIMARY_COLOR,
            "secondaryColor": branding.get("secondaryColor") or DEFAULT_SECONDARY_COLOR,
            "logoUrl": branding.get("logoUrl"),
        },
    }


def build_settings_update(data: Dict) -> Tuple[Dict, List[str]]:
    """
    Split a partial settings input into ``$set`` and ``$unset`` parts.

    Only keys present in ``data`` are touched. ``None`` or an empty string
    clears an optional field; ``name`` can never be cleared.
    """
    if not isinstance(data, dict):
        raise ValidationError("input must be an object")

    unknown = sorted(set(data) - set(SETTINGS_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown settings fields: {', '.join(unknown)}")

    set_fields, unset_fields = {}, []
    for key, value in data.items():
        path = SETTINGS_FIELDS[key]
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{key} must be a string")
        value = value.strip() if value else ""

        if key == "name":
            if len(value) < MIN_INSTITUTION_NAME_LENGTH:
                raise ValidationError(f"name must be at least {MIN_INSTITUTION_NAME_LENGTH} characters")
            set_fields[path] = value
            continue

        if not value:
            unset_fields.append(path)
            continue

        check = FIELD_CHECKS.get(key)
        if check and not check[0](value):
            raise ValidationError(check[1])
        set_fields[path] = value

    return set_fields, unset_fields


class SettingsService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def get_settings_data(self, scope: TenantScope) -> Dict:
        institution_id = scope.require_institution()
        institution = self.repo_factory.get_institution_repo().find_settings(institution_id)
        if not institution:
            raise NotFoundError(INSTITUTION_NOT_FOUND_MESSAGE)
        return format_settings(institution)

    def update_settings(self, scope: TenantScope, data) -> Dict:
        institution_id = scope.require_institution()
        set_fields, unset_fields = build_settings_update(data)
        institution_repo = self.repo_factory.get_institution_repo()

        if not institution_repo.update_settings(institution_id, set_fields, unset_fields, now_utc()):
            raise NotFoundError(INSTITUTION_NOT_FOUND_MESSAGE)
        logger.info(f"User {scope.user_id} updated settings of institution {institution_id}: "
                    f"set={sorted(set_fields)} unset={sorted(unset_fields)}")

        return format_settings(institution_repo.find_settings(institution_id) or {})
