"""Tenant scope - the authenticated user and institution threaded through every service call"""
from dataclasses import dataclass
from typing import Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId

from portal.exceptions.exceptions import UnauthenticatedError


def _to_object_id(value) -> Optional[ObjectId]:
    if not value or isinstance(value, dict):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


@dataclass(frozen=True)
class TenantScope:
    user_id: ObjectId
    institution_id: Optional[ObjectId] = None
    user_name: str = ""

    @classmethod
    def from_claims(cls, claims: Optional[Mapping]) -> "TenantScope":
        """Build the scope from session claims; a missing user is unauthenticated"""
        claims = claims or {}
        user_id = _to_object_id(claims.get("id"))
        if user_id is None:
            raise UnauthenticatedError("Authentication required. Please log in.")
        return cls(
            user_id=user_id,
            institution_id=_to_object_id(claims.get("institutionId")),
            user_name=claims.get("name") or "",
        )

    def require_institution(self) -> ObjectId:
        """Institution filter for every tenant query"""
        if self.institution_id is None:
            raise UnauthenticatedError("Institution not found in session. Please log in again.")
        return self.institution_id
