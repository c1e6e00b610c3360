"""Unit tests for the session tenant scope."""
import pytest
from bson import ObjectId

from portal.auth.tenant_scope import TenantScope
from portal.exceptions.exceptions import UnauthenticatedError


class TestTenantScope:
    """Tests for TenantScope construction and institution resolution."""

    def test_from_claims_parses_ids(self) -> None:
        """Test that string claims become ObjectIds."""
        user_id, institution_id = ObjectId(), ObjectId()

        scope = TenantScope.from_claims({
            "id": str(user_id), "institutionId": str(institution_id), "name": "Ada"
        })

        assert scope.user_id == user_id
        assert scope.institution_id == institution_id
        assert scope.user_name == "Ada"

    def test_missing_user_is_unauthenticated(self) -> None:
        """Test that claims without a user id are rejected."""
        with pytest.raises(UnauthenticatedError, match="Authentication required"):
            TenantScope.from_claims({"institutionId": str(ObjectId())})

    def test_malformed_user_id_is_unauthenticated(self) -> None:
        """Test that a non-ObjectId user id is rejected."""
        with pytest.raises(UnauthenticatedError):
            TenantScope.from_claims({"id": "not-an-id"})

    def test_none_claims_are_unauthenticated(self) -> None:
        """Test that no claims at all are rejected."""
        with pytest.raises(UnauthenticatedError):
            TenantScope.from_claims(None)

    def test_require_institution_without_institution(self) -> None:
        """Test that a scope without an institution asks the user to log in again."""
        scope = TenantScope.from_claims({"id": str(ObjectId())})

        with pytest.raises(UnauthenticatedError, match="log in again"):
            scope.require_institution()

    def test_scope_is_immutable(self, scope) -> None:
        """Test that the scope cannot be re-pointed at another institution."""
        with pytest.raises(AttributeError):
            scope.institution_id = ObjectId()
