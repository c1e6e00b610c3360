"""Shared fixtures for the admin portal test suite."""
import os

# Set before portal.config.settings is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from portal.auth.tenant_scope import TenantScope


@pytest.fixture
def institution_id() -> ObjectId:
    return ObjectId()


@pytest.fixture
def user_id() -> ObjectId:
    return ObjectId()


@pytest.fixture
def scope(user_id, institution_id) -> TenantScope:
    """Session scope for an administrator of ``institution_id``."""
    return TenantScope(user_id=user_id, institution_id=institution_id, user_name="Ada Admin")


@pytest.fixture
def scope_without_institution(user_id) -> TenantScope:
    return TenantScope(user_id=user_id)


@pytest.fixture
def repo_factory() -> MagicMock:
    """RepositoryFactory double; each get_*_repo() call returns the same repository mock."""
    return MagicMock()


@pytest.fixture
def member_repo(repo_factory):
    return repo_factory.get_member_repo.return_value


@pytest.fixture
def content_repo(repo_factory):
    return repo_factory.get_content_repo.return_value


@pytest.fixture
def performance_repo(repo_factory):
    return repo_factory.get_performance_repo.return_value


@pytest.fixture
def interaction_repo(repo_factory):
    return repo_factory.get_interaction_repo.return_value


@pytest.fixture
def user_repo(repo_factory):
    return repo_factory.get_user_repo.return_value


@pytest.fixture
def institution_repo(repo_factory):
    return repo_factory.get_institution_repo.return_value


@pytest.fixture
def created_at() -> datetime:
    return datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)
