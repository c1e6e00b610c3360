"""Fixtures for endpoint tests against the Flask test client."""
import pytest
from flask_jwt_extended import create_access_token

from portal.app import create_app


@pytest.fixture
def app(repo_factory):
    app = create_app(config={"TESTING": True}, log_to_file=False, repo_factory=repo_factory)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_token(app):
    """Mint an access token carrying the given session claims."""
    def _make(**claims):
        with app.app_context():
            return create_access_token(identity=claims.get("email", "ada@north.edu"), additional_claims=claims)
    return _make


@pytest.fixture
def auth_headers(make_token, user_id, institution_id):
    token = make_token(id=str(user_id), institutionId=str(institution_id), email="ada@north.edu", name="Ada")
    return {"Authorization": f"Bearer {token}"}
