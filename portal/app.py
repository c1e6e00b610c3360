"""Flask application factory for the institution admin portal"""
import logging
from datetime import timedelta

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_restful import Api

from portal.api.auth_api import LoginResource, LogoutResource, RefreshTokenResource
from portal.api.health_api import HealthCheck
from portal.api.operations_api import OperationsResource
from portal.api.report_api import UserReportResource
from portal.auth.auth_middleware import is_token_blacklisted
from portal.config.settings import JWTConfig
from portal.db.portal_db import PortalDatabase
from portal.logging_logs.log_config import setup_logging
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.services.service_registry import PortalServices

logger = logging.getLogger(__name__)


class PortalFlask(Flask):
    def __init__(self, *args, repo_factory: RepositoryFactory, **kwargs):
        super().__init__(*args, **kwargs)
        self.services = PortalServices(repo_factory)

    def add_api(self):
        services = {"services": self.services}
        api = Api(self, catch_all_404s=True)
        api.add_resource(HealthCheck, "/")
        # Auth
        api.add_resource(LoginResource, "/api/auth/login", resource_class_kwargs=services)
        api.add_resource(RefreshTokenResource, "/api/auth/refresh")
        api.add_resource(LogoutResource, "/api/auth/logout")
        # Queries and mutations
        api.add_resource(OperationsResource, "/api/operations", resource_class_kwargs=services)
        # Reports
        api.add_resource(UserReportResource, "/api/reports/users", resource_class_kwargs=services)
        return api


def create_app(database: PortalDatabase = None, config: dict = None, log_to_file: bool = True,
               repo_factory: RepositoryFactory = None) -> PortalFlask:
    """
    Build the portal app.

    Repositories read from ``database``, or from a PortalDatabase connected
    from the environment settings when neither it nor ``repo_factory`` is given.
    """
    setup_logging(log_to_file=log_to_file)
    if repo_factory is None:
        repo_factory = RepositoryFactory(database if database is not None else PortalDatabase.from_settings())

    app = PortalFlask(__name__, repo_factory=repo_factory)
    app.config['JWT_SECRET_KEY'] = JWTConfig.SECRET_KEY
    app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(minutes=JWTConfig.ACCESS_TOKEN_EXPIRES_MINUTES)
    app.config['JWT_REFRESH_TOKEN_EXPIRES'] = timedelta(days=JWTConfig.REFRESH_TOKEN_EXPIRE_DAYS)
    if config:
        app.config.update(config)

    jwt = JWTManager(app)

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        return is_token_blacklisted(jwt_payload.get("jti"))

    app.add_api()
    CORS(app, supports_credentials=True)
    logger.info("Admin portal API initialised")
    return app
