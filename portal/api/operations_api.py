"""Operations API - Presentation Layer (SoC)

A single endpoint dispatching named queries and mutations:
``POST /api/operations {"operation": "<name>", "variables": {...}}``.
"""
import logging

from flask_restful import Resource

from portal.auth.auth_middleware import session_required
from portal.exceptions.error_handler import handle_service_error
from portal.exceptions.exceptions import ValidationError
from portal.utils.validation.input_validator import get_json_data

logger = logging.getLogger(__name__)

# name -> handler(services, scope, variables)
OPERATIONS = {
    # Queries
    "me": lambda s, scope, v: s.account.me(scope),
    "myInstitution": lambda s, scope, v: s.institution.my_institution(scope),
    "getDashboardStats": lambda s, scope, v: s.dashboard.get_dashboard_stats(scope),
    "getRecentActivity": lambda s, scope, v: s.dashboard.get_recent_activity(scope, v.get("limit")),
    "getContentStats": lambda s, scope, v: s.content.get_content_stats(scope),
    "getContentModules": lambda s, scope, v: s.content.get_content_modules(scope),
    "getUserManagementData": lambda s, scope, v: s.users.get_user_management_data(scope),
    "getUserDetail": lambda s, scope, v: s.users.get_user_detail(scope, v.get("userId")),
    "getAnalyticsData": lambda s, scope, v: s.analytics.get_analytics_data(scope),
    "getSettingsData": lambda s, scope, v: s.settings.get_settings_data(scope),
    # Mutations
    "createContentModule": lambda s, scope, v: s.content.create_content_module(scope, v.get("title")),
    "deleteContentModules": lambda s, scope, v: s.content.delete_content_modules(scope, v.get("ids")),
    "updateContentOrder": lambda s, scope, v: s.content.update_content_order(scope, v.get("orderedIds")),
    "updateUserStatus": lambda s, scope, v: s.users.update_user_status(scope, v.get("userId"), v.get("status")),
    "updateSettings": lambda s, scope, v: s.settings.update_settings(scope, v.get("input")),
    "changePassword": lambda s, scope, v: s.account.change_password(
        scope, v.get("currentPassword"), v.get("newPassword")
    ),
}


def parse_operation_request(data: dict):
    name = data.get("operation")
    if not isinstance(name, str) or name not in OPERATIONS:
        raise ValidationError(f"Unknown operation: {name!r}")

    variables = data.get("variables")
    if variables is None:
        variables = {}
    if not isinstance(variables, dict):
        raise ValidationError("variables must be an object")
    return name, variables


class OperationsResource(Resource):
    def __init__(self, services):
        self.services = services

    @session_required
    def post(self, scope):
        try:
            name, variables = parse_operation_request(get_json_data())
            logger.debug(f"Operation {name} requested by user {scope.user_id}")
            result = OPERATIONS[name](self.services, scope, variables)
            return {"success": True, "data": result}, 200
        except Exception as e:
            return handle_service_error(e)
