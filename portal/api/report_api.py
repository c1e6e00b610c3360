"""Report API - Presentation Layer (SoC)"""
from flask_restful import Resource

from portal.auth.auth_middleware import session_required
from portal.exceptions.error_handler import handle_service_error
from portal.utils.validation.input_validator import get_single_query_param


class UserReportResource(Resource):
    def __init__(self, services):
        self.service = services.reports

    @session_required
    def get(self, scope):
        try:
            report_format = get_single_query_param("format")
            return self.service.export_user_report(scope, report_format)
        except Exception as e:
            return handle_service_error(e)
