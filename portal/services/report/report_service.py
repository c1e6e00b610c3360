"""User Report Service - Report Data Aggregation (SoC)"""
import logging
from typing import Dict, List

from flask import Response

from portal.auth.tenant_scope import TenantScope
from portal.config.settings import ALLOWED_REPORT_FORMATS
from portal.exceptions.exceptions import ValidationError
from portal.repositories.core.repository_factory import RepositoryFactory
from portal.services.report.excel_export_service import ExcelExportService
from portal.services.report.pdf_export_service import PdfExportService
from portal.utils.analysis.score_utils import round_half_up
from portal.utils.time.timeutils import now_utc, to_date_str

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["Name", "Email", "Status", "Registration Date", "Avg Performance (%)"]


def build_report_rows(members: List[Dict]) -> List[Dict]:
    """Membership listing rows flattened to the report columns; members without a user are skipped"""
    rows = []
    for member in members:
        user = member.get("userDoc")
        if not user:
            continue
        rows.append({
            "Name": user.get("name", ""),
            "Email": user.get("email", ""),
            "Status": (member.get("status") or "").capitalize(),
            "Registration Date": to_date_str(member.get("createdAt")),
            "Avg Performance (%)": round_half_up(member.get("averagePerformance")),
        })
    return rows


def validate_report_format(report_format) -> str:
    report_format = (report_format or "").strip().lower()
    if report_format not in ALLOWED_REPORT_FORMATS:
        raise ValidationError(f"Unsupported report format. Use one of: {', '.join(sorted(ALLOWED_REPORT_FORMATS))}")
    return report_format


class UserReportService:
    def __init__(self, repo_factory: RepositoryFactory):
        self.repo_factory = repo_factory

    def export_user_report(self, scope: TenantScope, report_format) -> Response:
        institution_id = scope.require_institution()
        report_format = validate_report_format(report_format)

        members = self.repo_factory.get_member_repo().list_with_performance(institution_id)
        rows = build_report_rows(members)
        filename = f"user_report_{to_date_str(now_utc())}.{report_format}"
        logger.info(f"Exporting {len(rows)} users as {report_format} for institution {institution_id}")

        if report_format == "xlsx":
            return ExcelExportService.export_rows_to_excel(rows, REPORT_COLUMNS, filename)
        return PdfExportService.export_rows_to_pdf(rows, REPORT_COLUMNS, filename)
