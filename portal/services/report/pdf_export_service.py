"""PDF Export Service - Report Export Utilities (SoC)"""
from io import BytesIO
from typing import Dict, List

from flask import Response
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from portal.config.settings import REPORT_CREATOR, REPORT_TITLE
from portal.services.report.excel_export_service import attachment_response
from portal.services.report.pdf_styles import GRID_COLOR, HEADER_COLOR, get_styles
from portal.utils.time.timeutils import now_utc

COLUMN_WIDTHS = [2.4 * inch, 2.8 * inch, 1.1 * inch, 1.5 * inch, 1.6 * inch]

TABLE_STYLE = TableStyle([
    ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
    ('GRID', (0, 0), (-1, -1), 1, GRID_COLOR),
    ('BOX', (0, 0), (-1, -1), 1, GRID_COLOR),
    ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ('ALIGN', (2, 1), (-1, -1), 'CENTER'),
    ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f5f7fa')]),
])


class PdfExportService:
    """Service for exporting report rows to a PDF table"""

    @staticmethod
    def build_document(rows: List[Dict], columns: List[str]) -> bytes:
        styles = get_styles()
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            title=REPORT_TITLE,
            author=REPORT_CREATOR,
            leftMargin=0.5 * inch, rightMargin=0.5 * inch,
            topMargin=0.5 * inch, bottomMargin=0.5 * inch
        )

        table_data = [[Paragraph(c, styles['TableHeader']) for c in columns]]
        for row in rows:
            table_data.append([
                Paragraph(str(row.get("Name", "")), styles['TableBodyLeft']),
                Paragraph(str(row.get("Email", "")), styles['TableBodyLeft']),
                *[str(row.get(c, "")) for c in columns[2:]]
            ])

        table = Table(table_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        table.setStyle(TABLE_STYLE)

        story = [
            Paragraph(REPORT_TITLE, styles['CenteredTitle']),
            Paragraph(f"Generated {now_utc().strftime('%Y-%m-%d %H:%M UTC')} · {len(rows)} users", styles['InfoValue']),
            Spacer(1, 0.2 * inch),
            table,
        ]
        doc.build(story)
        return buffer.getvalue()

    @staticmethod
    def export_rows_to_pdf(rows: List[Dict], columns: List[str], filename: str) -> Response:
        return attachment_response(PdfExportService.build_document(rows, columns), 'application/pdf', filename)
