"""Excel Export Service - Report Export Utilities (SoC)"""
from io import BytesIO
from typing import Dict, List

import pandas as pd
from flask import Response
from openpyxl.styles import Font, PatternFill

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
HEADER_FILL = PatternFill(start_color='001C80', end_color='001C80', fill_type='solid')
HEADER_FONT = Font(bold=True, color='FFFFFF')


def attachment_response(payload: bytes, mimetype: str, filename: str) -> Response:
    return Response(
        payload,
        mimetype=mimetype,
        headers={
            'Content-Disposition': f'attachment; filename="{filename}"',
            'Cache-Control': 'no-cache',
            'Access-Control-Expose-Headers': 'Content-Disposition'
        }
    )


class ExcelExportService:
    """Service for exporting report rows to Excel format"""

    @staticmethod
    def build_workbook(rows: List[Dict], columns: List[str], sheet_name: str = 'Users') -> bytes:
        df = pd.DataFrame(rows, columns=columns)

        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            sheet = writer.sheets[sheet_name]
            for cell in sheet[1]:
                cell.fill = HEADER_FILL
                cell.font = HEADER_FONT
            for index, column in enumerate(columns, start=1):
                width = max([len(column)] + [len(str(row.get(column, ""))) for row in rows]) + 2
                sheet.column_dimensions[sheet.cell(row=1, column=index).column_letter].width = width

        output.seek(0)
        return output.getvalue()

    @staticmethod
    def export_rows_to_excel(rows: List[Dict], columns: List[str], filename: str) -> Response:
        """Convert report rows to an Excel attachment"""
        return attachment_response(ExcelExportService.build_workbook(rows, columns), XLSX_MIMETYPE, filename)
