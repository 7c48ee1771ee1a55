"""
Export Service

Serializes the batch for copy/paste (plain text, CSV) and for download
(Excel workbook, PDF report). Every export reads the entries it is given and
never modifies them.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from scentvalue.models.common import ExportKind, PricingConfig
from scentvalue.models.ledger import LedgerEntry
from scentvalue.services.formatting import (
    format_grouped_weight,
    format_net,
    format_number,
    format_price,
)

logger = logging.getLogger(__name__)

CSV_HEADER = "Fragrance Name,Gross Weight (g),Net (ml),Total Price (TSh)"
EXCEL_HEADERS = ["Fragrance Name", "Gross Weight (g)", "Net Weight (ml)", "Total Amount (TSh)"]
PDF_HEADERS = ["Fragrance Name", "Gross Wt", "Net Vol", "Total Price"]
SHEET_TITLE = "Inventory Batch"
REPORT_TITLE = "Inventory Valuation Batch"

FILENAME_PREFIXES = {
    ExportKind.XLSX: "ScentValue_BatchExport",
    ExportKind.PDF: "ScentValue_BatchReport",
}
MEDIA_TYPES = {
    ExportKind.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportKind.PDF: "application/pdf",
}


class EmptyLedgerError(ValueError):
    """Raised when a file export is requested for an empty batch."""

    def __init__(self):
        super().__init__("Nothing to export: the batch is empty")


def export_filename(kind: ExportKind, now: Optional[datetime] = None) -> str:
    """Fixed prefix plus export time in epoch milliseconds."""
    now = now or datetime.now()
    stamp = int(now.timestamp() * 1000)
    return f"{FILENAME_PREFIXES[kind]}_{stamp}.{kind.value}"


class ExportService:
    """Text and file exports of ledger entries."""

    def __init__(self, config: Optional[PricingConfig] = None):
        self.config = config or PricingConfig()

    # =========================================================================
    # Clipboard text
    # =========================================================================

    def item_text(self, entry: LedgerEntry) -> str:
        """One-line summary of a single entry."""
        return (
            f"{entry.label} | Gross: {format_number(entry.gross_weight)}g | "
            f"Total: {format_price(entry.price)} {self.config.currency}"
        )

    def batch_text(self, entries: Sequence[LedgerEntry]) -> str:
        """Numbered batch list (highest number = newest) with the total value."""
        currency = self.config.currency
        count = len(entries)
        lines = [
            f"{count - idx}. {entry.label} - {format_price(entry.price)} {currency}"
            for idx, entry in enumerate(entries)
        ]
        total = sum((e.price for e in entries), 0.0)
        return "\n".join(lines) + f"\n\nTotal Batch Value: {format_price(total)} {currency}"

    def csv_text(self, entries: Sequence[LedgerEntry]) -> str:
        """Machine-oriented CSV: raw numbers, no grouping."""
        rows = [
            f"{e.label},{format_number(e.gross_weight)},{format_net(e.net_weight)},{format_number(e.price)}"
            for e in entries
        ]
        return "\n".join([CSV_HEADER] + rows)

    # =========================================================================
    # Files
    # =========================================================================

    def to_excel(self, entries: Sequence[LedgerEntry]) -> bytes:
        """Create an Excel workbook with one row per entry."""
        if not entries:
            raise EmptyLedgerError()

        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        header_fill = PatternFill(start_color="141414", end_color="141414", fill_type="solid")
        header_font = Font(bold=True, color="FFFFFF")
        header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, header in enumerate(EXCEL_HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = header_alignment
            cell.border = thin_border

        row = 2
        for entry in entries:
            ws.cell(row=row, column=1, value=entry.label).border = thin_border
            ws.cell(row=row, column=2, value=entry.gross_weight).border = thin_border
            ws.cell(row=row, column=3, value=format_net(entry.net_weight)).border = thin_border
            ws.cell(row=row, column=4, value=entry.price).border = thin_border
            row += 1

        ws.column_dimensions[get_column_letter(1)].width = 30
        for col in range(2, len(EXCEL_HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18

        buffer = BytesIO()
        wb.save(buffer)
        logger.info(f"Exported {len(entries)} entries to Excel")
        return buffer.getvalue()

    def to_pdf(self, entries: Sequence[LedgerEntry]) -> bytes:
        """Create a PDF valuation report."""
        if not entries:
            raise EmptyLedgerError()

        currency = self.config.currency
        styles = getSampleStyleSheet()
        title_style = ParagraphStyle("ReportTitle", parent=styles["Title"], fontSize=22, alignment=0)
        subtitle_style = ParagraphStyle(
            "ReportSubtitle", parent=styles["Normal"], fontSize=10, textColor=colors.HexColor("#646464")
        )
        total_style = ParagraphStyle("ReportTotal", parent=styles["Normal"], fontSize=14, leading=18)

        table_data: List[List[str]] = [PDF_HEADERS]
        for entry in entries:
            table_data.append([
                entry.label,
                f"{format_grouped_weight(entry.gross_weight)}g",
                f"{format_net(entry.net_weight)}ml",
                f"{format_price(entry.price)} {currency}",
            ])

        table = Table(table_data, repeatRows=1, hAlign="LEFT")
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#141414")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))

        total = sum((e.price for e in entries), 0.0)
        story = [
            Paragraph(REPORT_TITLE, title_style),
            Paragraph(
                f"Pricing Rate: {format_number(self.config.rate_per_gram)} {currency}/g | "
                f"Bottle Tare: {format_number(self.config.tare_grams)}g",
                subtitle_style,
            ),
            Spacer(1, 6 * mm),
            table,
            Spacer(1, 8 * mm),
            Paragraph(f"Total Batch Value: {format_price(total)} {currency}", total_style),
        ]

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=14 * mm,
            rightMargin=14 * mm,
            topMargin=14 * mm,
            bottomMargin=14 * mm,
            title=REPORT_TITLE,
        )
        doc.build(story)
        logger.info(f"Exported {len(entries)} entries to PDF")
        return buffer.getvalue()

    def render(self, kind: ExportKind, entries: Sequence[LedgerEntry]) -> bytes:
        """Dispatch a file export by kind."""
        if kind == ExportKind.XLSX:
            return self.to_excel(entries)
        return self.to_pdf(entries)
