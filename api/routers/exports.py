"""
Export API Routes

Clipboard text (single item, whole batch, CSV) and file downloads (xlsx, pdf).
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from api.dependencies import get_api_key, get_export_service, get_ledger_service
from api.middleware.errors import NotFoundError
from scentvalue.models.common import ExportKind
from scentvalue.services import ExportService, LedgerService
from scentvalue.services.export_service import MEDIA_TYPES, export_filename

router = APIRouter(dependencies=[Depends(get_api_key)])


@router.get("/entries/{entry_id}/text", response_class=PlainTextResponse)
async def export_entry_text(
    entry_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
    exporter: ExportService = Depends(get_export_service),
):
    """One-line summary of a single entry."""
    entry = ledger.get_entry(entry_id)
    if entry is None:
        raise NotFoundError("Entry", entry_id)
    return exporter.item_text(entry)


@router.get("/text", response_class=PlainTextResponse)
async def export_batch_text(
    ledger: LedgerService = Depends(get_ledger_service),
    exporter: ExportService = Depends(get_export_service),
):
    """Numbered batch list with total value."""
    return exporter.batch_text(ledger.list_entries())


@router.get("/csv", response_class=PlainTextResponse)
async def export_csv(
    ledger: LedgerService = Depends(get_ledger_service),
    exporter: ExportService = Depends(get_export_service),
):
    """CSV text for pasting into a spreadsheet."""
    return exporter.csv_text(ledger.list_entries())


@router.get("/clipboard")
async def export_clipboard(
    ledger: LedgerService = Depends(get_ledger_service),
    exporter: ExportService = Depends(get_export_service),
) -> Dict[str, Any]:
    """Batch text and CSV text in one response, for the UI copy panel."""
    entries = ledger.list_entries()
    return {
        "count": len(entries),
        "summary_text": exporter.batch_text(entries),
        "csv_text": exporter.csv_text(entries),
    }


@router.get("/{kind}")
async def export_file(
    kind: ExportKind,
    ledger: LedgerService = Depends(get_ledger_service),
    exporter: ExportService = Depends(get_export_service),
):
    """
    Download the batch as an Excel workbook or PDF report.

    The filename is stamped with the export time. Returns 400 EMPTY_LEDGER
    when there is nothing to export.
    """
    content = exporter.render(kind, ledger.list_entries())
    filename = export_filename(kind)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[kind],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
