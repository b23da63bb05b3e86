"""Spreadsheet export endpoints."""

from io import BytesIO

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.core.dependencies import AppSettings, Store
from app.services.export import build_workbook

router = APIRouter()


@router.get("/workbook")
def export_workbook(store: Store, settings: AppSettings):
    """Download students, grades and exams as an Excel workbook."""
    content = build_workbook(store.snapshot, settings.SCORE_DECIMALS)

    return StreamingResponse(
        BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={settings.EXPORT_FILENAME}"},
    )
