from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse, RedirectResponse
from sqlalchemy.orm import Session

from app.db import get_db
from app.models import Report
from app.services.report_service import export_risk_report, list_reports
from hms_risk.core import InvalidArgument

router = APIRouter(tags=["reports"])


@router.get("/reports")
def reports_page(
    request: Request,
    db: Session = Depends(get_db),
):
    return request.app.state.templates.TemplateResponse(
        request,
        "reports.html",
        {
            "active": "reports",
            "section_title": "Rapporter",
            "section_subtitle": "PDF-eksport av risikovurderinger.",
            "reports": list_reports(db),
        },
    )


@router.post("/reports/export")
def export_report_submit(
    status: str = Query(default=""),
    level: str = Query(default=""),
    db: Session = Depends(get_db),
):
    try:
        export_risk_report(db, status=status or None, level=level or None)
    except InvalidArgument as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RedirectResponse(url="/reports", status_code=302)


@router.get("/reports/download/pdf/{report_id}")
def download_report_pdf(
    report_id: int,
    db: Session = Depends(get_db),
):
    report = db.get(Report, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")

    path = Path(report.pdf_path)
    if not path.exists():
        raise HTTPException(status_code=404, detail="PDF file not found")
    return FileResponse(path, media_type="application/pdf", filename=path.name)
