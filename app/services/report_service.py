import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models import Report
from app.services.risk_service import list_risk_assessments
from app.utils.reporting import render_risk_report_pdf

logger = logging.getLogger(__name__)

def export_risk_report(db: Session, status: str | None = None, level: str | None = None) -> Report:
    settings = get_settings()
    rows = list_risk_assessments(db, status=status, level=level)
    try:
        pdf_path, page_count = render_risk_report_pdf([r.to_dict() for r in rows], title=settings.report_title)
    except Exception:
        logger.exception("Risk report export failed (%s records)", len(rows))
        raise

    report = Report(
        title=settings.report_title,
        pdf_path=str(pdf_path),
        record_count=len(rows),
        page_count=page_count,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("Risk report exported: %s (%s records, %s pages)", report.pdf_path, len(rows), page_count)
    return report

def list_reports(db: Session) -> list[Report]:
    return list(db.execute(select(Report).order_by(Report.created_at.desc(), Report.id.desc())).scalars().all())
