import logging
from collections import Counter
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models import RiskAssessment
from hms_risk.core import MatrixCell, RiskLevel, build_risk_matrix
from hms_risk.models import AssessmentInput, RiskStatus, parse_status, to_assessment_input

logger = logging.getLogger(__name__)


def _apply_input(row: RiskAssessment, data: AssessmentInput) -> None:
    row.hazard_type = data.hazard_type
    row.hazard_description = data.hazard_description
    row.likelihood = data.likelihood
    row.consequence = data.consequence
    row.preventive_measures = data.preventive_measures
    row.responsible_person = data.responsible_person
    row.deadline = data.deadline
    row.status = data.status.value
    row.notes = data.notes
    row.apply_risk()


def _as_input(data: AssessmentInput | dict[str, Any]) -> AssessmentInput:
    if isinstance(data, AssessmentInput):
        return data
    return to_assessment_input(data)


def create_risk_assessment(
    db: Session,
    data: AssessmentInput | dict[str, Any],
    created_by: str | None = None,
) -> RiskAssessment:
    parsed = _as_input(data)
    row = RiskAssessment(created_by=created_by or get_settings().default_created_by)
    _apply_input(row, parsed)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Risk assessment %s created: %s (%s/%s)", row.id, row.hazard_type, row.risk_score, row.risk_level)
    return row


def get_risk_assessment(db: Session, risk_id: str) -> RiskAssessment | None:
    return db.get(RiskAssessment, str(risk_id))


def list_risk_assessments(
    db: Session,
    status: str | None = None,
    level: str | None = None,
) -> list[RiskAssessment]:
    stmt = select(RiskAssessment)
    if status:
        stmt = stmt.where(RiskAssessment.status == parse_status(status).value)
    if level:
        stmt = stmt.where(RiskAssessment.risk_level == level)
    stmt = stmt.order_by(RiskAssessment.created_at.desc(), RiskAssessment.id.desc())
    return list(db.execute(stmt).scalars().all())


def update_risk_assessment(
    db: Session,
    risk_id: str,
    data: AssessmentInput | dict[str, Any],
) -> RiskAssessment | None:
    row = get_risk_assessment(db, risk_id)
    if row is None:
        return None
    if isinstance(data, AssessmentInput):
        parsed = data
    else:
        # Keys left out (or null) keep their stored values.
        merged = row.to_dict()
        merged.update({key: value for key, value in data.items() if value is not None})
        parsed = to_assessment_input(merged)
    previous_status = row.status
    _apply_input(row, parsed)
    if parsed.status != RiskStatus.OPEN and parsed.status.value != previous_status:
        row.last_reviewed_date = date.today()
    db.commit()
    db.refresh(row)
    logger.info("Risk assessment %s updated: %s/%s status=%s", row.id, row.risk_score, row.risk_level, row.status)
    return row


def delete_risk_assessment(db: Session, risk_id: str) -> bool:
    row = get_risk_assessment(db, risk_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    logger.info("Risk assessment %s deleted", risk_id)
    return True


def risk_summary(db: Session) -> dict[str, Any]:
    rows = db.execute(select(RiskAssessment.risk_level, RiskAssessment.status)).all()
    levels = Counter(level for level, _ in rows)
    statuses = Counter(status for _, status in rows)
    return {
        "total": len(rows),
        "levels": {level.value: levels.get(level.value, 0) for level in RiskLevel},
        "statuses": {status.value: statuses.get(status.value, 0) for status in RiskStatus},
    }


def matrix_counts(db: Session) -> list[list[dict[str, Any]]]:
    """Static 5x5 matrix with the number of stored assessments in each cell."""
    rows = db.execute(select(RiskAssessment.likelihood, RiskAssessment.consequence)).all()
    pairs = Counter((int(li), int(co)) for li, co in rows)
    grid: list[list[dict[str, Any]]] = []
    for row in build_risk_matrix():
        grid.append([_cell_payload(cell, pairs.get((cell.likelihood, cell.consequence), 0)) for cell in row])
    return grid


def _cell_payload(cell: MatrixCell, count: int) -> dict[str, Any]:
    return {
        "likelihood": cell.likelihood,
        "consequence": cell.consequence,
        "score": cell.score,
        "level": cell.level.value,
        "color": cell.level.color,
        "count": count,
    }
