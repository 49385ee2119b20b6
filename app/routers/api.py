from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.db import get_db
from app.services.risk_service import (
    create_risk_assessment,
    delete_risk_assessment,
    get_risk_assessment,
    list_risk_assessments,
    matrix_counts,
    risk_summary,
    update_risk_assessment,
)
from hms_risk.core import LEVEL_RANGES, InvalidArgument, RiskLevel, compute_risk
from hms_risk.models import parse_rating

router = APIRouter(prefix="/api", tags=["api"])
logger = logging.getLogger(__name__)


def _invalid(exc: InvalidArgument) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "invalid_argument", "field": exc.field, "detail": str(exc)},
    )


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "not_found"})


@router.get("/risk-score")
def api_risk_score(
    likelihood: str = Query(default=""),
    consequence: str = Query(default=""),
):
    """Live preview for the assessment form; same calculator as persistence."""
    try:
        li = parse_rating(likelihood, "likelihood")
        co = parse_rating(consequence, "consequence")
    except InvalidArgument as exc:
        return _invalid(exc)
    return {"likelihood": li, "consequence": co, **compute_risk(li, co).to_dict()}


@router.get("/risk-matrix")
def api_risk_matrix(db: Session = Depends(get_db)):
    return {
        "rows": matrix_counts(db),
        "legend": [{"level": lv.value, "range": LEVEL_RANGES[lv], "color": lv.color} for lv in RiskLevel],
    }


@router.get("/risks")
def api_list_risks(
    status: str = Query(default=""),
    level: str = Query(default=""),
    db: Session = Depends(get_db),
):
    try:
        rows = list_risk_assessments(db, status=status or None, level=level or None)
    except InvalidArgument as exc:
        return _invalid(exc)
    return {
        "items": [r.to_dict() for r in rows],
        "summary": risk_summary(db),
    }


@router.post("/risks", status_code=201)
def api_create_risk(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
):
    try:
        row = create_risk_assessment(db, payload, created_by=str(payload.get("created_by") or "") or None)
    except InvalidArgument as exc:
        logger.warning("Rejected risk assessment payload: %s", exc)
        return _invalid(exc)
    return row.to_dict()


@router.get("/risks/{risk_id}")
def api_get_risk(risk_id: str, db: Session = Depends(get_db)):
    row = get_risk_assessment(db, risk_id)
    if not row:
        return _not_found()
    return row.to_dict()


@router.put("/risks/{risk_id}")
def api_update_risk(
    risk_id: str,
    payload: dict = Body(...),
    db: Session = Depends(get_db),
):
    try:
        row = update_risk_assessment(db, risk_id, payload)
    except InvalidArgument as exc:
        logger.warning("Rejected risk assessment update %s: %s", risk_id, exc)
        return _invalid(exc)
    if not row:
        return _not_found()
    return row.to_dict()


@router.delete("/risks/{risk_id}")
def api_delete_risk(risk_id: str, db: Session = Depends(get_db)):
    if not delete_risk_assessment(db, risk_id):
        return _not_found()
    return {"deleted": risk_id}
