from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.db import get_db
from app.models import RiskAssessment
from app.services.risk_service import (
    create_risk_assessment,
    delete_risk_assessment,
    get_risk_assessment,
    list_risk_assessments,
    matrix_counts,
    risk_summary,
    update_risk_assessment,
)
from hms_risk.core import (
    CONSEQUENCE_LABELS,
    LEVEL_RANGES,
    LIKELIHOOD_LABELS,
    InvalidArgument,
    RiskLevel,
    compute_risk,
)
from hms_risk.models import RiskStatus, parse_rating, to_assessment_input

router = APIRouter(tags=["risks"])
logger = logging.getLogger(__name__)

FORM_FIELDS = (
    "hazard_type",
    "hazard_description",
    "likelihood",
    "consequence",
    "preventive_measures",
    "responsible_person",
    "deadline",
    "status",
    "notes",
)


def _empty_form() -> dict[str, Any]:
    return {
        "hazard_type": "",
        "hazard_description": "",
        "likelihood": 3,
        "consequence": 3,
        "preventive_measures": "",
        "responsible_person": "",
        "deadline": "",
        "status": RiskStatus.OPEN.value,
        "notes": "",
    }


def _form_from_row(row: RiskAssessment) -> dict[str, Any]:
    values = row.to_dict()
    values["deadline"] = values.get("deadline") or ""
    return {key: values.get(key, "") for key in FORM_FIELDS}


def _preview(values: dict[str, Any]) -> dict[str, Any] | None:
    try:
        likelihood = parse_rating(values.get("likelihood"), "likelihood")
        consequence = parse_rating(values.get("consequence"), "consequence")
    except InvalidArgument:
        return None
    return compute_risk(likelihood, consequence).to_dict()


def _render_form(
    request: Request,
    values: dict[str, Any],
    *,
    risk_id: str | None = None,
    error: str | None = None,
    error_field: str | None = None,
    status_code: int = 200,
):
    return request.app.state.templates.TemplateResponse(
        request,
        "risk_form.html",
        {
            "active": "risks",
            "section_title": "Rediger risikovurdering" if risk_id else "Ny risikovurdering",
            "risk_id": risk_id,
            "form": values,
            "preview": _preview(values),
            "error": error,
            "error_field": error_field,
            "likelihood_labels": LIKELIHOOD_LABELS,
            "consequence_labels": CONSEQUENCE_LABELS,
            "statuses": [s.value for s in RiskStatus],
        },
        status_code=status_code,
    )


async def _submitted_values(request: Request) -> dict[str, Any]:
    form = await request.form()
    return {key: str(form.get(key, "") or "") for key in FORM_FIELDS}


@router.get("/")
def root():
    return RedirectResponse(url="/risks", status_code=302)


@router.get("/risks")
def risks_page(
    request: Request,
    status: str = Query(default=""),
    level: str = Query(default=""),
    db: Session = Depends(get_db),
):
    try:
        rows = list_risk_assessments(db, status=status or None, level=level or None)
    except InvalidArgument as exc:
        logger.warning("Ignoring risk list filter: %s", exc)
        status = ""
        rows = list_risk_assessments(db, level=level or None)
    return request.app.state.templates.TemplateResponse(
        request,
        "risks.html",
        {
            "active": "risks",
            "section_title": "Risikovurdering / Risikoanalyse",
            "risks": rows,
            "summary": risk_summary(db),
            "status": status,
            "level": level,
            "statuses": [s.value for s in RiskStatus],
            "levels": [lv.value for lv in RiskLevel],
            "level_colors": {lv.value: lv.color for lv in RiskLevel},
        },
    )


@router.get("/risks/matrix")
def risk_matrix_page(
    request: Request,
    db: Session = Depends(get_db),
):
    return request.app.state.templates.TemplateResponse(
        request,
        "risk_matrix.html",
        {
            "active": "matrix",
            "section_title": "Risikomatrise (Risk Matrix)",
            "matrix": matrix_counts(db),
            "likelihood_labels": LIKELIHOOD_LABELS,
            "consequence_labels": CONSEQUENCE_LABELS,
            "legend": [
                {"level": lv.value, "range": LEVEL_RANGES[lv], "color": lv.color}
                for lv in RiskLevel
            ],
        },
    )


@router.get("/risks/new")
def new_risk_page(request: Request):
    return _render_form(request, _empty_form())


@router.post("/risks")
async def create_risk_submit(
    request: Request,
    db: Session = Depends(get_db),
):
    values = await _submitted_values(request)
    try:
        data = to_assessment_input(values)
    except InvalidArgument as exc:
        logger.warning("Rejected risk assessment form: %s", exc)
        return _render_form(request, values, error=str(exc), error_field=exc.field, status_code=400)
    create_risk_assessment(db, data)
    return RedirectResponse(url="/risks", status_code=302)


@router.get("/risks/{risk_id}/edit")
def edit_risk_page(
    request: Request,
    risk_id: str,
    db: Session = Depends(get_db),
):
    row = get_risk_assessment(db, risk_id)
    if not row:
        return RedirectResponse(url="/risks", status_code=302)
    return _render_form(request, _form_from_row(row), risk_id=row.id)


@router.post("/risks/{risk_id}")
async def update_risk_submit(
    request: Request,
    risk_id: str,
    db: Session = Depends(get_db),
):
    if not get_risk_assessment(db, risk_id):
        return RedirectResponse(url="/risks", status_code=302)
    values = await _submitted_values(request)
    try:
        data = to_assessment_input(values)
    except InvalidArgument as exc:
        logger.warning("Rejected risk assessment update %s: %s", risk_id, exc)
        return _render_form(request, values, risk_id=risk_id, error=str(exc), error_field=exc.field, status_code=400)
    update_risk_assessment(db, risk_id, data)
    return RedirectResponse(url="/risks", status_code=302)


@router.post("/risks/{risk_id}/delete")
def delete_risk_submit(
    risk_id: str,
    db: Session = Depends(get_db),
):
    delete_risk_assessment(db, risk_id)
    return RedirectResponse(url="/risks", status_code=302)
