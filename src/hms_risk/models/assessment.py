from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, TypedDict

from ..core.scoring import MAX_RATING, MIN_RATING, InvalidArgument, RiskResult, compute_risk

DEFAULT_RATING = 3


class RiskStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


# Labels used by the Norwegian front end and older exports.
_STATUS_ALIASES = {
    "åpen": RiskStatus.OPEN,
    "apen": RiskStatus.OPEN,
    "under arbeid": RiskStatus.IN_PROGRESS,
    "ferdig": RiskStatus.DONE,
}


class RawAssessment(TypedDict, total=False):
    hazard_type: str
    hazard_description: str
    likelihood: int | str
    consequence: int | str
    preventive_measures: str
    responsible_person: str
    deadline: str | None
    status: str
    notes: str


@dataclass(slots=True, frozen=True)
class AssessmentInput:
    hazard_type: str
    hazard_description: str = ""
    likelihood: int = DEFAULT_RATING
    consequence: int = DEFAULT_RATING
    preventive_measures: str = ""
    responsible_person: str = ""
    deadline: date | None = None
    status: RiskStatus = RiskStatus.OPEN
    notes: str = ""

    @property
    def risk(self) -> RiskResult:
        return compute_risk(self.likelihood, self.consequence)

    def to_record(self) -> dict[str, Any]:
        risk = self.risk
        return {
            "hazard_type": self.hazard_type,
            "hazard_description": self.hazard_description,
            "likelihood": self.likelihood,
            "consequence": self.consequence,
            "risk_score": risk.score,
            "risk_level": risk.level.value,
            "preventive_measures": self.preventive_measures,
            "responsible_person": self.responsible_person,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "status": self.status.value,
            "notes": self.notes,
        }


def parse_rating(value: Any, field: str) -> int:
    """Accept an int or a string of digits in [1, 5]; reject everything else."""
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be a whole number between 1 and 5", field=field)
    if isinstance(value, str):
        raw = value.strip()
        if not (raw.isascii() and raw.isdigit()):
            raise InvalidArgument(f"{field} must be a whole number between 1 and 5, got {value!r}", field=field)
        value = int(raw)
    if not isinstance(value, int):
        raise InvalidArgument(f"{field} must be a whole number between 1 and 5, got {value!r}", field=field)
    if value < MIN_RATING or value > MAX_RATING:
        raise InvalidArgument(f"{field} must be between 1 and 5, got {value}", field=field)
    return value


def parse_status(value: Any) -> RiskStatus:
    raw = str(value or "").strip()
    if not raw:
        return RiskStatus.OPEN
    for status in RiskStatus:
        if raw.lower() == status.value.lower():
            return status
    alias = _STATUS_ALIASES.get(raw.lower())
    if alias is None:
        raise InvalidArgument(f"unknown status: {raw!r}", field="status")
    return alias


def parse_deadline(value: Any) -> date | None:
    if value is None or isinstance(value, date):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise InvalidArgument(f"deadline must be an ISO date (YYYY-MM-DD), got {raw!r}", field="deadline") from exc


def _text(payload: dict[str, Any], key: str) -> str:
    return str(payload.get(key) or "").strip()


def to_assessment_input(payload: RawAssessment | dict[str, Any]) -> AssessmentInput:
    hazard_type = _text(payload, "hazard_type")
    if not hazard_type:
        raise InvalidArgument("hazard_type is required", field="hazard_type")

    likelihood = payload.get("likelihood")
    consequence = payload.get("consequence")
    return AssessmentInput(
        hazard_type=hazard_type,
        hazard_description=_text(payload, "hazard_description"),
        likelihood=DEFAULT_RATING if likelihood in (None, "") else parse_rating(likelihood, "likelihood"),
        consequence=DEFAULT_RATING if consequence in (None, "") else parse_rating(consequence, "consequence"),
        preventive_measures=_text(payload, "preventive_measures"),
        responsible_person=_text(payload, "responsible_person"),
        deadline=parse_deadline(payload.get("deadline")),
        status=parse_status(payload.get("status")),
        notes=_text(payload, "notes"),
    )
