from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, Integer, String, Text, event

from app.db import Base
from hms_risk.core import compute_risk
from hms_risk.models import RiskStatus


def _new_id() -> str:
    return uuid4().hex


class RiskAssessment(Base):
    __tablename__ = "risk_assessments"

    id = Column(String(32), primary_key=True, default=_new_id)
    hazard_type = Column(String(255), nullable=False)
    hazard_description = Column(Text, default="", nullable=False)
    likelihood = Column(Integer, default=3, nullable=False)
    consequence = Column(Integer, default=3, nullable=False)
    risk_score = Column(Integer, nullable=False, index=True)
    risk_level = Column(String(16), nullable=False, index=True)
    preventive_measures = Column(Text, default="", nullable=False)
    responsible_person = Column(String(255), default="", nullable=False)
    deadline = Column(Date, nullable=True)
    status = Column(String(32), default=RiskStatus.OPEN.value, nullable=False, index=True)
    notes = Column(Text, default="", nullable=False)
    created_by = Column(String(128), default="", nullable=False)
    last_reviewed_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def apply_risk(self) -> None:
        result = compute_risk(self.likelihood, self.consequence)
        self.risk_score = result.score
        self.risk_level = result.level.value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "hazard_type": self.hazard_type,
            "hazard_description": self.hazard_description,
            "likelihood": self.likelihood,
            "consequence": self.consequence,
            "risk_score": self.risk_score,
            "risk_level": self.risk_level,
            "preventive_measures": self.preventive_measures,
            "responsible_person": self.responsible_person,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "status": self.status,
            "notes": self.notes,
            "created_by": self.created_by,
            "last_reviewed_date": self.last_reviewed_date.isoformat() if self.last_reviewed_date else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@event.listens_for(RiskAssessment, "before_insert")
@event.listens_for(RiskAssessment, "before_update")
def _stamp_risk(mapper, connection, target: RiskAssessment) -> None:
    # Score and level are never written independently of the ratings.
    target.apply_risk()


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), default="", nullable=False)
    pdf_path = Column(String(512), nullable=False)
    record_count = Column(Integer, default=0, nullable=False)
    page_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
