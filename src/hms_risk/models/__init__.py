from .assessment import (
    AssessmentInput,
    RawAssessment,
    RiskStatus,
    parse_deadline,
    parse_rating,
    parse_status,
    to_assessment_input,
)

__all__ = [
    "AssessmentInput",
    "RawAssessment",
    "RiskStatus",
    "parse_deadline",
    "parse_rating",
    "parse_status",
    "to_assessment_input",
]
