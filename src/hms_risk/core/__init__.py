from .scoring import (
    CONSEQUENCE_LABELS,
    LEVEL_RANGES,
    LIKELIHOOD_LABELS,
    InvalidArgument,
    MatrixCell,
    RiskLevel,
    RiskResult,
    build_risk_matrix,
    compute_risk,
    risk_level_for_score,
)

__all__ = [
    "CONSEQUENCE_LABELS",
    "LEVEL_RANGES",
    "LIKELIHOOD_LABELS",
    "InvalidArgument",
    "MatrixCell",
    "RiskLevel",
    "RiskResult",
    "build_risk_matrix",
    "compute_risk",
    "risk_level_for_score",
]
