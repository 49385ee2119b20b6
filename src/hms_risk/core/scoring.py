from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MIN_RATING = 1
MAX_RATING = 5
MAX_SCORE = MAX_RATING * MAX_RATING


class InvalidArgument(ValueError):
    """Raised for likelihood/consequence input outside the 1-5 integer domain."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]


_LEVEL_COLORS = {
    RiskLevel.LOW: "#009600",
    RiskLevel.MEDIUM: "#FFC800",
    RiskLevel.HIGH: "#FF8C00",
    RiskLevel.CRITICAL: "#FF0000",
}

# Upper score bound (inclusive) per level, checked in order.
_LEVEL_BANDS: tuple[tuple[int, RiskLevel], ...] = (
    (4, RiskLevel.LOW),
    (9, RiskLevel.MEDIUM),
    (15, RiskLevel.HIGH),
    (MAX_SCORE, RiskLevel.CRITICAL),
)

LEVEL_RANGES: dict[RiskLevel, str] = {
    RiskLevel.LOW: "1-4",
    RiskLevel.MEDIUM: "5-9",
    RiskLevel.HIGH: "10-15",
    RiskLevel.CRITICAL: "16-25",
}

LIKELIHOOD_LABELS: dict[int, str] = {
    1: "Rare",
    2: "Unlikely",
    3: "Possible",
    4: "Likely",
    5: "Almost certain",
}

CONSEQUENCE_LABELS: dict[int, str] = {
    1: "Negligible",
    2: "Minor",
    3: "Serious",
    4: "Very serious",
    5: "Catastrophic",
}


@dataclass(slots=True, frozen=True)
class RiskResult:
    score: int
    level: RiskLevel

    def to_dict(self) -> dict[str, object]:
        return {"score": self.score, "level": self.level.value, "color": self.level.color}


@dataclass(slots=True, frozen=True)
class MatrixCell:
    likelihood: int
    consequence: int
    score: int
    level: RiskLevel


def _check_rating(value: object, field: str) -> int:
    # bool is an int subclass; a checkbox value must not pass as a rating.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{field} must be an integer between 1 and 5, got {value!r}", field=field)
    if value < MIN_RATING or value > MAX_RATING:
        raise InvalidArgument(f"{field} must be between 1 and 5, got {value}", field=field)
    return value


def risk_level_for_score(score: int) -> RiskLevel:
    if isinstance(score, bool) or not isinstance(score, int) or score < 1 or score > MAX_SCORE:
        raise InvalidArgument(f"risk score must be an integer between 1 and {MAX_SCORE}, got {score!r}")
    for upper, level in _LEVEL_BANDS:
        if score <= upper:
            return level
    return RiskLevel.CRITICAL


def compute_risk(likelihood: int, consequence: int) -> RiskResult:
    """
    Score a hazard as likelihood x consequence and band it into a risk level.

    Both ratings must be integers in [1, 5]; anything else raises
    InvalidArgument. Every caller (form preview, persistence, matrix) goes
    through this function.
    """
    li = _check_rating(likelihood, "likelihood")
    co = _check_rating(consequence, "consequence")
    score = li * co
    return RiskResult(score=score, level=risk_level_for_score(score))


def build_risk_matrix() -> list[list[MatrixCell]]:
    """5x5 matrix, rows likelihood 5 -> 1, columns consequence 1 -> 5."""
    rows: list[list[MatrixCell]] = []
    for likelihood in range(MAX_RATING, MIN_RATING - 1, -1):
        row: list[MatrixCell] = []
        for consequence in range(MIN_RATING, MAX_RATING + 1):
            result = compute_risk(likelihood, consequence)
            row.append(MatrixCell(likelihood, consequence, result.score, result.level))
        rows.append(row)
    return rows
