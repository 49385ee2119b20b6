from __future__ import annotations

from datetime import date

import pytest

from hms_risk.core import InvalidArgument
from hms_risk.models import RiskStatus, parse_deadline, parse_rating, parse_status, to_assessment_input


def test_parse_rating_accepts_form_strings() -> None:
    assert parse_rating("4", "likelihood") == 4
    assert parse_rating(" 2 ", "consequence") == 2
    assert parse_rating(5, "likelihood") == 5


@pytest.mark.parametrize("value", ["2.5", "", "abc", "0", "6", 2.5, True, None, "³"])
def test_parse_rating_rejects_non_ratings(value) -> None:
    with pytest.raises(InvalidArgument) as exc:
        parse_rating(value, "likelihood")
    assert exc.value.field == "likelihood"


def test_parse_status_accepts_norwegian_labels() -> None:
    assert parse_status("Åpen") is RiskStatus.OPEN
    assert parse_status("Under arbeid") is RiskStatus.IN_PROGRESS
    assert parse_status("Ferdig") is RiskStatus.DONE
    assert parse_status("in progress") is RiskStatus.IN_PROGRESS
    assert parse_status("") is RiskStatus.OPEN


def test_parse_status_rejects_unknown() -> None:
    with pytest.raises(InvalidArgument) as exc:
        parse_status("Archived")
    assert exc.value.field == "status"


def test_parse_deadline() -> None:
    assert parse_deadline("2025-03-01") == date(2025, 3, 1)
    assert parse_deadline("2025-03-01T10:00:00Z") == date(2025, 3, 1)
    assert parse_deadline("") is None
    with pytest.raises(InvalidArgument):
        parse_deadline("01.03.2025")


def test_to_assessment_input_defaults() -> None:
    item = to_assessment_input({"hazard_type": "Glatt gulv"})
    assert item.likelihood == 3
    assert item.consequence == 3
    assert item.status is RiskStatus.OPEN
    assert item.risk.score == 9
    record = item.to_record()
    assert record["risk_level"] == "Medium"
    assert record["deadline"] is None


def test_to_assessment_input_requires_hazard_type() -> None:
    with pytest.raises(InvalidArgument) as exc:
        to_assessment_input({"hazard_type": "  ", "likelihood": 2})
    assert exc.value.field == "hazard_type"


def test_to_assessment_input_rejects_bad_rating() -> None:
    with pytest.raises(InvalidArgument) as exc:
        to_assessment_input({"hazard_type": "Brann i frityr", "likelihood": 4, "consequence": "7"})
    assert exc.value.field == "consequence"
