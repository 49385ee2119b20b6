from __future__ import annotations

import json
from pathlib import Path

from ..models import AssessmentInput, to_assessment_input


def load_assessment_file(path: Path) -> list[AssessmentInput]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("Input JSON must be a list of risk assessments.")
    items: list[AssessmentInput] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("Each risk assessment must be an object.")
        items.append(to_assessment_input(item))
    return items


def dump_result_file(path: Path, payload: dict[str, object]) -> None:
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
