from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

from ..core import InvalidArgument, RiskLevel
from ..io import dump_result_file, load_assessment_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hms-risk-score",
        description="Score a JSON list of risk assessments (likelihood x consequence) and band them into risk levels.",
    )
    parser.add_argument("input", help="JSON file containing a list of risk assessment objects")
    parser.add_argument(
        "--out",
        default="output/risk_scores.json",
        help="Output JSON file path (default: output/risk_scores.json)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    input_path = Path(args.input).resolve()
    output_path = Path(args.out).resolve()

    if not input_path.exists() or not input_path.is_file():
        print(f"error: input file not found: {input_path}", file=sys.stderr)
        return 2

    try:
        assessments = load_assessment_file(input_path)
    except InvalidArgument as exc:
        field = f" ({exc.field})" if exc.field else ""
        print(f"error: invalid assessment{field}: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"error: invalid input: {exc}", file=sys.stderr)
        return 2

    items = [item.to_record() for item in assessments]
    counts = Counter(item["risk_level"] for item in items)
    payload = {
        "items": items,
        "summary": {level.value: counts.get(level.value, 0) for level in RiskLevel},
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    dump_result_file(output_path, payload)

    print(f"records={len(items)}")
    print(f"wrote={output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
