from __future__ import annotations

from pathlib import Path
import tomllib

from .core.scoring import InvalidArgument, RiskLevel, RiskResult, build_risk_matrix, compute_risk

__version__ = "0.1.0"


def get_runtime_version() -> str:
    candidates = [
        Path.cwd() / "pyproject.toml",
        Path(__file__).resolve().parents[2] / "pyproject.toml",
    ]

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        if not path.exists():
            continue
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            continue
        project = data.get("project", {}) or {}
        if str(project.get("name", "")).strip() != "hms-risk":
            continue
        version = str(project.get("version", "")).strip()
        if version:
            return version
    return __version__


__all__ = [
    "InvalidArgument",
    "RiskLevel",
    "RiskResult",
    "__version__",
    "build_risk_matrix",
    "compute_risk",
    "get_runtime_version",
]
