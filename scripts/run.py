from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import uvicorn

ROOT_DIR = Path(__file__).resolve().parents[1]
APP_IMPORT_PATH = "app.main:app"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 56461


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the HMS risk assessment web app.")
    parser.add_argument("--host", default=os.getenv("HOST", DEFAULT_HOST))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", str(DEFAULT_PORT))))
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    for path in (ROOT_DIR, ROOT_DIR / "src"):
        if str(path) not in sys.path:
            sys.path.insert(0, str(path))

    print(f"Web UI: http://{args.host}:{args.port}/", flush=True)
    uvicorn.run(
        APP_IMPORT_PATH,
        host=args.host,
        port=args.port,
        reload=bool(args.reload),
        app_dir=str(ROOT_DIR),
        log_level="info",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
