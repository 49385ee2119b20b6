import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from app import db as app_db
from app.config import BASE_DIR, get_settings
from app.routers import api, reports, risks
from hms_risk import get_runtime_version


def create_app() -> FastAPI:
    # Respect runtime env overrides (tests, temporary runs).
    get_settings.cache_clear()
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins or ["http://127.0.0.1", "http://localhost"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    static_dir = BASE_DIR / "static"
    templates_dir = BASE_DIR / "templates"
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    app.state.templates = Jinja2Templates(directory=str(templates_dir))

    def _static_v(rel_path: str) -> int:
        # Cache-busting by file mtime.
        try:
            return int((static_dir / rel_path).stat().st_mtime)
        except OSError:
            return int(time.time())

    app.state.templates.env.globals["static_v"] = _static_v
    app.state.templates.env.globals["app_name"] = settings.app_name

    app_db.configure_database(settings.database_url)
    app_db.init_db()
    logging.getLogger(__name__).info("Database ready: %s", settings.database_url)

    app.include_router(risks.router)
    app.include_router(api.router)
    app.include_router(reports.router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/api/health")
    def api_health():
        return {"status": "ok", "version": get_runtime_version()}

    return app


app = create_app()
