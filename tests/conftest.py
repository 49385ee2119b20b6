from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"

for path in (ROOT_DIR, SRC_DIR):
    value = str(path)
    if path.exists() and value not in sys.path:
        sys.path.insert(0, value)


@pytest.fixture
def runtime_env(tmp_path, monkeypatch):
    """Point settings, database and exports at a throwaway directory."""
    monkeypatch.setenv("RUNTIME_DIR", str(tmp_path))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{(tmp_path / 'hms_risk.db').as_posix()}")
    monkeypatch.delenv("EXPORT_DIR", raising=False)

    from app.config import get_settings

    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def db_session(runtime_env):
    import app.db as app_db

    app_db.configure_database(f"sqlite:///{(runtime_env / 'service.db').as_posix()}")
    app_db.init_db()
    with app_db.SessionLocal() as db:
        yield db
    assert app_db.engine is not None
    app_db.engine.dispose()
