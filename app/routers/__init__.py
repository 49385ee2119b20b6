from app.routers import api, reports, risks

__all__ = [
    "api",
    "reports",
    "risks",
]
