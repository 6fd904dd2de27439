from __future__ import annotations

import logging

from fastapi import FastAPI

from apps.api.db.base import Base
from apps.api.db.session import engine
from apps.api.routers import health, pdf_files
from packages.common.config import get_settings
from packages.common.logging import setup_json_logging


def create_app() -> FastAPI:
    settings = get_settings()
    setup_json_logging(settings.log_level)
    app = FastAPI(title=f"{settings.app_name} metadata API")

    # Tables
    Base.metadata.create_all(bind=engine)

    # Routers
    app.include_router(health.router)
    app.include_router(pdf_files.router)

    logging.getLogger(__name__).info("api_started", extra={"environment": settings.environment})
    return app


app = create_app()
