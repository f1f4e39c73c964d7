"""
Entry point for the Rakshak portal backend.

This module creates the FastAPI application, includes all API routers,
installs CORS and the error envelope, and prepares the database on
startup. Run with:

    uvicorn rakshak.main:app --reload

"""

from __future__ import annotations

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.db import engine, SessionLocal, ping_database
from .models import Base
from .services.auth_seed import seed_admin_user
from .scripts.run_migrations import run_migrations_to_head

from .api import api_router
from .core.config import settings, get_app_env, env_flag
from .core.errors import log_exception, register_exception_handlers
from .core.logging_config import setup_logging


def create_app() -> FastAPI:
    setup_logging(settings.log_level, log_file=settings.log_file or None)
    app = FastAPI(title="Rakshak Portal API", version="0.1.0")
    origins = settings.cors_origin_list()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    def _init_db() -> None:
        logger = logging.getLogger("startup")
        env = get_app_env()
        try:
            ping_database()
            logger.info("Database connected successfully")
        except Exception as exc:
            log_exception(logger, "Database connection failed", exc=exc)
            if env == "prod":
                raise
            return
        if env_flag("AUTO_CREATE_DB", "true"):
            try:
                Base.metadata.create_all(bind=engine)
            except Exception as exc:
                log_exception(logger, "DB create_all failed", exc=exc)
                if env == "prod":
                    raise
        if env_flag("AUTO_RUN_MIGRATIONS", "true"):
            try:
                run_migrations_to_head(keep_app_logging=True)
            except Exception as exc:
                log_exception(logger, "DB migrations failed", exc=exc)
                if env == "prod":
                    raise
        if env_flag("AUTO_SEED_ADMIN_USER", "true"):
            try:
                with SessionLocal() as db:
                    seed_admin_user(db)
            except Exception as exc:
                log_exception(logger, "Seed admin user failed", exc=exc)
                if env == "prod":
                    raise
        logger.info("Rakshak Portal API ready env=%s port=%s", env, settings.port)

    return app


app = create_app()
