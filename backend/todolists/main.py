"""todolists API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map TodoError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Stores and services built once per app in create_app() and kept on app.state

Design Decisions:
    - Application factory over a bare module-level app: tests build isolated apps with
      their own stores, the module-level `app` serves `uvicorn todolists.main:app`
    - Lifespan configures logging and empties the non-durable stores on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todolists.api.error_handlers import register_error_handlers
from todolists.api.routes import auth, health, tasks, todo_lists
from todolists.config import Settings, get_settings
from todolists.infrastructure.observability import setup_logging
from todolists.services.container import Services, build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info("todolists API started")
    yield
    app.state.services.clear()
    logger.info("todolists API shutting down")


def create_app(
    settings: Settings | None = None, services: Services | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="todolists API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.services = services or build_services(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration (ExMA: no convention-over-config)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(todo_lists.router)
    app.include_router(tasks.router)

    register_error_handlers(app)
    return app


app = create_app()
