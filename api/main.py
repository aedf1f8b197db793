"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Kompiluje gramatykę i tworzy silnik Mathex (raz, współdzielony)
  - Nie trzyma zasobów zewnętrznych — przy zamknięciu nie ma czego zwalniać
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adapters.function_registry.math_registry import MathFunctionRegistry
from api.routers import evaluate, functions
from api.schemas import HealthResponse
from config import Settings
from engine import Mathex

logger = logging.getLogger("mathex.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Silnik bezstanowy — tworzony raz
    app.state.function_registry = MathFunctionRegistry()
    app.state.engine = Mathex(settings=settings)

    logger.info("Mathex API ready (epsilon=%g, max_nesting_depth=%d).",
                settings.epsilon, settings.max_nesting_depth)
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)
    app.include_router(functions.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    return app


app = create_app()
