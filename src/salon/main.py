"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import appointments, cache, extra_charges, health, salons, transactions
from .cache import QueryCache
from .config import settings


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.app_name, root_path="")
    app.state.query_cache = QueryCache(
        ttl_seconds=settings.query_cache_ttl_seconds,
        max_entries=settings.query_cache_max_entries,
    )

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(salons.router, prefix=settings.api_prefix)
    app.include_router(extra_charges.router, prefix=settings.api_prefix)
    app.include_router(appointments.router, prefix=settings.api_prefix)
    app.include_router(transactions.router, prefix=settings.api_prefix)
    app.include_router(cache.router, prefix=settings.api_prefix)
    return app


app = create_app()
