"""FastAPI application."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routes import health, logs, manual, status, webhook
from paywatch.config import load_config
from paywatch.context import AppContext, build_context

SERVICE_NAME = "Stripe Failed Payment Monitor"


def create_app(context: AppContext | None = None) -> FastAPI:
    context = context or build_context(load_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context.logs.info(f"{SERVICE_NAME} started on port {context.config.server.port}")
        yield

    app = FastAPI(title=SERVICE_NAME, version="0.1.0", lifespan=lifespan)
    app.state.context = context
    app.include_router(status.router)
    app.include_router(health.router)
    app.include_router(logs.router)
    app.include_router(manual.router)
    app.include_router(webhook.router)
    return app


app = create_app()
