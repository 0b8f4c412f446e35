"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finance_calendar.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finance_calendar.api.v1 import cards, highlights, notifications, records
from finance_calendar.config import settings
from finance_calendar.infrastructure.database.models import Base
from finance_calendar.infrastructure.database.session import engine
from finance_calendar.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Single-table schema; no migrations
    Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    """Build the API with tracing middleware, health and metrics endpoints and v1 routers"""
    app = FastAPI(
        title="Finance Calendar",
        description="Personal finance records, card rules and calendar highlights",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Last added runs first, so every request has an ID before metrics see it
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for router, tag in (
        (highlights.router, "calendar"),
        (cards.router, "cards"),
        (notifications.router, "notifications"),
        (records.router, "records"),
    ):
        app.include_router(router, prefix="/v1", tags=[tag])

    return app


app = create_app()
