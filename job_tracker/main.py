"""FastAPI entry point for the job application tracker."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from job_tracker.config import settings
from job_tracker.routers import applications, dashboard, form
from job_tracker.services.application_service import ApplicationStore, load_sample_records
from job_tracker.storage import JsonFileStorage, KeyValueStorage

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(storage: KeyValueStorage | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting job tracker on %s:%d", settings.host, settings.port)
        store = ApplicationStore(storage if storage is not None else JsonFileStorage())
        if settings.seed_sample_data:
            store.seed(load_sample_records())
        store.load()
        app.state.store = store

        yield

        # Shutdown
        logger.info("Job tracker stopped (%d application(s) stored)", store.stats().total)

    app = FastAPI(
        title="Job Application Tracker",
        description="Track job applications in a local key-value store",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register routers
    app.include_router(dashboard.router)
    app.include_router(applications.router)
    app.include_router(form.router)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "applications": app.state.store.stats().total}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "job_tracker.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
