from __future__ import annotations

from fastapi import Request

from job_tracker.services.application_service import ApplicationStore


def get_store(request: Request) -> ApplicationStore:
    """The single store created at startup."""
    return request.app.state.store
