"""Server-rendered dashboard page."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from job_tracker.dependencies import get_store
from job_tracker.services.application_service import ApplicationStore
from job_tracker.services.render_service import render_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def dashboard(
    q: str = "",
    status_filter: str = Query("", alias="status"),
    store: ApplicationStore = Depends(get_store),
) -> HTMLResponse:
    return HTMLResponse(render_dashboard(store, q, status_filter))
