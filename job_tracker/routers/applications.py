"""Application REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from job_tracker.dependencies import get_store
from job_tracker.models.application import (
    ApplicationCard,
    ApplicationFields,
    ApplicationRecord,
    ApplicationStats,
)
from job_tracker.services.application_service import ApplicationStore, ApplicationValidationError
from job_tracker.services.render_service import build_cards

router = APIRouter(prefix="/api", tags=["applications"])


class DeleteRequest(BaseModel):
    token: str | None


class DeleteResult(BaseModel):
    deleted: bool


def validation_failed(e: ApplicationValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": str(e), "fields": e.fields},
    )


@router.get("/applications", response_model=list[ApplicationCard])
async def list_applications(
    q: str = "",
    status_filter: str = Query("", alias="status"),
    store: ApplicationStore = Depends(get_store),
) -> list[ApplicationCard]:
    return build_cards(store, q, status_filter)


@router.get("/applications/{application_id}", response_model=ApplicationRecord)
async def get_application(application_id: str, store: ApplicationStore = Depends(get_store)) -> ApplicationRecord:
    record = store.get(application_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Application {application_id} not found")
    return record


@router.post("/applications", response_model=ApplicationRecord, status_code=status.HTTP_201_CREATED)
async def create_application(
    fields: ApplicationFields,
    store: ApplicationStore = Depends(get_store),
) -> ApplicationRecord:
    try:
        return store.create(fields)
    except ApplicationValidationError as e:
        raise validation_failed(e)


@router.put("/applications/{application_id}", response_model=ApplicationRecord)
async def update_application(
    application_id: str,
    fields: ApplicationFields,
    store: ApplicationStore = Depends(get_store),
):
    try:
        record = store.update(application_id, fields)
    except ApplicationValidationError as e:
        raise validation_failed(e)
    if record is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return record


@router.post("/applications/{application_id}/delete-request", response_model=DeleteRequest)
async def request_delete(application_id: str, store: ApplicationStore = Depends(get_store)) -> DeleteRequest:
    return DeleteRequest(token=store.request_delete(application_id))


@router.post("/deletions/{token}/confirm", response_model=DeleteResult)
async def confirm_delete(token: str, store: ApplicationStore = Depends(get_store)) -> DeleteResult:
    return DeleteResult(deleted=store.confirm_delete(token))


@router.delete("/deletions/{token}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_delete(token: str, store: ApplicationStore = Depends(get_store)) -> None:
    store.cancel_delete(token)


@router.get("/stats", response_model=ApplicationStats)
async def get_stats(store: ApplicationStore = Depends(get_store)) -> ApplicationStats:
    return store.stats()
