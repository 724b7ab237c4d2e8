"""Add/edit form session endpoints.

The form is either creating a new record or editing the one named by the
store's ``editing_id``; ``submit`` saves into whichever is open.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from job_tracker.dependencies import get_store
from job_tracker.models.application import ApplicationFields, ApplicationRecord
from job_tracker.routers.applications import validation_failed
from job_tracker.services.application_service import ApplicationStore, ApplicationValidationError

router = APIRouter(prefix="/api/form", tags=["form"])


class FormState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    editing_id: str | None = None
    fields: ApplicationFields


@router.post("/new", response_model=FormState)
async def open_new(store: ApplicationStore = Depends(get_store)) -> FormState:
    return FormState(title="Add Application", fields=store.begin_create())


@router.post("/edit/{application_id}", response_model=FormState)
async def open_edit(application_id: str, store: ApplicationStore = Depends(get_store)) -> FormState:
    record = store.begin_edit(application_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Application {application_id} not found")
    fields = ApplicationFields.model_validate(record.model_dump(exclude={"id", "created_at"}))
    return FormState(title="Edit Application", editing_id=record.id, fields=fields)


@router.post("/submit", response_model=ApplicationRecord | None)
async def submit_form(
    fields: ApplicationFields,
    store: ApplicationStore = Depends(get_store),
) -> ApplicationRecord | None:
    try:
        return store.submit(fields)
    except ApplicationValidationError as e:
        raise validation_failed(e)


@router.post("/cancel", status_code=204)
async def cancel_form(store: ApplicationStore = Depends(get_store)) -> None:
    store.cancel_edit()
