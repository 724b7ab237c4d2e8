"""Application store: the ordered collection of records and its persistence.

The whole collection lives in memory, newest first, and is written back in
full under a single storage key after every mutation.
"""
from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Annotated

import yaml
from pydantic import AfterValidator, TypeAdapter, ValidationError

from job_tracker.config import settings
from job_tracker.models.application import (
    ACTIVE_STATUSES,
    ApplicationFields,
    ApplicationRecord,
    ApplicationStats,
    ApplicationStatus,
)
from job_tracker.storage import KeyValueStorage

logger = logging.getLogger(__name__)


def _unique_ids(records: list[ApplicationRecord]) -> list[ApplicationRecord]:
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"duplicate application id {record.id!r}")
        seen.add(record.id)
    return records


_collection_adapter = TypeAdapter(Annotated[list[ApplicationRecord], AfterValidator(_unique_ids)])


class ApplicationValidationError(ValueError):
    """Raised when a submission is missing required fields or has bad values."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing or invalid fields: {', '.join(fields)}")


def days_since(application_date: date, today: date | None = None) -> str:
    """Human phrase for the distance between a date and today, without sign."""
    today = today or date.today()
    days = abs((today - application_date).days)
    if days == 0:
        return "today"
    if days == 1:
        return "1 day"
    return f"{days} days"


def serialize(records: list[ApplicationRecord]) -> str:
    return _collection_adapter.dump_json(records, by_alias=True).decode()


def deserialize(raw: str) -> list[ApplicationRecord]:
    """Parse a stored collection. Raises ``ValidationError`` on malformed data."""
    return _collection_adapter.validate_json(raw)


def _coerce_fields(fields: ApplicationFields | dict) -> ApplicationFields:
    if isinstance(fields, ApplicationFields):
        return fields
    try:
        return ApplicationFields.model_validate(fields)
    except ValidationError as e:
        bad = []
        for err in e.errors():
            name = str(err["loc"][0]) if err["loc"] else "__root__"
            if name in ApplicationFields.model_fields:
                name = ApplicationFields.model_fields[name].alias or name
            bad.append(name)
        raise ApplicationValidationError(bad) from e


class ApplicationView:
    """Filtered view over the store. Re-evaluated every time it is iterated."""

    def __init__(self, store: ApplicationStore, query: str = "", status_filter: str = "") -> None:
        self._store = store
        self.query = query
        self.status_filter = status_filter

    def __iter__(self) -> Iterator[ApplicationRecord]:
        return (r for r in self._store._records if r.matches(self.query, self.status_filter))

    def __len__(self) -> int:
        return sum(1 for _ in self)


class ApplicationStore:
    def __init__(self, storage: KeyValueStorage, key: str | None = None) -> None:
        self.storage = storage
        self.key = key or settings.storage_key
        self._records: list[ApplicationRecord] = []
        self.editing_id: str | None = None
        self._pending_deletes: dict[str, str] = {}

    @property
    def records(self) -> list[ApplicationRecord]:
        return list(self._records)

    # -- persistence -------------------------------------------------------

    def load(self) -> list[ApplicationRecord]:
        """Replace the in-memory collection with what the medium holds.

        Missing or malformed data yields an empty collection.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            self._records = []
        else:
            try:
                self._records = deserialize(raw)
            except ValidationError as e:
                logger.warning(
                    "Stored applications under %r are malformed, starting empty: %d error(s)",
                    self.key,
                    e.error_count(),
                )
                self._records = []
        self.editing_id = None
        self._pending_deletes.clear()
        logger.info("Loaded %d application(s)", len(self._records))
        return self.records

    def save(self) -> None:
        self.storage.set_item(self.key, serialize(self._records))

    def seed(self, records: list[ApplicationRecord]) -> bool:
        """Write ``records`` when nothing is stored yet. Returns True if seeded."""
        if self.storage.get_item(self.key) is not None:
            return False
        self._records = list(records)
        self.save()
        logger.info("Seeded %d sample application(s)", len(records))
        return True

    # -- lookups -----------------------------------------------------------

    def _index_of(self, application_id: str) -> int | None:
        for i, record in enumerate(self._records):
            if record.id == application_id:
                return i
        return None

    def get(self, application_id: str) -> ApplicationRecord | None:
        index = self._index_of(application_id)
        return None if index is None else self._records[index]

    def filter(self, query: str = "", status_filter: str = "") -> ApplicationView:
        return ApplicationView(self, query or "", status_filter or "")

    def stats(self) -> ApplicationStats:
        return ApplicationStats(
            total=len(self._records),
            active=sum(1 for r in self._records if r.status in ACTIVE_STATUSES),
            interviews=sum(1 for r in self._records if r.status == ApplicationStatus.INTERVIEW),
        )

    # -- mutations ---------------------------------------------------------

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if self._index_of(candidate) is None:
                return candidate

    def create(self, fields: ApplicationFields | dict) -> ApplicationRecord:
        fields = _coerce_fields(fields)
        missing = fields.missing_fields()
        if missing:
            raise ApplicationValidationError(missing)

        record = ApplicationRecord(id=self._new_id(), **fields.model_dump())
        self._records.insert(0, record)
        self.save()
        logger.info("Created application %s (%s at %s)", record.id, record.job_title, record.company_name)
        return record

    def update(self, application_id: str, fields: ApplicationFields | dict) -> ApplicationRecord | None:
        """Overwrite every mutable field of a record. Unknown ids are ignored."""
        index = self._index_of(application_id)
        if index is None:
            logger.debug("Update of unknown application %s ignored", application_id)
            return None

        fields = _coerce_fields(fields)
        missing = fields.missing_fields()
        if missing:
            raise ApplicationValidationError(missing)

        current = self._records[index]
        record = ApplicationRecord(id=current.id, created_at=current.created_at, **fields.model_dump())
        self._records[index] = record
        self.save()
        logger.info("Updated application %s", record.id)
        return record

    def _remove(self, application_id: str) -> bool:
        index = self._index_of(application_id)
        if index is None:
            return False
        del self._records[index]
        if self.editing_id == application_id:
            self.editing_id = None
        self.save()
        logger.info("Deleted application %s", application_id)
        return True

    def delete(self, application_id: str, confirmed: bool = False) -> bool:
        """Remove a record, but only once the user has confirmed."""
        if not confirmed:
            return False
        return self._remove(application_id)

    def request_delete(self, application_id: str) -> str | None:
        """First phase of a delete: returns a token to pass to ``confirm_delete``."""
        if self._index_of(application_id) is None:
            return None
        token = uuid.uuid4().hex
        self._pending_deletes[token] = application_id
        return token

    def confirm_delete(self, token: str) -> bool:
        application_id = self._pending_deletes.pop(token, None)
        if application_id is None:
            return False
        return self._remove(application_id)

    def cancel_delete(self, token: str) -> None:
        self._pending_deletes.pop(token, None)

    # -- form session ------------------------------------------------------

    def begin_create(self, today: date | None = None) -> ApplicationFields:
        """Open a blank form, pre-filled with today's date."""
        self.editing_id = None
        return ApplicationFields(application_date=today or date.today())

    def begin_edit(self, application_id: str) -> ApplicationRecord | None:
        record = self.get(application_id)
        self.editing_id = record.id if record else None
        return record

    def cancel_edit(self) -> None:
        self.editing_id = None

    def submit(self, fields: ApplicationFields | dict) -> ApplicationRecord | None:
        """Save the open form. On validation errors the form stays open."""
        if self.editing_id is not None:
            record = self.update(self.editing_id, fields)
        else:
            record = self.create(fields)
        self.editing_id = None
        return record


def load_sample_records(path: Path | None = None) -> list[ApplicationRecord]:
    """Read the demonstration records shipped with the package."""
    path = path or settings.sample_data_path
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return _collection_adapter.validate_python(data.get("applications", []))
