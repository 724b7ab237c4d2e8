from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


ACTIVE_STATUSES = frozenset({ApplicationStatus.APPLIED, ApplicationStatus.INTERVIEW})

LINK_SCHEMES = ("http://", "https://")


def is_web_link(url: str) -> bool:
    return url.lower().startswith(LINK_SCHEMES)


class _WireModel(BaseModel):
    """Base for models stored and exchanged under their camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicationFields(_WireModel):
    """The mutable part of a record, as submitted from the form.

    Every field is optional here so that a blank form can be reported field by
    field; required-ness is checked by the store.
    """

    company_name: str = ""
    job_title: str = ""
    job_url: str = ""
    application_date: date | None = None
    status: ApplicationStatus | None = None
    notes: str = ""

    @field_validator("company_name", "job_title", "job_url", "notes", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("job_url")
    @classmethod
    def _web_link_only(cls, value: str) -> str:
        if value and not is_web_link(value):
            raise ValueError("job URL must start with http:// or https://")
        return value

    @field_validator("application_date", "status", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_fields(self) -> list[str]:
        """Wire names of required fields that are blank."""
        missing = []
        if not self.company_name:
            missing.append("companyName")
        if not self.job_title:
            missing.append("jobTitle")
        if self.application_date is None:
            missing.append("applicationDate")
        if self.status is None:
            missing.append("status")
        return missing


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ApplicationRecord(_WireModel):
    id: str
    company_name: str = Field(min_length=1)
    job_title: str = Field(min_length=1)
    job_url: str = ""
    application_date: date
    status: ApplicationStatus
    notes: str = ""
    created_at: str = Field(default_factory=_utc_now)

    @property
    def has_url(self) -> bool:
        # Stored data may predate the scheme check on input
        return is_web_link(self.job_url)

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    def matches(self, query: str, status_filter: str) -> bool:
        """Case-insensitive search over company, title and notes, ANDed with exact status."""
        if query:
            needle = query.lower()
            haystacks = (self.company_name, self.job_title, self.notes)
            if not any(needle in text.lower() for text in haystacks):
                return False
        if status_filter and self.status.value != status_filter:
            return False
        return True


class ApplicationStats(BaseModel):
    total: int = 0
    active: int = 0
    interviews: int = 0


class ApplicationCard(_WireModel):
    """Everything the renderer needs to draw one card."""

    application: ApplicationRecord
    days_since: str
    has_url: bool
    has_notes: bool
    status_class: str
