"""HTML rendering of the dashboard and application cards."""
from __future__ import annotations

from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from job_tracker.models.application import ApplicationCard, ApplicationRecord, ApplicationStatus
from job_tracker.services.application_service import ApplicationStore, days_since

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# User text (company, title, notes, URL) is only ever emitted through autoescaped templates.
env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def status_class(status: ApplicationStatus) -> str:
    return status.value.lower().replace(" ", "-")


def to_card(record: ApplicationRecord, today: date | None = None) -> ApplicationCard:
    return ApplicationCard(
        application=record,
        days_since=days_since(record.application_date, today),
        has_url=record.has_url,
        has_notes=record.has_notes,
        status_class=status_class(record.status),
    )


def build_cards(
    store: ApplicationStore,
    query: str = "",
    status_filter: str = "",
    today: date | None = None,
) -> list[ApplicationCard]:
    return [to_card(r, today) for r in store.filter(query, status_filter)]


def render_dashboard(
    store: ApplicationStore,
    query: str = "",
    status_filter: str = "",
    today: date | None = None,
) -> str:
    template = env.get_template("dashboard.html")
    return template.render(
        stats=store.stats(),
        cards=build_cards(store, query, status_filter, today),
        is_empty=not store.records,
        query=query,
        status_filter=status_filter,
        statuses=[s.value for s in ApplicationStatus],
    )
