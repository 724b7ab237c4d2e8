"""
Shared fixtures for tracker tests.

Every fixture works against in-memory storage so nothing touches the
real data directory.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from job_tracker.main import create_app
from job_tracker.services.application_service import ApplicationStore
from job_tracker.storage import MemoryStorage

KEY = "jobApplications"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    s = ApplicationStore(storage, key=KEY)
    s.load()
    return s


@pytest.fixture
def make_fields():
    """Build a valid form payload, overriding any field by its wire name."""

    def _make(**overrides):
        fields = {
            "companyName": "Acme",
            "jobTitle": "Backend Engineer",
            "jobUrl": "https://acme.example/jobs/1",
            "applicationDate": "2024-03-01",
            "status": "Applied",
            "notes": "Referred by a friend",
        }
        fields.update(overrides)
        return fields

    return _make


@pytest.fixture
def populated_store(store, make_fields):
    """Three records; iteration order is newest first: Gamma, Beta, Alpha."""
    store.create(make_fields(companyName="Alpha", jobTitle="Data Analyst", status="Rejected", notes=""))
    store.create(make_fields(companyName="Beta", jobTitle="Platform Engineer", status="Applied"))
    store.create(make_fields(companyName="Gamma", jobTitle="SRE", status="Interview", notes="Onsite next week"))
    return store


@pytest.fixture
def client(storage):
    """Test client whose app persists into the shared in-memory storage."""
    app = create_app(storage)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def today():
    return date(2024, 3, 10)
