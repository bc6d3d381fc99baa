"""
Pytest configuration and shared fixtures.
"""

import os

# Keep test runs from writing log files into the working directory
os.environ.setdefault("SALARYQA_LOG_TO_FILE", "false")

import pytest
from pathlib import Path
from typing import Any, Dict

from salaryqa.database import init_database, get_session, ReviewStatus
from salaryqa.logger import get_logger, reset_logger
from salaryqa.storage.repositories.entries import EntryRepository, RecordStoreError


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Create an empty database and return its path."""
    path = tmp_path / "test.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on the temporary database."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def store(db_session) -> EntryRepository:
    """Entry repository on the temporary database."""
    return EntryRepository(db_session)


@pytest.fixture
def full_entry() -> Dict[str, Any]:
    """Entry with every similarity field filled in."""
    return {
        "country": "Belgium",
        "sector": "Technology",
        "age": 30,
        "education": "Master",
        "work_experience": 7,
        "civil_status": "Single",
        "dependents": 0,
        "employee_count": "1000+",
        "multinational": True,
        "job_title": "Software Engineer",
        "seniority": 3,
        "official_hours": 38,
        "average_hours": 40,
        "vacation_days": 20,
        "currency": "EUR",
        "gross_salary": 4500.0,
        "net_salary": 2800.0,
        "net_compensation": 3000.0,
        "meal_vouchers": 8.0,
        "eco_cheques": 250.0,
        "work_city": "Brussels",
        "telework_days": 2,
        "reports": 0,
    }


def seed_cohort(store, count: int = 40, low: float = 3900.0, high: float = 4500.0, **fields) -> list:
    """
    Store `count` approved entries split evenly between two salaries.

    With the defaults the sample has mean 4200 and population std 300.
    """
    ids = []
    for i in range(count):
        entry = {
            "country": "Belgium",
            "sector": "Technology",
            "gross_salary": low if i % 2 == 0 else high,
            "review_status": ReviewStatus.APPROVED,
        }
        entry.update(fields)
        ids.append(store.add(entry))
    return ids


@pytest.fixture
def cohort(store) -> list:
    """40 approved Belgium/Technology entries with mean 4200, std 300."""
    return seed_cohort(store)


class FailingStore:
    """Record store whose every read fails."""

    def find_approved(self, criteria=(), limit=1000):
        raise RecordStoreError("find_approved failed: database is locked")

    def find_by_country(self, country, exclude_id=None, limit=100):
        raise RecordStoreError("find_by_country failed: database is locked")


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def seed(store):
    """Return a helper that stores a two-valued cohort (see seed_cohort)."""
    def _seed(**kwargs):
        return seed_cohort(store, **kwargs)
    return _seed


@pytest.fixture(autouse=True)
def quiet_logger():
    """Global logger without console output, fresh metrics per test."""
    reset_logger()
    yield get_logger(enable_console=False, enable_file=False)
    reset_logger()
