"""
Tests for database.py - SQLite database operations.
"""

import pytest
from datetime import datetime, timedelta

from salaryqa.database import SalaryEntry, ReviewStatus, init_database, get_session


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        """Test that init_database creates the salary_entries table."""
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        result = session.query(SalaryEntry).count()
        assert result == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that init_database creates parent directories if missing."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_is_idempotent(self, tmp_path):
        """Running init twice keeps existing rows."""
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)
        session.add(SalaryEntry(country="Belgium", gross_salary=4000.0))
        session.commit()
        session.close()

        init_database(db_path)

        session = get_session(db_path)
        assert session.query(SalaryEntry).count() == 1
        session.close()


class TestSalaryEntryModel:
    """Test the SalaryEntry model."""

    def test_defaults_on_insert(self, db_session):
        """New entries are approved, in EUR, with a creation timestamp."""
        before = datetime.now()
        entry = SalaryEntry(country="Belgium", gross_salary=4000.0)
        db_session.add(entry)
        db_session.commit()
        after = datetime.now()

        saved = db_session.query(SalaryEntry).first()
        assert saved.review_status == ReviewStatus.APPROVED
        assert saved.currency == "EUR"
        assert saved.anomaly_score is None
        assert before <= saved.created_at <= after

    def test_ids_are_assigned(self, db_session):
        """Autoincrement ids are assigned on commit."""
        first = SalaryEntry(country="Belgium")
        second = SalaryEntry(country="France")
        db_session.add_all([first, second])
        db_session.commit()

        assert first.id is not None
        assert second.id is not None
        assert first.id != second.id

    def test_to_dict_has_every_column(self, db_session):
        """to_dict exposes all columns by name."""
        entry = SalaryEntry(country="Belgium", job_title="Nurse", multinational=False)
        db_session.add(entry)
        db_session.commit()

        data = entry.to_dict()
        assert data["country"] == "Belgium"
        assert data["job_title"] == "Nurse"
        assert data["multinational"] is False
        assert data["gross_salary"] is None
        assert set(data) == {c.name for c in SalaryEntry.__table__.columns}

    def test_query_by_review_status(self, db_session):
        """Entries can be filtered by review status."""
        db_session.add(SalaryEntry(country="Belgium", review_status=ReviewStatus.APPROVED))
        db_session.add(SalaryEntry(country="Belgium", review_status=ReviewStatus.NEEDS_REVIEW))
        db_session.commit()

        flagged = db_session.query(SalaryEntry).filter_by(review_status=ReviewStatus.NEEDS_REVIEW).all()
        assert len(flagged) == 1

    def test_query_by_date_range(self, db_session):
        """Entries can be filtered by creation date."""
        now = datetime.now()
        db_session.add(SalaryEntry(country="Belgium", created_at=now - timedelta(days=10)))
        db_session.add(SalaryEntry(country="Belgium", created_at=now))
        db_session.commit()

        cutoff = now - timedelta(days=5)
        recent = db_session.query(SalaryEntry).filter(SalaryEntry.created_at >= cutoff).all()
        assert len(recent) == 1


class TestReviewStatus:
    """Test review status constants."""

    def test_all_statuses(self):
        assert set(ReviewStatus.ALL) == {"APPROVED", "PENDING", "REJECTED", "NEEDS_REVIEW"}

    @pytest.mark.parametrize("status", ["APPROVED", "PENDING", "REJECTED", "NEEDS_REVIEW"])
    def test_status_roundtrip(self, db_session, status):
        db_session.add(SalaryEntry(country="Belgium", review_status=status))
        db_session.commit()
        assert db_session.query(SalaryEntry).first().review_status == status
