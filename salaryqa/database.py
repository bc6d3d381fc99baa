"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for salary entry storage.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, Integer, String, Float, Boolean, DateTime, Index
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class ReviewStatus:
    """Review states an entry can be in."""

    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"
    NEEDS_REVIEW = "NEEDS_REVIEW"

    ALL = (APPROVED, PENDING, REJECTED, NEEDS_REVIEW)


# Admin decisions and the status each one sets
REVIEW_ACTIONS = {
    "approve": ReviewStatus.APPROVED,
    "reject": ReviewStatus.REJECTED,
}


class SalaryEntry(Base):
    """Salary entry model."""

    __tablename__ = "salary_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    # Personal
    country = Column(String)
    age = Column(Integer)
    education = Column(String)
    work_experience = Column(Integer)
    civil_status = Column(String)
    dependents = Column(Integer)

    # Employer
    sector = Column(String)
    employee_count = Column(String)
    multinational = Column(Boolean)

    # Job
    job_title = Column(String)
    seniority = Column(Integer)
    official_hours = Column(Integer)
    average_hours = Column(Integer)
    vacation_days = Column(Integer)

    # Compensation
    currency = Column(String, default="EUR")
    gross_salary = Column(Float)
    net_salary = Column(Float)
    net_compensation = Column(Float)
    meal_vouchers = Column(Float)
    eco_cheques = Column(Float)

    # Commute / work-life
    work_city = Column(String)
    telework_days = Column(Integer)
    reports = Column(Integer)

    source = Column(String)  # manual, reddit
    source_url = Column(String)

    # Quality assurance
    review_status = Column(String, nullable=False, default=ReviewStatus.APPROVED)
    anomaly_score = Column(Float)
    anomaly_reason = Column(String)
    reviewed_by = Column(Integer)
    reviewed_at = Column(DateTime)

    __table_args__ = (
        Index("ix_salary_entries_review_status", "review_status"),
        Index("ix_salary_entries_country", "country"),
    )

    def to_dict(self) -> dict:
        """Return the entry as a plain dict keyed by column name."""
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}


ENTRY_FIELDS = tuple(column.name for column in SalaryEntry.__table__.columns)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
