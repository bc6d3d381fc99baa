"""
Entries Repository.

Responsibilities:
- Query and update the salary_entries table.
- Translate typed criteria into SQLAlchemy filters.
- Wrap driver failures in RecordStoreError.

Non-Responsibilities:
- No scoring.
- No review decisions.

Invariant:
Repositories must not encode domain decisions.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import desc, or_
from sqlalchemy.exc import SQLAlchemyError

from ...database import SalaryEntry, ReviewStatus, ENTRY_FIELDS, REVIEW_ACTIONS
from ..criteria import Criterion, Equals, NotEquals, Between, IsNotNull

COMPARATOR_LIMIT = 1000
CANDIDATE_LIMIT = 100


class RecordStoreError(Exception):
    """Raised when the entries store cannot be read or written."""
    pass


def _column(field: str):
    if field not in ENTRY_FIELDS:
        raise ValueError(f"Unknown entry field: {field}")
    return getattr(SalaryEntry, field)


def to_filter(criterion: Criterion):
    """Translate one criterion into a SQLAlchemy boolean expression."""
    if isinstance(criterion, Equals):
        return _column(criterion.field) == criterion.value
    if isinstance(criterion, NotEquals):
        return _column(criterion.field) != criterion.value
    if isinstance(criterion, Between):
        return _column(criterion.field).between(criterion.low, criterion.high)
    if isinstance(criterion, IsNotNull):
        return _column(criterion.field).isnot(None)
    raise TypeError(f"Unsupported criterion: {criterion!r}")


class EntryRepository:
    """Record store backed by a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def find_approved(
        self, criteria: Iterable[Criterion] = (), limit: int = COMPARATOR_LIMIT
    ) -> List[Dict[str, Any]]:
        """
        Return approved entries with a gross salary matching all criteria.

        Args:
            criteria: Additional criteria, ANDed together
            limit: Maximum number of entries returned
        """
        filters = [
            SalaryEntry.review_status == ReviewStatus.APPROVED,
            SalaryEntry.gross_salary.isnot(None),
        ]
        filters.extend(to_filter(c) for c in criteria)
        try:
            rows = self.session.query(SalaryEntry).filter(*filters).limit(limit).all()
        except SQLAlchemyError as e:
            raise RecordStoreError(f"find_approved failed: {e}") from e
        return [row.to_dict() for row in rows]

    def find_by_country(
        self,
        country: Optional[str],
        exclude_id: Optional[int] = None,
        limit: int = CANDIDATE_LIMIT,
    ) -> List[Dict[str, Any]]:
        """
        Return up to `limit` entries from the same country (any country if unknown).

        No ordering is applied, so in large countries the result is an
        arbitrary subset.
        """
        query = self.session.query(SalaryEntry)
        if country:
            query = query.filter(SalaryEntry.country == country)
        if exclude_id is not None:
            query = query.filter(SalaryEntry.id != exclude_id)
        try:
            rows = query.limit(limit).all()
        except SQLAlchemyError as e:
            raise RecordStoreError(f"find_by_country failed: {e}") from e
        return [row.to_dict() for row in rows]

    def list_by_status(self, review_status: str, limit: int = CANDIDATE_LIMIT) -> List[Dict[str, Any]]:
        """Return up to `limit` entries with the given review status, oldest id first."""
        try:
            rows = (
                self.session.query(SalaryEntry)
                .filter(SalaryEntry.review_status == review_status)
                .order_by(SalaryEntry.id)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise RecordStoreError(f"list_by_status failed: {e}") from e
        return [row.to_dict() for row in rows]

    def review_queue(self, review_status: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Return entries awaiting review, most anomalous first.

        Without a status, both PENDING and NEEDS_REVIEW entries are returned.
        """
        query = self.session.query(SalaryEntry)
        if review_status is None:
            query = query.filter(
                or_(
                    SalaryEntry.review_status == ReviewStatus.PENDING,
                    SalaryEntry.review_status == ReviewStatus.NEEDS_REVIEW,
                )
            )
        else:
            query = query.filter(SalaryEntry.review_status == review_status)
        query = query.order_by(desc(SalaryEntry.anomaly_score), desc(SalaryEntry.created_at))
        try:
            rows = query.all()
        except SQLAlchemyError as e:
            raise RecordStoreError(f"review_queue failed: {e}") from e
        return [row.to_dict() for row in rows]

    def count_by_status(self) -> Dict[str, int]:
        """Return the number of entries per review status."""
        counts = {status: 0 for status in ReviewStatus.ALL}
        try:
            for status in ReviewStatus.ALL:
                counts[status] = (
                    self.session.query(SalaryEntry)
                    .filter(SalaryEntry.review_status == status)
                    .count()
                )
        except SQLAlchemyError as e:
            raise RecordStoreError(f"count_by_status failed: {e}") from e
        return counts

    def add(self, entry: Dict[str, Any]) -> int:
        """Persist an entry dict and return its id. Unknown keys are ignored."""
        values = {k: v for k, v in entry.items() if k in ENTRY_FIELDS and k != "id"}
        row = SalaryEntry(**values)
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RecordStoreError(f"add failed: {e}") from e
        return row.id

    def update_status(
        self,
        entry_id: int,
        review_status: str,
        anomaly_score: Optional[float],
        anomaly_reason: Optional[str],
    ) -> bool:
        """
        Overwrite the quality fields of an entry.

        Returns:
            False if no entry has that id
        """
        if review_status not in ReviewStatus.ALL:
            raise ValueError(f"Unknown review status: {review_status}")
        try:
            row = self.session.get(SalaryEntry, entry_id)
            if row is None:
                return False
            row.review_status = review_status
            row.anomaly_score = anomaly_score
            row.anomaly_reason = anomaly_reason
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RecordStoreError(f"update_status failed: {e}") from e
        return True

    def record_review(
        self,
        entry_id: int,
        action: str,
        reviewer_id: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Store an admin decision: approve sets APPROVED, reject sets REJECTED.

        The reviewer and the review time are stamped on the entry.

        Returns:
            The updated entry, or None if no entry has that id
        """
        if action not in REVIEW_ACTIONS:
            raise ValueError(f"Unknown review action: {action}")
        try:
            row = self.session.get(SalaryEntry, entry_id)
            if row is None:
                return None
            row.review_status = REVIEW_ACTIONS[action]
            row.reviewed_by = reviewer_id
            row.reviewed_at = datetime.now()
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise RecordStoreError(f"record_review failed: {e}") from e
        return row.to_dict()
