"""
Anomaly Detection Orchestrator.

Responsibilities:
- Walk comparison groups from strict to loose until one has enough data.
- Profile the chosen sample and score the entry's gross salary.
- Map the score to a review status.

Non-Responsibilities:
- No persistence of the result (the caller writes the status).
- No SQL.

Invariant:
The narrowest comparison group with an adequate sample always wins.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from ...database import ReviewStatus
from ...logger import get_logger
from ...storage.repositories.entries import COMPARATOR_LIMIT, RecordStoreError
from .comparison_groups import ComparisonGroup, iter_comparison_groups
from .profile import build_profile
from .scoring import ANOMALY_THRESHOLD, score_salary

NEEDS_REVIEW_THRESHOLD = 70

INSUFFICIENT_DATA_REASON = "Insufficient comparable data for analysis"
NO_SALARY_DATA_REASON = "No salary data in comparison group"


@dataclass(frozen=True)
class AnomalyResult:
    is_anomaly: bool
    anomaly_score: int
    reason: str
    review_status: str
    comparison_group: str
    sample_size: int

    def to_dict(self) -> dict:
        return asdict(self)


def classify_review_status(score: int) -> str:
    """Below 30 is approved, 70 and above needs review, anything between is pending."""
    if score < ANOMALY_THRESHOLD:
        return ReviewStatus.APPROVED
    if score >= NEEDS_REVIEW_THRESHOLD:
        return ReviewStatus.NEEDS_REVIEW
    return ReviewStatus.PENDING


def _unscored(reason: str, group: str, sample_size: int) -> AnomalyResult:
    return AnomalyResult(
        is_anomaly=False,
        anomaly_score=0,
        reason=reason,
        review_status=ReviewStatus.NEEDS_REVIEW,
        comparison_group=group,
        sample_size=sample_size,
    )


class AnomalyDetector:
    """
    Flags salary entries that are statistical outliers among comparable entries.

    The store must provide `find_approved(criteria, limit)` returning entry dicts.
    """

    def __init__(self, store, logger=None):
        self.store = store
        self.logger = logger or get_logger()

    def _fetch(self, group: ComparisonGroup) -> List[Dict[str, Any]]:
        return self.store.find_approved(group.criteria, limit=COMPARATOR_LIMIT)

    def analyze(self, entry: Dict[str, Any]) -> AnomalyResult:
        """
        Analyze an entry, letting store failures propagate.

        Raises:
            ValueError: If the entry has no gross salary
            RecordStoreError: If comparison entries cannot be fetched
        """
        salary = entry.get("gross_salary")
        if salary is None:
            raise ValueError("Entry has no gross salary to analyze")

        group = None
        rows: List[Dict[str, Any]] = []
        salaries: List[float] = []
        for group, min_sample in iter_comparison_groups(entry):
            rows = self._fetch(group)
            salaries = [r["gross_salary"] for r in rows if r.get("gross_salary") is not None]
            self.logger.debug(
                "Comparison group fetched",
                level=group.level,
                group=group.description,
                entries=len(rows),
                salaries=len(salaries),
            )
            if len(salaries) >= min_sample:
                break
        else:
            if rows and not salaries:
                return _unscored(NO_SALARY_DATA_REASON, group.description, 0)
            return _unscored(INSUFFICIENT_DATA_REASON, group.description, len(salaries))

        profile = build_profile(salaries)
        scored = score_salary(salary, profile)
        return AnomalyResult(
            is_anomaly=scored.is_anomaly,
            anomaly_score=scored.score,
            reason=scored.reason,
            review_status=classify_review_status(scored.score),
            comparison_group=group.description,
            sample_size=profile.count,
        )

    def detect(self, entry: Dict[str, Any]) -> AnomalyResult:
        """
        Analyze an entry for the submission path.

        Store failures are logged and turned into an unscored NEEDS_REVIEW
        result so the entry is routed to a human instead of auto-approved.
        """
        try:
            result = self.analyze(entry)
        except RecordStoreError as e:
            self.logger.error("Anomaly detection failed", entry_id=entry.get("id"), error=str(e))
            self.logger.record_store_error("detect_anomaly")
            return _unscored(f"Comparison data unavailable: {e}", "Unavailable", 0)

        self.logger.record_analysis(result.review_status, result.is_anomaly)
        self.logger.info(
            "Anomaly analysis complete",
            entry_id=entry.get("id"),
            score=result.anomaly_score,
            status=result.review_status,
            group=result.comparison_group,
            sample_size=result.sample_size,
        )
        return result


def detect_anomaly(entry: Dict[str, Any], store, logger=None) -> AnomalyResult:
    """Convenience wrapper around AnomalyDetector(store).detect(entry)."""
    return AnomalyDetector(store, logger=logger).detect(entry)
