"""
Maintenance jobs for already-stored entries.

The batch job re-runs anomaly detection over approved entries and
downgrades those that would no longer be approved. It processes one
entry at a time to keep load on the store bounded.
"""

from typing import Any, Dict, List, Optional

from .database import ReviewStatus, REVIEW_ACTIONS
from .logger import get_logger
from .pipelines.anomaly.detector import AnomalyDetector
from .storage.repositories.entries import RecordStoreError

DEFAULT_BATCH_LIMIT = 100


def batch_analyze_entries(store, limit: int = DEFAULT_BATCH_LIMIT, detector: Optional[AnomalyDetector] = None) -> Dict[str, int]:
    """
    Recompute anomaly results for up to `limit` approved entries.

    Entries whose recomputed status is no longer APPROVED get their quality
    fields overwritten. An entry whose analysis fails is left untouched.

    Args:
        store: Record store (find_approved, list_by_status, update_status)
        limit: Maximum number of approved entries to process
        detector: Detector to use (default: AnomalyDetector over the same store)

    Returns:
        Counts of analyzed, downgraded, skipped and failed entries
    """
    logger = get_logger()
    detector = detector or AnomalyDetector(store, logger=logger)
    entries = store.list_by_status(ReviewStatus.APPROVED, limit=limit)
    logger.debug("Starting batch analysis", limit=limit, entries=len(entries))

    analyzed = downgraded = skipped = failed = 0

    for entry in entries:
        if entry.get("gross_salary") is None:
            skipped += 1
            continue

        try:
            result = detector.analyze(entry)
        except RecordStoreError as e:
            failed += 1
            logger.record_store_error("batch_analyze")
            logger.warning("Batch analysis failed for entry", entry_id=entry["id"], error=str(e))
            continue

        analyzed += 1
        logger.record_analysis(result.review_status, result.is_anomaly)

        if result.review_status != ReviewStatus.APPROVED:
            try:
                store.update_status(entry["id"], result.review_status, result.anomaly_score, result.reason)
            except RecordStoreError as e:
                failed += 1
                logger.record_store_error("batch_update")
                logger.warning("Could not store batch result", entry_id=entry["id"], error=str(e))
                continue
            downgraded += 1
            logger.debug(
                "Entry downgraded",
                entry_id=entry["id"],
                status=result.review_status,
                score=result.anomaly_score,
            )

    logger.info(
        f"Batch analysis complete: {downgraded} downgraded, {analyzed} analyzed",
        analyzed=analyzed,
        downgraded=downgraded,
        skipped=skipped,
        failed=failed,
        limit=limit,
    )
    return {"analyzed": analyzed, "downgraded": downgraded, "skipped": skipped, "failed": failed}


def get_anomaly_stats(store) -> Dict[str, int]:
    """Entry counts per review status plus the total."""
    counts = store.count_by_status()
    return {
        "approved": counts.get(ReviewStatus.APPROVED, 0),
        "pending": counts.get(ReviewStatus.PENDING, 0),
        "needs_review": counts.get(ReviewStatus.NEEDS_REVIEW, 0),
        "rejected": counts.get(ReviewStatus.REJECTED, 0),
        "total": sum(counts.values()),
    }


def get_review_queue(store, review_status: Optional[str] = None) -> List[Dict[str, Any]]:
    """Entries awaiting review, most anomalous first."""
    if review_status is not None and review_status not in ReviewStatus.ALL:
        raise ValueError(f"Unknown review status: {review_status}")
    return store.review_queue(review_status)


def review_entry(store, entry_id: int, action: str, reviewer_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Apply an admin decision to an entry.

    Args:
        store: Record store (record_review)
        entry_id: Entry to review
        action: "approve" or "reject"
        reviewer_id: Admin who made the decision

    Returns:
        The updated entry

    Raises:
        ValueError: If the action is unknown
        LookupError: If no entry has that id
    """
    if action not in REVIEW_ACTIONS:
        raise ValueError(f"Invalid action: {action}. Must be one of: {', '.join(REVIEW_ACTIONS)}")
    entry = store.record_review(entry_id, action, reviewer_id)
    if entry is None:
        raise LookupError(f"Entry not found: {entry_id}")
    get_logger().info("Entry reviewed", entry_id=entry_id, action=action, reviewer_id=reviewer_id)
    return entry
