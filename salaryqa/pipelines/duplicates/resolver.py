"""
Duplicate Resolution Orchestrator.

Responsibilities:
- Coordinate candidate selection.
- Invoke similarity scoring.
- Apply decision thresholds.
- Return an explainable duplicate verdict.

Non-Responsibilities:
- No SQL.
- No field comparison.
- No mutation of persistent state.

Invariant:
This module must be deterministic given the same inputs.
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from ...logger import get_logger
from ...storage.repositories.entries import RecordStoreError
from .candidate_selector import select_candidates
from .scoring import calculate_similarity

SIMILARITY_THRESHOLD = 90
MIN_MATCHING_FIELDS = 5


@dataclass(frozen=True)
class DuplicateCandidate:
    id: int
    similarity_score: int
    matched_fields: List[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DuplicateResult:
    is_duplicate: bool
    duplicate_entry_id: Optional[int] = None
    similarity_score: int = 0
    match_details: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def rank_candidates(entry: Dict[str, Any], candidates: List[Dict[str, Any]]) -> List[DuplicateCandidate]:
    """Score every candidate, highest score first, ties by lowest id."""
    scored = []
    for candidate in candidates:
        similarity = calculate_similarity(entry, candidate)
        scored.append(
            DuplicateCandidate(
                id=candidate["id"],
                similarity_score=similarity.score,
                matched_fields=list(similarity.matched_fields),
            )
        )
    scored.sort(key=lambda c: (-c.similarity_score, c.id))
    return scored


class DuplicateDetector:
    """
    Finds existing entries that look like reposts of a new entry.

    The store must provide `find_by_country(country, exclude_id, limit)`.
    """

    def __init__(self, store, logger=None):
        self.store = store
        self.logger = logger or get_logger()

    def detect(self, entry: Dict[str, Any], exclude_id: Optional[int] = None) -> DuplicateResult:
        """
        Compare an entry against same-country entries.

        Only candidates matching at least MIN_MATCHING_FIELDS fields are
        ranked. The best one is a duplicate at SIMILARITY_THRESHOLD or above;
        below it, its score and fields are still reported.
        Store failures are logged and reported as "not a duplicate".
        """
        try:
            candidates = select_candidates(self.store, entry, exclude_id)
        except RecordStoreError as e:
            self.logger.error("Duplicate detection failed", entry_id=entry.get("id"), error=str(e))
            self.logger.record_store_error("detect_duplicate")
            return DuplicateResult(is_duplicate=False)

        ranked = [
            c for c in rank_candidates(entry, candidates)
            if len(c.matched_fields) >= MIN_MATCHING_FIELDS
        ]

        if not ranked:
            result = DuplicateResult(is_duplicate=False)
        elif ranked[0].similarity_score >= SIMILARITY_THRESHOLD:
            top = ranked[0]
            result = DuplicateResult(
                is_duplicate=True,
                duplicate_entry_id=top.id,
                similarity_score=top.similarity_score,
                match_details=top.matched_fields,
            )
        else:
            result = DuplicateResult(
                is_duplicate=False,
                similarity_score=ranked[0].similarity_score,
                match_details=ranked[0].matched_fields,
            )

        self.logger.record_duplicate_check(result.is_duplicate)
        self.logger.info(
            "Duplicate check complete",
            entry_id=entry.get("id"),
            candidates=len(candidates),
            qualified=len(ranked),
            duplicate_of=result.duplicate_entry_id,
            score=result.similarity_score,
        )
        return result

    def find_all(self, entry: Dict[str, Any]) -> List[DuplicateCandidate]:
        """Return every candidate scoring at or above SIMILARITY_THRESHOLD."""
        try:
            candidates = select_candidates(self.store, entry)
        except RecordStoreError as e:
            self.logger.error("Duplicate listing failed", entry_id=entry.get("id"), error=str(e))
            self.logger.record_store_error("find_all_duplicates")
            return []

        return [
            c for c in rank_candidates(entry, candidates)
            if c.similarity_score >= SIMILARITY_THRESHOLD
        ]


def detect_duplicate(entry: Dict[str, Any], store, exclude_id: Optional[int] = None, logger=None) -> DuplicateResult:
    """Convenience wrapper around DuplicateDetector(store).detect(entry)."""
    return DuplicateDetector(store, logger=logger).detect(entry, exclude_id=exclude_id)


def find_all_duplicates(entry: Dict[str, Any], store, logger=None) -> List[DuplicateCandidate]:
    """Convenience wrapper around DuplicateDetector(store).find_all(entry)."""
    return DuplicateDetector(store, logger=logger).find_all(entry)
