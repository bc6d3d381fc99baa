"""
Candidate Selection Logic.

Responsibilities:
- Select a bounded set of existing entries to compare against.
- Apply the only hard filter: same country.

Non-Responsibilities:
- No scoring.
- No similarity computation.
- No duplicate decisions.

Invariant:
The entry being checked is never its own candidate.
"""

from typing import Any, Dict, List, Optional

from ...storage.repositories.entries import CANDIDATE_LIMIT


def select_candidates(
    store, entry: Dict[str, Any], exclude_id: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Fetch up to CANDIDATE_LIMIT entries sharing the entry's country.

    Args:
        store: Record store providing find_by_country
        entry: Entry being checked
        exclude_id: Id to leave out (defaults to the entry's own id)
    """
    if exclude_id is None:
        exclude_id = entry.get("id")
    return store.find_by_country(entry.get("country"), exclude_id=exclude_id, limit=CANDIDATE_LIMIT)
