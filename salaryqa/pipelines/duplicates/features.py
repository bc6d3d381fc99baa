"""
Field Comparison for Duplicate Detection.

Responsibilities:
- Decide whether two values of the same field match.
- Normalize strings and compare them exactly or fuzzily.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.
- No persistence.

Invariant:
Missing data must never be treated as a mismatch.
"""

from typing import Any

from rapidfuzz.distance import Levenshtein

from ...normalize import normalize_text

SALARY_FIELDS = {"gross_salary", "net_salary", "net_compensation"}
FUZZY_FIELDS = {"job_title", "education"}

SALARY_TOLERANCE = 0.05
FUZZY_THRESHOLD = 0.8


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def string_similarity(a: str, b: str) -> float:
    """1 - Levenshtein distance / length of the longer string."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - Levenshtein.distance(a, b)) / longest


def salaries_match(a: float, b: float) -> bool:
    """Relative difference against the larger value, 5% inclusive."""
    larger = max(a, b)
    if larger <= 0:
        return a == b
    return abs(a - b) / larger <= SALARY_TOLERANCE


def is_field_match(field: str, a: Any, b: Any) -> bool:
    """Compare two non-null values of the same field."""
    if isinstance(a, bool) and isinstance(b, bool):
        return a == b

    if is_number(a) and is_number(b):
        if field in SALARY_FIELDS:
            return salaries_match(a, b)
        return a == b

    if isinstance(a, str) and isinstance(b, str):
        left = normalize_text(a)
        right = normalize_text(b)
        if left == right:
            return True
        if field in FUZZY_FIELDS:
            return string_similarity(left, right) > FUZZY_THRESHOLD
        return False

    # Mixed types never match
    return False
