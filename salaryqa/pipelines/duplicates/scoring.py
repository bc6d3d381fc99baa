"""
Similarity Scoring for Duplicate Detection.

Responsibilities:
- Compute a deterministic weighted match score between two entries.
- Report which fields matched.

Non-Responsibilities:
- No database access.
- No candidate selection.
- No threshold decisions.

Invariant:
Given identical inputs, this module must always return
the same score and matched fields.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .features import is_field_match

FIELD_WEIGHTS: Dict[str, int] = {
    # Core identifiers
    "gross_salary": 20,
    "job_title": 15,
    "work_city": 15,
    "sector": 10,
    # Medium
    "age": 8,
    "education": 7,
    "seniority": 7,
    "net_salary": 7,
    # Low
    "work_experience": 5,
    "employee_count": 4,
    "official_hours": 3,
    "vacation_days": 3,
    "telework_days": 3,
    "meal_vouchers": 2,
    "eco_cheques": 2,
}


@dataclass(frozen=True)
class Similarity:
    score: int
    matched_fields: Tuple[str, ...]
    compared_weight: int


def calculate_similarity(left: Dict[str, Any], right: Dict[str, Any]) -> Similarity:
    """
    Weighted percentage of matching fields between two entries.

    A field counts only when both sides have a value, so missing
    data lowers neither the numerator nor the denominator.
    """
    total_weight = 0
    matched_weight = 0
    matched = []

    for field, weight in FIELD_WEIGHTS.items():
        a = left.get(field)
        b = right.get(field)
        if a is None or b is None:
            continue

        total_weight += weight
        if is_field_match(field, a, b):
            matched_weight += weight
            matched.append(field)

    # Half-up rounding
    score = math.floor(matched_weight / total_weight * 100 + 0.5) if total_weight > 0 else 0
    return Similarity(
        score=min(max(score, 0), 100),
        matched_fields=tuple(matched),
        compared_weight=total_weight,
    )
