"""
Comparison Group Construction.

Responsibilities:
- Build the criteria and a readable description for each specificity level.
- Yield levels from most to least specific.

Non-Responsibilities:
- No database access.
- No statistics.

Invariant:
Every group is scoped to approved entries with a gross salary,
excludes the entry itself, and has a non-empty description.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from ...database import ReviewStatus
from ...storage.criteria import Criterion, Equals, NotEquals, Between, IsNotNull

STRICT = "strict"
MODERATE = "moderate"
LOOSE = "loose"

# (level, minimum sample size for the level to be accepted)
LEVELS: Tuple[Tuple[str, int], ...] = (
    (STRICT, 30),
    (MODERATE, 15),
    (LOOSE, 5),
)

STRICT_EXPERIENCE_RANGE = 3
STRICT_AGE_RANGE = 5
MODERATE_EXPERIENCE_RANGE = 5

GENERAL_COMPARISON = "General comparison"


@dataclass(frozen=True)
class ComparisonGroup:
    level: str
    criteria: Tuple[Criterion, ...]
    description: str


def _has(entry: Dict[str, Any], field: str) -> bool:
    return entry.get(field) is not None


def _experience_window(entry: Dict[str, Any], spread: int) -> Tuple[Criterion, str]:
    years = entry["work_experience"]
    return (
        Between("work_experience", years - spread, years + spread),
        f"Experience: {years}±{spread}yrs",
    )


def build_comparison_group(entry: Dict[str, Any], level: str) -> ComparisonGroup:
    """
    Build the comparison group for an entry at one specificity level.

    Args:
        entry: Entry dict (snake_case fields, id optional)
        level: One of STRICT, MODERATE, LOOSE

    Returns:
        ComparisonGroup with criteria and description
    """
    if level not in (STRICT, MODERATE, LOOSE):
        raise ValueError(f"Unknown comparison level: {level}")

    criteria: List[Criterion] = [
        Equals("review_status", ReviewStatus.APPROVED),
        IsNotNull("gross_salary"),
    ]
    parts: List[str] = []

    if entry.get("country"):
        criteria.append(Equals("country", entry["country"]))
        parts.append(f"Country: {entry['country']}")

    if level == STRICT:
        if entry.get("sector"):
            criteria.append(Equals("sector", entry["sector"]))
            parts.append(f"Sector: {entry['sector']}")
        if _has(entry, "work_experience"):
            criterion, label = _experience_window(entry, STRICT_EXPERIENCE_RANGE)
            criteria.append(criterion)
            parts.append(label)
        if _has(entry, "age"):
            age = entry["age"]
            criteria.append(Between("age", age - STRICT_AGE_RANGE, age + STRICT_AGE_RANGE))
            parts.append(f"Age: {age}±{STRICT_AGE_RANGE}yrs")
    elif level == MODERATE:
        if entry.get("sector"):
            criteria.append(Equals("sector", entry["sector"]))
            parts.append(f"Sector: {entry['sector']}")
        elif _has(entry, "work_experience"):
            criterion, label = _experience_window(entry, MODERATE_EXPERIENCE_RANGE)
            criteria.append(criterion)
            parts.append(label)
    elif parts:
        parts.append("National average")

    if _has(entry, "id"):
        criteria.append(NotEquals("id", entry["id"]))

    return ComparisonGroup(
        level=level,
        criteria=tuple(criteria),
        description=", ".join(parts) or GENERAL_COMPARISON,
    )


def iter_comparison_groups(entry: Dict[str, Any]) -> Iterator[Tuple[ComparisonGroup, int]]:
    """Yield (group, minimum sample size) from strict to loose, lazily."""
    for level, min_sample in LEVELS:
        yield build_comparison_group(entry, level), min_sample
