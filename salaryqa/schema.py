from typing import Any, Dict, List

from .database import ReviewStatus

NUMERIC_FIELDS = [
    "age",
    "work_experience",
    "dependents",
    "seniority",
    "official_hours",
    "average_hours",
    "vacation_days",
    "gross_salary",
    "net_salary",
    "net_compensation",
    "meal_vouchers",
    "eco_cheques",
    "telework_days",
    "reports",
]
INTEGER_FIELDS = [
    "id",
    "age",
    "work_experience",
    "dependents",
    "seniority",
    "official_hours",
    "average_hours",
    "vacation_days",
    "telework_days",
    "reports",
]
STR_FIELDS = [
    "country",
    "education",
    "civil_status",
    "sector",
    "employee_count",
    "job_title",
    "currency",
    "work_city",
    "source",
    "source_url",
]
BOOL_FIELDS = ["multinational"]


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def validate_entry(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Expects normalized (snake_case) field names; None means "not provided".
    """
    errors: List[str] = []

    for f in NUMERIC_FIELDS:
        v = data.get(f)
        if v is not None and not _is_number(v):
            errors.append(f"Field '{f}' must be a number if provided")

    for f in INTEGER_FIELDS:
        v = data.get(f)
        if _is_number(v) and int(v) != v:
            errors.append(f"Field '{f}' must be an integer")

    for f in STR_FIELDS:
        v = data.get(f)
        if v is not None and not isinstance(v, str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in BOOL_FIELDS:
        v = data.get(f)
        if v is not None and not isinstance(v, bool):
            errors.append(f"Field '{f}' must be a boolean if provided")

    gross = data.get("gross_salary")
    if _is_number(gross) and gross <= 0:
        errors.append("Field 'gross_salary' must be positive")

    status = data.get("review_status")
    if status is not None and status not in ReviewStatus.ALL:
        errors.append(f"Field 'review_status' must be one of {', '.join(ReviewStatus.ALL)}")

    return errors
