import re
from typing import Any, Dict

from .database import ENTRY_FIELDS

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# Timestamps and review stamps are set by the store
_SKIPPED_FIELDS = {"created_at", "reviewed_at", "reviewed_by"}


def normalize_text(s: str) -> str:
    return s.strip().lower()


def to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_entry(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map an incoming entry onto model field names.

    camelCase keys (grossSalary) become snake_case (gross_salary), strings are
    stripped, empty strings become None, and unknown keys and timestamps
    are dropped.
    """
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        field = key if key in ENTRY_FIELDS else to_snake_case(key)
        if field not in ENTRY_FIELDS or field in _SKIPPED_FIELDS:
            continue
        if isinstance(value, str):
            value = value.strip() or None
        normalized[field] = value
    return normalized
