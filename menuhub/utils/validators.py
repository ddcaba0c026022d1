"""
Input validation utilities
"""
from datetime import date
from typing import Union

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

VALID_STATUSES = {"active", "inactive", "draft", "archived"}


def parse_date_key(value: Union[str, date]) -> date:
    """Accept a date or a YYYY-MM-DD string"""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date key {value!r}. Expected YYYY-MM-DD")


def validate_weekday(name: str) -> str:
    """Normalize and validate a weekday key"""
    key = name.strip().lower()
    if key not in WEEKDAY_NAMES:
        raise ValueError(f"Invalid weekday {name!r}. Must be one of: {', '.join(WEEKDAY_NAMES)}")
    return key


def validate_status(status: str) -> str:
    if status not in VALID_STATUSES:
        raise ValueError(f"Invalid status. Must be one of: {sorted(VALID_STATUSES)}")
    return status
