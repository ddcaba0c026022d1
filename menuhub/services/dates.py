"""
Date range expansion for menu grids.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Union

from menuhub.utils.exceptions import InvalidRange
from menuhub.utils.validators import WEEKDAY_NAMES, parse_date_key

DateLike = Union[str, date]


def weekday_name(day: date) -> str:
    """Lowercase weekday used as the structure lookup key"""
    return WEEKDAY_NAMES[day.weekday()]


def date_key(day: date) -> str:
    return day.isoformat()


@dataclass(frozen=True)
class DateSlot:
    date: date
    weekday: str

    @property
    def key(self) -> str:
        return date_key(self.date)


def expand_date_range(start: DateLike, end: DateLike) -> list[DateSlot]:
    """Every calendar day from start to end inclusive, ascending."""
    start_day = parse_date_key(start)
    end_day = parse_date_key(end)
    if start_day > end_day:
        raise InvalidRange(start_day.isoformat(), end_day.isoformat())

    slots = []
    current = start_day
    while current <= end_day:
        slots.append(DateSlot(date=current, weekday=weekday_name(current)))
        current += timedelta(days=1)
    return slots
