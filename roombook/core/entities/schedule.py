from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time

from roombook.core.errors import InvalidScheduleInput, InvalidTimeRange

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def parse_date(value: str | date) -> date:
    """Parse a `YYYY-MM-DD` calendar date. Raises InvalidScheduleInput on malformed input."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidScheduleInput(f"Invalid date {value!r}: expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidScheduleInput(f"Invalid date {value!r}: {e}") from e


def parse_time(value: str | time) -> time:
    """Parse a 24-hour `HH:MM` wall-clock time. Raises InvalidScheduleInput on malformed input."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str) or not _TIME_RE.match(value):
        raise InvalidScheduleInput(f"Invalid time {value!r}: expected HH:MM")
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except ValueError as e:
        raise InvalidScheduleInput(f"Invalid time {value!r}: {e}") from e


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_time(value: time) -> str:
    return value.strftime(TIME_FORMAT)


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """
    A half-open `[start_time, end_time)` interval on a single calendar date.

    Two windows on the same date overlap iff `a.start < b.end and b.start < a.end`;
    windows that only touch at an endpoint do not overlap.
    """

    date: date
    start_time: time
    end_time: time

    @classmethod
    def parse(cls, date_value: str | date, start_value: str | time, end_value: str | time) -> TimeWindow:
        return cls(
            date=parse_date(date_value),
            start_time=parse_time(start_value),
            end_time=parse_time(end_value),
        )

    @property
    def start_instant(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    def is_ordered(self) -> bool:
        return self.end_time > self.start_time

    def require_ordered(self) -> None:
        if not self.is_ordered():
            raise InvalidTimeRange()

    def starts_after(self, instant: datetime) -> bool:
        return self.start_instant > instant

    def overlaps(self, other: TimeWindow) -> bool:
        if self.date != other.date:
            return False
        return self.start_time < other.end_time and other.start_time < self.end_time
