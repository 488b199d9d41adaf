"""Class-date calendar for courses.

A course meets on the weekdays of its pattern, starting at its start date,
until ``class_count`` sessions have been scheduled. The sequence is derived
on demand and never stored.
"""
from __future__ import annotations

from datetime import date, timedelta
from functools import lru_cache
from typing import Any, FrozenSet, Tuple

from ..common.datetime_utils import try_parse_iso_date
from ..common.validators import to_int
from ..core.constants import MAX_CALENDAR_SCAN_DAYS
from .weekdays import parse_weekday_pattern, sunday_based_weekday

_ONE_DAY = timedelta(days=1)


def class_dates(start_date: Any, weekday_pattern: Any, class_count: Any) -> Tuple[date, ...]:
    """Ordered class dates for a course.

    Returns an empty tuple when the inputs cannot produce a schedule: invalid
    start date, a pattern with no recognizable weekday, a non-positive count,
    or a walk longer than MAX_CALENDAR_SCAN_DAYS days.
    """

    start = try_parse_iso_date(start_date)
    if start is None:
        return ()
    if isinstance(weekday_pattern, (set, frozenset)):
        days = frozenset(int(d) for d in weekday_pattern if 0 <= int(d) <= 6)
    else:
        days = parse_weekday_pattern(weekday_pattern)
    count = to_int(class_count, 0)
    if not days or count <= 0:
        return ()
    return _walk(start, days, count)


@lru_cache(maxsize=1024)
def _walk(start: date, days: FrozenSet[int], count: int) -> Tuple[date, ...]:
    out = []
    cursor = start
    for _ in range(MAX_CALENDAR_SCAN_DAYS):
        if sunday_based_weekday(cursor) in days:
            out.append(cursor)
            if len(out) == count:
                return tuple(out)
        try:
            cursor += _ONE_DAY
        except OverflowError:
            break
    return ()
