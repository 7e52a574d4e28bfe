"""
Schedule expansion over a calendar month.

A student's schedule is a list of recurring weekly slots. Expanding it
over a month yields how many sessions were planned, which is the
reference the attendance count is judged against.
"""

import calendar
from datetime import date
from typing import Any, Iterable, List, Optional, Tuple

from ..models.record import ScheduleEntry, SessionType, parse_choice


def _entry_weekday(entry: Any) -> Optional[int]:
    if isinstance(entry, ScheduleEntry):
        weekday = entry.weekday
    elif isinstance(entry, dict):
        weekday = entry.get("weekday")
    else:
        return None

    if isinstance(weekday, bool) or not isinstance(weekday, int):
        return None
    return weekday


def _entry_session(entry: Any) -> Optional[SessionType]:
    if isinstance(entry, ScheduleEntry):
        return entry.session
    if isinstance(entry, dict):
        return parse_choice(SessionType, entry.get("session"))
    return None


def _month_days(month: int, year: int) -> List[date]:
    try:
        days_in_month = calendar.monthrange(year, month)[1]
        return [date(year, month, day) for day in range(1, days_in_month + 1)]
    except (ValueError, TypeError):
        return []


def count_scheduled_sessions(
    schedules: Optional[Iterable[Any]],
    month: int,
    year: int
) -> int:
    """
    Count the scheduled sessions falling in a calendar month.

    Every entry matching a day's weekday counts, so two entries on the
    same weekday yield two sessions on each such day.

    Args:
        schedules: Schedule entries (ScheduleEntry or dict)
        month: Calendar month (1-12)
        year: Calendar year

    Returns:
        Number of scheduled sessions, 0 for an empty schedule

    Examples:
        >>> count_scheduled_sessions([ScheduleEntry(weekday=0)], 1, 2024)
        5
    """
    weekdays = [_entry_weekday(entry) for entry in (schedules or [])]
    per_weekday = [weekdays.count(wd) for wd in range(7)]

    return sum(per_weekday[day.weekday()] for day in _month_days(month, year))


def scheduled_dates(
    schedules: Optional[Iterable[Any]],
    month: int,
    year: int
) -> List[Tuple[date, Optional[SessionType]]]:
    """
    List every scheduled (date, session) pair of a month in calendar order.

    Args:
        schedules: Schedule entries (ScheduleEntry or dict)
        month: Calendar month (1-12)
        year: Calendar year

    Returns:
        List of (date, session) tuples
    """
    entries = list(schedules or [])
    slots = []

    for day in _month_days(month, year):
        for entry in entries:
            if _entry_weekday(entry) == day.weekday():
                slots.append((day, _entry_session(entry)))

    return slots


def session_for_date(
    schedules: Optional[Iterable[Any]],
    day: date
) -> Optional[SessionType]:
    """Session of the first schedule entry on the weekday of ``day``."""
    for entry in schedules or []:
        if _entry_weekday(entry) == day.weekday():
            return _entry_session(entry)
    return None
