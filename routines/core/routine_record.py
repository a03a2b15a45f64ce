from __future__ import annotations

from datetime import date
from typing import Sequence

from routines.core.routine_models import (
    Biweekly,
    Daily,
    Monthly,
    ParsedRoutine,
    Quarterly,
    Recurrence,
    RecurrencePattern,
    RoutineRecord,
    Weekdays,
    Weekends,
    Weekly,
    Yearly,
    WEEKDAY_CODES,
)

_WEEKDAY_PATTERN_DAYS = ("mon", "tue", "wed", "thu", "fri")
_WEEKEND_PATTERN_DAYS = ("sat", "sun")


def _day_codes(days: Sequence[int]) -> list[str]:
    return [WEEKDAY_CODES[day] for day in days]


def recurrence_to_pattern(recurrence: Recurrence, *, today: date | None = None) -> RecurrencePattern:
    """Map a parsed recurrence to its stored shape.

    Interval-bearing cadences get ``start_date`` so whoever expands the
    pattern into occurrences has an anchor for the alternation.
    """
    anchor = (today or date.today()).isoformat()
    if isinstance(recurrence, Daily):
        if recurrence.interval and recurrence.interval >= 2:
            return RecurrencePattern(type="daily", interval=recurrence.interval, start_date=anchor)
        return RecurrencePattern(type="daily")
    if isinstance(recurrence, Weekdays):
        return RecurrencePattern(type="weekly", days=list(_WEEKDAY_PATTERN_DAYS))
    if isinstance(recurrence, Weekends):
        return RecurrencePattern(type="weekly", days=list(_WEEKEND_PATTERN_DAYS))
    if isinstance(recurrence, Weekly):
        return RecurrencePattern(type="weekly", days=_day_codes(recurrence.days))
    if isinstance(recurrence, Biweekly):
        days = _day_codes(recurrence.days) if recurrence.days else None
        return RecurrencePattern(type="weekly", days=days, interval=2, start_date=anchor)
    if isinstance(recurrence, (Monthly, Quarterly, Yearly)):
        return RecurrencePattern(type=recurrence.type)
    raise TypeError(f"unsupported recurrence: {recurrence!r}")


def parsed_routine_to_record(parsed: ParsedRoutine, *, today: date | None = None) -> RoutineRecord:
    return RoutineRecord(
        name=parsed.action,
        recurrence_pattern=recurrence_to_pattern(parsed.recurrence, today=today),
        time_of_day=parsed.time,
        default_assignee=parsed.assignee,
        raw_input=parsed.raw,
    )
