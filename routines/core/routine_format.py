from __future__ import annotations

from typing import Sequence

from routines.core.routine_models import (
    Biweekly,
    Daily,
    Monthly,
    Quarterly,
    Recurrence,
    Weekdays,
    Weekends,
    Weekly,
    Yearly,
    WEEKDAY_CODES,
    WEEKDAY_LABELS,
)

_WEEKEND_SET = frozenset({"sat", "sun"})
_LEGACY_DAY_LABELS = dict(zip(WEEKDAY_CODES, WEEKDAY_LABELS))


def _split_clock(value: str) -> tuple[int, int]:
    parts = value.split(":")
    hour = int(parts[0])
    minute = int(parts[1]) if len(parts) > 1 else 0
    return hour, minute


def format_compact_time(value: str) -> str:
    """Compact token form: 19:30 becomes 7:30p, 07:00 becomes 7a."""
    hour, minute = _split_clock(value)
    h12 = hour % 12 or 12
    meridiem = "p" if hour >= 12 else "a"
    if minute == 0:
        return f"{h12}{meridiem}"
    return f"{h12}:{minute:02d}{meridiem}"


def format_clock_time(value: str) -> str:
    """Chip form: 07:00 becomes 7 AM, 19:30 becomes 7:30 PM."""
    hour, minute = _split_clock(value)
    h12 = hour % 12 or 12
    meridiem = "PM" if hour >= 12 else "AM"
    if minute == 0:
        return f"{h12} {meridiem}"
    return f"{h12}:{minute:02d} {meridiem}"


def _day_labels(days: Sequence[int]) -> list[str]:
    return [WEEKDAY_LABELS[day] for day in days]


def recurrence_label(recurrence: Recurrence) -> str:
    """Upper-case label rendered inside a day-pattern token."""
    if isinstance(recurrence, Daily):
        if recurrence.interval == 2:
            return "EVERY OTHER DAY"
        if recurrence.interval:
            return f"EVERY {recurrence.interval} DAYS"
        return "DAILY"
    if isinstance(recurrence, Weekdays):
        return "WEEKDAYS"
    if isinstance(recurrence, Weekends):
        return "WEEKENDS"
    if isinstance(recurrence, Weekly):
        return ", ".join(_day_labels(recurrence.days)).upper()
    if isinstance(recurrence, Biweekly):
        if recurrence.days:
            return "EVERY OTHER " + ", ".join(_day_labels(recurrence.days)).upper()
        return "BIWEEKLY"
    if isinstance(recurrence, Monthly):
        return "MONTHLY"
    if isinstance(recurrence, Quarterly):
        return "QUARTERLY"
    if isinstance(recurrence, Yearly):
        return "YEARLY"
    raise TypeError(f"unsupported recurrence: {recurrence!r}")


def describe_recurrence(recurrence: Recurrence) -> str:
    """Summary chip text, e.g. "Every Mon, Wed" or "Every other day"."""
    if isinstance(recurrence, Daily):
        if recurrence.interval == 2:
            return "Every other day"
        if recurrence.interval:
            return f"Every {recurrence.interval} days"
        return "Every day"
    if isinstance(recurrence, Weekdays):
        return "Weekdays"
    if isinstance(recurrence, Weekends):
        return "Weekends"
    if isinstance(recurrence, Weekly):
        return "Every " + ", ".join(_day_labels(recurrence.days))
    if isinstance(recurrence, Biweekly):
        if recurrence.days and len(recurrence.days) == 1:
            return f"Every other {WEEKDAY_LABELS[recurrence.days[0]]}"
        return "Every two weeks"
    if isinstance(recurrence, Monthly):
        return "Monthly"
    if isinstance(recurrence, Quarterly):
        return "Quarterly"
    if isinstance(recurrence, Yearly):
        return "Yearly"
    raise TypeError(f"unsupported recurrence: {recurrence!r}")


def format_legacy_routine(
    name: str,
    recurrence_type: str,
    days: Sequence[str] | None = None,
    time_of_day: str | None = None,
) -> str:
    """One-line description for stored routines that have no raw input.

    Works on the persisted shape (``recurrence_pattern.type`` and its day
    codes) rather than on a parsed routine, so it also covers rows created
    before natural-language input existed.
    """
    if recurrence_type == "daily":
        recurrence_text = "every day"
    elif recurrence_type == "weekly":
        codes = list(days or [])
        if not codes:
            recurrence_text = "weekly"
        elif len(codes) == 5 and not _WEEKEND_SET.intersection(codes):
            recurrence_text = "weekdays"
        elif len(codes) == 2 and set(codes) == _WEEKEND_SET:
            recurrence_text = "weekends"
        else:
            recurrence_text = "every " + ", ".join(_LEGACY_DAY_LABELS.get(code, code) for code in codes)
    elif recurrence_type == "monthly":
        recurrence_text = "monthly"
    else:
        recurrence_text = ""

    time_text = ""
    if time_of_day:
        hour, minute = _split_clock(time_of_day)
        h12 = hour % 12 or 12
        meridiem = "pm" if hour >= 12 else "am"
        time_text = f"at {h12}{meridiem}" if minute == 0 else f"at {h12}:{minute:02d}{meridiem}"

    return " ".join(part for part in (name, recurrence_text, time_text) if part)
