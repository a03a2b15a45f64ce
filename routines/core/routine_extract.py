"""Span extraction for natural-language routines.

Four phases run over the same trimmed text in a fixed order: time,
recurrence, time of day, assignee. Every phase walks an ordered matcher
table and stops at the first match that does not overlap a span claimed by
an earlier phase. Offsets always refer to the trimmed input, so the caller
can slice the original characters back out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Sequence

from routines.core.routine_models import (
    Biweekly,
    Daily,
    Monthly,
    Person,
    Quarterly,
    Recurrence,
    TimeOfDay,
    Weekdays,
    Weekends,
    Weekly,
    Yearly,
    WEEKDAY_CODES,
)

SpanKind = Literal["person", "day-pattern", "time-of-day", "time"]


@dataclass(frozen=True)
class ExtractionSpan:
    start: int
    end: int
    kind: SpanKind
    value: object

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and self.start < end


@dataclass(frozen=True)
class Extraction:
    time: str | None
    recurrence: Recurrence | None
    time_of_day: TimeOfDay | None
    person: Person | None
    spans: tuple[ExtractionSpan, ...]


@dataclass(frozen=True)
class _Matcher:
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str]], object | None]


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# --- time ------------------------------------------------------------------

def _format_hm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _apply_meridiem(hour: int, minute: int, meridiem: str) -> str | None:
    if not 1 <= hour <= 12 or minute > 59:
        return None
    if meridiem.lower().startswith("p"):
        if hour != 12:
            hour += 12
    elif hour == 12:
        hour = 0
    return _format_hm(hour, minute)


def _literal_time(hour: int, minute: int) -> str | None:
    if hour > 23 or minute > 59:
        return None
    return _format_hm(hour, minute)


def _fixed(value: object) -> Callable[[re.Match[str]], object]:
    return lambda _match: value


def _colon_meridiem(match: re.Match[str]) -> str | None:
    return _apply_meridiem(int(match.group(1)), int(match.group(2)), match.group(3))


def _hour_meridiem(match: re.Match[str]) -> str | None:
    return _apply_meridiem(int(match.group(1)), 0, match.group(2))


def _colon_24h(match: re.Match[str]) -> str | None:
    return _literal_time(int(match.group(1)), int(match.group(2)))


def _bare_hour(match: re.Match[str]) -> str | None:
    return _literal_time(int(match.group(1)), 0)


def _compact(match: re.Match[str]) -> str | None:
    minute = int(match.group(2)) if match.group(2) else 0
    meridiem = match.group(3) or match.group(4)
    return _apply_meridiem(int(match.group(1)), minute, meridiem)


def _military(match: re.Match[str]) -> str | None:
    return _literal_time(int(match.group(1)), int(match.group(2)))


# "at"-anchored forms first, then free-standing compact forms, then 4-digit 24h.
_TIME_MATCHERS: tuple[_Matcher, ...] = (
    _Matcher(_compile(r"\bat\s+noon\b"), _fixed("12:00")),
    _Matcher(_compile(r"\bat\s+midnight\b"), _fixed("00:00")),
    _Matcher(_compile(r"\bat\s+(\d{1,2}):(\d{2})\s*(am|pm|a|p)\b"), _colon_meridiem),
    _Matcher(_compile(r"\bat\s+(\d{1,2})\s*(am|pm|a|p)\b"), _hour_meridiem),
    _Matcher(_compile(r"\bat\s+(\d{1,2}):(\d{2})\b"), _colon_24h),
    _Matcher(_compile(r"\bat\s+(\d{1,2})\b(?!:)(?!\.\d)"), _bare_hour),
    _Matcher(_compile(r"(?:\bat\s+)?(?<!:)\b(\d{1,2}):(\d{2})\s?(am|pm|a|p)\b"), _colon_meridiem),
    _Matcher(_compile(r"(?:\bat\s+)?(?<!:)\b(\d{1,2})(\d{2})?(?:\s?(am|pm)|(a|p))\b"), _compact),
    _Matcher(_compile(r"(?:\bat\s+)?(?<![:.])\b(\d{2})(\d{2})\b(?![:.]\d)"), _military),
)


# --- recurrence ------------------------------------------------------------

_DAY_ANY = (
    r"(?:(?:sunday|monday|tuesday|wednesday|thursday|friday|saturday)s?"
    r"|sun|mon|tues|tue|wed|thurs|thur|thu|fri|sat)\b"
)
_DAY_FULL = r"(?:sunday|monday|tuesday|wednesday|thursday|friday|saturday)s?\b"
_LIST_SEP = r"(?:\s*,\s*(?:and\s+)?|\s+(?:and\s+)?)"
_DAY_NAME_RE = _compile(r"\b(sun|mon|tue|wed|thu|fri|sat)[a-z]*")

_NUMBER_WORDS = {
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}


def _days_in(text: str) -> tuple[int, ...]:
    return tuple(WEEKDAY_CODES.index(match.group(1).lower()) for match in _DAY_NAME_RE.finditer(text))


def _every_n_days(match: re.Match[str]) -> Recurrence | None:
    raw = match.group(1).lower()
    count = _NUMBER_WORDS.get(raw) or int(raw)
    if count < 1:
        return None
    return Daily(interval=count) if count >= 2 else Daily()


def _biweekly_on(match: re.Match[str]) -> Recurrence | None:
    days = _days_in(match.group(1))
    return Biweekly(days=days) if days else None


def _weekly_on(match: re.Match[str]) -> Recurrence | None:
    days = _days_in(match.group(0))
    return Weekly(days=days) if days else None


_RECURRENCE_MATCHERS: tuple[_Matcher, ...] = (
    _Matcher(_compile(r"\bevery\s+other\s+day\b"), _fixed(Daily(interval=2))),
    _Matcher(_compile(r"\balternate\s+days?\b"), _fixed(Daily(interval=2))),
    _Matcher(
        _compile(r"\bevery\s+(\d{1,3}|two|three|four|five|six|seven|eight|nine|ten)\s+days\b"),
        _every_n_days,
    ),
    _Matcher(_compile(r"\bevery\s+other\s+week\b"), _fixed(Biweekly())),
    _Matcher(_compile(r"\bbi-?weekly\b"), _fixed(Biweekly())),
    _Matcher(_compile(r"\bfortnightly\b"), _fixed(Biweekly())),
    _Matcher(_compile(r"\bevery\s+(?:two|2)\s+weeks\b"), _fixed(Biweekly())),
    _Matcher(_compile(r"\bquarterly\b"), _fixed(Quarterly())),
    _Matcher(_compile(r"\bevery\s+quarter\b"), _fixed(Quarterly())),
    _Matcher(_compile(r"\bevery\s+(?:3|three)\s+months\b"), _fixed(Quarterly())),
    _Matcher(_compile(r"\byearly\b"), _fixed(Yearly())),
    _Matcher(_compile(r"\bannually\b"), _fixed(Yearly())),
    _Matcher(_compile(r"\bevery\s+year\b"), _fixed(Yearly())),
    _Matcher(_compile(r"\bmonthly\b"), _fixed(Monthly())),
    _Matcher(_compile(r"\bevery\s+month\b"), _fixed(Monthly())),
    _Matcher(_compile(r"\bevery\s+weekday\b"), _fixed(Weekdays())),
    _Matcher(_compile(r"(?:\b(?:on|every)\s+)?\bweekdays\b"), _fixed(Weekdays())),
    _Matcher(
        _compile(r"(?:\bevery\s+)?\bmon(?:day)?(?:\s*-\s*|\s+(?:through|thru|to)\s+)fri(?:day)?\b"),
        _fixed(Weekdays()),
    ),
    _Matcher(_compile(r"\bmonday\s+through\s+friday\b"), _fixed(Weekdays())),
    _Matcher(_compile(r"\bevery\s+weekend\b"), _fixed(Weekends())),
    _Matcher(_compile(r"(?:\b(?:on|every)\s+)?\bweekends\b"), _fixed(Weekends())),
    _Matcher(_compile(r"(?:\bevery\s+)?\bsaturday\s+and\s+sunday\b"), _fixed(Weekends())),
    _Matcher(_compile(r"(?:\bevery\s+)?\bsat(?:urday)?\s+and\s+sun(?:day)?\b"), _fixed(Weekends())),
    _Matcher(_compile(r"\bevery\s+day\b"), _fixed(Daily())),
    _Matcher(_compile(r"\bdaily\b"), _fixed(Daily())),
    _Matcher(_compile(r"\bevery\s+(?=(?:morning|afternoon|evening)\b)"), _fixed(Daily())),
)

# Each pass below runs only when every earlier pass found nothing.
_SPECIFIC_DAY_PASSES: tuple[tuple[_Matcher, ...], ...] = (
    (_Matcher(_compile(rf"\bevery\s+other\s+({_DAY_ANY})"), _biweekly_on),),
    (_Matcher(_compile(rf"\bevery\s+{_DAY_ANY}(?:{_LIST_SEP}{_DAY_ANY})*"), _weekly_on),),
    (_Matcher(_compile(rf"(?:\bon\s+)?\b{_DAY_FULL}(?:{_LIST_SEP}{_DAY_FULL})*"), _weekly_on),),
)


# --- time of day -----------------------------------------------------------

_TIME_OF_DAY_MATCHERS: tuple[_Matcher, ...] = tuple(
    _Matcher(_compile(rf"\b{word}\b"), _fixed(word)) for word in ("morning", "afternoon", "evening")
)


def _first_free_match(
    matchers: Iterable[_Matcher],
    text: str,
    claimed: Sequence[ExtractionSpan],
) -> tuple[re.Match[str], object] | None:
    for matcher in matchers:
        for match in matcher.pattern.finditer(text):
            if any(span.overlaps(match.start(), match.end()) for span in claimed):
                continue
            value = matcher.build(match)
            if value is None:
                continue
            return match, value
    return None


def _match_person(text: str, people: Sequence[Person], claimed: Sequence[ExtractionSpan]) -> ExtractionSpan | None:
    # Longest names first so "John Smith" beats "John".
    for person in sorted(people, key=lambda item: len(item.name.strip()), reverse=True):
        name = person.name.strip()
        if not name or len(name) > len(text):
            continue
        end = len(name)
        if text[:end].casefold() != name.casefold():
            continue
        if end < len(text) and not text[end].isspace():
            continue
        if any(span.overlaps(0, end) for span in claimed):
            continue
        return ExtractionSpan(0, end, "person", person)
    return None


def extract_spans(text: str, people: Sequence[Person] = ()) -> Extraction:
    """Run the four extraction phases over already-trimmed ``text``."""
    spans: list[ExtractionSpan] = []

    time_value: str | None = None
    found = _first_free_match(_TIME_MATCHERS, text, spans)
    if found:
        match, value = found
        time_value = str(value)
        spans.append(ExtractionSpan(match.start(), match.end(), "time", time_value))

    recurrence: Recurrence | None = None
    for matchers in (_RECURRENCE_MATCHERS, *_SPECIFIC_DAY_PASSES):
        found = _first_free_match(matchers, text, spans)
        if found:
            match, value = found
            recurrence = value
            spans.append(ExtractionSpan(match.start(), match.end(), "day-pattern", recurrence))
            break

    time_of_day: TimeOfDay | None = None
    found = _first_free_match(_TIME_OF_DAY_MATCHERS, text, spans)
    if found:
        match, value = found
        time_of_day = value
        spans.append(ExtractionSpan(match.start(), match.end(), "time-of-day", time_of_day))

    person: Person | None = None
    person_span = _match_person(text, people, spans)
    if person_span is not None:
        person = person_span.value
        spans.append(person_span)

    spans.sort(key=lambda span: span.start)
    return Extraction(
        time=time_value,
        recurrence=recurrence,
        time_of_day=time_of_day,
        person=person,
        spans=tuple(spans),
    )
