from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping, Sequence

from routines.core.routine_extract import ExtractionSpan, extract_spans
from routines.core.routine_format import format_compact_time, recurrence_label
from routines.core.routine_models import Daily, ParsedRoutine, Person, SemanticToken

LOGGER = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_AT_RE = re.compile(r"^at\b\s*", re.IGNORECASE)
_WORD_RE = re.compile(r"\w+")
_CONNECTOR_WORDS = {"at", "on", "and", "every"}


def parse_routine(raw: str, people: Iterable[Person | Mapping[str, Any]] = ()) -> ParsedRoutine:
    """Parse one free-form routine sentence.

    Never raises for string input: unrecognised text becomes the action and
    missing categories stay empty, with ``Daily()`` as the default cadence.
    Use ``is_valid_parsed_routine`` before persisting the result.
    """
    raw = raw or ""
    text = raw.strip()
    extraction = extract_spans(text, _coerce_people(people))
    recurrence = extraction.recurrence or Daily()
    person = extraction.person
    action = _build_action(text, extraction.spans)
    tokens = _build_tokens(text, extraction.spans)
    LOGGER.debug(
        "routine.parse spans=%s recurrence=%s time=%s time_of_day=%s assignee=%s",
        len(extraction.spans),
        recurrence.type,
        extraction.time,
        extraction.time_of_day,
        person.id if person else None,
    )
    return ParsedRoutine(
        raw=raw,
        assignee=person.id if person else None,
        assignee_name=person.name if person else None,
        action=action,
        recurrence=recurrence,
        time_of_day=extraction.time_of_day,
        time=extraction.time,
        tokens=tokens,
    )


def is_valid_parsed_routine(parsed: ParsedRoutine) -> bool:
    return bool(parsed.action.strip())


def _coerce_people(people: Iterable[Person | Mapping[str, Any]]) -> tuple[Person, ...]:
    coerced: list[Person] = []
    for item in people or ():
        if isinstance(item, Person):
            coerced.append(item)
        else:
            coerced.append(Person.from_mapping(item))
    return tuple(coerced)


def _free_runs(text: str, spans: Sequence[ExtractionSpan]) -> list[str]:
    runs: list[str] = []
    cursor = 0
    for span in spans:
        if span.start > cursor:
            runs.append(text[cursor : span.start])
        cursor = max(cursor, span.end)
    if cursor < len(text):
        runs.append(text[cursor:])
    return runs


def _build_action(text: str, spans: Sequence[ExtractionSpan]) -> str:
    joined = " ".join(_free_runs(text, spans))
    collapsed = _WHITESPACE_RE.sub(" ", joined).strip()
    return _LEADING_AT_RE.sub("", collapsed).strip()


def _span_label(span: ExtractionSpan) -> str:
    if span.kind == "person":
        return span.value.name.strip().upper()
    if span.kind == "day-pattern":
        return recurrence_label(span.value)
    if span.kind == "time":
        return format_compact_time(span.value)
    return str(span.value).upper()


def _free_token(run: str) -> SemanticToken | None:
    stripped = run.strip()
    if not stripped:
        return None
    words = {word.lower() for word in _WORD_RE.findall(stripped)}
    if words <= _CONNECTOR_WORDS:
        return SemanticToken(text=stripped, kind="plain")
    return SemanticToken(text=stripped, kind="action")


def _build_tokens(text: str, spans: Sequence[ExtractionSpan]) -> tuple[SemanticToken, ...]:
    tokens: list[SemanticToken] = []
    cursor = 0
    for span in spans:
        if span.start > cursor:
            free = _free_token(text[cursor : span.start])
            if free is not None:
                tokens.append(free)
        tokens.append(SemanticToken(text=_span_label(span), kind=span.kind))
        cursor = max(cursor, span.end)
    if cursor < len(text):
        free = _free_token(text[cursor:])
        if free is not None:
            tokens.append(free)
    return tuple(tokens)
