from __future__ import annotations

import time

import pytest

from routines.core.routine_extract import extract_spans
from routines.core.routine_models import Biweekly, Daily, Weekly
from routines.core.routine_parse import parse_routine


def test_spans_are_sorted_and_do_not_overlap(people) -> None:
    text = "iris walks jax every weekday morning at 7am"
    extraction = extract_spans(text, people)

    starts = [span.start for span in extraction.spans]
    assert starts == sorted(starts)
    for left, right in zip(extraction.spans, extraction.spans[1:]):
        assert left.end <= right.start
    assert [span.kind for span in extraction.spans] == ["person", "day-pattern", "time-of-day", "time"]


def test_span_offsets_point_at_original_characters(people) -> None:
    text = "Iris walks Jax EVERY Weekday at 7AM"
    extraction = extract_spans(text, people)
    sliced = [text[span.start : span.end] for span in extraction.spans]
    assert sliced == ["Iris", "EVERY Weekday", "at 7AM"]


def test_every_followed_by_time_of_day_claims_only_every() -> None:
    text = "stretch every evening"
    extraction = extract_spans(text)
    assert [text[span.start : span.end] for span in extraction.spans] == ["every ", "evening"]
    assert extraction.recurrence == Daily()
    assert extraction.time_of_day == "evening"


def test_interval_forms_are_checked_before_plain_forms() -> None:
    assert extract_spans("every other day walk").recurrence == Daily(interval=2)
    assert extract_spans("every other monday walk").recurrence == Biweekly(days=(1,))
    assert extract_spans("every monday walk").recurrence == Weekly(days=(1,))


def test_no_recurrence_language_leaves_recurrence_empty() -> None:
    extraction = extract_spans("water the plants")
    assert extraction.recurrence is None
    assert extraction.spans == ()


def test_time_of_day_skips_claimed_spans() -> None:
    extraction = extract_spans("yoga every morning, then morning tea")
    assert extraction.time_of_day == "morning"
    assert len([span for span in extraction.spans if span.kind == "time-of-day"]) == 1


def test_assignee_ignores_blank_names() -> None:
    extraction = extract_spans("walk the dog", [])
    assert extraction.person is None


def test_tokens_reconstruct_free_text_in_order(people) -> None:
    text = "scott takes kids to school mon-fri at 7:19am"
    result = parse_routine(text, people)
    free = [token.text for token in result.tokens if token.kind in {"action", "plain"}]
    assert " ".join(free) == result.action


@pytest.mark.parametrize(
    "text",
    [
        "at " * 5000 + "x",
        "1" * 20000 + "p",
        "every " * 5000,
        "monday " * 4000 + "and",
        "on " + " " * 20000 + "tuesdayx",
        "every mon, " * 3000 + "!",
        "7:" * 8000,
        "a" * 30000,
    ],
)
def test_pathological_inputs_finish_quickly(text: str) -> None:
    started = time.monotonic()
    result = parse_routine(text)
    elapsed = time.monotonic() - started
    assert result.raw == text
    assert elapsed < 2.0
